"""Command-line interface for triobj."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from triobj import load_obj_with_limits
from triobj.exceptions import (
    CapacityExceededError,
    DanglingIndexError,
    NonTriangulatedFaceError,
    OBJParseError,
    OBJReadError,
)
from triobj.export import ExportFormat
from triobj.loader import DEFAULT_LIMITS, LoadLimits
from triobj.mesh import DrawStream

#: Environment variables providing defaults for the limit options.
_LIMIT_ENVIRONMENT = {
    "max_vertices": "TRIOBJ_MAX_VERTICES",
    "max_normals": "TRIOBJ_MAX_NORMALS",
    "max_indices": "TRIOBJ_MAX_INDICES",
    "max_texture_coords": "TRIOBJ_MAX_TEXTURE_COORDS",
}


def format_bytes(size: int) -> str:
    """Format a byte size into a human-readable string.

    :param size: The size in bytes.
    :return: A formatted string with appropriate units (B, KB, MB, GB, TB).
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.2f} {unit}"

        size /= 1024

    return f"{size:.2f} TB"


def resolve_limits(args: argparse.Namespace) -> LoadLimits:
    """Build the load limits from command-line arguments, the environment, and the defaults.

    :param args: The parsed command-line arguments.
    :return: The load limits.
    :raises ValueError: If an environment variable does not hold a valid integer.
    """
    values: dict[str, int | None] = {}
    for field, env_name in _LIMIT_ENVIRONMENT.items():
        value = getattr(args, field)
        if value is None and (env_value := os.environ.get(env_name)) is not None:
            try:
                value = int(env_value.strip())
            except ValueError:
                raise ValueError(f"{env_name} must be an integer, got '{env_value}'") from None

        if value is None:
            value = getattr(DEFAULT_LIMITS, field)

        values[field] = value

    return LoadLimits(max_token_length=args.max_token_length, **values)


def add_limit_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the load limit options to a subcommand parser.

    :param parser: The subcommand parser.
    """
    group = parser.add_argument_group(
        "limit options",
        "Capacities for the load; the load fails if any is exceeded. "
        "Defaults are read from the TRIOBJ_MAX_* environment variables.",
    )

    group.add_argument(
        "--max-vertices",
        type=int,
        metavar="N",
        help=f"maximum number of 'v' records (default: {DEFAULT_LIMITS.max_vertices})",
    )

    group.add_argument(
        "--max-normals",
        type=int,
        metavar="N",
        help=f"maximum number of 'vn' records (default: {DEFAULT_LIMITS.max_normals})",
    )

    group.add_argument(
        "--max-indices",
        type=int,
        metavar="N",
        help=f"maximum number of face corners, three per face (default: {DEFAULT_LIMITS.max_indices})",
    )

    group.add_argument(
        "--max-texture-coords",
        type=int,
        metavar="N",
        help="maximum number of 'vt' records (default: the value of --max-indices)",
    )

    group.add_argument(
        "--max-token-length",
        type=int,
        metavar="N",
        help="truncate numeric tokens to N characters before conversion (default: no truncation)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    :return: The configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="triobj",
        description="Load triangulated OBJ files into flat, render-ready vertex streams",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print debug messages while loading",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Load an OBJ file and print a summary of its draw stream",
        description="Load an OBJ file and print corner and face counts and bounds",
    )

    inspect_parser.add_argument(
        "input",
        type=Path,
        help="path to the input OBJ file",
    )

    add_limit_arguments(inspect_parser)

    export_parser = subparsers.add_parser(
        "export",
        help="Export the draw stream of an OBJ file",
        description="Export the draw stream of an OBJ file to STL or OBJ format",
    )

    export_parser.add_argument(
        "input",
        type=Path,
        help="path to the input OBJ file",
    )

    export_parser.add_argument(
        "output",
        type=Path,
        help="path where the exported file will be written",
    )

    export_parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=["stl", "obj"],
        help="output file format (automatically detected from file extension if omitted)",
    )

    export_parser.add_argument(
        "--ascii",
        action="store_true",
        help="export in ASCII text format instead of binary (STL only)",
    )

    add_limit_arguments(export_parser)

    return parser


def load_stream(args: argparse.Namespace) -> DrawStream | None:
    """Load the input file named on the command line, reporting failures on stderr.

    :param args: The parsed command-line arguments.
    :return: The draw stream, or ``None`` if loading failed.
    """
    try:
        limits = resolve_limits(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    try:
        return load_obj_with_limits(args.input, limits)
    except OBJReadError as e:
        print(f"Error: {e}", file=sys.stderr)
    except CapacityExceededError as e:
        print(f"Error: Capacity exceeded: {e}", file=sys.stderr)
    except NonTriangulatedFaceError as e:
        print(f"Error: Non-triangulated geometry: {e}", file=sys.stderr)
    except OBJParseError as e:
        print(f"Error: Failed to parse OBJ file: {e}", file=sys.stderr)
    except DanglingIndexError as e:
        print(f"Error: Dangling index reference: {e}", file=sys.stderr)

    return None


def inspect_command(args: argparse.Namespace) -> int:
    """Execute the inspect command.

    :param args: The parsed command-line arguments.
    :return: Exit code (0 for success, non-zero for error).
    """
    stream = load_stream(args)
    if stream is None:
        return 1

    print(f"=== Inspecting: {args.input.name} ===")
    print(f"File Size: {format_bytes(args.input.stat().st_size)}")

    print("\n[Draw Stream]")
    print(f"  Vertices: {stream.num_vertices}")
    print(f"  Faces: {stream.num_faces}")

    if stream.num_vertices > 0:
        bounds_min = stream.positions.min(axis=0)
        bounds_max = stream.positions.max(axis=0)
        dimensions = bounds_max - bounds_min

        print("\n[Dimensions]")
        print(f"  Bounds: {dimensions[0]:.3f} x {dimensions[1]:.3f} x {dimensions[2]:.3f}")

    return 0


def export_command(args: argparse.Namespace) -> int:
    """Execute the export command.

    :param args: The parsed command-line arguments.
    :return: Exit code (0 for success, non-zero for error).
    """
    stream = load_stream(args)
    if stream is None:
        return 1

    export_format = ExportFormat(args.format) if args.format else None

    try:
        stream.export(args.output, export_format=export_format, binary=not args.ascii)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to write output file: {e}", file=sys.stderr)
        return 1

    output_size = format_bytes(args.output.stat().st_size)
    print(f"✓ Successfully exported to '{args.output}' ({output_size})")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    :param argv: The command-line arguments. If ``None``, ``sys.argv`` is used.
    :return: The exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    if args.command == "inspect":
        return inspect_command(args)

    if args.command == "export":
        return export_command(args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
