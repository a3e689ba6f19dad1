"""Loading of triangulated OBJ files into draw streams."""

from __future__ import annotations

__all__ = ["DEFAULT_LIMITS", "LoadLimits", "load_obj", "load_obj_with_limits", "parse_obj"]

import dataclasses
import logging
import typing as t

import numpy as np

from triobj.exceptions import CapacityExceededError, OBJReadError
from triobj.mesh import RawGeometry
from triobj.resolve import unfacet
from triobj.scanners import scan_face, scan_vec2, scan_vec3
from triobj.source import SourceBuffer, read_source

if t.TYPE_CHECKING:
    import os

    from triobj.mesh import DrawStream

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class LoadLimits:
    """Capacities for the records of a single load.

    Capacities are hard ceilings: the load fails as soon as one is exceeded.
    """

    #: Maximum number of ``v`` records.
    max_vertices: int

    #: Maximum number of ``vn`` records.
    max_normals: int

    #: Maximum number of face corners (three per ``f`` record).
    max_indices: int

    #: Maximum number of ``vt`` records. If ``None``, ``max_indices`` is used.
    max_texture_coords: int | None = None

    #: If given, numeric tokens are truncated to this many bytes before conversion.
    max_token_length: int | None = None

    def __post_init__(self) -> None:
        """Validate the capacities."""
        for field in ("max_vertices", "max_normals", "max_indices", "max_texture_coords"):
            value = getattr(self, field)
            if value is not None and value < 0:
                raise ValueError(f"{field} must not be negative, got {value}")

        if self.max_token_length is not None and self.max_token_length < 1:
            raise ValueError(f"max_token_length must be at least 1, got {self.max_token_length}")

    @property
    def texture_coord_capacity(self) -> int:
        """The effective maximum number of ``vt`` records."""
        return self.max_indices if self.max_texture_coords is None else self.max_texture_coords


#: Limits used by the command-line interface when none are given.
DEFAULT_LIMITS: t.Final[LoadLimits] = LoadLimits(
    max_vertices=1_000_000,
    max_normals=1_000_000,
    max_indices=1_000_000,
)


def parse_obj(buffer: SourceBuffer, limits: LoadLimits) -> RawGeometry:
    """Scan an OBJ buffer into attribute pools and face indices.

    Records are classified by the first two bytes of their line: ``"v "``, ``"vt"``, ``"vn"`` and ``"f "``.
    Every other line is skipped. The pools are allocated up front from ``limits`` and never grow.

    :param buffer: The source buffer.
    :param limits: The record capacities.
    :return: The populated part of the pools and the 0-based face indices.
    :raises OBJReadError: If the buffers for the capacities cannot be allocated.
    :raises CapacityExceededError: If a record count exceeds its capacity.
    :raises OBJParseError: If a record is malformed.
    """
    max_length = limits.max_token_length
    if max_length is not None:
        logger.warning("Numeric tokens longer than %d bytes will be truncated.", max_length)

    try:
        positions = np.empty((limits.max_vertices, 3), dtype=np.float32)
        texture_coords = np.empty((limits.texture_coord_capacity, 2), dtype=np.float32)
        normals = np.empty((limits.max_normals, 3), dtype=np.float32)
        indices = np.empty((3, limits.max_indices), dtype=np.int64)
    except (MemoryError, ValueError) as e:
        raise OBJReadError(f"Could not allocate buffers for the given capacities: {e}") from e

    num_positions = 0
    num_texture_coords = 0
    num_normals = 0
    num_corners = 0

    # The lookahead is the byte pair (cursor - 1, cursor), where cursor - 1 is the first byte of a line.
    cursor = 1
    while cursor < len(buffer):
        tag = buffer.slice(cursor - 1, cursor + 1)
        if tag == b"v ":
            num_positions += 1
            if num_positions > limits.max_vertices:
                raise CapacityExceededError("vertices", limits.max_vertices)

            x, y, z, line_end = scan_vec3(buffer, cursor + 1, max_length)
            positions[num_positions - 1] = (x, y, z)
        elif tag == b"vt":
            num_texture_coords += 1
            if num_texture_coords > limits.texture_coord_capacity:
                raise CapacityExceededError("texture coords", limits.texture_coord_capacity)

            u, v, line_end = scan_vec2(buffer, cursor + 2, max_length)
            texture_coords[num_texture_coords - 1] = (u, v)
        elif tag == b"vn":
            num_normals += 1
            if num_normals > limits.max_normals:
                raise CapacityExceededError("normals", limits.max_normals)

            x, y, z, line_end = scan_vec3(buffer, cursor + 2, max_length)
            normals[num_normals - 1] = (x, y, z)
        elif tag == b"f ":
            num_corners += 3
            if num_corners > limits.max_indices:
                raise CapacityExceededError("indices", limits.max_indices)

            groups, line_end = scan_face(buffer, cursor + 1, max_length)
            for corner, group in enumerate(groups, start=num_corners - 3):
                indices[:, corner] = (group.vertex, group.texture, group.normal)
        else:
            line_end = buffer.find_newline(cursor - 1)
            if line_end < 0:
                break

        cursor = line_end + 2

    logger.debug(
        "Parsed %d vertices, %d texture coords, %d normals and %d faces.",
        num_positions,
        num_texture_coords,
        num_normals,
        num_corners // 3,
    )

    return RawGeometry(
        positions=positions[:num_positions],
        texture_coords=texture_coords[:num_texture_coords],
        normals=normals[:num_normals],
        vertex_indices=indices[0, :num_corners],
        texture_indices=indices[1, :num_corners],
        normal_indices=indices[2, :num_corners],
    )


def load_obj_with_limits(file: str | bytes | os.PathLike[str] | t.BinaryIO, limits: LoadLimits) -> DrawStream:
    """Load an OBJ file into a draw stream using the given limits.

    :param file: The path to the OBJ file, or a binary file-like object.
    :param limits: The record capacities.
    :return: The draw stream.
    :raises OBJReadError: If the file cannot be read or the capacities cannot be allocated.
    :raises CapacityExceededError: If a record count exceeds its capacity.
    :raises OBJParseError: If a record is malformed.
    :raises DanglingIndexError: If a face references a record that was never parsed.
    """
    buffer = read_source(file)
    raw = parse_obj(buffer, limits)

    return unfacet(raw)


def load_obj(
    file: str | bytes | os.PathLike[str] | t.BinaryIO,
    max_vertices: int,
    max_normals: int,
    max_indices: int,
    *,
    max_texture_coords: int | None = None,
    max_token_length: int | None = None,
) -> DrawStream:
    """Load a triangulated OBJ file into a draw stream.

    Only ``v``, ``vt``, ``vn`` and ``f`` records are read. Every face must have exactly three
    ``v/vt/vn`` index groups. The load either succeeds completely or raises; there is no partial result.

    :param file: The path to the OBJ file, or a binary file-like object.
    :param max_vertices: The maximum number of ``v`` records.
    :param max_normals: The maximum number of ``vn`` records.
    :param max_indices: The maximum number of face corners (three per face).
    :param max_texture_coords: The maximum number of ``vt`` records. Defaults to ``max_indices``.
    :param max_token_length: If given, numeric tokens are truncated to this many bytes.
    :return: The draw stream.
    :raises OBJReadError: If the file cannot be read or the capacities cannot be allocated.
    :raises CapacityExceededError: If a record count exceeds its capacity.
    :raises OBJParseError: If a record is malformed.
    :raises DanglingIndexError: If a face references a record that was never parsed.

    .. code-block:: python

        stream = load_obj("model.obj", max_vertices=10_000, max_normals=10_000, max_indices=60_000)
        print(f"Loaded {stream.num_faces} triangles ({stream.num_vertices} vertices).")

    """
    limits = LoadLimits(
        max_vertices=max_vertices,
        max_normals=max_normals,
        max_indices=max_indices,
        max_texture_coords=max_texture_coords,
        max_token_length=max_token_length,
    )

    return load_obj_with_limits(file, limits)
