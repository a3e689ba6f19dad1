"""Export draw streams to common 3D file formats."""

from __future__ import annotations

__all__ = ["ExportFormat", "export_stream"]

import enum
import typing as t
from pathlib import Path

from triobj.export.obj import OBJExporter
from triobj.export.stl import STLExporter

if t.TYPE_CHECKING:
    import os

    from triobj.mesh import DrawStream


class ExportFormat(enum.Enum):
    """Supported export formats."""

    STL = "stl"
    OBJ = "obj"

    @classmethod
    def from_extension(cls, path: str | os.PathLike[str]) -> ExportFormat:
        """Determine export format from file extension.

        :param path: The file path.
        :return: The corresponding export format.
        :raises ValueError: If the extension is not supported.
        """
        ext = Path(path).suffix.lower().lstrip(".")
        try:
            return cls(ext)
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise ValueError(f"Unsupported file extension '.{ext}'. Supported: {supported}") from None


def export_stream(
    stream: DrawStream,
    output_path: str | os.PathLike[str],
    export_format: ExportFormat | None = None,
    *,
    binary: bool = True,
) -> None:
    """Export a draw stream to a file.

    :param stream: The draw stream to export.
    :param output_path: The output file path.
    :param export_format: The export format. If None, inferred from file extension.
    :param binary: Whether to use binary format (STL only). Default is ``True``.
    :raises ValueError: If the format is unsupported.
    """
    if export_format is None:
        export_format = ExportFormat.from_extension(output_path)

    if export_format == ExportFormat.STL:
        exporter = STLExporter(binary=binary)
    elif export_format == ExportFormat.OBJ:
        exporter = OBJExporter()
    else:
        raise ValueError(f"Unsupported export format: {export_format}")

    exporter.export(stream, output_path)
