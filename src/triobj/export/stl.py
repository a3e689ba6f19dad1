"""STL format exporter."""

from __future__ import annotations

__all__ = ["STLExporter"]

import struct
import typing as t
from pathlib import Path

import numpy as np

from triobj.export.base import BaseExporter

if t.TYPE_CHECKING:
    import os

    import numpy.typing as npt

    from triobj.mesh import DrawStream


class STLExporter(BaseExporter):
    """Export draw streams to STL format (geometry only)."""

    #: Whether to use binary STL format. If ``False``, ASCII STL will be used.
    binary: bool

    def __init__(self, binary: bool = True) -> None:
        """Initialize the STL exporter.

        :param binary: Whether to use binary STL format. Default is ``True``.
        """
        self.binary = binary

    def export(self, stream: DrawStream, output_path: str | os.PathLike[str]) -> None:
        """Export a draw stream to STL format.

        :param stream: The draw stream to export.
        :param output_path: The output file path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if self.binary:
            self._export_binary(stream, path)
        else:
            self._export_ascii(stream, path)

    def _export_binary(self, stream: DrawStream, path: Path) -> None:
        """Export a draw stream to binary STL format.

        :param stream: The draw stream to export.
        :param path: The output file path.
        """
        normals = self._compute_facet_normals(stream)
        triangles = stream.triangles()

        with path.open("wb") as f:
            header = b"triobj"
            f.write(header.ljust(80, b"\0"))
            f.write(struct.pack("<I", stream.num_faces))

            for normal, (v0, v1, v2) in zip(normals, triangles):
                f.write(struct.pack("<3f", *normal))

                f.write(struct.pack("<3f", *v0))
                f.write(struct.pack("<3f", *v1))
                f.write(struct.pack("<3f", *v2))

                f.write(b"\x00\x00")

    def _export_ascii(self, stream: DrawStream, path: Path) -> None:
        """Export a draw stream to ASCII STL format.

        :param stream: The draw stream to export.
        :param path: The output file path.
        """
        normals = self._compute_facet_normals(stream)
        triangles = stream.triangles()

        with path.open("w", encoding="ascii") as f:
            f.write(f"solid {path.stem}\n")

            for normal, (v0, v1, v2) in zip(normals, triangles):
                f.write(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}\n")
                f.write("    outer loop\n")
                f.write(f"      vertex {v0[0]:.6e} {v0[1]:.6e} {v0[2]:.6e}\n")
                f.write(f"      vertex {v1[0]:.6e} {v1[1]:.6e} {v1[2]:.6e}\n")
                f.write(f"      vertex {v2[0]:.6e} {v2[1]:.6e} {v2[2]:.6e}\n")
                f.write("    endloop\n")
                f.write("  endfacet\n")

            f.write(f"endsolid {path.stem}\n")

    @staticmethod
    def _compute_facet_normals(stream: DrawStream) -> npt.NDArray[np.floating]:
        """Compute one unit normal per face.

        The facet normal is the mean of the three corner normals. Faces whose corner normals cancel out
        use the geometric normal of the triangle instead.

        :param stream: The draw stream.
        :return: The normal vectors for each face of shape (F, 3).
        """
        triangles = stream.triangles().astype(np.float64)
        normals = stream.normals.reshape(stream.num_faces, 3, 3).astype(np.float64).mean(axis=1)

        lengths = np.linalg.norm(normals, axis=1)
        degenerate = lengths < 1e-10
        if np.any(degenerate):
            v0, v1, v2 = triangles[degenerate, 0], triangles[degenerate, 1], triangles[degenerate, 2]
            normals[degenerate] = np.cross(v1 - v0, v2 - v0)
            lengths = np.linalg.norm(normals, axis=1)

        normals /= np.maximum(lengths, 1e-10)[:, None]

        return normals.astype(np.float32)
