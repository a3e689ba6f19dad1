"""Data structures for parsed OBJ content and the resulting draw stream."""

from __future__ import annotations

__all__ = ["DrawStream", "IndexGroup", "RawGeometry"]

import dataclasses
import typing as t

import numpy as np

from triobj.export import ExportFormat, export_stream

if t.TYPE_CHECKING:
    import os

    import numpy.typing as npt


@dataclasses.dataclass(frozen=True)
class IndexGroup:
    """One ``v/vt/vn`` reference of a face corner, translated to 0-based indices."""

    #: The index into the position pool.
    vertex: int

    #: The index into the texture coordinate pool.
    texture: int

    #: The index into the normal pool.
    normal: int


@dataclasses.dataclass
class RawGeometry:
    """Attribute pools and face indices accumulated by the parser."""

    #: Vertex positions as (Nv, 3) float array.
    positions: npt.NDArray[np.float32]

    #: Texture coordinates as (Nt, 2) float array.
    texture_coords: npt.NDArray[np.float32]

    #: Vertex normals as (Nn, 3) float array.
    normals: npt.NDArray[np.float32]

    #: Position index per corner as (C,) integer array.
    vertex_indices: npt.NDArray[np.int64]

    #: Texture coordinate index per corner as (C,) integer array.
    texture_indices: npt.NDArray[np.int64]

    #: Normal index per corner as (C,) integer array.
    normal_indices: npt.NDArray[np.int64]

    @property
    def num_corners(self) -> int:
        """Number of face corners."""
        return int(self.vertex_indices.shape[0])

    @property
    def num_faces(self) -> int:
        """Number of faces."""
        return self.num_corners // 3


@dataclasses.dataclass(frozen=True)
class DrawStream:
    """Flat, per-corner vertex attributes addressed by a shared draw index.

    Entry ``i`` of each array belongs to corner ``i % 3`` of face ``i // 3``.
    """

    #: Positions as (C, 3) float array.
    positions: npt.NDArray[np.float32]

    #: Normals as (C, 3) float array.
    normals: npt.NDArray[np.float32]

    #: Texture coordinates as (C, 2) float array.
    texture_coords: npt.NDArray[np.float32]

    @property
    def num_vertices(self) -> int:
        """Number of vertices in the stream, i.e. the number of face corners."""
        return int(self.positions.shape[0])

    @property
    def num_faces(self) -> int:
        """Number of triangles in the stream."""
        return self.num_vertices // 3

    def interleaved(self) -> npt.NDArray[np.float32]:
        """Interleave the attributes into a single vertex buffer.

        :return: A (C, 8) float array with rows ``[x, y, z, nx, ny, nz, u, v]``.
        """
        return np.concatenate([self.positions, self.normals, self.texture_coords], axis=1).astype(np.float32)

    def triangles(self) -> npt.NDArray[np.float32]:
        """The positions grouped per face.

        :return: A (F, 3, 3) float array.
        """
        return self.positions.reshape(self.num_faces, 3, 3)

    def export(
        self,
        output_path: str | os.PathLike[str],
        export_format: ExportFormat | None = None,
        *,
        binary: bool = True,
    ) -> None:
        """Export the draw stream to a file.

        :param output_path: The output file path.
        :param export_format: The export format. If None, inferred from file extension.
        :param binary: Whether to use binary format (STL only). Default is ``True``.
        :raises ValueError: If the format is unsupported.
        """
        export_stream(self, output_path, export_format, binary=binary)
