"""OBJ format exporter."""

from __future__ import annotations

__all__ = ["OBJExporter"]

import typing as t
from pathlib import Path

from triobj.export.base import BaseExporter

if t.TYPE_CHECKING:
    import os

    from triobj.mesh import DrawStream


class OBJExporter(BaseExporter):
    """Export draw streams to the triangulated OBJ subset read by :func:`~triobj.load_obj`.

    Every corner gets its own ``v``, ``vt`` and ``vn`` record, so the written file loads back with all
    capacities set to the number of corners.
    """

    def export(self, stream: DrawStream, output_path: str | os.PathLike[str]) -> None:
        """Export a draw stream to OBJ format.

        :param stream: The draw stream to export.
        :param output_path: The output file path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="ascii", newline="\n") as f:
            f.write("# triobj\n")
            f.write(f"o {path.stem}\n")

            for v in stream.positions:
                f.write(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}\n")

            for uv in stream.texture_coords:
                f.write(f"vt {uv[0]:.6f} {uv[1]:.6f}\n")

            for n in stream.normals:
                f.write(f"vn {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}\n")

            f.write("s off\n")
            for face in range(stream.num_faces):
                a, b, c = face * 3 + 1, face * 3 + 2, face * 3 + 3
                f.write(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}\n")
