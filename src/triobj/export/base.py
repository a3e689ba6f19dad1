"""Base interface for draw stream exporters."""

from __future__ import annotations

__all__ = ["BaseExporter"]

import abc
import typing as t

if t.TYPE_CHECKING:
    import os

    from triobj.mesh import DrawStream


class BaseExporter(abc.ABC):
    """Abstract base class for draw stream exporters."""

    @abc.abstractmethod
    def export(self, stream: DrawStream, output_path: str | os.PathLike[str]) -> None:
        """Export a draw stream to a file.

        :param stream: The draw stream to export.
        :param output_path: The output file path.
        """
        raise NotImplementedError
