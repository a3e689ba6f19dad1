"""Byte-level access to the contents of an OBJ file."""

from __future__ import annotations

__all__ = ["SourceBuffer", "read_source"]

import os
import typing as t

from triobj.exceptions import OBJReadError


def _describe(file: t.Any) -> str:
    """Get a printable name for a path or file-like object."""
    if isinstance(file, bytes):
        return os.fsdecode(file)

    return str(getattr(file, "name", file))


class SourceBuffer:
    """An immutable view over the raw bytes of an OBJ file.

    The buffer is never modified; scanners only index into it and slice it.
    """

    #: The raw file contents.
    data: bytes

    def __init__(self, data: bytes) -> None:
        """Initialize the source buffer.

        :param data: The raw file contents.
        """
        self.data = bytes(data)

    def __len__(self) -> int:
        """The number of bytes in the buffer."""
        return len(self.data)

    def byte_at(self, offset: int) -> int:
        """Get the byte at the given offset.

        :param offset: The absolute offset.
        :return: The byte value, or ``-1`` if the offset is past the end of the buffer.
        """
        if 0 <= offset < len(self.data):
            return self.data[offset]

        return -1

    def slice(self, start: int, end: int) -> bytes:
        """Get the bytes in the half-open range ``[start, end)``.

        :param start: The start offset (inclusive).
        :param end: The end offset (exclusive).
        :return: The bytes in the range.
        """
        return self.data[start:end]

    def find_newline(self, start: int) -> int:
        """Find the next newline at or after ``start``.

        :param start: The offset to start searching from.
        :return: The offset of the newline, or ``-1`` if there is none.
        """
        return self.data.find(b"\n", start)

    def line_of(self, offset: int) -> int:
        """Get the 1-based line number containing the given offset.

        :param offset: The absolute offset.
        :return: The line number.
        """
        return self.data.count(b"\n", 0, max(offset, 0)) + 1


def read_source(file: str | bytes | os.PathLike[str] | t.BinaryIO) -> SourceBuffer:
    """Read the whole contents of an OBJ file into a source buffer.

    Paths may be given as ``str``, ``bytes`` or :class:`os.PathLike`. In-memory contents are read through a
    file-like object such as :class:`io.BytesIO`.

    :param file: The path to the OBJ file, or a binary file-like object.
    :return: The source buffer.
    :raises OBJReadError: If the file cannot be read.
    """
    try:
        if hasattr(file, "read"):
            data = file.read()
        else:
            with open(file, "rb") as f:
                data = f.read()
    except OSError as e:
        raise OBJReadError(f"Could not read OBJ file '{_describe(file)}': {e.strerror or e}") from e

    if isinstance(data, str):
        data = data.encode("utf-8")

    return SourceBuffer(data)
