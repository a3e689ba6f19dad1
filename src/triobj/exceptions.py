"""Exceptions raised while loading OBJ files."""

from __future__ import annotations

__all__ = [
    "CapacityExceededError",
    "DanglingIndexError",
    "InvalidIndexError",
    "MalformedTokenError",
    "NonTriangulatedFaceError",
    "OBJError",
    "OBJParseError",
    "OBJReadError",
    "TruncatedRecordError",
]


class OBJError(Exception):
    """Base class for all errors raised by :mod:`triobj`."""


class OBJReadError(OBJError):
    """Raised when the source file cannot be read."""


class OBJParseError(OBJError):
    """Raised when the content of an OBJ file cannot be parsed."""

    #: The absolute byte offset where the error was detected, if known.
    offset: int | None

    #: The 1-based line number where the error was detected, if known.
    line: int | None

    def __init__(self, message: str, *, offset: int | None = None, line: int | None = None) -> None:
        """Initialize the parse error.

        :param message: A human-readable description of the problem.
        :param offset: The absolute byte offset where the error was detected.
        :param line: The 1-based line number where the error was detected.
        """
        self.offset = offset
        self.line = line

        if line is not None:
            message = f"{message} (line {line})"

        super().__init__(message)


class MalformedTokenError(OBJParseError):
    """Raised for invalid characters, missing components, or unparsable numbers."""


class InvalidIndexError(OBJParseError):
    """Raised when a face index is 0, which is not a valid 1-based index."""


class NonTriangulatedFaceError(OBJParseError):
    """Raised when a face record has more than three index groups."""


class TruncatedRecordError(OBJParseError):
    """Raised when the end of the file is reached in the middle of a record."""


class CapacityExceededError(OBJError):
    """Raised when a record count exceeds the capacity given by the caller."""

    #: The kind of record whose capacity was exceeded (e.g. "vertices").
    kind: str

    #: The capacity that was exceeded.
    limit: int

    def __init__(self, kind: str, limit: int) -> None:
        """Initialize the capacity error.

        :param kind: The kind of record whose capacity was exceeded.
        :param limit: The capacity that was exceeded.
        """
        self.kind = kind
        self.limit = limit

        super().__init__(f"Exceeded maximum number of {kind} ({limit}) while parsing OBJ file")


class DanglingIndexError(OBJError):
    """Raised when a face references a record that was never parsed."""

    #: The attribute the index refers to ("position", "texture coordinate" or "normal").
    attribute: str

    #: The offending index, 1-based as written in the file.
    index: int

    #: The draw index of the corner holding the reference.
    corner: int

    #: The number of records actually parsed for the attribute.
    pool_size: int

    def __init__(self, attribute: str, index: int, corner: int, pool_size: int) -> None:
        """Initialize the dangling index error.

        :param attribute: The attribute the index refers to.
        :param index: The offending 1-based index.
        :param corner: The draw index of the corner holding the reference.
        :param pool_size: The number of records parsed for the attribute.
        """
        self.attribute = attribute
        self.index = index
        self.corner = corner
        self.pool_size = pool_size

        super().__init__(
            f"Corner {corner} references {attribute} {index}, but only {pool_size} {attribute} record(s) were parsed"
        )
