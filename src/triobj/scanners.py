"""Record scanners for the supported OBJ subset.

Every scanner starts at an absolute offset into a :class:`~triobj.source.SourceBuffer`, walks forward
byte by byte and returns the converted values together with the offset where the record ended, so the
caller can resume right after it. Scanners never skip bad input: the first problem raises.
"""

from __future__ import annotations

__all__ = ["scan_face", "scan_index_group", "scan_vec2", "scan_vec3"]

import typing as t

import numpy as np

from triobj.exceptions import (
    InvalidIndexError,
    MalformedTokenError,
    NonTriangulatedFaceError,
    TruncatedRecordError,
)
from triobj.mesh import IndexGroup
from triobj.tokens import NUMERIC_CHARS, to_float, to_uint

if t.TYPE_CHECKING:
    from triobj.source import SourceBuffer

_SPACE: t.Final[int] = ord(" ")
_NEWLINE: t.Final[int] = ord("\n")
_CARRIAGE_RETURN: t.Final[int] = ord("\r")
_SLASH: t.Final[int] = ord("/")
_DIGITS: t.Final[frozenset[int]] = frozenset(b"0123456789")

#: The largest 1-based index that fits the face index arrays.
_MAX_INDEX: t.Final[int] = int(np.iinfo(np.int64).max)

#: Component names, in order, used in diagnostics.
_VECTOR_COMPONENTS: t.Final[tuple[str, ...]] = ("x", "y", "z")
_INDEX_COMPONENTS: t.Final[tuple[str, ...]] = ("vertex", "texture", "normal")


def _line_break(buffer: SourceBuffer, offset: int) -> int:
    """Get the offset of the newline ending the line if ``offset`` is a line break.

    A lone ``\\n`` and a ``\\r\\n`` pair both count.

    :return: The offset of the ``\\n`` byte, or ``-1`` if there is no line break at ``offset``.
    """
    char = buffer.byte_at(offset)
    if char == _NEWLINE:
        return offset

    if char == _CARRIAGE_RETURN and buffer.byte_at(offset + 1) == _NEWLINE:
        return offset + 1

    return -1


def _token_end(buffer: SourceBuffer, start: int, end: int) -> int:
    """Get the end of the first space-separated token in ``[start, end)``."""
    i = start
    while i < end and buffer.byte_at(i) == _SPACE:
        i += 1

    while i < end and buffer.byte_at(i) != _SPACE:
        i += 1

    return i


def _scan_vector(
    buffer: SourceBuffer,
    start: int,
    size: int,
    record: str,
    max_length: int | None,
) -> tuple[list[float], int]:
    """Scan a space-separated vector record of ``size`` components ending at a newline.

    The last component runs from its delimiter to the end of the line. Anything after its first token
    (such as the optional ``w`` component) is ignored.
    """
    delimiters: list[int] = []
    for i in range(start, len(buffer)):
        char = buffer.byte_at(i)
        if char == _SPACE:
            if len(delimiters) < size - 1:
                delimiters.append(i)
            continue

        line_end = _line_break(buffer, i)
        if line_end >= 0:
            if len(delimiters) < size - 1:
                component = _VECTOR_COMPONENTS[len(delimiters) + 1]
                raise MalformedTokenError(
                    f"Reached end of {record} line without parsing the {component} component",
                    offset=i,
                    line=buffer.line_of(i),
                )

            bounds = [start, *delimiters]
            values = [to_float(buffer, lo, hi, max_length) for lo, hi in zip(bounds, delimiters)]
            values.append(to_float(buffer, bounds[-1], _token_end(buffer, bounds[-1], i), max_length))

            return values, line_end

        if char not in NUMERIC_CHARS:
            raise MalformedTokenError(
                f"Invalid character {chr(char)!r} encountered while parsing {record}",
                offset=i,
                line=buffer.line_of(i),
            )

    raise TruncatedRecordError(
        f"Reached end of OBJ file while parsing {record}",
        offset=len(buffer),
        line=buffer.line_of(len(buffer)),
    )


def scan_vec3(
    buffer: SourceBuffer,
    start: int,
    max_length: int | None = None,
) -> tuple[float, float, float, int]:
    """Scan a position or normal record (``x y z``).

    :param buffer: The source buffer.
    :param start: The offset of the first component.
    :param max_length: If given, the maximum number of bytes converted per component.
    :return: The ``x``, ``y`` and ``z`` components and the offset of the terminating newline.
    :raises MalformedTokenError: If the record holds invalid characters or too few components.
    :raises TruncatedRecordError: If the file ends before the newline.
    """
    (x, y, z), line_end = _scan_vector(buffer, start, 3, "a vertex/normal", max_length)
    return x, y, z, line_end


def scan_vec2(
    buffer: SourceBuffer,
    start: int,
    max_length: int | None = None,
) -> tuple[float, float, int]:
    """Scan a texture coordinate record (``u v``).

    :param buffer: The source buffer.
    :param start: The offset of the first component.
    :param max_length: If given, the maximum number of bytes converted per component.
    :return: The ``u`` and ``v`` components and the offset of the terminating newline.
    :raises MalformedTokenError: If the record holds invalid characters or too few components.
    :raises TruncatedRecordError: If the file ends before the newline.
    """
    (u, v), line_end = _scan_vector(buffer, start, 2, "a texture coord", max_length)
    return u, v, line_end


def _convert_index(buffer: SourceBuffer, start: int, end: int, name: str, max_length: int | None) -> int:
    """Convert one 1-based index component to a 0-based index."""
    if start >= end:
        raise MalformedTokenError(
            f"The {name} index of an index group is missing",
            offset=start,
            line=buffer.line_of(start),
        )

    value = to_uint(buffer, start, end, max_length)
    if value == 0:
        raise InvalidIndexError(
            f"The {name} index of an index group is 0, which is not a valid 1-based index",
            offset=start,
            line=buffer.line_of(start),
        )

    if value > _MAX_INDEX:
        raise MalformedTokenError(
            f"The {name} index of an index group is too large ({value})",
            offset=start,
            line=buffer.line_of(start),
        )

    return value - 1


def scan_index_group(
    buffer: SourceBuffer,
    start: int,
    max_length: int | None = None,
) -> tuple[IndexGroup, int]:
    """Scan one ``v/vt/vn`` index group.

    All three indices are required. Leading spaces are skipped.

    :param buffer: The source buffer.
    :param start: The offset to start scanning from.
    :param max_length: If given, the maximum number of bytes converted per index.
    :return: The 0-based index group and the offset of the delimiting space or newline.
    :raises MalformedTokenError: If an index is missing, too large or the group holds invalid characters.
    :raises InvalidIndexError: If an index is 0.
    :raises TruncatedRecordError: If the file ends before the group is terminated.
    """
    i = start
    while buffer.byte_at(i) == _SPACE:
        i += 1

    group_start = i
    slashes: list[int] = []
    for i in range(group_start, len(buffer)):
        char = buffer.byte_at(i)
        if char == _SLASH:
            if len(slashes) == 2:
                raise MalformedTokenError(
                    "Index group has more than three indices",
                    offset=i,
                    line=buffer.line_of(i),
                )

            slashes.append(i)
            continue

        line_end = _line_break(buffer, i)
        if char == _SPACE or line_end >= 0:
            if i == group_start:
                raise MalformedTokenError(
                    "Expected an index group but found the end of the line",
                    offset=i,
                    line=buffer.line_of(i),
                )

            if len(slashes) < 2:
                raise MalformedTokenError(
                    f"Reached end of index group without parsing the {_INDEX_COMPONENTS[len(slashes) + 1]} index",
                    offset=i,
                    line=buffer.line_of(i),
                )

            bounds = zip((group_start, slashes[0] + 1, slashes[1] + 1), (slashes[0], slashes[1], i))
            vertex, texture, normal = (
                _convert_index(buffer, lo, hi, name, max_length) for (lo, hi), name in zip(bounds, _INDEX_COMPONENTS)
            )

            return IndexGroup(vertex, texture, normal), (i if char == _SPACE else line_end)

        if char not in _DIGITS:
            raise MalformedTokenError(
                f"Invalid character {chr(char)!r} encountered while parsing an index group",
                offset=i,
                line=buffer.line_of(i),
            )

    raise TruncatedRecordError(
        "Reached end of OBJ file while parsing an index group",
        offset=len(buffer),
        line=buffer.line_of(len(buffer)),
    )


def scan_face(
    buffer: SourceBuffer,
    start: int,
    max_length: int | None = None,
) -> tuple[tuple[IndexGroup, IndexGroup, IndexGroup], int]:
    """Scan a triangulated face record (``a/b/c d/e/f g/h/i``).

    :param buffer: The source buffer.
    :param start: The offset of the first index group.
    :param max_length: If given, the maximum number of bytes converted per index.
    :return: The three index groups and the offset of the terminating newline.
    :raises NonTriangulatedFaceError: If the face has more than three index groups.
    :raises MalformedTokenError: If the face has fewer than three index groups or a group is malformed.
    :raises InvalidIndexError: If an index is 0.
    :raises TruncatedRecordError: If the file ends before the newline.
    """
    groups: list[IndexGroup] = []
    cursor = start
    group_end = start
    for number in range(1, 4):
        group, group_end = scan_index_group(buffer, cursor, max_length)
        groups.append(group)

        if number < 3 and buffer.byte_at(group_end) == _NEWLINE:
            raise MalformedTokenError(
                f"Face ended after {number} index group(s), expected 3",
                offset=group_end,
                line=buffer.line_of(group_end),
            )

        cursor = group_end + 1

    if buffer.byte_at(group_end) != _NEWLINE:
        raise NonTriangulatedFaceError(
            "Parsed 3 index groups in the current face without reaching a newline, "
            "the OBJ file may have non-triangulated geometry which is not supported, "
            "or the OBJ file may be corrupted",
            offset=group_end,
            line=buffer.line_of(group_end),
        )

    return (groups[0], groups[1], groups[2]), group_end
