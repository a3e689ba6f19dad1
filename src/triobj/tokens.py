"""Conversion of numeric tokens from the source buffer."""

from __future__ import annotations

__all__ = ["NUMERIC_CHARS", "to_float", "to_uint"]

import re
import typing as t

from triobj.exceptions import MalformedTokenError

if t.TYPE_CHECKING:
    from triobj.source import SourceBuffer

#: The bytes allowed inside a numeric field.
NUMERIC_CHARS: t.Final[frozenset[int]] = frozenset(b"0123456789.-")

#: Float lexical form: ``[-]digits[.digits]``, also allowing ``.5`` and ``5.``.
_FLOAT_PATTERN = re.compile(rb"-?(?:\d+\.?\d*|\.\d+)")

#: Unsigned integer lexical form.
_UINT_PATTERN = re.compile(rb"\d+")


def _section(buffer: SourceBuffer, start: int, end: int, max_length: int | None) -> bytes:
    """Extract the token in ``[start, end)``, truncated to ``max_length`` bytes if given.

    The range may begin on the delimiting space, so surrounding spaces are stripped after truncation.
    """
    section = buffer.slice(start, end)
    if max_length is not None:
        section = section[:max_length]

    return section.strip(b" \r")


def to_float(buffer: SourceBuffer, start: int, end: int, max_length: int | None = None) -> float:
    """Convert the bytes in ``[start, end)`` to a float.

    :param buffer: The source buffer.
    :param start: The start offset (inclusive).
    :param end: The end offset (exclusive).
    :param max_length: If given, only the first ``max_length`` bytes of the range are converted.
    :return: The converted value.
    :raises MalformedTokenError: If the range does not hold a number.
    """
    section = _section(buffer, start, end, max_length)
    if not _FLOAT_PATTERN.fullmatch(section):
        raise MalformedTokenError(
            f"Could not convert {section.decode('ascii', 'replace')!r} to a float",
            offset=start,
            line=buffer.line_of(start),
        )

    return float(section)


def to_uint(buffer: SourceBuffer, start: int, end: int, max_length: int | None = None) -> int:
    """Convert the bytes in ``[start, end)`` to an unsigned integer.

    :param buffer: The source buffer.
    :param start: The start offset (inclusive).
    :param end: The end offset (exclusive).
    :param max_length: If given, only the first ``max_length`` bytes of the range are converted.
    :return: The converted value.
    :raises MalformedTokenError: If the range does not hold an unsigned integer.
    """
    section = _section(buffer, start, end, max_length)
    if not _UINT_PATTERN.fullmatch(section):
        raise MalformedTokenError(
            f"Could not convert {section.decode('ascii', 'replace')!r} to an unsigned integer",
            offset=start,
            line=buffer.line_of(start),
        )

    return int(section)
