import pytest

from triobj.exceptions import MalformedTokenError
from triobj.source import SourceBuffer
from triobj.tokens import to_float, to_uint


def convert_float(text: bytes, max_length: int | None = None) -> float:
    buffer = SourceBuffer(text)
    return to_float(buffer, 0, len(buffer), max_length)


def convert_uint(text: bytes, max_length: int | None = None) -> int:
    buffer = SourceBuffer(text)
    return to_uint(buffer, 0, len(buffer), max_length)


class TestToFloat:
    """Tests for converting float tokens."""

    def test_integer_form(self) -> None:
        """Convert a token without a fractional part."""
        assert convert_float(b"3") == 3.0

    def test_decimal_form(self) -> None:
        """Convert a token with a fractional part."""
        assert convert_float(b"0.25") == pytest.approx(0.25)

    def test_negative(self) -> None:
        """Convert a negative token."""
        assert convert_float(b"-1.5") == pytest.approx(-1.5)

    def test_leading_delimiter_is_ignored(self) -> None:
        """Ignore the delimiting space a scanner includes at the start of the range."""
        assert convert_float(b" 2.0") == pytest.approx(2.0)

    def test_sub_range(self) -> None:
        """Convert only the bytes in the given range."""
        buffer = SourceBuffer(b"1.0 2.0 3.0")

        assert to_float(buffer, 4, 7) == pytest.approx(2.0)

    @pytest.mark.parametrize("text", [b"", b"-", b".", b"1.2.3", b"--1", b"1-2"])
    def test_unparsable_raises_error(self, text: bytes) -> None:
        """Raise MalformedTokenError instead of silently returning zero."""
        with pytest.raises(MalformedTokenError, match="to a float"):
            convert_float(text)

    def test_no_truncation_by_default(self) -> None:
        """Keep every digit of long tokens when no maximum length is given."""
        assert convert_float(b"0.123456789012") == pytest.approx(0.123456789012)

    def test_truncate_to_max_length(self) -> None:
        """Convert only the first ``max_length`` characters when a maximum is given."""
        assert convert_float(b"0.123456789012", max_length=10) == pytest.approx(0.12345678)

    def test_truncation_counts_leading_delimiter(self) -> None:
        """Count the delimiting space towards the maximum length."""
        assert convert_float(b" 123.456", max_length=4) == pytest.approx(123.0)


class TestToUint:
    """Tests for converting unsigned integer tokens."""

    def test_convert(self) -> None:
        """Convert a plain unsigned integer."""
        assert convert_uint(b"42") == 42

    def test_zero(self) -> None:
        """Convert zero as a value, leaving its interpretation to the caller."""
        assert convert_uint(b"0") == 0

    @pytest.mark.parametrize("text", [b"", b"-1", b"1.5", b"a"])
    def test_unparsable_raises_error(self, text: bytes) -> None:
        """Raise MalformedTokenError for anything but digits."""
        with pytest.raises(MalformedTokenError, match="unsigned integer"):
            convert_uint(text)

    def test_truncate_to_max_length(self) -> None:
        """Convert only the first ``max_length`` characters when a maximum is given."""
        assert convert_uint(b"123456789012", max_length=10) == 1234567890

    def test_error_reports_line(self) -> None:
        """Report the line number of the offending token."""
        buffer = SourceBuffer(b"v 1 2 3\nf x\n")

        with pytest.raises(MalformedTokenError) as exc_info:
            to_uint(buffer, 10, 11)

        assert exc_info.value.line == 2
        assert exc_info.value.offset == 10
