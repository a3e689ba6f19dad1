import io
import os
from pathlib import Path

import pytest

from triobj.exceptions import OBJReadError
from triobj.source import SourceBuffer, read_source


class TestSourceBuffer:
    """Tests for byte access on the source buffer."""

    def test_length(self) -> None:
        """Report the number of bytes."""
        assert len(SourceBuffer(b"v 1 2 3\n")) == 8

    def test_byte_at(self) -> None:
        """Return the byte value at an offset."""
        buffer = SourceBuffer(b"vn")

        assert buffer.byte_at(0) == ord("v")
        assert buffer.byte_at(1) == ord("n")

    def test_byte_at_past_end(self) -> None:
        """Return -1 for offsets outside the buffer."""
        buffer = SourceBuffer(b"v")

        assert buffer.byte_at(1) == -1
        assert buffer.byte_at(-1) == -1

    def test_slice(self) -> None:
        """Return the bytes of a half-open range."""
        assert SourceBuffer(b"v 1 2 3\n").slice(2, 5) == b"1 2"

    def test_find_newline(self) -> None:
        """Find the next newline, or -1 if there is none."""
        buffer = SourceBuffer(b"# a\n# b")

        assert buffer.find_newline(0) == 3
        assert buffer.find_newline(4) == -1

    def test_line_of(self) -> None:
        """Count lines from 1."""
        buffer = SourceBuffer(b"a\nb\nc\n")

        assert buffer.line_of(0) == 1
        assert buffer.line_of(2) == 2
        assert buffer.line_of(4) == 3


class TestReadSource:
    """Tests for reading the source bytes."""

    def test_read_bytes_path(self, tmp_path: Path) -> None:
        """Treat bytes as a file system path."""
        path = tmp_path / "model.obj"
        path.write_bytes(b"v 1 2 3\n")

        assert read_source(os.fsencode(path)).data == b"v 1 2 3\n"

    def test_read_file_path(self, tmp_path: Path) -> None:
        """Read the whole file from a path."""
        path = tmp_path / "model.obj"
        path.write_bytes(b"vn 0 0 1\n")

        assert read_source(path).data == b"vn 0 0 1\n"

    def test_read_file_object(self) -> None:
        """Read the whole content of a file-like object."""
        assert read_source(io.BytesIO(b"vt 0 1\n")).data == b"vt 0 1\n"

    def test_read_text_file_object(self) -> None:
        """Encode the content of a text file-like object as UTF-8."""
        assert read_source(io.StringIO("vt 0 1\n")).data == b"vt 0 1\n"

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        """Raise OBJReadError chained from the underlying OSError."""
        with pytest.raises(OBJReadError) as exc_info:
            read_source(tmp_path / "missing.obj")

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_raises_error(self, tmp_path: Path) -> None:
        """Raise OBJReadError when the path is a directory."""
        with pytest.raises(OBJReadError):
            read_source(tmp_path)

    def test_failing_file_object_raises_error(self) -> None:
        """Raise OBJReadError when reading a file-like object fails."""

        class BrokenFile:
            name = "broken.obj"

            def read(self) -> bytes:
                raise OSError(5, "Input/output error")

        with pytest.raises(OBJReadError, match="broken.obj") as exc_info:
            read_source(BrokenFile())

        assert isinstance(exc_info.value.__cause__, OSError)
