"""Tests for in-memory file handles."""

from __future__ import annotations

import io

import pytest

from file_objects.errors import ErrorKind, error_kind
from file_objects.fake.handle import FakeFileHandle
from file_objects.fake.node import FileNode
from file_objects.types import OpenOptions


def make_handle(content: bytes, mode: str = "rb") -> tuple[FileNode, FakeFileHandle]:
    node = FileNode(content)
    return node, FakeFileHandle(node, OpenOptions.from_mode(mode), name="/f")


class TestFakeFileHandle:
    """Tests for FakeFileHandle."""

    def test_capabilities_follow_mode(self) -> None:
        """Test readable and writable reflect the open mode."""
        _, reader = make_handle(b"", "rb")
        _, writer = make_handle(b"", "wb")
        _, updater = make_handle(b"", "r+b")

        assert (reader.readable(), reader.writable()) == (True, False)
        assert (writer.readable(), writer.writable()) == (False, True)
        assert (updater.readable(), updater.writable()) == (True, True)
        assert reader.seekable() is True

    def test_readinto(self) -> None:
        """Test readinto fills a buffer and reports the count."""
        _, handle = make_handle(b"abcdef")
        buffer = bytearray(4)

        assert handle.readinto(buffer) == 4
        assert buffer == b"abcd"
        assert handle.readinto(buffer) == 2
        assert buffer[:2] == b"ef"
        assert handle.readinto(buffer) == 0

    def test_append_starts_at_end(self) -> None:
        """Test append handles start with the cursor at the end."""
        _, handle = make_handle(b"abc", "ab")

        assert handle.tell() == 3

    def test_write_updates_node(self) -> None:
        """Test writes land directly in the node buffer."""
        node, handle = make_handle(b"", "wb")

        assert handle.write(b"hello") == 5
        assert node.content == b"hello"

    def test_write_accepts_memoryview(self) -> None:
        """Test any bytes-like object can be written."""
        node, handle = make_handle(b"", "wb")

        handle.write(memoryview(b"view"))

        assert node.content == b"view"

    def test_seek_past_end_then_write(self) -> None:
        """Test the gap left by seeking past the end is zero-filled."""
        node, handle = make_handle(b"a", "r+b")

        handle.seek(3)
        handle.write(b"b")

        assert node.content == b"a\x00\x00b"

    def test_negative_seek_keeps_position(self) -> None:
        """Test a failed seek leaves the cursor where it was."""
        _, handle = make_handle(b"abc")
        handle.seek(2)

        with pytest.raises(OSError) as exc_info:
            handle.seek(-5, io.SEEK_CUR)
        assert error_kind(exc_info.value) is ErrorKind.INVALID_INPUT
        assert handle.tell() == 2

    def test_invalid_whence(self) -> None:
        """Test an unknown whence is rejected."""
        _, handle = make_handle(b"abc")

        with pytest.raises(ValueError):
            handle.seek(0, 7)

    def test_truncate_keeps_cursor(self) -> None:
        """Test truncate does not move the cursor."""
        node, handle = make_handle(b"abcdef", "r+b")
        handle.seek(4)

        assert handle.truncate(2) == 2
        assert handle.tell() == 4
        assert node.content == b"ab"

    def test_truncate_defaults_to_cursor(self) -> None:
        """Test truncate without a size cuts at the cursor."""
        node, handle = make_handle(b"abcdef", "r+b")
        handle.seek(3)

        handle.truncate()

        assert node.content == b"abc"

    def test_truncate_negative(self) -> None:
        """Test truncating to a negative size is invalid input."""
        _, handle = make_handle(b"abc", "r+b")

        with pytest.raises(OSError):
            handle.truncate(-1)

    def test_truncate_read_only(self) -> None:
        """Test truncating through a read-only handle is unsupported."""
        _, handle = make_handle(b"abc")

        with pytest.raises(io.UnsupportedOperation):
            handle.truncate(0)

    def test_read_on_write_handle(self) -> None:
        """Test reading through a write-only handle is unsupported."""
        _, handle = make_handle(b"abc", "wb")

        with pytest.raises(io.UnsupportedOperation):
            handle.read()

    def test_closed_handle(self) -> None:
        """Test every cursor operation fails after close."""
        _, handle = make_handle(b"abc", "r+b")
        handle.close()

        assert handle.closed is True
        with pytest.raises(ValueError):
            handle.write(b"x")
        with pytest.raises(ValueError):
            handle.seek(0)
        with pytest.raises(ValueError):
            handle.tell()

    def test_context_manager_closes(self) -> None:
        """Test leaving the with block closes the handle."""
        _, handle = make_handle(b"abc")

        with handle as f:
            assert f.read() == b"abc"

        assert handle.closed is True
