"""Tests for shared data types."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest
from pydantic import ValidationError

from file_objects.types import DirEntry, Metadata, NodeKind, OpenOptions


class TestOpenOptions:
    """Tests for OpenOptions.from_mode."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("rb", OpenOptions(read=True)),
            ("r+b", OpenOptions(read=True, write=True)),
            ("wb", OpenOptions(write=True, create=True, truncate=True)),
            ("w+b", OpenOptions(read=True, write=True, create=True, truncate=True)),
            ("ab", OpenOptions(write=True, append=True, create=True)),
            ("a+b", OpenOptions(read=True, write=True, append=True, create=True)),
            ("xb", OpenOptions(write=True, create_new=True)),
            ("x+b", OpenOptions(read=True, write=True, create_new=True)),
            ("br", OpenOptions(read=True)),
        ],
    )
    def test_binary_modes(self, mode: str, expected: OpenOptions) -> None:
        """Test each binary mode maps to its flags."""
        assert OpenOptions.from_mode(mode) == expected

    @pytest.mark.parametrize("mode", ["", "r", "rt", "wb+b", "rwb", "+b", "zb"])
    def test_rejected_modes(self, mode: str) -> None:
        """Test text and malformed modes raise ValueError."""
        with pytest.raises(ValueError):
            OpenOptions.from_mode(mode)

    def test_frozen(self) -> None:
        """Test options cannot be changed after construction."""
        options = OpenOptions.from_mode("rb")

        with pytest.raises(ValidationError):
            options.write = True  # type: ignore[misc]


class TestMetadata:
    """Tests for Metadata."""

    def test_file_metadata(self) -> None:
        """Test derived properties of file metadata."""
        meta = Metadata(kind=NodeKind.FILE, size=3, mode=0o444)

        assert meta.is_file is True
        assert meta.is_dir is False
        assert meta.readonly is True

    def test_kind_from_string(self) -> None:
        """Test the kind validates from its string value."""
        meta = Metadata(kind="dir", size=4096, mode=0o755)

        assert meta.kind is NodeKind.DIR
        assert meta.readonly is False


class TestDirEntry:
    """Tests for DirEntry."""

    def test_kind_checks(self) -> None:
        """Test is_file and is_dir follow the kind."""
        entry = DirEntry(name="f.txt", path=PurePosixPath("/f.txt"), kind=NodeKind.FILE)

        assert entry.is_file() is True
        assert entry.is_dir() is False
