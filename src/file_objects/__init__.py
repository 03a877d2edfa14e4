"""Filesystem operations behind one interface, with an in-memory fake for tests."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from file_objects.context import get_filesystem
from file_objects.errors import (
    DirectoryNotEmptyError,
    ErrorKind,
    ParentMissingError,
    error_kind,
    fs_error,
)
from file_objects.fake import FakeFileHandle, FakeFileSystem
from file_objects.filesystem import RealFileSystem
from file_objects.protocols import FileHandle, FileSystem
from file_objects.tempdir import TempDir
from file_objects.types import DirEntry, Metadata, NodeKind, OpenOptions

__all__ = [
    "__version__",
    "DirEntry",
    "DirectoryNotEmptyError",
    "ErrorKind",
    "FakeFileHandle",
    "FakeFileSystem",
    "FileHandle",
    "FileSystem",
    "Metadata",
    "NodeKind",
    "OpenOptions",
    "ParentMissingError",
    "RealFileSystem",
    "TempDir",
    "error_kind",
    "fs_error",
    "get_filesystem",
]
