"""Protocol definitions for core abstractions.

This module defines the interfaces shared by the production filesystem and
the in-memory fake. Code written against `FileSystem` runs unchanged on
either, so tests can substitute the fake without touching the disk.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import PurePath
from types import TracebackType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from file_objects.paths import StrPath
from file_objects.types import DirEntry, Metadata

if TYPE_CHECKING:
    from file_objects.tempdir import TempDir


@runtime_checkable
class FileHandle(Protocol):
    """Protocol for an open binary file.

    Satisfied by the builtin file objects returned by `open()` and by
    `FakeFileHandle`.
    """

    def read(self, size: int = -1, /) -> bytes | None:
        """Read up to ``size`` bytes, or everything when ``size`` is negative."""
        ...

    def write(self, data: bytes, /) -> int | None:
        """Write ``data`` at the cursor and return the byte count."""
        ...

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """Move the cursor and return the new absolute position."""
        ...

    def tell(self) -> int:
        """Return the cursor position."""
        ...

    def truncate(self, size: int | None = None, /) -> int:
        """Resize the file to ``size`` bytes, defaulting to the cursor."""
        ...

    def flush(self) -> None:
        """Flush buffered writes."""
        ...

    def close(self) -> None:
        """Release the handle."""
        ...

    def __enter__(self) -> FileHandle: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    Failures are raised as ``OSError`` subclasses carrying an errno; use
    `file_objects.errors.error_kind` to classify them.
    """

    def exists(self, path: StrPath) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise. Never raises.
        """
        ...

    def is_file(self, path: StrPath) -> bool:
        """Check if a path is a regular file.

        Args:
            path: Path to check.

        Returns:
            True if path is a file, False otherwise.
        """
        ...

    def is_dir(self, path: StrPath) -> bool:
        """Check if a path is a directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def metadata(self, path: StrPath) -> Metadata:
        """Get the kind, size and permission bits of a path.

        Args:
            path: Path to inspect.

        Returns:
            Metadata snapshot.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        ...

    def read_dir(self, path: StrPath) -> list[DirEntry]:
        """List the entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Entries sorted by name.

        Raises:
            FileNotFoundError: If path does not exist.
            NotADirectoryError: If path is a file.
            PermissionError: If the directory is unreadable.
        """
        ...

    def canonicalize(self, path: StrPath) -> PurePath:
        """Resolve a path to its absolute, normalized form.

        Args:
            path: Path to resolve; relative paths start at the current directory.

        Returns:
            Absolute path of an existing entry.

        Raises:
            FileNotFoundError: If path is empty or does not exist.
        """
        ...

    def current_dir(self) -> PurePath:
        """Get the directory relative paths are resolved against."""
        ...

    def set_current_dir(self, path: StrPath) -> None:
        """Change the directory relative paths are resolved against.

        Raises:
            FileNotFoundError: If path does not exist.
            NotADirectoryError: If path is a file.
        """
        ...

    def create_file(self, path: StrPath, content: bytes = b"") -> None:
        """Create a new file.

        Args:
            path: Path of the file.
            content: Initial content.

        Raises:
            FileExistsError: If path exists.
            ParentMissingError: If the parent directory does not exist.
        """
        ...

    def create_dir(self, path: StrPath) -> None:
        """Create a single directory.

        Raises:
            FileExistsError: If path exists.
            ParentMissingError: If the parent directory does not exist.
        """
        ...

    def create_dir_all(self, path: StrPath) -> None:
        """Create a directory and any missing ancestors.

        Succeeds if the directory already exists.

        Raises:
            FileExistsError: If path is an existing file.
            NotADirectoryError: If an ancestor is a file.
        """
        ...

    def remove_file(self, path: StrPath) -> None:
        """Remove a file.

        Raises:
            FileNotFoundError: If path does not exist.
            IsADirectoryError: If path is a directory.
        """
        ...

    def remove_dir(self, path: StrPath) -> None:
        """Remove an empty directory.

        Raises:
            FileNotFoundError: If path does not exist.
            NotADirectoryError: If path is a file.
            DirectoryNotEmptyError: If the directory has entries.
        """
        ...

    def remove_dir_all(self, path: StrPath) -> None:
        """Remove a directory and everything below it.

        Raises:
            FileNotFoundError: If path does not exist.
            NotADirectoryError: If path is a file.
            PermissionError: If any directory in the tree cannot be read.
        """
        ...

    def copy_file(self, src: StrPath, dst: StrPath) -> None:
        """Copy a file's content to ``dst``, replacing an existing file.

        Raises:
            FileNotFoundError: If src does not exist.
            IsADirectoryError: If src or dst is a directory.
            ParentMissingError: If dst's parent does not exist.
        """
        ...

    def copy_dir(self, src: StrPath, dst: StrPath) -> None:
        """Copy a directory tree to a new path.

        Raises:
            FileNotFoundError: If src does not exist.
            NotADirectoryError: If src is a file.
            FileExistsError: If dst exists.
            ParentMissingError: If dst's parent does not exist.
        """
        ...

    def rename(self, src: StrPath, dst: StrPath) -> None:
        """Move a file or directory.

        A file replaces an existing file; a directory replaces an empty
        directory.

        Raises:
            FileNotFoundError: If src does not exist.
            ParentMissingError: If dst's parent does not exist.
            IsADirectoryError: If a file is moved onto a directory.
            NotADirectoryError: If a directory is moved onto a file.
            DirectoryNotEmptyError: If dst is a populated directory.
        """
        ...

    def is_readonly(self, path: StrPath) -> bool:
        """Check if a path has no write permission bits."""
        ...

    def set_readonly(self, path: StrPath, readonly: bool) -> None:
        """Clear or set the write permission bits of a path."""
        ...

    def mode(self, path: StrPath) -> int:
        """Get the permission bits of a path."""
        ...

    def set_mode(self, path: StrPath, mode: int) -> None:
        """Set the permission bits of a path."""
        ...

    def read_file(self, path: StrPath) -> bytes:
        """Read a file's content.

        Raises:
            FileNotFoundError: If file does not exist.
            IsADirectoryError: If path is a directory.
            PermissionError: If the file is unreadable.
        """
        ...

    def write_file(self, path: StrPath, data: bytes) -> None:
        """Write a file, creating it if absent and truncating it if present.

        Raises:
            ParentMissingError: If the parent directory does not exist.
            IsADirectoryError: If path is a directory.
            PermissionError: If the file is read-only.
        """
        ...

    def append_file(self, path: StrPath, data: bytes) -> None:
        """Append to a file, creating it if absent."""
        ...

    def read_text(self, path: StrPath, encoding: str = "utf-8") -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.
            encoding: Text encoding.

        Returns:
            File content as string.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def write_text(self, path: StrPath, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file.

        Args:
            path: Path to the file.
            content: Content to write.
            encoding: Text encoding.
        """
        ...

    def open(self, path: StrPath, mode: str = "rb") -> FileHandle:
        """Open a file in a binary mode.

        Args:
            path: Path to the file.
            mode: One of ``rb``, ``wb``, ``ab``, ``xb``, optionally with ``+``.

        Returns:
            An open handle; close it or use it as a context manager.

        Raises:
            ValueError: If mode is not a binary mode.
        """
        ...

    def temp_dir(self, prefix: str = ...) -> TempDir:
        """Create a uniquely named temporary directory.

        Args:
            prefix: Leading part of the directory name.

        Returns:
            A TempDir removed with its contents on cleanup.
        """
        ...
