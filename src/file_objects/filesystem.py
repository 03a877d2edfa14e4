"""Filesystem abstraction for testability.

This module provides the production filesystem: every operation delegates to
the standard library (``os``, ``shutil``, builtin ``open``). The in-memory
counterpart lives in `file_objects.fake`.

The host reports a few conditions ambiguously; they are translated here so
both implementations raise the same exception for the same misuse:

- ``ENOENT`` while creating a destination whose parent is absent becomes
  `ParentMissingError`.
- ``ENOTEMPTY``/``EEXIST`` from removing or renaming onto a populated
  directory becomes `DirectoryNotEmptyError`.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from file_objects.errors import ErrorKind, fs_error
from file_objects.paths import StrPath
from file_objects.tempdir import DEFAULT_TEMP_PREFIX, TempDir
from file_objects.types import WRITE_BITS, DirEntry, Metadata, NodeKind, OpenOptions

logger = logging.getLogger(__name__)


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os, shutil and open operations.
    Satisfies the FileSystem protocol structurally.
    """

    @classmethod
    def create_default(cls) -> RealFileSystem:
        """Create a filesystem backed by the host OS."""
        return cls()

    def exists(self, path: StrPath) -> bool:
        """Check if a path exists. Never raises.

        A trailing slash is ignored, as it is by the read and write helpers.
        """
        return os.path.exists(_query_path(path))

    def is_file(self, path: StrPath) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(_query_path(path))

    def is_dir(self, path: StrPath) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(_query_path(path))

    def metadata(self, path: StrPath) -> Metadata:
        """Get kind, size and permission bits of a path."""
        st = os.stat(path)
        kind = NodeKind.DIR if stat.S_ISDIR(st.st_mode) else NodeKind.FILE
        return Metadata(kind=kind, size=st.st_size, mode=stat.S_IMODE(st.st_mode))

    def read_dir(self, path: StrPath) -> list[DirEntry]:
        """List a directory's entries sorted by name."""
        directory = Path(path)
        with os.scandir(path) as entries:
            found = [
                DirEntry(
                    name=entry.name,
                    path=directory / entry.name,
                    kind=NodeKind.DIR if entry.is_dir() else NodeKind.FILE,
                )
                for entry in entries
            ]
        return sorted(found, key=lambda entry: entry.name)

    def canonicalize(self, path: StrPath) -> Path:
        """Return the absolute form of an existing path."""
        if not os.fspath(path):
            raise fs_error(ErrorKind.NOT_FOUND, path)
        return Path(os.path.realpath(path, strict=True))

    def current_dir(self) -> Path:
        """Get the process working directory."""
        return Path.cwd()

    def set_current_dir(self, path: StrPath) -> None:
        """Change the process working directory."""
        logger.debug("Changing current directory to %s", path)
        os.chdir(path)

    def create_file(self, path: StrPath, content: bytes = b"") -> None:
        """Create a new file, failing if the path exists."""
        with _creating(path):
            with open(path, "xb") as f:
                f.write(content)

    def create_dir(self, path: StrPath) -> None:
        """Create a directory whose parent already exists."""
        with _creating(path):
            os.mkdir(path)

    def create_dir_all(self, path: StrPath) -> None:
        """Create a directory and any missing ancestors."""
        os.makedirs(path, exist_ok=True)

    def remove_file(self, path: StrPath) -> None:
        """Remove a file."""
        try:
            os.remove(path)
        except PermissionError as e:
            # Some platforms report unlink() on a directory as EPERM.
            if os.path.isdir(path):
                raise fs_error(ErrorKind.NOT_A_FILE, path) from e
            raise

    def remove_dir(self, path: StrPath) -> None:
        """Remove an empty directory."""
        with _not_empty(path):
            os.rmdir(path)

    def remove_dir_all(self, path: StrPath) -> None:
        """Remove a directory tree."""
        if os.path.lexists(path) and not os.path.isdir(path):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, path)
        shutil.rmtree(path)

    def copy_file(self, src: StrPath, dst: StrPath) -> None:
        """Copy a file's content, overwriting the destination file."""
        with _creating(dst, src):
            shutil.copyfile(src, dst)

    def copy_dir(self, src: StrPath, dst: StrPath) -> None:
        """Copy a directory tree to a new path."""
        if not os.path.isdir(src):
            os.stat(src)
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, src)
        if os.path.lexists(dst):
            raise fs_error(ErrorKind.ALREADY_EXISTS, dst)

        parent = os.path.dirname(os.path.abspath(dst))
        if not os.path.isdir(parent):
            kind = ErrorKind.NOT_A_DIRECTORY if os.path.exists(parent) else ErrorKind.PARENT_MISSING
            raise fs_error(kind, dst)
        shutil.copytree(src, dst)

    def rename(self, src: StrPath, dst: StrPath) -> None:
        """Rename a file or directory, replacing a compatible destination."""
        with _creating(dst, src), _not_empty(src, dst):
            os.rename(src, dst)

    def is_readonly(self, path: StrPath) -> bool:
        """Check if a path has no write permission."""
        return self.mode(path) & WRITE_BITS == 0

    def set_readonly(self, path: StrPath, readonly: bool) -> None:
        """Clear or restore the write bits of a path."""
        mode = self.mode(path)
        os.chmod(path, mode & ~WRITE_BITS if readonly else mode | WRITE_BITS)

    def mode(self, path: StrPath) -> int:
        """Get the permission bits of a path."""
        return stat.S_IMODE(os.stat(path).st_mode)

    def set_mode(self, path: StrPath, mode: int) -> None:
        """Set the permission bits of a path."""
        os.chmod(path, mode)

    def read_file(self, path: StrPath) -> bytes:
        """Read a file's content."""
        return Path(path).read_bytes()

    def write_file(self, path: StrPath, data: bytes) -> None:
        """Write a file, creating it if absent and truncating it if present."""
        with _creating(path):
            Path(path).write_bytes(data)

    def append_file(self, path: StrPath, data: bytes) -> None:
        """Append to a file, creating it if absent."""
        with _creating(path):
            with open(path, "ab") as f:
                f.write(data)

    def read_text(self, path: StrPath, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: StrPath, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        with _creating(path):
            Path(path).write_text(content, encoding=encoding)

    def open(self, path: StrPath, mode: str = "rb") -> BinaryIO:
        """Open a file and return a binary file object.

        The caller owns the returned descriptor; use it in a ``with`` block.
        """
        options = OpenOptions.from_mode(mode)
        if options.create or options.create_new:
            with _creating(path):
                return open(path, mode)
        return open(path, mode)

    def temp_dir(self, prefix: str = DEFAULT_TEMP_PREFIX) -> TempDir:
        """Create a uniquely named directory in the system temp location.

        Returns:
            A TempDir that removes the directory on cleanup.
        """
        path = Path(tempfile.mkdtemp(prefix=prefix))
        logger.debug("Created temporary directory %s", path)
        return TempDir(self, path)


@contextmanager
def _creating(dst: StrPath, src: StrPath | None = None) -> Iterator[None]:
    """Report ENOENT caused by a missing destination parent as ParentMissingError."""
    try:
        yield
    except FileNotFoundError as e:
        if src is not None and not os.path.lexists(src):
            raise
        if os.path.exists(os.path.dirname(os.path.abspath(dst))):
            raise
        logger.debug("Destination parent of %s is missing", dst)
        raise fs_error(ErrorKind.PARENT_MISSING, dst) from e


@contextmanager
def _not_empty(path: StrPath, path2: StrPath | None = None) -> Iterator[None]:
    """Report a populated directory as DirectoryNotEmptyError."""
    try:
        yield
    except OSError as e:
        if e.errno not in (errno.ENOTEMPTY, errno.EEXIST):
            raise
        logger.debug("Directory not empty: %s", path2 or path)
        raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, path, path2) from e


def _query_path(path: StrPath) -> StrPath:
    """Drop trailing slashes the way `Path` does; keep the empty path empty."""
    return Path(path) if os.fspath(path) else path
