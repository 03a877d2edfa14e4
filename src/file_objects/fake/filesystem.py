"""In-memory filesystem implementation."""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from pathlib import PurePosixPath

from file_objects.errors import ErrorKind, fs_error
from file_objects.fake.handle import FakeFileHandle
from file_objects.fake.node import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    DirNode,
    FileNode,
    can_read,
    can_write,
    set_readonly,
)
from file_objects.fake.tree import TreeStore
from file_objects.paths import ROOT, StrPath, normalize
from file_objects.tempdir import DEFAULT_TEMP_PREFIX, TempDir
from file_objects.types import DirEntry, Metadata, OpenOptions

logger = logging.getLogger(__name__)

# Parent of directories handed out by temp_dir()
TEMP_ROOT = PurePosixPath("/tmp")


class FakeFileSystem:
    """Filesystem held entirely in memory.

    Reproduces the observable behaviour of `RealFileSystem`, including the
    exception raised for each kind of misuse, without touching disk.
    Satisfies the FileSystem protocol structurally.

    Instances are independent; build a fresh one per test. There is no
    internal locking: guard a shared instance with a single external lock.
    """

    def __init__(
        self,
        cwd: StrPath = ROOT,
        file_mode: int = DEFAULT_FILE_MODE,
        dir_mode: int = DEFAULT_DIR_MODE,
    ) -> None:
        """Initialize an empty filesystem.

        Args:
            cwd: Initial current directory, created if missing.
            file_mode: Permission bits of newly created files.
            dir_mode: Permission bits of newly created directories.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.file_mode = file_mode
        self.dir_mode = dir_mode
        self.tree = TreeStore(dir_mode)
        self._cwd = ROOT
        cwd_path = normalize(cwd)
        if cwd_path != ROOT:
            self.create_dir_all(cwd_path)
            self._cwd = cwd_path

    @classmethod
    def create(
        cls,
        cwd: StrPath = ROOT,
        file_mode: int = DEFAULT_FILE_MODE,
        dir_mode: int = DEFAULT_DIR_MODE,
    ) -> FakeFileSystem:
        """Create a fake filesystem with custom settings.

        Args:
            cwd: Initial current directory.
            file_mode: Permission bits of newly created files.
            dir_mode: Permission bits of newly created directories.

        Returns:
            Configured FakeFileSystem instance.
        """
        return cls(cwd=cwd, file_mode=file_mode, dir_mode=dir_mode)

    @classmethod
    def create_default(cls) -> FakeFileSystem:
        """Create an empty fake filesystem rooted at ``/``.

        Returns:
            FakeFileSystem with default modes.
        """
        return cls()

    def _path(self, path: StrPath) -> PurePosixPath:
        return normalize(path, self._cwd)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def exists(self, path: StrPath) -> bool:
        """Check if a path exists. Never raises."""
        try:
            return self.tree.lookup(self._path(path)) is not None
        except OSError:
            return False

    def is_file(self, path: StrPath) -> bool:
        """Check if a path is a regular file."""
        try:
            return isinstance(self.tree.lookup(self._path(path)), FileNode)
        except OSError:
            return False

    def is_dir(self, path: StrPath) -> bool:
        """Check if a path is a directory."""
        try:
            return isinstance(self.tree.lookup(self._path(path)), DirNode)
        except OSError:
            return False

    def metadata(self, path: StrPath) -> Metadata:
        """Get kind, size and permission bits of a path."""
        node = self.tree.resolve(self._path(path))
        return Metadata(kind=node.kind, size=node.size, mode=node.mode)

    def read_dir(self, path: StrPath) -> list[DirEntry]:
        """List a directory's entries sorted by name."""
        directory = self._path(path)
        return [
            DirEntry(name=name, path=directory / name, kind=kind)
            for name, kind in self.tree.list_children(directory)
        ]

    def canonicalize(self, path: StrPath) -> PurePosixPath:
        """Return the absolute form of an existing path.

        Components are walked in order. Every name must exist before a
        following ``..`` removes it, and every name but the last must be a
        directory.

        Raises:
            FileNotFoundError: If the path is empty or a component is missing.
            NotADirectoryError: If a file is used as a directory.
        """
        raw = os.fsdecode(path)
        if not raw:
            raise fs_error(ErrorKind.NOT_FOUND, raw)

        candidate = PurePosixPath(raw)
        if not candidate.is_absolute():
            candidate = self._cwd / candidate

        names = candidate.parts[1:]
        current = ROOT
        for index, name in enumerate(names):
            if name == "..":
                current = current.parent
                continue
            current = current / name
            if index < len(names) - 1:
                self.tree.resolve_dir(current)
            else:
                self.tree.resolve(current)
        return current

    # ------------------------------------------------------------------
    # Current directory
    # ------------------------------------------------------------------

    def current_dir(self) -> PurePosixPath:
        """Get the current directory.

        Raises:
            FileNotFoundError: If the current directory has been removed.
        """
        self.tree.resolve_dir(self._cwd)
        return self._cwd

    def set_current_dir(self, path: StrPath) -> None:
        """Change the directory relative paths are resolved against."""
        target = self._path(path)
        self.tree.resolve_dir(target)
        logger.debug("Changing current directory to %s", target)
        self._cwd = target

    # ------------------------------------------------------------------
    # Creation and removal
    # ------------------------------------------------------------------

    def create_file(self, path: StrPath, content: bytes = b"") -> None:
        """Create a new file.

        Raises:
            FileExistsError: If the path already exists.
        """
        self.tree.insert(self._path(path), FileNode(content, self.file_mode))

    def create_dir(self, path: StrPath) -> None:
        """Create a directory whose parent already exists."""
        self.tree.insert(self._path(path), DirNode(self.dir_mode))

    def create_dir_all(self, path: StrPath) -> None:
        """Create a directory and any missing ancestors.

        Succeeds if the directory already exists.

        Raises:
            FileExistsError: If the path is an existing file.
            NotADirectoryError: If an ancestor is a file.
        """
        target = self._path(path)
        for directory in [*reversed(target.parents), target]:
            node = self.tree.lookup(directory)
            if isinstance(node, DirNode):
                continue
            if node is not None and directory != target:
                raise fs_error(ErrorKind.NOT_A_DIRECTORY, target)
            self.tree.insert(directory, DirNode(self.dir_mode))

    def remove_file(self, path: StrPath) -> None:
        """Remove a file.

        Raises:
            IsADirectoryError: If the path is a directory.
        """
        target = self._path(path)
        self.tree.resolve_file(target)
        self.tree.remove(target)

    def remove_dir(self, path: StrPath) -> None:
        """Remove an empty directory.

        Raises:
            NotADirectoryError: If the path is a file.
            DirectoryNotEmptyError: If the directory has entries.
        """
        target = self._path(path)
        self.tree.resolve_dir(target)
        self.tree.remove(target)

    def remove_dir_all(self, path: StrPath) -> None:
        """Remove a directory and everything below it.

        Raises:
            NotADirectoryError: If the path is a file.
        """
        target = self._path(path)
        self.tree.resolve_dir(target)
        self.tree.remove(target, recursive=True)

    # ------------------------------------------------------------------
    # Copy and rename
    # ------------------------------------------------------------------

    def copy_file(self, src: StrPath, dst: StrPath) -> None:
        """Copy a file's content, overwriting the destination file in place.

        Raises:
            IsADirectoryError: If either path is a directory.
            PermissionError: If the destination is readonly.
            shutil.SameFileError: If both paths name the same file.
        """
        src_path, dst_path = self._path(src), self._path(dst)
        source = self.tree.resolve_file(src_path)
        if not can_read(source):
            raise fs_error(ErrorKind.PERMISSION_DENIED, src_path)
        if src_path == dst_path:
            raise shutil.SameFileError(f"{str(src_path)!r} and {str(dst_path)!r} are the same file")
        self._store(dst_path, bytes(source.content))

    def copy_dir(self, src: StrPath, dst: StrPath) -> None:
        """Recursively copy a directory to a new path.

        Raises:
            NotADirectoryError: If ``src`` is a file.
            FileExistsError: If ``dst`` exists.
            ParentMissingError: If the parent of ``dst`` does not exist.
        """
        src_path, dst_path = self._path(src), self._path(dst)
        self.tree.resolve_dir(src_path)
        self.tree.copy(src_path, dst_path)

    def rename(self, src: StrPath, dst: StrPath) -> None:
        """Rename a file or directory, replacing a compatible destination."""
        self.tree.rename(self._path(src), self._path(dst))

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def is_readonly(self, path: StrPath) -> bool:
        """Check if a path has no write permission."""
        return not can_write(self.tree.resolve(self._path(path)))

    def set_readonly(self, path: StrPath, readonly: bool) -> None:
        """Clear or restore the write bits of a path."""
        set_readonly(self.tree.resolve(self._path(path)), readonly)

    def mode(self, path: StrPath) -> int:
        """Get the permission bits of a path."""
        return self.tree.resolve(self._path(path)).mode

    def set_mode(self, path: StrPath, mode: int) -> None:
        """Set the permission bits of a path."""
        self.tree.resolve(self._path(path)).mode = mode & 0o7777

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def read_file(self, path: StrPath) -> bytes:
        """Read a file's content."""
        target = self._path(path)
        node = self.tree.resolve_file(target)
        if not can_read(node):
            raise fs_error(ErrorKind.PERMISSION_DENIED, target)
        return bytes(node.content)

    def write_file(self, path: StrPath, data: bytes) -> None:
        """Write a file, creating it if absent and truncating it if present."""
        self._store(self._path(path), data)

    def append_file(self, path: StrPath, data: bytes) -> None:
        """Append to a file, creating it if absent."""
        target = self._path(path)
        node = self._writable_file(target, create=True)
        node.content.extend(data)

    def read_text(self, path: StrPath, encoding: str = "utf-8") -> str:
        """Read a file's content as text."""
        return self.read_file(path).decode(encoding)

    def write_text(self, path: StrPath, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        self.write_file(path, content.encode(encoding))

    def open(self, path: StrPath, mode: str = "rb") -> FakeFileHandle:
        """Open a file and return a binary file object.

        Args:
            path: Path to the file.
            mode: Binary mode: ``rb``, ``wb``, ``ab``, ``xb``, optionally with ``+``.

        Returns:
            A handle over the file's node.

        Raises:
            ValueError: If the mode is not supported.
            FileNotFoundError: If a read-only or ``r+`` mode names a missing file.
            FileExistsError: If ``x`` mode names an existing path.
            IsADirectoryError: If the path is a directory.
            PermissionError: If the file's permissions forbid the access.
        """
        options = OpenOptions.from_mode(mode)
        target = self._path(path)

        if options.create_new:
            node = FileNode(b"", self.file_mode)
            self.tree.insert(target, node)
        elif options.write:
            node = self._writable_file(target, create=options.create)
            if options.truncate:
                node.content.clear()
        else:
            node = self.tree.resolve_file(target)

        if options.read and not can_read(node):
            raise fs_error(ErrorKind.PERMISSION_DENIED, target)
        return FakeFileHandle(node, options, name=str(target))

    def temp_dir(self, prefix: str = DEFAULT_TEMP_PREFIX) -> TempDir:
        """Create a uniquely named directory under ``/tmp``.

        Returns:
            A TempDir that removes the directory on cleanup.
        """
        self.create_dir_all(TEMP_ROOT)
        path = TEMP_ROOT / f"{prefix}{uuid.uuid4().hex[:12]}"
        self.create_dir(path)
        logger.debug("Created temporary directory %s", path)
        return TempDir(self, path)

    def _writable_file(self, target: PurePosixPath, create: bool) -> FileNode:
        """Resolve a file for writing, optionally creating it."""
        node = self.tree.lookup(target)
        if node is None:
            if not create:
                self.tree.resolve(target)
            node = FileNode(b"", self.file_mode)
            self.tree.insert(target, node)
            return node
        if not isinstance(node, FileNode):
            raise fs_error(ErrorKind.NOT_A_FILE, target)
        if not can_write(node):
            raise fs_error(ErrorKind.PERMISSION_DENIED, target)
        return node

    def _store(self, target: PurePosixPath, data: bytes) -> None:
        node = self._writable_file(target, create=True)
        node.content[:] = data
