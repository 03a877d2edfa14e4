"""In-memory tree of file and directory nodes.

The root directory owns every node through parent-to-child links only.
Nothing stores a reference to its parent: operations that need a parent
walk again from the root.

Every mutating operation validates all of its preconditions before touching
the tree, so a failed call leaves the tree exactly as it was.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from file_objects.errors import ErrorKind, fs_error
from file_objects.fake.node import DEFAULT_DIR_MODE, DirNode, FileNode, Node, can_read, can_write
from file_objects.paths import ROOT, components
from file_objects.types import NodeKind


class TreeStore:
    """Owns the root directory and resolves normalized paths against it."""

    def __init__(self, dir_mode: int = DEFAULT_DIR_MODE) -> None:
        """Initialize an empty tree holding only the root directory.

        Args:
            dir_mode: Permission bits of the root directory.
        """
        self.root = DirNode(dir_mode)

    def resolve(self, path: PurePosixPath) -> Node:
        """Walk from the root to the node at ``path``.

        Args:
            path: Normalized absolute path.

        Returns:
            The node at the path.

        Raises:
            FileNotFoundError: If a component is missing.
            NotADirectoryError: If a component before the last is a file.
        """
        node: Node = self.root
        for name in components(path):
            if not isinstance(node, DirNode):
                raise fs_error(ErrorKind.NOT_A_DIRECTORY, path)
            child = node.children.get(name)
            if child is None:
                raise fs_error(ErrorKind.NOT_FOUND, path)
            node = child
        return node

    def lookup(self, path: PurePosixPath) -> Node | None:
        """Resolve a path, returning None instead of raising."""
        try:
            return self.resolve(path)
        except OSError:
            return None

    def resolve_file(self, path: PurePosixPath) -> FileNode:
        node = self.resolve(path)
        if not isinstance(node, FileNode):
            raise fs_error(ErrorKind.NOT_A_FILE, path)
        return node

    def resolve_dir(self, path: PurePosixPath) -> DirNode:
        node = self.resolve(path)
        if not isinstance(node, DirNode):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, path)
        return node

    def insert(self, path: PurePosixPath, node: Node) -> None:
        """Attach a node at ``path``.

        Args:
            path: Normalized absolute destination.
            node: Node to attach. The tree takes ownership.

        Raises:
            FileExistsError: If the path is already occupied.
            ParentMissingError: If the parent directory does not exist.
            NotADirectoryError: If the parent, or one of its ancestors, is a file.
            PermissionError: If the parent directory is readonly.
        """
        if path == ROOT:
            raise fs_error(ErrorKind.ALREADY_EXISTS, path)

        parent = self._destination_parent(path)
        if path.name in parent.children:
            raise fs_error(ErrorKind.ALREADY_EXISTS, path)
        if not can_write(parent):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)

        parent.children[path.name] = node

    def remove(self, path: PurePosixPath, recursive: bool = False) -> Node:
        """Detach and return the node at ``path``.

        Args:
            path: Normalized absolute path.
            recursive: Allow removing a populated directory with its contents.

        Returns:
            The detached node.

        Raises:
            FileNotFoundError: If nothing exists at the path.
            DirectoryNotEmptyError: If the path is a populated directory and
                ``recursive`` is False.
            PermissionError: If the parent is readonly, or a directory below
                the path cannot be listed or emptied.
        """
        if path == ROOT:
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)

        node = self.resolve(path)
        if isinstance(node, DirNode) and node.children:
            if not recursive:
                raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, path)
            self._check_removable(node, path)

        parent = self.resolve_dir(path.parent)
        if not can_write(parent):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)

        del parent.children[path.name]
        return node

    def rename(self, src: PurePosixPath, dst: PurePosixPath) -> None:
        """Move the node at ``src`` to ``dst``, replacing a compatible destination.

        A file replaces a file; a directory replaces an empty directory.

        Raises:
            FileNotFoundError: If ``src`` does not exist.
            ParentMissingError: If the parent of ``dst`` does not exist.
            IsADirectoryError: If a file would replace a directory.
            NotADirectoryError: If a directory would replace a file.
            DirectoryNotEmptyError: If ``dst`` is a populated directory.
            OSError: EINVAL if a directory would move into its own subtree.
            PermissionError: If either parent directory is readonly.
        """
        node = self.resolve(src)
        if src == dst:
            return
        if ROOT in (src, dst):
            raise fs_error(ErrorKind.PERMISSION_DENIED, src, dst)

        src_parent = self.resolve_dir(src.parent)
        dst_parent = self._destination_parent(dst)
        if isinstance(node, DirNode) and src in dst.parents:
            raise fs_error(ErrorKind.INVALID_INPUT, src, dst)

        existing = dst_parent.children.get(dst.name)
        if isinstance(existing, DirNode):
            if isinstance(node, FileNode):
                raise fs_error(ErrorKind.NOT_A_FILE, src, dst)
            if existing.children:
                raise fs_error(ErrorKind.DIRECTORY_NOT_EMPTY, src, dst)
        elif isinstance(existing, FileNode) and isinstance(node, DirNode):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, src, dst)

        if not can_write(src_parent) or not can_write(dst_parent):
            raise fs_error(ErrorKind.PERMISSION_DENIED, src, dst)

        del src_parent.children[src.name]
        dst_parent.children[dst.name] = node

    def list_children(self, path: PurePosixPath) -> list[tuple[str, NodeKind]]:
        """List a directory's entries sorted by name.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is a file.
            PermissionError: If the directory is not readable.
        """
        directory = self.resolve_dir(path)
        if not can_read(directory):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)
        return sorted((name, child.kind) for name, child in directory.children.items())

    def copy(self, src: PurePosixPath, dst: PurePosixPath) -> None:
        """Insert an independent deep copy of the subtree at ``src`` at ``dst``.

        Raises:
            FileNotFoundError: If ``src`` does not exist.
            PermissionError: If something under ``src`` is not readable.
            Any error of `insert()` for ``dst``.
        """
        node = self.resolve(src)
        self._check_readable(node, src)
        self.insert(dst, node.clone())

    def _destination_parent(self, path: PurePosixPath) -> DirNode:
        """Resolve the directory a new entry at ``path`` would live in."""
        try:
            parent = self.resolve(path.parent)
        except FileNotFoundError as e:
            raise fs_error(ErrorKind.PARENT_MISSING, path) from e
        if not isinstance(parent, DirNode):
            raise fs_error(ErrorKind.NOT_A_DIRECTORY, path)
        return parent

    def _check_removable(self, directory: DirNode, path: PurePosixPath) -> None:
        # Each directory must be listable; populated ones must also be writable.
        if not can_read(directory):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)
        if directory.children and not can_write(directory):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)
        for name, child in directory.children.items():
            if isinstance(child, DirNode):
                self._check_removable(child, path / name)

    def _check_readable(self, node: Node, path: PurePosixPath) -> None:
        if not can_read(node):
            raise fs_error(ErrorKind.PERMISSION_DENIED, path)
        if isinstance(node, DirNode):
            for name, child in node.children.items():
                self._check_readable(child, path / name)
