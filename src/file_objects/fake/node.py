"""Nodes of the in-memory tree."""

from __future__ import annotations

from file_objects.types import READ_BITS, WRITE_BITS, NodeKind

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755

# Reported size of every directory, like a single block on most filesystems.
DIR_SIZE = 4096


class FileNode:
    """A regular file: a content buffer plus permission bits."""

    __slots__ = ("content", "mode")

    kind = NodeKind.FILE

    def __init__(self, content: bytes = b"", mode: int = DEFAULT_FILE_MODE) -> None:
        self.content = bytearray(content)
        self.mode = mode

    @property
    def size(self) -> int:
        return len(self.content)

    def clone(self) -> FileNode:
        """Copy this file with an independent buffer."""
        return FileNode(bytes(self.content), self.mode)


class DirNode:
    """A directory: exclusively owns its children by name."""

    __slots__ = ("children", "mode")

    kind = NodeKind.DIR

    def __init__(self, mode: int = DEFAULT_DIR_MODE) -> None:
        self.children: dict[str, Node] = {}
        self.mode = mode

    @property
    def size(self) -> int:
        return DIR_SIZE

    def clone(self) -> DirNode:
        """Deep-copy this directory and everything below it."""
        copy = DirNode(self.mode)
        copy.children = {name: child.clone() for name, child in self.children.items()}
        return copy


Node = FileNode | DirNode


def can_read(node: Node) -> bool:
    return node.mode & READ_BITS != 0


def can_write(node: Node) -> bool:
    return node.mode & WRITE_BITS != 0


def set_readonly(node: Node, readonly: bool) -> None:
    """Clear or set every write bit of a node."""
    if readonly:
        node.mode &= ~WRITE_BITS
    else:
        node.mode |= WRITE_BITS
