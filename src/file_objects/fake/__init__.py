"""In-memory filesystem for deterministic tests."""

from __future__ import annotations

from .filesystem import TEMP_ROOT, FakeFileSystem
from .handle import FakeFileHandle
from .node import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, DirNode, FileNode, Node
from .tree import TreeStore

__all__ = [
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "DirNode",
    "FakeFileHandle",
    "FakeFileSystem",
    "FileNode",
    "Node",
    "TEMP_ROOT",
    "TreeStore",
]
