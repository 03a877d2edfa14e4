"""Filesystem backend selection.

This module separates object creation from object use: callers ask for a
backend by name and receive it typed as the `FileSystem` protocol, so the same
code runs against the host OS or the in-memory fake.
"""

from __future__ import annotations

from typing import Callable

from file_objects.fake import FakeFileSystem
from file_objects.filesystem import RealFileSystem
from file_objects.protocols import FileSystem

FILESYSTEMS: dict[str, Callable[[], FileSystem]] = {
    "os": RealFileSystem.create_default,
    "fake": FakeFileSystem.create_default,
}

DEFAULT_FILESYSTEM = "os"


def get_filesystem(name: str = DEFAULT_FILESYSTEM) -> FileSystem:
    """Get a fresh filesystem instance by name.

    Args:
        name: Backend name (os, fake).

    Returns:
        FileSystem instance.

    Raises:
        ValueError: If backend name is unknown.
    """
    if name not in FILESYSTEMS:
        raise ValueError(f"Unknown filesystem: {name}. Supported: {list(FILESYSTEMS.keys())}")

    return FILESYSTEMS[name]()
