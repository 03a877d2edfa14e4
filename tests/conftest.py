"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import PurePath

import pytest

from file_objects.context import FILESYSTEMS, get_filesystem
from file_objects.fake import FakeFileSystem
from file_objects.filesystem import RealFileSystem
from file_objects.protocols import FileSystem


def _running_as_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def _make_removable(fs: FileSystem, path: PurePath) -> None:
    """Restore permissive modes below a directory so it can be removed."""
    fs.set_mode(path, 0o755)
    for entry in fs.read_dir(path):
        if entry.is_dir():
            _make_removable(fs, entry.path)
        else:
            fs.set_mode(entry.path, 0o644)


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture(params=sorted(FILESYSTEMS))
def fs(request: pytest.FixtureRequest) -> FileSystem:
    """Provide each filesystem implementation in turn."""
    return get_filesystem(request.param)


@pytest.fixture
def root(fs: FileSystem) -> Iterator[PurePath]:
    """Provide a fresh, empty directory on the filesystem under test."""
    temp = fs.temp_dir()
    yield temp.path
    if fs.is_dir(temp.path):
        _make_removable(fs, temp.path)
    temp.cleanup()


@pytest.fixture
def enforces_permissions(fs: FileSystem) -> None:
    """Skip tests whose permission checks the current user bypasses."""
    if isinstance(fs, RealFileSystem) and _running_as_root():
        pytest.skip("root bypasses permission bits")


@pytest.fixture
def restore_cwd() -> Iterator[None]:
    """Restore the process working directory after the test."""
    cwd = os.getcwd()
    yield
    os.chdir(cwd)


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Create an empty in-memory filesystem."""
    return FakeFileSystem.create_default()
