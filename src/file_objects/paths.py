"""Path normalization for the in-memory filesystem."""

from __future__ import annotations

import os
from pathlib import PurePosixPath

from file_objects.errors import ErrorKind, fs_error

__all__ = ["ROOT", "StrPath", "components", "normalize"]

StrPath = str | os.PathLike[str]

ROOT = PurePosixPath("/")


def normalize(path: StrPath, cwd: PurePosixPath = ROOT) -> PurePosixPath:
    """Normalize a path to an absolute, dot-free POSIX path.

    Relative paths are joined to ``cwd``. ``.`` components are dropped and
    ``..`` removes the previous component; it never climbs above the root.

    Args:
        path: Path to normalize.
        cwd: Absolute directory that relative paths are resolved against.

    Returns:
        The normalized absolute path.

    Raises:
        FileNotFoundError: If the path is empty.
    """
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        raw = os.fsdecode(raw)
    if not raw:
        raise fs_error(ErrorKind.NOT_FOUND, raw)

    candidate = PurePosixPath(raw)
    if not candidate.is_absolute():
        candidate = cwd / candidate

    parts: list[str] = []
    for part in candidate.parts[1:]:
        if part == "..":
            if parts:
                parts.pop()
        elif part != ".":
            parts.append(part)
    return ROOT.joinpath(*parts)


def components(path: PurePosixPath) -> tuple[str, ...]:
    """Split a normalized path into its names below the root."""
    return path.parts[1:]
