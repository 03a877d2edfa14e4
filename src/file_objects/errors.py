"""Error taxonomy shared by the real and fake filesystems.

Both implementations raise exceptions from the builtin ``OSError`` hierarchy,
so callers keep writing ``except FileNotFoundError:``. Two conditions the
builtins cannot express get dedicated subclasses:

- ``ParentMissingError``: the parent of a create/rename/copy destination is
  absent. It is still a ``FileNotFoundError``.
- ``DirectoryNotEmptyError``: a non-recursive removal (or a rename onto) a
  populated directory.

Use ``error_kind()`` to compare failures across implementations.
"""

from __future__ import annotations

import errno
import io
import os
import shutil
from enum import Enum

__all__ = [
    "DirectoryNotEmptyError",
    "ErrorKind",
    "ParentMissingError",
    "error_kind",
    "fs_error",
]


class ErrorKind(str, Enum):
    """Kinds of filesystem failure, independent of implementation."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_A_FILE = "not_a_file"
    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    PARENT_MISSING = "parent_missing"
    PERMISSION_DENIED = "permission_denied"
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED = "unsupported"
    OTHER = "other"


class ParentMissingError(FileNotFoundError):
    """The parent directory of a destination path does not exist."""

    pass


class DirectoryNotEmptyError(OSError):
    """A directory still has entries."""

    pass


_ERRNO_KINDS: dict[int, ErrorKind] = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno.EISDIR: ErrorKind.NOT_A_FILE,
    errno.ENOTEMPTY: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.EINVAL: ErrorKind.INVALID_INPUT,
}

_KIND_ERRORS: dict[ErrorKind, tuple[type[OSError], int]] = {
    ErrorKind.NOT_FOUND: (FileNotFoundError, errno.ENOENT),
    ErrorKind.ALREADY_EXISTS: (FileExistsError, errno.EEXIST),
    ErrorKind.NOT_A_DIRECTORY: (NotADirectoryError, errno.ENOTDIR),
    ErrorKind.NOT_A_FILE: (IsADirectoryError, errno.EISDIR),
    ErrorKind.DIRECTORY_NOT_EMPTY: (DirectoryNotEmptyError, errno.ENOTEMPTY),
    ErrorKind.PARENT_MISSING: (ParentMissingError, errno.ENOENT),
    ErrorKind.PERMISSION_DENIED: (PermissionError, errno.EACCES),
    ErrorKind.INVALID_INPUT: (OSError, errno.EINVAL),
}


def fs_error(
    kind: ErrorKind, path: str | os.PathLike[str], path2: str | os.PathLike[str] | None = None
) -> OSError:
    """Build the exception for an error kind.

    Args:
        kind: Kind of failure. ``UNSUPPORTED`` and ``OTHER`` have no errno and
            are not accepted.
        path: Path the failure is about.
        path2: Second path for two-path operations (rename, copy).

    Returns:
        An ``OSError`` subclass instance carrying errno, message and filenames.

    Raises:
        ValueError: If the kind cannot be built from an errno.
    """
    if kind not in _KIND_ERRORS:
        raise ValueError(f"No errno for error kind: {kind.value}")

    error_class, code = _KIND_ERRORS[kind]
    filename2 = os.fspath(path2) if path2 is not None else None
    return error_class(code, os.strerror(code), os.fspath(path), None, filename2)


def error_kind(exc: BaseException) -> ErrorKind:
    """Classify an exception raised by either filesystem.

    Args:
        exc: The exception to classify.

    Returns:
        The matching ErrorKind, ``OTHER`` when nothing matches.
    """
    if isinstance(exc, ParentMissingError):
        return ErrorKind.PARENT_MISSING
    if isinstance(exc, DirectoryNotEmptyError):
        return ErrorKind.DIRECTORY_NOT_EMPTY
    if isinstance(exc, io.UnsupportedOperation):
        return ErrorKind.UNSUPPORTED
    if isinstance(exc, shutil.SameFileError):
        return ErrorKind.INVALID_INPUT
    if isinstance(exc, OSError) and exc.errno is not None:
        return _ERRNO_KINDS.get(exc.errno, ErrorKind.OTHER)
    return ErrorKind.OTHER
