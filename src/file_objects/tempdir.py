"""Scoped temporary directories for either filesystem."""

from __future__ import annotations

import logging
from pathlib import PurePath
from types import TracebackType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from file_objects.protocols import FileSystem

logger = logging.getLogger(__name__)

DEFAULT_TEMP_PREFIX = "file-objects-"


class TempDir:
    """A uniquely named directory removed, with its contents, on cleanup.

    Use as a context manager, or call `cleanup()` explicitly. Cleanup is
    idempotent and tolerates the directory having been removed already.
    """

    def __init__(self, filesystem: FileSystem, path: PurePath) -> None:
        """Initialize a temporary directory record.

        Args:
            filesystem: Filesystem the directory lives on.
            path: Path of the already created directory.
        """
        self.filesystem = filesystem
        self.path = path
        self._cleaned = False

    def __repr__(self) -> str:
        return f"<TempDir {str(self.path)!r}>"

    def __enter__(self) -> TempDir:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        """Remove the directory tree."""
        if self._cleaned:
            return
        self._cleaned = True
        if self.filesystem.is_dir(self.path):
            logger.debug("Removing temporary directory %s", self.path)
            self.filesystem.remove_dir_all(self.path)
