"""Shared data types for file objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict

__all__ = ["DirEntry", "Metadata", "NodeKind", "OpenOptions"]

WRITE_BITS = 0o222
READ_BITS = 0o444


class NodeKind(str, Enum):
    """Kind of filesystem entry."""

    FILE = "file"
    DIR = "dir"


class OpenOptions(BaseModel):
    """Flags describing how a file is opened.

    Built from a binary mode string with `from_mode()`; the flag names follow
    the usual open(2) vocabulary.
    """

    model_config = ConfigDict(frozen=True)

    read: bool = False
    write: bool = False
    append: bool = False
    create: bool = False
    create_new: bool = False
    truncate: bool = False

    @classmethod
    def from_mode(cls, mode: str) -> OpenOptions:
        """Parse a binary open mode such as ``"rb"``, ``"ab"`` or ``"r+b"``.

        Args:
            mode: Mode string. Exactly one of ``r``, ``w``, ``a``, ``x``, a
                mandatory ``b`` and an optional ``+``.

        Returns:
            The matching OpenOptions.

        Raises:
            ValueError: If the mode is malformed or not binary.
        """
        chars = set(mode)
        if len(chars) != len(mode) or not chars <= set("rwaxb+"):
            raise ValueError(f"invalid mode: {mode!r}")
        if "b" not in chars:
            raise ValueError(f"only binary modes are supported: {mode!r}")

        primary = chars & set("rwax")
        if len(primary) != 1:
            raise ValueError(f"must have exactly one of read/write/append/create mode: {mode!r}")

        updating = "+" in chars
        (kind,) = primary
        if kind == "r":
            return cls(read=True, write=updating)
        if kind == "w":
            return cls(read=updating, write=True, create=True, truncate=True)
        if kind == "a":
            return cls(read=updating, write=True, append=True, create=True)
        return cls(read=updating, write=True, create_new=True)


class Metadata(BaseModel):
    """Information about a file or directory."""

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    size: int
    mode: int

    @property
    def is_file(self) -> bool:
        """True if this metadata describes a regular file."""
        return self.kind is NodeKind.FILE

    @property
    def is_dir(self) -> bool:
        """True if this metadata describes a directory."""
        return self.kind is NodeKind.DIR

    @property
    def readonly(self) -> bool:
        """True if no write bit is set."""
        return self.mode & WRITE_BITS == 0


@dataclass(frozen=True)
class DirEntry:
    """An entry returned by `read_dir()`.

    Attributes:
        name: Bare name of the entry.
        path: Directory path joined with the name.
        kind: File or directory.
    """

    name: str
    path: PurePath
    kind: NodeKind

    def is_file(self) -> bool:
        """True if the entry is a regular file."""
        return self.kind is NodeKind.FILE

    def is_dir(self) -> bool:
        """True if the entry is a directory."""
        return self.kind is NodeKind.DIR
