"""File handles over in-memory file nodes."""

from __future__ import annotations

import io

from file_objects.errors import ErrorKind, fs_error
from file_objects.fake.node import FileNode
from file_objects.types import OpenOptions


class FakeFileHandle(io.RawIOBase):
    """A cursor into a `FileNode`'s content.

    Behaves like a binary file object returned by `open()`: it supports
    `read()`, `write()`, `seek()`, `tell()`, `truncate()` and the context
    manager protocol.

    The handle references the node itself, not its path. Writes land in the
    node's buffer and are visible to every other handle on the same node, and
    the handle keeps working after the path is removed, renamed or
    overwritten.
    """

    def __init__(self, node: FileNode, options: OpenOptions, name: str = "") -> None:
        """Initialize a handle.

        Args:
            node: The file node to operate on.
            options: Access flags the file was opened with. Truncation and
                creation are the opener's job and already happened.
            name: Path the file was opened by, used in error messages.
        """
        super().__init__()
        self._node = node
        self._options = options
        self._position = len(node.content) if options.append else 0
        self.name = name

    def __repr__(self) -> str:
        return f"<FakeFileHandle name={self.name!r} position={self._position}>"

    def readable(self) -> bool:
        return self._options.read

    def writable(self) -> bool:
        return self._options.write

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer``.

        Returns:
            Number of bytes read; 0 at or beyond the end of the content.
        """
        self._check_open()
        if not self._options.read:
            raise io.UnsupportedOperation("File not open for reading")

        content = self._node.content
        if self._position >= len(content):
            return 0

        view = memoryview(buffer).cast("B")
        chunk = content[self._position : self._position + len(view)]
        view[: len(chunk)] = chunk
        self._position += len(chunk)
        return len(chunk)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write ``data`` at the cursor, or at the end in append mode.

        Writing beyond the end of the content zero-fills the gap.

        Returns:
            Number of bytes written, always ``len(data)``.
        """
        self._check_open()
        if not self._options.write:
            raise io.UnsupportedOperation("File not open for writing")

        payload = memoryview(data).tobytes()
        content = self._node.content
        if self._options.append:
            self._position = len(content)
        if self._position > len(content):
            content.extend(bytes(self._position - len(content)))

        end = self._position + len(payload)
        content[self._position : end] = payload
        self._position = end
        return len(payload)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor.

        Positions past the end are allowed. A negative resulting position
        raises ``OSError`` (EINVAL) and leaves the cursor unchanged.

        Returns:
            The new absolute position.
        """
        self._check_open()
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._position + offset
        elif whence == io.SEEK_END:
            target = len(self._node.content) + offset
        else:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")

        if target < 0:
            raise fs_error(ErrorKind.INVALID_INPUT, self.name)
        self._position = target
        return target

    def tell(self) -> int:
        self._check_open()
        return self._position

    def truncate(self, size: int | None = None) -> int:
        """Shrink or zero-extend the content to ``size`` bytes.

        Defaults to the current position. The cursor does not move.

        Returns:
            The new size.
        """
        self._check_open()
        if not self._options.write:
            raise io.UnsupportedOperation("File not open for writing")

        if size is None:
            size = self._position
        if size < 0:
            raise fs_error(ErrorKind.INVALID_INPUT, self.name)

        content = self._node.content
        if size < len(content):
            del content[size:]
        else:
            content.extend(bytes(size - len(content)))
        return size

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
