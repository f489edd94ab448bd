"""File handles onto in-memory nodes."""

from __future__ import annotations

import io

from .base import O_ACCMODE, O_APPEND, O_RDONLY, O_RDWR, O_WRONLY, SEEK_CUR, SEEK_END, SEEK_SET, FileInfo
from .errors import Closed, NotADirectory, NotARegularFile, OutOfBounds
from .node import Node


class MemoryFile:
    """File-like cursor onto a node of a ``MemoryFS``.

    The handle shares the node's byte buffer with the tree and with every
    other handle opened on the same node; writes are visible through all of
    them at once. A handle keeps working on its node after the node has been
    removed or renamed.

    Attributes:
        node: The node this handle reads and writes.
        cursor: Current byte offset.
    """

    def __init__(self, node: Node, path: str, flags: int = O_RDONLY):
        """Bind a handle to ``node``.

        Args:
            node: Regular file or directory node.
            path: Absolute path the node was opened under (for ``name``).
            flags: ``open()`` flags; only the access mode and ``O_APPEND``
                matter once the file is open.
        """
        self.node = node
        self._path = path
        self._closed = False
        access = flags & O_ACCMODE
        self._readable = access in (O_RDONLY, O_RDWR)
        self._writable = access in (O_WRONLY, O_RDWR)
        self._append = bool(flags & O_APPEND)
        self.cursor = node.size if self._append and node.is_file else 0

    @property
    def name(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def mode(self) -> str:
        if self._readable and self._writable:
            return "ab+" if self._append else "rb+"
        if self._writable:
            return "ab" if self._append else "wb"
        return "rb"

    def readable(self) -> bool:
        self._check_open()
        return self._readable

    def writable(self) -> bool:
        self._check_open()
        return self._writable

    def seekable(self) -> bool:
        self._check_open()
        return True

    def _check_open(self) -> None:
        if self._closed:
            raise Closed(self._path)

    def _data(self, op: str) -> bytearray:
        self._check_open()
        if self.node.data is None:
            raise NotARegularFile(op, self._path)
        return self.node.data

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Copy up to ``len(buffer)`` bytes from the cursor into ``buffer``.

        Returns:
            Number of bytes copied; 0 at end of data.
        """
        data = self._data("read")
        if not self._readable:
            raise io.UnsupportedOperation("read")
        if self.cursor >= len(data):
            return 0
        chunk = data[self.cursor : self.cursor + len(buffer)]
        n = len(chunk)
        buffer[:n] = chunk
        self.cursor += n
        return n

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining if negative); ``b""`` at end of data."""
        data = self._data("read")
        if not self._readable:
            raise io.UnsupportedOperation("read")
        if self.cursor >= len(data):
            return b""
        end = len(data) if size is None or size < 0 else self.cursor + size
        chunk = bytes(data[self.cursor : end])
        self.cursor += len(chunk)
        return chunk

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write ``data`` at the cursor.

        Bytes that land inside the buffer overwrite in place; the rest grow
        it. In append mode every write starts at the current end of data.
        A cursor left past the end (e.g. by another handle truncating) is
        zero-filled up to the write position.

        Returns:
            Number of bytes written.
        """
        buf = self._data("write")
        if not self._writable:
            raise io.UnsupportedOperation("write")
        if self._append:
            self.cursor = len(buf)
        elif self.cursor > len(buf):
            buf.extend(bytes(self.cursor - len(buf)))
        n = len(data)
        buf[self.cursor : self.cursor + n] = data
        self.cursor += n
        return n

    def seek(self, offset: int, whence: int = SEEK_SET) -> int:
        """Move the cursor and return the new position.

        Raises:
            OutOfBounds: The new position is negative or past the end of data.
        """
        data = self._data("seek")
        if whence == SEEK_SET:
            position = offset
        elif whence == SEEK_CUR:
            position = self.cursor + offset
        elif whence == SEEK_END:
            position = len(data) + offset
        else:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)")
        if position < 0 or position > len(data):
            raise OutOfBounds("seek", self._path)
        self.cursor = position
        return position

    def tell(self) -> int:
        self._check_open()
        return self.cursor

    def truncate(self, size: int | None = None) -> int:
        """Resize the file to ``size`` bytes (default: the cursor position).

        The cursor is left where it was.
        """
        self._data("truncate")
        if not self._writable:
            raise io.UnsupportedOperation("truncate")
        if size is None:
            size = self.cursor
        if size < 0:
            raise OutOfBounds("truncate", self._path)
        self.node.resize(size)
        return size

    def chmod(self, mode: int) -> None:
        self._check_open()
        self.node.chmod(mode)

    def stat(self) -> FileInfo:
        self._check_open()
        return FileInfo.from_node(self.node)

    def readdir(self, n: int = -1) -> list[FileInfo]:
        """List up to ``n`` children of a directory handle (all if ``n <= 0``).

        Entries come back in tree order, not sorted.
        """
        self._check_open()
        if self.node.children is None:
            raise NotADirectory("readdir", self._path)
        entries = []
        for child in self.node.children.values():
            if 0 < n <= len(entries):
                break
            entries.append(FileInfo.from_node(child))
        return entries

    def sync(self) -> None:
        self._check_open()

    def flush(self) -> None:
        self._check_open()

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> MemoryFile:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<MemoryFile name={self._path!r} mode={self.mode!r}>"
