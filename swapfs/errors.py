"""Typed errors raised by swapfs filesystems.

Each error kind subclasses the Python builtin that ``os`` would raise for
the same condition, so callers can catch ``FileNotFoundError`` and friends
regardless of whether they are talking to ``MemoryFS`` or ``OSFS``.
"""

from __future__ import annotations

import errno


class FSError(OSError):
    """Base class for filesystem-level errors.

    Attributes:
        op: Name of the operation that failed (e.g. "open", "rename").
        path: Path the operation was acting on.
    """

    code = errno.EIO
    reason = "I/O error"

    def __init__(self, op: str, path: str, reason: str | None = None):
        self.op = op
        self.path = path
        super().__init__(self.code, reason or self.reason, path)

    def __str__(self) -> str:
        return f"{self.op} {self.path}: {self.strerror}"


class NotFound(FSError, FileNotFoundError):
    code = errno.ENOENT
    reason = "no such file or directory"


class NotADirectory(FSError, NotADirectoryError):
    code = errno.ENOTDIR
    reason = "not a directory"


class NotARegularFile(FSError, IsADirectoryError):
    code = errno.EISDIR
    reason = "not a regular file"


class NotASymlink(FSError):
    code = errno.EINVAL
    reason = "not a symbolic link"


class AlreadyExists(FSError, FileExistsError):
    code = errno.EEXIST
    reason = "file exists"


class NonEmptyDirectory(FSError):
    code = errno.ENOTEMPTY
    reason = "directory not empty"


class OutOfBounds(FSError):
    code = errno.EINVAL
    reason = "offset out of bounds"


class TooManyLinks(FSError):
    code = errno.ELOOP
    reason = "too many levels of symbolic links"


class InvalidOperation(FSError):
    code = errno.EINVAL
    reason = "invalid argument"


class Closed(ValueError):
    """Raised by any operation on a closed file handle."""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__(f"I/O operation on closed file: {name}")


class ShortWrite(OSError):
    """Fewer bytes were written than requested."""

    def __init__(self, path: str, written: int, expected: int):
        self.written = written
        self.expected = expected
        super().__init__(
            errno.EIO, f"short write: {written} of {expected} bytes", path
        )
