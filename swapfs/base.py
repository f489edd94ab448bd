"""Filesystem interfaces, metadata snapshot and open flags.

Defines the capability contracts shared by every implementation
(``MemoryFS``, ``OSFS``) and the ``FileInfo`` snapshot returned by
``stat()``-style calls.
"""

from __future__ import annotations

import os
import posixpath
import stat as stat_mod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .node import Node, NodeKind

# open() flags; plain POSIX bitmasks
O_RDONLY = os.O_RDONLY
O_WRONLY = os.O_WRONLY
O_RDWR = os.O_RDWR
O_ACCMODE = O_RDONLY | O_WRONLY | O_RDWR
O_CREAT = os.O_CREAT
O_EXCL = os.O_EXCL
O_TRUNC = os.O_TRUNC
O_APPEND = os.O_APPEND

SEEK_SET = os.SEEK_SET
SEEK_CUR = os.SEEK_CUR
SEEK_END = os.SEEK_END


@dataclass(frozen=True)
class FileInfo:
    """Metadata snapshot for a single entry.

    Attributes:
        name: Base name of the entry ("/" for the root).
        size: Size in bytes (target length for symlinks, 0 for directories).
        mode: Kind bits OR'd with permission bits, as in ``st_mode``.
    """

    name: str
    size: int
    mode: int

    @classmethod
    def from_node(cls, node: Node, name: str | None = None) -> FileInfo:
        return cls(name=name if name is not None else (node.name or "/"), size=node.size, mode=node.mode)

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> FileInfo:
        name = posixpath.basename(path.rstrip("/")) or "/"
        return cls(name=name, size=st.st_size, mode=st.st_mode)

    @property
    def kind(self) -> NodeKind | None:
        return NodeKind.from_mode(self.mode)

    @property
    def perm(self) -> int:
        return stat_mod.S_IMODE(self.mode)

    @property
    def is_dir(self) -> bool:
        return stat_mod.S_ISDIR(self.mode)

    @property
    def is_file(self) -> bool:
        return stat_mod.S_ISREG(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat_mod.S_ISLNK(self.mode)

    # os.stat_result-compatible properties

    @property
    def st_mode(self) -> int:
        return self.mode

    @property
    def st_size(self) -> int:
        return self.size

    @property
    def st_mtime(self) -> float:
        # Modification times are not tracked.
        return 0.0


@runtime_checkable
class File(Protocol):
    """An open file or directory handle."""

    @property
    def name(self) -> str: ...

    def read(self, size: int = -1) -> bytes: ...

    def readinto(self, buffer: bytearray | memoryview) -> int: ...

    def write(self, data: bytes) -> int: ...

    def seek(self, offset: int, whence: int = SEEK_SET) -> int: ...

    def tell(self) -> int: ...

    def truncate(self, size: int | None = None) -> int: ...

    def chmod(self, mode: int) -> None: ...

    def stat(self) -> FileInfo: ...

    def readdir(self, n: int = -1) -> list[FileInfo]: ...

    def sync(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class FileSystem(Protocol):
    """Filesystem capability shared by the in-memory and OS implementations."""

    def stat(self, path: str) -> FileInfo:
        """Metadata for ``path``, following symlinks."""
        ...

    def lstat(self, path: str) -> FileInfo:
        """Metadata for ``path`` without following a final symlink."""
        ...

    def getcwd(self) -> str: ...

    def chdir(self, path: str) -> None: ...

    def abspath(self, path: str) -> str: ...

    def chmod(self, path: str, mode: int) -> None: ...

    def readlink(self, path: str) -> str: ...

    def symlink(self, target: str, link_path: str) -> None: ...

    def mkdir(self, path: str, mode: int = 0o777) -> None: ...

    def makedirs(self, path: str, mode: int = 0o777) -> None: ...

    def open(self, path: str) -> File: ...

    def create(self, path: str) -> File: ...

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> File: ...

    def opendir(self, path: str) -> File: ...

    def listdir(self, path: str = ".") -> list[str]: ...

    def truncate(self, path: str, length: int) -> None: ...

    def remove(self, path: str) -> None: ...

    def remove_all(self, path: str) -> None: ...

    def rename(self, src: str, dst: str) -> None: ...
