"""Pass-through filesystem backed by the real OS.

Every call goes straight to ``os``; errors are the native ``OSError``
subclasses, which the swapfs error kinds also derive from.
"""

from __future__ import annotations

import os
import shutil

from .base import O_CREAT, O_RDONLY, O_RDWR, O_TRUNC, SEEK_SET, FileInfo
from .errors import Closed, NotADirectory, NotARegularFile


class OSFile:
    """File handle wrapping a real OS file descriptor."""

    def __init__(
        self,
        path: str,
        flags: int = O_RDONLY,
        mode: int = 0o666,
        *,
        directory: bool = False,
    ):
        """Open ``path`` with ``os.open`` flags, or as a directory for ``readdir``."""
        self._path = os.path.abspath(path)
        self._is_dir = directory
        self._closed = False
        if directory:
            if not os.path.isdir(self._path):
                raise NotADirectory("opendir", path)
            self._fd = -1
        else:
            self._fd = os.open(self._path, flags, mode)

    @property
    def name(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise Closed(self._path)

    def _fileno(self) -> int:
        self._check_open()
        if self._is_dir:
            raise NotARegularFile("read", self._path)
        return self._fd

    def fileno(self) -> int:
        return self._fileno()

    def read(self, size: int = -1) -> bytes:
        fd = self._fileno()
        if size is None or size < 0:
            chunks = []
            while chunk := os.read(fd, 64 * 1024):
                chunks.append(chunk)
            return b"".join(chunks)
        return os.read(fd, size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        return os.readv(self._fileno(), [buffer])

    def write(self, data: bytes) -> int:
        return os.write(self._fileno(), data)

    def seek(self, offset: int, whence: int = SEEK_SET) -> int:
        return os.lseek(self._fileno(), offset, whence)

    def tell(self) -> int:
        return os.lseek(self._fileno(), 0, os.SEEK_CUR)

    def truncate(self, size: int | None = None) -> int:
        fd = self._fileno()
        if size is None:
            size = self.tell()
        os.ftruncate(fd, size)
        return size

    def chmod(self, mode: int) -> None:
        self._check_open()
        os.chmod(self._path, mode)

    def stat(self) -> FileInfo:
        self._check_open()
        st = os.fstat(self._fd) if not self._is_dir else os.stat(self._path)
        return FileInfo.from_stat(self._path, st)

    def readdir(self, n: int = -1) -> list[FileInfo]:
        self._check_open()
        if not self._is_dir:
            raise NotADirectory("readdir", self._path)
        entries = []
        with os.scandir(self._path) as it:
            for entry in it:
                if 0 < n <= len(entries):
                    break
                entries.append(
                    FileInfo.from_stat(entry.path, entry.stat(follow_symlinks=False))
                )
        return entries

    def sync(self) -> None:
        self._check_open()
        if not self._is_dir:
            os.fsync(self._fileno())

    def flush(self) -> None:
        self._check_open()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._is_dir:
            os.close(self._fd)

    def __enter__(self) -> OSFile:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<OSFile name={self._path!r}>"


class OSFS:
    """``FileSystem`` implementation that delegates to the host OS."""

    def stat(self, path: str) -> FileInfo:
        return FileInfo.from_stat(path, os.stat(path))

    def lstat(self, path: str) -> FileInfo:
        return FileInfo.from_stat(path, os.lstat(path))

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        os.chdir(path)

    def abspath(self, path: str) -> str:
        return os.path.abspath(path)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def symlink(self, target: str, link_path: str) -> None:
        os.symlink(target, link_path)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        try:
            os.mkdir(path, mode)
        except FileExistsError:
            if not os.path.isdir(path) or os.path.islink(path):
                raise

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        os.makedirs(path, mode, exist_ok=True)

    def open(self, path: str) -> OSFile:
        return OSFile(path, O_RDONLY)

    def create(self, path: str) -> OSFile:
        return OSFile(path, O_RDWR | O_CREAT | O_TRUNC, 0o666)

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> OSFile:
        return OSFile(path, flags, mode)

    def opendir(self, path: str) -> OSFile:
        return OSFile(path, directory=True)

    def listdir(self, path: str = ".") -> list[str]:
        return sorted(os.listdir(path))

    def truncate(self, path: str, length: int) -> None:
        os.truncate(path, length)

    def remove(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)

    def remove_all(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            try:
                shutil.rmtree(path)
            except FileNotFoundError:
                pass
        else:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass

    def rename(self, src: str, dst: str) -> None:
        os.rename(src, dst)
