"""Convenience helpers built on the ``FileSystem`` contract.

Each helper takes an optional ``fs``; without one it uses ``get_fs()``.
"""

from __future__ import annotations

from typing import Any

from .base import O_CREAT, O_TRUNC, O_WRONLY, FileInfo
from .context import get_fs
from .errors import ShortWrite

_CHUNK_SIZE = 64 * 1024


def read_file(path: str, fs: Any = None) -> bytes:
    """Read a whole file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    fs = fs if fs is not None else get_fs()
    chunks = []
    with fs.open(path) as f:
        while chunk := f.read(_CHUNK_SIZE):
            chunks.append(chunk)
    return b"".join(chunks)


def write_file(path: str, data: bytes, mode: int = 0o666, fs: Any = None) -> None:
    """Create or replace a file with ``data``.

    Raises:
        TypeError: If data is not bytes.
        ShortWrite: If the file accepted fewer bytes than given.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, got {type(data).__name__}")
    fs = fs if fs is not None else get_fs()
    with fs.open_file(path, O_WRONLY | O_CREAT | O_TRUNC, mode) as f:
        written = f.write(data)
        if written < len(data):
            raise ShortWrite(path, written, len(data))


def read_dir(path: str, fs: Any = None) -> list[FileInfo]:
    """List a directory's entries sorted by name."""
    fs = fs if fs is not None else get_fs()
    with fs.opendir(path) as d:
        entries = d.readdir(-1)
    return sorted(entries, key=lambda info: info.name)


def file_exists(path: str, fs: Any = None) -> bool:
    """True if ``path`` is a regular file; any stat error counts as absent."""
    fs = fs if fs is not None else get_fs()
    try:
        return fs.stat(path).is_file
    except OSError:
        return False


def dir_exists(path: str, fs: Any = None) -> bool:
    """True if ``path`` is a directory; any stat error counts as absent."""
    fs = fs if fs is not None else get_fs()
    try:
        return fs.stat(path).is_dir
    except OSError:
        return False
