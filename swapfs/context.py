"""Context-local selection of the active filesystem.

Code that doesn't receive a filesystem explicitly asks ``get_fs()`` for
one. Tests install a ``MemoryFS`` with ``use_fs()``; everything else gets
the real OS.
"""

import contextvars
from contextlib import contextmanager
from typing import Any, Iterator

# Context variable holding the current filesystem
current_fs: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "swapfs_current_fs", default=None
)

_os_fs: Any = None


def get_fs() -> Any:
    """Return the filesystem installed by ``use_fs``, or a shared ``OSFS``."""
    fs = current_fs.get()
    if fs is not None:
        return fs
    global _os_fs
    if _os_fs is None:
        from .osfs import OSFS

        _os_fs = OSFS()
    return _os_fs


@contextmanager
def use_fs(fs: Any) -> Iterator[Any]:
    """Make ``fs`` the current filesystem for the duration of the block.

    Example::

        fs = MemoryFS()
        with use_fs(fs):
            write_file("/config.toml", b"debug = true")
        assert fs.stat("/config.toml").size == 12
    """
    token = current_fs.set(fs)
    try:
        yield fs
    finally:
        current_fs.reset(token)
