"""Configuration for filesystem access.

Provides configuration dataclasses, the connect_fs factory function and
open_fs, which builds the filesystem a configuration describes.
"""

from dataclasses import dataclass
from typing import Literal

from .memory import MemoryFS
from .osfs import OSFS
from .resolver import DEFAULT_MAX_SYMLINK_DEPTH


@dataclass
class MemoryFSConfig:
    """Configuration for the in-memory filesystem.

    Attributes:
        type: Always "memory".
        cwd: Initial working directory (created if missing).
        max_symlink_depth: Symlinks a single lookup may dereference before
            failing with TooManyLinks.
    """

    type: Literal["memory"] = "memory"
    cwd: str = "/"
    max_symlink_depth: int = DEFAULT_MAX_SYMLINK_DEPTH


@dataclass
class OSFSConfig:
    """Configuration for the OS pass-through filesystem.

    Attributes:
        type: Always "os".
    """

    type: Literal["os"] = "os"


# Type alias for all filesystem configs
FSConfig = MemoryFSConfig | OSFSConfig


def connect_fs(
    type: Literal["memory", "os"] = "memory",
    **kwargs,
) -> FSConfig:
    """Configure filesystem access.

    Args:
        type: FileSystem type.
            - "memory": In-memory tree, isolated per instance.
            - "os": The host filesystem.
        **kwargs: Additional configuration for the filesystem type.
            For type="memory":
                - cwd (str): Optional. Initial working directory.
                - max_symlink_depth (int): Optional. Symlink dereference limit.

    Returns:
        FSConfig for open_fs().

    Examples:
        >>> connect_fs(type="memory", cwd="/work")
        MemoryFSConfig(type='memory', cwd='/work', max_symlink_depth=40)

        >>> connect_fs(type="os")
        OSFSConfig(type='os')
    """
    if type == "memory":
        cwd = kwargs.pop("cwd", "/")
        max_symlink_depth = kwargs.pop("max_symlink_depth", DEFAULT_MAX_SYMLINK_DEPTH)
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for memory fs: {list(kwargs.keys())}"
            )
        if not cwd.startswith("/"):
            raise ValueError(f"Memory fs cwd must be absolute: {cwd}")
        if max_symlink_depth < 0:
            raise ValueError("max_symlink_depth must not be negative")
        return MemoryFSConfig(cwd=cwd, max_symlink_depth=max_symlink_depth)

    elif type == "os":
        if kwargs:
            raise ValueError(f"Unexpected arguments for os fs: {list(kwargs.keys())}")
        return OSFSConfig()

    else:
        raise ValueError(f"Unsupported filesystem type: {type}. Use 'memory' or 'os'.")


def open_fs(config: FSConfig) -> MemoryFS | OSFS:
    """Build the filesystem described by ``config``."""
    if isinstance(config, MemoryFSConfig):
        return MemoryFS(cwd=config.cwd, max_symlink_depth=config.max_symlink_depth)
    if isinstance(config, OSFSConfig):
        return OSFS()
    raise ValueError(f"Unsupported filesystem config: {config!r}")
