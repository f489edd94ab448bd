"""swapfs: Pluggable filesystem abstraction with an in-memory implementation."""

from .base import (
    O_ACCMODE,
    O_APPEND,
    O_CREAT,
    O_EXCL,
    O_RDONLY,
    O_RDWR,
    O_TRUNC,
    O_WRONLY,
    SEEK_CUR,
    SEEK_END,
    SEEK_SET,
    File,
    FileInfo,
    FileSystem,
)
from .config import FSConfig, MemoryFSConfig, OSFSConfig, connect_fs, open_fs
from .context import current_fs, get_fs, use_fs
from .errors import (
    AlreadyExists,
    Closed,
    FSError,
    InvalidOperation,
    NonEmptyDirectory,
    NotADirectory,
    NotARegularFile,
    NotASymlink,
    NotFound,
    OutOfBounds,
    ShortWrite,
    TooManyLinks,
)
from .handle import MemoryFile
from .helpers import dir_exists, file_exists, read_dir, read_file, write_file
from .memory import MemoryFS
from .node import Node, NodeKind
from .osfs import OSFS, OSFile

__all__ = [
    "AlreadyExists",
    "Closed",
    "connect_fs",
    "current_fs",
    "dir_exists",
    "File",
    "file_exists",
    "FileInfo",
    "FileSystem",
    "FSConfig",
    "FSError",
    "get_fs",
    "InvalidOperation",
    "MemoryFile",
    "MemoryFS",
    "MemoryFSConfig",
    "Node",
    "NodeKind",
    "NonEmptyDirectory",
    "NotADirectory",
    "NotARegularFile",
    "NotASymlink",
    "NotFound",
    "O_ACCMODE",
    "O_APPEND",
    "O_CREAT",
    "O_EXCL",
    "O_RDONLY",
    "O_RDWR",
    "O_TRUNC",
    "O_WRONLY",
    "open_fs",
    "OSFile",
    "OSFS",
    "OSFSConfig",
    "OutOfBounds",
    "read_dir",
    "read_file",
    "SEEK_CUR",
    "SEEK_END",
    "SEEK_SET",
    "ShortWrite",
    "TooManyLinks",
    "use_fs",
    "write_file",
]
