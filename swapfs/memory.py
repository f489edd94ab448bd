"""In-memory filesystem implementation."""

from __future__ import annotations

import logging
import posixpath

from .base import O_CREAT, O_EXCL, O_RDONLY, O_RDWR, O_TRUNC, FileInfo
from .errors import (
    AlreadyExists,
    InvalidOperation,
    NonEmptyDirectory,
    NotADirectory,
    NotARegularFile,
    NotASymlink,
    NotFound,
    OutOfBounds,
)
from .handle import MemoryFile
from .node import Node
from .resolver import DEFAULT_MAX_SYMLINK_DEPTH, PathResolver

logger = logging.getLogger(__name__)


class MemoryFS:
    """In-memory filesystem with POSIX-like semantics.

    Holds a tree of ``Node`` objects rooted at "/" plus a working directory.
    Each instance is independent, so tests can run against as many trees as
    they like without touching disk.

    Example:
        >>> fs = MemoryFS()
        >>> fs.makedirs("/data")
        >>> with fs.create("/data/a.txt") as f:
        ...     f.write(b"hello")
        5
        >>> fs.stat("/data/a.txt").size
        5
    """

    def __init__(self, cwd: str = "/", max_symlink_depth: int = DEFAULT_MAX_SYMLINK_DEPTH):
        """Create an empty filesystem.

        Args:
            cwd: Initial working directory; created if missing.
            max_symlink_depth: How many symlinks a single lookup may
                dereference before failing with ``TooManyLinks``.
        """
        self.root = Node.directory("", 0o755)
        self._cwd = "/"
        self._resolver = PathResolver(self.root, self.getcwd, max_symlink_depth)
        if cwd != "/":
            self.makedirs(cwd, 0o755)
            self.chdir(cwd)

    # -------------------------------------------------------------------------
    # Working Directory
    # -------------------------------------------------------------------------

    def getcwd(self) -> str:
        return self._cwd

    def chdir(self, path: str) -> None:
        """Change the working directory.

        Raises:
            NotFound: Path doesn't exist.
            NotADirectory: Path isn't a directory.
        """
        node = self._resolver.lookup(path, op="chdir")
        if not node.is_dir:
            raise NotADirectory("chdir", path)
        self._cwd = self._resolver.abspath(path)
        logger.debug("chdir %s", self._cwd)

    def abspath(self, path: str) -> str:
        """Absolute, normalized form of ``path``."""
        return self._resolver.abspath(path)

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def stat(self, path: str) -> FileInfo:
        node = self._resolver.lookup(path, op="stat")
        return FileInfo.from_node(node, self._basename(path))

    def lstat(self, path: str) -> FileInfo:
        node = self._resolver.lookup(path, follow=False, op="lstat")
        return FileInfo.from_node(node, self._basename(path))

    def chmod(self, path: str, mode: int) -> None:
        """Replace the permission bits of ``path`` (following symlinks)."""
        self._resolver.lookup(path, op="chmod").chmod(mode)

    def _basename(self, path: str) -> str:
        return posixpath.basename(self._resolver.abspath(path)) or "/"

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        """Create a directory; succeed quietly if one is already there.

        Raises:
            NotFound: Parent doesn't exist.
            NotADirectory: Parent isn't a directory.
            AlreadyExists: Something other than a directory occupies ``path``.
        """
        parent, name, abs_path = self._resolver.lookup_parent(path, op="mkdir")
        if not name:
            return
        existing = parent.get(name)
        if existing is not None:
            if existing.is_dir:
                return
            raise AlreadyExists("mkdir", abs_path)
        parent.attach(Node.directory(name, mode))
        logger.debug("mkdir %s", abs_path)

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        """Create ``path`` and every missing ancestor with permission ``mode``.

        Existing directories (or symlinks to directories) along the way are
        reused.

        Raises:
            AlreadyExists: A component exists and isn't a directory.
        """
        abs_path = self._resolver.abspath(path)
        node = self.root
        walked = ""
        for part in abs_path.strip("/").split("/"):
            if not part:
                continue
            walked += "/" + part
            child = node.get(part)
            if child is None:
                child = Node.directory(part, mode)
                node.attach(child)
                logger.debug("mkdir %s", walked)
            elif child.is_symlink:
                try:
                    child = self._resolver.lookup(walked, op="makedirs")
                except NotFound:
                    raise AlreadyExists("makedirs", walked) from None
            if not child.is_dir:
                raise AlreadyExists("makedirs", walked)
            node = child

    def opendir(self, path: str) -> MemoryFile:
        """Open a directory for listing with ``readdir``."""
        node = self._resolver.lookup(path, op="opendir")
        if not node.is_dir:
            raise NotADirectory("opendir", path)
        return MemoryFile(node, self._resolver.abspath(path))

    def listdir(self, path: str = ".") -> list[str]:
        """Names of the entries in a directory, sorted."""
        with self.opendir(path) as d:
            return sorted(info.name for info in d.readdir())

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def open(self, path: str) -> MemoryFile:
        """Open an existing file read-only."""
        return self.open_file(path, O_RDONLY)

    def create(self, path: str) -> MemoryFile:
        """Create or truncate a file and open it read-write."""
        return self.open_file(path, O_RDWR | O_CREAT | O_TRUNC, 0o666)

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> MemoryFile:
        """Open a regular file with ``os.open``-style flags.

        Args:
            path: File path.
            flags: Bitwise OR of ``O_RDONLY``/``O_WRONLY``/``O_RDWR`` and any
                of ``O_CREAT``, ``O_EXCL``, ``O_TRUNC``, ``O_APPEND``.
            mode: Permission bits for a newly created file.

        Returns:
            An open ``MemoryFile``. With ``O_APPEND`` its cursor starts at end
            of data, otherwise at 0.

        Raises:
            NotFound: File (or a parent) is missing and ``O_CREAT`` isn't set.
            NotADirectory: A parent component isn't a directory.
            AlreadyExists: ``O_CREAT | O_EXCL`` and the path exists.
            NotARegularFile: The path resolves to a directory.
        """
        if flags & O_CREAT:
            parent, name, abs_path = self._resolver.lookup_parent(path, op="open")
            node = parent.get(name) if name else self.root
            if node is None:
                node = Node.file(name, mode)
                parent.attach(node)
                logger.debug("create %s", abs_path)
            elif flags & O_EXCL:
                raise AlreadyExists("open", abs_path)
            elif node.is_symlink:
                node = self._resolver.lookup(abs_path, op="open")
        else:
            abs_path = self._resolver.abspath(path)
            node = self._resolver.lookup(abs_path, op="open")

        if not node.is_file:
            raise NotARegularFile("open", abs_path)
        if flags & O_TRUNC:
            node.resize(0)
        return MemoryFile(node, abs_path, flags)

    def truncate(self, path: str, length: int) -> None:
        """Resize a file, zero-padding when it grows.

        Raises:
            NotARegularFile: Path isn't a regular file.
            OutOfBounds: ``length`` is negative.
        """
        node = self._resolver.lookup(path, op="truncate")
        if not node.is_file:
            raise NotARegularFile("truncate", path)
        if length < 0:
            raise OutOfBounds("truncate", path)
        node.resize(length)
        logger.debug("truncate %s to %d", path, length)

    # -------------------------------------------------------------------------
    # Symlinks
    # -------------------------------------------------------------------------

    def symlink(self, target: str, link_path: str) -> None:
        """Create ``link_path`` pointing at ``target``.

        The target is stored as an absolute path and doesn't need to exist.

        Raises:
            AlreadyExists: ``link_path`` is taken.
            NotADirectory: The link's parent isn't a directory.
        """
        parent, name, abs_path = self._resolver.lookup_parent(link_path, op="symlink")
        if not name or parent.get(name) is not None:
            raise AlreadyExists("symlink", abs_path)
        parent.attach(Node.symlink(name, self._resolver.abspath(target)))
        logger.debug("symlink %s -> %s", abs_path, target)

    def readlink(self, path: str) -> str:
        node = self._resolver.lookup(path, follow=False, op="readlink")
        if not node.is_symlink:
            raise NotASymlink("readlink", path)
        return node.target

    # -------------------------------------------------------------------------
    # Removal and renaming
    # -------------------------------------------------------------------------

    def remove(self, path: str) -> None:
        """Remove a file, symlink or empty directory.

        Raises:
            NotFound: Nothing at ``path``.
            NonEmptyDirectory: ``path`` is a directory with children.
        """
        parent, name, abs_path = self._resolver.lookup_parent(path, op="remove")
        if not name:
            raise InvalidOperation("remove", abs_path)
        node = parent.get(name)
        if node is None:
            raise NotFound("remove", abs_path)
        if node.children:
            raise NonEmptyDirectory("remove", abs_path)
        parent.detach(name)
        logger.debug("remove %s", abs_path)

    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything below it.

        A path that doesn't exist is not an error.
        """
        try:
            parent, name, abs_path = self._resolver.lookup_parent(path, op="remove_all")
        except (NotFound, NotADirectory):
            return
        if not name:
            raise InvalidOperation("remove_all", abs_path)
        node = parent.get(name)
        if node is None:
            return
        self._clear(node)
        if parent.get(name) is node:
            parent.detach(name)
        logger.debug("remove_all %s", abs_path)

    def _clear(self, node: Node) -> None:
        if not node.children:
            return
        for name, child in list(node.children.items()):
            self._clear(child)
            if node.children.get(name) is child:
                node.detach(name)

    def rename(self, src: str, dst: str) -> None:
        """Move ``src`` to ``dst``, replacing ``dst`` under POSIX rules.

        A file may replace a file, and a directory may replace an empty
        directory.

        Raises:
            NotFound: ``src`` doesn't exist.
            NotADirectory: A parent isn't a directory, or a directory would
                replace a non-directory.
            NotARegularFile: A non-directory would replace a directory.
            NonEmptyDirectory: ``dst`` is a directory with children.
            InvalidOperation: Moving the root, or a directory into itself.
        """
        src_parent, src_name, src_abs = self._resolver.lookup_parent(src, op="rename")
        dst_parent, dst_name, dst_abs = self._resolver.lookup_parent(dst, op="rename")
        if not src_name or not dst_name:
            raise InvalidOperation("rename", src_abs if not src_name else dst_abs)
        node = src_parent.get(src_name)
        if node is None:
            raise NotFound("rename", src_abs)
        if node.is_dir and node.is_ancestor_of(dst_parent):
            raise InvalidOperation("rename", dst_abs)

        existing = dst_parent.get(dst_name)
        if existing is node:
            return
        if existing is not None:
            if existing.is_dir and not node.is_dir:
                raise NotARegularFile("rename", dst_abs)
            if node.is_dir and not existing.is_dir:
                raise NotADirectory("rename", dst_abs)
            if existing.children:
                raise NonEmptyDirectory("rename", dst_abs)

        src_parent.detach(src_name)
        dst_parent.attach(node, dst_name)
        logger.debug("rename %s -> %s", src_abs, dst_abs)
