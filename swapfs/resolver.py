"""Path resolution over the in-memory tree."""

from __future__ import annotations

import posixpath
from typing import Callable

from .errors import NotADirectory, NotFound, TooManyLinks
from .node import Node

# Linux MAXSYMLINKS
DEFAULT_MAX_SYMLINK_DEPTH = 40


class PathResolver:
    """Turns path strings into nodes of one tree.

    Relative paths are joined onto the working directory returned by
    ``getcwd``. Intermediate symlinks are always dereferenced; whether a
    symlink in the final position is followed is up to the caller, which
    is what separates ``stat`` from ``lstat``.
    """

    def __init__(
        self,
        root: Node,
        getcwd: Callable[[], str],
        max_symlink_depth: int = DEFAULT_MAX_SYMLINK_DEPTH,
    ):
        self.root = root
        self._getcwd = getcwd
        self.max_symlink_depth = max_symlink_depth

    def abspath(self, path: str) -> str:
        """Resolve ``path`` against the working directory and normalize it."""
        if not path.startswith("/"):
            path = self._getcwd().rstrip("/") + "/" + path
        # normpath keeps a leading "//", POSIX allows it but we don't
        return "/" + posixpath.normpath(path).lstrip("/")

    def split(self, path: str) -> tuple[str, str]:
        """Split into (absolute parent path, base name)."""
        abs_path = self.abspath(path)
        return posixpath.dirname(abs_path), posixpath.basename(abs_path)

    def lookup(self, path: str, follow: bool = True, op: str = "lookup") -> Node:
        """Return the node at ``path``.

        Raises:
            NotFound: A component is missing.
            NotADirectory: A non-directory sits where a directory is needed.
            TooManyLinks: The lookup followed more symlinks than allowed.
        """
        return self._walk(self.abspath(path), follow, op)

    def lookup_parent(self, path: str, op: str = "lookup") -> tuple[Node, str, str]:
        """Resolve the directory that holds ``path``.

        Returns:
            ``(parent, name, abs_path)``. ``name`` is empty for the root.
        """
        abs_path = self.abspath(path)
        if abs_path == "/":
            return self.root, "", abs_path
        parent_path, name = posixpath.split(abs_path)
        parent = self._walk(parent_path, True, op)
        if not parent.is_dir:
            raise NotADirectory(op, parent_path)
        return parent, name, abs_path

    def _walk(self, abs_path: str, follow: bool, op: str) -> Node:
        node = self.root
        # components still to visit, last one on top
        pending = [p for p in reversed(abs_path.split("/")) if p]
        walked = ""
        links = 0
        while pending:
            part = pending.pop()
            if not node.is_dir:
                raise NotADirectory(op, walked or "/")
            child = node.get(part)
            if child is None:
                raise NotFound(op, abs_path)
            if child.is_symlink and (follow or pending):
                if links >= self.max_symlink_depth:
                    raise TooManyLinks(op, abs_path)
                links += 1
                # targets are stored absolute, so restart from the root
                pending.extend(p for p in reversed(child.target.split("/")) if p)
                node = self.root
                walked = ""
                continue
            walked += "/" + part
            node = child
        return node
