"""Tree nodes for the in-memory filesystem."""

from __future__ import annotations

import enum
import stat as stat_mod
import weakref

from .errors import NotADirectory, NotARegularFile


class NodeKind(enum.Enum):
    """The three kinds of entry a virtual tree can hold."""

    FILE = stat_mod.S_IFREG
    DIRECTORY = stat_mod.S_IFDIR
    SYMLINK = stat_mod.S_IFLNK

    @classmethod
    def from_mode(cls, mode: int) -> NodeKind | None:
        """Map ``st_mode`` type bits to a kind, or None for other types."""
        try:
            return cls(stat_mod.S_IFMT(mode))
        except ValueError:
            return None


class Node:
    """One entry in the virtual tree.

    Directories own their children through ``children``; the ``parent``
    link is a weak reference used only to rebuild paths and to reparent
    on rename. Use the ``file``, ``directory`` and ``symlink`` factories
    rather than calling the constructor directly.
    """

    __slots__ = ("name", "kind", "perm", "children", "data", "target", "_parent", "__weakref__")

    def __init__(self, name: str, kind: NodeKind, perm: int):
        self.name = name
        self.kind = kind
        self.perm = stat_mod.S_IMODE(perm)
        self.children: dict[str, Node] | None = {} if kind is NodeKind.DIRECTORY else None
        self.data: bytearray | None = bytearray() if kind is NodeKind.FILE else None
        self.target: str | None = None
        self._parent: weakref.ref[Node] | None = None

    @classmethod
    def file(cls, name: str, perm: int) -> Node:
        return cls(name, NodeKind.FILE, perm)

    @classmethod
    def directory(cls, name: str, perm: int) -> Node:
        return cls(name, NodeKind.DIRECTORY, perm)

    @classmethod
    def symlink(cls, name: str, target: str) -> Node:
        node = cls(name, NodeKind.SYMLINK, 0o777)
        node.target = target
        return node

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_symlink(self) -> bool:
        return self.kind is NodeKind.SYMLINK

    @property
    def parent(self) -> Node | None:
        return self._parent() if self._parent is not None else None

    @property
    def mode(self) -> int:
        return self.kind.value | self.perm

    @property
    def size(self) -> int:
        if self.data is not None:
            return len(self.data)
        if self.target is not None:
            return len(self.target)
        return 0

    @property
    def path(self) -> str:
        """Full path rebuilt from the parent chain.

        A detached node reports the path it had relative to the topmost
        ancestor still reachable from it.
        """
        parts = []
        node: Node | None = self
        while node is not None:
            if node.name:
                parts.append(node.name)
            node = node.parent
        return "/" + "/".join(reversed(parts))

    def chmod(self, mode: int) -> None:
        """Replace the permission bits; the kind never changes."""
        self.perm = stat_mod.S_IMODE(mode)

    def get(self, name: str) -> Node | None:
        if self.children is None:
            return None
        return self.children.get(name)

    def attach(self, child: Node, name: str | None = None) -> None:
        """Insert ``child`` under this directory, replacing any entry of the same name."""
        if self.children is None:
            raise NotADirectory("attach", self.path)
        if name is not None:
            child.name = name
        previous = self.children.get(child.name)
        if previous is not None and previous is not child:
            previous._parent = None
        self.children[child.name] = child
        child._parent = weakref.ref(self)

    def detach(self, name: str) -> Node:
        """Remove and return the child called ``name``."""
        if self.children is None:
            raise NotADirectory("detach", self.path)
        child = self.children.pop(name)
        child._parent = None
        return child

    def is_ancestor_of(self, other: Node) -> bool:
        node: Node | None = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def resize(self, size: int) -> None:
        """Shrink by dropping trailing bytes or grow by zero padding."""
        if self.data is None:
            raise NotARegularFile("truncate", self.path)
        current = len(self.data)
        if size < current:
            del self.data[size:]
        elif size > current:
            self.data.extend(bytes(size - current))

    def __repr__(self) -> str:
        return f"Node({self.name!r}, {self.kind.name}, {oct(self.perm)})"
