"""Mutable HTML node tree used during template execution."""

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Union


class Attribute(NamedTuple):
    key: str
    val: str


class _Linked:
    """Sibling navigation shared by element and text nodes.

    Lookups go through the parent's child list by identity, so two nodes with
    equal content are never confused.
    """

    parent: Optional["Element"]

    def require_parent(self) -> "Element":
        """The parent element; raise if the node is detached."""
        if self.parent is None:
            raise ValueError(f"{self!r} has no parent")
        return self.parent

    def _index(self) -> int:
        for i, child in enumerate(self.require_parent().children):
            if child is self:
                return i
        raise ValueError("node is not a child of its parent")

    @property
    def next_sibling(self) -> Optional["Node"]:
        if self.parent is None:
            return None
        i = self._index() + 1
        siblings = self.parent.children
        return siblings[i] if i < len(siblings) else None

    @property
    def prev_sibling(self) -> Optional["Node"]:
        if self.parent is None:
            return None
        i = self._index()
        return self.parent.children[i - 1] if i > 0 else None

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        if self.parent is not None:
            self.parent.remove_child(self)  # type: ignore[arg-type]


@dataclass(eq=False)
class Text(_Linked):
    data: str
    parent: Optional["Element"] = field(default=None, repr=False)


@dataclass(eq=False)
class Element(_Linked):
    tag: str
    attrs: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Element"] = field(default=None, repr=False)

    @property
    def first_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the first attribute named `key`."""
        for attr in self.attrs:
            if attr.key == key:
                return attr.val
        return default

    def add_attr(self, key: str, val: str) -> None:
        self.attrs.append(Attribute(key, val))

    def append_child(self, child: "Node") -> None:
        child.detach()
        child.parent = self
        self.children.append(child)

    def insert_before(self, child: "Node", ref: Optional["Node"]) -> None:
        """Insert `child` before `ref`, or at the end when `ref` is None."""
        if ref is None:
            self.append_child(child)
            return
        if ref.parent is not self:
            raise ValueError("reference node is not a child of this element")
        child.detach()
        child.parent = self
        self.children.insert(ref._index(), child)

    def remove_child(self, child: "Node") -> None:
        if child.parent is not self:
            raise ValueError("node is not a child of this element")
        del self.children[child._index()]
        child.parent = None

    def iter(self) -> Iterator["Node"]:
        """Yield this element and all descendants in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()
            else:
                yield child

    def text_content(self) -> str:
        return "".join(n.data for n in self.iter() if isinstance(n, Text))


Node = Union[Element, Text]
