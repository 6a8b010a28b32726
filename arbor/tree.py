"""
Tagged Tree - arena-backed semantic trees.

Every node of a tree family lives in one ``TreeArena`` slot holding its tag,
its literal text (leaves only), the index of its parent and the ordered
indices of its children. ``Node`` is a small handle ``(arena, index)`` that
exposes the tree operations; two handles are equal when they address the
same slot.

Ownership rules:
  - A node has at most one parent; attaching moves it from the old parent.
  - A node may never be attached under itself or one of its descendants.
  - Nodes from different arenas are never linked directly; use ``copy``.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from .tags import Category, SemanticTag

NO_PARENT = -1


class TreeError(ValueError):
    """Invalid structural operation on a tagged tree."""


class CyclicAttachmentError(TreeError):
    """Attaching the node would make it its own ancestor."""


class ForeignNodeError(TreeError):
    """The node belongs to a different arena."""


class LeafChildrenError(TreeError):
    """Leaves carry text and never own children."""


class TreeArena:
    """Storage for a family of nodes addressed by stable integer indices."""

    def __init__(self):
        self._tags: List[SemanticTag] = []
        self._words: List[Optional[str]] = []
        self._parents: List[int] = []
        self._children: List[List[int]] = []

    def __len__(self) -> int:
        return len(self._tags)

    def _allocate(self, tag: SemanticTag, word: Optional[str]) -> int:
        self._tags.append(tag)
        self._words.append(word)
        self._parents.append(NO_PARENT)
        self._children.append([])
        return len(self._tags) - 1

    def node(self, index: int) -> "Node":
        if not 0 <= index < len(self._tags):
            raise IndexError(f"No node at index {index}")
        return Node(self, index)

    def leaf(self, tag: SemanticTag, word: str) -> "Node":
        """Create a detached leaf carrying ``word``."""
        return Node(self, self._allocate(tag, word))

    def tree(self, tag: SemanticTag, children: Iterable["Node"] = ()) -> "Node":
        """Create a detached internal node and attach ``children`` in order."""
        node = Node(self, self._allocate(tag, None))
        for child in children:
            node.add_child(child)
        return node


class Node:
    """Handle to one node in a ``TreeArena``."""

    __slots__ = ("arena", "index")

    def __init__(self, arena: TreeArena, index: int):
        self.arena = arena
        self.index = index

    # ------------------------------------------------------------------
    # Identity and basic queries
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.arena is other.arena and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.arena), self.index))

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node({self.tag.name}, {self.word!r})"
        return f"Node({self.tag.name}, children={len(self)})"

    def __str__(self) -> str:
        return self.sexpr()

    def __len__(self) -> int:
        return len(self.arena._children[self.index])

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.children)

    @property
    def tag(self) -> SemanticTag:
        return self.arena._tags[self.index]

    @property
    def word(self) -> Optional[str]:
        return self.arena._words[self.index]

    @property
    def is_leaf(self) -> bool:
        return self.arena._words[self.index] is not None

    @property
    def children(self) -> List["Node"]:
        return [Node(self.arena, i) for i in self.arena._children[self.index]]

    @property
    def parent(self) -> Optional["Node"]:
        index = self.arena._parents[self.index]
        return None if index == NO_PARENT else Node(self.arena, index)

    def child(self, position: int) -> "Node":
        return Node(self.arena, self.arena._children[self.index][position])

    def is_a(self, category: Category) -> bool:
        return self.tag.is_a(category)

    def ancestors(self) -> Iterator["Node"]:
        """Yield the parent, grandparent and so on up to the root."""
        parents = self.arena._parents
        index = parents[self.index]
        while index != NO_PARENT:
            yield Node(self.arena, index)
            index = parents[index]

    def root(self) -> "Node":
        top = self
        for top in self.ancestors():
            pass
        return top

    def is_ancestor_of(self, other: "Node") -> bool:
        if other.arena is not self.arena:
            return False
        return any(ancestor.index == self.index for ancestor in other.ancestors())

    # ------------------------------------------------------------------
    # Child lookup
    # ------------------------------------------------------------------

    def first(self, tag: SemanticTag) -> Optional["Node"]:
        """First direct child with ``tag``, or None."""
        for child in self.children:
            if child.tag is tag:
                return child
        return None

    def all(self, tag: SemanticTag) -> List["Node"]:
        return [child for child in self.children if child.tag is tag]

    def has(self, tag: SemanticTag) -> bool:
        return self.first(tag) is not None

    def index_of(self, tag: SemanticTag) -> int:
        """Position of the first child with ``tag``, or -1."""
        for position, child in enumerate(self.children):
            if child.tag is tag:
                return position
        return -1

    def find_leaf(self, tag: SemanticTag, word: str) -> Optional["Node"]:
        """First direct leaf child with ``tag`` and exactly ``word``."""
        for child in self.children:
            if child.is_leaf and child.tag is tag and child.word == word:
                return child
        return None

    def find_leaves(self, tag: SemanticTag, word: str) -> List["Node"]:
        return [
            child for child in self.children
            if child.is_leaf and child.tag is tag and child.word == word
        ]

    def has_leaf(self, tag: SemanticTag, word: str) -> bool:
        return self.find_leaf(tag, word) is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _check_attachable(self, child: "Node") -> None:
        if self.is_leaf:
            raise LeafChildrenError(f"Cannot attach children to leaf {self!r}")
        if child.arena is not self.arena:
            raise ForeignNodeError(f"{child!r} belongs to another arena; copy it first")
        if child.index == self.index or child.is_ancestor_of(self):
            raise CyclicAttachmentError(f"Attaching {child!r} under {self!r} would create a cycle")

    def add_child(self, child: "Node", position: Optional[int] = None) -> "Node":
        """Attach ``child`` (detaching it from any previous parent) and return it.

        ``position`` inserts before that index; the default appends.
        """
        self._check_attachable(child)
        child.detach()
        siblings = self.arena._children[self.index]
        if position is None or position >= len(siblings):
            siblings.append(child.index)
        else:
            siblings.insert(max(position, 0), child.index)
        self.arena._parents[child.index] = self.index
        return child

    def add_leaf(self, tag: SemanticTag, word: str) -> "Node":
        return self.add_child(self.arena.leaf(tag, word))

    def add_tree(self, tag: SemanticTag) -> "Node":
        return self.add_child(self.arena.tree(tag))

    def get_or_add(self, tag: SemanticTag) -> "Node":
        """Return the first child with ``tag``, creating an empty one if needed."""
        existing = self.first(tag)
        if existing is not None:
            return existing
        return self.add_tree(tag)

    def remove_child(self, child: "Node") -> bool:
        """Detach ``child`` if it is a direct child. Returns whether it was."""
        if child.arena is not self.arena or self.arena._parents[child.index] != self.index:
            return False
        self.arena._children[self.index].remove(child.index)
        self.arena._parents[child.index] = NO_PARENT
        return True

    def remove_all(self, tag: SemanticTag) -> int:
        removed = 0
        for child in self.all(tag):
            removed += self.remove_child(child)
        return removed

    def detach(self) -> "Node":
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)
        return self

    def insert_above(self, wrapper: "Node") -> "Node":
        """Put ``wrapper`` where this node sits and make this node its only new child.

        Returns the wrapper.
        """
        if wrapper.arena is not self.arena:
            raise ForeignNodeError(f"{wrapper!r} belongs to another arena; copy it first")
        if wrapper.is_leaf:
            raise LeafChildrenError(f"Cannot wrap {self!r} in leaf {wrapper!r}")
        if wrapper.index == self.index or wrapper.is_ancestor_of(self):
            raise CyclicAttachmentError(f"{wrapper!r} already contains {self!r}")

        wrapper.detach()
        parent = self.parent
        if parent is not None:
            position = parent.arena._children[parent.index].index(self.index)
            self.detach()
            parent.add_child(wrapper, position)
        wrapper.add_child(self)
        return wrapper

    def replace_with(self, nodes: Iterable["Node"]) -> None:
        """Splice ``nodes`` into the parent at this node's position and detach this node."""
        parent = self.parent
        if parent is None:
            raise TreeError(f"{self!r} has no parent to splice into")
        position = parent.arena._children[parent.index].index(self.index)
        self.detach()
        for offset, node in enumerate(nodes):
            parent.add_child(node, position + offset)

    def copy(self, arena: Optional[TreeArena] = None) -> "Node":
        """Deep copy of this subtree, detached, in ``arena`` (default: the same one)."""
        target = arena if arena is not None else self.arena
        if self.is_leaf:
            return target.leaf(self.tag, self.word)
        return target.tree(self.tag, [child.copy(target) for child in self.children])

    # ------------------------------------------------------------------
    # Traversal and comparison
    # ------------------------------------------------------------------

    def walk(self) -> Iterator["Node"]:
        """Pre-order traversal including this node."""
        stack = [self.index]
        while stack:
            index = stack.pop()
            yield Node(self.arena, index)
            stack.extend(reversed(self.arena._children[index]))

    def find_all(self, tag: SemanticTag) -> List["Node"]:
        """Every node in this subtree (self included) with ``tag``, in document order."""
        return [node for node in self.walk() if node.tag is tag]

    def leaves(self) -> List["Node"]:
        return [node for node in self.walk() if node.is_leaf]

    def words(self) -> str:
        return " ".join(leaf.word for leaf in self.leaves() if leaf.word)

    def matches(self, other: "Node", ignore_extra_children: bool = False) -> bool:
        """Structural equality with unordered child comparison.

        Every child here must match some child of ``other``. Unless
        ``ignore_extra_children`` is set, both nodes must also have the same
        number of children.
        """
        if self.tag is not other.tag:
            return False
        if self.is_leaf or other.is_leaf:
            return self.is_leaf and other.is_leaf and self.word == other.word
        mine = self.children
        theirs = other.children
        if not ignore_extra_children and len(mine) != len(theirs):
            return False
        return all(
            any(child.matches(candidate, ignore_extra_children) for candidate in theirs)
            for child in mine
        )

    def contains_match(self, pattern: "Node") -> bool:
        """True when some subtree here matches ``pattern`` with extra children ignored."""
        return any(pattern.matches(node, ignore_extra_children=True) for node in self.walk())

    def sexpr(self) -> str:
        if self.is_leaf:
            return f"({self.tag.name} {self.word})"
        inner = " ".join(child.sexpr() for child in self.children)
        return f"({self.tag.name} {inner})" if inner else f"({self.tag.name})"

    def pformat(self, indent: int = 2, _depth: int = 0) -> str:
        pad = " " * (indent * _depth)
        if self.is_leaf or not len(self):
            return pad + self.sexpr()
        lines = [f"{pad}({self.tag.name}"]
        lines.extend(child.pformat(indent, _depth + 1) for child in self.children)
        return "\n".join(lines) + ")"


def new_tree(tag: SemanticTag = SemanticTag.ROOT) -> Node:
    """Start a fresh arena holding a single empty node."""
    return TreeArena().tree(tag)


__all__ = [
    "CyclicAttachmentError",
    "ForeignNodeError",
    "LeafChildrenError",
    "Node",
    "TreeArena",
    "TreeError",
    "new_tree",
]
