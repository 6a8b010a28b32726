"""Immutable constituency-parse input trees.

The external parser hands over Penn Treebank trees, either as ``nltk.Tree``
objects or as bracketed strings. ``SyntaxNode`` is the read-only form the
transducer consumes: preterminals become leaves carrying the lower-cased
token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from nltk.tree import Tree

from .tags import SyntaxTag


@dataclass(frozen=True)
class SyntaxNode:
    """One node of a constituency parse."""

    tag: SyntaxTag
    word: Optional[str] = None
    children: Tuple["SyntaxNode", ...] = ()
    label: str = field(default="", compare=False)

    @property
    def is_leaf(self) -> bool:
        return self.word is not None

    def __iter__(self) -> Iterator["SyntaxNode"]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def leaves(self) -> List["SyntaxNode"]:
        if self.is_leaf:
            return [self]
        found: List[SyntaxNode] = []
        for child in self.children:
            found.extend(child.leaves())
        return found

    def words(self) -> str:
        """All token text under this node joined with spaces."""
        return " ".join(leaf.word for leaf in self.leaves() if leaf.word)

    def has_child(self, tag: SyntaxTag) -> bool:
        return any(child.tag is tag for child in self.children)

    def __str__(self) -> str:
        label = self.label or self.tag.label
        if self.is_leaf:
            return f"({label} {self.word})"
        return f"({label} {' '.join(str(child) for child in self.children)})"

    @classmethod
    def leaf(cls, tag: SyntaxTag, word: str) -> "SyntaxNode":
        return cls(tag=tag, word=word.lower(), label=tag.label)

    @classmethod
    def phrase(cls, tag: SyntaxTag, *children: "SyntaxNode") -> "SyntaxNode":
        return cls(tag=tag, children=tuple(children), label=tag.label)

    @classmethod
    def from_nltk(cls, tree: Union[Tree, str]) -> "SyntaxNode":
        """Convert an ``nltk.Tree``; a preterminal becomes a leaf."""
        if isinstance(tree, str):
            # Bare token without a preterminal above it.
            return cls(tag=SyntaxTag.UNKNOWN, word=tree.lower(), label="")
        label = tree.label()
        tag = SyntaxTag.from_label(label)
        if len(tree) == 1 and isinstance(tree[0], str):
            return cls(tag=tag, word=tree[0].lower(), label=label)
        return cls(
            tag=tag,
            children=tuple(cls.from_nltk(child) for child in tree),
            label=label,
        )


SyntaxSource = Union[SyntaxNode, Tree, str]


def parse_syntax(source: SyntaxSource) -> SyntaxNode:
    """Accept a ``SyntaxNode``, an ``nltk.Tree`` or a bracketed Penn string.

    Raises:
        ValueError: if a bracketed string is malformed or empty.
    """
    if isinstance(source, SyntaxNode):
        return source
    if isinstance(source, str):
        text = source.strip()
        if not text:
            raise ValueError("Empty parse string")
        source = Tree.fromstring(text)
    if not isinstance(source, Tree):
        raise ValueError(f"Unsupported parse input: {type(source).__name__}")
    if source.label() == "":
        # Treebank files often wrap sentences in an unlabeled bracket.
        source = Tree("ROOT", list(source))
    return SyntaxNode.from_nltk(source)


__all__ = ["SyntaxNode", "SyntaxSource", "parse_syntax"]
