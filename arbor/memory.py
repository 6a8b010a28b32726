"""
Statement Recall Engine - structural matching of questions against facts.

Stored statements are kept in insertion order for the whole session. A query
tree is scored against every statement by recursive structural overlap and
the best strictly positive match is returned.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .tags import Category
from .tree import Node

logger = logging.getLogger(__name__)


def _partition(node: Node) -> Tuple[List[str], List[Node]]:
    """Leaf words (answer slots dropped) and internal children of ``node``."""
    words: List[str] = []
    subtrees: List[Node] = []
    for child in node.children:
        if child.is_leaf:
            if not child.is_a(Category.ANSWER):
                words.append(child.word)
        else:
            subtrees.append(child)
    return words, subtrees


def structure_score(query: Node, candidate: Node) -> float:
    """Recursive overlap of ``query`` with ``candidate`` in [0, 1].

    Leaf words are matched as a multiset. Internal children are scored
    pairwise and claimed greedily in query order: each query child takes
    the best unclaimed candidate child with a positive score, the earliest
    candidate winning ties. The result is (leaf matches + claimed subtree
    scores) over (longer leaf list + longer subtree list).
    """
    query_words, query_trees = _partition(query)
    candidate_words, candidate_trees = _partition(candidate)

    remaining = list(candidate_words)
    leaf_matches = 0
    for word in query_words:
        if word in remaining:
            remaining.remove(word)
            leaf_matches += 1

    subtree_total = 0.0
    if query_trees and candidate_trees:
        scores = np.array([
            [structure_score(q, c) for c in candidate_trees]
            for q in query_trees
        ], dtype=float)
        claimed = np.zeros(len(candidate_trees), dtype=bool)
        for row in scores:
            available = np.where(claimed, -np.inf, row)
            best = int(np.argmax(available))
            if available[best] > 0:
                claimed[best] = True
                subtree_total += float(available[best])

    denominator = max(len(query_words), len(candidate_words)) + max(len(query_trees), len(candidate_trees))
    if denominator == 0:
        return 0.0
    return (leaf_matches + subtree_total) / denominator


class StatementMemory:
    """
    Append-only store of statement trees for one conversation.

    No deduplication and no eviction; ``clear`` is the only way to forget.
    """

    def __init__(self):
        self._statements: List[Node] = []

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._statements)

    def store(self, tree: Node) -> None:
        self._statements.append(tree)

    def clear(self) -> None:
        self._statements.clear()

    def score(self, query: Node, candidate: Node) -> float:
        return structure_score(query, candidate)

    def ranked(self, query: Node) -> List[Tuple[Node, float]]:
        """Every stored statement with its score, in insertion order."""
        return [(statement, structure_score(query, statement)) for statement in self._statements]

    def recall(self, query: Node) -> Optional[Node]:
        """Best matching statement, or None when nothing scores above zero.

        Equal scores go to the statement stored later.
        """
        best: Optional[Node] = None
        best_score = 0.0
        for statement, score in self.ranked(query):
            logger.debug(f"Recall score {score:.3f} for {statement.words()!r}")
            if score != 0 and score >= best_score:
                best = statement
                best_score = score
        return best

    def containing(self, pattern: Node) -> List[Node]:
        """Statements with a subtree matching ``pattern``, extra children ignored."""
        return [statement for statement in self._statements if statement.contains_match(pattern)]


__all__ = ["StatementMemory", "structure_score"]
