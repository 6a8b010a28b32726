"""
Discourse Context - who "he", "she", "it" and "they" refer to.

Four referent slots hold the most recently mentioned noun phrase of each
kind. ``observe`` fills them from a new utterance; ``resolve`` replaces
pronouns in an utterance with copies of the remembered phrases.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, TYPE_CHECKING

from .names import NameLists
from .tags import SemanticTag
from .tree import Node

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .renderer import SentenceRenderer

logger = logging.getLogger(__name__)

HIM = "him"
HER = "her"
IT = "it"
THEM = "them"
SLOTS = (HIM, HER, IT, THEM)

PRONOUN_SLOTS: Dict[str, str] = {
    "she": HER,
    "her": HER,
    "herself": HER,
    "he": HIM,
    "him": HIM,
    "himself": HIM,
    "they": THEM,
    "them": THEM,
    "those": THEM,
    "themselves": THEM,
    "that": IT,
    "it": IT,
    "itself": IT,
}


class DiscourseContext:
    """
    Most-recent referent tracking for one conversation.

    Slots hold noun phrases by reference and are overwritten, never merged.
    ``him`` and ``her`` fall back to ``it`` when they are empty.
    """

    def __init__(self, names: Optional[NameLists] = None):
        """
        Args:
            names: known male and female first names used to route a phrase
                to ``him`` or ``her``.
        """
        self.names = names or NameLists()
        self._slots: Dict[str, Optional[Node]] = {slot: None for slot in SLOTS}

    def referent(self, slot: str) -> Optional[Node]:
        """Phrase held by ``slot``, applying the him/her to it fallback."""
        if slot not in self._slots:
            raise KeyError(f"Unknown referent slot {slot!r}")
        found = self._slots[slot]
        if found is None and slot in (HIM, HER):
            found = self._slots[IT]
        return found

    def snapshot(self) -> Dict[str, Optional[Node]]:
        """Raw slot contents, without fallback."""
        return dict(self._slots)

    def clear(self) -> None:
        for slot in SLOTS:
            self._slots[slot] = None

    def observe(self, tree: Node) -> None:
        """Update the slots from every noun phrase in ``tree``; the last one scanned wins."""
        for np in tree.find_all(SemanticTag.NOUN_PHRASE):
            slot = self._classify(np)
            self._slots[slot] = np
            logger.debug(f"Context slot {slot} <- {np.words()!r}")

    def _classify(self, np: Node) -> str:
        if np.has(SemanticTag.PLURAL):
            return THEM
        noun = np.first(SemanticTag.NOUN)
        if noun is not None:
            if self.names.is_male(noun.word):
                return HIM
            if self.names.is_female(noun.word):
                return HER
        return IT

    def resolve(self, tree: Node) -> int:
        """Replace pronouns in ``tree`` with copies of their referents.

        Returns:
            Number of pronouns substituted. Pronouns without a referent are
            left alone.
        """
        substituted = 0
        for np in tree.find_all(SemanticTag.NOUN_PHRASE):
            pronoun = np.first(SemanticTag.PRONOUN)
            if pronoun is None:
                continue
            slot = PRONOUN_SLOTS.get(pronoun.word)
            if slot is None:
                continue
            referent = self.referent(slot)
            if referent is None or referent == np or referent.is_ancestor_of(np):
                continue
            pronoun.replace_with([child.copy(np.arena) for child in referent.children])
            substituted += 1
            logger.debug(f"Resolved {pronoun.word!r} to {referent.words()!r}")
        return substituted

    def describe(self, renderer: "SentenceRenderer") -> str:
        """One line per slot with the rendered referent, or ``None.`` when empty."""
        lines = []
        for slot in SLOTS:
            found = self._slots[slot]
            text = renderer.render(found) if found is not None else ""
            lines.append(f"{slot.capitalize()}: {text or 'None.'}")
        return "\n".join(lines)


__all__ = ["DiscourseContext", "PRONOUN_SLOTS", "SLOTS"]
