"""
English surface morphology for the sentence renderer.

Verb conjugation from a base form plus the TENSE_TIME / TENSE_FRAME markers
the transducer accumulates, with subject agreement so that "be" becomes
am/are/is. Also plurals, possessives, subject-case pronouns and degree
forms of adjectives and adverbs.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .tags import TenseFrame, TenseTime

logger = logging.getLogger(__name__)

IRREGULAR_VERBS_FILE = Path(__file__).resolve().parent / "data" / "irregular_verbs.txt"

VOWELS = "aeiou"


class Agreement(Enum):
    """Grammatical person and number of a clause subject."""

    FIRST_SINGULAR = "first_singular"
    SECOND = "second"
    THIRD_SINGULAR = "third_singular"
    PLURAL = "plural"


_IRREGULAR_PLURALS = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

_POSSESSIVES = {
    "me": "my",
    "i": "my",
    "you": "your",
    "him": "his",
    "he": "his",
    "her": "her",
    "she": "her",
    "it": "its",
    "us": "our",
    "we": "our",
    "they": "their",
    "them": "their",
    "who": "whose",
}

_SUBJECT_FORMS = {
    "i": "I",
    "me": "I",
    "him": "he",
    "her": "she",
    "them": "they",
    "us": "we",
    "whom": "who",
}

_IRREGULAR_DEGREES = {
    # word: (comparative, superlative)
    "good": ("better", "best"),
    "well": ("better", "best"),
    "bad": ("worse", "worst"),
    "badly": ("worse", "worst"),
    "far": ("farther", "farthest"),
    "little": ("less", "least"),
    "many": ("more", "most"),
    "much": ("more", "most"),
}

_BE_FORMS = {
    (TenseTime.PRESENT, Agreement.FIRST_SINGULAR): "am",
    (TenseTime.PRESENT, Agreement.SECOND): "are",
    (TenseTime.PRESENT, Agreement.THIRD_SINGULAR): "is",
    (TenseTime.PRESENT, Agreement.PLURAL): "are",
    (TenseTime.PAST, Agreement.FIRST_SINGULAR): "was",
    (TenseTime.PAST, Agreement.SECOND): "were",
    (TenseTime.PAST, Agreement.THIRD_SINGULAR): "was",
    (TenseTime.PAST, Agreement.PLURAL): "were",
}


def load_irregular_verbs(path: Union[str, Path]) -> Dict[str, Tuple[str, str]]:
    """Read ``base<TAB>past<TAB>participle`` lines.

    Raises:
        FileNotFoundError: if the file is missing.
        ValueError: if a line does not have three columns.
    """
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Irregular verb table not found: {resolved}")
    table: Dict[str, Tuple[str, str]] = {}
    with resolved.open("r", encoding="utf-8") as fh:
        for number, line in enumerate(fh, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            columns = line.split()
            if len(columns) != 3:
                raise ValueError(f"{resolved}:{number}: expected 'base past participle', got {line!r}")
            base, past, participle = columns
            table[base.lower()] = (past.lower(), participle.lower())
    return table


def _parse_time(value: Union[TenseTime, str, None]) -> TenseTime:
    if isinstance(value, TenseTime):
        return value
    if value:
        try:
            return TenseTime(value.upper())
        except ValueError:
            logger.warning(f"Unknown tense time {value!r}, using GENERIC")
    return TenseTime.GENERIC


def _parse_frame(value: Union[TenseFrame, str, None]) -> TenseFrame:
    if isinstance(value, TenseFrame):
        return value
    if value:
        try:
            return TenseFrame(value.upper())
        except ValueError:
            logger.warning(f"Unknown tense frame {value!r}, using SIMPLE")
    return TenseFrame.SIMPLE


def _is_consonant(char: str) -> bool:
    return char.isalpha() and char not in VOWELS


def _doubles_final_consonant(word: str) -> bool:
    """Short one-vowel verbs ending consonant-vowel-consonant: stop, run, sit."""
    if len(word) < 3 or len(word) > 4:
        return False
    if sum(1 for char in word if char in VOWELS) != 1:
        return False
    a, b, c = word[-3:]
    return _is_consonant(a) and b in VOWELS and _is_consonant(c) and c not in "wxy"


class EnglishMorphology:
    """Rule and table based English inflection."""

    def __init__(self, irregular_verbs: Optional[Dict[str, Tuple[str, str]]] = None):
        self.irregular_verbs = dict(irregular_verbs or {})

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "EnglishMorphology":
        return cls(load_irregular_verbs(path or IRREGULAR_VERBS_FILE))

    # ------------------------------------------------------------------
    # Agreement
    # ------------------------------------------------------------------

    @staticmethod
    def agreement_for(subject: Optional[str], plural: bool = False) -> Agreement:
        """Agreement implied by a rendered subject head word."""
        if plural:
            return Agreement.PLURAL
        word = (subject or "").lower()
        if word == "i":
            return Agreement.FIRST_SINGULAR
        if word == "you":
            return Agreement.SECOND
        if word in ("we", "they"):
            return Agreement.PLURAL
        return Agreement.THIRD_SINGULAR

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def past(self, verb: str) -> str:
        if verb in self.irregular_verbs:
            return self.irregular_verbs[verb][0]
        return self._add_ed(verb)

    def past_participle(self, verb: str) -> str:
        if verb in self.irregular_verbs:
            return self.irregular_verbs[verb][1]
        return self._add_ed(verb)

    def _add_ed(self, verb: str) -> str:
        if verb.endswith("e"):
            return verb + "d"
        if len(verb) > 1 and verb.endswith("y") and _is_consonant(verb[-2]):
            return verb[:-1] + "ied"
        if _doubles_final_consonant(verb):
            return verb + verb[-1] + "ed"
        return verb + "ed"

    def gerund(self, verb: str) -> str:
        if verb == "be":
            return "being"
        if verb.endswith("ie"):
            return verb[:-2] + "ying"
        if verb.endswith(("ee", "ye", "oe")):
            return verb + "ing"
        if verb.endswith("e") and len(verb) > 2:
            return verb[:-1] + "ing"
        if _doubles_final_consonant(verb):
            return verb + verb[-1] + "ing"
        return verb + "ing"

    def third_person(self, verb: str) -> str:
        if verb == "have":
            return "has"
        if verb.endswith(("s", "x", "z", "ch", "sh", "o")):
            return verb + "es"
        if len(verb) > 1 and verb.endswith("y") and _is_consonant(verb[-2]):
            return verb[:-1] + "ies"
        return verb + "s"

    def _be(self, time: TenseTime, agreement: Agreement) -> str:
        if time is TenseTime.FUTURE:
            return "will be"
        if time is TenseTime.GENERIC:
            return "be"
        return _BE_FORMS[(time, agreement)]

    def _have(self, time: TenseTime, agreement: Agreement) -> str:
        if time is TenseTime.PAST:
            return "had"
        if time is TenseTime.FUTURE:
            return "will have"
        if time is TenseTime.GENERIC:
            return "have"
        return "has" if agreement is Agreement.THIRD_SINGULAR else "have"

    def conjugate(
        self,
        verb: str,
        tense_time: Union[TenseTime, str, None] = None,
        tense_frame: Union[TenseFrame, str, None] = None,
        agreement: Agreement = Agreement.THIRD_SINGULAR,
    ) -> str:
        """Inflect a base-form verb.

        Missing markers mean GENERIC time and SIMPLE frame, which leaves the
        base form as it is.
        """
        time = _parse_time(tense_time)
        frame = _parse_frame(tense_frame)
        verb = verb.lower()

        if frame is TenseFrame.SIMPLE:
            if verb == "be":
                return self._be(time, agreement)
            if time is TenseTime.PAST:
                return self.past(verb)
            if time is TenseTime.PRESENT:
                if agreement is Agreement.THIRD_SINGULAR:
                    return self.third_person(verb)
                return verb
            if time is TenseTime.FUTURE:
                return f"will {verb}"
            return verb

        if frame is TenseFrame.CONTINUOUS:
            form = self.gerund(verb)
            if time is TenseTime.GENERIC:
                return form
            return f"{self._be(time, agreement)} {form}"

        if frame is TenseFrame.PERFECT:
            form = self.past_participle(verb)
            if time is TenseTime.GENERIC:
                return form
            return f"{self._have(time, agreement)} {form}"

        form = self.gerund(verb)
        if time is TenseTime.GENERIC:
            return form
        return f"{self._have(time, agreement)} been {form}"

    # ------------------------------------------------------------------
    # Nouns and modifiers
    # ------------------------------------------------------------------

    def pluralize(self, noun: str) -> str:
        if noun in _IRREGULAR_PLURALS:
            return _IRREGULAR_PLURALS[noun]
        if noun.endswith(("s", "x", "z", "ch", "sh")):
            return noun + "es"
        if len(noun) > 1 and noun.endswith("y") and _is_consonant(noun[-2]):
            return noun[:-1] + "ies"
        return noun + "s"

    def possessive(self, word: str) -> str:
        lowered = word.lower()
        if lowered in _POSSESSIVES:
            return _POSSESSIVES[lowered]
        return word + "'s"

    def subject_form(self, pronoun: str) -> str:
        return _SUBJECT_FORMS.get(pronoun.lower(), pronoun)

    def comparative(self, word: str) -> str:
        if word in _IRREGULAR_DEGREES:
            return _IRREGULAR_DEGREES[word][0]
        return f"more {word}"

    def superlative(self, word: str) -> str:
        if word in _IRREGULAR_DEGREES:
            return _IRREGULAR_DEGREES[word][1]
        return f"most {word}"


__all__ = ["Agreement", "EnglishMorphology", "load_irregular_verbs"]
