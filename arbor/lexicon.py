"""
Lexical lookups for the structure transducer.

Given a token and its parser tag, ``Lexicon`` reports the word's base form
and the flags the transducer needs: plural/pronoun/question for nouns, the
tense contribution for verbs, and the degree for adjectives and adverbs.

Base forms come from a lemmatizer callable ``(word, pos) -> Optional[str]``
where ``pos`` is one of WordNet's ``n``/``v``/``a``/``r``. The default is
WordNet's ``morphy`` from nltk. Any lookup failure, including missing
WordNet data, falls back to the surface word.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from nltk.corpus import wordnet

from .tags import SyntaxTag

logger = logging.getLogger(__name__)

Lemmatizer = Callable[[str, str], Optional[str]]

NOUN_POS = "n"
VERB_POS = "v"
ADJECTIVE_POS = "a"
ADVERB_POS = "r"


class VerbForm(Enum):
    """Tense contribution of a single verb token."""

    BASE = "BASE"
    MODAL = "MODAL"
    PRESENT_SIMPLE = "PRESENT_SIMPLE"
    PAST_SIMPLE = "PAST_SIMPLE"
    CONTINUOUS = "CONTINUOUS"
    PERFECT = "PERFECT"


class Degree(Enum):
    NORMAL = "NORMAL"
    COMPARATIVE = "COMPARATIVE"
    SUPERLATIVE = "SUPERLATIVE"


@dataclass(frozen=True)
class NounInfo:
    word: str
    base: str
    plural: bool = False
    pronoun: bool = False
    question: bool = False


@dataclass(frozen=True)
class VerbInfo:
    word: str
    base: str
    form: VerbForm


@dataclass(frozen=True)
class ModifierInfo:
    """Adjective or adverb classification."""

    word: str
    base: str
    degree: Degree = Degree.NORMAL


_NOUN_FLAGS: Dict[SyntaxTag, Tuple[bool, bool, bool]] = {
    # tag: (plural, pronoun, question)
    SyntaxTag.NOUN: (False, False, False),
    SyntaxTag.NOUN_PLURAL: (True, False, False),
    SyntaxTag.PROPER_NOUN: (False, False, False),
    SyntaxTag.PROPER_NOUN_PLURAL: (True, False, False),
    SyntaxTag.PERSONAL_PRONOUN: (False, True, False),
    SyntaxTag.WH_PRONOUN: (False, True, True),
}

_VERB_FORMS: Dict[SyntaxTag, VerbForm] = {
    SyntaxTag.MODAL_VERB: VerbForm.MODAL,
    SyntaxTag.VERB_BASE: VerbForm.BASE,
    SyntaxTag.VERB_PAST: VerbForm.PAST_SIMPLE,
    SyntaxTag.VERB_GERUND: VerbForm.CONTINUOUS,
    SyntaxTag.VERB_PAST_PARTICIPLE: VerbForm.PERFECT,
    SyntaxTag.VERB_PRESENT: VerbForm.PRESENT_SIMPLE,
    SyntaxTag.VERB_PRESENT_THIRD_PERSON: VerbForm.PRESENT_SIMPLE,
}

_ADJECTIVE_DEGREES: Dict[SyntaxTag, Degree] = {
    SyntaxTag.ADJECTIVE: Degree.NORMAL,
    SyntaxTag.ADJECTIVE_COMPARATIVE: Degree.COMPARATIVE,
    SyntaxTag.ADJECTIVE_SUPERLATIVE: Degree.SUPERLATIVE,
}

_ADVERB_DEGREES: Dict[SyntaxTag, Degree] = {
    SyntaxTag.ADVERB: Degree.NORMAL,
    SyntaxTag.ADVERB_COMPARATIVE: Degree.COMPARATIVE,
    SyntaxTag.ADVERB_SUPERLATIVE: Degree.SUPERLATIVE,
}

# Auxiliaries WordNet does not always map back to their infinitive.
AUXILIARY_BASES: Dict[str, str] = {
    "am": "be", "is": "be", "are": "be", "was": "be", "were": "be",
    "been": "be", "being": "be", "'m": "be", "'re": "be",
    "has": "have", "had": "have", "having": "have", "'ve": "have",
    "does": "do", "did": "do", "done": "do", "doing": "do",
}

WH_WORDS = frozenset({
    "who", "whom", "whose", "what", "which", "when", "where", "why", "how",
})

_PRONOUN_SWAPS: Dict[str, str] = {
    # canonical object forms
    "she": "her",
    "he": "him",
    # speaker and listener trade places
    "i": "you",
    "me": "you",
    "you": "me",
    "myself": "yourself",
    "yourself": "myself",
    "yourselves": "ourselves",
    "mine": "yours",
    "yours": "mine",
}

_POSSESSOR_PRONOUNS: Dict[str, str] = {
    "my": "you",
    "your": "me",
    "his": "him",
    "her": "her",
    "its": "it",
    "our": "us",
    "their": "them",
    "whose": "who",
}


def swap_pronoun(word: str) -> str:
    """Swap first and second person and canonicalize he/she to him/her."""
    lowered = word.lower()
    return _PRONOUN_SWAPS.get(lowered, lowered)


def pronoun_possessor(word: str) -> str:
    """Owner pronoun for a possessive pronoun, from the listener's side."""
    lowered = word.lower()
    return _POSSESSOR_PRONOUNS.get(lowered, lowered)


def is_wh_word(word: str) -> bool:
    return word.lower() in WH_WORDS


def wordnet_lemma(word: str, pos: str) -> Optional[str]:
    """WordNet base form via ``morphy``; None when WordNet has no entry."""
    return wordnet.morphy(word, pos)


class Lexicon:
    """Tag-aware word classification with lemmatized base forms.

    Args:
        lemmatizer: callable returning a base form or None. Defaults to
            WordNet when ``use_wordnet`` is set.
        use_wordnet: when False and no lemmatizer is supplied, every base
            form is the surface word.
    """

    def __init__(self, lemmatizer: Optional[Lemmatizer] = None, *, use_wordnet: bool = True):
        if lemmatizer is None and use_wordnet:
            lemmatizer = wordnet_lemma
        self._lemmatizer = lemmatizer
        self._cache: Dict[Tuple[str, str], str] = {}
        self._warned = False

    @property
    def lemmatizes(self) -> bool:
        return self._lemmatizer is not None

    def base_form(self, word: str, pos: str) -> str:
        key = (word, pos)
        if key in self._cache:
            return self._cache[key]
        base = word
        if self._lemmatizer is not None:
            try:
                base = self._lemmatizer(word, pos) or word
            except LookupError as exc:
                # Raised by nltk when the WordNet corpus is not installed.
                if not self._warned:
                    logger.warning(f"Lexical database unavailable, using surface forms: {exc}")
                    self._warned = True
                self._lemmatizer = None
        self._cache[key] = base
        return base

    def noun(self, word: str, tag: SyntaxTag) -> Optional[NounInfo]:
        flags = _NOUN_FLAGS.get(tag)
        if flags is None:
            return None
        plural, pronoun, question = flags
        if pronoun:
            base = word
        else:
            base = self.base_form(word, NOUN_POS)
        return NounInfo(word=word, base=base, plural=plural, pronoun=pronoun, question=question)

    def verb(self, word: str, tag: SyntaxTag) -> Optional[VerbInfo]:
        form = _VERB_FORMS.get(tag)
        if form is None:
            return None
        if form is VerbForm.MODAL:
            base = word
        elif word in AUXILIARY_BASES:
            base = AUXILIARY_BASES[word]
        else:
            base = self.base_form(word, VERB_POS)
        return VerbInfo(word=word, base=base, form=form)

    def adjective(self, word: str, tag: SyntaxTag) -> Optional[ModifierInfo]:
        degree = _ADJECTIVE_DEGREES.get(tag)
        if degree is None:
            return None
        return ModifierInfo(word=word, base=self.base_form(word, ADJECTIVE_POS), degree=degree)

    def adverb(self, word: str, tag: SyntaxTag) -> Optional[ModifierInfo]:
        degree = _ADVERB_DEGREES.get(tag)
        if degree is None:
            return None
        return ModifierInfo(word=word, base=self.base_form(word, ADVERB_POS), degree=degree)


__all__ = [
    "Degree",
    "Lexicon",
    "ModifierInfo",
    "NounInfo",
    "VerbForm",
    "VerbInfo",
    "is_wh_word",
    "pronoun_possessor",
    "swap_pronoun",
    "wordnet_lemma",
]
