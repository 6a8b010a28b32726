"""Tag vocabularies for syntactic input trees and semantic output trees.

Two closed sets live here:

  - ``SyntaxTag``: the Penn Treebank labels produced by the external
    constituency parser, each classified by word class and structure.
  - ``SemanticTag``: the node kinds of the semantic tree, each mapped to a
    ``Category`` flag set computed once at import time.
"""

from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Dict, Tuple


class WordClass(Enum):
    """Coarse part of speech of a syntactic word tag."""

    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    OTHER = "other"


class Structure(Enum):
    """Structural role of a syntactic tag."""

    WORD = "word"
    PHRASE = "phrase"
    CLAUSE = "clause"
    PUNCTUATION = "punctuation"
    OTHER = "other"


class SyntaxTag(Enum):
    """Penn Treebank tags understood by the transducer."""

    ROOT = "ROOT"
    UNKNOWN = ""

    # Word level
    ADJECTIVE = "JJ"
    ADJECTIVE_COMPARATIVE = "JJR"
    ADJECTIVE_SUPERLATIVE = "JJS"
    ADVERB = "RB"
    ADVERB_COMPARATIVE = "RBR"
    ADVERB_SUPERLATIVE = "RBS"
    CARDINAL_NUMBER = "CD"
    COORDINATING_CONJUNCTION = "CC"
    DETERMINER = "DT"
    EXISTENTIAL_THERE = "EX"
    FOREIGN_WORD = "FW"
    INTERJECTION = "UH"
    LIST_ITEM_MARKER = "LS"
    MODAL_VERB = "MD"
    NOUN_PLURAL = "NNS"
    NOUN = "NN"
    PARTICLE = "RP"
    PERSONAL_PRONOUN = "PRP"
    POSSESSIVE_ENDING = "POS"
    POSSESSIVE_PRONOUN = "PRP$"
    POSSESSIVE_WH_PRONOUN = "WP$"
    PREDETERMINER = "PDT"
    PREPOSITION = "IN"
    PROPER_NOUN_PLURAL = "NNPS"
    PROPER_NOUN = "NNP"
    SYMBOL = "SYM"
    TO = "TO"
    VERB_BASE = "VB"
    VERB_PAST = "VBD"
    VERB_GERUND = "VBG"
    VERB_PAST_PARTICIPLE = "VBN"
    VERB_PRESENT = "VBP"
    VERB_PRESENT_THIRD_PERSON = "VBZ"
    WH_DETERMINER = "WDT"
    WH_PRONOUN = "WP"
    WH_ADVERB = "WRB"

    # Phrase level
    ADJECTIVE_PHRASE = "ADJP"
    ADVERB_PHRASE = "ADVP"
    CONJUNCTION_PHRASE = "CONJP"
    FRAGMENT = "FRAG"
    INTERJECTION_PHRASE = "INTJ"
    LIST_MARKER = "LST"
    NOT_A_CONSTITUENT = "NAC"
    NOUN_PHRASE = "NP"
    NOUN_PHRASE_HEAD = "NX"
    PREPOSITIONAL_PHRASE = "PP"
    PARENTHETICAL = "PRN"
    PARTICLE_PHRASE = "PRT"
    QUANTIFIER_PHRASE = "QP"
    REDUCED_RELATIVE_CLAUSE = "RRC"
    UNLIKE_COORDINATED_PHRASE = "UCP"
    VERB_PHRASE = "VP"
    WH_ADJECTIVE_PHRASE = "WHADJP"
    WH_ADVERB_PHRASE = "WHADVP"
    WH_NOUN_PHRASE = "WHNP"
    WH_PREPOSITIONAL_PHRASE = "WHPP"
    X = "X"

    # Clause level
    DECLARATIVE_CLAUSE = "S"
    SUBORDINATE_CLAUSE = "SBAR"
    WH_QUESTION = "SBARQ"
    INVERTED_DECLARATIVE = "SINV"
    INVERTED_QUESTION = "SQ"

    # Punctuation
    DOLLAR = "$"
    OPENING_QUOTE = "``"
    CLOSING_QUOTE = "''"
    OPENING_PARENTHESIS = "-LRB-"
    CLOSING_PARENTHESIS = "-RRB-"
    COMMA = ","
    DASH = "--"
    TERMINATOR = "."
    COLON = ":"

    @property
    def label(self) -> str:
        return self.value

    @property
    def word_class(self) -> WordClass:
        return _SYNTAX_CLASSES.get(self, (Structure.WORD, WordClass.OTHER))[1]

    @property
    def structure(self) -> Structure:
        return _SYNTAX_CLASSES.get(self, (Structure.WORD, WordClass.OTHER))[0]

    @property
    def is_word(self) -> bool:
        return self.structure is Structure.WORD

    @property
    def is_ignored(self) -> bool:
        """Punctuation and bookkeeping tags carry no meaning of their own."""
        return self.structure in (Structure.PUNCTUATION, Structure.OTHER)

    @property
    def is_incorrect(self) -> bool:
        """Tags that usually signal a parser failure on this input."""
        return self in _INCORRECT_TAGS

    @property
    def is_wh(self) -> bool:
        return self in _WH_TAGS

    @classmethod
    def from_label(cls, label: str) -> "SyntaxTag":
        """Map a parser label to a tag, tolerating function tags and aliases.

        ``NP-SBJ`` and ``NP=2`` both map to ``NOUN_PHRASE``; anything outside
        the vocabulary maps to ``UNKNOWN``.
        """
        if label in _LABEL_ALIASES:
            label = _LABEL_ALIASES[label]
        try:
            return cls(label)
        except ValueError:
            pass
        base = label.split("-", 1)[0].split("=", 1)[0]
        if base and base != label:
            try:
                return cls(base)
            except ValueError:
                pass
        return cls.UNKNOWN


_LABEL_ALIASES: Dict[str, str] = {
    "(": "-LRB-",
    ")": "-RRB-",
    "-LCB-": "-LRB-",
    "-RCB-": "-RRB-",
    '"': "''",
}

_INCORRECT_TAGS = frozenset({
    SyntaxTag.UNKNOWN,
    SyntaxTag.X,
    SyntaxTag.FOREIGN_WORD,
    SyntaxTag.SYMBOL,
    SyntaxTag.LIST_ITEM_MARKER,
})

_WH_TAGS = frozenset({
    SyntaxTag.WH_DETERMINER,
    SyntaxTag.WH_PRONOUN,
    SyntaxTag.POSSESSIVE_WH_PRONOUN,
    SyntaxTag.WH_ADVERB,
    SyntaxTag.WH_ADJECTIVE_PHRASE,
    SyntaxTag.WH_ADVERB_PHRASE,
    SyntaxTag.WH_NOUN_PHRASE,
    SyntaxTag.WH_PREPOSITIONAL_PHRASE,
})


def _build_syntax_classes() -> Dict[SyntaxTag, Tuple[Structure, WordClass]]:
    table: Dict[SyntaxTag, Tuple[Structure, WordClass]] = {}
    word_classes = {
        WordClass.ADJECTIVE: ("JJ", "JJR", "JJS"),
        WordClass.ADVERB: ("RB", "RBR", "RBS", "WRB"),
        WordClass.NOUN: ("NN", "NNS", "NNP", "NNPS", "PRP", "WP"),
        WordClass.VERB: ("MD", "VB", "VBD", "VBG", "VBN", "VBP", "VBZ"),
    }
    phrases = (
        "ADJP", "ADVP", "CONJP", "FRAG", "INTJ", "LST", "NAC", "NP", "NX",
        "PP", "PRN", "PRT", "QP", "RRC", "UCP", "VP", "WHADJP", "WHADVP",
        "WHNP", "WHPP", "X",
    )
    clauses = ("S", "SBAR", "SBARQ", "SINV", "SQ")
    punctuation = ("$", "``", "''", "-LRB-", "-RRB-", ",", "--", ".", ":")

    for tag in SyntaxTag:
        table[tag] = (Structure.WORD, WordClass.OTHER)
    for word_class, labels in word_classes.items():
        for label in labels:
            table[SyntaxTag(label)] = (Structure.WORD, word_class)
    for label in phrases:
        table[SyntaxTag(label)] = (Structure.PHRASE, WordClass.OTHER)
    for label in clauses:
        table[SyntaxTag(label)] = (Structure.CLAUSE, WordClass.OTHER)
    for label in punctuation:
        table[SyntaxTag(label)] = (Structure.PUNCTUATION, WordClass.OTHER)
    table[SyntaxTag.ROOT] = (Structure.OTHER, WordClass.OTHER)
    table[SyntaxTag.UNKNOWN] = (Structure.OTHER, WordClass.OTHER)
    return table


_SYNTAX_CLASSES = _build_syntax_classes()


class Category(Flag):
    """How a semantic tag is treated by the transducer, renderer and scorer."""

    NONE = 0
    PHRASE = auto()           # top-level sentence constituent
    CONTAINS_PHRASE = auto()  # may nest PHRASE children
    WORD = auto()             # literal-bearing leaf
    SINGLE_CHILD = auto()     # wrapper owning one meaningful child
    IGNORED = auto()          # leaf never rendered
    ANSWER = auto()           # where a question's missing information goes


class SemanticTag(Enum):
    """Node kinds of the semantic tree."""

    ROOT = "ROOT"
    CONJUNCTION_PHRASE = "CONJUNCTION_PHRASE"

    STATEMENT = "STATEMENT"
    COMMAND = "COMMAND"
    QUESTION = "QUESTION"
    YES_NO = "YES_NO"
    INTERJECTION_PHRASE = "INTERJECTION_PHRASE"
    FRAGMENT_NOUN = "FRAGMENT_NOUN"
    FRAGMENT_ADJECTIVE = "FRAGMENT_ADJECTIVE"
    FRAGMENT_ADVERB = "FRAGMENT_ADVERB"
    QUESTION_FRAGMENT = "QUESTION_FRAGMENT"

    CONJUNCTION = "CONJUNCTION"
    SUBJECT = "SUBJECT"
    ACTION = "ACTION"
    QUESTION_TYPE = "QUESTION_TYPE"
    INTERJECTION_WORD = "INTERJECTION_WORD"

    NOUN_PHRASE = "NOUN_PHRASE"
    VERB_PHRASE = "VERB_PHRASE"
    ADJECTIVE_PHRASE = "ADJECTIVE_PHRASE"
    ADVERB_PHRASE = "ADVERB_PHRASE"
    PREPOSITION_PHRASE = "PREPOSITION_PHRASE"
    SUBORDINATING_CONJUNCTION_PHRASE = "SUBORDINATING_CONJUNCTION_PHRASE"
    PARTICLE_PHRASE = "PARTICLE_PHRASE"

    NOUN = "NOUN"
    PRONOUN = "PRONOUN"
    REFERRING_PRONOUN = "REFERRING_PRONOUN"
    DETERMINER = "DETERMINER"
    VERB = "VERB"
    ADJECTIVE = "ADJECTIVE"
    ADVERB = "ADVERB"
    PREPOSITION = "PREPOSITION"
    PARTICLE = "PARTICLE"
    QUESTION_PRONOUN = "QUESTION_PRONOUN"
    QUESTION_DETERMINER = "QUESTION_DETERMINER"
    QUESTION_ADVERB = "QUESTION_ADVERB"

    PLURAL = "PLURAL"
    TENSE_TIME = "TENSE_TIME"
    TENSE_FRAME = "TENSE_FRAME"
    COMPARATIVE = "COMPARATIVE"
    SUPERLATIVE = "SUPERLATIVE"

    POSSESSOR = "POSSESSOR"
    OBJECT = "OBJECT"
    INDIRECT_OBJECT = "INDIRECT_OBJECT"

    @property
    def categories(self) -> Category:
        return SEMANTIC_CATEGORIES[self]

    def is_a(self, category: Category) -> bool:
        return bool(SEMANTIC_CATEGORIES[self] & category)

    @classmethod
    def from_name(cls, name: str) -> "SemanticTag":
        return cls[name.upper()]


def _build_semantic_categories() -> Dict[SemanticTag, Category]:
    C = Category
    T = SemanticTag
    phrase_single = C.PHRASE | C.SINGLE_CHILD
    table = {tag: C.NONE for tag in T}
    table.update({
        T.ROOT: C.CONTAINS_PHRASE,
        T.CONJUNCTION_PHRASE: C.PHRASE | C.CONTAINS_PHRASE,
        T.STATEMENT: C.PHRASE,
        T.COMMAND: phrase_single,
        T.QUESTION: C.PHRASE,
        T.YES_NO: C.PHRASE,
        T.INTERJECTION_PHRASE: C.PHRASE,
        T.FRAGMENT_NOUN: phrase_single,
        T.FRAGMENT_ADJECTIVE: phrase_single,
        T.FRAGMENT_ADVERB: phrase_single,
        T.QUESTION_FRAGMENT: phrase_single,
        T.SUBJECT: C.SINGLE_CHILD,
        T.ACTION: C.SINGLE_CHILD,
        T.POSSESSOR: C.SINGLE_CHILD,
        T.OBJECT: C.SINGLE_CHILD,
        T.INDIRECT_OBJECT: C.SINGLE_CHILD,
        T.QUESTION_PRONOUN: C.WORD | C.ANSWER,
        T.QUESTION_DETERMINER: C.WORD | C.ANSWER,
        T.QUESTION_ADVERB: C.WORD | C.ANSWER,
    })
    for tag in (
        T.CONJUNCTION, T.QUESTION_TYPE, T.INTERJECTION_WORD, T.NOUN,
        T.PRONOUN, T.REFERRING_PRONOUN, T.DETERMINER, T.VERB, T.ADJECTIVE,
        T.ADVERB, T.PREPOSITION, T.PARTICLE,
    ):
        table[tag] = C.WORD
    for tag in (T.PLURAL, T.TENSE_TIME, T.TENSE_FRAME, T.COMPARATIVE, T.SUPERLATIVE):
        table[tag] = C.IGNORED
    return table


SEMANTIC_CATEGORIES: Dict[SemanticTag, Category] = _build_semantic_categories()


class TenseTime(Enum):
    PAST = "PAST"
    PRESENT = "PRESENT"
    FUTURE = "FUTURE"
    GENERIC = "GENERIC"


class TenseFrame(Enum):
    SIMPLE = "SIMPLE"
    PERFECT = "PERFECT"
    CONTINUOUS = "CONTINUOUS"
    PERFECT_CONTINUOUS = "PERFECT_CONTINUOUS"


__all__ = [
    "Category",
    "SEMANTIC_CATEGORIES",
    "SemanticTag",
    "Structure",
    "SyntaxTag",
    "TenseFrame",
    "TenseTime",
    "WordClass",
]
