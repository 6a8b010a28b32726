"""Sentence renderer - semantic tree back to surface text."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .morphology import Agreement, EnglishMorphology
from .tags import Category, SemanticTag
from .tree import Node

logger = logging.getLogger(__name__)

Sem = SemanticTag

HEAD_NOUN_TAGS = (Sem.NOUN, Sem.PRONOUN, Sem.QUESTION_PRONOUN, Sem.REFERRING_PRONOUN)
TERMINATORS = (".", "?", "!")


def join_words(parts: Iterable[str]) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(part for part in parts if part)


class SentenceRenderer:
    """Render semantic trees as text.

    Each phrase tag has a fixed ordering of its parts. Word leaves render as
    their text, ignored markers as nothing, and single-child wrappers as
    their child.
    """

    def __init__(self, morphology: Optional[EnglishMorphology] = None):
        self.morphology = morphology or EnglishMorphology.load()
        self._rules: Dict[SemanticTag, Callable[[Node, bool], str]] = {
            Sem.ROOT: self._root,
            Sem.CONJUNCTION_PHRASE: self._conjunction_phrase,
            Sem.STATEMENT: self._statement,
            Sem.YES_NO: self._yes_no,
            Sem.QUESTION: self._question,
            Sem.INTERJECTION_PHRASE: self._interjection,
            Sem.NOUN_PHRASE: self._noun_phrase,
            Sem.VERB_PHRASE: self._verb_phrase,
            Sem.ADJECTIVE_PHRASE: self._modifier_phrase,
            Sem.ADVERB_PHRASE: self._modifier_phrase,
            Sem.PREPOSITION_PHRASE: self._preposition_phrase,
            Sem.SUBORDINATING_CONJUNCTION_PHRASE: self._subordinate_clause,
            Sem.PARTICLE_PHRASE: self._particle_phrase,
        }

    def render(self, tree: Node, punctuate: bool = False) -> str:
        """Text for ``tree``.

        With ``punctuate`` the first character is capitalized and a period is
        appended unless the text already ends a sentence.
        """
        text = self._render(tree, punctuate)
        if punctuate and text:
            text = text[0].upper() + text[1:]
            if not text.endswith(TERMINATORS):
                text += "."
        return text

    def _render(self, node: Node, punctuate: bool = False) -> str:
        if node.is_leaf:
            if node.is_a(Category.WORD):
                return node.word
            if node.is_a(Category.IGNORED):
                return ""
            logger.warning(f"Rendering unexpected leaf {node!r} as its text")
            return node.word
        if not len(node):
            return ""
        if node.tag is Sem.POSSESSOR:
            owner = self._render(node.child(0))
            return self.morphology.possessive(owner) if owner else ""
        if node.is_a(Category.SINGLE_CHILD):
            return self._render(node.child(0))
        rule = self._rules.get(node.tag)
        if rule is None:
            logger.warning(f"No rendering rule for {node.tag.name}; joining children")
            return join_words(self._render(child) for child in node.children)
        return rule(node, punctuate)

    def _parts(self, node: Node, *tags: SemanticTag) -> List[str]:
        """Renderings of the children with ``tags``, grouped in tag order."""
        parts = []
        for tag in tags:
            parts.extend(self._render(child) for child in node.all(tag))
        return parts

    # ------------------------------------------------------------------
    # Sentences
    # ------------------------------------------------------------------

    def _root(self, node: Node, punctuate: bool) -> str:
        return join_words(self.render(child, punctuate) for child in node.children)

    def _conjunction_phrase(self, node: Node, punctuate: bool) -> str:
        phrases = [child for child in node.children if child.tag is not Sem.CONJUNCTION]
        conjunctions = node.all(Sem.CONJUNCTION)
        parts = []
        for position in range(max(len(phrases), len(conjunctions))):
            if position < len(phrases):
                parts.append(self._render(phrases[position]))
            if position < len(conjunctions):
                parts.append(conjunctions[position].word)
        return join_words(parts)

    def _statement(self, node: Node, punctuate: bool) -> str:
        return join_words(self._parts(node, Sem.SUBJECT, Sem.ACTION))

    def _yes_no(self, node: Node, punctuate: bool) -> str:
        text = join_words(self._parts(node, Sem.SUBJECT, Sem.ACTION))
        return text + "?" if punctuate and text else text

    def _question(self, node: Node, punctuate: bool) -> str:
        text = join_words(self._parts(node, Sem.QUESTION_TYPE, Sem.SUBJECT, Sem.ACTION))
        return text + "?" if punctuate and text else text

    def _interjection(self, node: Node, punctuate: bool) -> str:
        return join_words(self._parts(node, Sem.INTERJECTION_WORD))

    # ------------------------------------------------------------------
    # Phrases
    # ------------------------------------------------------------------

    def _noun_phrase(self, node: Node, punctuate: bool) -> str:
        parts = self._parts(node, Sem.DETERMINER, Sem.QUESTION_DETERMINER, Sem.POSSESSOR, Sem.ADJECTIVE_PHRASE)
        parts.extend(self._head_nouns(node))
        parts.extend(self._parts(node, Sem.PREPOSITION_PHRASE, Sem.SUBORDINATING_CONJUNCTION_PHRASE))
        return join_words(parts)

    def _head_nouns(self, node: Node) -> List[str]:
        parent = node.parent
        as_subject = parent is not None and parent.tag is Sem.SUBJECT
        plural = node.first(Sem.PLURAL)
        heads = [child for tag in HEAD_NOUN_TAGS for child in node.all(tag)]
        words = []
        for head in heads:
            word = head.word
            if as_subject:
                word = self.morphology.subject_form(word)
            if plural is not None and head.tag is Sem.NOUN:
                # The marker keeps the surface plural, which beats the rules for "mice".
                word = plural.word if plural.word and len(heads) == 1 else self.morphology.pluralize(word)
            words.append(word)
        return words

    def _verb_phrase(self, node: Node, punctuate: bool) -> str:
        parts = self._parts(node, Sem.ADVERB_PHRASE)
        time = node.first(Sem.TENSE_TIME)
        frame = node.first(Sem.TENSE_FRAME)
        agreement = self._agreement(node)
        for verb in node.all(Sem.VERB):
            parts.append(self.morphology.conjugate(
                verb.word,
                time.word if time is not None else None,
                frame.word if frame is not None else None,
                agreement,
            ))
        parts.extend(self._parts(
            node,
            Sem.INDIRECT_OBJECT,
            Sem.OBJECT,
            Sem.PARTICLE_PHRASE,
            Sem.PREPOSITION_PHRASE,
            Sem.SUBORDINATING_CONJUNCTION_PHRASE,
            Sem.QUESTION_ADVERB,
        ))
        return join_words(parts)

    def _agreement(self, vp: Node) -> Agreement:
        """Person and number of the subject of the clause this verb phrase acts for."""
        action = vp.parent
        if action is None or action.tag is not Sem.ACTION or action.parent is None:
            return Agreement.THIRD_SINGULAR
        subject = action.parent.first(Sem.SUBJECT)
        np = subject.first(Sem.NOUN_PHRASE) if subject is not None else None
        if np is None:
            return Agreement.THIRD_SINGULAR
        heads = [child for tag in HEAD_NOUN_TAGS for child in np.all(tag)]
        if not heads:
            return Agreement.THIRD_SINGULAR
        plural = np.has(Sem.PLURAL) or len(heads) > 1
        return self.morphology.agreement_for(self.morphology.subject_form(heads[0].word), plural)

    def _modifier_phrase(self, node: Node, punctuate: bool) -> str:
        head_tag = Sem.ADJECTIVE if node.tag is Sem.ADJECTIVE_PHRASE else Sem.ADVERB
        parts = self._parts(node, Sem.ADVERB_PHRASE)
        superlative = node.has(Sem.SUPERLATIVE)
        comparative = node.has(Sem.COMPARATIVE)
        for head in node.all(head_tag):
            if superlative:
                parts.append(self.morphology.superlative(head.word))
            elif comparative:
                parts.append(self.morphology.comparative(head.word))
            else:
                parts.append(head.word)
        if head_tag is Sem.ADJECTIVE:
            parts.extend(self._parts(node, Sem.ADJECTIVE_PHRASE))
        parts.extend(self._parts(node, Sem.PREPOSITION_PHRASE))
        return join_words(parts)

    def _preposition_phrase(self, node: Node, punctuate: bool) -> str:
        return join_words(self._parts(node, Sem.PREPOSITION, Sem.OBJECT))

    def _subordinate_clause(self, node: Node, punctuate: bool) -> str:
        return join_words(self._parts(node, Sem.CONJUNCTION, Sem.STATEMENT))

    def _particle_phrase(self, node: Node, punctuate: bool) -> str:
        return join_words(self._parts(node, Sem.PARTICLE))


__all__ = ["SentenceRenderer", "join_words"]
