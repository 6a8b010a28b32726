"""
Structure Transducer - constituency parse to semantic tree.

The walk keeps an output cursor, starting at a fresh ROOT. Each input node
is handed to the rule for the cursor's semantic tag, so the same input tag
means different things depending on what is being built: an NP under a
STATEMENT becomes the subject, an NP under a VERB_PHRASE becomes the object.

Every rule returns a ``Step``:

  - ``cursor``: where the input node's children are attached
  - ``descend``: whether those children are visited at all
  - ``resume``: a replacement cursor for the following siblings, set when a
    rule re-wraps the node being built (conjunctions, stacked modifiers)

When an input subtree is finished the caller simply carries on with its own
cursor, so output depth is decoupled from input depth without any unwinding
bookkeeping.

A rule never raises for odd input. Combinations without a rule are logged
and passed through, and the repair pass afterwards fixes WH-questions whose
subject was parsed as an object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .lexicon import Degree, Lexicon, ModifierInfo, VerbForm, is_wh_word, pronoun_possessor, swap_pronoun
from .syntax import SyntaxNode, SyntaxSource, parse_syntax
from .tags import Category, SemanticTag, SyntaxTag, TenseFrame, TenseTime, WordClass
from .tree import Node, TreeArena

logger = logging.getLogger(__name__)

Sem = SemanticTag
Syn = SyntaxTag

QUESTION_WORD_TAGS = frozenset({
    Syn.WH_PRONOUN,
    Syn.POSSESSIVE_WH_PRONOUN,
    Syn.WH_DETERMINER,
    Syn.WH_ADVERB,
})
ADVERB_QUESTION_WORDS = ("when", "where", "why", "how")


@dataclass
class Step:
    """Outcome of one rule application."""

    cursor: Node
    descend: bool = True
    resume: Optional[Node] = None


Rule = Callable[[SyntaxNode, Node], Step]


class StructureTransducer:
    """Rewrite Penn Treebank parses into semantic trees.

    Args:
        lexicon: word classification service. Defaults to a WordNet-backed
            ``Lexicon``.
    """

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or Lexicon()
        self._rules: Dict[SemanticTag, Rule] = {
            Sem.QUESTION: self._question,
            Sem.YES_NO: self._yes_no,
            Sem.COMMAND: self._command,
            Sem.STATEMENT: self._statement,
            Sem.INTERJECTION_PHRASE: self._interjection,
            Sem.VERB_PHRASE: self._verb_phrase,
            Sem.NOUN_PHRASE: self._noun_phrase,
            Sem.ADJECTIVE_PHRASE: self._adjective_phrase,
            Sem.ADVERB_PHRASE: self._adverb_phrase,
            Sem.PREPOSITION_PHRASE: self._preposition_phrase,
            Sem.SUBORDINATING_CONJUNCTION_PHRASE: self._subordinate_clause,
            Sem.PARTICLE_PHRASE: self._particle_phrase,
        }

    def transduce(self, source: SyntaxSource, arena: Optional[TreeArena] = None) -> Node:
        """Build the semantic tree for one parse and return its ROOT."""
        syntax = parse_syntax(source)
        root = (arena or TreeArena()).tree(Sem.ROOT)
        self._walk(syntax, root)
        repair(root)
        return root

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _walk(self, syntax: SyntaxNode, cursor: Node) -> Node:
        step = self._interpret(syntax, cursor)
        if step.descend and not syntax.is_leaf:
            self._walk_children(syntax, step.cursor)
        return step.resume if step.resume is not None else cursor

    def _walk_children(self, syntax: SyntaxNode, cursor: Node) -> Node:
        for child in syntax.children:
            cursor = self._walk(child, cursor)
        return cursor

    def _interpret(self, syntax: SyntaxNode, cursor: Node) -> Step:
        tag = syntax.tag
        if tag.is_incorrect:
            logger.warning(f"Incorrect tag {syntax.label or tag.name!r} over {syntax.words()!r}; passing through")
            return Step(cursor)
        if tag.is_ignored:
            return Step(cursor)
        if cursor.is_a(Category.CONTAINS_PHRASE):
            return self._top_level(syntax, cursor)
        rule = self._rules.get(cursor.tag, self._unrecognized_parent)
        return rule(syntax, cursor)

    def _unknown(self, syntax: SyntaxNode, cursor: Node) -> Step:
        logger.warning(f"No rule for {syntax.tag.name} under {cursor.tag.name} ({syntax.words()!r}); passing through")
        return Step(cursor)

    def _unrecognized_parent(self, syntax: SyntaxNode, cursor: Node) -> Step:
        logger.warning(f"Unrecognized parent tag {cursor.tag.name} for {syntax.tag.name}; passing through")
        return Step(cursor)

    # ------------------------------------------------------------------
    # Sentence level
    # ------------------------------------------------------------------

    def _top_level(self, syntax: SyntaxNode, cursor: Node) -> Step:
        tag = syntax.tag
        if tag is Syn.DECLARATIVE_CLAUSE:
            first = _first_meaningful(syntax)
            if first is not None and first.tag in (Syn.VERB_PHRASE, Syn.ADVERB_PHRASE):
                return Step(cursor.add_tree(Sem.COMMAND))
            return Step(cursor.add_tree(Sem.STATEMENT))
        if tag is Syn.WH_QUESTION:
            return Step(cursor.add_tree(Sem.QUESTION))
        if tag is Syn.INVERTED_QUESTION:
            return Step(cursor.add_tree(Sem.YES_NO))
        if tag is Syn.FRAGMENT:
            return Step(cursor)
        if tag is Syn.NOUN_PHRASE:
            return Step(cursor.add_tree(Sem.FRAGMENT_NOUN).add_tree(Sem.NOUN_PHRASE))
        if tag is Syn.ADJECTIVE_PHRASE:
            return Step(cursor.add_tree(Sem.FRAGMENT_ADJECTIVE).add_tree(Sem.ADJECTIVE_PHRASE))
        if tag is Syn.ADVERB_PHRASE:
            return Step(cursor.add_tree(Sem.FRAGMENT_ADVERB).add_tree(Sem.ADVERB_PHRASE))
        if tag.is_wh:
            logger.debug(f"Compressing question fragment {syntax}")
            fragment = cursor.add_tree(Sem.QUESTION_FRAGMENT)
            fragment.add_leaf(Sem.QUESTION_TYPE, syntax.words())
            return Step(cursor, descend=False)
        if tag is Syn.INTERJECTION_PHRASE:
            return Step(cursor.add_tree(Sem.INTERJECTION_PHRASE))
        if tag is Syn.INTERJECTION and syntax.is_leaf:
            cursor.add_tree(Sem.INTERJECTION_PHRASE).add_leaf(Sem.INTERJECTION_WORD, syntax.word)
            return Step(cursor, descend=False)
        if tag is Syn.COORDINATING_CONJUNCTION and cursor.tag is Sem.CONJUNCTION_PHRASE:
            cursor.add_leaf(Sem.CONJUNCTION, syntax.words())
            return Step(cursor, descend=False)
        return self._unknown(syntax, cursor)

    def _question(self, syntax: SyntaxNode, question: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf and tag.word_class is WordClass.VERB:
            return self._verb_phrase(syntax, _action_phrase(question))
        if tag in (Syn.WH_NOUN_PHRASE, Syn.WH_ADVERB_PHRASE, Syn.WH_ADJECTIVE_PHRASE):
            self._question_words(syntax, question)
            return Step(question, descend=False)
        if tag is Syn.INVERTED_QUESTION:
            return Step(question)
        if tag is Syn.NOUN_PHRASE:
            return Step(question.get_or_add(Sem.SUBJECT).get_or_add(Sem.NOUN_PHRASE))
        if tag is Syn.VERB_PHRASE:
            return self._verb_phrase(syntax, _action_phrase(question))
        return self._unknown(syntax, question)

    def _question_words(self, syntax: SyntaxNode, question: Node) -> None:
        question_word = None
        noun = None
        for child in syntax.children:
            if child.is_leaf and child.tag in QUESTION_WORD_TAGS:
                if question_word is None:
                    question_word = child.word
                else:
                    logger.warning(f"Multiple question words in {syntax}; keeping {question_word!r}")
            elif child.tag.word_class is WordClass.NOUN or child.tag is Syn.NOUN_PHRASE:
                if noun is None:
                    noun = child
                else:
                    logger.warning(f"Multiple nouns in question phrase {syntax}; keeping {noun}")
            elif not child.tag.is_ignored:
                logger.warning(f"Unexpected {child.tag.name} in question phrase {syntax}")

        if question_word is None:
            logger.warning(f"No question word found in {syntax}")
            return

        if question_word in ("who", "whom"):
            _question_object(question).add_leaf(Sem.QUESTION_PRONOUN, "who")
        elif question_word == "what":
            target = _question_object(question)
            if noun is None:
                target.add_leaf(Sem.QUESTION_PRONOUN, "what")
            else:
                self._fill(noun, target)
                target.add_leaf(Sem.QUESTION_DETERMINER, "what")
        elif question_word in ADVERB_QUESTION_WORDS:
            _action_phrase(question).add_leaf(Sem.QUESTION_ADVERB, question_word)
        elif question_word == "which":
            target = _question_object(question)
            if noun is not None:
                self._fill(noun, target)
            target.add_leaf(Sem.QUESTION_DETERMINER, "which")
        elif question_word == "whose":
            target = _question_object(question)
            if noun is not None:
                self._fill(noun, target)
            owner = target.add_tree(Sem.POSSESSOR).add_tree(Sem.NOUN_PHRASE)
            owner.add_leaf(Sem.QUESTION_PRONOUN, "who")
        else:
            logger.warning(f"Unknown question word {question_word!r}")

    def _fill(self, syntax: SyntaxNode, noun_phrase: Node) -> None:
        """Transduce a noun or NP straight into ``noun_phrase``."""
        if syntax.is_leaf:
            self._walk(syntax, noun_phrase)
        else:
            self._walk_children(syntax, noun_phrase)

    def _yes_no(self, syntax: SyntaxNode, question: Node) -> Step:
        if syntax.tag is Syn.NOUN_PHRASE and not question.has(Sem.SUBJECT):
            return Step(question.add_tree(Sem.SUBJECT).add_tree(Sem.NOUN_PHRASE))
        return self._verb_phrase(syntax, _action_phrase(question))

    def _command(self, syntax: SyntaxNode, command: Node) -> Step:
        if syntax.tag is Syn.VERB_PHRASE:
            return Step(_action_phrase(command))
        if syntax.tag is Syn.ADVERB_PHRASE:
            return Step(_action_phrase(command).add_tree(Sem.ADVERB_PHRASE))
        return self._unknown(syntax, command)

    def _statement(self, syntax: SyntaxNode, statement: Node) -> Step:
        tag = syntax.tag
        if tag is Syn.NOUN_PHRASE:
            return Step(statement.get_or_add(Sem.SUBJECT).get_or_add(Sem.NOUN_PHRASE))
        if tag is Syn.VERB_PHRASE:
            return Step(_action_phrase(statement))
        if tag is Syn.ADVERB_PHRASE:
            return Step(_action_phrase(statement).add_tree(Sem.ADVERB_PHRASE))
        if tag is Syn.DECLARATIVE_CLAUSE:
            return Step(statement)
        if tag is Syn.COORDINATING_CONJUNCTION:
            return self._conjoin(syntax, statement)
        return self._unknown(syntax, statement)

    def _conjoin(self, syntax: SyntaxNode, statement: Node) -> Step:
        if statement.parent is None:
            logger.warning(f"Cannot conjoin detached {statement.tag.name}")
            return Step(statement, descend=False)
        wrapper = statement.insert_above(statement.arena.tree(Sem.CONJUNCTION_PHRASE))
        wrapper.add_leaf(Sem.CONJUNCTION, syntax.words())
        return Step(statement, descend=False, resume=wrapper)

    def _interjection(self, syntax: SyntaxNode, interjection: Node) -> Step:
        if syntax.is_leaf:
            interjection.add_leaf(Sem.INTERJECTION_WORD, syntax.word)
            return Step(interjection, descend=False)
        return Step(interjection)

    # ------------------------------------------------------------------
    # Verb phrases
    # ------------------------------------------------------------------

    def _verb_phrase(self, syntax: SyntaxNode, vp: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf:
            if tag.word_class is WordClass.VERB:
                self._add_verb(syntax, vp)
                return Step(vp, descend=False)
            if tag is Syn.WH_ADVERB:
                vp.add_leaf(Sem.QUESTION_ADVERB, syntax.word)
                return Step(vp, descend=False)
            if tag.word_class is WordClass.ADVERB:
                return self._adverb_phrase(syntax, vp.add_tree(Sem.ADVERB_PHRASE))
            if tag is Syn.TO:
                return Step(vp, descend=False)
        if tag is Syn.ADVERB_PHRASE:
            return Step(vp.add_tree(Sem.ADVERB_PHRASE))
        if tag is Syn.VERB_PHRASE:
            # The verb seen so far was an auxiliary; the nested phrase holds the real one.
            vp.remove_all(Sem.VERB)
            return Step(vp)
        if tag is Syn.NOUN_PHRASE:
            return Step(_object_slot(vp).add_tree(Sem.NOUN_PHRASE))
        if tag is Syn.ADJECTIVE_PHRASE:
            return Step(_object_slot(vp).add_tree(Sem.ADJECTIVE_PHRASE))
        if tag is Syn.DECLARATIVE_CLAUSE:
            return Step(_object_slot(vp).add_tree(Sem.VERB_PHRASE))
        if tag is Syn.PREPOSITIONAL_PHRASE:
            return Step(vp.add_tree(Sem.PREPOSITION_PHRASE))
        if tag is Syn.SUBORDINATE_CLAUSE:
            return Step(vp.add_tree(Sem.SUBORDINATING_CONJUNCTION_PHRASE))
        if tag is Syn.PARTICLE_PHRASE:
            return Step(vp.add_tree(Sem.PARTICLE_PHRASE))
        return self._unknown(syntax, vp)

    def _add_verb(self, syntax: SyntaxNode, vp: Node) -> None:
        info = self.lexicon.verb(syntax.word, syntax.tag)
        if info is None:
            logger.warning(f"No verb information for {syntax.word!r} ({syntax.tag.name})")
            return
        form = info.form
        if form is not VerbForm.MODAL:
            vp.add_leaf(Sem.VERB, info.base)

        frame = _marker(vp, Sem.TENSE_FRAME)
        if form is VerbForm.BASE:
            _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.SIMPLE.value)
        elif form is VerbForm.MODAL:
            _set_marker(vp, Sem.TENSE_TIME, TenseTime.FUTURE.value)
        elif form is VerbForm.PRESENT_SIMPLE:
            _set_marker(vp, Sem.TENSE_TIME, TenseTime.PRESENT.value)
            _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.SIMPLE.value)
        elif form is VerbForm.PAST_SIMPLE:
            _set_marker(vp, Sem.TENSE_TIME, TenseTime.PAST.value)
            _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.SIMPLE.value)
        elif form is VerbForm.CONTINUOUS:
            if frame == TenseFrame.PERFECT.value:
                _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.PERFECT_CONTINUOUS.value)
            else:
                _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.CONTINUOUS.value)
        elif form is VerbForm.PERFECT:
            if frame == TenseFrame.CONTINUOUS.value:
                _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.PERFECT_CONTINUOUS.value)
            else:
                _set_marker(vp, Sem.TENSE_FRAME, TenseFrame.PERFECT.value)

    # ------------------------------------------------------------------
    # Noun phrases
    # ------------------------------------------------------------------

    def _noun_phrase(self, syntax: SyntaxNode, np: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf:
            word = syntax.word
            if tag.word_class is WordClass.NOUN:
                self._add_noun(syntax, np)
                return Step(np, descend=False)
            if tag.word_class is WordClass.ADJECTIVE:
                return self._adjective_phrase(syntax, np.add_tree(Sem.ADJECTIVE_PHRASE))
            if tag.word_class is WordClass.ADVERB:
                if word == "not":
                    _negation_target(np).add_tree(Sem.ADVERB_PHRASE).add_leaf(Sem.ADVERB, word)
                else:
                    np.add_leaf(Sem.NOUN, word)
                return Step(np, descend=False)
            if tag in (Syn.DETERMINER, Syn.CARDINAL_NUMBER, Syn.PREDETERMINER):
                np.add_leaf(Sem.DETERMINER, "a" if word == "an" else word)
                return Step(np, descend=False)
            if tag is Syn.EXISTENTIAL_THERE:
                np.add_leaf(Sem.NOUN, word)
                return Step(np, descend=False)
            if tag is Syn.COORDINATING_CONJUNCTION:
                return Step(np, descend=False)
            if tag is Syn.POSSESSIVE_ENDING:
                _possessive_ending(np)
                return Step(np, descend=False)
            if tag in (Syn.POSSESSIVE_PRONOUN, Syn.POSSESSIVE_WH_PRONOUN):
                owner = pronoun_possessor(word)
                holder = np.add_tree(Sem.POSSESSOR).add_tree(Sem.NOUN_PHRASE)
                holder.add_leaf(Sem.QUESTION_PRONOUN if is_wh_word(owner) else Sem.PRONOUN, owner)
                return Step(np, descend=False)
        if tag is Syn.NOUN_PHRASE:
            if syntax.has_child(Syn.POSSESSIVE_ENDING):
                return Step(np.add_tree(Sem.POSSESSOR).add_tree(Sem.NOUN_PHRASE))
            return Step(np)
        if tag in (Syn.QUANTIFIER_PHRASE, Syn.NOUN_PHRASE_HEAD):
            return Step(np)
        if tag is Syn.ADJECTIVE_PHRASE:
            return Step(np.add_tree(Sem.ADJECTIVE_PHRASE))
        if tag is Syn.PREPOSITIONAL_PHRASE:
            return Step(np.add_tree(Sem.PREPOSITION_PHRASE))
        if tag is Syn.SUBORDINATE_CLAUSE:
            return Step(np.add_tree(Sem.SUBORDINATING_CONJUNCTION_PHRASE))
        return self._unknown(syntax, np)

    def _add_noun(self, syntax: SyntaxNode, np: Node) -> None:
        info = self.lexicon.noun(syntax.word, syntax.tag)
        if info is None:
            np.add_leaf(Sem.NOUN, syntax.word)
            return
        if info.pronoun and (info.question or is_wh_word(info.base)):
            np.add_leaf(Sem.QUESTION_PRONOUN, info.base)
        elif info.pronoun:
            np.add_leaf(Sem.PRONOUN, swap_pronoun(info.base))
        else:
            np.add_leaf(Sem.NOUN, swap_pronoun(info.base))
        if info.plural:
            np.add_leaf(Sem.PLURAL, info.word)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def _adjective_phrase(self, syntax: SyntaxNode, adjp: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf:
            if tag.word_class is WordClass.VERB:
                # Participles used as adjectives: "I am tired".
                tag = Syn.ADJECTIVE
            if tag.word_class is WordClass.ADJECTIVE:
                target = adjp
                resume = None
                if adjp.has(Sem.ADJECTIVE):
                    parent = adjp.parent
                    if parent is None or parent.is_a(Category.SINGLE_CHILD):
                        # The slot holds one phrase, so later adjectives nest inside it.
                        target = adjp.add_tree(Sem.ADJECTIVE_PHRASE)
                    else:
                        target = parent.add_tree(Sem.ADJECTIVE_PHRASE)
                        resume = target
                info = self.lexicon.adjective(syntax.word, tag)
                target.add_leaf(Sem.ADJECTIVE, swap_pronoun(info.base))
                _add_degree(target, info)
                return Step(adjp, descend=False, resume=resume)
            if tag.word_class is WordClass.ADVERB:
                return self._adverb_phrase(syntax, adjp.add_tree(Sem.ADVERB_PHRASE))
        if tag is Syn.ADVERB_PHRASE:
            return Step(adjp.add_tree(Sem.ADVERB_PHRASE))
        if tag is Syn.ADJECTIVE_PHRASE:
            return Step(adjp)
        if tag is Syn.PREPOSITIONAL_PHRASE:
            return Step(adjp.add_tree(Sem.PREPOSITION_PHRASE))
        return self._unknown(syntax, adjp)

    def _adverb_phrase(self, syntax: SyntaxNode, advp: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf:
            if tag is Syn.WH_ADVERB:
                (advp.parent or advp).add_leaf(Sem.QUESTION_ADVERB, syntax.word)
                return Step(advp, descend=False)
            if tag.word_class is WordClass.ADVERB:
                target = advp
                resume = None
                if advp.has(Sem.ADVERB):
                    target = advp.insert_above(advp.arena.tree(Sem.ADVERB_PHRASE))
                    resume = target
                info = self.lexicon.adverb(syntax.word, tag)
                target.add_leaf(Sem.ADVERB, info.base)
                _add_degree(target, info)
                return Step(advp, descend=False, resume=resume)
            if tag is Syn.COORDINATING_CONJUNCTION:
                return Step(advp, descend=False)
        if tag is Syn.ADVERB_PHRASE:
            return Step(advp)
        if tag is Syn.PREPOSITIONAL_PHRASE:
            return Step(advp.add_tree(Sem.PREPOSITION_PHRASE))
        return self._unknown(syntax, advp)

    # ------------------------------------------------------------------
    # Small phrases
    # ------------------------------------------------------------------

    def _preposition_phrase(self, syntax: SyntaxNode, pp: Node) -> Step:
        if syntax.is_leaf and syntax.tag in (Syn.PREPOSITION, Syn.TO):
            pp.add_leaf(Sem.PREPOSITION, syntax.word)
            return Step(pp, descend=False)
        if syntax.tag is Syn.NOUN_PHRASE:
            return Step(pp.add_tree(Sem.OBJECT).add_tree(Sem.NOUN_PHRASE))
        return self._unknown(syntax, pp)

    def _subordinate_clause(self, syntax: SyntaxNode, clause: Node) -> Step:
        tag = syntax.tag
        if syntax.is_leaf and tag is Syn.PREPOSITION:
            clause.add_leaf(Sem.CONJUNCTION, syntax.word)
            return Step(clause, descend=False)
        if tag is Syn.DECLARATIVE_CLAUSE:
            return Step(clause.get_or_add(Sem.STATEMENT))
        if tag is Syn.WH_NOUN_PHRASE:
            subject = clause.get_or_add(Sem.STATEMENT).get_or_add(Sem.SUBJECT).get_or_add(Sem.NOUN_PHRASE)
            subject.add_leaf(Sem.REFERRING_PRONOUN, syntax.words())
            return Step(clause, descend=False)
        if tag is Syn.WH_ADVERB_PHRASE:
            clause.add_leaf(Sem.CONJUNCTION, syntax.words())
            return Step(clause, descend=False)
        return self._unknown(syntax, clause)

    def _particle_phrase(self, syntax: SyntaxNode, particles: Node) -> Step:
        if syntax.is_leaf and syntax.tag is Syn.PARTICLE:
            particles.add_leaf(Sem.PARTICLE, syntax.word)
            return Step(particles, descend=False)
        return self._unknown(syntax, particles)


def _first_meaningful(syntax: SyntaxNode) -> Optional[SyntaxNode]:
    for child in syntax.children:
        if not child.tag.is_ignored:
            return child
    return None


def _action_phrase(clause: Node) -> Node:
    return clause.get_or_add(Sem.ACTION).get_or_add(Sem.VERB_PHRASE)


def _question_object(question: Node) -> Node:
    return _action_phrase(question).add_tree(Sem.OBJECT).add_tree(Sem.NOUN_PHRASE)


def _object_slot(vp: Node) -> Node:
    """OBJECT for new material; an existing object is demoted to INDIRECT_OBJECT."""
    existing = vp.first(Sem.OBJECT)
    if existing is None:
        return vp.add_tree(Sem.OBJECT)
    indirect = vp.get_or_add(Sem.INDIRECT_OBJECT)
    for child in existing.children:
        indirect.add_child(child)
    return existing


def _marker(node: Node, tag: SemanticTag) -> Optional[str]:
    leaf = node.first(tag)
    return leaf.word if leaf is not None else None


def _set_marker(node: Node, tag: SemanticTag, value: str) -> None:
    node.remove_all(tag)
    node.add_leaf(tag, value)


def _add_degree(node: Node, info: ModifierInfo) -> None:
    if info.degree is Degree.COMPARATIVE:
        node.add_leaf(Sem.COMPARATIVE, info.word)
    elif info.degree is Degree.SUPERLATIVE:
        node.add_leaf(Sem.SUPERLATIVE, info.word)


def _negation_target(np: Node) -> Node:
    for ancestor in np.ancestors():
        if ancestor.tag is Sem.VERB_PHRASE:
            return ancestor
    return np


def _possessive_ending(np: Node) -> None:
    """Move the words gathered so far into a POSSESSOR inside ``np``."""
    parent = np.parent
    if parent is not None and parent.tag is Sem.POSSESSOR:
        return
    gathered = np.children
    if not gathered:
        logger.warning("Possessive ending with nothing to possess")
        return
    owner = np.arena.tree(Sem.NOUN_PHRASE, gathered)
    np.add_tree(Sem.POSSESSOR).add_child(owner)


def repair(root: Node) -> Node:
    """Post-order fix-ups applied after transduction."""
    for node in reversed(list(root.walk())):
        if node.tag is Sem.QUESTION:
            _promote_question_subject(node)
    return root


def _promote_question_subject(question: Node) -> None:
    # WH-questions like "who ate the cake" parse their subject as an object.
    if question.has(Sem.SUBJECT):
        return
    action = question.first(Sem.ACTION)
    vp = action.first(Sem.VERB_PHRASE) if action is not None else None
    if vp is None:
        return
    for slot_tag in (Sem.INDIRECT_OBJECT, Sem.OBJECT):
        slot = vp.first(slot_tag)
        if slot is None:
            continue
        np = slot.first(Sem.NOUN_PHRASE)
        if np is None:
            return
        vp.remove_child(slot)
        question.add_tree(Sem.SUBJECT).add_child(np)
        return


def split_phrases(tree: Node) -> List[Node]:
    """Top-level PHRASE nodes in document order, looking inside containers."""
    if tree.is_a(Category.CONTAINS_PHRASE):
        phrases: List[Node] = []
        for child in tree.children:
            phrases.extend(split_phrases(child))
        return phrases
    if tree.is_a(Category.PHRASE):
        return [tree]
    return []


__all__ = ["Step", "StructureTransducer", "repair", "split_phrases"]
