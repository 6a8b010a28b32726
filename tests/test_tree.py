"""Tests for the arena-backed tagged tree."""

import random

import pytest

from arbor.tags import SemanticTag as T
from arbor.tree import (
    CyclicAttachmentError,
    ForeignNodeError,
    LeafChildrenError,
    TreeArena,
    new_tree,
)


def noun_phrase(arena, *words):
    return arena.tree(T.NOUN_PHRASE, [arena.leaf(T.NOUN, word) for word in words])


def assert_consistent(arena):
    """Every parent lists exactly the nodes that point back at it."""
    for index in range(len(arena)):
        node = arena.node(index)
        for child in node.children:
            assert child.parent == node
        parent = node.parent
        if parent is not None:
            assert parent.children.count(node) == 1


class TestConstruction:

    def test_leaf_and_internal(self, arena):
        leaf = arena.leaf(T.NOUN, "cat")
        phrase = arena.tree(T.NOUN_PHRASE, [leaf])
        assert leaf.is_leaf and leaf.word == "cat"
        assert not phrase.is_leaf and phrase.word is None
        assert phrase.children == [leaf]
        assert leaf.parent == phrase

    def test_empty_internal_node(self):
        root = new_tree()
        assert root.tag is T.ROOT
        assert len(root) == 0
        assert not root.is_leaf

    def test_lookup_by_tag_and_leaf(self, arena):
        np = arena.tree(T.NOUN_PHRASE, [
            arena.leaf(T.DETERMINER, "the"),
            arena.leaf(T.NOUN, "cat"),
            arena.leaf(T.NOUN, "dog"),
        ])
        assert np.first(T.NOUN).word == "cat"
        assert [n.word for n in np.all(T.NOUN)] == ["cat", "dog"]
        assert np.has(T.DETERMINER)
        assert not np.has(T.PLURAL)
        assert np.index_of(T.NOUN) == 1
        assert np.index_of(T.PLURAL) == -1
        assert np.find_leaf(T.NOUN, "dog").word == "dog"
        assert np.find_leaf(T.NOUN, "bird") is None
        assert np.has_leaf(T.DETERMINER, "the")
        assert len(np.find_leaves(T.NOUN, "cat")) == 1

    def test_get_or_add_reuses_existing(self, arena):
        statement = arena.tree(T.STATEMENT)
        subject = statement.get_or_add(T.SUBJECT)
        assert statement.get_or_add(T.SUBJECT) == subject
        assert len(statement) == 1


class TestAttachment:

    def test_attach_moves_between_parents(self, arena):
        first = arena.tree(T.OBJECT)
        second = arena.tree(T.INDIRECT_OBJECT)
        np = noun_phrase(arena, "cake")
        first.add_child(np)
        second.add_child(np)
        assert len(first) == 0
        assert second.children == [np]
        assert np.parent == second
        assert_consistent(arena)

    def test_add_child_at_position(self, arena):
        np = noun_phrase(arena, "cat")
        np.add_child(arena.leaf(T.DETERMINER, "the"), 0)
        assert [c.tag for c in np.children] == [T.DETERMINER, T.NOUN]

    def test_remove_child(self, arena):
        np = noun_phrase(arena, "cat")
        cat = np.first(T.NOUN)
        assert np.remove_child(cat)
        assert cat.parent is None
        assert not np.remove_child(cat)

    def test_cannot_attach_to_self(self, arena):
        np = arena.tree(T.NOUN_PHRASE)
        with pytest.raises(CyclicAttachmentError):
            np.add_child(np)

    def test_cannot_attach_under_descendant(self, arena):
        outer = arena.tree(T.SUBJECT)
        inner = outer.add_tree(T.NOUN_PHRASE)
        deepest = inner.add_tree(T.POSSESSOR)
        with pytest.raises(CyclicAttachmentError):
            deepest.add_child(outer)
        assert outer.parent is None
        assert_consistent(arena)

    def test_cycle_error_is_value_error(self, arena):
        node = arena.tree(T.NOUN_PHRASE)
        with pytest.raises(ValueError):
            node.add_child(node)

    def test_leaf_rejects_children(self, arena):
        leaf = arena.leaf(T.NOUN, "cat")
        with pytest.raises(LeafChildrenError):
            leaf.add_child(arena.leaf(T.NOUN, "dog"))

    def test_foreign_arena_rejected(self, arena):
        other = TreeArena()
        with pytest.raises(ForeignNodeError):
            arena.tree(T.NOUN_PHRASE).add_child(other.leaf(T.NOUN, "cat"))

    def test_random_moves_keep_single_parentage(self, arena):
        rng = random.Random(7)
        nodes = [arena.tree(T.NOUN_PHRASE) for _ in range(12)]
        for _ in range(200):
            parent, child = rng.sample(nodes, 2)
            if child == parent or child.is_ancestor_of(parent):
                with pytest.raises(CyclicAttachmentError):
                    parent.add_child(child)
            elif rng.random() < 0.2:
                child.detach()
            else:
                parent.add_child(child)
            assert_consistent(arena)


class TestRestructuring:

    def test_insert_above_keeps_position(self, arena):
        statement = arena.tree(T.STATEMENT)
        subject = statement.add_tree(T.SUBJECT)
        action = statement.add_tree(T.ACTION)
        wrapper = subject.insert_above(arena.tree(T.CONJUNCTION_PHRASE))
        assert statement.children == [wrapper, action]
        assert wrapper.children == [subject]
        assert subject.parent == wrapper
        assert_consistent(arena)

    def test_insert_above_root_node(self, arena):
        statement = arena.tree(T.STATEMENT)
        wrapper = statement.insert_above(arena.tree(T.CONJUNCTION_PHRASE))
        assert wrapper.parent is None
        assert statement.parent == wrapper

    def test_insert_above_rejects_ancestor_wrapper(self, arena):
        outer = arena.tree(T.STATEMENT)
        inner = outer.add_tree(T.SUBJECT)
        with pytest.raises(CyclicAttachmentError):
            inner.insert_above(outer)

    def test_replace_with_splices_in_place(self, arena):
        np = arena.tree(T.NOUN_PHRASE, [
            arena.leaf(T.DETERMINER, "all"),
            arena.leaf(T.PRONOUN, "it"),
            arena.leaf(T.PLURAL, ""),
        ])
        pronoun = np.first(T.PRONOUN)
        pronoun.replace_with([arena.leaf(T.DETERMINER, "the"), arena.leaf(T.NOUN, "cat")])
        assert [c.word for c in np.children] == ["all", "the", "cat", ""]
        assert pronoun.parent is None

    def test_copy_is_independent(self, arena):
        np = noun_phrase(arena, "cat")
        other = TreeArena()
        duplicate = np.copy(other)
        assert duplicate.arena is other
        assert duplicate.matches(np)
        duplicate.first(T.NOUN).detach()
        assert len(np) == 1


class TestMatching:

    def test_unordered_children(self, arena):
        a = arena.tree(T.NOUN_PHRASE, [arena.leaf(T.DETERMINER, "the"), arena.leaf(T.NOUN, "cat")])
        b = arena.tree(T.NOUN_PHRASE, [arena.leaf(T.NOUN, "cat"), arena.leaf(T.DETERMINER, "the")])
        assert a.matches(b)
        assert b.matches(a)

    def test_extra_children(self, arena):
        small = noun_phrase(arena, "cat")
        large = arena.tree(T.NOUN_PHRASE, [arena.leaf(T.DETERMINER, "the"), arena.leaf(T.NOUN, "cat")])
        assert not small.matches(large)
        assert small.matches(large, ignore_extra_children=True)
        assert not large.matches(small, ignore_extra_children=True)

    def test_leaf_text_and_tag_must_agree(self, arena):
        assert not arena.leaf(T.NOUN, "cat").matches(arena.leaf(T.NOUN, "dog"))
        assert not arena.leaf(T.NOUN, "cat").matches(arena.leaf(T.PRONOUN, "cat"))

    def test_contains_match(self, arena):
        statement = arena.tree(T.STATEMENT, [
            arena.tree(T.SUBJECT, [arena.tree(T.NOUN_PHRASE, [
                arena.leaf(T.DETERMINER, "the"), arena.leaf(T.NOUN, "cat"),
            ])]),
        ])
        assert statement.contains_match(noun_phrase(TreeArena(), "cat"))
        assert not statement.contains_match(noun_phrase(TreeArena(), "dog"))


def test_leaves_and_words_in_document_order(arena):
    tree = arena.tree(T.STATEMENT, [
        arena.tree(T.SUBJECT, [noun_phrase(arena, "cats")]),
        arena.tree(T.ACTION, [arena.tree(T.VERB_PHRASE, [arena.leaf(T.VERB, "sleep")])]),
    ])
    assert tree.words() == "cats sleep"
    assert [leaf.word for leaf in tree.leaves()] == ["cats", "sleep"]
    assert tree.sexpr() == "(STATEMENT (SUBJECT (NOUN_PHRASE (NOUN cats))) (ACTION (VERB_PHRASE (VERB sleep))))"
    assert tree.pformat().splitlines()[0] == "(STATEMENT"
