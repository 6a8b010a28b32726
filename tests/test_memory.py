from arbor.memory import StatementMemory, structure_score
from arbor.tags import SemanticTag as Sem


def statement(arena, noun, adjective):
    tree = arena.tree(Sem.STATEMENT)
    tree.add_tree(Sem.SUBJECT).add_tree(Sem.NOUN_PHRASE).add_leaf(Sem.NOUN, noun)
    vp = tree.add_tree(Sem.ACTION).add_tree(Sem.VERB_PHRASE)
    vp.add_leaf(Sem.VERB, "be")
    vp.add_tree(Sem.OBJECT).add_tree(Sem.ADJECTIVE_PHRASE).add_leaf(Sem.ADJECTIVE, adjective)
    return tree


def what_is(arena, noun):
    tree = arena.tree(Sem.QUESTION)
    tree.add_tree(Sem.SUBJECT).add_tree(Sem.NOUN_PHRASE).add_leaf(Sem.NOUN, noun)
    vp = tree.add_tree(Sem.ACTION).add_tree(Sem.VERB_PHRASE)
    vp.add_leaf(Sem.VERB, "be")
    vp.add_tree(Sem.OBJECT).add_tree(Sem.NOUN_PHRASE).add_leaf(Sem.QUESTION_PRONOUN, "what")
    return tree


class TestScore:
    def test_matching_subject_scores_higher(self, arena):
        query = what_is(arena, "cat")
        assert structure_score(query, statement(arena, "cat", "black")) == 0.75
        assert structure_score(query, statement(arena, "dog", "brown")) == 0.25

    def test_identical_trees_score_one(self, arena):
        assert structure_score(statement(arena, "cat", "black"), statement(arena, "cat", "black")) == 1.0

    def test_answer_slots_do_not_count(self, arena):
        query = arena.tree(Sem.NOUN_PHRASE)
        query.add_leaf(Sem.QUESTION_PRONOUN, "what")
        candidate = arena.tree(Sem.NOUN_PHRASE)
        candidate.add_leaf(Sem.NOUN, "what")
        assert structure_score(query, candidate) == 0.0

    def test_leaf_words_are_consumed_once(self, arena):
        query = arena.tree(Sem.NOUN_PHRASE)
        query.add_leaf(Sem.NOUN, "cat")
        query.add_leaf(Sem.NOUN, "cat")
        candidate = arena.tree(Sem.NOUN_PHRASE)
        candidate.add_leaf(Sem.NOUN, "cat")
        assert structure_score(query, candidate) == 0.5

    def test_empty_nodes_score_zero(self, arena):
        assert structure_score(arena.tree(Sem.STATEMENT), arena.tree(Sem.STATEMENT)) == 0.0


class TestRecall:
    def test_recall_picks_best_statement(self, arena):
        memory = StatementMemory()
        dog = statement(arena, "dog", "brown")
        cat = statement(arena, "cat", "black")
        memory.store(dog)
        memory.store(cat)
        assert memory.recall(what_is(arena, "cat")) == cat
        assert [score for _, score in memory.ranked(what_is(arena, "cat"))] == [0.25, 0.75]

    def test_ties_go_to_later_statement(self, arena):
        memory = StatementMemory()
        first = statement(arena, "cat", "black")
        second = statement(arena, "cat", "black")
        memory.store(first)
        memory.store(second)
        assert memory.recall(what_is(arena, "cat")) == second

    def test_empty_memory_recalls_nothing(self, arena):
        assert StatementMemory().recall(what_is(arena, "cat")) is None

    def test_unrelated_query_recalls_nothing(self, arena):
        memory = StatementMemory()
        memory.store(statement(arena, "cat", "black"))
        query = arena.tree(Sem.QUESTION)
        query.add_tree(Sem.SUBJECT).add_tree(Sem.NOUN_PHRASE).add_leaf(Sem.NOUN, "fish")
        assert memory.recall(query) is None

    def test_store_keeps_duplicates_until_cleared(self, arena):
        memory = StatementMemory()
        tree = statement(arena, "cat", "black")
        memory.store(tree)
        memory.store(tree)
        assert len(memory) == 2
        assert list(memory) == [tree, tree]
        memory.clear()
        assert len(memory) == 0

    def test_containing(self, arena):
        memory = StatementMemory()
        dog = statement(arena, "dog", "brown")
        cat = statement(arena, "cat", "black")
        memory.store(dog)
        memory.store(cat)
        pattern = arena.tree(Sem.NOUN_PHRASE)
        pattern.add_leaf(Sem.NOUN, "cat")
        assert memory.containing(pattern) == [cat]
