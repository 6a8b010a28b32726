from arbor.tags import (
    SEMANTIC_CATEGORIES,
    Category,
    SemanticTag,
    Structure,
    SyntaxTag,
    WordClass,
)


def test_every_semantic_tag_is_classified():
    assert set(SEMANTIC_CATEGORIES) == set(SemanticTag)


def test_answer_slots_are_words():
    for tag in (SemanticTag.QUESTION_PRONOUN, SemanticTag.QUESTION_DETERMINER, SemanticTag.QUESTION_ADVERB):
        assert tag.is_a(Category.WORD)
        assert tag.is_a(Category.ANSWER)
    assert not SemanticTag.NOUN.is_a(Category.ANSWER)


def test_phrase_categories():
    assert SemanticTag.ROOT.categories == Category.CONTAINS_PHRASE
    assert SemanticTag.CONJUNCTION_PHRASE.is_a(Category.PHRASE)
    assert SemanticTag.CONJUNCTION_PHRASE.is_a(Category.CONTAINS_PHRASE)
    assert SemanticTag.COMMAND.is_a(Category.SINGLE_CHILD)
    assert not SemanticTag.STATEMENT.is_a(Category.SINGLE_CHILD)
    assert SemanticTag.NOUN_PHRASE.categories == Category.NONE


def test_markers_are_ignored():
    for tag in (SemanticTag.PLURAL, SemanticTag.TENSE_TIME, SemanticTag.TENSE_FRAME,
                SemanticTag.COMPARATIVE, SemanticTag.SUPERLATIVE):
        assert tag.is_a(Category.IGNORED)
        assert not tag.is_a(Category.WORD)


def test_syntax_classification():
    assert SyntaxTag.VERB_PRESENT_THIRD_PERSON.word_class is WordClass.VERB
    assert SyntaxTag.PERSONAL_PRONOUN.word_class is WordClass.NOUN
    assert SyntaxTag.WH_ADVERB.word_class is WordClass.ADVERB
    assert SyntaxTag.DETERMINER.word_class is WordClass.OTHER
    assert SyntaxTag.NOUN_PHRASE.structure is Structure.PHRASE
    assert SyntaxTag.WH_QUESTION.structure is Structure.CLAUSE
    assert SyntaxTag.COMMA.is_ignored
    assert SyntaxTag.ROOT.is_ignored
    assert SyntaxTag.SYMBOL.is_incorrect
    assert SyntaxTag.WH_NOUN_PHRASE.is_wh


def test_from_label():
    assert SyntaxTag.from_label("NP") is SyntaxTag.NOUN_PHRASE
    assert SyntaxTag.from_label("NP-SBJ") is SyntaxTag.NOUN_PHRASE
    assert SyntaxTag.from_label("PRP$") is SyntaxTag.POSSESSIVE_PRONOUN
    assert SyntaxTag.from_label("-LRB-") is SyntaxTag.OPENING_PARENTHESIS
    assert SyntaxTag.from_label("-NONE-") is SyntaxTag.UNKNOWN
    assert SyntaxTag.from_label("NOPE") is SyntaxTag.UNKNOWN
