import logging

from arbor.lexicon import (
    Degree,
    Lexicon,
    VerbForm,
    is_wh_word,
    pronoun_possessor,
    swap_pronoun,
)
from arbor.tags import SyntaxTag


class TestNouns:
    def test_plural_noun_is_lemmatized(self, lexicon):
        info = lexicon.noun("cats", SyntaxTag.NOUN_PLURAL)
        assert info.base == "cat"
        assert info.plural
        assert not info.pronoun

    def test_pronouns_keep_their_surface_form(self, lexicon):
        info = lexicon.noun("i", SyntaxTag.PERSONAL_PRONOUN)
        assert info.base == "i"
        assert info.pronoun
        assert not info.question

    def test_wh_pronoun_is_a_question(self, lexicon):
        info = lexicon.noun("who", SyntaxTag.WH_PRONOUN)
        assert info.pronoun and info.question

    def test_wrong_class_returns_none(self, lexicon):
        assert lexicon.noun("run", SyntaxTag.VERB_BASE) is None
        assert lexicon.verb("cat", SyntaxTag.NOUN) is None
        assert lexicon.adjective("quickly", SyntaxTag.ADVERB) is None
        assert lexicon.adverb("happy", SyntaxTag.ADJECTIVE) is None


class TestVerbs:
    def test_auxiliaries_map_to_their_infinitive(self, lexicon):
        info = lexicon.verb("is", SyntaxTag.VERB_PRESENT_THIRD_PERSON)
        assert info.base == "be"
        assert info.form is VerbForm.PRESENT_SIMPLE
        assert lexicon.verb("had", SyntaxTag.VERB_PAST).base == "have"

    def test_modal_keeps_surface(self, lexicon):
        info = lexicon.verb("will", SyntaxTag.MODAL_VERB)
        assert info.base == "will"
        assert info.form is VerbForm.MODAL

    def test_forms_follow_the_tag(self, lexicon):
        assert lexicon.verb("ate", SyntaxTag.VERB_PAST).form is VerbForm.PAST_SIMPLE
        assert lexicon.verb("running", SyntaxTag.VERB_GERUND).form is VerbForm.CONTINUOUS
        assert lexicon.verb("eaten", SyntaxTag.VERB_PAST_PARTICIPLE).form is VerbForm.PERFECT
        assert lexicon.verb("eat", SyntaxTag.VERB_BASE).form is VerbForm.BASE

    def test_unknown_word_falls_back_to_surface(self, lexicon):
        assert lexicon.verb("zorbed", SyntaxTag.VERB_PAST).base == "zorbed"


class TestModifiers:
    def test_degrees(self, lexicon):
        comparative = lexicon.adjective("happier", SyntaxTag.ADJECTIVE_COMPARATIVE)
        assert comparative.base == "happy"
        assert comparative.degree is Degree.COMPARATIVE
        assert lexicon.adjective("happiest", SyntaxTag.ADJECTIVE_SUPERLATIVE).degree is Degree.SUPERLATIVE
        assert lexicon.adverb("quickly", SyntaxTag.ADVERB).degree is Degree.NORMAL


class TestLemmatizerFallback:
    def test_disabled_wordnet_uses_surface_forms(self):
        lexicon = Lexicon(use_wordnet=False)
        assert not lexicon.lemmatizes
        assert lexicon.base_form("cats", "n") == "cats"

    def test_lookup_error_disables_lemmatizer_once(self, caplog):
        calls = []

        def missing_corpus(word, pos):
            calls.append(word)
            raise LookupError("Resource wordnet not found")

        lexicon = Lexicon(lemmatizer=missing_corpus)
        with caplog.at_level(logging.WARNING, logger="arbor.lexicon"):
            assert lexicon.base_form("cats", "n") == "cats"
            assert lexicon.base_form("dogs", "n") == "dogs"
        assert calls == ["cats"]
        assert not lexicon.lemmatizes
        warnings = [r for r in caplog.records if "unavailable" in r.getMessage()]
        assert len(warnings) == 1

    def test_results_are_cached(self):
        calls = []

        def counting(word, pos):
            calls.append((word, pos))
            return word.rstrip("s")

        lexicon = Lexicon(lemmatizer=counting)
        assert lexicon.base_form("dogs", "n") == "dog"
        assert lexicon.base_form("dogs", "n") == "dog"
        assert calls == [("dogs", "n")]


def test_pronoun_helpers():
    assert swap_pronoun("I") == "you"
    assert swap_pronoun("you") == "me"
    assert swap_pronoun("she") == "her"
    assert swap_pronoun("cat") == "cat"
    assert pronoun_possessor("my") == "you"
    assert pronoun_possessor("your") == "me"
    assert pronoun_possessor("whose") == "who"
    assert is_wh_word("What")
    assert not is_wh_word("that")
