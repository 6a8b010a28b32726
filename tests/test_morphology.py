import pytest

from arbor.morphology import Agreement, EnglishMorphology, load_irregular_verbs
from arbor.tags import TenseFrame, TenseTime


class TestConjugation:
    @pytest.mark.parametrize(
        "time, agreement, expected",
        [
            (TenseTime.PRESENT, Agreement.FIRST_SINGULAR, "am"),
            (TenseTime.PRESENT, Agreement.SECOND, "are"),
            (TenseTime.PRESENT, Agreement.THIRD_SINGULAR, "is"),
            (TenseTime.PAST, Agreement.PLURAL, "were"),
            (TenseTime.PAST, Agreement.FIRST_SINGULAR, "was"),
            (TenseTime.FUTURE, Agreement.SECOND, "will be"),
        ],
    )
    def test_be_agrees_with_subject(self, morphology, time, agreement, expected):
        assert morphology.conjugate("be", time, TenseFrame.SIMPLE, agreement) == expected

    def test_simple_tenses(self, morphology):
        assert morphology.conjugate("eat", "PAST", "SIMPLE") == "ate"
        assert morphology.conjugate("stop", "PAST", "SIMPLE") == "stopped"
        assert morphology.conjugate("carry", "PAST", "SIMPLE") == "carried"
        assert morphology.conjugate("bake", "PAST", "SIMPLE") == "baked"
        assert morphology.conjugate("bark", "PRESENT", "SIMPLE") == "barks"
        assert morphology.conjugate("bark", "PRESENT", "SIMPLE", Agreement.PLURAL) == "bark"
        assert morphology.conjugate("go", "FUTURE", "SIMPLE") == "will go"

    def test_missing_markers_leave_base_form(self, morphology):
        assert morphology.conjugate("walk") == "walk"

    def test_compound_frames(self, morphology):
        assert morphology.conjugate("eat", "PRESENT", "PERFECT") == "has eaten"
        assert morphology.conjugate("eat", "PAST", "PERFECT", Agreement.SECOND) == "had eaten"
        assert morphology.conjugate("run", "PRESENT", "CONTINUOUS", Agreement.FIRST_SINGULAR) == "am running"
        assert (
            morphology.conjugate("run", "PRESENT", "PERFECT_CONTINUOUS", Agreement.SECOND)
            == "have been running"
        )
        assert morphology.conjugate("run", None, "CONTINUOUS") == "running"

    def test_unknown_marker_is_logged_and_ignored(self, morphology, caplog):
        assert morphology.conjugate("walk", "SOMETIME", None) == "walk"
        assert any("Unknown tense time" in r.getMessage() for r in caplog.records)


class TestWordForms:
    def test_third_person(self, morphology):
        assert morphology.third_person("watch") == "watches"
        assert morphology.third_person("fly") == "flies"
        assert morphology.third_person("play") == "plays"
        assert morphology.third_person("go") == "goes"
        assert morphology.third_person("have") == "has"

    def test_gerund(self, morphology):
        assert morphology.gerund("lie") == "lying"
        assert morphology.gerund("make") == "making"
        assert morphology.gerund("see") == "seeing"
        assert morphology.gerund("sit") == "sitting"
        assert morphology.gerund("be") == "being"

    def test_pluralize(self, morphology):
        assert morphology.pluralize("mouse") == "mice"
        assert morphology.pluralize("box") == "boxes"
        assert morphology.pluralize("baby") == "babies"
        assert morphology.pluralize("day") == "days"
        assert morphology.pluralize("cat") == "cats"

    def test_possessive_and_subject_forms(self, morphology):
        assert morphology.possessive("me") == "my"
        assert morphology.possessive("john") == "john's"
        assert morphology.subject_form("me") == "I"
        assert morphology.subject_form("him") == "he"
        assert morphology.subject_form("cat") == "cat"

    def test_degrees(self, morphology):
        assert morphology.comparative("good") == "better"
        assert morphology.superlative("bad") == "worst"
        assert morphology.comparative("happy") == "more happy"
        assert morphology.superlative("happy") == "most happy"

    def test_agreement_for(self):
        assert EnglishMorphology.agreement_for("I") is Agreement.FIRST_SINGULAR
        assert EnglishMorphology.agreement_for("you") is Agreement.SECOND
        assert EnglishMorphology.agreement_for("they") is Agreement.PLURAL
        assert EnglishMorphology.agreement_for("cat") is Agreement.THIRD_SINGULAR
        assert EnglishMorphology.agreement_for("cat", plural=True) is Agreement.PLURAL


class TestIrregularTable:
    def test_load_custom_table(self, tmp_path):
        table = tmp_path / "verbs.txt"
        table.write_text("# base past participle\nswim\tswam\tswum\n\n", encoding="utf-8")
        morphology = EnglishMorphology.load(table)
        assert morphology.past("swim") == "swam"
        assert morphology.past_participle("swim") == "swum"
        assert morphology.past("eat") == "eated"

    def test_bad_row_raises(self, tmp_path):
        table = tmp_path / "verbs.txt"
        table.write_text("swim swam\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_irregular_verbs(table)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_irregular_verbs(tmp_path / "missing.txt")
