from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from arbor.context import DiscourseContext
from arbor.lexicon import Lexicon
from arbor.morphology import EnglishMorphology
from arbor.names import NameLists
from arbor.renderer import SentenceRenderer
from arbor.transducer import StructureTransducer
from arbor.tree import TreeArena

# Base forms for the words used across the suite, so tests never need the
# WordNet corpus to be installed.
LEMMAS = {
    ("ate", "v"): "eat",
    ("eaten", "v"): "eat",
    ("running", "v"): "run",
    ("runs", "v"): "run",
    ("barks", "v"): "bark",
    ("sits", "v"): "sit",
    ("sleeps", "v"): "sleep",
    ("purrs", "v"): "purr",
    ("told", "v"): "tell",
    ("gave", "v"): "give",
    ("cats", "n"): "cat",
    ("dogs", "n"): "dog",
    ("mice", "n"): "mouse",
    ("happier", "a"): "happy",
    ("happiest", "a"): "happy",
}


def table_lemmatizer(word, pos):
    return LEMMAS.get((word, pos))


@pytest.fixture
def lexicon():
    return Lexicon(lemmatizer=table_lemmatizer)


@pytest.fixture
def transducer(lexicon):
    return StructureTransducer(lexicon)


@pytest.fixture
def morphology():
    return EnglishMorphology.load()


@pytest.fixture
def renderer(morphology):
    return SentenceRenderer(morphology)


@pytest.fixture
def names():
    return NameLists.from_names(male=["John", "Bob"], female=["Mary", "Sue"])


@pytest.fixture
def context(names):
    return DiscourseContext(names)


@pytest.fixture
def arena():
    return TreeArena()
