"""
Conversation session wiring for arbor.

A session owns everything that is per-conversation: the transducer and
renderer with their lexical resources, one discourse context and one
statement memory. Nothing here is shared between sessions.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .context import DiscourseContext
from .lexicon import Lexicon
from .memory import StatementMemory
from .morphology import EnglishMorphology
from .names import NameLists
from .renderer import SentenceRenderer
from .syntax import SyntaxNode, SyntaxSource, parse_syntax
from .tags import SemanticTag
from .trace import TraceRecord
from .transducer import StructureTransducer, split_phrases
from .tree import Node

logger = logging.getLogger(__name__)

CONFIG_FIELD = "session"
TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class SessionConfig:
    """Configuration for an arbor session."""

    # Lexical resources
    use_wordnet: bool = True
    names_male_path: Optional[str] = None     # None = bundled list
    names_female_path: Optional[str] = None
    irregular_verbs_path: Optional[str] = None

    # Facts loaded at start-up, one bracketed parse per line
    knowledge_path: Optional[str] = None

    # Output
    punctuate: bool = True
    trace_path: Optional[str] = None
    scenario: str = "default"


def _truthy(value: Optional[str]) -> bool:
    return (value or "").lower() in TRUTHY


def load_session_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SessionConfig:
    """Build a ``SessionConfig`` from an optional JSON file plus environment overrides.

    The file holds a ``"session"`` object whose keys are ``SessionConfig``
    fields. ``ARBOR_DISABLE_WORDNET`` and ``ARBOR_TRACE_PATH`` override the
    file.

    Raises:
        FileNotFoundError: if ``path`` is given and missing.
        ValueError: if the payload is not a ``"session"`` dict of known fields.
    """
    config = SessionConfig()
    if path is not None:
        resolved = Path(path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Session config not found: {resolved}")
        with resolved.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
        section = payload.get(CONFIG_FIELD) if isinstance(payload, dict) else None
        if not isinstance(section, dict):
            raise ValueError(f"Config file {resolved} is missing '{CONFIG_FIELD}' dict")
        known = {f.name for f in fields(SessionConfig)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError(f"Config file {resolved} has unknown session fields: {', '.join(unknown)}")
        config = SessionConfig(**section)

    env = os.environ if environ is None else environ
    if _truthy(env.get("ARBOR_DISABLE_WORDNET")):
        config.use_wordnet = False
    if env.get("ARBOR_TRACE_PATH"):
        config.trace_path = env["ARBOR_TRACE_PATH"]
    return config


@dataclass
class PhraseReading:
    """One top-level phrase of an utterance after context resolution."""

    phrase: Node
    kind: SemanticTag
    text: str


@dataclass
class Interpretation:
    """Result of interpreting one parse."""

    syntax: SyntaxNode
    tree: Node
    phrases: List[PhraseReading] = field(default_factory=list)
    substitutions: int = 0
    context: Dict[str, Optional[Node]] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return " ".join(reading.text for reading in self.phrases if reading.text)

    def of_kind(self, kind: SemanticTag) -> List[Node]:
        return [reading.phrase for reading in self.phrases if reading.kind is kind]


class ConversationSession:
    """
    Per-conversation interpretation pipeline.

    Usage:
        session = ConversationSession(SessionConfig(use_wordnet=False))
        result = session.interpret("(ROOT (S (NP (PRP I)) (VP (VBP am) (ADJP (JJ happy)))))")
        print(result.text)
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        lexicon: Optional[Lexicon] = None,
        morphology: Optional[EnglishMorphology] = None,
        names: Optional[NameLists] = None,
    ):
        self.config = config or SessionConfig()
        cfg = self.config
        self.lexicon = lexicon or Lexicon(use_wordnet=cfg.use_wordnet)
        self.morphology = morphology or EnglishMorphology.load(cfg.irregular_verbs_path)
        self.names = names or NameLists.load(cfg.names_male_path, cfg.names_female_path)
        self.transducer = StructureTransducer(self.lexicon)
        self.renderer = SentenceRenderer(self.morphology)
        self.context = DiscourseContext(self.names)
        self.memory = StatementMemory()
        self.trace_path: Optional[Path] = None
        if cfg.trace_path:
            self.trace_path = Path(cfg.trace_path)
            self.trace_path.parent.mkdir(parents=True, exist_ok=True)

        if cfg.knowledge_path:
            loaded = self.load_knowledge(cfg.knowledge_path)
            logger.info(f"Loaded {loaded} statements from {cfg.knowledge_path}")

    def interpret(self, source: SyntaxSource, *, trace: bool = True) -> Interpretation:
        """Transduce a parse and run each phrase through the discourse context.

        Pronouns are resolved against the context before the phrase's own
        noun phrases update it.
        """
        syntax = parse_syntax(source)
        tree = self.transducer.transduce(syntax)
        result = Interpretation(syntax=syntax, tree=tree)
        for phrase in split_phrases(tree):
            result.substitutions += self.context.resolve(phrase)
            self.context.observe(phrase)
            text = self.renderer.render(phrase, punctuate=self.config.punctuate)
            result.phrases.append(PhraseReading(phrase=phrase, kind=phrase.tag, text=text))
        result.context = self.context.snapshot()
        if trace and self.trace_path is not None:
            self._write_trace(result)
        return result

    def _write_trace(self, result: Interpretation) -> None:
        record = TraceRecord.from_interpretation(scenario=self.config.scenario, interpretation=result)
        with self.trace_path.open("a", encoding="utf-8") as fh:
            fh.write(record.to_json() + "\n")

    def remember(self, statement: Node) -> None:
        self.memory.store(statement)

    def recall(self, query: Node) -> Optional[Node]:
        return self.memory.recall(query)

    def render(self, tree: Node, punctuate: Optional[bool] = None) -> str:
        if punctuate is None:
            punctuate = self.config.punctuate
        return self.renderer.render(tree, punctuate=punctuate)

    def describe_context(self) -> str:
        return self.context.describe(self.renderer)

    def reset(self) -> None:
        """Forget referents and stored statements."""
        self.context = DiscourseContext(self.names)
        self.memory.clear()

    def load_knowledge(self, path: Union[str, Path]) -> int:
        """Store every statement from a file of bracketed parses.

        Each fact is read with an empty discourse context so pronouns in one
        fact never pick up referents from another.

        Raises:
            FileNotFoundError: if the file is missing.
            ValueError: if a line is not a valid bracketed parse.
        """
        resolved = Path(path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Knowledge file not found: {resolved}")
        stored = 0
        with resolved.open("r", encoding="utf-8") as fh:
            for number, line in enumerate(fh, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    result = self.interpret(line, trace=False)
                except ValueError as exc:
                    raise ValueError(f"{resolved}:{number}: {exc}") from exc
                for statement in result.of_kind(SemanticTag.STATEMENT):
                    self.remember(statement)
                    stored += 1
                self.context.clear()
        return stored


__all__ = [
    "ConversationSession",
    "Interpretation",
    "PhraseReading",
    "SessionConfig",
    "load_session_config",
]
