"""Trace records of interpreted utterances, one JSON line each."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .session import Interpretation


ISO8601 = "%Y-%m-%dT%H:%M:%S.%fZ"


@dataclass
class TraceRecord:
    """Structured payload capturing a single interpreted utterance."""

    timestamp: str
    scenario: str
    syntax: str
    tree: str
    phrases: List[Dict[str, str]]
    substitutions: int
    context: Dict[str, Optional[str]]

    @classmethod
    def from_interpretation(cls, *, scenario: str, interpretation: "Interpretation") -> "TraceRecord":
        timestamp = datetime.now(timezone.utc).strftime(ISO8601)
        phrases = [
            {
                "kind": reading.kind.name,
                "text": reading.text,
                "tree": reading.phrase.sexpr(),
            }
            for reading in interpretation.phrases
        ]
        context = {
            slot: node.sexpr() if node is not None else None
            for slot, node in interpretation.context.items()
        }
        return cls(
            timestamp=timestamp,
            scenario=scenario,
            syntax=str(interpretation.syntax),
            tree=interpretation.tree.sexpr(),
            phrases=phrases,
            substitutions=interpretation.substitutions,
            context=context,
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


__all__ = ["TraceRecord"]
