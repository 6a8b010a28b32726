"""Inspect how bracketed parses are transduced and rendered."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from .session import ConversationSession, load_session_config


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show semantic trees and renderings for Penn Treebank parses")
    parser.add_argument(
        "parses",
        nargs="*",
        help="Bracketed parses, e.g. '(ROOT (S (NP (PRP I)) (VP (VBP am) (ADJP (JJ happy)))))'.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read parses from a file, one per line ('-' for stdin).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON session config with a 'session' object.",
    )
    parser.add_argument(
        "--no-punctuation",
        action="store_true",
        help="Render without capitalization and terminal punctuation.",
    )
    parser.add_argument(
        "--no-wordnet",
        action="store_true",
        help="Skip WordNet lemmatization and keep surface forms.",
    )
    parser.add_argument(
        "--trace-path",
        type=Path,
        default=None,
        help="Append JSONL trace records to this file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log transducer warnings and debug output.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _read_lines(stream: TextIO) -> List[str]:
    return [line.strip() for line in stream if line.strip() and not line.lstrip().startswith("#")]


def collect_parses(args: argparse.Namespace) -> List[str]:
    parses = list(args.parses)
    if args.file is not None:
        if str(args.file) == "-":
            parses.extend(_read_lines(sys.stdin))
        else:
            with args.file.expanduser().open("r", encoding="utf-8") as fh:
                parses.extend(_read_lines(fh))
    return parses


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_session_config(args.config)
    if args.no_punctuation:
        config.punctuate = False
    if args.no_wordnet:
        config.use_wordnet = False
    if args.trace_path is not None:
        config.trace_path = str(args.trace_path)

    parses = collect_parses(args)
    if not parses:
        print("No parses given.", file=sys.stderr)
        return 2

    session = ConversationSession(config)
    status = 0
    for line in parses:
        try:
            result = session.interpret(line)
        except ValueError as exc:
            print(f"Could not read parse {line!r}: {exc}", file=sys.stderr)
            status = 1
            continue
        print(result.tree.pformat())
        for reading in result.phrases:
            print(f"{reading.kind.name}: {reading.text}")
        print(session.describe_context())
        print()
    return status


if __name__ == "__main__":
    sys.exit(main())
