"""Dedicated CLI entrypoint for managing the persisted analysis history."""

from __future__ import annotations

import argparse

from .config import DEFAULT_CONFIG, load_config
from .history import AnalysisHistory, history_from_config
from .metrics import top_words

PREVIEW_CHARS = 50


def _preview(text: str) -> str:
    if len(text) > PREVIEW_CHARS:
        return text[:PREVIEW_CHARS] + "..."
    return text


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage word-entropy analysis history")
    parser.add_argument("--config", default=None, help="Path to TOML config")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List stored analyses, newest first")
    show = sub.add_parser("show", help="Show one stored analysis")
    show.add_argument("id")
    remove = sub.add_parser("remove", help="Remove one stored analysis")
    remove.add_argument("id")
    sub.add_parser("clear", help="Remove all stored analyses")
    return parser.parse_args(argv)


def format_history(history: AnalysisHistory, decimals: int = 4) -> list[str]:
    """One summary line per stored analysis."""
    lines: list[str] = []
    for item in history:
        result = item.result
        lines.append(
            f"{item.id}  {result.timestamp.isoformat()}  "
            f"words={result.word_count} unique={result.unique_word_count} "
            f"lexical_diversity={result.lexical_diversity:.{decimals}f} "
            f"shannon_entropy={result.shannon_entropy:.{decimals}f} bits/word  "
            f"{_preview(result.text)!r}"
        )
    return lines


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    cfg = DEFAULT_CONFIG if args.config is None else load_config(args.config)
    if not cfg["history"]["enabled"]:
        raise SystemExit("History is disabled in config (history.enabled = false)")
    decimals = int(cfg["analysis"]["decimals"])
    history = history_from_config(cfg)

    if args.command == "list":
        lines = format_history(history, decimals)
        if not lines:
            print("History is empty")
        for line in lines:
            print(line)
    elif args.command == "show":
        try:
            item = history.get(args.id)
        except KeyError:
            raise SystemExit(f"No history item with id {args.id}") from None
        result = item.result
        print(f"id: {item.id}")
        print(f"timestamp: {result.timestamp.isoformat()}")
        print(f"word_count: {result.word_count}")
        print(f"unique_word_count: {result.unique_word_count}")
        print(f"lexical_diversity: {result.lexical_diversity:.{decimals}f}")
        print(f"shannon_entropy: {result.shannon_entropy:.{decimals}f} bits/word")
        top = int(cfg["analysis"]["top_words"])
        for word, count in top_words(result.word_frequency, top):
            print(f"  {word}: {count}")
        print(result.text)
    elif args.command == "remove":
        history.remove(args.id)
        history.save()
        print(f"Removed {args.id}; {len(history)} items left")
    else:
        history.clear()
        history.save()
        print("Cleared history")


if __name__ == "__main__":
    main()
