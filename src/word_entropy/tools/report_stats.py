"""Automatic Markdown reporting for word-entropy analysis outputs."""

from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from word_entropy.tables import read_frequency_csv


def _format_float(value: float, decimals: int) -> str:
    return f"{value:.{decimals}f}"


def _markdown_table(frame: pd.DataFrame) -> str:
    if frame.empty:
        return "_No data available._"

    columns = [str(col) for col in frame.columns]
    header = "| " + " | ".join(columns) + " |"
    separator = "| " + " | ".join(["---"] * len(columns)) + " |"
    rows: list[str] = []
    for _, row in frame.iterrows():
        rows.append("| " + " | ".join(str(row[col]) for col in frame.columns) + " |")
    return "\n".join([header, separator, *rows])


def _summary_table(summary: pd.DataFrame, decimals: int) -> pd.DataFrame:
    table = pd.DataFrame(
        {
            "source": summary["source"].astype(str),
            "words": summary["word_count"].astype(int),
            "unique_words": summary["unique_word_count"].astype(int),
            "lexical_diversity": summary["lexical_diversity"]
            .astype(float)
            .map(lambda v: _format_float(v, decimals)),
            "shannon_entropy (bits/word)": summary["shannon_entropy"]
            .astype(float)
            .map(lambda v: _format_float(v, decimals)),
        }
    )
    return table.reset_index(drop=True)


def _top_words_table(frequency: pd.DataFrame, source: str, top: int) -> pd.DataFrame:
    subset = frequency[frequency["source"].astype(str) == source]
    subset = subset.sort_values("rank").head(top)
    return subset[["rank", "word", "count"]].reset_index(drop=True)


def generate_report(
    summary: pd.DataFrame,
    frequency: pd.DataFrame | None = None,
    *,
    top: int = 10,
    decimals: int = 4,
) -> str:
    """Generate a Markdown report from summary (and optional frequency) frames."""
    required = {"source", "word_count", "unique_word_count", "lexical_diversity", "shannon_entropy"}
    missing = sorted(required - set(summary.columns))
    if missing:
        raise ValueError(f"Summary DataFrame is missing columns: {', '.join(missing)}")
    if top <= 0:
        raise ValueError("top must be a positive integer")

    lines: list[str] = [
        "# Word Entropy Report",
        "",
        "## Summary",
        _markdown_table(_summary_table(summary, decimals)),
        "",
    ]

    if frequency is not None:
        lines.extend([f"## Top {top} Words", ""])
        for source in summary["source"].astype(str):
            lines.extend(
                [
                    f"### {source}",
                    _markdown_table(_top_words_table(frequency, source, top)),
                    "",
                ]
            )

    return "\n".join(lines)


def save_report(
    summary: pd.DataFrame,
    output_path: Path,
    frequency: pd.DataFrame | None = None,
    *,
    top: int = 10,
    decimals: int = 4,
) -> None:
    """Generate and save a Markdown report."""
    report = generate_report(summary, frequency, top=top, decimals=decimals)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report, encoding="utf-8")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate word-entropy Markdown report")
    parser.add_argument("--input", required=True, help="Analysis summary CSV path")
    parser.add_argument("--frequency", default=None, help="Optional word frequency CSV path")
    parser.add_argument("--output", required=True, help="Output Markdown report path")
    parser.add_argument("--top", type=int, default=10, help="Top words listed per source")
    parser.add_argument("--decimals", type=int, default=4, help="Displayed float precision")
    return parser.parse_args()


def main() -> None:
    """Standalone CLI for report generation from CSV."""
    args = _parse_args()
    output_path = Path(args.output)
    summary = pd.read_csv(args.input, dtype={"source": str})
    frequency = read_frequency_csv(args.frequency) if args.frequency else None
    save_report(summary, output_path, frequency, top=args.top, decimals=args.decimals)
    print(f"Saved report to {output_path}")


if __name__ == "__main__":
    main()
