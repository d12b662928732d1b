"""Tabular views of analysis results for CSV export and reporting."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from .analyzer import AnalysisResult
from .metrics import top_words

SUMMARY_COLUMNS = [
    "source",
    "word_count",
    "unique_word_count",
    "lexical_diversity",
    "shannon_entropy",
    "timestamp",
]
FREQUENCY_COLUMNS = ["source", "rank", "word", "count", "probability"]


def summary_frame(results: Sequence[AnalysisResult], sources: Sequence[str]) -> pd.DataFrame:
    """One row of metrics per analyzed text."""
    if len(results) != len(sources):
        raise ValueError("results and sources must have the same length")
    rows = [
        {
            "source": source,
            "word_count": result.word_count,
            "unique_word_count": result.unique_word_count,
            "lexical_diversity": result.lexical_diversity,
            "shannon_entropy": result.shannon_entropy,
            "timestamp": result.timestamp.isoformat(),
        }
        for result, source in zip(results, sources, strict=True)
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def frequency_frame(
    results: Sequence[AnalysisResult],
    sources: Sequence[str],
    top: int | None = None,
) -> pd.DataFrame:
    """Per-word counts for each text, most frequent first."""
    if len(results) != len(sources):
        raise ValueError("results and sources must have the same length")
    rows: list[dict[str, object]] = []
    for result, source in zip(results, sources, strict=True):
        limit = top if top is not None else max(result.unique_word_count, 1)
        for rank, (word, count) in enumerate(top_words(result.word_frequency, limit), start=1):
            rows.append(
                {
                    "source": source,
                    "rank": rank,
                    "word": word,
                    "count": count,
                    "probability": count / result.word_count,
                }
            )
    return pd.DataFrame(rows, columns=FREQUENCY_COLUMNS)


def read_frequency_csv(path: str | Path) -> pd.DataFrame:
    """Load a frequency CSV written by :func:`frequency_frame`, keeping words as text."""
    return pd.read_csv(path, dtype={"source": str, "word": str}, keep_default_na=False)
