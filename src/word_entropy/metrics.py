"""Frequency, lexical-diversity and entropy metrics for word-entropy."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Mapping, Sequence

import numpy as np
from scipy.special import entr

LN_2 = math.log(2.0)


def calculate_word_frequency(tokens: Sequence[str]) -> dict[str, int]:
    """Count token occurrences, keeping first-occurrence order of the keys."""
    return dict(Counter(tokens))


def calculate_lexical_diversity(unique_count: int, total_count: int) -> float:
    """Ratio of distinct tokens to total tokens (0.0 for an empty text)."""
    if total_count == 0:
        return 0.0
    return unique_count / total_count


def _validate_frequency(frequency: Mapping[str, int]) -> np.ndarray:
    counts = np.fromiter(frequency.values(), dtype=np.float64, count=len(frequency))
    if counts.size and float(counts.min()) < 1:
        raise ValueError("word frequency counts must be >= 1")
    return counts


def calculate_shannon_entropy(frequency: Mapping[str, int], total_count: int) -> float:
    """Compute Shannon entropy in bits per word from a frequency mapping.

    Each distinct token contributes ``-p * log2(p)`` with ``p = count / total_count``.
    """
    if total_count == 0:
        return 0.0
    counts = _validate_frequency(frequency)
    probs = counts / float(total_count)
    entropy = float(np.sum(entr(probs), dtype=np.float64)) / LN_2
    # entr(1.0) is -0.0; keep the single-token case at a clean zero.
    return entropy if entropy > 0.0 else 0.0


def top_words(frequency: Mapping[str, int], limit: int = 10) -> list[tuple[str, int]]:
    """Most frequent tokens, ties kept in first-seen order."""
    if limit <= 0:
        raise ValueError("limit must be a positive integer")
    # sorted() is stable, so equal counts keep mapping order.
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]
