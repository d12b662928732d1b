"""Tokenizer and single-text analyzer for word-entropy."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .metrics import (
    calculate_lexical_diversity,
    calculate_shannon_entropy,
    calculate_word_frequency,
)

# Unicode major categories kept by the tokenizer: letters and numbers.
KEPT_CATEGORIES = frozenset({"L", "N"})

# Token separators: ASCII tab/line breaks, every Zs space, U+2028, U+2029 and U+FEFF.
# U+001C-U+001F and U+0085 are not in this set, unlike ``str.isspace``.
WHITESPACE_CODEPOINTS = (
    [0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0xA0, 0x1680]
    + list(range(0x2000, 0x200B))
    + [0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF]
)
WHITESPACE_CHARS = frozenset(chr(cp) for cp in WHITESPACE_CODEPOINTS)
WHITESPACE_RE = re.compile("[" + re.escape("".join(sorted(WHITESPACE_CHARS))) + "]+")


def _keep_char(ch: str) -> bool:
    return ch in WHITESPACE_CHARS or unicodedata.category(ch)[0] in KEPT_CATEGORIES


def is_blank(text: str) -> bool:
    """True when ``text`` holds only token separators."""
    return all(ch in WHITESPACE_CHARS for ch in text)


def tokenize_text(text: str) -> list[str]:
    """Tokenizer: lowercase, delete non letter/number symbols, split on whitespace."""
    cleaned = "".join(ch for ch in text.lower() if _keep_char(ch))
    return [token for token in WHITESPACE_RE.split(cleaned) if token]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable metrics for one analyzed text."""

    text: str
    word_count: int
    unique_words: tuple[str, ...]
    unique_word_count: int
    lexical_diversity: float
    shannon_entropy: float
    word_frequency: Mapping[str, int] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        # Freeze the containers so the record stays read-only after construction.
        object.__setattr__(self, "unique_words", tuple(self.unique_words))
        object.__setattr__(
            self, "word_frequency", MappingProxyType(dict(self.word_frequency))
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return {
            "text": self.text,
            "word_count": self.word_count,
            "unique_words": list(self.unique_words),
            "unique_word_count": self.unique_word_count,
            "lexical_diversity": self.lexical_diversity,
            "shannon_entropy": self.shannon_entropy,
            "word_frequency": dict(self.word_frequency),
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisResult:
        """Rebuild a result produced by :meth:`to_dict`."""
        try:
            frequency = {str(k): int(v) for k, v in dict(data["word_frequency"]).items()}
            return cls(
                text=str(data["text"]),
                word_count=int(data["word_count"]),
                unique_words=tuple(str(w) for w in data["unique_words"]),
                unique_word_count=int(data["unique_word_count"]),
                lexical_diversity=float(data["lexical_diversity"]),
                shannon_entropy=float(data["shannon_entropy"]),
                word_frequency=frequency,
                timestamp=datetime.fromisoformat(str(data["timestamp"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid analysis result record: {exc}") from exc


def analyze_text(
    text: str,
    *,
    now: Callable[[], datetime] | None = None,
) -> AnalysisResult:
    """Analyze a text and return word count, diversity, entropy and frequencies."""
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, not {type(text).__name__}")

    tokens = tokenize_text(text)
    total = len(tokens)
    frequency = calculate_word_frequency(tokens)
    unique_words = tuple(frequency)

    return AnalysisResult(
        text=text,
        word_count=total,
        unique_words=unique_words,
        unique_word_count=len(unique_words),
        lexical_diversity=calculate_lexical_diversity(len(unique_words), total),
        shannon_entropy=calculate_shannon_entropy(frequency, total),
        word_frequency=frequency,
        timestamp=(now or _utc_now)(),
    )


def empty_result(*, now: Callable[[], datetime] | None = None) -> AnalysisResult:
    """Zero-valued result used for blank input."""
    return AnalysisResult(
        text="",
        word_count=0,
        unique_words=(),
        unique_word_count=0,
        lexical_diversity=0.0,
        shannon_entropy=0.0,
        word_frequency={},
        timestamp=(now or _utc_now)(),
    )
