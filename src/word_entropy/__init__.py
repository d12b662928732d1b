"""word-entropy: word-frequency entropy and lexical diversity for text."""

from .analyzer import AnalysisResult, analyze_text, empty_result, tokenize_text
from .history import AnalysisHistory, HistoryItem
from .metrics import (
    calculate_lexical_diversity,
    calculate_shannon_entropy,
    calculate_word_frequency,
    top_words,
)

__all__ = [
    "AnalysisResult",
    "analyze_text",
    "empty_result",
    "tokenize_text",
    "AnalysisHistory",
    "HistoryItem",
    "calculate_lexical_diversity",
    "calculate_shannon_entropy",
    "calculate_word_frequency",
    "top_words",
]
