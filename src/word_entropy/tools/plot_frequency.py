"""Static PNG bar chart of the most frequent words."""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from pathlib import Path

import pandas as pd
import seaborn as sns
from matplotlib import pyplot as plt

from word_entropy.config import DEFAULT_CONFIG, load_config
from word_entropy.metrics import top_words
from word_entropy.output_paths import (
    frequency_plot_filename,
    infer_dataset_name,
    resolve_output_template,
)
from word_entropy.tables import read_frequency_csv


def plot_top_words(
    frequency: Mapping[str, int],
    output_path: str | Path,
    *,
    top: int = 10,
    title: str | None = None,
    style: str = "whitegrid",
    dpi: int = 150,
) -> Path:
    """Render a horizontal bar chart of the ``top`` most frequent words."""
    ranked = top_words(frequency, top)
    if not ranked:
        raise ValueError("Cannot plot an empty word frequency mapping")
    frame = pd.DataFrame(ranked, columns=["word", "count"])

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    sns.set_theme(style=style)
    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.4 * len(frame) + 1)))
    sns.barplot(data=frame, x="count", y="word", color="#4c72b0", ax=ax)
    ax.set_xlabel("count")
    ax.set_ylabel("")
    ax.set_title(title or f"Top {len(frame)} words")
    fig.tight_layout()
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    return out_path


def _frequency_from_csv(frame: pd.DataFrame, source: str | None) -> tuple[dict[str, int], str]:
    for col in ("source", "word", "count"):
        if col not in frame.columns:
            raise SystemExit(f"Column '{col}' not found in CSV columns")
    if frame.empty:
        raise SystemExit("Frequency CSV has no rows")
    selected = source if source is not None else str(frame["source"].iloc[0])
    subset = frame[frame["source"].astype(str) == selected]
    if subset.empty:
        raise SystemExit(f"Source '{selected}' not found in frequency CSV")
    if "rank" in subset.columns:
        subset = subset.sort_values("rank")
    counts = {str(w): int(c) for w, c in zip(subset["word"], subset["count"], strict=True)}
    return counts, selected


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Plot top words from a word-entropy frequency CSV")
    parser.add_argument("--config", default=None, help="Path to TOML config file")
    parser.add_argument("--input", required=True, help="Word frequency CSV")
    parser.add_argument("--source", default=None, help="Source to plot (default: first in CSV)")
    parser.add_argument("--output", default=None, help="Output image path")
    parser.add_argument("--top", type=int, default=None, help="Number of words to plot")
    return parser.parse_args()


def main() -> None:
    """Render the top-words chart for one source and save a PNG."""
    args = _parse_args()
    cfg = DEFAULT_CONFIG if args.config is None else load_config(args.config)
    if args.output is None:
        dataset = infer_dataset_name([args.input])
        plot_dir = resolve_output_template(cfg["output"]["plot_dir"], dataset)
        output = str(Path(plot_dir) / frequency_plot_filename("png"))
    else:
        output = args.output

    frame = read_frequency_csv(args.input)
    counts, source = _frequency_from_csv(frame, args.source)
    top = args.top if args.top is not None else cfg["analysis"]["top_words"]
    plot_top_words(
        counts,
        output,
        top=top,
        title=f"Top words: {source}",
        style=cfg["plots"]["style"],
        dpi=cfg["plots"]["dpi"],
    )
    print(f"Saved plot to {output}")


if __name__ == "__main__":
    main()
