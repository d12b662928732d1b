"""CLI entry point for word-entropy text analysis."""

from __future__ import annotations

import argparse
from pathlib import Path

from .analyzer import AnalysisResult, analyze_text, is_blank
from .config import DEFAULT_CONFIG, load_config
from .history import history_from_config
from .output_paths import (
    analysis_output_filename,
    frequency_output_filename,
    infer_dataset_name,
    resolve_output_template,
)
from .tables import frequency_frame, summary_frame
from .tools.report_stats import save_report

TEXT_SOURCE_NAME = "<text>"


def _collect_input_files(input_path: Path) -> list[Path]:
    """Collect input .txt files from a path (file or directory)."""
    if input_path.is_file():
        return [input_path]
    if input_path.is_dir():
        return sorted([p for p in input_path.rglob("*.txt") if p.is_file()])
    raise FileNotFoundError(f"Input path not found: {input_path}")


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Word entropy and lexical diversity CLI")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Input .txt file or folder")
    source.add_argument("--text", help="Analyze this text directly")
    parser.add_argument("--output", default=None, help="Output CSV path for metric rows")
    parser.add_argument(
        "--frequency-output",
        dest="frequency_output",
        default=None,
        help="Optional CSV path for per-word frequency rows",
    )
    parser.add_argument("--report", default=None, help="Optional Markdown report path")
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Top words listed per source in the report (default from config)",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Append non-blank results to the configured history file",
    )
    parser.add_argument("--config", help="Path to TOML config file")
    return parser.parse_args()


def _load_sources(input_path: str | Path | None, text: str | None) -> list[tuple[str, str]]:
    if text is not None:
        return [(TEXT_SOURCE_NAME, text)]
    if input_path is None:
        raise SystemExit("Either --input or --text is required")
    files = _collect_input_files(Path(input_path))
    if not files:
        raise SystemExit("No .txt files found in input")
    return [(p.name, p.read_text(encoding="utf-8", errors="ignore")) for p in files]


def run_analysis(
    *,
    output_path: str | Path,
    cfg: dict[str, object],
    input_path: str | Path | None = None,
    text: str | None = None,
    frequency_output_path: str | Path | None = None,
    report_path: str | Path | None = None,
    top: int | None = None,
    record_history: bool = False,
) -> tuple[list[AnalysisResult], Path]:
    """Analyze each input text and save metric rows (plus optional outputs)."""
    top = top if top is not None else int(cfg["analysis"]["top_words"])
    if top <= 0:
        raise SystemExit("--top must be a positive integer")

    sources = _load_sources(input_path, text)
    names = [name for name, _ in sources]
    results = [analyze_text(body) for _, body in sources]

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    summary = summary_frame(results, names)
    summary.to_csv(output, index=False)

    frequency = frequency_frame(results, names)
    if frequency_output_path is not None:
        freq_out = Path(frequency_output_path)
        freq_out.parent.mkdir(parents=True, exist_ok=True)
        frequency.to_csv(freq_out, index=False)

    if report_path is not None:
        save_report(
            summary,
            Path(report_path),
            frequency,
            top=top,
            decimals=int(cfg["analysis"]["decimals"]),
        )

    if record_history:
        if not cfg["history"]["enabled"]:
            raise SystemExit("History is disabled in config (history.enabled = false)")
        history = history_from_config(cfg)
        for result in results:
            if not is_blank(result.text):
                history.add(result)
        history.save()

    return results, output


def main() -> None:
    """Run CLI workflow for text analysis."""
    args = _parse_args()

    cfg = DEFAULT_CONFIG
    if args.config:
        cfg = load_config(args.config)

    if args.output is None:
        dataset = infer_dataset_name([args.input]) if args.input else "default"
        output_dir = resolve_output_template(cfg["output"]["data_dir"], dataset)
        output = str(Path(output_dir) / analysis_output_filename())
        frequency_output = args.frequency_output
        if frequency_output is None:
            frequency_output = str(Path(output_dir) / frequency_output_filename())
    else:
        output = args.output
        frequency_output = args.frequency_output

    results, output_path = run_analysis(
        output_path=output,
        cfg=cfg,
        input_path=args.input,
        text=args.text,
        frequency_output_path=frequency_output,
        report_path=args.report,
        top=args.top,
        record_history=args.history,
    )
    decimals = int(cfg["analysis"]["decimals"])
    if len(results) == 1:
        result = results[0]
        print(
            f"words={result.word_count} unique={result.unique_word_count} "
            f"lexical_diversity={result.lexical_diversity:.{decimals}f} "
            f"shannon_entropy={result.shannon_entropy:.{decimals}f} bits/word"
        )
    print(f"Saved {len(results)} rows to {output_path}")


if __name__ == "__main__":
    main()
