from __future__ import annotations

import sys
from copy import deepcopy
from pathlib import Path

import pandas as pd
import pytest
from word_entropy import cli, history_cli
from word_entropy.config import DEFAULT_CONFIG
from word_entropy.history import AnalysisHistory


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _config_with_history(tmp_path: Path) -> dict[str, object]:
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["history"]["path"] = str(tmp_path / "history.json")
    return cfg


def _write_config(tmp_path: Path) -> Path:
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        f"""
[analysis]
top_words = 2
decimals = 3

[history]
path = "{(tmp_path / 'history.json').as_posix()}"
max_size = 5

[output]
data_dir = "{(tmp_path / 'results').as_posix()}/{{dataset}}/data"
plot_dir = "{(tmp_path / 'results').as_posix()}/{{dataset}}/plot"
""",
        encoding="utf-8",
    )
    return cfg


def test_run_analysis_writes_summary_and_frequency(tmp_path: Path) -> None:
    corpus = tmp_path / "corpus"
    _write_text(corpus / "b.txt", "the quick brown fox")
    _write_text(corpus / "a.txt", "a a b")
    _write_text(corpus / "notes.md", "ignored")

    results, output = cli.run_analysis(
        input_path=corpus,
        output_path=tmp_path / "out" / "analysis.csv",
        frequency_output_path=tmp_path / "out" / "freq.csv",
        cfg=deepcopy(DEFAULT_CONFIG),
    )

    assert len(results) == 2
    summary = pd.read_csv(output)
    assert list(summary["source"]) == ["a.txt", "b.txt"]
    assert list(summary["word_count"]) == [3, 4]
    assert summary.loc[1, "shannon_entropy"] == pytest.approx(2.0)
    assert summary.loc[0, "lexical_diversity"] == pytest.approx(2 / 3)

    freq = pd.read_csv(tmp_path / "out" / "freq.csv")
    a_rows = freq[freq["source"] == "a.txt"]
    assert list(a_rows["word"]) == ["a", "b"]
    assert list(a_rows["count"]) == [2, 1]
    assert a_rows["probability"].sum() == pytest.approx(1.0)


def test_run_analysis_text_report_and_history(tmp_path: Path) -> None:
    cfg = _config_with_history(tmp_path)
    report = tmp_path / "report.md"

    results, _ = cli.run_analysis(
        text="Hello, HELLO! hello? world",
        output_path=tmp_path / "analysis.csv",
        report_path=report,
        top=1,
        cfg=cfg,
        record_history=True,
    )

    assert results[0].unique_words == ("hello", "world")
    content = report.read_text(encoding="utf-8")
    assert "# Word Entropy Report" in content
    assert "### <text>" in content
    assert "| 1 | hello | 3 |" in content
    assert "world" not in content.split("## Top 1 Words")[1]

    stored = AnalysisHistory(path=cfg["history"]["path"]).load()
    assert len(stored) == 1
    assert stored.items[0].result == results[0]


def test_run_analysis_skips_blank_texts_in_history(tmp_path: Path) -> None:
    cfg = _config_with_history(tmp_path)

    results, output = cli.run_analysis(
        text="   ",
        output_path=tmp_path / "analysis.csv",
        cfg=cfg,
        record_history=True,
    )

    assert results[0].word_count == 0
    assert pd.read_csv(output).loc[0, "word_count"] == 0
    assert len(AnalysisHistory(path=cfg["history"]["path"]).load()) == 0


def test_run_analysis_errors(tmp_path: Path) -> None:
    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    cfg = deepcopy(DEFAULT_CONFIG)

    with pytest.raises(SystemExit, match="No .txt files"):
        cli.run_analysis(input_path=empty_dir, output_path=tmp_path / "o.csv", cfg=cfg)
    with pytest.raises(FileNotFoundError):
        cli.run_analysis(input_path=tmp_path / "missing", output_path=tmp_path / "o.csv", cfg=cfg)
    with pytest.raises(SystemExit, match="--top"):
        cli.run_analysis(text="x", output_path=tmp_path / "o.csv", cfg=cfg, top=0)

    cfg["history"]["enabled"] = False
    with pytest.raises(SystemExit, match="History is disabled"):
        cli.run_analysis(
            text="x", output_path=tmp_path / "o.csv", cfg=cfg, record_history=True
        )


def test_main_uses_config_output_template(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cfg = _write_config(tmp_path)
    input_file = tmp_path / "essays" / "one.txt"
    _write_text(input_file, "a a b")

    monkeypatch.setattr(
        sys,
        "argv",
        ["word-entropy", "--input", str(input_file), "--config", str(cfg), "--history"],
    )
    cli.main()

    out = capsys.readouterr().out
    assert "lexical_diversity=0.667" in out
    assert "shannon_entropy=0.918 bits/word" in out
    data_dir = tmp_path / "results" / "essays" / "data"
    assert (data_dir / "analysis.csv").exists()
    assert (data_dir / "word_frequency.csv").exists()
    assert (tmp_path / "history.json").exists()


def test_history_cli_list_show_remove_clear(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    cfg = _write_config(tmp_path)
    store = AnalysisHistory(path=tmp_path / "history.json", clock=lambda: 42)
    store.record("alpha beta alpha")
    store.record("gamma")
    store.save()

    history_cli.main(["--config", str(cfg), "list"])
    listed = capsys.readouterr().out.splitlines()
    assert listed[0].startswith("43  ")
    assert "words=3 unique=2" in listed[1]

    history_cli.main(["--config", str(cfg), "show", "42"])
    shown = capsys.readouterr().out
    assert "lexical_diversity: 0.667" in shown
    assert "  alpha: 2" in shown

    with pytest.raises(SystemExit, match="No history item"):
        history_cli.main(["--config", str(cfg), "show", "999"])

    history_cli.main(["--config", str(cfg), "remove", "43"])
    assert "1 items left" in capsys.readouterr().out
    assert [item.id for item in AnalysisHistory(path=tmp_path / "history.json").load()] == ["42"]

    history_cli.main(["--config", str(cfg), "clear"])
    capsys.readouterr()
    history_cli.main(["--config", str(cfg), "list"])
    assert capsys.readouterr().out.strip() == "History is empty"


def test_history_cli_honours_disabled_history(tmp_path: Path) -> None:
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        f'[history]\nenabled = false\npath = "{(tmp_path / "history.json").as_posix()}"\n',
        encoding="utf-8",
    )

    with pytest.raises(SystemExit, match="History is disabled"):
        history_cli.main(["--config", str(cfg), "list"])
    assert not (tmp_path / "history.json").exists()
