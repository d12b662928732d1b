"""Config loading for word-entropy."""

from __future__ import annotations

from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for 3.10
    import tomli as tomllib

DEFAULT_CONFIG: dict[str, object] = {
    "analysis": {
        "top_words": 10,
        "decimals": 4,
    },
    "history": {
        "enabled": True,
        "path": "data/history/word_entropy_history.json",
        "max_size": 10,
    },
    "output": {
        "data_dir": "results/{dataset}/data",
        "plot_dir": "results/{dataset}/plot",
    },
    "plots": {
        "style": "whitegrid",
        "dpi": 150,
    },
}

SECTIONS = ("analysis", "history", "output", "plots")


def load_config(path: str | Path) -> dict[str, object]:
    """Load TOML config, merging with defaults."""
    cfg_path = Path(path)
    data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    for section in SECTIONS:
        if not isinstance(data.get(section, {}), dict):
            raise ValueError(f"{section} must be a TOML table")
    merged: dict[str, object] = {
        section: {**DEFAULT_CONFIG[section], **data.get(section, {})} for section in SECTIONS
    }
    _validate_config(merged)
    return merged


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_config(cfg: dict[str, object]) -> None:
    analysis = cfg["analysis"]
    if not _is_int(analysis["top_words"]) or analysis["top_words"] <= 0:
        raise ValueError("analysis.top_words must be a positive integer")
    if not _is_int(analysis["decimals"]) or analysis["decimals"] < 0:
        raise ValueError("analysis.decimals must be a non-negative integer")

    history = cfg["history"]
    if not isinstance(history["enabled"], bool):
        raise ValueError("history.enabled must be a boolean")
    if not isinstance(history["path"], str) or not history["path"].strip():
        raise ValueError("history.path must be a non-empty string")
    if not _is_int(history["max_size"]) or history["max_size"] <= 0:
        raise ValueError("history.max_size must be a positive integer")

    output = cfg["output"]
    for key in ("data_dir", "plot_dir"):
        value = output[key]
        if not isinstance(value, str) or not value:
            raise ValueError(f"output.{key} must be a non-empty string")

    plots = cfg["plots"]
    if not isinstance(plots["style"], str) or not plots["style"].strip():
        raise ValueError("plots.style must be a non-empty string")
    if not _is_int(plots["dpi"]) or plots["dpi"] <= 0:
        raise ValueError("plots.dpi must be a positive integer")
