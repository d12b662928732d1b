"""Capped, newest-first history of analysis results with JSON persistence."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .analyzer import AnalysisResult, analyze_text, empty_result, is_blank

DEFAULT_MAX_SIZE = 10


@dataclass(frozen=True)
class HistoryItem:
    id: str
    result: AnalysisResult

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "result": self.result.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> HistoryItem:
        if not isinstance(data, dict) or "id" not in data or "result" not in data:
            raise ValueError("History items must be objects with 'id' and 'result'")
        return cls(id=str(data["id"]), result=AnalysisResult.from_dict(data["result"]))


def _millis() -> int:
    return time.time_ns() // 1_000_000


class AnalysisHistory:
    """Newest-first store of analysis results, capped at ``max_size`` items.

    Items are keyed by a millisecond epoch timestamp string generated here,
    never by the analyzer. ``path`` enables :meth:`save` and :meth:`load`.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        path: str | Path | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be a positive integer")
        self.max_size = max_size
        self.path = Path(path) if path is not None else None
        self._clock = clock or _millis
        self._items: list[HistoryItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(list(self._items))

    @property
    def items(self) -> list[HistoryItem]:
        return list(self._items)

    def _next_id(self) -> str:
        taken = {item.id for item in self._items}
        stamp = self._clock()
        while str(stamp) in taken:
            stamp += 1
        return str(stamp)

    def record(self, text: str) -> AnalysisResult:
        """Analyze ``text`` and store it; blank text gives an unstored empty result."""
        if is_blank(text):
            return empty_result()
        result = analyze_text(text)
        self.add(result)
        return result

    def add(self, result: AnalysisResult) -> HistoryItem:
        item = HistoryItem(id=self._next_id(), result=result)
        self._items.insert(0, item)
        del self._items[self.max_size :]
        return item

    def get(self, item_id: str) -> HistoryItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)

    def remove(self, item_id: str) -> None:
        """Drop an item by id; unknown ids are ignored."""
        self._items = [item for item in self._items if item.id != item_id]

    def clear(self) -> None:
        self._items = []

    def _require_path(self) -> Path:
        if self.path is None:
            raise ValueError("History has no storage path configured")
        return self.path

    def save(self) -> Path:
        """Persist the history list as JSON."""
        path = self._require_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"history": [item.to_dict() for item in self._items]}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        return path

    def load(self) -> AnalysisHistory:
        """Replace in-memory items with the persisted history, if any."""
        path = self._require_path()
        if not path.exists():
            self._items = []
            return self
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict) or not isinstance(data.get("history"), list):
            raise ValueError("History JSON must be an object with a 'history' list.")
        items = [HistoryItem.from_dict(raw) for raw in data["history"]]
        self._items = items[: self.max_size]
        return self


def history_from_config(cfg: dict[str, object]) -> AnalysisHistory:
    """Build and load the history store described by the ``[history]`` section."""
    history_cfg = cfg["history"]
    if not isinstance(history_cfg, dict):
        raise ValueError("history must be a TOML table")
    return AnalysisHistory(
        max_size=int(history_cfg["max_size"]),
        path=str(history_cfg["path"]),
    ).load()
