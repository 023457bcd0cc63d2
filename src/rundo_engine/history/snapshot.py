"""Plain-data form of the undo/redo queues for host-managed suspend/resume."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from rundo_engine.errors import require_positive

from .delta import TextDelta
from .queue import BoundedHistoryQueue

SNAPSHOT_VERSION = 1


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """Both queues, most recent entry first, plus the capacity they had."""

    undo: tuple[TextDelta, ...]
    redo: tuple[TextDelta, ...]
    capacity: int

    @classmethod
    def capture(
        cls, undo: BoundedHistoryQueue, redo: BoundedHistoryQueue
    ) -> "HistorySnapshot":
        return cls(
            undo=tuple(undo),
            redo=tuple(redo),
            capacity=undo.capacity,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": SNAPSHOT_VERSION,
            "capacity": self.capacity,
            "undo": [delta.to_dict() for delta in self.undo],
            "redo": [delta.to_dict() for delta in self.redo],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistorySnapshot":
        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported history snapshot version {version!r}")
        capacity = require_positive("history capacity", data.get("capacity"))
        return cls(
            undo=tuple(TextDelta.from_dict(item) for item in data.get("undo", ())),
            redo=tuple(TextDelta.from_dict(item) for item in data.get("redo", ())),
            capacity=capacity,
        )


__all__ = ["HistorySnapshot", "SNAPSHOT_VERSION"]
