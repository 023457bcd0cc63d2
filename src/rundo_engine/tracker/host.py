"""Boundary types between the tracker and the host text surface."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from rundo_engine.history import TextDelta


class TextHost(Protocol):
    """Text surface the tracker reads from and writes undo/redo edits to."""

    def get_current_text(self) -> str:
        ...

    def apply_edit(self, range_start: int, range_end: int, replacement: str) -> None:
        """Replace ``[range_start, range_end)``; raise ``IndexError`` if out of range."""
        ...

    def set_caret(self, position: int) -> None:
        ...


class UndoRedoOutcome(str, Enum):
    APPLIED = "applied"
    QUEUE_EMPTY = "queue_empty"
    APPLY_FAILED = "apply_failed"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryObserver:
    """Optional callbacks a host registers when constructing the tracker."""

    on_undo_performed: Callable[[], None] = _noop
    on_redo_performed: Callable[[], None] = _noop
    on_commit: Callable[[TextDelta], None] = _noop
    on_apply_failed: Callable[[TextDelta, Exception], None] = _noop


__all__ = ["HistoryObserver", "TextHost", "UndoRedoOutcome"]
