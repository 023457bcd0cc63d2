"""Binds an ``EditTracker`` to a Textual ``TextArea``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Protocol, Tuple

from rundo_engine.buffer import cursor_for_offset
from rundo_engine.errors import DeltaApplyError
from rundo_engine.history import TextDelta
from rundo_engine.timing import Callback, Scheduler
from rundo_engine.tracker import (
    EditTracker,
    HistoryObserver,
    TrackerConfig,
    TrackingState,
    UndoRedoOutcome,
)

Location = Tuple[int, int]


class TextAreaLike(Protocol):
    """The slice of ``textual.widgets.TextArea`` the adapter relies on."""

    @property
    def text(self) -> str:
        ...

    def replace(self, insert: str, start: Location, end: Location) -> Any:
        ...

    def move_cursor(self, location: Location) -> None:
        ...


class TimerOwner(Protocol):
    def set_timer(self, delay: float, callback: Callback) -> Any:
        ...


class TextualScheduler:
    """``Scheduler`` backed by ``set_timer`` on a Textual app or widget."""

    def __init__(self, owner: TimerOwner) -> None:
        self._owner = owner

    def call_later(self, delay_ms: int, callback: Callback) -> Any:
        return self._owner.set_timer(delay_ms / 1000.0, callback)

    def cancel(self, handle: Hashable) -> None:
        stop = getattr(handle, "stop", None)
        if stop is not None:
            stop()


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to report back to the app."""

    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Host surface over a ``TextArea`` plus the change-message bridge.

    Textual only reports a change after it happened, so the adapter keeps the
    last text it saw. ``handle_text_changed`` lets the tracker snapshot that
    mirror as the "before" text, then refreshes it and signals "after".
    """

    def __init__(
        self,
        area: TextAreaLike,
        scheduler: Scheduler,
        *,
        config: Optional[TrackerConfig] = None,
        hooks: Optional[TextualUIHooks] = None,
    ) -> None:
        self.area = area
        self.hooks = hooks or TextualUIHooks()
        self._text = area.text
        self.tracker = EditTracker(
            self,
            scheduler,
            config=config,
            observer=HistoryObserver(
                on_undo_performed=lambda: self._report("undo"),
                on_redo_performed=lambda: self._report("redo"),
                on_commit=self._on_commit,
                on_apply_failed=self._on_apply_failed,
            ),
            logger_name="rundo_engine.adapters.textual",
        )

    # host surface

    def get_current_text(self) -> str:
        return self._text

    def apply_edit(self, range_start: int, range_end: int, replacement: str) -> None:
        if not 0 <= range_start <= range_end <= len(self._text):
            raise DeltaApplyError(
                f"range [{range_start}, {range_end}) is outside the text area",
                text_length=len(self._text),
                offsets=(range_start, range_end),
            )
        start = self._location(range_start)
        end = self._location(range_end)
        self.area.replace(replacement, start, end)
        self._text = self.area.text

    def set_caret(self, position: int) -> None:
        self.area.move_cursor(self._location(position))

    # message bridge

    def handle_text_changed(self) -> None:
        """Call from the app's ``on_text_area_changed`` handler."""

        current = self.area.text
        if self._awaiting_echo():
            self.tracker.on_before_text_changes()
            self.tracker.on_after_text_changes()
            self._log_state("echo ->")
        # A keystroke can land between the undo/redo edit and its echo; it is
        # tracked here since its own message will find the mirror up to date.
        if current == self._text:
            return
        self.tracker.on_before_text_changes()
        self._text = current
        self.tracker.on_after_text_changes()
        self._log_state("changed ->")

    def undo(self) -> UndoRedoOutcome:
        outcome = self.tracker.undo()
        self._after_outcome("undo", outcome)
        return outcome

    def redo(self) -> UndoRedoOutcome:
        outcome = self.tracker.redo()
        self._after_outcome("redo", outcome)
        return outcome

    def clear_history(self) -> None:
        self.tracker.clear_all_queues()
        self.hooks.update_status("history cleared")

    def _awaiting_echo(self) -> bool:
        # Undo/redo edits were already mirrored in apply_edit; their Changed
        # message still has to reach the tracker to close the suppression.
        return self.tracker.state is TrackingState.SUPPRESS_NEXT_COMMIT

    def _location(self, offset: int) -> Location:
        return cursor_for_offset(self._text.split("\n"), offset)

    def _after_outcome(self, label: str, outcome: UndoRedoOutcome) -> None:
        if outcome is UndoRedoOutcome.QUEUE_EMPTY:
            self.hooks.update_status(f"nothing to {label}")
        self._log_state(f"{label} <-", outcome=outcome.value)

    def _report(self, label: str) -> None:
        tracker = self.tracker
        self.hooks.update_status(
            f"{label} (undo {tracker.undo_depth} / redo {tracker.redo_depth})"
        )

    def _on_commit(self, delta: TextDelta) -> None:
        self._log_state("commit ->", kind=delta.kind.value, start=delta.start)

    def _on_apply_failed(self, delta: TextDelta, exc: Exception) -> None:
        self.hooks.update_status(f"history entry could not be applied: {exc}")
        self._log_state("apply_failed ->", kind=delta.kind.value, start=delta.start)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "state": self.tracker.state.value,
            "undo": self.tracker.undo_depth,
            "redo": self.tracker.redo_depth,
            "tracking": self.tracker.is_tracking,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "TextAreaLike",
    "TextualHistoryAdapter",
    "TextualScheduler",
    "TextualUIHooks",
]
