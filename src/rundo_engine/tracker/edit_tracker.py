"""Debounced edit tracking with bounded undo/redo history."""

from __future__ import annotations

from typing import Callable, Optional

from rundo_engine.history import (
    BoundedHistoryQueue,
    Edit,
    HistorySnapshot,
    TextDelta,
    compute_delta,
)
from rundo_engine.runtime import telemetry
from rundo_engine.timing import CoalescingTimer, Scheduler

from .config import TrackerConfig
from .host import HistoryObserver, TextHost, UndoRedoOutcome
from .state import TrackingState

LOGGER_NAME = "rundo_engine.tracker"


class EditTracker:
    """Turns host change notifications into committed undo history.

    The host calls ``on_before_text_changes`` / ``on_after_text_changes``
    around every change to its text. The first change opens a coalescing
    window and snapshots the text; each later change pushes the window's end
    back by ``debounce_ms``. When the window closes the tracker diffs the
    snapshot against the current text and pushes the delta onto the undo
    queue.

    All calls, including the timer callback, are expected on the host's
    event sequence.
    """

    def __init__(
        self,
        host: TextHost,
        scheduler: Scheduler,
        *,
        config: Optional[TrackerConfig] = None,
        observer: Optional[HistoryObserver] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.host = host
        self.observer = observer or HistoryObserver()
        self._config = config or TrackerConfig()
        self._logger_name = logger_name or LOGGER_NAME
        self._timer = CoalescingTimer(scheduler, self._on_timer_fired)
        self._undo = BoundedHistoryQueue(self._config.history_capacity)
        self._redo = BoundedHistoryQueue(self._config.history_capacity)
        self._old_text: Optional[str] = None
        self._state = TrackingState.IDLE

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def old_text(self) -> Optional[str]:
        """Baseline the next commit will be diffed against, if one is held."""

        return self._old_text

    @property
    def is_tracking(self) -> bool:
        return self._timer.is_running

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def peek_undo(self) -> Optional[TextDelta]:
        return self._undo.peek_front()

    def peek_redo(self) -> Optional[TextDelta]:
        return self._redo.peek_front()

    # host notifications

    def on_before_text_changes(self) -> None:
        if self._old_text is None:
            self._old_text = self.host.get_current_text()

        if self._state is TrackingState.IDLE:
            self._timer.start(self._config.debounce_ms)
            self._state = TrackingState.PENDING_COMMIT

    def on_after_text_changes(self) -> None:
        if self._state is TrackingState.SUPPRESS_NEXT_COMMIT:
            self._state = TrackingState.IDLE
        elif self._state is TrackingState.PENDING_COMMIT:
            self._timer.restart(self._config.debounce_ms)

    def flush(self) -> bool:
        """Commit an open coalescing window now; ``False`` if none was open."""

        return self._timer.fire_now()

    def _on_timer_fired(self) -> None:
        new_text = self.host.get_current_text()
        old_text = self._old_text
        self._old_text = None
        self._state = TrackingState.IDLE

        if old_text is None or old_text == new_text:
            return

        delta = compute_delta(old_text, new_text)
        self._undo.push_front(delta)
        if self._config.clear_redo_on_edit:
            self._redo.clear()
        telemetry.record_event(
            "history.commit",
            level="debug",
            data={
                "kind": delta.kind.value,
                "start": delta.start,
                "undo_depth": len(self._undo),
            },
            logger_name=self._logger_name,
        )
        self.observer.on_commit(delta)

    # undo / redo

    def undo(self) -> UndoRedoOutcome:
        """Revert the most recent committed edit in the host text."""

        with telemetry.span(
            "history::undo",
            logger_name=self._logger_name,
            component="history",
            metadata={"undo_depth": len(self._undo)},
        ) as handle:
            return self._replay(
                handle,
                source=self._undo,
                target=self._redo,
                edit_for=TextDelta.inverse_edit,
                performed=self.observer.on_undo_performed,
                label="undo",
            )

    def redo(self) -> UndoRedoOutcome:
        """Re-apply the most recently undone edit."""

        with telemetry.span(
            "history::redo",
            logger_name=self._logger_name,
            component="history",
            metadata={"redo_depth": len(self._redo)},
        ) as handle:
            return self._replay(
                handle,
                source=self._redo,
                target=self._undo,
                edit_for=TextDelta.forward_edit,
                performed=self.observer.on_redo_performed,
                label="redo",
            )

    def _replay(
        self,
        handle: telemetry.SpanHandle,
        *,
        source: BoundedHistoryQueue,
        target: BoundedHistoryQueue,
        edit_for: Callable[[TextDelta], Edit],
        performed: Callable[[], None],
        label: str,
    ) -> UndoRedoOutcome:
        # Typed text still inside the debounce window is committed first so it
        # is what gets undone, rather than being lost.
        self.flush()

        delta = source.pop_front()
        if delta is None:
            telemetry.record_event(
                "history.queue_empty",
                data={"operation": label},
                logger_name=self._logger_name,
            )
            return UndoRedoOutcome.QUEUE_EMPTY

        try:
            if not delta.is_unchanged:
                # The host reports this edit back through the change hooks;
                # it must not open a coalescing window of its own.
                self._state = TrackingState.SUPPRESS_NEXT_COMMIT
                self.host.apply_edit(*edit_for(delta))
            self.host.set_caret(delta.start)
        except IndexError as exc:
            self._state = TrackingState.IDLE
            handle.note("kind", delta.kind.value)
            handle.note("start", delta.start)
            handle.warn(f"history entry could not be applied: {exc}")
            self.observer.on_apply_failed(delta, exc)
            return UndoRedoOutcome.APPLY_FAILED
        finally:
            self._old_text = self.host.get_current_text()

        target.push_front(delta)
        telemetry.record_event(
            f"history.{label}",
            data={
                "kind": delta.kind.value,
                "start": delta.start,
                "undo_depth": len(self._undo),
                "redo_depth": len(self._redo),
            },
            logger_name=self._logger_name,
        )
        performed()
        return UndoRedoOutcome.APPLIED

    # configuration

    def clear_all_queues(self) -> None:
        self._undo.clear()
        self._redo.clear()
        telemetry.record_event("history.cleared", logger_name=self._logger_name)

    def set_history_capacity(self, capacity: int) -> None:
        """Change the queue capacity. Both queues restart empty."""

        config = self._config.with_capacity(capacity)
        self._undo.set_capacity(config.history_capacity)
        self._redo.set_capacity(config.history_capacity)
        self._config = config
        telemetry.record_event(
            "history.capacity",
            data={"capacity": capacity},
            logger_name=self._logger_name,
        )

    def set_debounce_millis(self, debounce_ms: int) -> None:
        """Takes effect at the next timer start; a running window keeps its deadline."""

        self._config = self._config.with_debounce(debounce_ms)

    # suspend / resume

    def save_state(self) -> HistorySnapshot:
        return HistorySnapshot.capture(self._undo, self._redo)

    def restore_state(self, snapshot: HistorySnapshot) -> None:
        """Replace both queues with ``snapshot``.

        Restore the host text before calling this: any open coalescing window
        is dropped and the next change starts from a fresh baseline.
        """

        config = self._config.with_capacity(snapshot.capacity)
        self._timer.cancel()
        self._undo.set_capacity(config.history_capacity)
        self._redo.set_capacity(config.history_capacity)
        self._undo.extend_back(snapshot.undo)
        self._redo.extend_back(snapshot.redo)
        self._config = config
        self._old_text = None
        self._state = TrackingState.IDLE


__all__ = ["EditTracker", "LOGGER_NAME"]
