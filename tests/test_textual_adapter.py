from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from rundo_engine.adapters.textual import (
    TextualHistoryAdapter,
    TextualScheduler,
    TextualUIHooks,
)
from rundo_engine.tracker import TrackerConfig, TrackingState, UndoRedoOutcome

Location = Tuple[int, int]


class FakeTextArea:
    """Stores text and caret like ``TextArea``; locations are (row, column)."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor: Location = (0, 0)

    def _offset(self, location: Location) -> int:
        row, col = location
        lines = self.text.split("\n")
        return sum(len(line) + 1 for line in lines[:row]) + col

    def replace(self, insert: str, start: Location, end: Location) -> None:
        begin, finish = self._offset(start), self._offset(end)
        self.text = self.text[:begin] + insert + self.text[finish:]

    def move_cursor(self, location: Location) -> None:
        self.cursor = location


class FakeTimer:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeApp:
    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        del delay
        timer = FakeTimer(callback)
        self.timers.append(timer)
        return timer

    def fire_live_timers(self) -> None:
        for timer in list(self.timers):
            if not timer.stopped:
                timer.stopped = True
                timer.callback()


def make_adapter(
    text: str = "",
    *,
    statuses: Optional[List[str]] = None,
    logs: Optional[List[str]] = None,
) -> Tuple[FakeTextArea, FakeApp, TextualHistoryAdapter]:
    area = FakeTextArea(text)
    app = FakeApp()
    hooks = TextualUIHooks(
        update_status=(statuses.append if statuses is not None else lambda _: None),
        log=(logs.append if logs is not None else lambda _: None),
    )
    adapter = TextualHistoryAdapter(
        area,
        TextualScheduler(app),
        config=TrackerConfig(debounce_ms=300),
        hooks=hooks,
    )
    return area, app, adapter


def user_types(area: FakeTextArea, adapter: TextualHistoryAdapter, text: str) -> None:
    for char in text:
        area.text += char
        adapter.handle_text_changed()


def test_changed_messages_commit_one_entry() -> None:
    area, app, adapter = make_adapter("hello")

    user_types(area, adapter, " there")
    assert sum(not timer.stopped for timer in app.timers) == 1

    app.fire_live_timers()

    delta = adapter.tracker.peek_undo()
    assert delta is not None
    assert delta.inserted_text == " there"
    assert adapter.tracker.undo_depth == 1


def test_undo_replaces_text_and_absorbs_echo() -> None:
    statuses: List[str] = []
    area, app, adapter = make_adapter("line one\n", statuses=statuses)
    user_types(area, adapter, "line two")
    app.fire_live_timers()

    assert adapter.undo() is UndoRedoOutcome.APPLIED
    assert area.text == "line one\n"
    assert area.cursor == (1, 0)
    assert adapter.tracker.state is TrackingState.SUPPRESS_NEXT_COMMIT

    # Textual posts TextArea.Changed for the programmatic edit afterwards.
    adapter.handle_text_changed()
    assert adapter.tracker.state is TrackingState.IDLE
    assert not adapter.tracker.is_tracking
    assert statuses[-1] == "undo (undo 0 / redo 1)"

    assert adapter.redo() is UndoRedoOutcome.APPLIED
    assert area.text == "line one\nline two"


def test_queue_empty_and_failures_reach_status_line() -> None:
    statuses: List[str] = []
    logs: List[str] = []
    area, app, adapter = make_adapter("abc", statuses=statuses, logs=logs)

    assert adapter.undo() is UndoRedoOutcome.QUEUE_EMPTY
    assert statuses[-1] == "nothing to undo"

    user_types(area, adapter, "def")
    app.fire_live_timers()
    area.text = "x"  # changed without a Changed message reaching the adapter
    adapter._text = "x"

    assert adapter.undo() is UndoRedoOutcome.APPLY_FAILED
    assert statuses[-1].startswith("history entry could not be applied")
    assert any(line.startswith("apply_failed ->") for line in logs)


def test_unchanged_message_is_ignored() -> None:
    area, app, adapter = make_adapter("same")

    adapter.handle_text_changed()

    assert app.timers == []
    assert adapter.tracker.state is TrackingState.IDLE


def test_clear_history_reports_status() -> None:
    statuses: List[str] = []
    area, app, adapter = make_adapter("", statuses=statuses)
    user_types(area, adapter, "a")
    app.fire_live_timers()

    adapter.clear_history()

    assert adapter.tracker.undo_depth == 0
    assert statuses[-1] == "history cleared"


def test_keystroke_before_undo_echo_is_tracked() -> None:
    area, app, adapter = make_adapter("abc")
    user_types(area, adapter, "d")
    app.fire_live_timers()
    assert adapter.undo() is UndoRedoOutcome.APPLIED
    assert area.text == "abc"

    area.text += "!"  # typed before Textual delivered the undo's Changed message
    adapter.handle_text_changed()  # the undo echo
    assert adapter.tracker.state is TrackingState.PENDING_COMMIT
    adapter.handle_text_changed()  # the keystroke's own message
    assert adapter.tracker.state is TrackingState.PENDING_COMMIT

    app.fire_live_timers()

    delta = adapter.tracker.peek_undo()
    assert delta is not None
    assert delta.inserted_text == "!"
    assert delta.start == 3
    assert (adapter.tracker.undo_depth, adapter.tracker.redo_depth) == (1, 1)
