"""In-memory text surface that reports its edits to listeners."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional

from rundo_engine.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import ChangeListener
from .validation import ensure_offset, ensure_range


class Buffer:
    """Plain-text host for an ``EditTracker``.

    Implements the tracker's host surface (``get_current_text``,
    ``apply_edit``, ``set_caret``) and wraps every edit, whether typed by a
    user or applied by undo/redo, in before/after notifications to attached
    listeners.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self._listeners: List[ChangeListener] = []

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def caret(self) -> int:
        return _offset_for_cursor(self.document, self.state.cursor)

    def attach(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def detach(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # host surface

    def get_current_text(self) -> str:
        return self.document.text

    def apply_edit(self, range_start: int, range_end: int, replacement: str) -> None:
        self.replace_range(range_start, range_end, replacement, label="apply_edit")

    def set_caret(self, position: int) -> None:
        ensure_offset(self.document, position)
        self.state.set_cursor(*_cursor_from_offset(self.document, position))

    # editing

    def replace_range(
        self, start: int, end: int, text: str, *, label: str = "replace_range"
    ) -> int:
        """Replace ``[start, end)`` with ``text`` and return the new caret offset."""

        start, end = ensure_range(self.document, start, end)
        with Transaction(self, label):
            self.document = self.document.splice(start, end, text)
            caret = start + len(text)
            self.state.set_cursor(*_cursor_from_offset(self.document, caret))
        return caret

    def insert_text(self, text: str, *, at: Optional[int] = None) -> int:
        position = self.caret if at is None else at
        return self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> int:
        return self.replace_range(start, end, "", label="delete_range")

    def set_text(self, text: str) -> int:
        return self.replace_range(0, self.document.length, text, label="set_text")


class Transaction(AbstractContextManager["Transaction"]):
    """Brackets one edit with listener notifications and a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        for listener in list(self.buffer._listeners):
            listener.on_before_text_changes()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                for listener in list(self.buffer._listeners):
                    listener.on_after_text_changes()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _offset_for_cursor(document: BufferDocument, cursor: Cursor) -> int:
    lines = document.snapshot()
    row, col = cursor
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + col


def _cursor_from_offset(document: BufferDocument, offset: int) -> Cursor:
    return cursor_for_offset(document.snapshot(), offset)


def cursor_for_offset(lines, offset: int) -> Cursor:
    """Map a text offset to ``(row, column)`` over ``lines``."""

    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return (row, offset - running)
        running += line_len + 1
    return (len(lines) - 1, len(lines[-1]))


__all__ = ["Buffer", "Transaction", "cursor_for_offset"]
