"""Boundary types for observing buffer edits."""

from __future__ import annotations

from typing import Protocol


class ChangeListener(Protocol):
    """Receives the notification pair emitted around every buffer edit."""

    def on_before_text_changes(self) -> None:
        ...

    def on_after_text_changes(self) -> None:
        ...


class BufferValidationError(IndexError):
    """Raised when an offset or range falls outside the buffer text."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
