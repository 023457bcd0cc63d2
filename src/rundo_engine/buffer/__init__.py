"""In-memory text buffer usable as an ``EditTracker`` host."""

from .buffer import Buffer, Transaction, cursor_for_offset
from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import BufferValidationError, ChangeListener
from .validation import ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "ChangeListener",
    "Cursor",
    "Transaction",
    "cursor_for_offset",
    "ensure_offset",
    "ensure_range",
]
