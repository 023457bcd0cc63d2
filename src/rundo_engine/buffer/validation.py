"""Offset checks shared by buffer operations."""

from __future__ import annotations

from .document import BufferDocument
from .sync import BufferValidationError


def ensure_offset(document: BufferDocument, offset: int) -> int:
    if offset < 0 or offset > document.length:
        raise BufferValidationError(
            f"Offset {offset} out of range for length {document.length}",
            offset=offset,
        )
    return offset


def ensure_range(document: BufferDocument, start: int, end: int) -> tuple[int, int]:
    ensure_offset(document, start)
    ensure_offset(document, end)
    if start > end:
        raise BufferValidationError(f"Range start {start} is after end {end}", offset=start)
    return start, end
