"""Change-tracking states of ``EditTracker``."""

from __future__ import annotations

from enum import Enum


class TrackingState(str, Enum):
    # No coalescing window open; the next change notification opens one.
    IDLE = "idle"
    # Debounce timer running; further changes push the commit back.
    PENDING_COMMIT = "pending_commit"
    # The next after-change notification belongs to an edit the tracker made
    # itself (undo/redo) and must not open a window.
    SUPPRESS_NEXT_COMMIT = "suppress_next_commit"


__all__ = ["TrackingState"]
