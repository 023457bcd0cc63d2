"""Edit tracking state machine and its host-facing types."""

from .config import DEFAULT_DEBOUNCE_MS, DEFAULT_HISTORY_CAPACITY, TrackerConfig
from .edit_tracker import EditTracker
from .host import HistoryObserver, TextHost, UndoRedoOutcome
from .state import TrackingState

__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_HISTORY_CAPACITY",
    "EditTracker",
    "HistoryObserver",
    "TextHost",
    "TrackerConfig",
    "TrackingState",
    "UndoRedoOutcome",
]
