"""Textual host binding for the edit tracker."""

from .controller import (
    TextAreaLike,
    TextualHistoryAdapter,
    TextualScheduler,
    TextualUIHooks,
)

__all__ = [
    "TextAreaLike",
    "TextualHistoryAdapter",
    "TextualScheduler",
    "TextualUIHooks",
]
