"""Debounced undo/redo history for free-form text editing."""

__all__ = [
    "adapters",
    "buffer",
    "errors",
    "history",
    "runtime",
    "timing",
    "tracker",
]

__version__ = "0.1.0"
