"""Text deltas, the prefix/suffix diff, and bounded history queues."""

from .delta import DeltaKind, Edit, TextDelta
from .diff import common_prefix_length, common_suffix_length, compute_delta
from .queue import BoundedHistoryQueue
from .snapshot import SNAPSHOT_VERSION, HistorySnapshot

__all__ = [
    "BoundedHistoryQueue",
    "DeltaKind",
    "Edit",
    "HistorySnapshot",
    "SNAPSHOT_VERSION",
    "TextDelta",
    "common_prefix_length",
    "common_suffix_length",
    "compute_delta",
]
