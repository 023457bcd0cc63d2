"""Immutable description of one committed text change."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

from rundo_engine.errors import DeltaApplyError

# (range_start, range_end, replacement) handed to a host's ``apply_edit``.
Edit = Tuple[int, int, str]


class DeltaKind(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    REPLACEMENT = "replacement"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True)
class TextDelta:
    """Single contiguous region that differs between two texts.

    ``[start, old_end)`` in the old text was replaced by ``[start, new_end)``
    in the new text. ``removed_text`` and ``inserted_text`` hold the contents
    of those two ranges.
    """

    kind: DeltaKind
    start: int
    old_end: int
    new_end: int
    removed_text: str = ""
    inserted_text: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.old_end:
            raise ValueError(
                f"invalid old range [{self.start}, {self.old_end}) for delta"
            )
        if not self.start <= self.new_end:
            raise ValueError(
                f"invalid new range [{self.start}, {self.new_end}) for delta"
            )
        if len(self.removed_text) != self.old_end - self.start:
            raise ValueError("removed_text does not span [start, old_end)")
        if len(self.inserted_text) != self.new_end - self.start:
            raise ValueError("inserted_text does not span [start, new_end)")
        object.__setattr__(self, "kind", DeltaKind(self.kind))
        expected = classify(
            self.removed_text,
            self.inserted_text,
            unchanged=not self.removed_text and not self.inserted_text,
        )
        if self.kind is not expected:
            raise ValueError(
                f"delta kind {self.kind.value!r} does not match its text,"
                f" expected {expected.value!r}"
            )

    @property
    def is_unchanged(self) -> bool:
        return self.kind is DeltaKind.UNCHANGED

    def forward_edit(self) -> Edit:
        """Edit that turns the old text into the new text."""

        return (self.start, self.old_end, self.inserted_text)

    def inverse_edit(self) -> Edit:
        """Edit that turns the new text back into the old text."""

        return (self.start, self.new_end, self.removed_text)

    def apply_forward(self, text: str) -> str:
        return _apply(text, self.forward_edit())

    def apply_inverse(self, text: str) -> str:
        return _apply(text, self.inverse_edit())

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "start": self.start,
            "old_end": self.old_end,
            "new_end": self.new_end,
            "removed_text": self.removed_text,
            "inserted_text": self.inserted_text,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TextDelta":
        try:
            start = int(data["start"])
            old_end = int(data["old_end"])
            new_end = int(data["new_end"])
            removed = str(data.get("removed_text", ""))
            inserted = str(data.get("inserted_text", ""))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed delta payload: {data!r}") from exc
        if "kind" in data:
            kind = DeltaKind(data["kind"])
        else:
            kind = classify(removed, inserted, unchanged=not removed and not inserted)
        return cls(
            kind=kind,
            start=start,
            old_end=old_end,
            new_end=new_end,
            removed_text=removed,
            inserted_text=inserted,
        )


def classify(removed: str, inserted: str, *, unchanged: bool) -> DeltaKind:
    if unchanged:
        return DeltaKind.UNCHANGED
    if not removed and inserted:
        return DeltaKind.ADDITION
    if removed and not inserted:
        return DeltaKind.DELETION
    return DeltaKind.REPLACEMENT


def _apply(text: str, edit: Edit) -> str:
    start, end, replacement = edit
    if not 0 <= start <= end <= len(text):
        raise DeltaApplyError(
            f"range [{start}, {end}) is outside text of length {len(text)}",
            text_length=len(text),
            offsets=(start, end),
        )
    return text[:start] + replacement + text[end:]


__all__ = ["DeltaKind", "Edit", "TextDelta", "classify"]
