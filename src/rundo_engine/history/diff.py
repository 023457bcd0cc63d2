"""Single-region string diff by common prefix/suffix reduction."""

from __future__ import annotations

from .delta import TextDelta, classify


def common_prefix_length(old: str, new: str) -> int:
    limit = min(len(old), len(new))
    index = 0
    while index < limit and old[index] == new[index]:
        index += 1
    return index


def common_suffix_length(old: str, new: str, *, prefix: int = 0) -> int:
    """Length of the shared tail, never reaching back into ``prefix``.

    Without the bound, ``"aaa" -> "aaaa"`` would match three characters at
    both ends and produce a negative-width region.
    """

    limit = min(len(old), len(new)) - prefix
    length = 0
    while length < limit and old[-1 - length] == new[-1 - length]:
        length += 1
    return length


def compute_delta(old: str, new: str) -> TextDelta:
    """Describe the one contiguous region that changed between ``old`` and ``new``.

    The result is greedy rather than minimal: when the edit sits inside a run
    of repeated characters the region is reported at the leftmost position
    that still reproduces ``new``.
    """

    if old == new:
        return TextDelta(
            kind=classify("", "", unchanged=True),
            start=len(old),
            old_end=len(old),
            new_end=len(new),
        )

    prefix = common_prefix_length(old, new)
    suffix = common_suffix_length(old, new, prefix=prefix)
    old_end = len(old) - suffix
    new_end = len(new) - suffix
    removed = old[prefix:old_end]
    inserted = new[prefix:new_end]
    return TextDelta(
        kind=classify(removed, inserted, unchanged=False),
        start=prefix,
        old_end=old_end,
        new_end=new_end,
        removed_text=removed,
        inserted_text=inserted,
    )


__all__ = ["common_prefix_length", "common_suffix_length", "compute_delta"]
