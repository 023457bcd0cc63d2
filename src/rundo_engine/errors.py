"""Exception types shared by the history, timing, and tracker packages."""

from __future__ import annotations

from typing import Optional


class InvalidConfiguration(ValueError):
    """Raised when a capacity or debounce value is not a positive integer."""

    def __init__(self, setting: str, value: object) -> None:
        super().__init__(f"{setting} must be a positive integer, got {value!r}")
        self.setting = setting
        self.value = value


class DeltaApplyError(IndexError):
    """Raised when a delta's offsets do not fit the text it is applied to."""

    def __init__(
        self, message: str, *, text_length: int, offsets: Optional[tuple[int, int]] = None
    ) -> None:
        super().__init__(message)
        self.text_length = text_length
        self.offsets = offsets


def require_positive(setting: str, value: object) -> int:
    # bool is an int subclass; True is not a meaningful capacity.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfiguration(setting, value)
    return value


__all__ = ["InvalidConfiguration", "DeltaApplyError", "require_positive"]
