"""Tracker configuration and its environment overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace

from rundo_engine.errors import InvalidConfiguration, require_positive
from rundo_engine.runtime.telemetry import env, env_flag

DEFAULT_DEBOUNCE_MS = 2000
DEFAULT_HISTORY_CAPACITY = 10


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Debounce window, queue capacity, and the redo-on-edit policy.

    ``clear_redo_on_edit`` defaults to off: committing a new edit leaves any
    redo entries in place, and redoing them later may fail to apply.
    """

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    clear_redo_on_edit: bool = False

    def __post_init__(self) -> None:
        require_positive("debounce_ms", self.debounce_ms)
        require_positive("history_capacity", self.history_capacity)

    def with_debounce(self, debounce_ms: int) -> "TrackerConfig":
        return replace(self, debounce_ms=debounce_ms)

    def with_capacity(self, history_capacity: int) -> "TrackerConfig":
        return replace(self, history_capacity=history_capacity)

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build a config from ``RUNDO_ENGINE_*`` variables, defaulting the rest."""

        return cls(
            debounce_ms=_env_int("DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
            history_capacity=_env_int("HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY),
            clear_redo_on_edit=env_flag("CLEAR_REDO_ON_EDIT", False),
        )


def _env_int(name: str, fallback: int) -> int:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidConfiguration(name.lower(), raw) from exc


__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_HISTORY_CAPACITY",
    "TrackerConfig",
]
