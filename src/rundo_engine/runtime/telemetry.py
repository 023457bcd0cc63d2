"""Telemetry for the history engine, backed by telelog.

Public surface:

``configure(...)`` -- install a telelog configuration (explicit or preset)
``get_logger(name)`` -- cached telelog logger for a component
``record_event(name, ...)`` -- structured ``event::<name>`` line
``span(name, ...)`` -- profiled block; its handle records notes and warnings
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "RUNDO_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "rundo_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``RUNDO_ENGINE_<name>`` from the environment."""

    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Write ``message`` with ``payload``, as pairs when telelog supports it."""

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def _development_preset(config: Any) -> None:
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(True)


def _production_preset(config: Any) -> None:
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(env("LOG_FILE") or "rundo_engine.log")
    config.with_buffering(True)


def _quiet_preset(config: Any) -> None:
    # Warnings and errors only; for embedding hosts and test runs.
    config.with_min_level("WARNING")
    config.with_console_output(True)
    config.with_colored_output(False)


def _environment_preset(config: Any) -> None:
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "1024"))


_PRESETS: Dict[str, Callable[[Any], None]] = {
    "development": _development_preset,
    "production": _production_preset,
    "quiet": _quiet_preset,
    "environment": _environment_preset,
}


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install the telelog configuration every engine logger is built from.

    ``preset`` is one of ``"development"``, ``"production"``, ``"quiet"`` or
    ``"environment"`` (the default, driven by ``RUNDO_ENGINE_*`` variables).
    It is mutually exclusive with an explicit ``config``.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        key = (preset or "environment").lower()
        builder = _PRESETS.get(key)
        if builder is None:
            raise ValueError(
                f"Unknown preset '{preset}'. Expected one of {sorted(_PRESETS)}."
            )
        config = tl.Config()
        builder(config)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; notes are attached to every line the span emits."""

    logger: Any
    span_name: str
    notes: Dict[str, str] = field(default_factory=dict)

    def note(self, key: str, value: Any) -> None:
        self.notes[key] = _text(value)

    def warn(self, reason: str) -> None:
        self._emit("warning", "span::warn", reason)

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", reason)

    def _emit(self, level: str, message: str, reason: str) -> None:
        _emit(
            self.logger,
            level,
            message,
            {"span": self.span_name, **self.notes, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block with telelog, optionally tracked as a component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    pushed as logger context for the block and seeds the handle's notes. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, span_name=name)
    for key, value in (metadata or {}).items():
        handle.note(key, value)

    component_name = name if component is True else component or None
    with ExitStack() as stack:
        for key, value in handle.notes.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
