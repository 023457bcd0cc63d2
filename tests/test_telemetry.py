from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from rundo_engine.runtime import telemetry


class PairLogger:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, str, List[Tuple[str, str]]]] = []

    def warning_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.lines.append(("warning", message, pairs))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.lines.append(("error", message, pairs))


class PlainLogger:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def warning(self, message: str) -> None:
        self.lines.append(message)


def test_span_handle_notes_ride_along_with_warnings() -> None:
    logger = PairLogger()
    handle = telemetry.SpanHandle(logger=logger, span_name="history::undo")
    handle.note("start", 4)
    handle.note("range", (1, 2))

    handle.warn("range is outside the text")
    handle.fail("boom")

    level, message, pairs = logger.lines[0]
    assert (level, message) == ("warning", "span::warn")
    assert dict(pairs) == {
        "span": "history::undo",
        "start": "4",
        "range": "(1, 2)",
        "reason": "range is outside the text",
    }
    assert logger.lines[1][:2] == ("error", "span::fail")


def test_span_handle_falls_back_to_plain_level_method() -> None:
    logger = PlainLogger()
    handle = telemetry.SpanHandle(logger=logger, span_name="buffer::set_text")

    handle.warn("slow")

    assert logger.lines[0].startswith("span::warn ")
    assert "'reason': 'slow'" in logger.lines[0]


def test_configure_rejects_conflicting_or_unknown_presets() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_env_flag_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUNDO_ENGINE_LOG_JSON", "Yes")
    monkeypatch.delenv("RUNDO_ENGINE_NO_COLOR", raising=False)

    assert telemetry.env_flag("LOG_JSON", False) is True
    assert telemetry.env_flag("NO_COLOR", True) is True
    assert telemetry.env("LOG_JSON") == "Yes"


def test_span_reraises_after_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    failures: List[Any] = []
    monkeypatch.setattr(telemetry.SpanHandle, "fail", lambda self, reason: failures.append(reason))

    with pytest.raises(KeyError):
        with telemetry.span("history::redo", metadata={"redo_depth": 0}) as handle:
            assert handle.notes == {"redo_depth": "0"}
            raise KeyError("missing")

    assert failures == ["'missing'"]
