from __future__ import annotations

import pytest

from rundo_engine.runtime import telemetry


@pytest.fixture(autouse=True, scope="session")
def quiet_telemetry() -> None:
    telemetry.configure(preset="quiet")


class FakeClock:
    """Monotonic stand-in advanced explicitly by tests, in seconds."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, millis: float) -> None:
        self.now += millis / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
