"""One-shot deferred callback schedulers.

Anything that can run a cancelable callback after N milliseconds on the
host's event sequence satisfies ``Scheduler``. Two implementations ship here:
a deadline table polled by the host loop and a thin asyncio wrapper. The
Textual adapter adds a third built on ``App.set_timer``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    """Deferred-callback capability consumed by ``CoalescingTimer``."""

    def call_later(self, delay_ms: int, callback: Callback) -> Hashable:
        """Run ``callback`` once after ``delay_ms``; return a cancel handle."""
        ...

    def cancel(self, handle: Hashable) -> None:
        """Prevent the callback behind ``handle`` from running, if still pending."""
        ...


@dataclass
class PendingCall:
    deadline: float
    delay_ms: int
    generation: int
    callback: Callback


class DeadlineScheduler:
    """Deadline table drained by ``process_due`` from the host's loop.

    The host polls (for example from a UI interval timer) and due callbacks run
    inline on that same sequence, in deadline order. ``clock`` defaults to
    ``time.monotonic`` and can be replaced by tests.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._pending: Dict[int, PendingCall] = {}
        self._counter = 0

    def call_later(self, delay_ms: int, callback: Callback) -> int:
        self._counter += 1
        self._pending[self._counter] = PendingCall(
            deadline=self._clock() + (delay_ms / 1000.0),
            delay_ms=delay_ms,
            generation=self._counter,
            callback=callback,
        )
        return self._counter

    def cancel(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)  # type: ignore[call-overload]

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def next_deadline(self) -> Optional[float]:
        if not self._pending:
            return None
        return min(call.deadline for call in self._pending.values())

    def process_due(self) -> int:
        """Run every callback whose deadline has passed; return how many ran."""

        now = self._clock()
        due: List[PendingCall] = sorted(
            (call for call in self._pending.values() if call.deadline <= now),
            key=lambda call: (call.deadline, call.generation),
        )
        ran = 0
        for call in due:
            # An earlier callback in this batch may have cancelled this one.
            if self._pending.pop(call.generation, None) is None:
                continue
            call.callback()
            ran += 1
        return ran


class AsyncioScheduler:
    """Schedules onto an asyncio loop via ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        return self._resolve_loop().call_later(delay_ms / 1000.0, callback)

    def cancel(self, handle: Hashable) -> None:
        if isinstance(handle, asyncio.TimerHandle):
            handle.cancel()


__all__ = [
    "AsyncioScheduler",
    "Callback",
    "DeadlineScheduler",
    "PendingCall",
    "Scheduler",
]
