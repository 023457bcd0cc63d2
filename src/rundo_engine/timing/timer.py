"""Restartable single-shot debounce timer."""

from __future__ import annotations

from typing import Callable, Hashable, Optional

from rundo_engine.errors import require_positive

from .scheduler import Scheduler


class CoalescingTimer:
    """Debounce window that signals ``listener`` once the delay elapses quietly.

    At most one firing is live. Every start bumps a generation counter and the
    scheduled callback checks it, so a firing superseded by ``restart`` or
    ``cancel`` never reaches the listener even if the scheduler already
    dequeued it.
    """

    def __init__(self, scheduler: Scheduler, listener: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self._listener = listener
        self._handle: Optional[Hashable] = None
        self._generation = 0
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, after_ms: int) -> None:
        delay = require_positive("debounce delay", after_ms)
        self.cancel()
        self._generation += 1
        generation = self._generation
        self._running = True
        self._handle = self._scheduler.call_later(
            delay, lambda: self._deliver(generation)
        )

    def restart(self, after_ms: int) -> None:
        self.start(after_ms)

    def cancel(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
        self._generation += 1
        self._running = False

    def fire_now(self) -> bool:
        """Deliver immediately instead of waiting; no-op when nothing is pending."""

        if not self._running:
            return False
        self.cancel()
        self._listener()
        return True

    def _deliver(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._handle = None
        self._running = False
        self._listener()


__all__ = ["CoalescingTimer"]
