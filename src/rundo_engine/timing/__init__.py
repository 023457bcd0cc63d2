"""Debounce timer and the schedulers it runs on."""

from .scheduler import AsyncioScheduler, Callback, DeadlineScheduler, Scheduler
from .timer import CoalescingTimer

__all__ = [
    "AsyncioScheduler",
    "Callback",
    "CoalescingTimer",
    "DeadlineScheduler",
    "Scheduler",
]
