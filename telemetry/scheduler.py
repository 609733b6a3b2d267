from __future__ import annotations  # Timer abstraction with cancel-and-reschedule semantics

import asyncio
import threading
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):  # Cancellable scheduled callback
    def cancel(self) -> None: ...


class Scheduler(Protocol):  # Schedules a callback after a delay in seconds
    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle: ...


class ThreadScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay_s, fn)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """Runs callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_s, fn)


__all__ = ["AsyncioScheduler", "Scheduler", "ThreadScheduler", "TimerHandle"]
