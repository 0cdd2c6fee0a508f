# scheduling/scheduler.py

import time
import asyncio
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Clock plus single-shot delayed callbacks, both in milliseconds."""
    def now(self) -> float: ...
    def after(self, ms: float, callback: Callable[[], None]) -> Optional[TimerHandle]: ...


class LoopScheduler:
    """
    Schedules callbacks on the running asyncio event loop.

    Outside a running loop there is nothing to defer to, so callbacks run
    immediately and ``after`` returns None.
    """
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def now(self) -> float:
        loop = self._get_loop()
        if loop is None:
            return time.monotonic() * 1000
        return loop.time() * 1000

    def after(self, ms: float, callback: Callable[[], None]) -> Optional[TimerHandle]:
        if ms < 0:
            raise ValueError(f"delay must not be negative, got {ms!r}")
        loop = self._get_loop()
        if loop is None:
            callback()
            return None
        return loop.call_later(ms / 1000, callback)
