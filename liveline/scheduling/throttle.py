# scheduling/throttle.py

from typing import Any, Callable, Optional, Tuple


class Throttle:
    """
    Rate limiter with leading and trailing invocations.

    A call made when ``wait_ms`` has passed since the last invocation runs at
    once (leading). Calls inside the window arm a single trailing invocation
    at the end of the window, which runs with the most recent arguments.
    """
    def __init__(self, func: Callable[..., Any], wait_ms: float, scheduler,
                 leading: bool = True, trailing: bool = True):
        self.func = func
        self.scheduler = scheduler
        self.leading = leading
        self.trailing = trailing
        self._wait = wait_ms
        self._window_start: Optional[float] = None
        self._pending_args: Optional[Tuple[tuple, dict]] = None
        self._handle = None

    @property
    def wait(self) -> float:
        return self._wait

    def set_wait(self, wait_ms: float) -> None:
        if wait_ms < 0:
            raise ValueError(f"wait must not be negative, got {wait_ms!r}")
        self._wait = wait_ms

    @property
    def pending(self) -> bool:
        return self._pending_args is not None

    def __call__(self, *args, **kwargs) -> None:
        now = self.scheduler.now()
        window_open = self._window_start is not None and now - self._window_start < self._wait

        if not window_open and self._handle is None:
            self._window_start = now
            if self.leading:
                self._invoke(args, kwargs)
                self._arm_timer(self._wait)
                return

        if self.trailing:
            self._pending_args = (args, kwargs)
        if self._handle is None:
            remaining = self._wait - (now - self._window_start)
            self._arm_timer(max(0, remaining))

    def _arm_timer(self, delay: float) -> None:
        self._handle = self.scheduler.after(delay, self._on_timer)

    def _on_timer(self) -> None:
        self._handle = None
        if self._pending_args is None:
            self._window_start = None
            return
        args, kwargs = self._pending_args
        self._pending_args = None
        now = self.scheduler.now()
        self._window_start = now
        self._invoke(args, kwargs)
        self._arm_timer(self._wait)

    def _invoke(self, args: tuple, kwargs: dict) -> None:
        self.func(*args, **kwargs)

    def drop_pending(self) -> None:
        """Forget the pending trailing call but keep the current window."""
        self._pending_args = None

    def cancel(self) -> None:
        """Drop any pending trailing call and reset the window."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_args = None
        self._window_start = None

    def flush(self) -> None:
        """Run a pending trailing call now."""
        if self._pending_args is None:
            return
        args, kwargs = self._pending_args
        self.cancel()
        now = self.scheduler.now()
        self._window_start = now
        self._invoke(args, kwargs)
        self._arm_timer(self._wait)
