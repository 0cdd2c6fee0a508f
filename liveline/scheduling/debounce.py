# scheduling/debounce.py

from typing import Callable


class Debounce:
    """
    Collapses a burst of calls into one deferred call.

    The first call in an idle period schedules ``func`` after ``delay_ms``;
    calls made before it fires are absorbed. The window is fixed, not
    extended by later calls, so a steady stream of requests still fires.
    """
    def __init__(self, func: Callable[[], None], delay_ms: float, scheduler):
        self.func = func
        self.delay_ms = delay_ms
        self.scheduler = scheduler
        self._handle = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def __call__(self) -> None:
        if self._pending:
            return
        self._pending = True
        self._handle = self.scheduler.after(self.delay_ms, self._fire)

    def _fire(self) -> None:
        self._pending = False
        self._handle = None
        self.func()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = False

    def flush(self) -> None:
        """Run a pending call now."""
        if self._pending:
            self.cancel()
            self.func()
