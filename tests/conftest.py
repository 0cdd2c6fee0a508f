# conftest.py

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from liveline.output import Output


class VirtualTimer:
    def __init__(self, due, seq, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class VirtualScheduler:
    """Scheduler driven by advance() instead of wall time."""

    def __init__(self):
        self.time = 0.0
        self._timers = []
        self._seq = 0

    def now(self):
        return self.time

    def after(self, ms, callback):
        self._seq += 1
        timer = VirtualTimer(self.time + ms, self._seq, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending_timers(self):
        return [t for t in self._timers if not t.cancelled]

    def advance(self, ms):
        target = self.time + ms
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._timers.remove(timer)
            self.time = timer.due
            timer.callback()
        self._timers = [t for t in self._timers if not t.cancelled]
        self.time = target


class FakeTerminal:
    """
    Terminal stand-in that keeps the rows above the cursor.

    ``rows`` is what a user would see: the cursor always sits on the row
    after the last one.
    """

    def __init__(self):
        self.rows = []
        self.ops = []
        self.flushes = 0

    def replace_row(self, distance, text):
        assert 1 <= distance <= len(self.rows)
        self.ops.append(("replace", distance, text))
        self.rows[len(self.rows) - distance] = text

    def delete_row(self):
        assert self.rows
        self.ops.append(("delete",))
        self.rows.pop()

    def write_line(self, text=""):
        self.ops.append(("line", text))
        self.rows.append(text)

    def write(self, text):
        self.ops.append(("write", text))

    def flush(self):
        self.flushes += 1


@pytest.fixture
def scheduler():
    return VirtualScheduler()


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def output(scheduler, terminal):
    return Output(terminal=terminal, scheduler=scheduler)
