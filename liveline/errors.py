# errors.py


class LivelineError(Exception):
    """Base class for errors raised by liveline."""


class OutputClosedError(LivelineError):
    """Raised when an Output is used after close()."""
