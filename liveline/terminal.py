# terminal.py
import sys
from typing import Optional, TextIO

from rich.control import Control
from rich.segment import ControlType

from .logger import Logger


class Terminal:
    """
    Cursor-relative terminal operations used by the renderer.

    All positions are relative to the baseline row, the row the cursor sits
    on after the last newline written by the renderer.
    """

    def __init__(self, stream: Optional[TextIO] = None, logger: Optional[Logger] = None):
        self._stream = stream
        self.logger = logger or Logger(__name__)

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a redirected sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    @property
    def is_terminal(self) -> bool:
        """Return True if the stream is attached to a terminal."""
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def write(self, text: str) -> None:
        """Write raw text; broken pipes and closed streams are logged and dropped."""
        try:
            self.stream.write(text)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Terminal write failed: {e!r}")

    def move_cursor(self, rows: int) -> None:
        """Move the cursor down (positive) or up (negative)."""
        if rows:
            self.write(str(Control.move(0, rows)))

    def clear_row(self) -> None:
        self.write(str(Control((ControlType.ERASE_IN_LINE, 2))))

    def delete_row(self) -> None:
        """Erase the row above the cursor, which becomes the new baseline."""
        self.write(str(Control.move(0, -1)) + str(Control((ControlType.ERASE_IN_LINE, 2))))

    def replace_row(self, distance: int, text: str) -> None:
        """Rewrite the row ``distance`` rows above the cursor and come back."""
        self.move_cursor(-distance)
        self.clear_row()
        cr = str(Control(ControlType.CARRIAGE_RETURN))
        self.write(cr + text + cr)
        self.move_cursor(distance)

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            self.logger.warning(f"Terminal flush failed: {e!r}")
