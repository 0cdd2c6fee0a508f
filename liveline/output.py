# output.py

from typing import Optional, TextIO, Tuple

from .buffer import Buffer
from .config import OutputSettings, throttle_period
from .entry import Content, Entry
from .errors import OutputClosedError
from .logger import Logger
from .scheduling import Debounce, LoopScheduler, Throttle
from .terminal import Terminal


class Output:
    """
    Owns the entries written to one terminal stream and keeps the screen in
    sync with them.

    Every mutation asks for a render. Requests are first coalesced over a
    short fixed window and then rate limited, so a burst of updates costs
    one redraw. A render compares a fresh Buffer with the one on screen and
    rewrites only the rows from the first difference down.
    """

    def __init__(self, stream: Optional[TextIO] = None, *,
                 terminal: Optional[Terminal] = None,
                 scheduler=None,
                 settings: Optional[OutputSettings] = None,
                 **overrides):
        """
        Args:
            stream: Text stream to draw on; defaults to sys.stdout.
            terminal: Device to use instead of a Terminal over ``stream``.
            scheduler: Clock and timer source; defaults to the asyncio loop.
            settings: Base settings; keyword overrides are applied on top.
        """
        self.settings = (settings or OutputSettings()).with_overrides(**overrides)
        self.logger = Logger(__name__, self.settings.logging_enabled, self.settings.log_file)
        if terminal is None:
            terminal = Terminal(stream, logger=self.logger)
            if not terminal.is_terminal:
                self.logger.debug("Output stream is not a terminal, control codes are written as-is")
        self.terminal = terminal
        self.scheduler = scheduler or LoopScheduler()

        self._entries = []
        self._displayed = Buffer()
        self._closed = False
        self.render_count = 0

        self._throttle = Throttle(self.render, self.settings.throttle_ms, self.scheduler,
                                  leading=True, trailing=True)
        self._debounce = Debounce(self._throttle, self.settings.coalesce_ms, self.scheduler)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def displayed(self) -> Buffer:
        """The Buffer currently on screen."""
        return self._displayed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def render_queued(self) -> bool:
        return self._debounce.pending

    def _check_open(self) -> None:
        if self._closed:
            raise OutputClosedError("Output is closed")

    def _new_entry(self, content: Content, separator: Optional[str]) -> Entry:
        self._check_open()
        entry = Entry(self, content)
        if separator is not None:
            entry.set_separator(separator, rerender=False)
        self._entries.append(entry)
        return entry

    def line(self, content: Content, separator: Optional[str] = None) -> None:
        """Print a line that can no longer change. An empty separator keeps the default."""
        self._new_entry(content, separator or None).close()
        self.request_render()

    def dline(self, content: Content, separator: Optional[str] = None) -> Entry:
        """Print a dynamic line and return its handle for later edits."""
        entry = self._new_entry(content, separator)
        self.request_render()
        return entry

    def set_max_fps(self, fps: float) -> None:
        """Bound how often the screen is redrawn. The default is 1fps."""
        self._check_open()
        self._throttle.set_wait(throttle_period(fps))
        self.logger.debug(f"Redraw period set to {self._throttle.wait}ms")

    def notify_external_line(self, text: str) -> None:
        """
        Record text that was written to the stream by other means.

        Call this right after the text (terminated by a newline) has been
        written; later renders will treat its rows as history and never
        overwrite them.
        """
        self._check_open()
        entry = Entry(self, [text], separator="\n").close()
        self._entries.append(entry)
        self._displayed.put(entry.get_content(), entry)

    def request_render(self) -> None:
        """Queue a render; repeated requests within the coalescing window are absorbed."""
        if self._closed:
            return
        self._debounce()

    def render(self) -> bool:
        """
        Run one render pass now.

        Returns:
            True if the terminal was touched, False if nothing changed.
        """
        candidate = Buffer()
        for entry in self._entries:
            if not entry.is_deleted:
                candidate.put(entry.get_content(), entry)

        start = self._displayed.find_first_different_line(candidate)
        if start is None:
            return False

        lines_to_clear = self._displayed.line_count() - start
        replacements = candidate.slice(start)

        written = 0
        for distance in range(lines_to_clear, 0, -1):
            if written < len(replacements):
                self.terminal.replace_row(distance, replacements[written].text)
                written += 1
            else:
                self.terminal.delete_row()

        for line in replacements[written:]:
            self.terminal.write_line(line.text)

        self.terminal.flush()
        self._displayed = candidate
        self.render_count += 1
        self.logger.debug(
            f"Render #{self.render_count}: from row {start}, "
            f"{lines_to_clear} revisited, {len(replacements)} written"
        )
        return True

    def open(self) -> "Output":
        """Return the output for use; a closed output cannot be reopened."""
        self._check_open()
        return self

    def flush(self) -> bool:
        """
        Render the current state immediately.

        Queued requests are dropped since this pass covers them; the rate
        limit window keeps running, so the next request still waits for it.
        """
        self._debounce.cancel()
        self._throttle.drop_pending()
        return self.render()

    def close(self) -> None:
        """Freeze every entry, draw the final state and stop rendering."""
        if self._closed:
            return
        for entry in self._entries:
            entry.close()
        self.flush()
        self._throttle.cancel()
        self._closed = True

    def __enter__(self) -> "Output":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def __aenter__(self) -> "Output":
        return self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


_default_output: Optional[Output] = None


def get_default_output() -> Output:
    """Return the shared Output on sys.stdout, creating it on first use."""
    global _default_output
    if _default_output is None:
        _default_output = Output(settings=OutputSettings.from_env())
    return _default_output


def set_default_output(output: Optional[Output]) -> None:
    global _default_output
    _default_output = output


def print_line(content: Content, separator: Optional[str] = None) -> None:
    get_default_output().line(content, separator)


def print_dynamic_line(content: Content, separator: Optional[str] = None) -> Entry:
    return get_default_output().dline(content, separator)


def set_max_fps(fps: float) -> None:
    get_default_output().set_max_fps(fps)


def notify_external_line(text: str) -> None:
    get_default_output().notify_external_line(text)
