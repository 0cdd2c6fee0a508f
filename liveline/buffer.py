# buffer.py

from typing import Dict, Iterable, Iterator, List, Optional

from .entry import Line


class Buffer:
    """
    Snapshot of every Line on screen, used as the basis for redraw diffs.

    Lines before ``first_open_index`` came from entries that were already
    closed when the snapshot was taken, so a diff only has to look at them
    again when one of those entries has since been deleted.
    """

    def __init__(self, lines: Iterable[Line] = ()):
        self._lines: List[Line] = []
        self._entry_rows: Dict[object, int] = {}
        self.first_open_index: Optional[int] = None
        self.put(lines)

    def put(self, lines: Iterable[Line], entry=None) -> None:
        """Append lines, remembering the first row of ``entry`` if given."""
        if entry is not None:
            self._entry_rows.setdefault(entry, len(self._lines))
        for line in lines:
            if self.first_open_index is None and not line.closed:
                self.first_open_index = len(self._lines)
            self._lines.append(line)

    @property
    def scan_start(self) -> int:
        """Index from which rows may still change."""
        if self.first_open_index is None:
            # History may still be followed by rows queued before an
            # external write, so nothing is skipped.
            return 0
        return self.first_open_index

    def row_of(self, entry) -> Optional[int]:
        return self._entry_rows.get(entry)

    def _first_dropped_row(self, other: "Buffer") -> Optional[int]:
        rows = [row for entry, row in self._entry_rows.items() if entry not in other._entry_rows]
        return min(rows) if rows else None

    def find_first_different_line(self, other: "Buffer") -> Optional[int]:
        """Return the first row whose text differs from ``other``, or None."""
        start = self.scan_start
        dropped = self._first_dropped_row(other)
        if dropped is not None:
            start = min(start, dropped)

        limit = max(len(self._lines), len(other._lines))
        for i in range(start, limit):
            if self._text_at(i) != other._text_at(i):
                return i
        return None

    def _text_at(self, index: int) -> Optional[str]:
        if index < len(self._lines):
            return self._lines[index].text
        return None

    def line_count(self) -> int:
        return len(self._lines)

    def slice(self, start: int) -> List[Line]:
        return self._lines[start:]

    def texts(self) -> List[str]:
        return [line.text for line in self._lines]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"<Buffer lines={len(self._lines)} first_open={self.first_open_index}>"
