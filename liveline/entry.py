# entry.py

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

Content = Union[str, Sequence[Any]]
Transform = Callable[[List[Any]], Content]


@dataclass(frozen=True)
class Line:
    """One terminal row of an entry, tagged with the entry's closed state."""

    text: str
    closed: bool = False


def normalize_content(content: Content) -> List[Any]:
    """Turn caller content into a list of fields; a bare string is one field."""
    if isinstance(content, str):
        return [content]
    if content is None:
        raise TypeError("content must be a string or a sequence of fields")
    return list(content)


def render_lines(fields: Iterable[Any], separator: str, closed: bool) -> Tuple[Line, ...]:
    """
    Expand content fields into Lines.

    Falsy fields (None, False, 0, empty strings) are dropped, the rest are
    joined with the separator and the result is split into rows.
    """
    text = separator.join(str(field) for field in fields if field)
    return tuple(Line(row, closed) for row in text.split("\n"))


class Entry:
    """
    A unit of output that may be edited until it is closed.

    Entries are created by an Output (``Output.line`` / ``Output.dline``) and
    ask their owner for a render whenever their visible content changes.
    """

    def __init__(self, owner, content: Content, separator: str = " "):
        self._owner = owner
        self._content = normalize_content(content)
        self._separator = separator
        self._closed = False
        self._deleted = False
        self._version = 0
        self._cache: Optional[Tuple[int, Tuple[Line, ...]]] = None
        self.last_error: Optional[BaseException] = None

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def is_deleted(self) -> bool:
        return self._deleted

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def content(self) -> Tuple[Any, ...]:
        return tuple(self._content)

    @property
    def version(self) -> int:
        return self._version

    def _touch(self) -> None:
        self._version += 1

    def set_separator(self, separator: str, rerender: bool = True) -> "Entry":
        """Replace the join separator; ignored once the entry is closed."""
        if self._closed:
            self._owner.logger.debug("Ignored separator change on closed entry")
            return self
        if separator == self._separator:
            return self
        self._separator = separator
        self._touch()
        if rerender:
            self._owner.request_render()
        return self

    def update(self, value: Union[Content, Transform]) -> "Entry":
        """
        Replace the content, either directly or through a transform.

        A transform receives the current fields and returns the new content.
        If it raises, the previous content is kept and no render is
        requested; the error is kept on ``last_error`` and only propagates
        when the owning output runs with ``strict_updates``.
        """
        if self._closed:
            self._owner.logger.debug("Ignored update on closed entry")
            return self

        try:
            new_content = value(list(self._content)) if callable(value) else value
            new_content = normalize_content(new_content)
        except Exception as e:
            self.last_error = e
            self._owner.logger.debug(f"Entry update failed, keeping previous content: {e!r}")
            if self._owner.settings.strict_updates:
                raise
            return self

        self.last_error = None
        self._content = new_content
        self._touch()
        self._owner.request_render()
        return self

    def close(self) -> "Entry":
        """Freeze the entry; its last content stays on screen."""
        if not self._closed:
            self._closed = True
            self._touch()
        return self

    def delete(self) -> "Entry":
        """Close the entry and remove its rows on the next render."""
        if self._deleted:
            return self
        self._closed = True
        self._deleted = True
        self._content = []
        self._touch()
        self._owner.request_render()
        return self

    def get_content(self) -> Tuple[Line, ...]:
        if self._deleted:
            return ()
        if self._cache is None or self._cache[0] != self._version:
            self._cache = (self._version, render_lines(self._content, self._separator, self._closed))
        return self._cache[1]

    def __repr__(self) -> str:
        state = "deleted" if self._deleted else "closed" if self._closed else "open"
        return f"<Entry {state} {self._content!r}>"
