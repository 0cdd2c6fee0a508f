# test_entry.py

import pytest
from unittest.mock import Mock

from liveline.config import OutputSettings
from liveline.entry import Entry, Line, render_lines


class MockOwner:
    def __init__(self, strict_updates=False):
        self.request_render = Mock()
        self.logger = Mock()
        self.settings = OutputSettings(strict_updates=strict_updates)


class TestRenderLines:
    def test_joins_fields_with_separator(self):
        assert render_lines(["a", "b"], "-", False) == (Line("a-b", False),)

    def test_drops_absent_fields(self):
        lines = render_lines(["a", None, "", False, "c"], "-", False)
        assert [l.text for l in lines] == ["a-c"]

    def test_drops_falsy_values(self):
        lines = render_lines(["count:", 0, 0.0, [], "left"], " ", True)
        assert lines[0].text == "count: left"

    def test_stringifies_values(self):
        assert render_lines([1, 2.5, "x"], ",", False)[0].text == "1,2.5,x"

    def test_splits_rows(self):
        lines = render_lines(["line1\nline2"], " ", True)
        assert lines == (Line("line1", True), Line("line2", True))

    def test_all_absent_renders_one_empty_row(self):
        assert render_lines([None, ""], " ", False) == (Line("", False),)


class TestEntry:
    def setup_method(self):
        self.owner = MockOwner()

    def test_string_content_is_one_field(self):
        entry = Entry(self.owner, "hello")
        assert entry.content == ("hello",)
        assert [l.text for l in entry.get_content()] == ["hello"]

    def test_multiline_content_tagged_with_closed_state(self):
        entry = Entry(self.owner, "line1\nline2")
        lines = entry.get_content()
        assert [l.text for l in lines] == ["line1", "line2"]
        assert all(not l.closed for l in lines)

        entry.close()
        assert all(l.closed for l in entry.get_content())

    def test_update_replaces_content_and_requests_render(self):
        entry = Entry(self.owner, ["a", "b"], "-")
        entry.update(["a", None, "c"])
        assert entry.get_content()[0].text == "a-c"
        self.owner.request_render.assert_called_once()

    def test_update_returns_handle(self):
        entry = Entry(self.owner, "x")
        assert entry.update("y") is entry

    def test_update_with_transform(self):
        entry = Entry(self.owner, ["done", 1])
        entry.update(lambda current: [current[0], current[1] + 1])
        assert entry.content == ("done", 2)

    def test_transform_receives_copy(self):
        entry = Entry(self.owner, ["a"])

        def mutate_then_fail(current):
            current.append("b")
            raise RuntimeError("boom")

        entry.update(mutate_then_fail)
        assert entry.content == ("a",)

    def test_failing_transform_keeps_previous_content(self):
        entry = Entry(self.owner, "before")
        before = entry.get_content()

        def fail(_):
            raise ValueError("bad data")

        assert entry.update(fail) is entry
        assert entry.get_content() is before
        assert isinstance(entry.last_error, ValueError)
        self.owner.request_render.assert_not_called()

    def test_invalid_direct_value_is_ignored(self):
        entry = Entry(self.owner, "keep")
        entry.update(42)
        assert entry.content == ("keep",)
        assert isinstance(entry.last_error, TypeError)
        self.owner.request_render.assert_not_called()

    def test_successful_update_clears_last_error(self):
        entry = Entry(self.owner, "x")
        entry.update(lambda _: 1 / 0)
        entry.update("y")
        assert entry.last_error is None

    def test_strict_updates_propagate(self):
        owner = MockOwner(strict_updates=True)
        entry = Entry(owner, "x")

        with pytest.raises(ZeroDivisionError):
            entry.update(lambda _: 1 / 0)
        assert entry.content == ("x",)
        owner.request_render.assert_not_called()

    def test_updates_after_close_are_ignored(self):
        entry = Entry(self.owner, "x")
        entry.update("y")
        entry.close()
        closed_content = entry.get_content()
        self.owner.request_render.reset_mock()

        for value in ("z", ["a", "b"], lambda _: ["w"]):
            entry.update(value)

        assert entry.get_content() == closed_content
        assert entry.get_content()[0].text == "y"
        self.owner.request_render.assert_not_called()

    def test_close_does_not_request_render(self):
        entry = Entry(self.owner, "x")
        entry.close()
        assert entry.is_closed
        self.owner.request_render.assert_not_called()

    def test_delete(self):
        entry = Entry(self.owner, "x")
        assert entry.delete() is entry
        assert entry.is_deleted
        assert entry.is_closed
        assert entry.get_content() == ()
        assert entry.content == ()
        self.owner.request_render.assert_called_once()

    def test_delete_after_close(self):
        entry = Entry(self.owner, "x").close()
        entry.delete()
        assert entry.is_deleted
        assert entry.is_closed
        assert entry.get_content() == ()
        self.owner.request_render.assert_called_once()

    def test_delete_twice_requests_one_render(self):
        entry = Entry(self.owner, "x")
        entry.delete()
        entry.delete()
        self.owner.request_render.assert_called_once()

    def test_get_content_is_cached(self):
        entry = Entry(self.owner, ["a", "b"])
        first = entry.get_content()
        assert entry.get_content() is first

        entry.update(["c"])
        second = entry.get_content()
        assert second is not first
        assert entry.get_content() is second

    def test_version_moves_on_every_mutation(self):
        entry = Entry(self.owner, "a")
        versions = [entry.version]
        entry.update("b")
        versions.append(entry.version)
        entry.set_separator(",")
        versions.append(entry.version)
        entry.close()
        versions.append(entry.version)
        assert versions == sorted(set(versions))

    def test_set_separator(self):
        entry = Entry(self.owner, ["a", "b"])
        assert entry.set_separator("|") is entry
        assert entry.get_content()[0].text == "a|b"
        self.owner.request_render.assert_called_once()

    def test_set_separator_same_value_is_noop(self):
        entry = Entry(self.owner, ["a", "b"])
        first = entry.get_content()
        entry.set_separator(" ")
        assert entry.get_content() is first
        self.owner.request_render.assert_not_called()

    def test_set_separator_without_rerender(self):
        entry = Entry(self.owner, ["a", "b"])
        entry.set_separator("+", rerender=False)
        assert entry.get_content()[0].text == "a+b"
        self.owner.request_render.assert_not_called()

    def test_set_separator_ignored_when_closed(self):
        entry = Entry(self.owner, ["a", "b"]).close()
        entry.set_separator("+")
        assert entry.get_content()[0].text == "a b"
        self.owner.request_render.assert_not_called()
