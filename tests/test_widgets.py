"""Tests for the pure helpers behind the detail widgets."""

from __future__ import annotations

from dumpview.ingest.decoder import BacktraceFrame
from dumpview.ingest.value_tree import Value, parse_json
from dumpview.tui.widgets import ValueDetailModal
from dumpview.tui.widgets.value_tree_panel import MAX_INLINE_STRING, format_label, format_scalar


def parse(text: str) -> Value:
    return Value.from_json(parse_json(text))


class TestFormatScalar:
    """Leaf text."""

    def test_number_keeps_text(self):
        assert format_scalar(parse("1.10")) == "1.10"

    def test_string_quoted_and_escaped(self):
        assert format_scalar(Value.string('a\nb"c')) == '"a\\nb\\"c"'

    def test_long_string_truncated(self):
        shown = format_scalar(Value.string("x" * 500))
        assert len(shown) == MAX_INLINE_STRING + 2
        assert shown.endswith('..."')

    def test_null_and_bool(self):
        assert format_scalar(Value.null()) == "null"
        assert format_scalar(Value.boolean(True)) == "true"


class TestFormatLabel:
    """Node labels by kind."""

    def test_object(self):
        assert format_label("owner", parse('{"a":1,"b":2}')).plain == "{} owner (2 keys)"

    def test_array(self):
        assert format_label("tags", parse("[1]")).plain == "[] tags (1 item)"

    def test_scalar_with_key(self):
        assert format_label("price", parse("1.10")).plain == "price: 1.10"

    def test_markup_in_key_is_literal(self):
        assert format_label("[bold]k", parse("1")).plain == "[bold]k: 1"


class TestValueDetailModal:
    """Full value text."""

    def test_string_shown_raw(self):
        assert ValueDetailModal("s", Value.string("line1\nline2")).formatted_value() == "line1\nline2"

    def test_container_as_json(self):
        modal = ValueDetailModal("o", parse('{"p": 1.10}'))
        assert modal.formatted_value() == '{\n  "p": 1.10\n}'


class TestBacktraceFrame:
    """Qualified function names."""

    def test_static_call(self):
        frame = BacktraceFrame("f", 1, "make", class_name="Factory", call_type="::")
        assert frame.qualified_function == "Factory::make"

    def test_class_without_type(self):
        assert BacktraceFrame("f", 1, "run", class_name="Job").qualified_function == "Job::run"
