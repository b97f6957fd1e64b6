"""Tests for the Value tree in dumpview/ingest/value_tree.py."""

from __future__ import annotations

import pytest

from dumpview.ingest.value_tree import Value, ValueKind, parse_json


def parse(text: str) -> Value:
    return Value.from_json(parse_json(text))


class TestParseKinds:
    """Each JSON kind maps to its tag."""

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("null", ValueKind.NULL),
            ("true", ValueKind.BOOL),
            ("3", ValueKind.NUMBER),
            ('"x"', ValueKind.STRING),
            ("{}", ValueKind.OBJECT),
            ("[]", ValueKind.ARRAY),
        ],
    )
    def test_kind(self, text, kind):
        assert parse(text).kind is kind

    def test_bool_is_not_number(self):
        """true stays a boolean even though bool is an int subclass."""
        value = parse("false")
        assert value.kind is ValueKind.BOOL
        assert value.scalar is False
        assert value.text == "false"


class TestNumberPrecision:
    """Numbers keep their source text."""

    def test_trailing_zero_kept(self):
        assert parse("1.10").text == "1.10"

    def test_big_integer_kept(self):
        assert parse("12345678901234567890123").text == "12345678901234567890123"

    def test_exponent_kept(self):
        assert parse("1e400").text == "1e400"

    def test_from_plain_python_number(self):
        """Numbers from plain json.loads trees still convert."""
        assert Value.from_json(5).text == "5"


class TestObjects:
    """Objects keep member order and duplicates."""

    def test_member_order(self):
        value = parse('{"z": 1, "a": 2, "m": 3}')
        assert value.keys() == ["z", "a", "m"]

    def test_duplicate_keys_kept(self):
        value = parse('{"k": 1, "k": 2}')
        assert value.size == 2
        assert value.get("k").text == "1"

    def test_get_missing(self):
        assert parse('{"a": 1}').get("b") is None

    def test_get_on_array_returns_default(self):
        assert parse("[1]").get("a") is None

    def test_nested(self):
        value = parse('{"a": {"b": [1, {"c": null}]}}')
        inner = value.get("a").get("b")
        assert inner.kind is ValueKind.ARRAY
        assert inner.items[1].get("c").kind is ValueKind.NULL


class TestImmutability:
    """Values cannot be changed after construction."""

    def test_frozen(self):
        value = parse('{"a": 1}')
        with pytest.raises(AttributeError):
            value.kind = ValueKind.NULL

    def test_items_is_tuple(self):
        assert isinstance(parse("[1, 2]").items, tuple)

    def test_equal_trees_compare_equal(self):
        assert parse('{"a": [1, 2]}') == parse('{"a": [1, 2]}')


class TestPreview:
    """One-line summaries."""

    def test_object_preview(self):
        assert parse('{"a": 1, "b": 2}').preview() == "{2 keys}"

    def test_single_item_array(self):
        assert parse("[1]").preview() == "[1 item]"

    def test_string_truncated(self):
        preview = Value.string("x" * 100).preview(max_len=10)
        assert len(preview) == 10
        assert preview.endswith("...")


class TestToJsonText:
    """Serialisation back to JSON."""

    def test_compact(self):
        value = parse('{"a": [1.50, true, null], "b": "s"}')
        assert value.to_json_text(indent=None) == '{"a":[1.50,true,null],"b":"s"}'

    def test_indented(self):
        value = parse('{"a": [1]}')
        assert value.to_json_text(indent=2) == '{\n  "a": [\n    1\n  ]\n}'

    def test_empty_containers(self):
        assert parse('{"a": {}, "b": []}').to_json_text(indent=None) == '{"a":{},"b":[]}'

    def test_unicode_not_escaped(self):
        assert Value.string("café").to_json_text() == '"café"'


class TestFromJsonErrors:
    """Non-JSON Python objects are rejected."""

    def test_rejects_set(self):
        with pytest.raises(TypeError):
            Value.from_json({1, 2})


class TestDeepNesting:
    """Depth is limited by memory, not the interpreter stack."""

    DEPTH = 5000

    def nested_lists(self, depth: int) -> list:
        root: list = []
        current = root
        for _ in range(depth):
            child: list = []
            current.append(child)
            current = child
        current.append(1)
        return root

    def test_from_json_deep_array(self):
        value = Value.from_json(self.nested_lists(self.DEPTH))
        levels = 0
        while value.kind is ValueKind.ARRAY:
            value = value.items[0]
            levels += 1
        assert levels == self.DEPTH + 1
        assert value.text == "1"

    def test_to_json_text_deep_object(self):
        raw: dict = {"leaf": 1}
        for _ in range(self.DEPTH):
            raw = {"a": raw}
        text = Value.from_json(raw).to_json_text(indent=None)
        assert text == '{"a":' * self.DEPTH + '{"leaf":1}' + "}" * self.DEPTH

    def test_deep_indented_text(self):
        text = Value.from_json(self.nested_lists(3)).to_json_text(indent=1)
        assert text == "[\n [\n  [\n   [\n    1\n   ]\n  ]\n ]\n]"
