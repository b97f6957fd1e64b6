"""
Value tree: the recursive model of one dumped structure.

A dump can be any JSON shape, so it is held as a closed tagged variant
instead of raw Python containers. Numbers keep their original JSON text so
that ``1.10`` or ``12345678901234567890`` are displayed exactly as sent.
Object members keep their order, duplicates included.

Usage:
    raw = parse_json('{"x": 1.10, "tags": ["a", "b"]}')
    value = Value.from_json(raw)
    value.kind            # ValueKind.OBJECT
    value.get("x").text   # '1.10'
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


class ValueKind(Enum):
    """Tag of a Value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


class NumberText(str):
    """Marker for a JSON number kept as its source text."""


class ObjectPairs(list):
    """Marker for a JSON object parsed as an ordered list of (key, value) pairs."""


def parse_json(text: str) -> Any:
    """Parse JSON text keeping number text and object member order.

    Args:
        text: A complete JSON document.

    Returns:
        A parse tree of None, bool, str, NumberText, ObjectPairs and list.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
    """
    return json.loads(
        text,
        parse_int=NumberText,
        parse_float=NumberText,
        parse_constant=NumberText,
        object_pairs_hook=ObjectPairs,
    )


@dataclass(frozen=True)
class Value:
    """One node of a dumped structure.

    Attributes:
        kind: Which variant this node is.
        scalar: ``bool`` for BOOL, source text for NUMBER, the string for
            STRING, None otherwise.
        items: ``(key, Value)`` pairs for OBJECT, ``Value`` children for
            ARRAY, empty otherwise.
    """

    kind: ValueKind
    scalar: bool | str | None = None
    items: tuple = ()

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls(ValueKind.BOOL, bool(flag))

    @classmethod
    def number(cls, text: str) -> Value:
        return cls(ValueKind.NUMBER, str(text))

    @classmethod
    def string(cls, text: str) -> Value:
        return cls(ValueKind.STRING, text)

    @classmethod
    def object_of(cls, pairs: Iterator[tuple[str, Value]] | list[tuple[str, Value]]) -> Value:
        return cls(ValueKind.OBJECT, None, tuple((str(k), v) for k, v in pairs))

    @classmethod
    def array_of(cls, values: Iterator[Value] | list[Value]) -> Value:
        return cls(ValueKind.ARRAY, None, tuple(values))

    @classmethod
    def from_json(cls, raw: Any) -> Value:
        """Build a Value from a ``parse_json`` parse tree.

        Plain ``dict`` and numbers are accepted too, so trees built by hand in
        tests or by ``json.loads`` convert the same way.

        Raises:
            TypeError: If the tree contains something that is not JSON.
        """
        value = _scalar_value(raw)
        if value is not None:
            return value

        # Explicit stack: depth is bounded by memory, not the interpreter stack
        # Each frame: [key in parent, is_object, pending (key, raw) pairs, built pairs]
        stack = [_open_frame(None, raw)]
        while True:
            frame = stack[-1]
            for key, child_raw in frame[2]:
                child = _scalar_value(child_raw)
                if child is None:
                    stack.append(_open_frame(key, child_raw))
                    break
                frame[3].append((key, child))
            else:
                stack.pop()
                if frame[1]:
                    node = cls.object_of(frame[3])
                else:
                    node = cls.array_of(child for _, child in frame[3])
                if not stack:
                    return node
                stack[-1][3].append((frame[0], node))

    @property
    def is_container(self) -> bool:
        return self.kind in (ValueKind.OBJECT, ValueKind.ARRAY)

    @property
    def size(self) -> int:
        """Number of members (object) or elements (array); 0 for scalars."""
        return len(self.items)

    @property
    def text(self) -> str:
        """Scalar rendered as JSON text; containers render as ``{...}``/``[...]``."""
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.BOOL:
            return "true" if self.scalar else "false"
        if self.kind is ValueKind.NUMBER:
            return str(self.scalar)
        if self.kind is ValueKind.STRING:
            return json.dumps(self.scalar, ensure_ascii=False)
        if self.kind is ValueKind.OBJECT:
            return "{...}" if self.items else "{}"
        return "[...]" if self.items else "[]"

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Return the first member named ``key`` of an object."""
        if self.kind is ValueKind.OBJECT:
            for member_key, member in self.items:
                if member_key == key:
                    return member
        return default

    def keys(self) -> list[str]:
        if self.kind is not ValueKind.OBJECT:
            return []
        return [k for k, _ in self.items]

    def preview(self, max_len: int = 60) -> str:
        """One-line summary of this value, truncated to ``max_len``."""
        if self.kind is ValueKind.OBJECT:
            noun = "key" if self.size == 1 else "keys"
            summary = f"{{{self.size} {noun}}}"
        elif self.kind is ValueKind.ARRAY:
            noun = "item" if self.size == 1 else "items"
            summary = f"[{self.size} {noun}]"
        else:
            summary = self.text
        if len(summary) > max_len:
            summary = summary[: max_len - 3] + "..."
        return summary

    def to_json_text(self, indent: int | None = 2) -> str:
        """Serialise back to JSON, keeping number text and member order."""
        key_sep = ":" if indent is None else ": "
        out: list[str] = []
        # Each frame: [container, remaining items, nesting level, items written]
        stack: list[list[Any]] = []
        node: Value | None = self
        level = 0

        while True:
            if node is not None:
                if node.items:
                    out.append("{" if node.kind is ValueKind.OBJECT else "[")
                    stack.append([node, iter(node.items), level, 0])
                else:
                    # Scalars and empty containers
                    out.append(node.text)
                node = None

            if not stack:
                return "".join(out)

            frame = stack[-1]
            container, remaining, parent_level, written = frame
            item = next(remaining, None)
            if item is None:
                stack.pop()
                if indent is not None:
                    out.append("\n" + " " * (indent * parent_level))
                out.append("}" if container.kind is ValueKind.OBJECT else "]")
                continue

            if written:
                out.append(",")
            frame[3] = written + 1
            if indent is not None:
                out.append("\n" + " " * (indent * (parent_level + 1)))
            if container.kind is ValueKind.OBJECT:
                key, node = item
                out.append(json.dumps(key, ensure_ascii=False))
                out.append(key_sep)
            else:
                node = item
            level = parent_level + 1


def _scalar_value(raw: Any) -> Value | None:
    """Convert a scalar parse-tree node; None means ``raw`` is a container."""
    if raw is None:
        return Value.null()
    if isinstance(raw, bool):
        return Value.boolean(raw)
    if isinstance(raw, NumberText):
        return Value.number(raw)
    if isinstance(raw, (int, float)):
        return Value.number(json.dumps(raw))
    if isinstance(raw, str):
        return Value.string(raw)
    if isinstance(raw, (ObjectPairs, dict, list, tuple)):
        return None
    raise TypeError(f"Not a JSON value: {type(raw).__name__}")


def _open_frame(key: str | None, raw: Any) -> list[Any]:
    if isinstance(raw, ObjectPairs):
        return [key, True, iter([(str(k), v) for k, v in raw]), []]
    if isinstance(raw, dict):
        return [key, True, iter([(str(k), v) for k, v in raw.items()]), []]
    return [key, False, iter([(None, item) for item in raw]), []]
