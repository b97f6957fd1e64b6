"""
Entry decoder: turn one deframed JSON message into a DecodedDump.

Expected message shape:
    {
        "time": "<string>",
        "data": {"object": {...}},
        "label": "<string>",
        "backtrace": [{"file": "...", "line": 12, "function": "...",
                       "class": "...", "type": "->"}, ...]
    }

``time`` and ``label`` are required. When ``object`` is the only member of
``data`` its value is the dump; otherwise the whole ``data`` value is, so keys
sent next to ``object`` are kept.
``backtrace`` may be missing or null.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dumpview.errors import DecodeError
from dumpview.ingest.value_tree import NumberText, ObjectPairs, Value, parse_json


@dataclass(frozen=True)
class BacktraceFrame:
    """One call-stack frame attached to a dump."""

    file: str
    line: int
    function: str
    class_name: str | None = None
    call_type: str | None = None

    @property
    def qualified_function(self) -> str:
        """``Class->method`` style name when class information is present."""
        if self.class_name:
            return f"{self.class_name}{self.call_type or '::'}{self.function}"
        return self.function


@dataclass(frozen=True)
class DecodedDump:
    """A decoded dump that has not been given a sequence id yet."""

    label: str
    source_timestamp: str
    data: Value
    backtrace: tuple[BacktraceFrame, ...] = ()
    received_at: datetime = field(default_factory=datetime.now)


def decode_message(message: bytes | str, received_at: datetime | None = None) -> DecodedDump:
    """Decode one complete JSON message.

    Args:
        message: The JSON text of one top-level object. Bytes are decoded as
            UTF-8, invalid sequences replaced.
        received_at: Local receive time; defaults to now.

    Returns:
        The decoded dump.

    Raises:
        DecodeError: If the text is not JSON, is not an object, or misses or
            mistypes a required field.
    """
    if isinstance(message, (bytes, bytearray)):
        text = bytes(message).decode("utf-8", errors="replace")
    else:
        text = message

    try:
        raw = parse_json(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e.msg} at position {e.pos}") from e
    except RecursionError as e:
        raise DecodeError("JSON nested too deeply") from e

    if not isinstance(raw, ObjectPairs):
        raise DecodeError("message is not a JSON object")

    fields = dict(raw)
    label = _require_string(fields, "label")
    source_timestamp = _require_string(fields, "time")

    data = Value.from_json(_unwrap_data(fields.get("data")))

    backtrace = _decode_backtrace(fields.get("backtrace"))

    return DecodedDump(
        label=label,
        source_timestamp=source_timestamp,
        data=data,
        backtrace=backtrace,
        received_at=received_at or datetime.now(),
    )


def _require_string(fields: dict[str, Any], key: str) -> str:
    if key not in fields:
        raise DecodeError(f"missing required field '{key}'")
    value = fields[key]
    if not isinstance(value, str) or isinstance(value, NumberText):
        raise DecodeError(f"field '{key}' must be a string")
    return str(value)


def _unwrap_data(data: Any) -> Any:
    # A lone "object" member is the usual envelope; any sibling keys keep data whole
    if isinstance(data, ObjectPairs) and len(data) == 1 and data[0][0] == "object":
        return data[0][1]
    return data


def _decode_backtrace(raw: Any) -> tuple[BacktraceFrame, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or isinstance(raw, ObjectPairs):
        raise DecodeError("field 'backtrace' must be an array")
    return tuple(_decode_frame(index, item) for index, item in enumerate(raw))


def _decode_frame(index: int, raw: Any) -> BacktraceFrame:
    if not isinstance(raw, ObjectPairs):
        raise DecodeError(f"backtrace[{index}] is not an object")
    frame = dict(raw)

    def text(key: str, required: bool) -> str | None:
        value = frame.get(key)
        if value is None:
            if required:
                raise DecodeError(f"backtrace[{index}] missing '{key}'")
            return None
        if not isinstance(value, str) or isinstance(value, NumberText):
            raise DecodeError(f"backtrace[{index}].{key} must be a string")
        return str(value)

    line = frame.get("line")
    if line is None:
        raise DecodeError(f"backtrace[{index}] missing 'line'")
    # NumberText for JSON numbers, plain str for numeric strings
    if not isinstance(line, str):
        raise DecodeError(f"backtrace[{index}].line must be an integer")
    try:
        line_number = int(line)
    except ValueError as e:
        raise DecodeError(f"backtrace[{index}].line must be an integer") from e

    return BacktraceFrame(
        file=text("file", True),
        line=line_number,
        function=text("function", True),
        class_name=text("class", False),
        call_type=text("type", False),
    )
