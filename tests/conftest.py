"""Pytest configuration and shared fixtures for dumpview tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Generator

import pytest

from dumpview.ingest import EntryStore, Listener


def make_message(
    label: str = "L1",
    time_text: str = "t1",
    obj: Any = None,
    backtrace: list[dict[str, Any]] | None = None,
) -> bytes:
    """Build one wire message the way a client library would send it."""
    return json.dumps(
        {
            "time": time_text,
            "data": {"object": obj if obj is not None else {}},
            "label": label,
            "backtrace": backtrace if backtrace is not None else [],
        }
    ).encode("utf-8")


@pytest.fixture
def store() -> EntryStore:
    """Return an empty entry store."""
    return EntryStore()


@pytest.fixture
def listener(store: EntryStore) -> Generator[Listener, None, None]:
    """Start a listener on an ephemeral port and stop it afterwards."""
    instance = Listener(store, host="127.0.0.1", port=0)
    instance.start()
    yield instance
    instance.stop(timeout=5.0)


@pytest.fixture
def sample_message() -> bytes:
    """Return a message with nested data and a two-frame backtrace."""
    return make_message(
        label="user loaded",
        time_text="2024-05-01 12:00:01",
        obj={
            "id": 7,
            "price": 1.10,
            "tags": ["a", "b"],
            "owner": {"name": "Ada", "active": True, "manager": None},
        },
        backtrace=[
            {"file": "/app/User.php", "line": 42, "function": "load", "class": "User", "type": "->"},
            {"file": "/app/index.php", "line": 3, "function": "main"},
        ],
    )


@pytest.fixture
def message_factory() -> Callable[..., bytes]:
    """Return the ``make_message`` helper."""
    return make_message
