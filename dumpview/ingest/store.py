"""
Entry store: the one piece of state shared between connections and the UI.

Connection tasks append from the listener thread; the UI reads from the main
thread. A single lock covers id assignment and publication, so an entry is
never visible without every entry appended before it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime

from dumpview.ingest.decoder import BacktraceFrame, DecodedDump
from dumpview.ingest.value_tree import Value


@dataclass(frozen=True)
class LogEntry:
    """A stored dump. ``sequence_id`` starts at 1 and increases by one per append."""

    sequence_id: int
    received_at: datetime
    label: str
    source_timestamp: str
    data: Value
    backtrace: tuple[BacktraceFrame, ...]


class EntryStore:
    """Append-only, insertion-ordered collection of LogEntry.

    There is no update or delete; entries live until the process exits.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[LogEntry] = []
        self._rejected = 0

    def append(self, dump: DecodedDump) -> int:
        """Store a decoded dump and return its new sequence id."""
        with self._lock:
            sequence_id = len(self._entries) + 1
            self._entries.append(
                LogEntry(
                    sequence_id=sequence_id,
                    received_at=dump.received_at,
                    label=dump.label,
                    source_timestamp=dump.source_timestamp,
                    data=dump.data,
                    backtrace=dump.backtrace,
                )
            )
            return sequence_id

    def snapshot(self) -> tuple[LogEntry, ...]:
        """Return every entry appended so far, in sequence order."""
        with self._lock:
            return tuple(self._entries)

    def since(self, count: int) -> tuple[LogEntry, ...]:
        """Return the entries after the first ``count`` ones.

        Lets a reader that has already seen ``count`` entries pick up only
        the new ones.
        """
        with self._lock:
            return tuple(self._entries[max(count, 0):])

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, sequence_id: int) -> LogEntry | None:
        with self._lock:
            if 1 <= sequence_id <= len(self._entries):
                return self._entries[sequence_id - 1]
        return None

    def record_rejected(self) -> None:
        """Count a message that reached a connection but could not be stored."""
        with self._lock:
            self._rejected += 1

    def rejected_count(self) -> int:
        with self._lock:
            return self._rejected

    def __len__(self) -> int:
        return self.count()
