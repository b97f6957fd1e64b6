"""
Ingestion pipeline: TCP bytes to stored log entries.

Usage:
    from dumpview.ingest import EntryStore, Listener

    store = EntryStore()
    listener = Listener(store, port=9337)
    listener.start()
    for entry in store.snapshot():
        print(entry.sequence_id, entry.label)
"""

from dumpview.ingest.decoder import BacktraceFrame, DecodedDump, decode_message
from dumpview.ingest.deframer import Deframer, iter_messages
from dumpview.ingest.listener import Listener
from dumpview.ingest.store import EntryStore, LogEntry
from dumpview.ingest.value_tree import Value, ValueKind, parse_json

__all__ = [
    # Value tree
    "Value",
    "ValueKind",
    "parse_json",
    # Framing and decoding
    "Deframer",
    "iter_messages",
    "decode_message",
    "DecodedDump",
    "BacktraceFrame",
    # Storage and network
    "EntryStore",
    "LogEntry",
    "Listener",
]
