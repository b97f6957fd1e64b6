"""
Deframer: split an unframed byte stream into complete JSON objects.

Clients write JSON objects back to back on a TCP connection with no length
prefix and no delimiter, and TCP delivers them in arbitrary chunks. The
deframer keeps a carry-over buffer plus a tiny scanner state (brace depth,
inside-string flag, pending escape) and emits each top-level object as soon
as its closing brace arrives.

Scanning works on bytes. Multibyte UTF-8 sequences never contain ASCII
bytes, so braces and quotes can be found without decoding.

Usage:
    deframer = Deframer()
    for chunk in chunks:
        for message in deframer.feed(chunk):
            handle(message)
    deframer.close()
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from dumpview.errors import FramingError

_OPEN_BRACE = ord("{")
_CLOSE_BRACE = ord("}")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_WHITESPACE = frozenset(b" \t\r\n")

# Next byte that can change state inside an object / inside a string
_STRUCTURAL = re.compile(rb'[{}"]')
_STRING_SPECIAL = re.compile(rb'["\\]')


class Deframer:
    """Incremental splitter for concatenated JSON objects.

    One instance belongs to one connection. State survives between ``feed``
    calls for as long as the connection stays open.

    Attributes:
        discarded_bytes: Total bytes thrown away as junk or unfinished data.
        messages_emitted: Total complete messages returned so far.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._scan_pos = 0
        self._depth = 0
        self._in_string = False
        self._escape_next = False
        self._junk_run = 0
        self._errors: list[FramingError] = []
        self.discarded_bytes = 0
        self.messages_emitted = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def in_string(self) -> bool:
        return self._in_string

    @property
    def pending(self) -> bytes:
        """Bytes of the message currently being assembled."""
        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> list[bytes]:
        """Consume one chunk and return every message it completes.

        Bytes outside any object other than whitespace are discarded and
        scanning resumes at the next ``{``. Each run of such bytes becomes one
        FramingError (see ``take_errors``) once the run ends, even when it
        spans several reads.

        Args:
            chunk: Raw bytes as read from the socket.

        Returns:
            Complete JSON object texts, in stream order.
        """
        if not chunk:
            return []

        buf = self._buffer
        buf += chunk
        messages: list[bytes] = []
        pos = self._scan_pos
        msg_start = 0 if self._depth else -1
        junk = 0

        while pos < len(buf):
            if self._in_string:
                if self._escape_next:
                    self._escape_next = False
                    pos += 1
                    continue
                match = _STRING_SPECIAL.search(buf, pos)
                if match is None:
                    pos = len(buf)
                    break
                pos = match.start()
                if buf[pos] == _BACKSLASH:
                    self._escape_next = True
                else:
                    self._in_string = False
                pos += 1
                continue

            if self._depth == 0:
                byte = buf[pos]
                if byte == _OPEN_BRACE:
                    self._end_junk_run()
                    self._depth = 1
                    msg_start = pos
                elif byte not in _WHITESPACE:
                    junk += 1
                    self._junk_run += 1
                pos += 1
                continue

            match = _STRUCTURAL.search(buf, pos)
            if match is None:
                pos = len(buf)
                break
            pos = match.start()
            byte = buf[pos]
            if byte == _QUOTE:
                self._in_string = True
            elif byte == _OPEN_BRACE:
                self._depth += 1
            else:
                self._depth -= 1
                if self._depth == 0:
                    messages.append(bytes(buf[msg_start : pos + 1]))
                    msg_start = -1
            pos += 1

        if self._depth:
            del buf[:msg_start]
            self._scan_pos = pos - msg_start
        else:
            buf.clear()
            self._scan_pos = 0

        self.discarded_bytes += junk
        self.messages_emitted += len(messages)
        return messages

    def close(self) -> int:
        """Signal end of stream and drop any unfinished message.

        Returns:
            Number of bytes discarded; 0 when the stream ended cleanly.
        """
        self._end_junk_run()
        dropped = len(self._buffer)
        if dropped:
            self.discarded_bytes += dropped
            self._errors.append(
                FramingError(f"connection closed inside a message ({dropped} bytes unfinished)")
            )
        self.reset()
        return dropped

    def reset(self) -> None:
        """Forget the partial message and scanner state."""
        self._buffer.clear()
        self._scan_pos = 0
        self._depth = 0
        self._in_string = False
        self._escape_next = False
        self._junk_run = 0

    def _end_junk_run(self) -> None:
        # One error per run of junk, however many reads it spanned
        if self._junk_run:
            self._errors.append(
                FramingError(f"discarded {self._junk_run} bytes outside a JSON object")
            )
            self._junk_run = 0

    def take_errors(self) -> list[FramingError]:
        """Return and clear the framing errors recorded since the last call."""
        errors, self._errors = self._errors, []
        return errors


def iter_messages(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Lazily deframe an iterable of chunks.

    Unfinished data at the end of the iterable is dropped.
    """
    deframer = Deframer()
    for chunk in chunks:
        yield from deframer.feed(chunk)
    deframer.close()
