"""
TCP listener feeding dumps into the entry store.

The listener runs its own asyncio event loop in a background thread so that
network work never competes with the UI loop. Each accepted connection gets
one task with its own Deframer; decoded dumps go to the EntryStore, which is
the only state the listener shares with anyone.

Shutdown is driven by an asyncio.Event set from the caller's thread. Every
connection task waits in ``reader.read``, which is cancellable, so stopping
never depends on a client sending more data.

Usage:
    listener = Listener(store, port=9337)
    listener.start()
    ...
    listener.stop()
"""

from __future__ import annotations

import asyncio
import logging
import threading

from dumpview.errors import DecodeError, ListenerError
from dumpview.ingest.decoder import decode_message
from dumpview.ingest.deframer import Deframer
from dumpview.ingest.store import EntryStore

logger = logging.getLogger(__name__)


class Listener:
    """Accepts dump connections on one TCP port.

    Attributes:
        host: Interface to bind.
        port: Requested port; 0 picks a free one.
        bound_port: Actual port once started, else None.
    """

    READ_SIZE: int = 64 * 1024
    START_TIMEOUT: float = 5.0
    CLOSE_TIMEOUT: float = 1.0

    def __init__(self, store: EntryStore, host: str = "127.0.0.1", port: int = 9337) -> None:
        self.host = host
        self.port = port
        self.bound_port: int | None = None
        self._store = store
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None
        self._ready = threading.Event()
        self._stop_requested = threading.Event()
        self._startup_error: BaseException | None = None
        self._connections: set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, timeout: float | None = None) -> int:
        """Bind the port and start accepting in a background thread.

        Args:
            timeout: Seconds to wait for the bind; START_TIMEOUT if None.

        Returns:
            The bound port.

        Raises:
            ListenerError: If already started or the port cannot be bound.
        """
        if self._thread is not None:
            raise ListenerError("listener already started")

        self._thread = threading.Thread(target=self._run, name="dumpview-listener", daemon=True)
        self._thread.start()

        if not self._ready.wait(timeout if timeout is not None else self.START_TIMEOUT):
            self.stop()
            raise ListenerError(f"timed out binding {self.host}:{self.port}")

        if self._startup_error is not None:
            self._thread.join()
            error = self._startup_error
            raise ListenerError(f"cannot listen on {self.host}:{self.port}: {error}") from error

        if self.bound_port is None:
            raise ListenerError("listener was stopped before it could bind")

        return self.bound_port

    def stop(self, timeout: float = 2.0) -> bool:
        """Close every connection and the listening socket.

        Safe to call from any thread, more than once, or before ``start``.
        A stopped listener cannot be started again.

        Returns:
            True if the listener thread finished within ``timeout``.
        """
        # Seen by serve() even if its loop and event do not exist yet
        self._stop_requested.set()
        loop, stop_event = self._loop, self._stop_event
        if loop is not None and stop_event is not None:
            try:
                loop.call_soon_threadsafe(stop_event.set)
            except RuntimeError:
                # Loop already closed: nothing left to stop
                logger.debug("Listener loop already closed")

        if self._thread is None:
            return True
        self._thread.join(timeout)
        stopped = not self._thread.is_alive()
        if not stopped:
            logger.error("Listener thread did not stop within %.1fs", timeout)
        return stopped

    def _run(self) -> None:
        try:
            asyncio.run(self.serve())
        except ListenerError as e:
            self._startup_error = e.__cause__ or e
            self._ready.set()
        except Exception:
            logger.exception("Listener loop crashed")
            self._ready.set()

    async def serve(self) -> None:
        """Accept connections until ``stop`` is called.

        Usable directly inside an existing event loop; ``start`` runs it in
        its own thread.

        Raises:
            ListenerError: If the port cannot be bound.
        """
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        if self._stop_requested.is_set():
            self._ready.set()
            return

        try:
            server = await asyncio.start_server(self._handle_connection, self.host, self.port)
        except OSError as e:
            raise ListenerError(str(e)) from e

        sockets = server.sockets or ()
        self.bound_port = sockets[0].getsockname()[1] if sockets else self.port
        logger.info("Listening on %s:%s", self.host, self.bound_port)
        self._ready.set()

        try:
            if not self._stop_requested.is_set():
                await self._stop_event.wait()
        finally:
            server.close()
            tasks = list(self._connections)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            try:
                await asyncio.wait_for(server.wait_closed(), self.CLOSE_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning("Listening socket did not close within %.1fs", self.CLOSE_TIMEOUT)
            logger.info("Listener on port %s stopped", self.bound_port)

    async def _handle_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        task = asyncio.current_task()
        if task is not None:
            self._connections.add(task)
        peer = writer.get_extra_info("peername")
        deframer = Deframer()
        logger.info("Connection opened from %s", peer)

        try:
            while True:
                chunk = await reader.read(self.READ_SIZE)
                if not chunk:
                    break
                for message in deframer.feed(chunk):
                    self._ingest(message, peer)
                self._report_framing_errors(deframer, peer)
        except OSError as e:
            logger.info("Connection from %s failed: %s", peer, e)
        finally:
            deframer.close()
            self._report_framing_errors(deframer, peer)
            writer.close()
            if task is not None:
                self._connections.discard(task)
            logger.info(
                "Connection from %s closed after %d messages", peer, deframer.messages_emitted
            )

    def _ingest(self, message: bytes, peer: object) -> None:
        try:
            dump = decode_message(message)
        except DecodeError as e:
            self._store.record_rejected()
            logger.warning("Dropped message from %s: %s", peer, e)
            return
        sequence_id = self._store.append(dump)
        logger.debug("Stored entry %d (%s) from %s", sequence_id, dump.label, peer)

    def _report_framing_errors(self, deframer: Deframer, peer: object) -> None:
        for error in deframer.take_errors():
            self._store.record_rejected()
            logger.warning("Framing error on %s: %s", peer, error)
