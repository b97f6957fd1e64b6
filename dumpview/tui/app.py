"""
Main Textual application for dumpview.

The app owns the UI selection state and reads the EntryStore on a timer;
it never touches the listener or its connections. ``main`` starts the
listener, runs the app, and stops the listener once the app exits, so a
quit always closes every socket even when clients are idle.

Usage:
    dumpview            # listen on 9337
    dumpview 9400       # listen on 9400
"""

import logging
import sys

from textual.app import App
from textual.binding import Binding

from dumpview.config import ViewerConfig, configure_logging, load_config
from dumpview.errors import ConfigError, ListenerError
from dumpview.ingest import EntryStore, Listener
from dumpview.tui.selection import SelectionState
from dumpview.tui.views import EntryDetailScreen, EntryListScreen

logger = logging.getLogger(__name__)


class DumpViewerApp(App):
    """A Textual app for browsing dumps as they arrive."""

    TITLE = "dumpview"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
        color: $text;
    }

    Tree > .tree--cursor {
        background: $secondary;
    }

    Tree > .tree--guides {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        store: EntryStore,
        *,
        refresh_interval: float = 0.25,
        listen_address: str | None = None,
    ):
        """Initialize the app.

        Args:
            store: Store the listener appends to.
            refresh_interval: Seconds between store polls.
            listen_address: ``host:port`` shown while waiting for dumps.
        """
        super().__init__()
        self.store = store
        self.selection = SelectionState()
        self._refresh_interval = refresh_interval
        self.listen_address = listen_address
        self._list_screen: EntryListScreen | None = None

    @property
    def list_screen(self) -> EntryListScreen | None:
        return self._list_screen

    def on_mount(self) -> None:
        """Show the entry list and start polling the store."""
        if self.listen_address:
            self.sub_title = f"listening on {self.listen_address}"
            waiting = f"Waiting for dumps on {self.listen_address}..."
        else:
            waiting = "Waiting for dumps..."

        self._list_screen = EntryListScreen(self.selection, waiting_text=waiting)
        self.push_screen(self._list_screen)
        self.set_interval(self._refresh_interval, self.refresh_entries)

    def refresh_entries(self) -> int:
        """Move entries stored since the last tick into the list.

        A failure while rendering is logged and the tick skipped; the next
        tick picks up from where the list left off.

        Returns:
            Number of entries added.
        """
        screen = self._list_screen
        if screen is None or not screen.is_mounted:
            return 0
        try:
            new_entries = self.store.since(len(screen.entries))
            screen.add_entries(new_entries)
            screen.update_status(self.store.rejected_count())
        except Exception:
            logger.exception("Refreshing the entry list failed")
            return 0
        return len(new_entries)

    def on_entry_list_screen_entry_selected(self, message: EntryListScreen.EntrySelected) -> None:
        """Open the detail view for the chosen entry."""
        if self.selection.open():
            self.push_screen(EntryDetailScreen(message.entry), callback=self._on_detail_closed)

    def _on_detail_closed(self, _result: object = None) -> None:
        self.selection.back()


def run(config: ViewerConfig) -> int:
    """Start the listener, run the UI until quit, then shut everything down.

    Returns:
        Process exit status.
    """
    store = EntryStore()
    listener = Listener(store, host=config.host, port=config.port)
    try:
        port = listener.start()
    except ListenerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = DumpViewerApp(
        store,
        refresh_interval=config.refresh_interval,
        listen_address=f"{config.host}:{port}",
    )
    try:
        app.run()
    finally:
        listener.stop(config.shutdown_timeout)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the application."""
    try:
        config = load_config(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config)
    sys.exit(run(config))


if __name__ == "__main__":
    main()
