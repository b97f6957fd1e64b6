"""
Entry List Screen for the dump viewer.

Shows one row per stored entry (id, label, source time). The cursor is
driven by the app's SelectionState; the DataTable only mirrors it. Press
Enter or l to open the entry under the cursor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from dumpview.ingest.store import LogEntry
from dumpview.tui.mixins import DataTableMixin, VimNavigationMixin

if TYPE_CHECKING:
    from dumpview.tui.selection import SelectionState


class EntryListScreen(DataTableMixin, VimNavigationMixin, Screen):
    """Screen that lists received entries in a DataTable."""

    CSS = """
    EntryListScreen {
        layout: vertical;
    }

    #entry-table {
        height: 1fr;
        border: solid $primary;
    }

    #empty-state {
        height: 1fr;
        content-align: center middle;
        color: $text-muted;
        text-style: italic;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("enter", "open_entry", "Open", show=False),
        Binding("l", "open_entry", "Open", show=True),
    ]

    COLUMNS: list[tuple[str, int | None]] = [
        ("#", 6),
        ("Label", None),
        ("Time", 28),
    ]

    class EntrySelected(Message):
        """Posted when the user opens an entry."""

        def __init__(self, entry: LogEntry) -> None:
            self.entry = entry
            super().__init__()

    def __init__(
        self,
        selection: SelectionState,
        waiting_text: str = "Waiting for dumps...",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the EntryListScreen.

        Args:
            selection: Cursor state shared with the app.
            waiting_text: Message shown while no entry has arrived.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.selection = selection
        self._waiting_text = waiting_text
        self._entries: list[LogEntry] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._waiting_text, id="empty-state", markup=False)
        yield DataTable(id="entry-table")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "dumpview"
        self._setup_table("entry-table", self.COLUMNS)
        self._sync_cursor()

    @property
    def entries(self) -> list[LogEntry]:
        return self._entries

    def add_entries(self, entries: tuple[LogEntry, ...] | list[LogEntry]) -> None:
        """Append newly stored entries and let the cursor follow if pinned."""
        if not entries:
            return
        table = self.query_one("#entry-table", DataTable)
        for entry in entries:
            self._entries.append(entry)
            table.add_row(
                str(entry.sequence_id),
                Text(entry.label),
                Text(entry.source_timestamp),
                key=str(entry.sequence_id),
            )
        self.selection.sync(len(self._entries))
        self._sync_cursor()

    def update_status(self, rejected: int) -> None:
        """Show entry and rejected-message counts in the subtitle."""
        status = f"{len(self._entries)} entries"
        if rejected:
            status += f", {rejected} rejected"
        self.sub_title = status

    def current_entry(self) -> LogEntry | None:
        index = self.selection.cursor_index
        if index is None or index >= len(self._entries):
            return None
        return self._entries[index]

    def _sync_cursor(self) -> None:
        """Mirror SelectionState onto the table and the empty-state view."""
        table = self.query_one("#entry-table", DataTable)
        empty = self.query_one("#empty-state", Static)
        has_cursor = self.selection.cursor_index is not None

        table.display = has_cursor
        empty.display = not has_cursor
        if not has_cursor:
            return
        if self.focused is None:
            table.focus()

        start, _ = self.selection.reveal(self._visible_row_count(table))
        if table.cursor_row != self.selection.cursor_index:
            table.move_cursor(row=self.selection.cursor_index)
        table.scroll_to(y=start, animate=False)

    def action_vim_down(self) -> None:
        if self.selection.move_down():
            self._sync_cursor()

    def action_vim_up(self) -> None:
        if self.selection.move_up():
            self._sync_cursor()

    def action_vim_top(self) -> None:
        if self.selection.jump_top():
            self._sync_cursor()

    def action_vim_bottom(self) -> None:
        if self.selection.jump_bottom():
            self._sync_cursor()

    def action_open_entry(self) -> None:
        entry = self.current_entry()
        if entry is not None:
            self.post_message(self.EntrySelected(entry))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Keep SelectionState in step with arrow keys and mouse clicks."""
        if self.selection.cursor_index is None:
            return
        # Stale highlights from our own earlier moves no longer match the table
        if event.cursor_row != event.data_table.cursor_row:
            return
        if self.selection.move_to(event.cursor_row):
            self._sync_cursor()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the entry on Enter."""
        row_key = self._get_selected_row_key(event)
        if row_key is None:
            return
        try:
            index = int(row_key) - 1
        except ValueError:
            return
        if 0 <= index < len(self._entries):
            self.selection.move_to(index)
            self.post_message(self.EntrySelected(self._entries[index]))
