"""
Entry Detail Screen - the dumped value tree and backtrace of one entry.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from dumpview.ingest.store import LogEntry
from dumpview.tui.mixins import VimNavigationMixin
from dumpview.tui.widgets import BacktraceTable, ValueDetailModal, ValueTreePanel


class EntryDetailScreen(VimNavigationMixin, Screen):
    """Screen showing one entry: metadata, value tree, then backtrace."""

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("escape", "go_back", "Back"),
        Binding("b", "go_back", "Back", show=False),
        Binding("h", "go_back", "Back", show=False),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse all"),
        Binding("v", "show_value", "Full value"),
    ]

    DEFAULT_CSS = """
    EntryDetailScreen {
        background: $background;
    }

    EntryDetailScreen #entry-meta {
        height: auto;
        padding: 0 1;
        background: $surface-darken-1;
    }

    EntryDetailScreen #value-tree {
        height: 2fr;
        border: solid $primary;
    }

    EntryDetailScreen .section-title {
        padding: 0 1;
        text-style: bold;
        color: $secondary;
    }

    EntryDetailScreen #backtrace {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, entry: LogEntry, name: str | None = None) -> None:
        super().__init__(name=name)
        self.entry = entry

    @property
    def title_text(self) -> str:
        label = self.entry.label
        if len(label) > 40:
            label = label[:37] + "..."
        return f"#{self.entry.sequence_id} {label}"

    def meta_text(self) -> str:
        received = self.entry.received_at.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return (
            f"Label: {self.entry.label}\n"
            f"Logged on: {self.entry.source_timestamp}    Received: {received}"
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self.meta_text(), id="entry-meta", markup=False)
        with Vertical():
            yield ValueTreePanel(id="value-tree")
            frames = len(self.entry.backtrace)
            yield Label(
                f"Backtrace ({frames} frame{'' if frames == 1 else 's'})",
                classes="section-title",
            )
            yield BacktraceTable(id="backtrace")
        yield Footer()

    def on_mount(self) -> None:
        """Fill the tree and the backtrace when the screen is mounted."""
        self.title = self.title_text
        self.sub_title = self.entry.source_timestamp

        tree = self.query_one("#value-tree", ValueTreePanel)
        tree.load_value(self.entry.data)
        self.query_one("#backtrace", BacktraceTable).load_frames(self.entry.backtrace)
        tree.focus()

    def action_expand_all(self) -> None:
        self.query_one("#value-tree", ValueTreePanel).expand_everything()

    def action_collapse_all(self) -> None:
        self.query_one("#value-tree", ValueTreePanel).collapse_everything()

    def action_show_value(self) -> None:
        """Open the full value under the tree cursor in a modal."""
        picked = self.query_one("#value-tree", ValueTreePanel).cursor_value()
        if picked is None:
            return
        title, value = picked
        self.app.push_screen(ValueDetailModal(title, value))

    def action_go_back(self) -> None:
        """Go back to the entry list."""
        self.dismiss()
