"""TUI views for the dump viewer."""

from dumpview.tui.views.entry_detail import EntryDetailScreen
from dumpview.tui.views.entry_list import EntryListScreen

__all__ = ["EntryDetailScreen", "EntryListScreen"]
