"""Mixins for the TUI application."""

from dumpview.tui.mixins.data_table import DataTableMixin
from dumpview.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "DataTableMixin",
    "VimNavigationMixin",
]
