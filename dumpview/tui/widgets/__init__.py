"""TUI widgets for the dump viewer."""

from dumpview.tui.widgets.backtrace_table import BacktraceTable
from dumpview.tui.widgets.value_detail_modal import ValueDetailModal
from dumpview.tui.widgets.value_tree_panel import ValueTreePanel, format_label, format_scalar

__all__ = [
    # Value tree
    "ValueTreePanel",
    "format_label",
    "format_scalar",
    # Backtrace
    "BacktraceTable",
    # Modal
    "ValueDetailModal",
]
