"""
Vim-style j/k/g/G keys for screens built from DataTables and Trees.

The default actions move the cursor of whichever table or tree has focus.
EntryListScreen overrides them to go through SelectionState instead.
"""

from __future__ import annotations

from textual.binding import Binding
from textual.widgets import DataTable, Tree


class VimNavigationMixin:
    """Mixin adding j/k/g/G to a Screen.

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _focused_cursor_widget(self) -> DataTable | Tree | None:
        focused = self.focused
        if isinstance(focused, (DataTable, Tree)):
            return focused
        return None

    def _move_focused_cursor(self, step: int | None = None, *, to_end: bool = False) -> None:
        """Move the focused cursor by ``step`` lines, or to the first/last line."""
        widget = self._focused_cursor_widget()
        if widget is None:
            return

        if isinstance(widget, DataTable):
            if widget.row_count == 0:
                return
            last = widget.row_count - 1
            current = max(widget.cursor_row, 0)
        else:
            last = widget.last_line
            current = max(widget.cursor_line, 0)

        if step is None:
            target = last if to_end else 0
        else:
            target = min(max(current + step, 0), last)

        if isinstance(widget, DataTable):
            widget.move_cursor(row=target)
        else:
            # Tree.select_node would also toggle the node
            widget.cursor_line = target
            widget.scroll_to_line(target)

    def action_vim_down(self) -> None:
        self._move_focused_cursor(1)

    def action_vim_up(self) -> None:
        self._move_focused_cursor(-1)

    def action_vim_top(self) -> None:
        self._move_focused_cursor()

    def action_vim_bottom(self) -> None:
        self._move_focused_cursor(to_end=True)
