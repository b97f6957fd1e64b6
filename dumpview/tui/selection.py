"""
Selection state for the entry list.

Kept free of Textual so the cursor rules can be tested directly:
- the cursor never leaves [0, count - 1] and never wraps around
- an empty list has no cursor
- a cursor sitting on the last row follows new rows as they arrive;
  a cursor the user moved elsewhere stays put
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViewMode(Enum):
    """Which screen the user is looking at."""

    LIST = "list"
    DETAIL = "detail"


@dataclass
class SelectionState:
    """Cursor, scroll window and view mode of the entry list."""

    cursor_index: int | None = None
    scroll_offset: int = 0
    view_mode: ViewMode = ViewMode.LIST
    count: int = 0

    @property
    def pinned(self) -> bool:
        """True when the cursor is on the last row."""
        return self.cursor_index is not None and self.cursor_index == self.count - 1

    def sync(self, count: int) -> bool:
        """Adopt a new entry count.

        Returns:
            True if the cursor moved.
        """
        previous = self.cursor_index
        # Only the list view follows new rows; the detail view keeps its entry
        follow_tail = previous is None or (self.pinned and self.view_mode is ViewMode.LIST)
        self.count = max(count, 0)

        if self.count == 0:
            self.cursor_index = None
            self.scroll_offset = 0
        elif follow_tail:
            self.cursor_index = self.count - 1
        else:
            self.cursor_index = min(previous, self.count - 1)

        return self.cursor_index != previous

    def move_down(self) -> bool:
        if self.view_mode is not ViewMode.LIST or self.cursor_index is None:
            return False
        if self.cursor_index >= self.count - 1:
            return False
        self.cursor_index += 1
        return True

    def move_up(self) -> bool:
        if self.view_mode is not ViewMode.LIST or self.cursor_index is None:
            return False
        if self.cursor_index <= 0:
            return False
        self.cursor_index -= 1
        return True

    def move_to(self, index: int) -> bool:
        """Put the cursor on ``index``, clamped to the list."""
        if self.cursor_index is None:
            return False
        target = min(max(index, 0), self.count - 1)
        if target == self.cursor_index:
            return False
        self.cursor_index = target
        return True

    def jump_top(self) -> bool:
        return self.move_to(0)

    def jump_bottom(self) -> bool:
        return self.move_to(self.count - 1)

    def open(self) -> bool:
        """Switch to the detail view of the entry under the cursor."""
        if self.view_mode is not ViewMode.LIST or self.cursor_index is None:
            return False
        self.view_mode = ViewMode.DETAIL
        return True

    def back(self) -> bool:
        if self.view_mode is not ViewMode.DETAIL:
            return False
        self.view_mode = ViewMode.LIST
        return True

    def reveal(self, height: int) -> tuple[int, int]:
        """Scroll just enough to keep the cursor inside a window of ``height`` rows.

        Returns:
            The visible row range as (start, stop).
        """
        height = max(height, 1)
        if self.cursor_index is None:
            self.scroll_offset = 0
            return (0, min(self.count, height))

        if self.cursor_index < self.scroll_offset:
            self.scroll_offset = self.cursor_index
        elif self.cursor_index >= self.scroll_offset + height:
            self.scroll_offset = self.cursor_index - height + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(self.count - height, 0)))

        return (self.scroll_offset, min(self.scroll_offset + height, self.count))
