"""Tests for SelectionState in dumpview/tui/selection.py."""

from __future__ import annotations

from dumpview.tui.selection import SelectionState, ViewMode


def selection_with(count: int) -> SelectionState:
    state = SelectionState()
    state.sync(count)
    return state


class TestEmpty:
    """No entries means no cursor."""

    def test_no_cursor(self):
        state = SelectionState()
        assert state.cursor_index is None
        assert not state.move_down()
        assert not state.move_up()
        assert not state.open()

    def test_sync_zero(self):
        state = selection_with(0)
        assert state.cursor_index is None

    def test_first_entry_selects_it(self):
        state = SelectionState()
        assert state.sync(1)
        assert state.cursor_index == 0


class TestMovement:
    """Cursor clamping."""

    def test_starts_on_last_row(self):
        assert selection_with(5).cursor_index == 4

    def test_move_up_and_down(self):
        state = selection_with(3)
        assert state.move_up()
        assert state.cursor_index == 1
        assert state.move_down()
        assert state.cursor_index == 2

    def test_down_at_bottom_is_noop(self):
        state = selection_with(3)
        assert not state.move_down()
        assert state.cursor_index == 2

    def test_up_at_top_is_noop(self):
        state = selection_with(3)
        state.jump_top()
        assert not state.move_up()
        assert state.cursor_index == 0

    def test_no_wraparound(self):
        state = selection_with(2)
        for _ in range(5):
            state.move_down()
        assert state.cursor_index == 1
        for _ in range(5):
            state.move_up()
        assert state.cursor_index == 0

    def test_move_to_clamps(self):
        state = selection_with(4)
        state.move_to(-10)
        assert state.cursor_index == 0
        state.move_to(99)
        assert state.cursor_index == 3

    def test_jump_bottom(self):
        state = selection_with(4)
        state.jump_top()
        assert state.jump_bottom()
        assert state.cursor_index == 3

    def test_movement_ignored_in_detail(self):
        state = selection_with(3)
        state.open()
        assert not state.move_up()
        assert state.cursor_index == 2


class TestGrowth:
    """Behaviour as new entries arrive."""

    def test_pinned_cursor_follows(self):
        state = selection_with(3)
        assert state.pinned
        assert state.sync(5)
        assert state.cursor_index == 4

    def test_unpinned_cursor_stays(self):
        state = selection_with(3)
        state.move_up()
        assert not state.sync(10)
        assert state.cursor_index == 1

    def test_detail_view_does_not_follow(self):
        state = selection_with(3)
        state.open()
        state.sync(6)
        assert state.cursor_index == 2
        state.back()
        assert state.cursor_index == 2


class TestViewMode:
    """Switching between list and detail."""

    def test_open_and_back(self):
        state = selection_with(2)
        assert state.open()
        assert state.view_mode is ViewMode.DETAIL
        assert not state.open()
        assert state.back()
        assert state.view_mode is ViewMode.LIST
        assert not state.back()


class TestReveal:
    """Scroll window tracking."""

    def test_window_follows_cursor_down(self):
        state = selection_with(20)
        assert state.reveal(5) == (15, 20)

    def test_window_follows_cursor_up(self):
        state = selection_with(20)
        state.reveal(5)
        state.move_to(3)
        assert state.reveal(5) == (3, 8)

    def test_window_unchanged_while_cursor_visible(self):
        state = selection_with(20)
        state.reveal(5)
        state.move_to(3)
        state.reveal(5)
        state.move_to(5)
        assert state.reveal(5) == (3, 8)

    def test_short_list(self):
        state = selection_with(2)
        assert state.reveal(10) == (0, 2)

    def test_empty(self):
        assert SelectionState().reveal(5) == (0, 0)
