# tests/test_core/test_navigator.py
"""Tests for cursor motions in `Navigator`."""

from lined.core.EditEngine import Cursor
from lined.core.Navigator import Navigator
from lined.core.RowStore import RowStore


def nav(lines: list[str]) -> Navigator:
    return Navigator(RowStore(lines))


def test_vertical_moves_clamp_column() -> None:
    n = nav(["abcdef", "de"])
    cursor = Cursor(row=1, col=9)
    n.move_down(cursor)
    assert (cursor.row, cursor.col) == (2, 5)
    n.move_up(cursor)
    assert (cursor.row, cursor.col) == (1, 5)
    n.move_up(cursor)
    assert cursor.row == 1


def test_right_at_line_end_wraps_to_next_row() -> None:
    n = nav(["abc", "de"])
    cursor = Cursor(row=1, col=6)
    n.move_right(cursor)
    assert (cursor.row, cursor.col) == (2, 3)


def test_left_at_line_start_wraps_to_previous_row_end() -> None:
    n = nav(["abc", "de"])
    cursor = Cursor(row=2, col=3)
    n.move_left(cursor)
    assert (cursor.row, cursor.col) == (1, 6)
    cursor = Cursor(row=1, col=3)
    n.move_left(cursor)
    assert (cursor.row, cursor.col) == (1, 3)


def test_down_reaches_virtual_row_below_text_only() -> None:
    n = nav(["abc", "de"])
    cursor = Cursor(row=2, col=4)
    n.move_down(cursor)
    assert (cursor.row, cursor.col) == (3, 3)
    n.move_down(cursor)
    assert cursor.row == 3


def test_no_virtual_row_below_empty_last_row() -> None:
    n = nav(["abc", ""])
    cursor = Cursor(row=2, col=3)
    n.move_down(cursor)
    assert cursor.row == 2
    n.move_right(cursor)
    assert (cursor.row, cursor.col) == (2, 3)


def test_home_and_end() -> None:
    n = nav(["hello"])
    cursor = Cursor(row=1, col=5)
    n.move_end(cursor)
    assert cursor.col == 8
    n.move_home(cursor)
    assert cursor.col == 3


def test_page_down_and_up_move_a_screenful() -> None:
    n = nav([f"row {i}" for i in range(1, 51)])
    cursor = Cursor(row=1, col=3)
    n.page_down(cursor, row_offset=0, height=10)
    assert cursor.row == 20
    n.page_up(cursor, row_offset=20, height=10)
    assert cursor.row == 11
    n.page_up(cursor, row_offset=0, height=10)
    assert cursor.row == 1


def test_page_down_stops_at_virtual_row() -> None:
    n = nav(["a", "b", "c"])
    cursor = Cursor(row=1, col=3)
    n.page_down(cursor, row_offset=0, height=10)
    assert cursor.row == 4
