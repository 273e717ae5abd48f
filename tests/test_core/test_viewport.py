# tests/test_core/test_viewport.py
"""Tests for viewport scrolling."""

from lined.core.EditEngine import Cursor
from lined.core.RowStore import RowStore
from lined.core.Viewport import Viewport


def test_scroll_down_keeps_cursor_on_last_text_row() -> None:
    rows = RowStore([f"{i}" for i in range(1, 41)])
    vp = Viewport(width=80, height=22)
    cursor = Cursor(row=30, col=3)
    vp.scroll(cursor, rows)
    assert vp.row_offset == 8
    assert vp.screen_position(cursor) == (22, 3)


def test_scroll_up_when_cursor_above_viewport() -> None:
    rows = RowStore(["x"] * 40)
    vp = Viewport(width=80, height=22)
    vp.row_offset = 10
    cursor = Cursor(row=5, col=3)
    vp.scroll(cursor, rows)
    assert vp.row_offset == 4


def test_horizontal_scroll_follows_long_line() -> None:
    rows = RowStore(["y" * 50])
    vp = Viewport(width=20, height=5)
    cursor = Cursor(row=1, col=3 + 50)
    vp.scroll(cursor, rows)
    assert cursor.render_col == 53
    assert vp.col_offset == 35
    assert vp.screen_position(cursor) == (1, 18)

    cursor.col = 3
    vp.scroll(cursor, rows)
    assert vp.col_offset == 0


def test_scroll_is_idempotent() -> None:
    rows = RowStore(["\tz" * 30] * 60)
    vp = Viewport(width=40, height=10)
    cursor = Cursor(row=45, col=3 + 37)
    vp.scroll(cursor, rows)
    first = (vp.row_offset, vp.col_offset, cursor.render_col)
    vp.scroll(cursor, rows)
    assert (vp.row_offset, vp.col_offset, cursor.render_col) == first


def test_render_col_accounts_for_tabs_and_virtual_row() -> None:
    rows = RowStore(["ab\tc"])
    vp = Viewport()
    cursor = Cursor(row=1, col=3 + 3)
    assert vp.update_render_col(cursor, rows) == 3 + 4
    cursor = Cursor(row=2, col=3)
    assert vp.update_render_col(cursor, rows) == 3


def test_visible_rows_stop_at_document_end() -> None:
    vp = Viewport(width=80, height=22)
    assert list(vp.visible_rows(5)) == [1, 2, 3, 4, 5]
    vp.row_offset = 3
    assert list(vp.visible_rows(100)) == list(range(4, 26))


def test_resize_never_goes_below_one_cell() -> None:
    vp = Viewport()
    vp.resize(0, -2)
    assert (vp.width, vp.height) == (1, 1)
