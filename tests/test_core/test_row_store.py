# tests/test_core/test_row_store.py
"""Tests for `RowStore` and `Row`."""

import pytest

from lined.core.Coordinates import expand_tabs
from lined.core.RowStore import Row, RowStore


def test_empty_store_holds_one_empty_row() -> None:
    rows = RowStore()
    assert rows.row_count == 1
    assert rows.lines() == [""]
    assert RowStore.from_lines([]).row_count == 1


def test_rendered_follows_raw() -> None:
    row = Row("a\tb")
    assert row.rendered == "a   b"
    row.raw = "\tx"
    assert row.rendered == "    x"
    assert len(row) == 2


def test_insert_append_and_remove() -> None:
    rows = RowStore(["one", "three"])
    rows.insert_row(2, "two")
    rows.append_row("four")
    assert rows.lines() == ["one", "two", "three", "four"]

    removed = rows.remove_row(1)
    assert removed == Row("one")
    assert rows.lines() == ["two", "three", "four"]


def test_insert_out_of_range_raises() -> None:
    rows = RowStore(["a"])
    with pytest.raises(IndexError):
        rows.insert_row(3, "x")
    with pytest.raises(IndexError):
        rows.get(2)


def test_last_row_is_never_removed() -> None:
    rows = RowStore(["only"])
    assert rows.remove_row(1) is None
    assert rows.lines() == ["only"]


def test_virtual_row_has_zero_length() -> None:
    rows = RowStore(["abc"])
    assert rows.is_real_row(1)
    assert not rows.is_real_row(2)
    assert rows.line_length(2) == 0


def test_replace_content_keeps_rendering_in_sync() -> None:
    rows = RowStore(["a", "b"])
    rows.replace_content(2, "\t\t")
    for row in rows:
        assert row.rendered == expand_tabs(row.raw)
    assert rows.gutter_width() == 2
