# lined/core/Navigator.py
"""lined.core.Navigator
=======================

Cursor movement for arrow keys, Home/End and PageUp/PageDown.

Moves never touch the row store. The cursor may step onto the virtual row
below a non-empty last row (so text can be appended there), but never below
an empty last row. Every move ends by clamping the column to the row it
landed on.
"""

import logging

from lined.core.Coordinates import gutter_base
from lined.core.EditEngine import Cursor
from lined.core.RowStore import RowStore


class Navigator:
    """Cursor motions over a :class:`RowStore`."""

    def __init__(self, rows: RowStore) -> None:
        self.rows = rows

    def _base(self) -> int:
        return gutter_base(self.rows.row_count)

    def _is_last_empty(self, cursor: Cursor) -> bool:
        return cursor.row == self.rows.row_count and self.rows.line_length(cursor.row) == 0

    def _can_descend(self, cursor: Cursor) -> bool:
        return self.rows.is_real_row(cursor.row) and not self._is_last_empty(cursor)

    def clamp_col(self, cursor: Cursor) -> Cursor:
        base = self._base()
        cursor.row = max(1, min(cursor.row, self.rows.row_count + 1))
        cursor.col = max(base, min(cursor.col, self.rows.line_length(cursor.row) + base))
        return cursor

    def move_up(self, cursor: Cursor) -> Cursor:
        if cursor.row > 1:
            cursor.row -= 1
        return self.clamp_col(cursor)

    def move_down(self, cursor: Cursor) -> Cursor:
        if self._can_descend(cursor):
            cursor.row += 1
        return self.clamp_col(cursor)

    def move_left(self, cursor: Cursor) -> Cursor:
        base = self._base()
        if cursor.col > base:
            cursor.col -= 1
        elif cursor.row > 1:
            cursor.row -= 1
            cursor.col = self.rows.line_length(cursor.row) + base
        return self.clamp_col(cursor)

    def move_right(self, cursor: Cursor) -> Cursor:
        if not self.rows.is_real_row(cursor.row):
            return self.clamp_col(cursor)
        base = self._base()
        end = self.rows.line_length(cursor.row) + base
        if cursor.col < end:
            cursor.col += 1
        elif cursor.col == end and not self._is_last_empty(cursor):
            cursor.row += 1
            cursor.col = base
        return self.clamp_col(cursor)

    def move_home(self, cursor: Cursor) -> Cursor:
        cursor.col = self._base()
        return self.clamp_col(cursor)

    def move_end(self, cursor: Cursor) -> Cursor:
        if self.rows.is_real_row(cursor.row):
            cursor.col = self.rows.line_length(cursor.row) + self._base()
        return self.clamp_col(cursor)

    def page_up(self, cursor: Cursor, row_offset: int, height: int) -> Cursor:
        """Jumps to the top visible row, then one screenful further up."""
        cursor.row = row_offset + 1
        for _ in range(max(height, 0)):
            if cursor.row == 1:
                break
            cursor.row -= 1
        logging.debug("Navigator.page_up: row -> %d", cursor.row)
        return self.clamp_col(cursor)

    def page_down(self, cursor: Cursor, row_offset: int, height: int) -> Cursor:
        """Jumps to the bottom visible row, then one screenful further down."""
        cursor.row = max(1, min(row_offset + height, self.rows.row_count))
        for _ in range(max(height, 0)):
            if not self._can_descend(cursor):
                break
            cursor.row += 1
        logging.debug("Navigator.page_down: row -> %d", cursor.row)
        return self.clamp_col(cursor)
