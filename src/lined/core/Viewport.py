# lined/core/Viewport.py
"""lined.core.Viewport
======================

Viewport controller: keeps the cursor's cell inside the drawable text area.

``row_offset`` is the number of document rows scrolled off the top and
``col_offset`` the number of render columns scrolled off the left. Both are
only ever written here; the renderer just reads them.
"""

import logging

from lined.core.Coordinates import gutter_base, gutter_width, to_render_column
from lined.core.EditEngine import Cursor
from lined.core.RowStore import RowStore


class Viewport:
    """Scroll offsets plus the size of the text area they apply to.

    Attributes:
        width (int): Text area width in columns (the whole terminal width).
        height (int): Number of text rows (terminal rows minus title and
            status bars).
        row_offset (int): First visible row is ``row_offset + 1``.
        col_offset (int): First visible render column of the line content.
    """

    def __init__(self, width: int = 80, height: int = 22) -> None:
        self.width = width
        self.height = height
        self.row_offset = 0
        self.col_offset = 0

    def resize(self, width: int, height: int) -> None:
        """Records new text-area dimensions. Offsets are fixed on the next scroll."""
        self.width = max(1, width)
        self.height = max(1, height)
        logging.debug("Viewport resized to %dx%d text cells", self.width, self.height)

    def update_render_col(self, cursor: Cursor, rows: RowStore) -> int:
        if rows.is_real_row(cursor.row):
            cursor.render_col = to_render_column(
                rows.get(cursor.row).raw, cursor.col, rows.row_count
            )
        else:
            cursor.render_col = gutter_base(rows.row_count)
        return cursor.render_col

    def scroll(self, cursor: Cursor, rows: RowStore) -> None:
        """Adjusts offsets so the cursor is visible.

        Calling it again with an unchanged cursor and row store leaves the
        offsets untouched.
        """
        render_col = self.update_render_col(cursor, rows)
        gutter = gutter_width(rows.row_count)

        if cursor.row <= self.row_offset:
            self.row_offset = cursor.row - 1
        if cursor.row >= self.row_offset + self.height:
            self.row_offset = cursor.row - self.height

        if render_col <= self.col_offset + gutter:
            self.col_offset = render_col - gutter - 1
        if render_col >= self.col_offset + (self.width - gutter):
            self.col_offset = render_col - (self.width - gutter)

        self.row_offset = max(0, self.row_offset)
        self.col_offset = max(0, self.col_offset)

    def visible_rows(self, row_count: int) -> range:
        """1-based row numbers of stored rows inside the viewport."""
        first = self.row_offset + 1
        last = min(self.row_offset + self.height, row_count)
        return range(first, last + 1)

    def screen_position(self, cursor: Cursor) -> tuple[int, int]:
        """Returns ``(y, x)`` of the cursor; y counts the title bar as row 0."""
        return cursor.row - self.row_offset, cursor.render_col - self.col_offset
