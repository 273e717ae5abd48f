# lined/core/EditEngine.py
"""lined.core.EditEngine
========================

Text mutations: character insert, newline split, backspace/join and forward
delete.

Every operation receives the session cursor, mutates it in place and returns
it. Columns are buffer columns (text offset + gutter base). Because a split or
a join can move the row count across a power of ten, each operation reads the
gutter base before the mutation, converts the cursor to a plain text offset,
and converts back with the gutter base that holds afterwards.

The virtual trailing row (``cursor.row == row_count + 1``) has no storage. It
is materialized by :meth:`EditEngine.materialize_virtual_row`, which the
renderer calls when it draws that row and the input layer calls before a
character is typed there.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from lined.core.Coordinates import gutter_base
from lined.core.RowStore import RowStore


@dataclass(slots=True)
class Cursor:
    """Cursor position.

    Attributes:
        row: 1-based row number; ``row_count + 1`` is the virtual row.
        col: buffer column, including the gutter offset.
        render_col: tab-expanded column including the gutter offset.
    """

    row: int = 1
    col: int = 3
    render_col: int = 3


class EditEngine:
    """Applies text edits to a :class:`RowStore` on behalf of a cursor.

    Args:
        rows: The row store being edited.
        on_modified: Called once per effective mutation. The session uses it
            to raise its ``modified`` flag.
    """

    def __init__(
        self, rows: RowStore, on_modified: Optional[Callable[[], None]] = None
    ) -> None:
        self.rows = rows
        self._on_modified = on_modified

    # --- helpers ---
    def _base(self) -> int:
        return gutter_base(self.rows.row_count)

    def _mark_modified(self) -> None:
        if self._on_modified is not None:
            self._on_modified()

    def is_virtual(self, cursor: Cursor) -> bool:
        return cursor.row == self.rows.row_count + 1

    def at_buffer_end(self, cursor: Cursor) -> bool:
        """True when the cursor sits after the last character of the last row."""
        last = self.rows.row_count
        return cursor.row == last and cursor.col == self.rows.line_length(last) + self._base()

    def clamp(self, cursor: Cursor) -> Cursor:
        """Forces the cursor back into ``[1, row_count + 1]`` x ``[base, len + base]``."""
        cursor.row = max(1, min(cursor.row, self.rows.row_count + 1))
        base = self._base()
        cursor.col = max(base, min(cursor.col, self.rows.line_length(cursor.row) + base))
        return cursor

    def _place(self, cursor: Cursor, row: int, text_offset: int) -> Cursor:
        cursor.row = row
        cursor.col = text_offset + self._base()
        return self.clamp(cursor)

    # --- virtual row ---
    def materialize_virtual_row(self, cursor: Cursor, force: bool = False) -> bool:
        """Stores an empty row for a cursor parked on the virtual row.

        Unless *force* is set, nothing happens when the last stored row is
        itself empty: the cursor then stays on a virtual row that renders as
        nothing. Typing on the virtual row passes ``force=True``.

        Returns:
            bool: True if a row was appended.
        """
        if not self.is_virtual(cursor):
            return False
        last = self.rows.row_count
        if not force and self.rows.line_length(last) == 0:
            return False
        text_offset = cursor.col - self._base()
        self.rows.append_row("")
        self._place(cursor, cursor.row, text_offset)
        self._mark_modified()
        logging.debug("EditEngine: materialized virtual row %d", cursor.row)
        return True

    # --- edits ---
    def insert_char(self, cursor: Cursor, ch: str) -> Cursor:
        """Inserts *ch* before the cursor and advances it past the inserted text."""
        if self.is_virtual(cursor):
            logging.debug("insert_char: cursor on virtual row %d, ignored", cursor.row)
            return cursor
        self.clamp(cursor)
        offset = cursor.col - self._base()
        raw = self.rows.get(cursor.row).raw
        self.rows.replace_content(cursor.row, raw[:offset] + ch + raw[offset:])
        cursor.col += len(ch)
        self._mark_modified()
        return cursor

    def insert_newline(self, cursor: Cursor) -> Cursor:
        """Breaks the line at the cursor.

        - At the end of the buffer no row is created; the cursor moves onto
          the virtual row.
        - At the start of a line an empty row is inserted above it and the
          cursor follows the original line down.
        - Otherwise the line is split and the tail becomes the next row.
        """
        self.clamp(cursor)
        base = self._base()
        if self.at_buffer_end(cursor):
            logging.debug("insert_newline: end of buffer, moving to virtual row")
        elif cursor.col == base:
            self.rows.insert_row(cursor.row, "")
        else:
            offset = cursor.col - base
            raw = self.rows.get(cursor.row).raw
            self.rows.replace_content(cursor.row, raw[:offset])
            self.rows.insert_row(cursor.row + 1, raw[offset:])
        cursor.row += 1
        cursor.col = self._base()
        self._mark_modified()
        return cursor

    def backspace(self, cursor: Cursor) -> Cursor:
        """Deletes the character before the cursor, or joins with the previous row."""
        if self.is_virtual(cursor):
            return cursor
        self.clamp(cursor)
        base = self._base()
        if cursor.row == 1 and cursor.col == base:
            return cursor

        if cursor.col > base:
            offset = cursor.col - base
            raw = self.rows.get(cursor.row).raw
            self.rows.replace_content(cursor.row, raw[: offset - 1] + raw[offset:])
            cursor.col -= 1
        else:
            prev = cursor.row - 1
            prev_len = self.rows.line_length(prev)
            tail = self.rows.get(cursor.row).raw
            self.rows.replace_content(prev, self.rows.get(prev).raw + tail)
            self.rows.remove_row(cursor.row)
            self._place(cursor, prev, prev_len)
        self._mark_modified()
        return cursor

    def forward_delete(self, cursor: Cursor) -> Cursor:
        """Deletes the character (or line break) to the right of the cursor."""
        if self.is_virtual(cursor):
            return cursor
        self.clamp(cursor)
        if self.at_buffer_end(cursor):
            return cursor
        base = self._base()
        if cursor.col < self.rows.line_length(cursor.row) + base:
            cursor.col += 1
        else:
            cursor.row += 1
            cursor.col = base
        return self.backspace(cursor)
