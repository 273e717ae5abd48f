# lined/core/RowStore.py
"""lined.core.RowStore
======================

Ordered line storage for the editor.

Each :class:`Row` keeps the raw text (what gets saved) together with its
tab-expanded rendering. The rendering is recomputed whenever ``raw`` is
assigned, so the two can never diverge.

:class:`RowStore` addresses rows with 1-based row numbers, the same numbering
the cursor and the on-screen line numbers use. It always holds at least one
row: an empty document is a single empty row.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from lined.core.Coordinates import expand_tabs, gutter_width


class Row:
    """A single line: raw content plus its tab-expanded render cache."""

    __slots__ = ("_raw", "_rendered")

    def __init__(self, raw: str = "") -> None:
        self._raw = ""
        self._rendered = ""
        self.raw = raw

    @property
    def raw(self) -> str:
        return self._raw

    @raw.setter
    def raw(self, value: str) -> None:
        self._raw = value
        self._rendered = expand_tabs(value)

    @property
    def rendered(self) -> str:
        return self._rendered

    def __len__(self) -> int:
        return len(self._raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._raw == other._raw
        return NotImplemented

    def __repr__(self) -> str:
        return f"Row({self._raw!r})"


class RowStore:
    """Class RowStore
    =================
    Ordered sequence of :class:`Row` objects with 1-based addressing.

    Attributes:
        row_count (int): Number of stored rows, always >= 1. This is the only
            input to the gutter width.

    Methods:
        get(row): Returns the row object at ``row``.
        insert_row(at, content): Inserts a new row so it becomes row ``at``.
        append_row(content): Adds a row after the last one.
        remove_row(at): Deletes row ``at`` unless it is the only row.
        replace_content(row, new_raw): Replaces the raw text of a row.
        line_length(row): Length of the raw text; 0 for the virtual row.
        lines(): The raw text of every row, in document order.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self._rows: list[Row] = [Row(line) for line in (lines or [])]
        if not self._rows:
            self._rows.append(Row())

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RowStore":
        return cls(lines)

    # --- Queries ---
    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def gutter_width(self) -> int:
        return gutter_width(len(self._rows))

    def is_real_row(self, row: int) -> bool:
        """True when ``row`` addresses a stored row (not the virtual one)."""
        return 1 <= row <= len(self._rows)

    def get(self, row: int) -> Row:
        if not self.is_real_row(row):
            raise IndexError(f"row {row} out of range 1..{len(self._rows)}")
        return self._rows[row - 1]

    def line_length(self, row: int) -> int:
        if not self.is_real_row(row):
            return 0
        return len(self._rows[row - 1])

    def lines(self) -> list[str]:
        return [r.raw for r in self._rows]

    # --- Mutations ---
    def insert_row(self, at: int, content: str = "") -> Row:
        """Inserts a row so that it becomes row number ``at``.

        ``at`` may be ``row_count + 1`` to append.
        """
        if not 1 <= at <= len(self._rows) + 1:
            raise IndexError(f"cannot insert at row {at} (rows: {len(self._rows)})")
        new_row = Row(content)
        self._rows.insert(at - 1, new_row)
        return new_row

    def append_row(self, content: str = "") -> Row:
        return self.insert_row(len(self._rows) + 1, content)

    def remove_row(self, at: int) -> Optional[Row]:
        """Removes row ``at``. The last remaining row is never removed."""
        if not self.is_real_row(at):
            logging.debug("RowStore.remove_row: row %d out of range, ignored", at)
            return None
        if len(self._rows) == 1:
            logging.warning("RowStore.remove_row: refusing to remove the only row")
            return None
        return self._rows.pop(at - 1)

    def replace_content(self, row: int, new_raw: str) -> Row:
        target = self.get(row)
        target.raw = new_raw
        return target
