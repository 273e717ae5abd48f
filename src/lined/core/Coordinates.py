# lined/core/Coordinates.py
"""lined.core.Coordinates
=========================

Coordinate model shared by the row store, the edit engine, the viewport and
the renderer.

Three column systems exist side by side:

- *text offset*: index into the raw line (0-based, no gutter);
- *buffer column*: text offset + gutter base, i.e. the value stored in
  ``Cursor.col``;
- *render column*: tab-expanded position + gutter base, i.e. the screen column
  before horizontal scrolling (``Cursor.render_col``).

The gutter base is ``gutter_width(row_count) + 1`` and is never cached: the
row count can cross a power of ten at any edit, and every caller must ask
again.
"""

TAB_STOP = 4
MIN_GUTTER_WIDTH = 2


def gutter_width(row_count: int) -> int:
    """Returns the number of digits needed for the largest line number (min 2)."""
    return max(len(str(max(row_count, 0))), MIN_GUTTER_WIDTH)


def gutter_base(row_count: int) -> int:
    """Returns the first buffer column of editable text (gutter + separator)."""
    return gutter_width(row_count) + 1


def expand_tabs(raw: str) -> str:
    """Expands every tab in *raw* to spaces up to the next multiple of TAB_STOP.

    Tab stops are measured in render space from the start of the line and do
    not depend on the gutter.
    """
    if "\t" not in raw:
        return raw
    out: list[str] = []
    col = 0
    for ch in raw:
        if ch == "\t":
            spaces = TAB_STOP - (col % TAB_STOP)
            out.append(" " * spaces)
            col += spaces
        else:
            out.append(ch)
            col += 1
    return "".join(out)


def render_offset(raw: str, text_offset: int) -> int:
    """Returns the render position of *text_offset* within *raw* (no gutter)."""
    text_offset = max(0, min(text_offset, len(raw)))
    acc = 0
    for ch in raw[:text_offset]:
        if ch == "\t":
            acc += TAB_STOP - (acc % TAB_STOP)
        else:
            acc += 1
    return acc


def to_render_column(raw: str, buffer_col: int, row_count: int) -> int:
    """Maps a buffer column on line *raw* to its render column.

    Args:
        raw: The raw (unexpanded) content of the line.
        buffer_col: Cursor column including the gutter offset.
        row_count: Current number of rows, which decides the gutter width.

    Returns:
        The tab-expanded column, with the gutter offset added back.
    """
    base = gutter_base(row_count)
    return render_offset(raw, buffer_col - base) + base
