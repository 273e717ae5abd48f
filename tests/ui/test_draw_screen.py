# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` renderer.
==========================================

Frame text is checked through `compose_frame()`; the curses side (cursor
visibility, cursor placement, flush, small-window message) is checked on the
mocked `curses` module and the mocked `stdscr` of `StubTerminal`.
"""

import curses
from pathlib import Path
from unittest.mock import MagicMock, call

from lined.core.EditorSession import EditorSession
from lined.ui.KeyBinder import KeyOp
from tests.stubs import StubTerminal


def test_frame_of_new_session(session: EditorSession) -> None:
    frame = session.drawer.compose_frame()
    assert len(frame) == 24
    assert frame[0] == f"{'Text Editor':^80}"
    assert frame[1] == " 1 "
    assert frame[2] == "  "
    assert frame[-1] == f"{'Ctrl-Q - Quit | Ctrl-S - Save':<80}"
    assert all(len(line) <= 80 for line in frame)


def test_title_shows_basename_and_modified_marker(session: EditorSession, text_file: Path) -> None:
    session.open_file(str(text_file))
    assert session.drawer.compose_frame()[0].strip() == "notes.txt"
    session.insert_text("!")
    assert session.drawer.compose_frame()[0].strip() == "notes.txt *"


def test_rows_are_rendered_with_tabs_expanded(session: EditorSession, text_file: Path) -> None:
    session.open_file(str(text_file))
    frame = session.drawer.compose_frame()
    assert frame[1] == " 1 first line"
    assert frame[2] == " 2     indented"


def test_horizontal_scroll_slices_render_columns(session: EditorSession) -> None:
    session.viewport.resize(20, 5)
    for ch in "abcdefghijklmnopqrstuvwxyz":
        session.insert_text(ch)
    session.viewport.scroll(session.cursor, session.rows)
    frame = session.drawer.compose_frame()
    assert session.viewport.col_offset == 29 - 18
    assert frame[1] == " 1 " + "abcdefghijklmnopqrstuvwxyz"[11:11 + 17]


def test_gutter_grows_with_row_count(session: EditorSession) -> None:
    for _ in range(120):
        session.insert_text("x")
        session.handle_enter()
        session.materialize_virtual_row()
    session.viewport.row_offset = 95
    frame = session.drawer.compose_frame()
    assert frame[1].startswith(" 96 x")
    assert session.gutter_width == 3


def test_draw_hides_then_places_cursor(session: EditorSession, mock_curses_functions: MagicMock) -> None:
    for ch in "ab":
        session.insert_text(ch)
    session.refresh()

    assert mock_curses_functions.curs_set.call_args_list[0] == call(0)
    assert mock_curses_functions.curs_set.call_args_list[-1] == call(1)
    session.terminal.stdscr.move.assert_called_with(1, 5)
    mock_curses_functions.doupdate.assert_called()


def test_cursor_stays_hidden_in_save_as(session: EditorSession, mock_curses_functions: MagicMock) -> None:
    session.keybinder.handle_key(KeyOp.SAVE)
    mock_curses_functions.curs_set.reset_mock()
    session.refresh()
    assert call(1) not in mock_curses_functions.curs_set.call_args_list
    assert session.drawer.compose_frame()[-1].startswith("Save as: ")


def test_small_window_shows_message(terminal: StubTerminal, session: EditorSession) -> None:
    terminal.set_size(15, 3)
    session.refresh()
    drawn = [c.args for c in terminal.stdscr.addstr.call_args_list]
    assert drawn
    assert drawn[-1][2].startswith("Window")


def test_color_pair_and_fallback(session: EditorSession, mock_curses_functions: MagicMock) -> None:
    session.refresh()
    mock_curses_functions.init_pair.assert_called_once_with(1, curses.COLOR_BLACK, curses.COLOR_WHITE)
    assert session.drawer.colors["ui"] == 1 << 8


def test_no_colors_falls_back_to_reverse(session: EditorSession, mock_curses_functions: MagicMock) -> None:
    mock_curses_functions.has_colors.return_value = False
    session.refresh()
    assert session.drawer.colors["ui"] == mock_curses_functions.A_REVERSE


def test_line_numbers_use_ui_colors(session: EditorSession, text_file: Path) -> None:
    session.open_file(str(text_file))
    session.refresh()
    addstr = session.terminal.stdscr.addstr
    ui = session.drawer.colors["ui"]
    addstr.assert_any_call(1, 0, " 1", ui)
    addstr.assert_any_call(1, 2, " first line", curses.A_NORMAL)
    addstr.assert_any_call(2, 0, " 2", ui)


def test_full_redraw_clears_once(session: EditorSession) -> None:
    stdscr = session.terminal.stdscr
    session.refresh()
    session.refresh()
    assert stdscr.clear.call_count == 1
    assert stdscr.erase.call_count >= 1
    session.on_resize(80, 24)
    session.refresh()
    assert stdscr.clear.call_count == 2
