# lined/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen: renders the editor into the curses standard screen.

A frame has three parts:
- the title bar (row 0): the centered file name, `` *`` when modified,
- the text area: one row per visible document line, each prefixed by the
  right-aligned line number and a separator space; rows past the end of the
  document show only a blank gutter cell,
- the status bar (last row): the left-aligned status or help message.

The frame text is built by :meth:`DrawScreen.compose_frame`, which does not
touch curses, and painted by :meth:`DrawScreen.draw`. The cursor is hidden
while painting and shown again at its cell afterwards, except during the
"Save as" prompt. All output goes out with one ``curses.doupdate()``.
"""

import curses
import logging
import os
from typing import TYPE_CHECKING, Any

from lined.ui.KeyBinder import InputMode

if TYPE_CHECKING:
    from lined.core.EditorSession import EditorSession


COLOR_NAMES: dict[str, int] = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Paints title bar, numbered text rows and status bar for an
    :class:`EditorSession`.

    Attributes:
        MIN_WINDOW_WIDTH (int): Minimum usable terminal width.
        MIN_WINDOW_HEIGHT (int): Minimum usable terminal height.
        UI_PAIR (int): curses color pair used for the bars and the gutter.
        session (EditorSession): The session being drawn.
        config (dict): Application configuration.
        stdscr (curses.window): The curses window drawn into.
        colors (dict[str, int]): Ready-made curses attributes by role.
    """

    MIN_WINDOW_WIDTH = 20
    MIN_WINDOW_HEIGHT = 5
    UI_PAIR = 1

    def __init__(self, session: "EditorSession", config: dict[str, Any]) -> None:
        self.session = session
        self.config = config
        self.stdscr = session.terminal.stdscr
        self.colors: dict[str, int] = {"ui": curses.A_REVERSE}
        self._colors_ready = False

    # colors
    def _init_status_colors(self) -> None:
        """Creates the UI color pair (default black on white).

        Falls back to reverse video on terminals without colors.
        """
        self._colors_ready = True
        colors_cfg = self.config.get("colors", {})
        fg_idx = COLOR_NAMES.get(str(colors_cfg.get("ui_fg", "black")).lower(), curses.COLOR_BLACK)
        bg_idx = COLOR_NAMES.get(str(colors_cfg.get("ui_bg", "white")).lower(), curses.COLOR_WHITE)

        try:
            if not curses.has_colors():
                logging.debug("Terminal has no colors, using A_REVERSE for the UI bars")
                return
            curses.start_color()
            curses.init_pair(self.UI_PAIR, fg_idx, bg_idx)
        except curses.error as exc:
            logging.warning("init_pair failed (%s), falling back to A_REVERSE", exc)
            self.colors["ui"] = curses.A_REVERSE
            return

        self.colors["ui"] = curses.color_pair(self.UI_PAIR)

    # frame composition
    def title_text(self) -> str:
        filename = self.session.filename
        if not filename:
            return self.config.get("editor", {}).get("title_placeholder", "Text Editor")
        name = os.path.basename(filename)
        return f"{name} *" if self.session.modified else name

    def compose_frame(self) -> list[str]:
        """Builds the frame as text lines, top to bottom.

        Returns:
            list[str]: Title line, ``viewport.height`` text lines and the
            status line. Every line is at most ``viewport.width`` characters.
        """
        vp = self.session.viewport
        rows = self.session.rows
        width = vp.width
        g = self.session.gutter_width
        text_width = max(0, width - (g + 1))

        frame = [f"{self.title_text():^{width}}"[:width]]
        for y in range(vp.height):
            row_no = vp.row_offset + 1 + y
            if row_no <= rows.row_count:
                rendered = rows.get(row_no).rendered
                content = rendered[vp.col_offset : vp.col_offset + text_width]
                frame.append(f"{row_no:>{g}} {content}"[:width])
            else:
                frame.append(" " * min(g, width))
        frame.append(f"{self.session.status_message:<{width}}"[:width])
        return frame

    # drawing
    def _materialize_virtual_row(self) -> None:
        """Gives a cursor parked below a non-empty last row a real row to draw."""
        if self.session.is_cursor_on_virtual_row() and self.session.materialize_virtual_row():
            self.session.viewport.scroll(self.session.cursor, self.session.rows)

    def _set_cursor_visibility(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            logging.debug("curs_set(%d) not supported by this terminal", visibility)

    def draw(self) -> None:
        """The main screen drawing method."""
        if not self._colors_ready:
            self._init_status_colors()
        self._set_cursor_visibility(0)

        try:
            height, width = self.stdscr.getmaxyx()
            if height < self.MIN_WINDOW_HEIGHT or width < self.MIN_WINDOW_WIDTH:
                self._show_small_window_error(height, width)
                self._update_display()
                return

            self._materialize_virtual_row()

            if self.session.consume_full_redraw():
                self.stdscr.clear()
            else:
                self.stdscr.erase()

            frame = self.compose_frame()
            last = len(frame) - 1
            for y, line in enumerate(frame):
                if y == 0 or y == last:
                    self._put(y, line.ljust(self.session.viewport.width), self.colors["ui"])
                elif line.strip():
                    g = min(self.session.gutter_width, len(line))
                    self._put(y, line[:g], self.colors["ui"])
                    self._put(y, line[g:], curses.A_NORMAL, x=g)
                else:
                    self._put(y, line, self.colors["ui"])

            if self.session.keybinder.mode is not InputMode.SAVE_AS:
                y, x = self.session.viewport.screen_position(self.session.cursor)
                self.stdscr.move(max(0, min(y, height - 1)), max(0, min(x, width - 1)))
                self._set_cursor_visibility(1)
        except curses.error as e:
            logging.error("Curses error in DrawScreen.draw(): %s", e, exc_info=True)

        self._update_display()

    def _put(self, y: int, text: str, attr: int, x: int = 0) -> None:
        # Writing the bottom-right cell makes curses raise after the text is drawn.
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def _show_small_window_error(self, height: int, width: int) -> None:
        """Displays a message that the window is too small."""
        msg = (
            f"Window too small ({width}x{height}). "
            f"Minimum is {self.MIN_WINDOW_WIDTH}x{self.MIN_WINDOW_HEIGHT}."
        )
        try:
            self.stdscr.clear()
            start_col = max(0, (width - len(msg)) // 2)
            self.stdscr.addstr(height // 2, start_col, msg[: max(0, width - 1)])
        except curses.error:
            # If even this doesn't work, the terminal is in a bad state
            pass

    def _update_display(self) -> None:
        """Flushes the frame to the terminal in one go."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logging.error("Curses doupdate error: %s", e)
