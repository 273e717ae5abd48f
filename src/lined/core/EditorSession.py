# lined/core/EditorSession.py
# ruff: noqa: E501
"""lined.core.EditorSession
===========================
EditorSession: the single aggregate that owns all editor state.

One session lives from startup until quit. It bundles

- the document (:class:`RowStore`) and its metadata (filename, encoding,
  modified flag),
- the cursor and the viewport offsets,
- the status line text,
- and the collaborators that act on them: the edit engine, the navigator,
  the file store, the renderer (:class:`DrawScreen`), the input state machine
  (:class:`KeyBinder`) and the terminal boundary.

Everything runs on one thread. The main loop reads one byte, lets the
KeyBinder turn it into at most one operation, then scrolls and redraws. A
terminal resize only records new dimensions and forces a full redraw; it never
touches the rows or the cursor.
"""

import logging
import os
from typing import TYPE_CHECKING, Any, Optional

from lined.core.Coordinates import gutter_base, gutter_width
from lined.core.EditEngine import Cursor, EditEngine
from lined.core.FileStore import FileStore, FileStoreError
from lined.core.Navigator import Navigator
from lined.core.RowStore import RowStore
from lined.core.Viewport import Viewport
from lined.ui.DrawScreen import DrawScreen
from lined.ui.KeyBinder import KeyBinder
from lined.utils.logging_config import logger

if TYPE_CHECKING:
    from lined.ui.TerminalAppMode import TerminalAppMode

# Title bar and status bar take one row each.
CHROME_ROWS = 2
# Extra quit presses needed to leave a modified document.
QUIT_CONFIRMATIONS = 1


## ==================== EditorSession Class ====================
class EditorSession:
    """Class EditorSession
    =========================
    The editing session: document, cursor, viewport and collaborators.

    Attributes:
        terminal (TerminalAppMode): Terminal boundary (byte input, size, screen).
        config (dict): Merged application configuration.
        rows (RowStore): The document, never empty.
        cursor (Cursor): Current cursor position.
        viewport (Viewport): Scroll offsets and text-area size.
        filename (Optional[str]): Target path for saving, None until known.
        encoding (str): Encoding used to read the file and to write it back.
        modified (bool): True once the rows changed since the last successful save.
        status_message (str): Text of the bottom status line.
        running (bool): Main loop flag, cleared by :meth:`exit_editor`.
        engine (EditEngine): Text mutations.
        navigator (Navigator): Cursor movements.
        file_store (FileStore): Load/save backend.
        drawer (DrawScreen): Renderer.
        keybinder (KeyBinder): Byte decoder and per-mode dispatch.
    """

    def __init__(
        self,
        terminal: "TerminalAppMode",
        config: dict[str, Any],
        file_store: Optional[FileStore] = None,
    ) -> None:
        self.terminal = terminal
        self.config: dict[str, Any] = config
        editor_cfg = config.get("editor", {})

        self.file_store = file_store or FileStore(
            editor_cfg.get("default_encoding", "utf-8")
        )
        self.encoding: str = self.file_store.default_encoding
        self.filename: Optional[str] = None
        self.modified: bool = False
        self.running: bool = False
        self.status_message: str = ""
        self._status_is_transient: bool = False
        self._force_full_redraw: bool = True
        self.quit_confirmations_left: int = QUIT_CONFIRMATIONS

        self.viewport = Viewport()
        self._load_rows(RowStore())

        self.drawer: DrawScreen = DrawScreen(self, config)
        self.keybinder: KeyBinder = KeyBinder(self)
        self.reset_status()

        cols, term_rows = self.terminal.query_size()
        self.on_resize(cols, term_rows)
        logging.info("EditorSession initialized (%dx%d)", cols, term_rows)

    # --- document state ---
    def _load_rows(self, rows: RowStore) -> None:
        self.rows = rows
        self.engine = EditEngine(rows, on_modified=self._mark_modified)
        self.navigator = Navigator(rows)
        self.cursor = Cursor(row=1, col=gutter_base(rows.row_count))
        self.cursor.render_col = self.cursor.col
        self.viewport.row_offset = 0
        self.viewport.col_offset = 0

    def _mark_modified(self) -> None:
        self.modified = True

    @property
    def gutter_width(self) -> int:
        return gutter_width(self.rows.row_count)

    def request_full_redraw(self) -> None:
        self._force_full_redraw = True

    def consume_full_redraw(self) -> bool:
        """Returns and clears the full-redraw request."""
        pending = self._force_full_redraw
        self._force_full_redraw = False
        return pending

    def is_cursor_on_virtual_row(self) -> bool:
        return self.engine.is_virtual(self.cursor)

    def materialize_virtual_row(self, force: bool = False) -> bool:
        """Turns the virtual row under the cursor into a stored empty row."""
        return self.engine.materialize_virtual_row(self.cursor, force=force)

    # --- status line ---
    def set_status_message(self, message: str, transient: bool = True) -> None:
        """Sets the status line. Transient messages vanish on the next keystroke."""
        message = str(message)
        if self.status_message != message:
            logging.debug("Status message set to: '%s'", message)
        self.status_message = message
        self._status_is_transient = transient

    def reset_status(self) -> None:
        self.set_status_message(self.keybinder.help_text(), transient=False)

    def clear_transient_status(self) -> None:
        if self._status_is_transient:
            self.reset_status()

    # --- editing (dispatched by KeyBinder) ---
    def insert_text(self, ch: str) -> bool:
        if self.is_cursor_on_virtual_row():
            self.materialize_virtual_row(force=True)
        self.engine.insert_char(self.cursor, ch)
        return True

    def handle_enter(self) -> bool:
        self.engine.insert_newline(self.cursor)
        return True

    def handle_backspace(self) -> bool:
        self.engine.backspace(self.cursor)
        return True

    def handle_delete(self) -> bool:
        self.engine.forward_delete(self.cursor)
        return True

    # --- navigation (dispatched by KeyBinder) ---
    def handle_up(self) -> bool:
        self.navigator.move_up(self.cursor)
        return True

    def handle_down(self) -> bool:
        self.navigator.move_down(self.cursor)
        return True

    def handle_left(self) -> bool:
        self.navigator.move_left(self.cursor)
        return True

    def handle_right(self) -> bool:
        self.navigator.move_right(self.cursor)
        return True

    def handle_home(self) -> bool:
        self.navigator.move_home(self.cursor)
        return True

    def handle_end(self) -> bool:
        self.navigator.move_end(self.cursor)
        return True

    def handle_page_up(self) -> bool:
        self.navigator.page_up(self.cursor, self.viewport.row_offset, self.viewport.height)
        return True

    def handle_page_down(self) -> bool:
        self.navigator.page_down(self.cursor, self.viewport.row_offset, self.viewport.height)
        return True

    # --- files ---
    def open_file(self, path: str) -> bool:
        """Loads *path* as the document.

        On failure the current document is kept and the error is shown on the
        status line.

        Returns:
            bool: True if the file was loaded.
        """
        try:
            lines, encoding = self.file_store.load(path)
        except FileStoreError as e:
            logger.error("Failed to open '%s': %s", path, e)
            self.set_status_message(f"Can't open file! {e}")
            return False

        self._load_rows(RowStore.from_lines(lines))
        self.filename = path
        self.encoding = encoding
        self.modified = False
        self.request_full_redraw()
        logger.info("Opened '%s' (%d rows, %s)", path, self.rows.row_count, encoding)
        return True

    def save_file(self) -> bool:
        """Persists the document to ``filename``.

        Returns:
            bool: True on success. On failure ``modified`` stays set and the
            error is shown on the status line.
        """
        if not self.filename:
            logging.debug("save_file: no filename set")
            return False
        try:
            written = self.file_store.save(self.filename, self.rows.lines(), self.encoding)
        except FileStoreError as e:
            logger.error("Failed to save '%s': %s", self.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e}")
            return False

        self.modified = False
        self.set_status_message(
            f"{self.rows.row_count} lines, {written} bytes written to {os.path.basename(self.filename)}"
        )
        logger.info("Saved '%s' (%d bytes)", self.filename, written)
        return True

    # --- lifecycle ---
    def request_quit(self) -> bool:
        """Handles the quit key in normal mode.

        A modified document needs the quit key pressed
        ``QUIT_CONFIRMATIONS + 1`` times in a row; the earlier presses only
        show a warning.

        Returns:
            bool: True if the session is ending.
        """
        if self.modified and self.quit_confirmations_left > 0:
            self.quit_confirmations_left -= 1
            self.set_status_message(
                f"File has unsaved changes. Please press {self.keybinder.quit_key_name} "
                "one more time to quit without saving."
            )
            logging.debug("Quit requested with unsaved changes; confirmation needed")
            return False
        self.exit_editor()
        return True

    def reset_quit_counter(self) -> None:
        self.quit_confirmations_left = QUIT_CONFIRMATIONS

    def exit_editor(self) -> None:
        """Signals the main loop to stop. Unsaved changes are discarded."""
        self.running = False
        logger.info("Main loop stop signaled (modified=%s)", self.modified)

    def on_resize(self, width: int, height: int) -> None:
        """Adopts new terminal dimensions.

        Safe to call any number of times: it only records the text-area size
        and requests a full redraw.
        """
        self.viewport.resize(width, height - CHROME_ROWS)
        self.request_full_redraw()
        logging.debug("on_resize: terminal is now %dx%d", width, height)

    def refresh(self) -> None:
        """Scrolls the viewport to the cursor and redraws the screen."""
        self.viewport.scroll(self.cursor, self.rows)
        self.drawer.draw()

    def run(self) -> None:
        """The main event loop: one byte in, one redraw out, until quit."""
        logger.info("Editor main loop started.")
        self.running = True
        self.refresh()

        while self.running:
            try:
                self.keybinder.process_key()
                if self.terminal.resize_pending():
                    self.on_resize(*self.terminal.query_size())
                if self.running:
                    self.refresh()
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()

        logger.info("Editor main loop finished.")
