# lined/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
import shutil
import signal
from types import FrameType
from typing import Any, Optional


class TerminalAppMode:
    """
    Terminal boundary of the editor:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - raw + noecho, keypad translation OFF: the editor decodes escape
      sequences itself, so every byte the terminal sends reaches it.
    - Byte input with an optional timeout (escape sequence lookahead).
    - Terminal size queries and SIGWINCH delivery as a pending flag.

    Always pair `enter()` with `exit()` (try/finally).
    """

    def __init__(self, stdscr: Optional[curses.window] = None) -> None:
        self._entered: bool = False
        self.stdscr: Optional[curses.window] = stdscr
        self._resize_pending: bool = False
        self._previous_winch_handler: Any = None

    def enter(self, stdscr: Optional[curses.window] = None) -> None:
        if stdscr is not None:
            self.stdscr = stdscr
        if self.stdscr is None:
            raise RuntimeError("TerminalAppMode.enter() needs a curses window")

        try:
            curses.setupterm()
        except curses.error as e:
            logging.debug("setupterm() failed or not required: %r", e)

        # Switch to alternate screen (smcup) BEFORE clearing.
        self._tputs("smcup")

        curses.raw()
        curses.noecho()
        self.stdscr.keypad(False)
        try:
            curses.meta(True)
        except curses.error:
            logging.debug("TerminalAppMode: meta mode unavailable")

        self.stdscr.scrollok(False)
        self.stdscr.leaveok(False)
        self.stdscr.clearok(True)
        self.stdscr.erase()
        self.stdscr.refresh()

        self._install_winch_handler()
        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen, raw input).")

    def exit(self) -> None:
        if not self._entered:
            return

        if self._previous_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch_handler)
            self._previous_winch_handler = None

        try:
            curses.noraw()
            curses.echo()
            curses.curs_set(1)
        except curses.error as e:
            logging.debug("TerminalAppMode: restoring modes failed: %r", e)

        self._tputs("rmcup")

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── input ─────────────────────────────────────────────────────────────────

    def read_byte(self, timeout_ms: Optional[int] = None) -> tuple[int, int]:
        """Reads one byte from the terminal.

        Args:
            timeout_ms: Maximum wait in milliseconds; None blocks.

        Returns:
            tuple[int, int]: ``(byte, bytes_read)``. ``bytes_read`` is 0 when
            the wait timed out or was interrupted by a resize.
        """
        assert self.stdscr is not None
        self.stdscr.timeout(-1 if timeout_ms is None else max(0, timeout_ms))
        try:
            ch = self.stdscr.getch()
        except curses.error:
            return 0, 0

        if ch == curses.KEY_RESIZE:
            self._resize_pending = True
            return 0, 0
        if ch < 0 or ch > 0xFF:
            return 0, 0
        return ch, 1

    # ── size / resize ─────────────────────────────────────────────────────────

    def _install_winch_handler(self) -> None:
        def _on_winch(signum: int, frame: Optional[FrameType]) -> None:
            self._resize_pending = True

        try:
            self._previous_winch_handler = signal.signal(signal.SIGWINCH, _on_winch)
        except (ValueError, AttributeError) as e:
            # Not on the main thread, or a platform without SIGWINCH.
            logging.warning("TerminalAppMode: cannot install SIGWINCH handler: %r", e)

    def resize_pending(self) -> bool:
        """Returns and clears the pending-resize flag."""
        pending = self._resize_pending
        self._resize_pending = False
        return pending

    def query_size(self) -> tuple[int, int]:
        """Returns ``(columns, rows)`` and resizes the curses screen to match."""
        size = shutil.get_terminal_size()
        cols, rows = size.columns, size.lines
        if self.stdscr is None:
            return cols, rows
        try:
            if curses.is_term_resized(rows, cols):
                curses.resizeterm(rows, cols)
            rows, cols = self.stdscr.getmaxyx()
        except curses.error as e:
            logging.debug("TerminalAppMode: resizeterm failed: %r", e)
        return cols, rows

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Capability missing (e.g. a bare console).
            logging.debug("tputs(%s) skipped: %r", capname, e)
