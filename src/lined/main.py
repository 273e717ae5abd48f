# lined/main.py
"""
lined Main Entry Point
======================

Startup sequence:
1) Environment Loading: reads ~/.config/lined/.env early, so switches such as
   LINED_KEYTRACE are visible to the logging setup.
2) Configuration & Logging: loads config and initializes logging.
3) Curses Wrapper: initializes and tears down curses safely.
4) Application Run: builds the EditorSession, opens the file named on the
   command line if it exists, and runs the main loop.
"""

from __future__ import annotations

import argparse
import curses
import locale
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from lined.core.EditorSession import EditorSession
from lined.ui.TerminalAppMode import TerminalAppMode
from lined.utils.logging_config import setup_logging
from lined.utils.utils import get_user_config_dir, load_config

logger = logging.getLogger("lined")


def _load_environment() -> None:
    dotenv_path = get_user_config_dir() / ".env"
    if dotenv_path.is_file():
        load_dotenv(dotenv_path=dotenv_path)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lined", description="A full-screen terminal line editor.")
    parser.add_argument("path", nargs="?", help="file to edit; a missing file starts an empty, unnamed document")
    return parser.parse_args(argv)


def _preload_cli_document(session: EditorSession, candidate: Path) -> None:
    """Opens *candidate* if it exists; otherwise the session keeps its empty, unnamed document."""
    if candidate.exists():
        session.open_file(str(candidate))
    else:
        logger.info("'%s' does not exist yet; starting with an empty document", candidate)


# --- Curses Application Runner ---
def main_app_runner(stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`. Puts the terminal into editor mode, runs the
    session and always restores the terminal afterwards.
    """
    terminal = TerminalAppMode(stdscr)
    terminal.enter()
    try:
        session = EditorSession(terminal, config)

        # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
        if hasattr(signal, "SIGTSTP"):
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)

        if file_to_open:
            _preload_cli_document(session, Path(file_to_open).expanduser())

        session.run()
    finally:
        terminal.exit()


def start(argv: Optional[list[str]] = None) -> None:
    """Console entry point: ``lined [PATH]``."""
    args = _parse_args(argv)

    try:
        _load_environment()
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("lined editor starting up...")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    # Curses reads ESCDELAY at init; the editor times escape sequences itself.
    os.environ.setdefault("ESCDELAY", "25")

    try:
        curses.wrapper(main_app_runner, config, args.path)
        logger.info("lined editor shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
