# tests/conftest.py
"""Pytest configuration with shared fixtures for the lined editor tests."""

from __future__ import annotations

import curses
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from lined.core.EditorSession import EditorSession
from lined.utils.utils import DEFAULT_CONFIG, deep_merge
from tests.stubs import StubTerminal


# --- Automatic mocking of the curses module used by the renderer ---
@pytest.fixture(autouse=True)
def mock_curses_functions() -> Generator[MagicMock, None, None]:
    """Replace `curses` inside `lined.ui.DrawScreen` with a mock.

    `curses.error` stays a real exception type so `except curses.error`
    clauses keep working.

    Yields:
        MagicMock: The mock, for assertions on curs_set/doupdate calls.
    """
    curses_mock = MagicMock()
    curses_mock.error = curses.error
    curses_mock.A_NORMAL = 0
    curses_mock.A_REVERSE = 1 << 18
    curses_mock.has_colors.return_value = True
    curses_mock.color_pair.side_effect = lambda n: n << 8

    with patch("lined.ui.DrawScreen.curses", curses_mock):
        yield curses_mock


# --- Base fixtures ---
@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Default configuration with a short escape timeout."""
    return deep_merge(DEFAULT_CONFIG, {"editor": {"escape_timeout_ms": 10}})


@pytest.fixture
def terminal() -> StubTerminal:
    """Scripted 80x24 terminal."""
    return StubTerminal(cols=80, rows=24)


@pytest.fixture
def session(terminal: StubTerminal, mock_config: dict[str, Any]) -> EditorSession:
    """A real `EditorSession` over the scripted terminal."""
    return EditorSession(terminal, mock_config)


@pytest.fixture
def feed_keys(session: EditorSession, terminal: StubTerminal):
    """Feeds input and processes keys until the script is exhausted.

    Every processed key is followed by a refresh, as in the main loop.
    """

    def _feed(*items: Any) -> EditorSession:
        terminal.feed(*items)
        while terminal.pending:
            session.keybinder.process_key()
            if terminal.resize_pending():
                session.on_resize(*terminal.query_size())
            session.refresh()
        return session

    return _feed


# --- Filesystem fixtures ---
@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """A small two-line file with a tab."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"first line\n\tindented\n")
    return path
