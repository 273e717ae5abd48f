# lined/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class turns raw terminal bytes into editor operations. It is an
explicit pipeline:

    byte -> escape accumulator -> logical key (KeyOp) -> per-mode dispatch

The terminal runs with keypad translation off, so arrows and the other
navigation keys arrive as ANSI escape sequences and are decoded here with a
bounded lookahead wait. A truncated or unknown sequence decodes to nothing.

Modes:
- NORMAL: editing, navigation, save and quit with confirmation.
- SAVE_AS: entered when saving a document that has no filename. Printable
  keys build the pending name, Enter commits and saves, the quit key cancels.

Key bindings for the quit and save actions come from the ``[keybindings]``
config section (``"ctrl+q"`` style strings or plain integer codes).
"""

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

from lined.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from lined.core.EditorSession import EditorSession


ESC = 0x1B
BACKSPACE_CODES = (8, 127)
NEWLINE_CODES = (10, 13)
TAB = 9
DEFAULT_ESCAPE_TIMEOUT_MS = 50


class InputMode(Enum):
    NORMAL = auto()
    SAVE_AS = auto()


class KeyOp(Enum):
    """Logical keys produced by the decoder."""

    CHAR = auto()
    NEWLINE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    QUIT = auto()
    SAVE = auto()
    IGNORE = auto()


# (op, character) pair; character is only set for KeyOp.CHAR.
DecodedKey = tuple[KeyOp, Optional[str]]


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Decodes input bytes and dispatches them to the editing session.

    Attributes:
        session (EditorSession): The session the operations act on.
        config (dict): Application configuration.
        terminal: Byte source with ``read_byte(timeout_ms)``.
        keybindings (dict): Action name -> list of byte codes.
        mode (InputMode): Current input mode.
        pending_filename (str): Name typed so far in SAVE_AS mode.
        escape_timeout_ms (int): How long to wait for escape sequence bytes.
    """

    # Sequences after ESC; "[" is CSI and "O" is SS3.
    ESCAPE_SEQUENCE_MAP: dict[str, KeyOp] = {
        "[A": KeyOp.UP, "[B": KeyOp.DOWN, "[C": KeyOp.RIGHT, "[D": KeyOp.LEFT,
        "OA": KeyOp.UP, "OB": KeyOp.DOWN, "OC": KeyOp.RIGHT, "OD": KeyOp.LEFT,
        "[H": KeyOp.HOME, "[F": KeyOp.END, "OH": KeyOp.HOME, "OF": KeyOp.END,
    }

    # "ESC [ <digit> ~" sequences.
    EXTENDED_KEY_MAP: dict[str, KeyOp] = {
        "1": KeyOp.HOME, "7": KeyOp.HOME,
        "4": KeyOp.END, "8": KeyOp.END,
        "3": KeyOp.DELETE,
        "5": KeyOp.PAGE_UP, "6": KeyOp.PAGE_DOWN,
    }

    DEFAULT_KEYBINDINGS: dict[str, str] = {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
    }

    def __init__(self, session: "EditorSession") -> None:
        logging.debug("KeyBinder initialized with session: %s", session)
        self.session = session
        self.config = session.config
        self.terminal = session.terminal

        self.mode: InputMode = InputMode.NORMAL
        self.pending_filename: str = ""
        self.escape_timeout_ms: int = int(
            self.config.get("editor", {}).get("escape_timeout_ms", DEFAULT_ESCAPE_TIMEOUT_MS)
        )

        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()

    # ---------------------- Key bindings --------------------
    def _load_keybindings(self) -> dict[str, list[int]]:
        """Resolves the configured quit and save keys to byte codes.

        Invalid entries are logged and replaced by the default binding.
        """
        user_keybindings: dict[str, object] = self.config.get("keybindings", {})
        parsed: dict[str, list[int]] = {}

        for action, default_spec in self.DEFAULT_KEYBINDINGS.items():
            spec = user_keybindings.get(action, default_spec) or default_spec
            specs = spec if isinstance(spec, list) else [spec]

            codes: list[int] = []
            for item in specs:
                try:
                    code = self._decode_keystring(item)  # type: ignore[arg-type]
                except ValueError as e:
                    logging.error(
                        "Error parsing keybinding %r for action %r: %s", item, action, e
                    )
                    continue
                if code not in codes:
                    codes.append(code)

            if not codes:
                logging.warning("No valid keys for %r, falling back to %r", action, default_spec)
                codes = [self._decode_keystring(default_spec)]
            parsed[action] = codes

        logging.debug("Loaded keybindings (action -> codes): %s", parsed)
        return parsed

    def _decode_keystring(self, key_input: str | int) -> int:
        """Decodes a key specification into a single byte code.

        Accepts an integer code, ``"ctrl+<letter>"`` (also ``"ctrl-<letter>"``
        and ``"^<letter>"``), or a single character.

        Raises:
            ValueError: The specification is empty, malformed or out of range.
        """
        if isinstance(key_input, bool):
            raise ValueError(f"Invalid key_input type: {type(key_input)}")
        if isinstance(key_input, int):
            if not 0 <= key_input <= 0xFF:
                raise ValueError(f"Key code out of byte range: {key_input}")
            return key_input
        if not isinstance(key_input, str):
            raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str or int.")

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        base: Optional[str] = None
        for prefix in ("ctrl+", "ctrl-", "^"):
            if s.startswith(prefix):
                base = s[len(prefix):]
                break

        if base is not None:
            if len(base) != 1 or not ("a" <= base <= "z" or base in "[\\]^_"):
                raise ValueError(f"Invalid Ctrl key: {key_input!r}")
            return ord(base.upper()) & 0x1F

        if len(s) == 1:
            return ord(key_input.strip())
        raise ValueError(f"Unknown key string: {key_input!r}")

    def lookup(self, key_spec: str | int) -> Optional[str]:
        """Returns the action bound to *key_spec*, or None."""
        try:
            code = self._decode_keystring(key_spec)
        except ValueError:
            return None
        for action, codes in self.keybindings.items():
            if code in codes:
                return action
        return None

    @staticmethod
    def _key_name(code: int) -> str:
        if code < 0x20:
            return f"Ctrl-{chr(code + 0x40)}"
        return chr(code)

    @property
    def quit_key_name(self) -> str:
        return self._key_name(self.keybindings["quit"][0])

    @property
    def save_key_name(self) -> str:
        return self._key_name(self.keybindings["save_file"][0])

    def help_text(self) -> str:
        return f"{self.quit_key_name} - Quit | {self.save_key_name} - Save"

    def _setup_action_map(self) -> dict[KeyOp, Callable[[], bool]]:
        s = self.session
        return {
            KeyOp.NEWLINE: s.handle_enter,
            KeyOp.BACKSPACE: s.handle_backspace,
            KeyOp.DELETE: s.handle_delete,
            KeyOp.UP: s.handle_up,
            KeyOp.DOWN: s.handle_down,
            KeyOp.LEFT: s.handle_left,
            KeyOp.RIGHT: s.handle_right,
            KeyOp.HOME: s.handle_home,
            KeyOp.END: s.handle_end,
            KeyOp.PAGE_UP: s.handle_page_up,
            KeyOp.PAGE_DOWN: s.handle_page_down,
            KeyOp.SAVE: self.save,
        }

    # ---------------------- Decoding --------------------
    def _read_lookahead(self) -> Optional[str]:
        byte, n = self.terminal.read_byte(self.escape_timeout_ms)
        if n != 1:
            return None
        return chr(byte)

    def _decode_escape(self) -> DecodedKey:
        """Reads the rest of an escape sequence. Consumed bytes are never replayed."""
        first = self._read_lookahead()
        second = self._read_lookahead() if first is not None else None
        if first is None or second is None:
            logging.debug("Escape sequence truncated after %r", first)
            return KeyOp.IGNORE, None

        seq = first + second
        op = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if op is not None:
            return op, None

        if first == "[" and second.isdigit():
            third = self._read_lookahead()
            if third == "~" and second in self.EXTENDED_KEY_MAP:
                return self.EXTENDED_KEY_MAP[second], None
            logging.debug("Unknown extended sequence ESC %s%s", seq, third or "")
            return KeyOp.IGNORE, None

        logging.debug("Unknown escape sequence ESC %s", seq)
        return KeyOp.IGNORE, None

    def _decode_utf8(self, lead: int) -> DecodedKey:
        """Collects the continuation bytes of a multi-byte UTF-8 character."""
        if lead >= 0xF0:
            needed = 3
        elif lead >= 0xE0:
            needed = 2
        elif lead >= 0xC0:
            needed = 1
        else:
            return KeyOp.IGNORE, None

        data = bytearray([lead])
        for _ in range(needed):
            byte, n = self.terminal.read_byte(self.escape_timeout_ms)
            if n != 1:
                logging.debug("UTF-8 sequence truncated after %r", bytes(data))
                return KeyOp.IGNORE, None
            if not 0x80 <= byte <= 0xBF:
                # Stray lead byte: drop it and decode the byte that interrupted it.
                logging.debug("Dropped stray UTF-8 lead byte 0x%02X", lead)
                return self.decode_byte(byte)
            data.append(byte)

        try:
            ch = data.decode("utf-8")
        except UnicodeDecodeError:
            logging.debug("Invalid UTF-8 sequence %r", bytes(data))
            return KeyOp.IGNORE, None
        if len(ch) != 1 or not ch.isprintable():
            return KeyOp.IGNORE, None
        return KeyOp.CHAR, ch

    def decode_byte(self, byte: int) -> DecodedKey:
        """Maps one input byte (plus any bytes it pulls in) to a logical key."""
        if byte == ESC:
            return self._decode_escape()
        if byte in self.keybindings["quit"]:
            return KeyOp.QUIT, None
        if byte in self.keybindings["save_file"]:
            return KeyOp.SAVE, None
        if byte in BACKSPACE_CODES:
            return KeyOp.BACKSPACE, None
        if byte in NEWLINE_CODES:
            return KeyOp.NEWLINE, None
        if byte == TAB:
            return KeyOp.CHAR, "\t"
        if byte < 0x20:
            return KeyOp.IGNORE, None
        if byte >= 0x80:
            return self._decode_utf8(byte)
        return KeyOp.CHAR, chr(byte)

    def read_key(self) -> Optional[DecodedKey]:
        """Blocks for the next key. Returns None when the read was interrupted."""
        byte, n = self.terminal.read_byte(None)
        if n != 1:
            return None
        return self.decode_byte(byte)

    # ---------------------- Dispatch --------------------
    def process_key(self) -> bool:
        """Reads and handles one key.

        Returns:
            bool: False if no key was read (interrupted read), True otherwise.
        """
        key = self.read_key()
        if key is None:
            return False
        self.handle_key(*key)
        return True

    def handle_key(self, op: KeyOp, ch: Optional[str] = None) -> None:
        KEY_LOGGER.debug("key op=%s char=%r mode=%s", op.name, ch, self.mode.name)
        if self.mode is InputMode.SAVE_AS:
            self._dispatch_save_as(op, ch)
        else:
            self._dispatch_normal(op, ch)

    def _dispatch_normal(self, op: KeyOp, ch: Optional[str]) -> None:
        if op is KeyOp.QUIT:
            self.session.request_quit()
            return

        self.session.reset_quit_counter()
        self.session.clear_transient_status()

        if op is KeyOp.CHAR and ch:
            self.session.insert_text(ch)
            return
        action = self.action_map.get(op)
        if action is not None:
            action()
        else:
            logging.debug("Ignored key op %s", op.name)

    def save(self) -> bool:
        """Saves the document, prompting for a filename when there is none."""
        if self.session.filename:
            return self.session.save_file()
        self.mode = InputMode.SAVE_AS
        self.pending_filename = ""
        self._show_prompt()
        logging.debug("Entered SAVE_AS mode")
        return False

    def _show_prompt(self) -> None:
        self.session.set_status_message(f"Save as: {self.pending_filename}", transient=False)

    def _leave_save_as(self) -> None:
        self.mode = InputMode.NORMAL
        self.pending_filename = ""
        self.session.reset_status()

    def _dispatch_save_as(self, op: KeyOp, ch: Optional[str]) -> None:
        if op is KeyOp.QUIT:
            logging.debug("SAVE_AS cancelled")
            self._leave_save_as()
            return

        if op is KeyOp.NEWLINE:
            if not self.pending_filename:
                return
            self.session.filename = self.pending_filename
            self._leave_save_as()
            self.session.save_file()
            return

        if op is KeyOp.BACKSPACE:
            self.pending_filename = self.pending_filename[:-1]
        elif op is KeyOp.CHAR and ch and ch.isprintable():
            self.pending_filename += ch
        else:
            return
        self._show_prompt()
