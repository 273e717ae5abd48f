# lined/core/FileStore.py
"""lined.core.FileStore
=======================

Loading and saving documents.

Loading detects the file encoding with ``chardet`` and then tries an ordered
list of (encoding, error-policy) candidates, the same strategy the editor has
always used for opening files. Lines are split on ``\\n`` only, so any ``\\r``
of a CRLF file stays in the raw text and is written back unchanged.

Saving writes a sibling temporary file and atomically replaces the target
with ``os.replace``. If anything fails the previous file is left as it was.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import chardet

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75


class FileStoreError(Exception):
    """Raised when a document cannot be loaded or saved.

    Attributes:
        path (str): The file that was being read or written.
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class FileStore:
    """Reads and writes documents as ordered lists of raw lines."""

    def __init__(self, default_encoding: str = "utf-8") -> None:
        self.default_encoding = default_encoding

    def _candidate_encodings(self, sample: bytes) -> list[tuple[str, str]]:
        """Builds the ordered, de-duplicated list of decodings to attempt."""
        result = chardet.detect(sample)
        guess: Optional[str] = result.get("encoding")
        confidence = result.get("confidence") or 0.0
        logging.debug("chardet guessed %r (confidence %.2f)", guess, confidence)

        ordered: list[tuple[str, str]] = []
        if guess and confidence >= CHARDET_MIN_CONFIDENCE:
            ordered.append((guess, "strict"))
        ordered += [(self.default_encoding, "strict"), ("utf-8", "strict"), ("latin-1", "strict")]

        seen: set[tuple[str, str]] = set()
        unique: list[tuple[str, str]] = []
        for enc, policy in ordered:
            key = (enc.lower(), policy)
            if key not in seen:
                seen.add(key)
                unique.append((enc, policy))
        return unique

    def load(self, path: str) -> tuple[list[str], str]:
        """Loads *path* and returns its lines together with the encoding used.

        Raises:
            FileStoreError: The file does not exist, is a directory, cannot be
                read, or cannot be decoded.
        """
        try:
            data = Path(path).read_bytes()
        except FileNotFoundError as e:
            raise FileStoreError(f"File not found: {path}", path=path) from e
        except OSError as e:
            raise FileStoreError(f"Cannot read {path}: {e.strerror or e}", path=path) from e

        if not data:
            logging.info("File '%s' is empty", path)
            return [], self.default_encoding

        text: Optional[str] = None
        used = self.default_encoding
        for enc, policy in self._candidate_encodings(data[:CHARDET_SAMPLE_SIZE]):
            try:
                text = data.decode(enc, errors=policy)
                used = enc
                break
            except (UnicodeDecodeError, LookupError) as e:
                logging.warning("Failed to decode '%s' as %s: %s", path, enc, e)

        if text is None:
            raise FileStoreError(f"Cannot decode {path}", path=path)
        if used.lower() == "ascii":
            # ASCII content saves byte-identically as UTF-8 and can then take any character.
            used = "utf-8"

        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()
        logging.info("Loaded %d lines from '%s' (%s)", len(lines), path, used)
        return lines, used

    def save(self, path: str, lines: list[str], encoding: Optional[str] = None) -> int:
        """Writes *lines* to *path*, each followed by a newline.

        Returns:
            int: Number of bytes written.

        Raises:
            FileStoreError: The content cannot be encoded or written. The
                existing file at *path*, if any, is untouched.
        """
        encoding = encoding or self.default_encoding
        try:
            payload = "".join(line + "\n" for line in lines).encode(encoding)
        except (UnicodeEncodeError, LookupError) as e:
            raise FileStoreError(f"Cannot encode {path} as {encoding}: {e}", path=path) from e

        target = os.path.abspath(path)
        directory = os.path.dirname(target) or "."
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".lined-", dir=directory)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            if os.path.exists(target):
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            logging.error("Failed to write file '%s': %s", path, e, exc_info=True)
            raise FileStoreError(f"Cannot write {path}: {e.strerror or e}", path=path) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logging.debug("Successfully wrote %d bytes to '%s'", len(payload), path)
        return len(payload)
