"""File-backed key-value store for per-user UI data.

The store mirrors the semantics of browser ``localStorage``: keys and values
are strings, values are usually JSON documents serialised by the caller, and
writes overwrite unconditionally. Everything lives in a single JSON object on
disk, written through a temporary file so a crash never leaves a half-written
store behind.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

_LOCKS: dict[Path, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """Return the process-wide lock serialising writers of *path*."""
    key = path.resolve()
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(key, threading.Lock())


class LocalStore:
    """Manage a string-to-string mapping persisted as one JSON file."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Path to the JSON file (created lazily on first write)
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = _lock_for(self.path)
        logger.debug(f"Initialized local store at {self.path}")

    def _read_all(self) -> dict[str, str]:
        """Load the whole mapping from disk.

        A missing file is an empty store. A file that is not UTF-8 JSON holding an
        object is also treated as empty (and logged) so that one bad write
        cannot lock the user out of saving new values.

        Raises:
            OSError: If the file exists but cannot be read
        """
        if not self.path.exists():
            return {}

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Local store {self.path} is not valid UTF-8, ignoring it: {e}")
            return {}

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Local store {self.path} is not valid JSON, ignoring it: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Local store {self.path} does not hold an object, ignoring it")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        """Persist the whole mapping atomically.

        Raises:
            OSError: If the file cannot be written
        """
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, overwriting any previous value."""
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> bool:
        """Remove *key* from the store.

        Returns:
            True if the key existed, False otherwise
        """
        with self._lock:
            data = self._read_all()
            if key not in data:
                return False
            del data[key]
            self._write_all(data)
        return True

    def keys(self) -> list[str]:
        """Return all keys currently stored."""
        return list(self._read_all())

    def clear(self) -> None:
        """Remove every key."""
        with self._lock:
            self._write_all({})
