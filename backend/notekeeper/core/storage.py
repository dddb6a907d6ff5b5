"""
Device-local key-value storage.

The note store receives one of these handles at construction instead of
reaching for a global. Values are opaque strings; a single `set_item` call
either fully replaces the value or leaves the old one in place.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from notekeeper.core.exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """Async-storage style string store addressed by key."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        ...


class MemoryKeyValueStorage:
    """Dict-backed storage. Contents die with the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class FileKeyValueStorage:
    """One UTF-8 file per key inside a directory.

    Keys are percent-encoded into file names, so `@notes_app_storage`
    becomes `%40notes_app_storage`. Writes go through a temp file in the
    same directory followed by `os.replace`.

    Bytes that are not valid UTF-8 come back as lone surrogates
    (`surrogateescape`) and are written back unchanged, so a damaged file
    can still be read and moved aside instead of failing every read.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / quote(key, safe="")

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read storage key %s from %s: %s", key, path, e)
            raise StorageReadError() from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except (OSError, UnicodeEncodeError) as e:
            logger.error("Failed to write storage key %s to %s: %s", key, path, e)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError() from e

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to remove storage key %s: %s", key, e)
            raise StorageWriteError("Failed to remove stored data") from e
