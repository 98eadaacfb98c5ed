"""
Key-value stores for the dungeon battler.

A store holds text values under string keys. The file store keeps one JSON
document per key in a directory, written atomically so a crash never leaves
a half-written save behind.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from dungeon.core.errors import PersistenceFailure

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """A durable mapping from keys to text values."""

    def get(self, key: str) -> str | None:
        """Returns the value under the key, or None if there is none."""
        ...

    def set(self, key: str, value: str) -> None:
        """Stores the value under the key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Removes the key, if present."""
        ...


class MemoryKeyValueStore:
    """In-memory store, for tests and runs that should leave no trace."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FileKeyValueStore:
    """
    Store keeping each key in its own ``<key>.json`` file.

    Args:
        directory (Path):
            Where the files live. Created on the first write.

    Raises:
        PersistenceFailure: From every operation, when the file system
            refuses it.

    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Returns the file backing the key."""
        if not _KEY_PATTERN.match(key):
            raise PersistenceFailure(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceFailure(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceFailure(f"Could not write {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceFailure(f"Could not delete {path}: {e}") from e
