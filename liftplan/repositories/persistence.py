"""
Key/value document persistence.

Each key holds one JSON document. ``JsonFilePersistence`` stores it as
``<data_dir>/<key>.json`` and replaces files atomically;
``InMemoryPersistence`` keeps serialized copies in a dict so callers see the
same copy semantics as the file store.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from threading import RLock
from typing import Any, Protocol

from liftplan.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class Persistence(Protocol):
    """Load/save/delete JSON-compatible documents by key."""

    def save(self, key: str, data: Any) -> None:
        ...

    def load(self, key: str) -> Any | None:
        ...

    def delete(self, key: str) -> None:
        ...


def _encode(key: str, data: Any) -> str:
    try:
        return json.dumps(data, indent=2, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise PersistenceError(key, f"Failed to save data: {e}", code="PS_ENCODE")


def _decode(key: str, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PersistenceError(key, f"Failed to load data: {e}", code="PS_DECODE")


class InMemoryPersistence:
    """Dict-backed persistence for tests and throwaway runs."""

    def __init__(self):
        self._documents: dict[str, str] = {}
        self._lock = RLock()

    def save(self, key: str, data: Any) -> None:
        encoded = _encode(key, data)
        with self._lock:
            self._documents[key] = encoded

    def load(self, key: str) -> Any | None:
        with self._lock:
            encoded = self._documents.get(key)
        return None if encoded is None else _decode(key, encoded)

    def delete(self, key: str) -> None:
        with self._lock:
            self._documents.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._documents)


class JsonFilePersistence:
    """One JSON file per key under ``base_dir``."""

    def __init__(self, base_dir: Path | str):
        self._base_dir = Path(base_dir)
        self._lock = RLock()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, key: str) -> Path:
        return self._base_dir / f"{key}.json"

    def save(self, key: str, data: Any) -> None:
        """Write the document atomically (temp file in the same directory, then replace).

        Raises:
            PersistenceError: If the data is not JSON-serializable or the write fails.
        """
        encoded = _encode(key, data)
        path = self.path_for(key)
        with self._lock:
            try:
                self._base_dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{key}.", suffix=".tmp", dir=self._base_dir
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        f.write(encoded)
                    os.replace(tmp_name, path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as e:
                raise PersistenceError(key, f"Storage error: {e}", code="PS_FILESYSTEM")
        logger.debug(f"Saved {key} to {path}")

    def load(self, key: str) -> Any | None:
        """Read a document; a missing file yields None.

        Raises:
            PersistenceError: If the file exists but cannot be read or parsed.
        """
        path = self.path_for(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise PersistenceError(key, f"Storage error: {e}", code="PS_FILESYSTEM")
        return _decode(key, text)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        with self._lock:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise PersistenceError(key, f"Storage error: {e}", code="PS_FILESYSTEM")
