"""Per-exercise progression state store, keyed by lowercase exercise name."""
from __future__ import annotations

from threading import RLock
from typing import Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from liftplan.core.exceptions import PersistenceError
from liftplan.models.progress import ExerciseProgress
from liftplan.repositories.persistence import Persistence

PROGRESS_KEY = "exercise_progress_v1"

_progress_adapter = TypeAdapter(dict[str, ExerciseProgress])


class ProgressStore(Protocol):
    def get(self, name: str) -> ExerciseProgress | None:
        ...

    def set(self, name: str, progress: ExerciseProgress) -> None:
        ...


class ProgressRepository:
    """Progress entries persisted as one ``{name: progress}`` document.

    Every write is a load-modify-save under an ``RLock``; ``update_many``
    applies several entries with a single save.
    """

    def __init__(self, persistence: Persistence, key: str = PROGRESS_KEY):
        self._persistence = persistence
        self._key = key
        self._lock = RLock()
        self._entries: dict[str, ExerciseProgress] | None = None

    def _load(self) -> dict[str, ExerciseProgress]:
        if self._entries is None:
            raw = self._persistence.load(self._key)
            try:
                self._entries = {} if raw is None else _progress_adapter.validate_python(raw)
            except PydanticValidationError as e:
                raise PersistenceError(self._key, f"Data corrupted: {e}", code="PS_CORRUPT")
        return self._entries

    def _flush(self) -> None:
        self._persistence.save(
            self._key, _progress_adapter.dump_python(self._entries, mode="json")
        )

    def get(self, name: str) -> ExerciseProgress | None:
        with self._lock:
            return self._load().get(name.lower())

    def set(self, name: str, progress: ExerciseProgress) -> None:
        with self._lock:
            self._load()[name.lower()] = progress
            self._flush()

    def update_many(self, entries: dict[str, ExerciseProgress]) -> None:
        with self._lock:
            loaded = self._load()
            for name, progress in entries.items():
                loaded[name.lower()] = progress
            self._flush()

    def all(self) -> dict[str, ExerciseProgress]:
        with self._lock:
            return dict(self._load())
