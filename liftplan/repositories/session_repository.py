"""Workout session history store."""
from __future__ import annotations

import logging
from threading import RLock
from typing import Protocol
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from liftplan.core.exceptions import PersistenceError
from liftplan.models.session import WorkoutSession
from liftplan.repositories.persistence import Persistence

logger = logging.getLogger(__name__)

SESSIONS_KEY = "workout_sessions"

_sessions_adapter = TypeAdapter(list[WorkoutSession])


class SessionStore(Protocol):
    def fetch_all(self) -> list[WorkoutSession]:
        """All sessions, newest first."""
        ...

    def save(self, session: WorkoutSession) -> None:
        ...

    def delete(self, session_id: UUID) -> None:
        ...


class SessionRepository:
    """Session history persisted as a single document.

    Saving a session whose id already exists replaces it in place.
    """

    def __init__(self, persistence: Persistence, key: str = SESSIONS_KEY):
        self._persistence = persistence
        self._key = key
        self._lock = RLock()
        self._sessions: list[WorkoutSession] | None = None

    def _load(self) -> list[WorkoutSession]:
        if self._sessions is None:
            raw = self._persistence.load(self._key)
            if raw is None:
                self._sessions = []
            else:
                try:
                    self._sessions = _sessions_adapter.validate_python(raw)
                except PydanticValidationError as e:
                    raise PersistenceError(self._key, f"Data corrupted: {e}", code="PS_CORRUPT")
            logger.debug(f"Loaded {len(self._sessions)} sessions")
        return self._sessions

    def _flush(self) -> None:
        self._persistence.save(
            self._key, _sessions_adapter.dump_python(self._sessions, mode="json")
        )

    def fetch_all(self) -> list[WorkoutSession]:
        with self._lock:
            return sorted(self._load(), key=lambda s: s.date, reverse=True)

    def save(self, session: WorkoutSession) -> None:
        with self._lock:
            sessions = self._load()
            for index, existing in enumerate(sessions):
                if existing.id == session.id:
                    sessions[index] = session
                    break
            else:
                sessions.append(session)
            self._flush()

    def delete(self, session_id: UUID) -> None:
        with self._lock:
            sessions = self._load()
            self._sessions = [s for s in sessions if s.id != session_id]
            self._flush()
