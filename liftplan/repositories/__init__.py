"""Stores for history, progression state and settings.

Each store works over any ``Persistence``: ``InMemoryPersistence`` for tests,
``JsonFilePersistence`` for a data directory on disk.
"""
from liftplan.repositories.persistence import (
    InMemoryPersistence,
    JsonFilePersistence,
    Persistence,
)
from liftplan.repositories.progress_repository import ProgressRepository, ProgressStore
from liftplan.repositories.session_repository import SessionRepository, SessionStore
from liftplan.repositories.settings_repository import SettingsRepository, SettingsStore

__all__ = [
    "InMemoryPersistence",
    "JsonFilePersistence",
    "Persistence",
    "ProgressRepository",
    "ProgressStore",
    "SessionRepository",
    "SessionStore",
    "SettingsRepository",
    "SettingsStore",
]
