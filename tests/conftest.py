"""Shared fixtures: fixed clock, catalogs, stores and session builders."""

from datetime import datetime, timedelta

import pytest

from liftplan.catalog.exercise_catalog import ExerciseCatalog, default_catalog
from liftplan.config.generation_config_loader import GenerationConfig
from liftplan.models.enums import Equipment, ExerciseFocus, MuscleGroup
from liftplan.models.exercise import Exercise
from liftplan.models.session import ExerciseLog, ExerciseSet, WorkoutSession
from liftplan.repositories.persistence import InMemoryPersistence
from liftplan.repositories.progress_repository import ProgressRepository

# Wednesday evening
NOW = datetime(2024, 3, 13, 18, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    """Default generation config, independent of any file on disk."""
    return GenerationConfig()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def small_catalog():
    """Six exercises covering loaded, unloaded and mobility work."""
    M = MuscleGroup
    return ExerciseCatalog(
        [
            Exercise("Squat", (M.QUADS,), (M.GLUTES, M.ABS), Equipment.BARBELL, is_compound=True),
            Exercise("Leg Curl", (M.HAMSTRINGS,), equipment=Equipment.MACHINE),
            Exercise("Leg Extension", (M.QUADS,), equipment=Equipment.MACHINE),
            Exercise("Bench Press", (M.CHEST_LOWER,), (M.TRICEPS,), Equipment.BARBELL, is_compound=True),
            Exercise("Push-ups", (M.CHEST_LOWER,), (M.TRICEPS,), Equipment.BODYWEIGHT, is_compound=True),
            Exercise(
                "Deep Squat Hold",
                (M.QUADS, M.GLUTES),
                equipment=Equipment.BODYWEIGHT,
                focus=ExerciseFocus.MOBILITY,
            ),
        ]
    )


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def progress_store(persistence):
    return ProgressRepository(persistence)


def make_log(name, reps=(10, 10, 10), weight=100.0, completed=True):
    """Exercise log with one set per entry in ``reps``."""
    return ExerciseLog(
        name=name,
        sets=tuple(ExerciseSet(weight=weight, reps=r, completed=completed) for r in reps),
    )


def make_session(when, *logs):
    return WorkoutSession(date=when, exercises=tuple(logs))


def days_ago(days, hours=0):
    return NOW - timedelta(days=days, hours=hours)


@pytest.fixture
def session_builder():
    """Build a session ``days`` before NOW from (name, reps) pairs."""

    def build(days, *entries, weight=100.0):
        logs = [make_log(name, reps=reps, weight=weight) for name, reps in entries]
        return make_session(days_ago(days), *logs)

    return build
