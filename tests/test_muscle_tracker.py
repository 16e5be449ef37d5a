"""Tests for weekly muscle volume tracking."""

import pytest

from liftplan.models.enums import MuscleGroup
from liftplan.services.muscle_tracker import MuscleVolume, calculate_weekly_volume

from tests.conftest import NOW, days_ago, make_log, make_session


def test_primary_and_secondary_credit(catalog, config):
    sessions = [make_session(days_ago(1), make_log("Bench Press", reps=(10, 10, 10), weight=100))]
    volumes = calculate_weekly_volume(sessions, catalog, NOW, config)

    chest = volumes[MuscleGroup.CHEST_LOWER]
    triceps = volumes[MuscleGroup.TRICEPS]
    assert (chest.sets, chest.total_volume) == (3.0, 3000.0)
    assert (triceps.sets, triceps.total_volume) == (1.5, 1500.0)
    assert MuscleGroup.QUADS not in volumes


def test_window_and_incomplete_sets(catalog, config):
    sessions = [
        make_session(days_ago(2), make_log("Squat", reps=(5, 5), weight=200)),
        make_session(days_ago(3), make_log("Squat", reps=(5,), completed=False)),
        make_session(days_ago(8), make_log("Squat", reps=(5, 5, 5), weight=200)),
    ]
    volumes = calculate_weekly_volume(sessions, catalog, NOW, config)
    assert volumes[MuscleGroup.QUADS].sets == 2.0
    assert volumes[MuscleGroup.QUADS].total_volume == 2000.0


def test_free_text_names_resolve_by_substring(catalog, config):
    sessions = [make_session(days_ago(1), make_log("Paused Bench Press", reps=(8,), weight=50))]
    volumes = calculate_weekly_volume(sessions, catalog, NOW, config)
    assert volumes[MuscleGroup.CHEST_LOWER].sets == 1.0


def test_unknown_names_are_skipped(catalog, config):
    sessions = [make_session(days_ago(1), make_log("Sled Push"))]
    assert calculate_weekly_volume(sessions, catalog, NOW, config) == {}


@pytest.mark.parametrize("sets, target, expected", [(5, 10, 50.0), (15, 10, 100.0), (3, 0, 0.0)])
def test_progress_percentage(sets, target, expected):
    assert MuscleVolume(MuscleGroup.ABS, sets=sets).progress(target) == expected
