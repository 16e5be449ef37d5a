"""Tests for the progression state machine."""

import threading
from datetime import datetime

import pytest

from liftplan.models.progress import ExerciseProgress
from liftplan.models.session import ExerciseLog, ExerciseSet
from liftplan.services.progression_engine import (
    ProgressionAction,
    ProgressionEngine,
    last_completed_weight,
    record_session_completion,
)

from tests.conftest import NOW, days_ago, make_log, make_session


@pytest.fixture
def engine(progress_store, catalog, config):
    return ProgressionEngine(progress_store, catalog, config, clock=lambda: NOW)


def complete(engine, *logs):
    return engine.record_session_completion(make_session(NOW, *logs))


class TestRules:
    def test_advance_when_all_sets_hit_top_of_range(self, engine, progress_store):
        (update,) = complete(engine, make_log("Bench Press", reps=(10, 10, 10), weight=100))

        assert update.action == ProgressionAction.ADVANCE
        assert progress_store.get("bench press") == ExerciseProgress(
            last_weight=100, next_weight=105, fail_streak=0, last_updated=NOW
        )

    def test_isolation_uses_isolation_range(self, engine, progress_store):
        complete(engine, make_log("Barbell Curl", reps=(10, 10), weight=50))
        assert progress_store.get("Barbell Curl").next_weight == 50

        complete(engine, make_log("Barbell Curl", reps=(20, 20), weight=50))
        assert progress_store.get("Barbell Curl").next_weight == 55

    def test_fail_increments_streak(self, engine, progress_store):
        (update,) = complete(engine, make_log("Bench Press", reps=(4, 4, 8), weight=100))

        assert update.action == ProgressionAction.FAIL
        progress = progress_store.get("Bench Press")
        assert (progress.next_weight, progress.fail_streak) == (100, 1)

    def test_hold_when_few_sets_miss(self, engine, progress_store):
        (update,) = complete(engine, make_log("Bench Press", reps=(4, 8, 8, 8), weight=100))

        assert update.action == ProgressionAction.HOLD
        assert progress_store.get("Bench Press").next_weight == 100

    def test_deload_after_stall_limit(self, engine, progress_store):
        actions, streaks = [], []
        for _ in range(6):
            (update,) = complete(engine, make_log("Bench Press", reps=(3, 3, 3), weight=135))
            actions.append(update.action)
            streaks.append(progress_store.get("Bench Press").fail_streak)

        fail, deload = ProgressionAction.FAIL, ProgressionAction.DELOAD
        assert actions == [fail, fail, deload, fail, fail, deload]
        assert streaks == [1, 2, 0, 1, 2, 0]
        # 135 * 0.9 = 121.5, rounded to the nearest 5
        assert progress_store.get("Bench Press").next_weight == 120

    def test_success_resets_streak(self, engine, progress_store):
        complete(engine, make_log("Bench Press", reps=(3, 3, 3), weight=100))
        complete(engine, make_log("Bench Press", reps=(3, 3, 3), weight=100))
        complete(engine, make_log("Bench Press", reps=(10, 10, 10), weight=100))

        progress = progress_store.get("Bench Press")
        assert progress.fail_streak == 0
        assert progress.next_weight == 105

    def test_weight_comes_from_first_completed_set(self, engine, progress_store):
        log = ExerciseLog(
            name="Squat",
            sets=(
                ExerciseSet(weight=200, reps=10, completed=False),
                ExerciseSet(weight=150, reps=10),
                ExerciseSet(weight=160, reps=10),
            ),
        )
        complete(engine, log)
        assert progress_store.get("Squat").last_weight == 150
        assert progress_store.get("Squat").next_weight == 155

    def test_skips_unknown_and_incomplete_logs(self, engine, progress_store):
        updates = complete(
            engine,
            make_log("Mystery Move", reps=(10, 10)),
            make_log("Squat", reps=(10, 10), completed=False),
        )
        assert updates == []
        assert progress_store.get("Squat") is None

    def test_next_weight_never_decreases_on_success(self, engine, progress_store):
        weight = 0.0
        for _ in range(4):
            complete(engine, make_log("Squat", reps=(10, 10, 10), weight=weight))
            next_weight = progress_store.get("Squat").next_weight
            assert next_weight >= weight
            weight = next_weight
        assert weight == 20


class TestSuggestions:
    def test_round_to_increment_is_half_up(self, engine):
        assert engine.round_to_increment(102.5) == 105
        assert engine.round_to_increment(102.4) == 100
        assert engine.round_to_increment(-3) == 0

    def test_suggested_reps_is_range_minimum(self, engine, catalog):
        assert engine.suggested_reps(catalog.get("Bench Press")) == 5
        assert engine.suggested_reps(catalog.get("Lateral Raise")) == 10

    def test_suggested_weight_prefers_stored_progress(self, engine, progress_store):
        history = [make_session(days_ago(1), make_log("Squat", weight=185))]
        assert engine.suggested_weight("Squat", history) == 185

        progress_store.set(
            "Squat", ExerciseProgress(last_weight=185, next_weight=190, last_updated=NOW)
        )
        assert engine.suggested_weight("squat", history) == 190

    def test_suggested_weight_defaults_to_zero(self, engine):
        assert engine.suggested_weight("Squat", []) == 0.0

    def test_last_completed_weight_searches_newest_first(self):
        history = [
            make_session(days_ago(5), make_log("Squat", weight=175)),
            make_session(days_ago(1), make_log("Squat", weight=185)),
            make_session(days_ago(0), make_log("squat", weight=195, completed=False)),
        ]
        assert last_completed_weight("SQUAT", history) == 185
        assert last_completed_weight("Bench Press", history) is None


class CaseSensitiveStore:
    """ProgressStore that keys entries exactly as given."""

    def __init__(self):
        self.entries = {}

    def get(self, name):
        return self.entries.get(name)

    def set(self, name, progress):
        self.entries[name] = progress


def test_names_are_keyed_case_insensitively_by_the_engine(catalog, config):
    store = CaseSensitiveStore()
    engine = ProgressionEngine(store, catalog, config, clock=lambda: NOW)

    complete(engine, make_log("Bench Press", reps=(3, 3, 3), weight=135))
    complete(engine, make_log("BENCH PRESS", reps=(3, 3, 3), weight=135))

    assert list(store.entries) == ["bench press"]
    assert store.entries["bench press"].fail_streak == 2
    assert engine.suggested_weight("Bench press", []) == 135


def test_module_function_updates_store(progress_store, catalog, config):
    session = make_session(NOW, make_log("Leg Press", reps=(10, 10), weight=300))
    updates = record_session_completion(session, progress_store, catalog, config)

    assert [u.name for u in updates] == ["Leg Press"]
    assert progress_store.get("leg press").next_weight == 305
    assert progress_store.get("leg press").last_updated <= datetime.now()


def test_concurrent_completions_keep_every_update(progress_store, catalog, config):
    names = ["Squat", "Bench Press", "Deadlift", "Overhead Press", "Barbell Row"]

    def record(name):
        engine = ProgressionEngine(progress_store, catalog, config, clock=lambda: NOW)
        engine.record_session_completion(
            make_session(NOW, make_log(name, reps=(10, 10, 10), weight=100))
        )

    threads = [threading.Thread(target=record, args=(name,)) for name in names]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert set(progress_store.all()) == {name.lower() for name in names}
