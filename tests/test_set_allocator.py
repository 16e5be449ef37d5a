"""Tests for greedy set allocation."""

import pytest

from liftplan.models.enums import MuscleGroup
from liftplan.models.session import ExerciseLog, ExerciseSet
from liftplan.services.set_allocator import (
    SetAllocator,
    allocate_sets,
    coverage_of,
    max_sets_for,
    rep_range_for,
    set_ceiling,
)

M = MuscleGroup


def seed(name, reps=8, weight=100.0):
    return ExerciseLog(name=name, sets=(ExerciseSet(weight=weight, reps=reps, completed=False),))


@pytest.fixture
def allocator(small_catalog, config):
    return SetAllocator(small_catalog, config)


class TestHelpers:
    @pytest.mark.parametrize(
        "count, minutes, ceiling",
        [(3, 45, 18), (3, 10, 4), (6, 5, 6), (2, 13, 5), (2, 14, 6)],
    )
    def test_set_ceiling(self, config, count, minutes, ceiling):
        assert set_ceiling(count, minutes, config) == ceiling

    def test_caps_by_exercise_type(self, catalog, config):
        caps = config.allocation
        assert max_sets_for(catalog.get("Squat"), caps) == 5
        assert max_sets_for(catalog.get("Leg Curl"), caps) == 4
        assert max_sets_for(catalog.get("Calf Raise"), caps) == 5
        assert max_sets_for(catalog.get("Crunches"), caps) == 5
        assert max_sets_for(catalog.get("Deep Squat Hold"), caps) == 3
        assert max_sets_for(catalog.get("Farmer Carry"), caps) == 4

    def test_rep_ranges_by_exercise_type(self, catalog, config):
        ranges = config.allocation
        assert rep_range_for(catalog.get("Bench Press"), ranges) == (5, 10)
        assert rep_range_for(catalog.get("Push-ups"), ranges) == (8, 15)
        assert rep_range_for(catalog.get("Crunches"), ranges) == (12, 20)
        assert rep_range_for(catalog.get("Lateral Raise"), ranges) == (10, 18)
        assert rep_range_for(catalog.get("Cat-Cow"), ranges) == (8, 15)

    def test_coverage_ignores_non_positive_targets(self):
        assert coverage_of({}, {}) == 1.0
        assert coverage_of({M.QUADS: 0.0}, {}) == 1.0
        assert coverage_of({M.QUADS: 4.0, M.ABS: 2.0}, {M.QUADS: 2.0, M.ABS: 5.0}) == 0.75


class TestAllocate:
    def test_greedy_allocation(self, allocator):
        logs = [seed("Squat", reps=8, weight=135), seed("Leg Curl", reps=8, weight=60)]
        result = allocator.allocate(logs, {M.QUADS: 3.0, M.HAMSTRINGS: 2.0}, max_total_sets=10)

        assert result.set_counts == {"Squat": 3, "Leg Curl": 2}
        assert result.total_sets == 5
        assert result.coverage == 1.0
        assert result.achieved[M.QUADS] == 3.0
        assert result.achieved[M.GLUTES] == 1.5

        squat, curl = result.logs
        assert [s.reps for s in squat.sets] == [8, 8, 8]
        assert all(s.weight == 135 for s in squat.sets)
        # 8 is outside the isolation range, so the midpoint of 10-18 is used
        assert [s.reps for s in curl.sets] == [14, 14]
        assert not any(s.completed for log in result.logs for s in log.sets)

    def test_log_identity_and_order_preserved(self, allocator):
        logs = [seed("Leg Curl"), seed("Squat")]
        result = allocator.allocate(logs, {M.QUADS: 2.0}, max_total_sets=6)
        assert [log.id for log in result.logs] == [log.id for log in logs]

    def test_per_exercise_cap(self, allocator):
        result = allocator.allocate([seed("Leg Extension")], {M.QUADS: 50.0}, max_total_sets=20)
        assert result.set_counts == {"Leg Extension": 4}
        assert result.coverage == pytest.approx(4 / 50)

    def test_total_ceiling(self, allocator):
        result = allocator.allocate([seed("Squat")], {M.QUADS: 50.0}, max_total_sets=3)
        assert result.total_sets == 3

    def test_ceiling_below_exercise_count_keeps_one_set_each(self, allocator):
        logs = [seed("Squat"), seed("Leg Curl"), seed("Bench Press")]
        result = allocator.allocate(logs, {M.QUADS: 5.0}, max_total_sets=2)
        assert list(result.set_counts.values()) == [1, 1, 1]

    def test_rest_day_targets(self, allocator):
        result = allocator.allocate([seed("Squat"), seed("Push-ups")], {}, max_total_sets=10)
        assert result.set_counts == {"Squat": 1, "Push-ups": 1}
        assert result.coverage == 1.0

    def test_unloaded_exercises_carry_no_weight(self, allocator):
        result = allocator.allocate([seed("Push-ups", reps=12, weight=45)], {}, max_total_sets=4)
        (log,) = result.logs
        assert log.sets[0].weight == 0.0
        assert log.sets[0].reps == 12

    def test_unknown_exercise_keeps_seed(self, allocator):
        result = allocator.allocate(
            [seed("Mystery Move", reps=12, weight=40), seed("Squat")],
            {M.QUADS: 4.0},
            max_total_sets=8,
        )
        mystery = result.logs[0]
        assert len(mystery.sets) == 1
        assert (mystery.sets[0].reps, mystery.sets[0].weight) == (12, 40)
        assert result.set_counts["Squat"] == 4

    def test_log_without_sets_uses_default_seed(self, allocator):
        result = allocator.allocate([ExerciseLog(name="Leg Curl")], {M.HAMSTRINGS: 1.0}, 4)
        assert result.logs[0].sets[0].reps == 10
        assert result.logs[0].sets[0].weight == 0.0

    def test_empty_logs(self, allocator):
        result = allocator.allocate([], {M.QUADS: 5.0}, max_total_sets=10)
        assert result.logs == ()
        assert result.coverage == 0.0

    def test_ties_go_to_earlier_exercise(self, allocator):
        logs = [seed("Leg Extension"), seed("Squat")]
        result = allocator.allocate(logs, {M.QUADS: 4.0}, max_total_sets=10)
        assert result.set_counts == {"Leg Extension": 3, "Squat": 1}

    def test_inputs_not_modified(self, allocator):
        logs = [seed("Squat")]
        allocator.allocate(logs, {M.QUADS: 5.0}, max_total_sets=10)
        assert len(logs[0].sets) == 1


class TestAllocationProperties:
    @pytest.mark.parametrize("ceiling", [1, 4, 9, 20, 40])
    def test_bounds(self, catalog, config, ceiling):
        names = ["Squat", "Bench Press", "Lat Pulldown", "Lateral Raise", "Crunches", "Cat-Cow"]
        targets = {M.QUADS: 6.0, M.CHEST_LOWER: 5.0, M.BACK_WIDTH: 4.0, M.SHOULDER_SIDE: 3.0, M.ABS: 8.0}
        result = allocate_sets([seed(n) for n in names], targets, ceiling, catalog, config)

        assert 0.0 <= result.coverage <= 1.0
        assert result.total_sets <= max(ceiling, len(names))
        for name in names:
            count = result.set_counts[name]
            assert 1 <= count <= max_sets_for(catalog.get(name), config.allocation)

    def test_deterministic(self, catalog, config):
        logs = [seed("Squat"), seed("Romanian Deadlift"), seed("Leg Curl")]
        targets = {M.QUADS: 5.0, M.HAMSTRINGS: 5.0, M.GLUTES: 4.0}
        first = allocate_sets(logs, targets, 12, catalog, config)
        second = allocate_sets(logs, targets, 12, catalog, config)
        assert first.set_counts == second.set_counts
        assert first.coverage == second.coverage
