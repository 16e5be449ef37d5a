"""Tests for the duration-growing session planner."""

from datetime import date

import pytest

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.models.enums import DayType, MuscleGroup, WorkoutFocus
from liftplan.models.session import ExerciseLog, ExerciseSet
from liftplan.models.split_plan import SplitPlan
from liftplan.services.generation_types import GeneratedWorkout
from liftplan.services.session_planner import SessionPlanner
from liftplan.services.workout_generator import NO_EXERCISES_MESSAGE, WorkoutGenerator

from tests.conftest import NOW

MONDAY = date(2024, 3, 11)
WEDNESDAY = date(2024, 3, 13)


class CoverageByDuration:
    """Generator stand-in whose coverage is a function of the requested duration."""

    def __init__(self, coverage_for):
        self.coverage_for = coverage_for
        self.requests = []

    def generate(self, request, history, plan=None, now=None):
        self.requests.append(request)
        log = ExerciseLog(name="Squat", sets=(ExerciseSet(reps=5, completed=False),))
        return GeneratedWorkout(
            exercises=(log,),
            estimated_duration=3,
            reasoning="stub",
            coverage=self.coverage_for(request.duration_minutes),
        )


@pytest.fixture
def plan():
    return SplitPlan.default_plan()


class TestLoop:
    def test_grows_duration_until_goal(self, plan, config):
        fake = CoverageByDuration(lambda minutes: min(1.0, minutes / 100))
        planned = SessionPlanner(fake, config).plan_session(plan, MONDAY, [], duration_minutes=60)

        assert [a.duration_minutes for a in planned.attempts] == [60, 70, 80, 90, 100]
        assert planned.duration_minutes == 100
        assert planned.coverage == 1.0

    def test_stops_at_max_duration_and_keeps_shortest_tie(self, plan, config):
        fake = CoverageByDuration(lambda minutes: 0.5)
        planned = SessionPlanner(fake, config).plan_session(plan, MONDAY, [], duration_minutes=65)

        assert [a.duration_minutes for a in planned.attempts] == [65, 75, 85, 95, 105, 115, 120]
        assert planned.duration_minutes == 65

    def test_stops_after_max_attempts(self, plan, config):
        fake = CoverageByDuration(lambda minutes: minutes / 200)
        planned = SessionPlanner(fake, config).plan_session(plan, MONDAY, [], duration_minutes=20)

        assert len(planned.attempts) == config.planner.max_attempts
        assert planned.duration_minutes == 90

    def test_small_gains_within_tolerance_are_ignored(self, plan, config):
        fake = CoverageByDuration(lambda minutes: 0.9 + minutes / 100000)
        planned = SessionPlanner(fake, config).plan_session(plan, MONDAY, [], duration_minutes=30)
        assert planned.duration_minutes == 30

    def test_training_day_request(self, plan, config):
        fake = CoverageByDuration(lambda minutes: 1.0)
        planned = SessionPlanner(fake, config).plan_session(plan, MONDAY, [])

        request = fake.requests[0]
        assert request.duration_minutes == 65
        assert request.focus == WorkoutFocus.BALANCED
        assert request.day.day_type == DayType.UPPER
        assert planned.day.day_index == 0

    def test_rest_day_request(self, plan, config):
        fake = CoverageByDuration(lambda minutes: 1.0)
        SessionPlanner(fake, config).plan_session(plan, WEDNESDAY, [], duration_minutes=30)

        request = fake.requests[0]
        assert request.focus == WorkoutFocus.MOBILITY
        assert request.target_muscles == (
            MuscleGroup.ABS,
            MuscleGroup.GLUTES,
            MuscleGroup.HAMSTRINGS,
            MuscleGroup.SHOULDER_REAR,
            MuscleGroup.BACK_THICKNESS,
        )

    def test_rest_day_starts_from_supplied_default_duration(self, plan, config):
        fake = CoverageByDuration(lambda minutes: 1.0)
        SessionPlanner(fake, config, default_duration_minutes=35).plan_session(plan, WEDNESDAY, [])

        assert [r.duration_minutes for r in fake.requests] == [35]


class TestWithGenerator:
    def test_training_day(self, plan, catalog, progress_store, config):
        planner = SessionPlanner(WorkoutGenerator(catalog, progress_store, config), config)
        planned = planner.plan_session(plan, MONDAY, [], now=NOW)

        assert not planned.workout.is_empty
        durations = [a.duration_minutes for a in planned.attempts]
        assert durations[0] == 65
        assert durations == sorted(durations)
        assert all(d <= config.planner.max_duration_minutes for d in durations)
        best_seen = max(a.coverage for a in planned.attempts)
        assert planned.coverage >= best_seen - config.planner.coverage_tolerance

    def test_rest_day_single_attempt(self, plan, catalog, progress_store, config):
        planner = SessionPlanner(WorkoutGenerator(catalog, progress_store, config), config)
        planned = planner.plan_session(plan, WEDNESDAY, [], duration_minutes=30, now=NOW)

        assert len(planned.attempts) == 1
        assert planned.coverage == 1.0
        assert all(len(log.sets) == 1 for log in planned.workout.exercises)

    def test_empty_catalog(self, plan, progress_store, config):
        planner = SessionPlanner(WorkoutGenerator(ExerciseCatalog([]), progress_store, config), config)
        planned = planner.plan_session(plan, MONDAY, [], now=NOW)

        assert planned.workout.is_empty
        assert planned.workout.reasoning == NO_EXERCISES_MESSAGE
        assert planned.request is None
        assert planned.coverage == -1.0
        assert planned.attempts == ()
