"""
Session Planner

Caller-level loop around workout generation for a calendar date. Each
attempt is an independent generation call; the duration grows between
attempts until set allocation covers the day's targets well enough.

Loop:
1. Resolve the plan day for the date. Rest days plan a mobility session for
   the recovery muscles; training days a balanced session for the day's muscles
2. Start from the requested duration, else the recommended duration
3. Generate; stop if no exercises come back
4. Keep the attempt if its coverage beats the best by more than the tolerance,
   or ties within the tolerance at a shorter duration
5. Stop at the coverage goal or the maximum duration; otherwise add the step
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import EquipmentFilter, MuscleGroup, WorkoutFocus
from liftplan.models.session import WorkoutSession
from liftplan.models.split_plan import SplitDayConfig, SplitPlan
from liftplan.services.generation_types import GeneratedWorkout, WorkoutRequest
from liftplan.services.volume_engine import recommended_duration
from liftplan.services.workout_generator import WorkoutGenerator

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 45


@dataclass(frozen=True)
class PlanningAttempt:
    duration_minutes: int
    coverage: float
    exercise_count: int


@dataclass(frozen=True)
class PlannedSession:
    """Best generation found for a date.

    Attributes:
        day: Plan day the date resolved to
        request: Request that produced ``workout`` (None if nothing was generated)
        workout: Best workout, empty when every attempt came back empty
        coverage: Coverage of the best workout (-1.0 when nothing was generated)
        attempts: Every attempt in order
    """

    day: SplitDayConfig
    request: WorkoutRequest | None
    workout: GeneratedWorkout
    coverage: float
    attempts: tuple[PlanningAttempt, ...] = field(default_factory=tuple)

    @property
    def duration_minutes(self) -> int | None:
        return self.request.duration_minutes if self.request else None


class SessionPlanner:
    def __init__(
        self,
        generator: WorkoutGenerator,
        config: GenerationConfig | None = None,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ):
        self._generator = generator
        self._generation_config = config or get_generation_config()
        self._config = self._generation_config.planner
        self._default_duration = default_duration_minutes

    def planned_muscles(self, day: SplitDayConfig) -> tuple[MuscleGroup, ...]:
        """Day muscles, or the recovery list when the day trains none."""
        muscles = day.resolved_muscles()
        if not muscles:
            return tuple(MuscleGroup.parse(m) for m in self._config.recovery_muscles)
        return muscles

    @staticmethod
    def focus_for(day: SplitDayConfig) -> WorkoutFocus:
        return WorkoutFocus.MOBILITY if day.is_rest else WorkoutFocus.BALANCED

    def starting_duration(self, plan: SplitPlan, day: SplitDayConfig, requested: int | None) -> int:
        if requested is not None:
            return requested
        recommended = recommended_duration(plan, day, self._generation_config)
        return recommended if recommended > 0 else self._default_duration

    def plan_session(
        self,
        plan: SplitPlan,
        on: date,
        history: Iterable[WorkoutSession],
        duration_minutes: int | None = None,
        equipment: EquipmentFilter = EquipmentFilter.BOTH,
        preferred_exercise_names: Iterable[str] = (),
        now: datetime | None = None,
    ) -> PlannedSession:
        """Plan the session for a date.

        Args:
            plan: Weekly split plan.
            on: Calendar date to plan for.
            history: Completed sessions (read only).
            duration_minutes: Starting duration; defaults to the recommended one.
            equipment: Equipment filter for every attempt.
            preferred_exercise_names: Familiar exercises to favour.
            now: Reference time for generation (defaults to the current time).
        """
        history = list(history)
        day = plan.day_for_date(on)
        muscles = self.planned_muscles(day)
        focus = self.focus_for(day)
        preferred = tuple(preferred_exercise_names)

        duration = self.starting_duration(plan, day, duration_minutes)
        best_workout = GeneratedWorkout(exercises=(), estimated_duration=0, reasoning="")
        best_request: WorkoutRequest | None = None
        best_coverage = -1.0
        best_duration = duration
        attempts: list[PlanningAttempt] = []
        tolerance = self._config.coverage_tolerance

        for attempt in range(self._config.max_attempts):
            request = WorkoutRequest(
                duration_minutes=duration,
                target_muscles=muscles,
                equipment=equipment,
                focus=focus,
                preferred_exercise_names=preferred,
                day=day,
            )
            workout = self._generator.generate(request, history, plan, now)
            if workout.is_empty:
                logger.info(f"Attempt {attempt + 1} produced no exercises: {workout.reasoning}")
                if best_request is None:
                    best_workout = workout
                break

            coverage = workout.coverage if workout.coverage is not None else 1.0
            attempts.append(PlanningAttempt(duration, coverage, len(workout.exercises)))
            logger.debug(f"Attempt {attempt + 1}: duration={duration} coverage={coverage:.3f}")

            is_better = coverage > best_coverage + tolerance
            is_tie_and_shorter = abs(coverage - best_coverage) <= tolerance and duration < best_duration
            if is_better or is_tie_and_shorter:
                best_workout = workout
                best_request = request
                best_coverage = coverage
                best_duration = duration

            if coverage >= self._config.coverage_goal:
                break
            if duration >= self._config.max_duration_minutes:
                break
            duration = min(self._config.max_duration_minutes, duration + self._config.duration_step_minutes)

        logger.info(
            f"Planned {day.day_type.value} session for {on.isoformat()}: "
            f"{len(best_workout.exercises)} exercises, coverage={best_coverage:.3f}, "
            f"attempts={len(attempts)}"
        )
        return PlannedSession(
            day=day,
            request=best_request,
            workout=best_workout,
            coverage=best_coverage,
            attempts=tuple(attempts),
        )
