"""
Generation Types

Shared type definitions for the generation services.
Used by the scorer, selector, allocator, generator and session planner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from liftplan.models.enums import (
    EquipmentFilter,
    MuscleGroup,
    WorkoutFocus,
    WorkoutStrategy,
)
from liftplan.models.session import ExerciseLog, WorkoutSession
from liftplan.models.split_plan import SplitDayConfig

if TYPE_CHECKING:
    from liftplan.scoring.exercise_scorer import ExerciseScore


class WorkoutRequest(BaseModel):
    """Constraints for one generation call.

    ``muscle_targets`` (per-muscle set targets) takes precedence over ``day``;
    when neither is given no set allocation runs and every exercise gets the
    fixed set count.
    """

    model_config = ConfigDict(frozen=True)

    duration_minutes: int = Field(gt=0)
    target_muscles: tuple[MuscleGroup, ...] = ()
    equipment: EquipmentFilter = EquipmentFilter.BOTH
    focus: WorkoutFocus = WorkoutFocus.BALANCED
    preferred_exercise_names: tuple[str, ...] = ()
    muscle_targets: dict[MuscleGroup, float] | None = None
    day: SplitDayConfig | int | None = None


@dataclass(frozen=True)
class UserTrainingProfile:
    """Training signals derived from history, recomputed per request.

    Attributes:
        recent_sessions: Up to 10 most recent sessions, newest first
        completion_rates: Lowercase exercise name -> completed/total sets
        last_worked: Muscle -> date of the latest session training it as primary
        consecutive_days: Current unbroken run of training sessions
        weekly_volume: Muscle -> completed primary sets in the trailing window
    """

    recent_sessions: tuple[WorkoutSession, ...] = ()
    completion_rates: dict[str, float] = field(default_factory=dict)
    last_worked: dict[MuscleGroup, datetime] = field(default_factory=dict)
    consecutive_days: int = 0
    weekly_volume: dict[MuscleGroup, int] = field(default_factory=dict)

    def completion_rate(self, name: str) -> float | None:
        return self.completion_rates.get(name.lower())

    def volume_for(self, muscle: MuscleGroup) -> int:
        return self.weekly_volume.get(muscle, 0)


@dataclass(frozen=True)
class AllocationResult:
    """Set allocation outcome.

    Attributes:
        logs: Exercise logs with allocated, prescribed (uncompleted) sets
        set_counts: Exercise name -> allocated set count
        achieved: Muscle -> credited sets (1.0 primary, secondary credit otherwise)
        coverage: Mean capped fraction of each positive target reached, in [0, 1]
        total_sets: Sum of allocated sets
    """

    logs: tuple[ExerciseLog, ...]
    set_counts: dict[str, int]
    achieved: dict[MuscleGroup, float]
    coverage: float
    total_sets: int


@dataclass(frozen=True)
class GeneratedWorkout:
    """Generation output.

    ``coverage`` is None when the request carried no per-muscle targets.
    """

    exercises: tuple[ExerciseLog, ...]
    estimated_duration: int
    reasoning: str
    strategy: WorkoutStrategy | None = None
    coverage: float | None = None
    selected: tuple[ExerciseScore, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.exercises

    @property
    def total_sets(self) -> int:
        return sum(len(log.sets) for log in self.exercises)
