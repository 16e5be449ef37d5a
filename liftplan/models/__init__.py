"""Domain records.

Persisted records (sessions, split plan, progress) are pydantic models;
catalog exercises are frozen dataclasses.
"""
from liftplan.models.enums import (
    Difficulty,
    DayType,
    Equipment,
    EquipmentFilter,
    ExerciseFocus,
    MuscleGroup,
    SplitType,
    TrainingGroup,
    WorkoutFocus,
    WorkoutStrategy,
)
from liftplan.models.exercise import Exercise
from liftplan.models.progress import ExerciseProgress
from liftplan.models.session import ExerciseLog, ExerciseSet, WorkoutSession
from liftplan.models.split_plan import SplitDayConfig, SplitPlan

__all__ = [
    "DayType",
    "Difficulty",
    "Equipment",
    "EquipmentFilter",
    "Exercise",
    "ExerciseFocus",
    "ExerciseLog",
    "ExerciseProgress",
    "ExerciseSet",
    "MuscleGroup",
    "SplitDayConfig",
    "SplitPlan",
    "SplitType",
    "TrainingGroup",
    "WorkoutFocus",
    "WorkoutSession",
    "WorkoutStrategy",
]
