"""Enumerations shared by the catalog, history records and the engine."""
from __future__ import annotations

from enum import Enum

from liftplan.core.exceptions import ValidationError


class TrainingGroup(str, Enum):
    """Coarse muscle grouping used to spread weekly targets evenly."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    ABS = "abs"


class MuscleGroup(str, Enum):
    CHEST_UPPER = "chest_upper"
    CHEST_LOWER = "chest_lower"
    BACK_WIDTH = "back_width"
    BACK_THICKNESS = "back_thickness"
    SHOULDER_FRONT = "shoulder_front"
    SHOULDER_SIDE = "shoulder_side"
    SHOULDER_REAR = "shoulder_rear"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    ABS = "abs"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def training_group(self) -> TrainingGroup:
        return _TRAINING_GROUPS[self]

    @classmethod
    def parse(cls, text: str) -> "MuscleGroup":
        """Resolve a muscle from its value, member name or display name.

        Matching is case-insensitive and treats spaces/hyphens as underscores.

        Raises:
            ValidationError: If the text names no muscle.
        """
        normalized = text.strip().lower()
        slug = normalized.replace("-", "_").replace(" ", "_")
        for muscle in cls:
            if slug in (muscle.value, muscle.name.lower()) or normalized == muscle.display_name.lower():
                return muscle
        raise ValidationError("muscle", f"unknown muscle group '{text}'")


_DISPLAY_NAMES: dict[MuscleGroup, str] = {
    MuscleGroup.CHEST_UPPER: "Chest (Upper)",
    MuscleGroup.CHEST_LOWER: "Chest (Lower)",
    MuscleGroup.BACK_WIDTH: "Back (Width)",
    MuscleGroup.BACK_THICKNESS: "Back (Thickness)",
    MuscleGroup.SHOULDER_FRONT: "Shoulders (Front)",
    MuscleGroup.SHOULDER_SIDE: "Shoulders (Side)",
    MuscleGroup.SHOULDER_REAR: "Shoulders (Rear)",
    MuscleGroup.QUADS: "Quads",
    MuscleGroup.HAMSTRINGS: "Hamstrings",
    MuscleGroup.GLUTES: "Glutes",
    MuscleGroup.CALVES: "Calves",
    MuscleGroup.BICEPS: "Biceps",
    MuscleGroup.TRICEPS: "Triceps",
    MuscleGroup.ABS: "Abs",
}

_TRAINING_GROUPS: dict[MuscleGroup, TrainingGroup] = {
    MuscleGroup.CHEST_UPPER: TrainingGroup.CHEST,
    MuscleGroup.CHEST_LOWER: TrainingGroup.CHEST,
    MuscleGroup.BACK_WIDTH: TrainingGroup.BACK,
    MuscleGroup.BACK_THICKNESS: TrainingGroup.BACK,
    MuscleGroup.SHOULDER_FRONT: TrainingGroup.SHOULDERS,
    MuscleGroup.SHOULDER_SIDE: TrainingGroup.SHOULDERS,
    MuscleGroup.SHOULDER_REAR: TrainingGroup.SHOULDERS,
    MuscleGroup.QUADS: TrainingGroup.QUADS,
    MuscleGroup.HAMSTRINGS: TrainingGroup.HAMSTRINGS,
    MuscleGroup.GLUTES: TrainingGroup.GLUTES,
    MuscleGroup.CALVES: TrainingGroup.CALVES,
    MuscleGroup.BICEPS: TrainingGroup.BICEPS,
    MuscleGroup.TRICEPS: TrainingGroup.TRICEPS,
    MuscleGroup.ABS: TrainingGroup.ABS,
}


def muscles_in_group(group: TrainingGroup) -> list[MuscleGroup]:
    """All muscles of a training group, in declaration order."""
    return [muscle for muscle in MuscleGroup if muscle.training_group == group]


class Equipment(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    BAND = "band"

    @property
    def is_unloaded(self) -> bool:
        """Bodyweight and band work carry no external load."""
        return self in (Equipment.BODYWEIGHT, Equipment.BAND)


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExerciseFocus(str, Enum):
    STRENGTH = "strength"
    MOBILITY = "mobility"


class SplitType(str, Enum):
    PUSH_PULL_LEGS = "push_pull_legs"
    UPPER_LOWER = "upper_lower"
    FULL_BODY = "full_body"
    HYBRID = "hybrid"


class DayType(str, Enum):
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    UPPER = "upper"
    LOWER = "lower"
    FULL = "full"
    REST = "rest"


class EquipmentFilter(str, Enum):
    """Equipment availability for a generation request."""

    BODYWEIGHT = "bodyweight"
    GYM = "gym"
    BOTH = "both"

    def allows(self, equipment: Equipment) -> bool:
        if self is EquipmentFilter.BODYWEIGHT:
            return equipment == Equipment.BODYWEIGHT
        if self is EquipmentFilter.GYM:
            return equipment != Equipment.BODYWEIGHT
        return True


class WorkoutFocus(str, Enum):
    STRENGTH = "strength"
    BALANCED = "balanced"
    MOBILITY = "mobility"


class WorkoutStrategy(str, Enum):
    PROGRESSIVE = "progressive"
    DELOAD = "deload"
    BALANCING = "balancing"
