"""Catalog exercise record."""
from __future__ import annotations

from dataclasses import dataclass

from liftplan.core.exceptions import ValidationError
from liftplan.models.enums import (
    Difficulty,
    Equipment,
    ExerciseFocus,
    MuscleGroup,
)


@dataclass(frozen=True)
class Exercise:
    """Immutable catalog entry.

    Attributes:
        name: Display name, unique within a catalog (case-insensitive)
        primary_muscles: Muscles receiving full set credit (non-empty)
        secondary_muscles: Assisting muscles, disjoint from primary
        equipment: Equipment the movement needs
        is_compound: Catalog compound flag (drives caps and rep ranges)
        difficulty: Skill level
        focus: Strength or mobility tag
    """

    name: str
    primary_muscles: tuple[MuscleGroup, ...]
    secondary_muscles: tuple[MuscleGroup, ...] = ()
    equipment: Equipment = Equipment.BODYWEIGHT
    is_compound: bool = False
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    focus: ExerciseFocus = ExerciseFocus.STRENGTH

    def __post_init__(self):
        if not self.name.strip():
            raise ValidationError("name", "exercise name must not be empty")
        object.__setattr__(self, "primary_muscles", tuple(self.primary_muscles))
        object.__setattr__(self, "secondary_muscles", tuple(self.secondary_muscles))
        if not self.primary_muscles:
            raise ValidationError(
                "primary_muscles", f"{self.name} must have at least one primary muscle"
            )
        overlap = set(self.primary_muscles) & set(self.secondary_muscles)
        if overlap:
            raise ValidationError(
                "secondary_muscles",
                f"{self.name} lists {sorted(m.value for m in overlap)} as both primary and secondary",
            )

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()

    @property
    def all_muscles(self) -> tuple[MuscleGroup, ...]:
        return self.primary_muscles + self.secondary_muscles

    @property
    def is_multi_primary(self) -> bool:
        """More than one primary muscle, scored as a compound movement."""
        return len(self.primary_muscles) > 1

    @property
    def is_mobility(self) -> bool:
        return self.focus == ExerciseFocus.MOBILITY

    @property
    def is_unloaded(self) -> bool:
        return self.equipment.is_unloaded

    def targets_any(self, muscles) -> bool:
        """True when any primary or secondary muscle is in ``muscles``."""
        return any(muscle in muscles for muscle in self.all_muscles)
