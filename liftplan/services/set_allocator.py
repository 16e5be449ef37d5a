"""
Set Allocator

Greedily distributes a total-set ceiling across selected exercises so that
credited sets approximate per-muscle targets. A bounded heuristic: each step
adds one set to the exercise with the largest remaining-target gain.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Mapping, Sequence

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.config.generation_config_loader import (
    AllocationConfig,
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import Equipment, MuscleGroup
from liftplan.models.exercise import Exercise
from liftplan.models.session import ExerciseLog, ExerciseSet
from liftplan.services.generation_types import AllocationResult

logger = logging.getLogger(__name__)

DEFAULT_SEED = ExerciseSet(weight=0.0, reps=10, completed=False)


def set_ceiling(
    exercise_count: int, duration_minutes: int, config: GenerationConfig | None = None
) -> int:
    """Total-set ceiling: one set per minutes_per_set, never below the exercise count."""
    minutes_per_set = (config or get_generation_config()).allocation.minutes_per_set
    return max(exercise_count, int(math.floor(duration_minutes / minutes_per_set + 0.5)))


def max_sets_for(exercise: Exercise, config: AllocationConfig) -> int:
    caps = config.max_sets
    if exercise.is_mobility:
        return caps.mobility_compound if exercise.is_compound else caps.mobility_isolation
    if exercise.is_compound:
        return caps.strength_compound
    if MuscleGroup.ABS in exercise.primary_muscles or MuscleGroup.CALVES in exercise.primary_muscles:
        return caps.strength_isolation_small
    return caps.strength_isolation


def rep_range_for(exercise: Exercise, config: AllocationConfig) -> tuple[int, int]:
    ranges = config.rep_ranges
    if exercise.is_mobility:
        return ranges.mobility
    if exercise.is_compound:
        if exercise.equipment == Equipment.BODYWEIGHT:
            return ranges.compound_bodyweight
        return ranges.compound_loaded
    if MuscleGroup.ABS in exercise.primary_muscles:
        return ranges.abs_isolation
    return ranges.isolation


def prescribed_reps(exercise: Exercise, seed_reps: int, config: AllocationConfig) -> int:
    """Keep an in-range seed, otherwise use the range midpoint."""
    low, high = rep_range_for(exercise, config)
    if low <= seed_reps <= high:
        return seed_reps
    return (low + high) // 2


def prescribed_weight(exercise: Exercise, seed_weight: float) -> float:
    return 0.0 if exercise.is_unloaded else seed_weight


def contribution(exercise: Exercise, muscle: MuscleGroup, secondary_credit: float) -> float:
    if muscle in exercise.primary_muscles:
        return 1.0
    if muscle in exercise.secondary_muscles:
        return secondary_credit
    return 0.0


def coverage_of(targets: Mapping[MuscleGroup, float], achieved: Mapping[MuscleGroup, float]) -> float:
    """Mean of min(achieved/target, 1) over positive targets; 1.0 when there are none."""
    ratios = [
        min(achieved.get(muscle, 0.0) / target, 1.0)
        for muscle, target in targets.items()
        if target > 0
    ]
    return sum(ratios) / len(ratios) if ratios else 1.0


class SetAllocator:
    """Greedy set allocation against per-muscle targets.

    Example:
        >>> allocator = SetAllocator(catalog)
        >>> result = allocator.allocate(logs, {MuscleGroup.QUADS: 6.0}, max_total_sets=8)
        >>> 0.0 <= result.coverage <= 1.0
        True
    """

    def __init__(self, catalog: ExerciseCatalog, config: GenerationConfig | None = None):
        self._catalog = catalog
        self._config = (config or get_generation_config()).allocation

    def allocate(
        self,
        logs: Sequence[ExerciseLog],
        targets: Mapping[MuscleGroup, float],
        max_total_sets: int,
    ) -> AllocationResult:
        """Allocate sets and prescribe reps/weight.

        Args:
            logs: Selected exercises; their first set is the rep/weight seed.
            targets: Muscle -> set target for this session.
            max_total_sets: Ceiling on total sets (see ``set_ceiling``).

        Returns:
            AllocationResult with one log per input log, in input order.
        """
        if not logs:
            return AllocationResult(logs=(), set_counts={}, achieved={}, coverage=0.0, total_sets=0)

        credit = self._config.secondary_credit
        metadata: list[Exercise | None] = [self._catalog.exact(log.name) for log in logs]
        counts: list[int | None] = [None] * len(logs)
        achieved: dict[MuscleGroup, float] = defaultdict(float)
        total = 0

        def apply(exercise: Exercise) -> None:
            for muscle in exercise.primary_muscles:
                achieved[muscle] += 1.0
            for muscle in exercise.secondary_muscles:
                achieved[muscle] += credit

        for index, exercise in enumerate(metadata):
            if total >= max_total_sets:
                break
            if exercise is None:
                continue
            counts[index] = 1
            total += 1
            apply(exercise)

        while total < max_total_sets:
            best_index: int | None = None
            best_gain = 0.0
            for index, exercise in enumerate(metadata):
                if exercise is None:
                    continue
                if (counts[index] or 0) >= max_sets_for(exercise, self._config):
                    continue
                gain = 0.0
                for muscle, target in targets.items():
                    remaining = max(0.0, target - achieved.get(muscle, 0.0))
                    if remaining <= 0:
                        continue
                    gain += remaining * contribution(exercise, muscle, credit)
                # Strict comparison: ties go to the earlier exercise.
                if gain > best_gain:
                    best_gain = gain
                    best_index = index

            if best_index is None:
                break
            counts[best_index] = (counts[best_index] or 0) + 1
            total += 1
            apply(metadata[best_index])

        allocated_logs: list[ExerciseLog] = []
        set_counts: dict[str, int] = {}
        for index, log in enumerate(logs):
            desired = counts[index] or 1
            seed = log.sets[0] if log.sets else DEFAULT_SEED
            exercise = metadata[index]
            if exercise is not None:
                reps = prescribed_reps(exercise, seed.reps, self._config)
                weight = prescribed_weight(exercise, seed.weight)
            else:
                reps, weight = seed.reps, seed.weight

            sets = tuple(ExerciseSet(weight=weight, reps=reps, completed=False) for _ in range(desired))
            allocated_logs.append(log.model_copy(update={"sets": sets}))
            set_counts[log.name] = desired

        achieved_map = dict(achieved)
        coverage = coverage_of(targets, achieved_map)
        total_sets = sum(set_counts.values())
        logger.debug(
            f"Allocated {total_sets} sets over {len(logs)} exercises "
            f"(ceiling={max_total_sets}, coverage={coverage:.3f})"
        )
        return AllocationResult(
            logs=tuple(allocated_logs),
            set_counts=set_counts,
            achieved=achieved_map,
            coverage=coverage,
            total_sets=total_sets,
        )


def allocate_sets(
    logs: Sequence[ExerciseLog],
    targets: Mapping[MuscleGroup, float],
    max_total_sets: int,
    catalog: ExerciseCatalog,
    config: GenerationConfig | None = None,
) -> AllocationResult:
    return SetAllocator(catalog, config).allocate(logs, targets, max_total_sets)
