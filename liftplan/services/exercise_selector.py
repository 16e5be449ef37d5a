"""
Exercise Selection Service

Greedy selection over ranked exercise scores.

Algorithm:
1. Budget = max(1, duration // (sets_per_exercise * minutes_per_set))
2. Walk target-relevant exercises in score order, keeping those that cover
   a not-yet-covered target muscle
3. Backfill with remaining target-relevant exercises until the budget is met
4. If nothing was selected, walk all scored exercises instead
5. Non-strength sessions get at least one mobility exercise
6. "Both" equipment or balanced/mobility sessions get both an unloaded and a
   loaded exercise

Swaps in steps 5 and 6 append while the budget allows and otherwise replace
the last slot. No exercise is selected twice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import EquipmentFilter, MuscleGroup, WorkoutFocus
from liftplan.scoring.exercise_scorer import ExerciseScore
from liftplan.services.generation_types import WorkoutRequest

logger = logging.getLogger(__name__)


class ExerciseSelector:
    """Greedy exercise selection for a generation request.

    Example:
        >>> selector = ExerciseSelector()
        >>> picks = selector.select(ranked_scores, request)
        >>> len(picks) <= selector.exercise_budget(request.duration_minutes)
        True
    """

    def __init__(self, config: GenerationConfig | None = None):
        self._config = config or get_generation_config()

    def exercise_budget(self, duration_minutes: int) -> int:
        """Exercise count planned for a duration, at least one."""
        return max(1, duration_minutes // self._config.selection.minutes_per_exercise)

    def select(self, scored: Sequence[ExerciseScore], request: WorkoutRequest) -> list[ExerciseScore]:
        """Select exercises from scores sorted best first.

        Args:
            scored: Exercise scores, sorted descending.
            request: Generation request (duration, targets, equipment, focus).

        Returns:
            Selected scores in selection order.
        """
        budget = self.exercise_budget(request.duration_minutes)
        targets = set(request.target_muscles)
        relevant = [s for s in scored if s.exercise.targets_any(targets)]

        selected: list[ExerciseScore] = []
        covered: set[MuscleGroup] = set()

        for candidate in relevant:
            if len(selected) >= budget:
                break
            muscles = set(candidate.exercise.all_muscles)
            if (muscles & targets) - covered:
                selected.append(candidate)
                covered |= muscles

        self._fill(selected, relevant, budget)

        if not selected:
            logger.debug("No target-relevant exercises; falling back to all scored exercises")
            self._fill(selected, scored, budget)

        candidates = relevant if relevant else list(scored)
        self._ensure_mobility(selected, candidates, budget, request)
        self._ensure_equipment_mix(selected, candidates, budget, request)

        logger.info(
            f"Selected {len(selected)}/{budget} exercises "
            f"({len(relevant)} target-relevant of {len(scored)} scored)"
        )
        return selected

    @staticmethod
    def _is_selected(selected: list[ExerciseScore], candidate: ExerciseScore) -> bool:
        return any(s.exercise.key == candidate.exercise.key for s in selected)

    def _fill(self, selected: list[ExerciseScore], pool: Sequence[ExerciseScore], budget: int) -> None:
        for candidate in pool:
            if len(selected) >= budget:
                break
            if not self._is_selected(selected, candidate):
                selected.append(candidate)

    def _swap_in(
        self,
        selected: list[ExerciseScore],
        candidates: Sequence[ExerciseScore],
        budget: int,
        predicate: Callable[[ExerciseScore], bool],
    ) -> None:
        """Add the best unselected candidate matching ``predicate``."""
        replacement = next(
            (c for c in candidates if predicate(c) and not self._is_selected(selected, c)),
            None,
        )
        if replacement is None:
            return
        if len(selected) < budget:
            selected.append(replacement)
        elif selected:
            logger.debug(
                f"Replacing '{selected[-1].exercise.name}' with '{replacement.exercise.name}'"
            )
            selected[-1] = replacement

    def _ensure_mobility(
        self,
        selected: list[ExerciseScore],
        candidates: Sequence[ExerciseScore],
        budget: int,
        request: WorkoutRequest,
    ) -> None:
        if request.focus == WorkoutFocus.STRENGTH:
            return
        if any(s.exercise.is_mobility for s in selected):
            return
        self._swap_in(selected, candidates, budget, lambda c: c.exercise.is_mobility)

    def _ensure_equipment_mix(
        self,
        selected: list[ExerciseScore],
        candidates: Sequence[ExerciseScore],
        budget: int,
        request: WorkoutRequest,
    ) -> None:
        if request.equipment != EquipmentFilter.BOTH and request.focus == WorkoutFocus.STRENGTH:
            return

        has_unloaded = any(s.exercise.is_unloaded for s in selected)
        has_loaded = any(not s.exercise.is_unloaded for s in selected)

        if not has_unloaded:
            self._swap_in(selected, candidates, budget, lambda c: c.exercise.is_unloaded)
        if not has_loaded:
            self._swap_in(selected, candidates, budget, lambda c: not c.exercise.is_unloaded)


def select_exercises(
    scored: Sequence[ExerciseScore],
    request: WorkoutRequest,
    config: GenerationConfig | None = None,
) -> list[ExerciseScore]:
    return ExerciseSelector(config).select(scored, request)
