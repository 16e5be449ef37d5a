"""Additive multi-factor scorer for exercise selection.

Every exercise that passes the equipment filter is scored by a fixed list of
independent factors (target overlap, recovery, completion rate, compound,
familiarity, focus alignment, strategy adjustment). Each factor contributes
points and may emit a human-readable reason. Scores are sorted descending
with a stable sort, so ties keep catalog order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import (
    EquipmentFilter,
    ExerciseFocus,
    MuscleGroup,
    WorkoutFocus,
    WorkoutStrategy,
)
from liftplan.models.exercise import Exercise
from liftplan.services.generation_types import UserTrainingProfile

from .constants import ScoringFactors, ScoringReasons, TimeConstants
from .exceptions import ScoringError

logger = logging.getLogger(__name__)

FactorOutcome = tuple[float, "str | None"]


@dataclass(frozen=True)
class ScoringContext:
    """Everything a factor may look at besides the exercise itself.

    Attributes:
        target_muscles: Muscles the session should train
        profile: Training profile derived from history
        strategy: Strategy chosen for this request
        focus: Requested session focus
        preferred_names: Lowercase names of familiar exercises
        now: Reference time for recovery calculations
    """

    target_muscles: frozenset[MuscleGroup]
    profile: UserTrainingProfile
    strategy: WorkoutStrategy
    focus: WorkoutFocus
    now: datetime
    preferred_names: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        target_muscles: Iterable[MuscleGroup],
        profile: UserTrainingProfile,
        strategy: WorkoutStrategy,
        focus: WorkoutFocus,
        now: datetime,
        preferred_names: Iterable[str] = (),
    ) -> "ScoringContext":
        return cls(
            target_muscles=frozenset(target_muscles),
            profile=profile,
            strategy=strategy,
            focus=focus,
            now=now,
            preferred_names=frozenset(name.lower() for name in preferred_names),
        )


@dataclass(frozen=True)
class ScoringFactor:
    """One additive scoring factor.

    Attributes:
        name: Breakdown key
        evaluate_fn: Callable returning (points, optional reason)
        description: Human-readable description of the factor
    """

    name: str
    evaluate_fn: Callable[[Exercise, ScoringContext], FactorOutcome]
    description: str = ""

    def evaluate(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        """Evaluate the factor for one exercise.

        Raises:
            ScoringError: If the factor raises; the original error is chained.
        """
        try:
            return self.evaluate_fn(exercise, context)
        except Exception as e:
            raise ScoringError(
                f"Factor '{self.name}' failed for '{exercise.name}': {e}",
                exercise_name=exercise.name,
                factor=self.name,
            ) from e


@dataclass(frozen=True)
class ExerciseScore:
    """Score, reasons and per-factor breakdown for one exercise.

    Reasons are for display only; nothing downstream consumes them.
    """

    exercise: Exercise
    score: float
    reasons: tuple[str, ...] = ()
    breakdown: dict[str, float] = field(default_factory=dict)

    def get_factor_score(self, factor: str) -> float:
        return self.breakdown.get(factor, 0.0)

    def get_top_factors(self, n: int = 3) -> list[tuple[str, float]]:
        """Get the n factors with the largest contribution."""
        return sorted(self.breakdown.items(), key=lambda x: -x[1])[:n]


class ExerciseScorer:
    """Scores catalog exercises for a generation request.

    Example:
        >>> scorer = ExerciseScorer()
        >>> context = ScoringContext.build(
        ...     target_muscles=[MuscleGroup.QUADS],
        ...     profile=UserTrainingProfile(),
        ...     strategy=WorkoutStrategy.PROGRESSIVE,
        ...     focus=WorkoutFocus.STRENGTH,
        ...     now=datetime(2024, 1, 1),
        ... )
        >>> ranked = scorer.score_all(catalog.all(), context, EquipmentFilter.BOTH)
        >>> ranked[0].score >= ranked[-1].score
        True
    """

    def __init__(self, config: GenerationConfig | None = None) -> None:
        self._config = config or get_generation_config()
        self._factors = self._build_factors()

    @property
    def factors(self) -> list[ScoringFactor]:
        return list(self._factors)

    def _build_factors(self) -> list[ScoringFactor]:
        return [
            ScoringFactor(ScoringFactors.TARGET, self._score_target_muscles, "Overlap with target muscles"),
            ScoringFactor(ScoringFactors.RECOVERY, self._score_recovery, "Recovery of primary muscles"),
            ScoringFactor(ScoringFactors.COMPLETION, self._score_completion, "Historical completion rate"),
            ScoringFactor(ScoringFactors.COMPOUND, self._score_compound, "Multiple primary muscles"),
            ScoringFactor(ScoringFactors.FAMILIARITY, self._score_familiarity, "Preferred exercise"),
            ScoringFactor(ScoringFactors.FOCUS, self._score_focus, "Alignment with session focus"),
            ScoringFactor(ScoringFactors.STRATEGY, self._score_strategy, "Strategy adjustment"),
        ]

    def score_exercise(self, exercise: Exercise, context: ScoringContext) -> ExerciseScore:
        total = 0.0
        reasons: list[str] = []
        breakdown: dict[str, float] = {}

        for factor in self._factors:
            points, reason = factor.evaluate(exercise, context)
            total += points
            breakdown[factor.name] = points
            if reason:
                reasons.append(reason)

        return ExerciseScore(
            exercise=exercise,
            score=total,
            reasons=tuple(reasons),
            breakdown=breakdown,
        )

    def score_all(
        self,
        exercises: Iterable[Exercise],
        context: ScoringContext,
        equipment: EquipmentFilter = EquipmentFilter.BOTH,
    ) -> list[ExerciseScore]:
        """Score every exercise the equipment filter allows, best first."""
        scored = [
            self.score_exercise(exercise, context)
            for exercise in exercises
            if equipment.allows(exercise.equipment)
        ]
        scored.sort(key=lambda s: -s.score)

        if scored:
            logger.debug(
                f"Scored {len(scored)} exercises (equipment={equipment.value}, "
                f"strategy={context.strategy.value}); top='{scored[0].exercise.name}' "
                f"score={scored[0].score:.1f}"
            )
        return scored

    # ------------------------------------------------------------------ factors

    def _score_target_muscles(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        weights = self._config.scoring
        targets = context.target_muscles
        primary_overlap = sum(1 for m in exercise.primary_muscles if m in targets)
        secondary_overlap = sum(1 for m in exercise.secondary_muscles if m in targets)
        if primary_overlap + secondary_overlap == 0:
            return 0.0, None

        points = (
            primary_overlap * weights.primary_target_bonus
            + secondary_overlap * weights.secondary_target_bonus
        )
        muscles = ", ".join(sorted({m.display_name for m in exercise.all_muscles}))
        return points, ScoringReasons.TARGETS.format(muscles=muscles)

    def _score_recovery(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        weights = self._config.scoring
        recovery = self._config.recovery

        min_days: float | None = None
        critical_muscle: MuscleGroup | None = None
        for muscle in exercise.primary_muscles:
            last_date = context.profile.last_worked.get(muscle)
            if last_date is None:
                continue
            days = (context.now - last_date).total_seconds() / TimeConstants.SECONDS_PER_DAY
            if min_days is None or days < min_days:
                min_days = days
                critical_muscle = muscle

        if critical_muscle is None or min_days is None:
            return weights.fully_recovered_bonus, ScoringReasons.FULLY_RECOVERED

        window = recovery.window_for(critical_muscle.training_group.value)
        if min_days >= window:
            return (
                weights.fully_recovered_bonus,
                ScoringReasons.FULLY_RECOVERED_DAYS.format(days=int(min_days)),
            )
        if min_days >= window * weights.adequate_recovery_fraction:
            return weights.adequate_recovery_bonus, ScoringReasons.ADEQUATE_RECOVERY
        return weights.recently_trained_penalty, ScoringReasons.RECENTLY_TRAINED

    def _score_completion(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        weights = self._config.scoring
        rate = context.profile.completion_rate(exercise.name)
        if rate is None:
            return 0.0, None
        reason = ScoringReasons.HIGH_SUCCESS_RATE if rate > weights.high_completion_rate else None
        return rate * weights.completion_rate_weight, reason

    def _score_compound(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        if exercise.is_multi_primary:
            return self._config.scoring.compound_bonus, ScoringReasons.COMPOUND
        return 0.0, None

    def _score_familiarity(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        if exercise.key in context.preferred_names:
            return self._config.scoring.familiarity_bonus, ScoringReasons.FAMILIAR
        return 0.0, None

    def _score_focus(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        focus = self._config.scoring.focus

        if context.focus == WorkoutFocus.STRENGTH:
            if exercise.focus == ExerciseFocus.STRENGTH:
                return focus.strength_match, ScoringReasons.STRENGTH_PRIORITY
            return focus.strength_mismatch, None

        if context.focus == WorkoutFocus.BALANCED:
            if exercise.is_mobility:
                return focus.balanced_mobility, ScoringReasons.ADDS_MOBILITY
            return focus.balanced_default, None

        points = 0.0
        reason = None
        if exercise.is_mobility:
            points += focus.mobility_match
            reason = ScoringReasons.MOBILITY_PRIORITY
        else:
            points += focus.mobility_mismatch
        if exercise.is_unloaded:
            points += focus.mobility_unloaded_bonus
        if exercise.is_compound:
            points += focus.mobility_compound_penalty
        return points, reason

    def _score_strategy(self, exercise: Exercise, context: ScoringContext) -> FactorOutcome:
        weights = self._config.scoring

        if context.strategy == WorkoutStrategy.DELOAD:
            if exercise.is_multi_primary:
                return weights.deload_compound_bonus, ScoringReasons.DELOAD_EFFICIENT
        elif context.strategy == WorkoutStrategy.BALANCING:
            # Only the first primary muscle is consulted.
            first_primary = exercise.primary_muscles[0]
            if context.profile.volume_for(first_primary) < weights.low_volume_threshold:
                return weights.balancing_bonus, ScoringReasons.BALANCING_VOLUME
        return 0.0, None


def score_exercises(
    exercises: Iterable[Exercise],
    context: ScoringContext,
    equipment: EquipmentFilter = EquipmentFilter.BOTH,
    config: GenerationConfig | None = None,
) -> list[ExerciseScore]:
    """Score and rank exercises with a one-off scorer."""
    return ExerciseScorer(config).score_all(exercises, context, equipment)
