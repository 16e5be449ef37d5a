"""
Workout Generation Service

Pipeline: training profile -> strategy -> exercise scores -> selection ->
seeded logs (progression weight/reps) -> set allocation against per-muscle
targets -> reasoning text.

Generation only reads history and progression state; calling it repeatedly
with the same inputs yields the same workout.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import MuscleGroup, WorkoutFocus, WorkoutStrategy
from liftplan.models.session import ExerciseLog, ExerciseSet, WorkoutSession
from liftplan.models.split_plan import SplitPlan
from liftplan.repositories.progress_repository import ProgressStore
from liftplan.scoring.exercise_scorer import ExerciseScore, ExerciseScorer, ScoringContext
from liftplan.services.exercise_selector import ExerciseSelector
from liftplan.services.generation_types import (
    GeneratedWorkout,
    UserTrainingProfile,
    WorkoutRequest,
)
from liftplan.services.progression_engine import ProgressionEngine
from liftplan.services.set_allocator import SetAllocator, set_ceiling
from liftplan.services.strategy_selector import select_strategy
from liftplan.services.training_profile import build_training_profile
from liftplan.services.volume_engine import targets_for_day

logger = logging.getLogger(__name__)

NO_EXERCISES_MESSAGE = (
    "No exercises available for selected equipment. "
    "Try 'Both' or add more exercises to database."
)
UNABLE_TO_GENERATE_MESSAGE = (
    "Unable to generate workout. "
    "Try selecting different muscle groups or reducing duration."
)
REASONING_SEPARATOR = " • "
STREAK_NOTE_MIN_DAYS = 3

STRATEGY_PHRASES = {
    WorkoutStrategy.DELOAD: "🔄 Deload week - reduced volume for recovery",
    WorkoutStrategy.BALANCING: "⚖️ Balancing muscle groups",
    WorkoutStrategy.PROGRESSIVE: "📈 Progressive overload focus",
}
FOCUS_PHRASES = {
    WorkoutFocus.STRENGTH: "🏋️ Strength session",
    WorkoutFocus.BALANCED: "⚖️ Balanced strength + mobility",
    WorkoutFocus.MOBILITY: "🧘 Mobility and control session",
}


class WorkoutGenerator:
    """Generates a workout for a request from injected catalog and progress store.

    Example:
        >>> generator = WorkoutGenerator(catalog, progress_store)
        >>> workout = generator.generate(request, history=[], plan=SplitPlan.default_plan())
        >>> workout.strategy
        <WorkoutStrategy.PROGRESSIVE: 'progressive'>
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        progress_store: ProgressStore,
        config: GenerationConfig | None = None,
    ):
        self._catalog = catalog
        self._config = config or get_generation_config()
        self._scorer = ExerciseScorer(self._config)
        self._selector = ExerciseSelector(self._config)
        self._allocator = SetAllocator(catalog, self._config)
        self._progression = ProgressionEngine(progress_store, catalog, self._config)

    def generate(
        self,
        request: WorkoutRequest,
        history: Iterable[WorkoutSession],
        plan: SplitPlan | None = None,
        now: datetime | None = None,
    ) -> GeneratedWorkout:
        """Generate a workout.

        Args:
            request: Duration, targets, equipment, focus and preferences.
            history: Completed sessions (read only).
            plan: Split plan used to derive targets when ``request.day`` is set.
            now: Reference time (defaults to the current time).

        Returns:
            GeneratedWorkout. Empty with an explanatory reasoning string when no
            exercise passes the equipment filter or nothing can be selected.
        """
        now = now or datetime.now()
        history = list(history)

        profile = build_training_profile(history, self._catalog, now, self._config)
        strategy = select_strategy(profile, self._config)

        context = ScoringContext.build(
            target_muscles=request.target_muscles,
            profile=profile,
            strategy=strategy,
            focus=request.focus,
            now=now,
            preferred_names=request.preferred_exercise_names,
        )
        scored = self._scorer.score_all(self._catalog.all(), context, request.equipment)
        if not scored:
            logger.warning(f"No exercises pass equipment filter '{request.equipment.value}'")
            return GeneratedWorkout(
                exercises=(), estimated_duration=0, reasoning=NO_EXERCISES_MESSAGE, strategy=strategy
            )

        selected = self._selector.select(scored, request)
        if not selected:
            logger.warning("Exercise selection came back empty")
            return GeneratedWorkout(
                exercises=(),
                estimated_duration=0,
                reasoning=UNABLE_TO_GENERATE_MESSAGE,
                strategy=strategy,
            )

        logs = self._seed_logs(selected, strategy, history)

        coverage: float | None = None
        targets = self._resolve_targets(request, plan)
        if targets is not None:
            ceiling = set_ceiling(len(logs), request.duration_minutes, self._config)
            allocation = self._allocator.allocate(logs, targets, ceiling)
            logs = list(allocation.logs)
            coverage = allocation.coverage

        total_sets = sum(len(log.sets) for log in logs)
        workout = GeneratedWorkout(
            exercises=tuple(logs),
            estimated_duration=total_sets * self._config.selection.minutes_per_set,
            reasoning=build_reasoning(profile, strategy, selected, request),
            strategy=strategy,
            coverage=coverage,
            selected=tuple(selected),
        )
        logger.info(
            f"Generated workout: {len(logs)} exercises, {total_sets} sets, "
            f"strategy={strategy.value}, coverage={coverage}"
        )
        return workout

    def _seed_logs(
        self,
        selected: Sequence[ExerciseScore],
        strategy: WorkoutStrategy,
        history: list[WorkoutSession],
    ) -> list[ExerciseLog]:
        selection = self._config.selection
        set_count = (
            selection.deload_sets_per_exercise
            if strategy == WorkoutStrategy.DELOAD
            else selection.sets_per_exercise
        )

        logs: list[ExerciseLog] = []
        for score in selected:
            exercise = score.exercise
            weight = self._progression.suggested_weight(exercise.name, history)
            reps = self._progression.suggested_reps(exercise)
            sets = tuple(
                ExerciseSet(weight=weight, reps=reps, completed=False) for _ in range(set_count)
            )
            logs.append(ExerciseLog(name=exercise.name, sets=sets))
        return logs

    @staticmethod
    def _resolve_targets(
        request: WorkoutRequest, plan: SplitPlan | None
    ) -> Mapping[MuscleGroup, float] | None:
        if request.muscle_targets is not None:
            return request.muscle_targets
        if request.day is not None and plan is not None:
            return targets_for_day(plan, request.day)
        return None


def build_reasoning(
    profile: UserTrainingProfile,
    strategy: WorkoutStrategy,
    selected: Sequence[ExerciseScore],
    request: WorkoutRequest,
) -> str:
    parts = [STRATEGY_PHRASES[strategy], FOCUS_PHRASES[request.focus]]

    muscles = {m for score in selected for m in score.exercise.primary_muscles}
    parts.append("Targeting: " + ", ".join(sorted(m.display_name for m in muscles)))

    preferred = {name.lower() for name in request.preferred_exercise_names}
    familiar = sum(1 for score in selected if score.exercise.key in preferred)
    compounds = sum(1 for score in selected if score.exercise.is_multi_primary)
    if familiar > 0:
        parts.append(f"{familiar} familiar exercises")
    parts.append(f"{compounds} compound movements")

    if profile.consecutive_days >= STREAK_NOTE_MIN_DAYS:
        parts.append(f"💤 {profile.consecutive_days} consecutive days")

    return REASONING_SEPARATOR.join(parts)


def generate_workout(
    request: WorkoutRequest,
    history: Iterable[WorkoutSession],
    plan: SplitPlan | None,
    progress_store: ProgressStore,
    catalog: ExerciseCatalog,
    *,
    config: GenerationConfig | None = None,
    now: datetime | None = None,
) -> GeneratedWorkout:
    """Generate a workout with a one-off generator."""
    return WorkoutGenerator(catalog, progress_store, config).generate(request, history, plan, now)
