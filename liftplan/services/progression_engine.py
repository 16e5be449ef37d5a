"""
Progression Engine

Per-exercise progressive overload state machine, persisted by lowercase
exercise name as {last_weight, next_weight, fail_streak, last_updated}.

On session completion, for each logged exercise with catalog metadata and at
least one completed set (weights from the first completed set):
- all reps >= range max          -> advance: next = round(weight + increment), streak 0
- >= max(1, n // 2) reps < min   -> fail: streak + 1; at stall_limit deload
                                    (next = round(weight * deload_factor), streak 0)
- otherwise                      -> hold: streak 0, weight unchanged
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.exercise import Exercise
from liftplan.models.progress import ExerciseProgress
from liftplan.models.session import WorkoutSession
from liftplan.repositories.progress_repository import ProgressStore

logger = logging.getLogger(__name__)


class ProgressionAction(str, Enum):
    ADVANCE = "advance"
    FAIL = "fail"
    DELOAD = "deload"
    HOLD = "hold"


@dataclass(frozen=True)
class ProgressionUpdate:
    """One exercise's progression decision from a completed session."""

    name: str
    action: ProgressionAction
    progress: ExerciseProgress


class ProgressionEngine:
    """Suggests working weight/reps and updates progression after sessions.

    Writes from all engine instances are serialized by one class-level lock,
    so overlapping ``record_session_completion`` calls cannot lose updates.

    Example:
        >>> engine = ProgressionEngine(store, catalog)
        >>> engine.suggested_weight("Bench Press", history=[])
        0.0
    """

    _write_lock = threading.Lock()

    def __init__(
        self,
        store: ProgressStore,
        catalog: ExerciseCatalog,
        config: GenerationConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._store = store
        self._catalog = catalog
        self._config = (config or get_generation_config()).progression
        self._clock = clock or datetime.now

    def rep_range(self, exercise: Exercise) -> tuple[int, int]:
        if exercise.is_compound:
            return self._config.compound_rep_range
        return self._config.isolation_rep_range

    def round_to_increment(self, weight: float) -> float:
        """Round half-up to the nearest increment, floored at 0."""
        step = self._config.increment_lb
        return max(0.0, math.floor(weight / step + 0.5) * step)

    def suggested_weight(self, name: str, history: Iterable[WorkoutSession]) -> float:
        """Stored next weight, else the last completed weight in history, else 0."""
        entry = self._store.get(name.lower())
        if entry is not None:
            return entry.next_weight
        last = last_completed_weight(name, history)
        return last if last is not None else 0.0

    def suggested_reps(self, exercise: Exercise) -> int:
        return self.rep_range(exercise)[0]

    def record_session_completion(self, session: WorkoutSession) -> list[ProgressionUpdate]:
        """Apply the progression rules for every exercise in a completed session.

        Returns:
            The updates written, in log order. Logs without catalog metadata or
            without completed sets are skipped.
        """
        updates: list[ProgressionUpdate] = []
        with self._write_lock:
            now = self._clock()
            for log in session.exercises:
                exercise = self._catalog.exact(log.name)
                if exercise is None:
                    logger.debug(f"Skipping progression for unknown exercise '{log.name}'")
                    continue
                completed = log.completed_sets
                if not completed:
                    continue

                update = self._next_progress(
                    log.name,
                    exercise,
                    reps=[s.reps for s in completed],
                    current_weight=completed[0].weight,
                    now=now,
                )
                self._store.set(log.key, update.progress)
                updates.append(update)
                logger.info(
                    f"Progression '{log.name}': {update.action.value} "
                    f"{update.progress.last_weight:g} -> {update.progress.next_weight:g} "
                    f"(fail_streak={update.progress.fail_streak})"
                )
        return updates

    def _next_progress(
        self,
        name: str,
        exercise: Exercise,
        reps: list[int],
        current_weight: float,
        now: datetime,
    ) -> ProgressionUpdate:
        low, high = self.rep_range(exercise)
        previous = self._store.get(name.lower())
        fail_streak = previous.fail_streak if previous is not None else 0
        next_weight = current_weight

        below_min = sum(1 for r in reps if r < low)
        if all(r >= high for r in reps):
            action = ProgressionAction.ADVANCE
            next_weight = self.round_to_increment(current_weight + self._config.increment_lb)
            fail_streak = 0
        elif below_min >= max(1, len(reps) // 2):
            action = ProgressionAction.FAIL
            fail_streak += 1
            if fail_streak >= self._config.stall_limit:
                action = ProgressionAction.DELOAD
                next_weight = self.round_to_increment(current_weight * self._config.deload_factor)
                fail_streak = 0
        else:
            action = ProgressionAction.HOLD
            fail_streak = 0

        return ProgressionUpdate(
            name=name,
            action=action,
            progress=ExerciseProgress(
                last_weight=current_weight,
                next_weight=max(0.0, next_weight),
                fail_streak=fail_streak,
                last_updated=now,
            ),
        )


def last_completed_weight(name: str, history: Iterable[WorkoutSession]) -> float | None:
    """Weight of the first completed set of the newest matching log.

    Sessions are searched newest first; in each, only the first log whose name
    matches case-insensitively is considered.
    """
    for session in sorted(history, key=lambda s: s.date, reverse=True):
        log = session.log_for(name)
        if log is None:
            continue
        for exercise_set in log.sets:
            if exercise_set.completed:
                return exercise_set.weight
    return None


def record_session_completion(
    session: WorkoutSession,
    progress_store: ProgressStore,
    catalog: ExerciseCatalog,
    config: GenerationConfig | None = None,
) -> list[ProgressionUpdate]:
    """Update progression state for a completed session."""
    return ProgressionEngine(progress_store, catalog, config).record_session_completion(session)
