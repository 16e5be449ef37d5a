"""
Muscle Tracker

Weekly volume per muscle for history views: completed sets and tonnage
(weight x reps) over a trailing window. Primary muscles get full credit,
secondary muscles the secondary credit. Logged names resolve exactly first,
then by substring in either direction, so free-text names still count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import MuscleGroup
from liftplan.models.session import WorkoutSession

logger = logging.getLogger(__name__)


@dataclass
class MuscleVolume:
    """Accumulated weekly volume for one muscle."""

    muscle: MuscleGroup
    sets: float = 0.0
    total_volume: float = 0.0

    def progress(self, target_sets: float) -> float:
        """Percent of the target reached, capped at 100 (0 for a non-positive target)."""
        if target_sets <= 0:
            return 0.0
        return min(self.sets / target_sets * 100.0, 100.0)


def calculate_weekly_volume(
    sessions: Iterable[WorkoutSession],
    catalog: ExerciseCatalog,
    now: datetime,
    config: GenerationConfig | None = None,
) -> dict[MuscleGroup, MuscleVolume]:
    """Trailing-window volume per muscle.

    Args:
        sessions: Session history in any order.
        catalog: Catalog used to resolve logged names.
        now: End of the window.
        config: Generation config (window length and secondary credit).

    Returns:
        Muscle -> MuscleVolume for every muscle with any credited volume.
    """
    settings = config or get_generation_config()
    credit = settings.allocation.secondary_credit
    cutoff = now - timedelta(days=settings.profile.volume_window_days)

    volumes: dict[MuscleGroup, MuscleVolume] = {}
    for session in sessions:
        if session.date < cutoff:
            continue
        for log in session.exercises:
            exercise = catalog.by_name(log.name)
            if exercise is None:
                continue
            completed = log.completed_sets
            set_count = float(len(completed))
            tonnage = sum(s.weight * s.reps for s in completed)

            for muscle in exercise.primary_muscles:
                volume = volumes.setdefault(muscle, MuscleVolume(muscle))
                volume.sets += set_count
                volume.total_volume += tonnage
            for muscle in exercise.secondary_muscles:
                volume = volumes.setdefault(muscle, MuscleVolume(muscle))
                volume.sets += set_count * credit
                volume.total_volume += tonnage * credit

    logger.debug(f"Weekly volume computed for {len(volumes)} muscles")
    return volumes
