"""
Training Profile Builder

Derives the per-request training profile from session history: completion
rates, last-worked date per muscle, consecutive-day streak and trailing
weekly volume. History is only read.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timedelta

from liftplan.catalog.exercise_catalog import ExerciseCatalog
from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import MuscleGroup
from liftplan.models.session import WorkoutSession
from liftplan.services.generation_types import UserTrainingProfile

logger = logging.getLogger(__name__)


def sort_newest_first(sessions: Iterable[WorkoutSession]) -> list[WorkoutSession]:
    return sorted(sessions, key=lambda s: s.date, reverse=True)


def completion_rates(sessions: list[WorkoutSession], window: int) -> dict[str, float]:
    """Completed/total sets per lowercase exercise name over the newest ``window`` sessions."""
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for session in sessions[:window]:
        for log in session.exercises:
            if not log.sets:
                continue
            counts = totals[log.key]
            counts[0] += len(log.completed_sets)
            counts[1] += len(log.sets)
    return {name: done / total for name, (done, total) in totals.items() if total > 0}


def last_worked_dates(
    sessions: list[WorkoutSession], catalog: ExerciseCatalog
) -> dict[MuscleGroup, datetime]:
    """Date of the newest session training each muscle as a primary muscle.

    Logged names are matched exactly (case-insensitive); unknown names are skipped.
    """
    last_worked: dict[MuscleGroup, datetime] = {}
    for session in sessions:
        for log in session.exercises:
            exercise = catalog.exact(log.name)
            if exercise is None:
                continue
            for muscle in exercise.primary_muscles:
                last_worked.setdefault(muscle, session.date)
    return last_worked


def consecutive_days(sessions: list[WorkoutSession], now: datetime, max_gap_days: int = 1) -> int:
    """Number of newest sessions forming an unbroken run ending at ``now``.

    Each session counts while its calendar-day gap to the previously counted
    session (``now`` for the first) is at most ``max_gap_days``.
    """
    count = 0
    last_date = now.date()
    for session in sessions:
        gap = (last_date - session.date.date()).days
        if gap > max_gap_days:
            break
        count += 1
        last_date = session.date.date()
    return count


def weekly_volume(
    sessions: list[WorkoutSession],
    catalog: ExerciseCatalog,
    now: datetime,
    window_days: int = 7,
) -> dict[MuscleGroup, int]:
    """Completed sets per primary muscle over the trailing window."""
    cutoff = now - timedelta(days=window_days)
    volume: dict[MuscleGroup, int] = defaultdict(int)
    for session in sessions:
        if session.date < cutoff:
            continue
        for log in session.exercises:
            exercise = catalog.exact(log.name)
            if exercise is None:
                continue
            completed = len(log.completed_sets)
            for muscle in exercise.primary_muscles:
                volume[muscle] += completed
    return dict(volume)


def build_training_profile(
    sessions: Iterable[WorkoutSession],
    catalog: ExerciseCatalog,
    now: datetime,
    config: GenerationConfig | None = None,
) -> UserTrainingProfile:
    """Build the training profile for one generation request.

    Args:
        sessions: Session history in any order.
        catalog: Catalog used to resolve logged names to muscles.
        now: Reference time for the streak and the trailing window.
        config: Generation config (defaults to the loaded config).

    Returns:
        Frozen UserTrainingProfile.
    """
    settings = (config or get_generation_config()).profile
    history = sort_newest_first(sessions)

    profile = UserTrainingProfile(
        recent_sessions=tuple(history[: settings.recent_sessions]),
        completion_rates=completion_rates(history, settings.completion_window_sessions),
        last_worked=last_worked_dates(history, catalog),
        consecutive_days=consecutive_days(history, now, settings.streak_gap_days),
        weekly_volume=weekly_volume(history, catalog, now, settings.volume_window_days),
    )
    logger.debug(
        f"Built training profile from {len(history)} sessions: "
        f"streak={profile.consecutive_days}, muscles_with_volume={len(profile.weekly_volume)}"
    )
    return profile
