"""
Volume Engine

Pure functions turning a weekly split plan into per-session set targets.

Targets are distributed in two levels: first per training group (weekly
group target divided by the number of days that train the group), then
evenly across the group's muscles present on the day. A day that lists
three shoulder variants therefore gets the same shoulder total as a day
listing one.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict

from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import DayType, MuscleGroup, TrainingGroup, muscles_in_group
from liftplan.models.split_plan import DEFAULT_WEEKLY_SETS, SplitDayConfig, SplitPlan

logger = logging.getLogger(__name__)


def _resolve_day(plan: SplitPlan, day: SplitDayConfig | int) -> SplitDayConfig | None:
    if isinstance(day, SplitDayConfig):
        return day
    if 0 <= day < len(plan.days):
        return plan.days[day]
    return None


def _training_days(plan: SplitPlan) -> list[SplitDayConfig]:
    return [day for day in plan.days if not day.is_rest]


def weekly_targets_by_group(plan: SplitPlan) -> dict[TrainingGroup, float]:
    """Mean weekly target of each group's muscles present in the plan."""
    targets: dict[TrainingGroup, float] = {}
    for group in TrainingGroup:
        values = [
            plan.weekly_targets[muscle]
            for muscle in muscles_in_group(group)
            if muscle in plan.weekly_targets
        ]
        targets[group] = sum(values) / len(values) if values else DEFAULT_WEEKLY_SETS
    return targets


def weekly_sessions_per_group(plan: SplitPlan) -> dict[TrainingGroup, int]:
    """Number of training days whose muscles touch each group."""
    counts: dict[TrainingGroup, int] = defaultdict(int)
    for day in _training_days(plan):
        for group in {muscle.training_group for muscle in day.resolved_muscles()}:
            counts[group] += 1
    return dict(counts)


def weekly_sessions_per_muscle(plan: SplitPlan) -> dict[MuscleGroup, int]:
    counts: dict[MuscleGroup, int] = defaultdict(int)
    for day in _training_days(plan):
        for muscle in set(day.resolved_muscles()):
            counts[muscle] += 1
    return dict(counts)


def per_session_targets_by_group(plan: SplitPlan) -> dict[TrainingGroup, float]:
    """Weekly group target split across the days that train it (0 if none)."""
    weekly = weekly_targets_by_group(plan)
    sessions = weekly_sessions_per_group(plan)
    return {
        group: weekly[group] / sessions[group] if sessions.get(group, 0) > 0 else 0.0
        for group in TrainingGroup
    }


def targets_for_day(plan: SplitPlan, day: SplitDayConfig | int) -> dict[MuscleGroup, float]:
    """Per-muscle set targets for one day of the plan.

    Args:
        plan: Weekly split plan.
        day: A day config, or a slot index into ``plan.days``.

    Returns:
        Muscle -> set target. Empty for rest days and out-of-range indexes.
    """
    resolved = _resolve_day(plan, day)
    if resolved is None or resolved.is_rest:
        return {}

    per_group = per_session_targets_by_group(plan)
    grouped: dict[TrainingGroup, list[MuscleGroup]] = defaultdict(list)
    for muscle in resolved.resolved_muscles():
        if muscle not in grouped[muscle.training_group]:
            grouped[muscle.training_group].append(muscle)

    targets: dict[MuscleGroup, float] = {}
    for group, muscles in grouped.items():
        per_muscle = per_group.get(group, 0.0) / len(muscles)
        for muscle in muscles:
            targets[muscle] = per_muscle
    return targets


def per_session_targets(plan: SplitPlan) -> dict[MuscleGroup, float]:
    """Mean per-day target of each muscle over the days that train it."""
    totals: dict[MuscleGroup, float] = defaultdict(float)
    counts: dict[MuscleGroup, int] = defaultdict(int)
    for day in _training_days(plan):
        for muscle, target in targets_for_day(plan, day).items():
            totals[muscle] += target
            counts[muscle] += 1

    return {
        muscle: totals[muscle] / counts[muscle] if counts[muscle] > 0 else 0.0
        for muscle in MuscleGroup
    }


def recommended_duration(
    plan: SplitPlan,
    day: SplitDayConfig | int,
    config: GenerationConfig | None = None,
) -> int:
    """Suggested session length in minutes for a day (0 for rest days).

    Starts from a per-day-type base, adds time for 4/5-day plans (longer
    sessions when training less often) and for each muscle beyond the first
    few, then clamps and rounds.
    """
    resolved = _resolve_day(plan, day)
    if resolved is None or resolved.is_rest:
        return 0

    settings = (config or get_generation_config()).planner.recommended_duration
    minutes = settings.base_minutes.get(resolved.day_type.value, settings.min_minutes)
    minutes += settings.training_day_adjustment.get(plan.training_days, 0)

    muscle_count = len(resolved.resolved_muscles())
    extra_muscles = max(0, muscle_count - settings.muscles_included)
    minutes += extra_muscles * settings.extra_minutes_per_muscle

    minutes = max(settings.min_minutes, min(settings.max_minutes, minutes))
    step = settings.rounding_minutes
    rounded = int(math.floor(minutes / step + 0.5)) * step
    rounded = max(settings.min_minutes, min(settings.max_minutes, rounded))
    logger.debug(
        f"Recommended duration for {resolved.day_type.value} day: {rounded} min "
        f"({muscle_count} muscles, {plan.training_days} training days)"
    )
    return rounded


def day_targets_summary(plan: SplitPlan) -> dict[DayType, dict[MuscleGroup, float]]:
    """Targets for each distinct training day type in the plan."""
    summary: dict[DayType, dict[MuscleGroup, float]] = {}
    for day in _training_days(plan):
        summary.setdefault(day.day_type, targets_for_day(plan, day))
    return summary
