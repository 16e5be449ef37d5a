"""Strategy selection from the training profile."""

from __future__ import annotations

import logging

from liftplan.config.generation_config_loader import (
    GenerationConfig,
    get_generation_config,
)
from liftplan.models.enums import WorkoutStrategy
from liftplan.services.generation_types import UserTrainingProfile

logger = logging.getLogger(__name__)


def select_strategy(
    profile: UserTrainingProfile, config: GenerationConfig | None = None
) -> WorkoutStrategy:
    """Pick the session strategy.

    Evaluated in order:
    1. Streak of ``deload_streak_days`` or more -> deload
    2. Least/most trained muscle volume ratio below ``balancing_ratio`` -> balancing
       (only muscles present in the trailing volume map are compared)
    3. Otherwise -> progressive

    Example:
        >>> select_strategy(UserTrainingProfile())
        <WorkoutStrategy.PROGRESSIVE: 'progressive'>
    """
    settings = (config or get_generation_config()).strategy

    if profile.consecutive_days >= settings.deload_streak_days:
        logger.info(f"Deload selected after {profile.consecutive_days} consecutive days")
        return WorkoutStrategy.DELOAD

    volumes = list(profile.weekly_volume.values())
    max_volume = max(volumes, default=0)
    min_volume = min(volumes, default=0)
    if max_volume > 0 and min_volume / max_volume < settings.balancing_ratio:
        logger.info(f"Balancing selected: volume ratio {min_volume}/{max_volume}")
        return WorkoutStrategy.BALANCING

    return WorkoutStrategy.PROGRESSIVE
