"""Tests for the training profile builder and strategy selection."""

from datetime import datetime

import pytest

from liftplan.config.generation_config_loader import GenerationConfig, StrategyConfig
from liftplan.models.enums import MuscleGroup, WorkoutStrategy
from liftplan.services.generation_types import UserTrainingProfile
from liftplan.services.strategy_selector import select_strategy
from liftplan.services.training_profile import (
    build_training_profile,
    completion_rates,
    consecutive_days,
    sort_newest_first,
)

from tests.conftest import NOW, days_ago, make_log, make_session


class TestCompletionRates:
    def test_rate_per_lowercase_name(self):
        sessions = [
            make_session(
                days_ago(1),
                make_log("Squat", reps=(5, 5)),
                make_log("Squat", reps=(5, 5), completed=False),
            ),
            make_session(days_ago(2), make_log("Leg Curl", reps=(10,))),
        ]
        rates = completion_rates(sessions, window=20)
        assert rates == {"squat": 0.5, "leg curl": 1.0}

    def test_window_limits_sessions(self):
        sessions = sort_newest_first(
            [
                make_session(days_ago(1), make_log("Squat")),
                make_session(days_ago(2), make_log("Squat", completed=False)),
            ]
        )
        assert completion_rates(sessions, window=1) == {"squat": 1.0}

    def test_logs_without_sets_are_ignored(self):
        sessions = [make_session(days_ago(1), make_log("Plank", reps=()))]
        assert completion_rates(sessions, window=20) == {}


class TestConsecutiveDays:
    def test_streak_breaks_on_gap(self):
        sessions = sort_newest_first(
            make_session(days_ago(d)) for d in (0, 1, 2, 5)
        )
        assert consecutive_days(sessions, NOW) == 3

    def test_same_day_sessions_each_count(self):
        sessions = sort_newest_first(
            [make_session(days_ago(1)), make_session(days_ago(1, hours=3))]
        )
        assert consecutive_days(sessions, NOW) == 2

    def test_uses_calendar_days(self):
        # 23:00 two days back and 01:00 yesterday are one calendar day apart
        sessions = [
            make_session(datetime(2024, 3, 12, 1, 0)),
            make_session(datetime(2024, 3, 11, 23, 0)),
        ]
        assert consecutive_days(sessions, NOW) == 2

    def test_no_recent_session(self):
        assert consecutive_days([make_session(days_ago(3))], NOW) == 0
        assert consecutive_days([], NOW) == 0


class TestBuildTrainingProfile:
    def test_empty_history(self, catalog, config):
        profile = build_training_profile([], catalog, NOW, config)
        assert profile == UserTrainingProfile()

    def test_last_worked_is_newest_primary_use(self, catalog, config):
        sessions = [
            make_session(days_ago(4), make_log("Squat")),
            make_session(days_ago(1), make_log("Leg Press")),
        ]
        profile = build_training_profile(sessions, catalog, NOW, config)

        assert profile.last_worked[MuscleGroup.QUADS] == days_ago(1)
        # Glutes are only secondary for both exercises
        assert MuscleGroup.GLUTES not in profile.last_worked

    def test_weekly_volume_counts_completed_primary_sets(self, catalog, config):
        sessions = [
            make_session(days_ago(1), make_log("Bench Press", reps=(8, 8, 8))),
            make_session(days_ago(2), make_log("Bench Press", reps=(8, 8), completed=False)),
            make_session(days_ago(9), make_log("Bench Press", reps=(8, 8, 8))),
            make_session(days_ago(1), make_log("Mystery Move", reps=(8,))),
        ]
        profile = build_training_profile(sessions, catalog, NOW, config)

        assert profile.weekly_volume == {MuscleGroup.CHEST_LOWER: 3}
        assert profile.volume_for(MuscleGroup.TRICEPS) == 0

    def test_recent_sessions_are_capped_and_ordered(self, catalog, config):
        sessions = [make_session(days_ago(d)) for d in range(15)]
        profile = build_training_profile(reversed(sessions), catalog, NOW, config)

        assert len(profile.recent_sessions) == 10
        assert profile.recent_sessions[0].date == days_ago(0)

    def test_history_is_not_modified(self, catalog, config):
        sessions = [make_session(days_ago(2), make_log("Squat")), make_session(days_ago(1))]
        snapshot = [s.model_copy(deep=True) for s in sessions]
        build_training_profile(sessions, catalog, NOW, config)
        assert sessions == snapshot


class TestSelectStrategy:
    def test_progressive_by_default(self, config):
        assert select_strategy(UserTrainingProfile(), config) == WorkoutStrategy.PROGRESSIVE

    def test_deload_after_five_day_streak(self, config):
        profile = UserTrainingProfile(consecutive_days=5)
        assert select_strategy(profile, config) == WorkoutStrategy.DELOAD
        assert select_strategy(UserTrainingProfile(consecutive_days=4), config) != WorkoutStrategy.DELOAD

    def test_deload_wins_over_balancing(self, config):
        profile = UserTrainingProfile(
            consecutive_days=6,
            weekly_volume={MuscleGroup.QUADS: 12, MuscleGroup.BICEPS: 1},
        )
        assert select_strategy(profile, config) == WorkoutStrategy.DELOAD

    @pytest.mark.parametrize(
        "volume, expected",
        [
            ({MuscleGroup.QUADS: 12, MuscleGroup.BICEPS: 4}, WorkoutStrategy.BALANCING),
            ({MuscleGroup.QUADS: 10, MuscleGroup.BICEPS: 5}, WorkoutStrategy.PROGRESSIVE),
            ({MuscleGroup.QUADS: 10}, WorkoutStrategy.PROGRESSIVE),
        ],
    )
    def test_balancing_uses_min_max_ratio(self, config, volume, expected):
        profile = UserTrainingProfile(weekly_volume=volume)
        assert select_strategy(profile, config) == expected

    def test_thresholds_come_from_config(self):
        config = GenerationConfig(strategy=StrategyConfig(deload_streak_days=2))
        assert select_strategy(UserTrainingProfile(consecutive_days=2), config) == WorkoutStrategy.DELOAD
