"""
Generation Configuration Loader

Type-safe loader for the constants that drive workout generation:
profile windows, strategy thresholds, scoring weights, recovery windows,
selection budget, set allocation caps/rep ranges, progression rules and
the caller-level planner loop.

Configuration is loaded from generation_config.yaml and validated by the
frozen dataclasses below. Every section has defaults matching the packaged
file, so ``GenerationConfig()`` is usable without touching disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Any

import yaml


class GenerationConfigLoadError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class GenerationConfigValidationError(GenerationConfigLoadError):
    """Raised when configuration fails validation."""


def _check_range(name: str, value: tuple[int, int]) -> None:
    if len(value) != 2:
        raise GenerationConfigValidationError(f"{name} must be [min, max], got {value}")
    low, high = value
    if not 0 < low <= high:
        raise GenerationConfigValidationError(
            f"{name} must satisfy 0 < min <= max, got {list(value)}"
        )


@dataclass(frozen=True)
class ProfileConfig:
    """History windows used by the training profile builder."""

    recent_sessions: int = 10
    completion_window_sessions: int = 20
    volume_window_days: int = 7
    streak_gap_days: int = 1

    def __post_init__(self):
        for field_name, value in [
            ("recent_sessions", self.recent_sessions),
            ("completion_window_sessions", self.completion_window_sessions),
            ("volume_window_days", self.volume_window_days),
        ]:
            if value <= 0:
                raise GenerationConfigValidationError(f"{field_name} must be > 0, got {value}")
        if self.streak_gap_days < 0:
            raise GenerationConfigValidationError(
                f"streak_gap_days must be >= 0, got {self.streak_gap_days}"
            )


@dataclass(frozen=True)
class StrategyConfig:
    """Decision table thresholds for strategy selection."""

    deload_streak_days: int = 5
    balancing_ratio: float = 0.5

    def __post_init__(self):
        if self.deload_streak_days <= 0:
            raise GenerationConfigValidationError(
                f"deload_streak_days must be > 0, got {self.deload_streak_days}"
            )
        if not 0 < self.balancing_ratio <= 1:
            raise GenerationConfigValidationError(
                f"balancing_ratio ({self.balancing_ratio}) must be between 0 and 1"
            )


@dataclass(frozen=True)
class FocusWeights:
    """Focus alignment bonuses and penalties."""

    strength_match: float = 12
    strength_mismatch: float = -8
    balanced_mobility: float = 8
    balanced_default: float = 6
    mobility_match: float = 28
    mobility_mismatch: float = -12
    mobility_unloaded_bonus: float = 10
    mobility_compound_penalty: float = -4


@dataclass(frozen=True)
class ScoringConfig:
    """Additive factor weights for exercise scoring."""

    primary_target_bonus: float = 20
    secondary_target_bonus: float = 10
    fully_recovered_bonus: float = 30
    adequate_recovery_bonus: float = 15
    recently_trained_penalty: float = -10
    adequate_recovery_fraction: float = 0.7
    completion_rate_weight: float = 15
    high_completion_rate: float = 0.8
    compound_bonus: float = 15
    familiarity_bonus: float = 10
    deload_compound_bonus: float = 10
    balancing_bonus: float = 20
    low_volume_threshold: int = 10
    focus: FocusWeights = field(default_factory=FocusWeights)

    def __post_init__(self):
        if not 0 < self.adequate_recovery_fraction <= 1:
            raise GenerationConfigValidationError(
                f"adequate_recovery_fraction ({self.adequate_recovery_fraction}) must be between 0 and 1"
            )
        if not 0 <= self.high_completion_rate <= 1:
            raise GenerationConfigValidationError(
                f"high_completion_rate ({self.high_completion_rate}) must be between 0 and 1"
            )
        if self.recently_trained_penalty > 0:
            raise GenerationConfigValidationError(
                f"recently_trained_penalty must be <= 0 (penalty), got {self.recently_trained_penalty}"
            )


DEFAULT_RECOVERY_WINDOWS: dict[str, float] = {
    "chest": 3.0,
    "back": 3.0,
    "quads": 3.0,
    "hamstrings": 3.0,
    "glutes": 3.0,
    "calves": 3.0,
    "shoulders": 2.5,
    "biceps": 2.0,
    "triceps": 2.0,
    "abs": 1.5,
}


@dataclass(frozen=True)
class RecoveryConfig:
    """Recovery window in days per training group."""

    default: float = 3.0
    windows: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_RECOVERY_WINDOWS))

    def __post_init__(self):
        if self.default <= 0:
            raise GenerationConfigValidationError(f"default recovery window must be > 0, got {self.default}")
        for group, days in self.windows.items():
            if days <= 0:
                raise GenerationConfigValidationError(
                    f"recovery window for {group} must be > 0, got {days}"
                )

    def window_for(self, group: str) -> float:
        return self.windows.get(group, self.default)


@dataclass(frozen=True)
class SelectionConfig:
    """Planning heuristic for the exercise-count budget."""

    sets_per_exercise: int = 3
    minutes_per_set: int = 3
    deload_sets_per_exercise: int = 2

    def __post_init__(self):
        if self.sets_per_exercise <= 0 or self.minutes_per_set <= 0:
            raise GenerationConfigValidationError(
                "sets_per_exercise and minutes_per_set must be > 0"
            )
        if not 0 < self.deload_sets_per_exercise <= self.sets_per_exercise:
            raise GenerationConfigValidationError(
                f"deload_sets_per_exercise ({self.deload_sets_per_exercise}) must be between 1 "
                f"and sets_per_exercise ({self.sets_per_exercise})"
            )

    @property
    def minutes_per_exercise(self) -> int:
        return self.sets_per_exercise * self.minutes_per_set


@dataclass(frozen=True)
class SetCaps:
    """Per-exercise set caps used by the allocator."""

    mobility_compound: int = 4
    mobility_isolation: int = 3
    strength_compound: int = 5
    strength_isolation_small: int = 5
    strength_isolation: int = 4

    def __post_init__(self):
        for field_name, value in self.__dict__.items():
            if value < 1:
                raise GenerationConfigValidationError(f"{field_name} cap must be >= 1, got {value}")


@dataclass(frozen=True)
class RepRanges:
    """Prescribed rep ranges by exercise type, as (min, max)."""

    mobility: tuple[int, int] = (8, 15)
    compound_bodyweight: tuple[int, int] = (8, 15)
    compound_loaded: tuple[int, int] = (5, 10)
    abs_isolation: tuple[int, int] = (12, 20)
    isolation: tuple[int, int] = (10, 18)

    def __post_init__(self):
        for field_name, value in self.__dict__.items():
            _check_range(field_name, value)


@dataclass(frozen=True)
class AllocationConfig:
    """Set allocator configuration."""

    minutes_per_set: float = 2.5
    secondary_credit: float = 0.5
    max_sets: SetCaps = field(default_factory=SetCaps)
    rep_ranges: RepRanges = field(default_factory=RepRanges)

    def __post_init__(self):
        if self.minutes_per_set <= 0:
            raise GenerationConfigValidationError(
                f"minutes_per_set must be > 0, got {self.minutes_per_set}"
            )
        if not 0 <= self.secondary_credit <= 1:
            raise GenerationConfigValidationError(
                f"secondary_credit ({self.secondary_credit}) must be between 0 and 1"
            )


@dataclass(frozen=True)
class ProgressionConfig:
    """Progressive overload / deload rules."""

    increment_lb: float = 5
    deload_factor: float = 0.9
    stall_limit: int = 3
    compound_rep_range: tuple[int, int] = (5, 10)
    isolation_rep_range: tuple[int, int] = (10, 20)

    def __post_init__(self):
        if self.increment_lb <= 0:
            raise GenerationConfigValidationError(f"increment_lb must be > 0, got {self.increment_lb}")
        if not 0 < self.deload_factor < 1:
            raise GenerationConfigValidationError(
                f"deload_factor ({self.deload_factor}) must be between 0 and 1"
            )
        if self.stall_limit < 1:
            raise GenerationConfigValidationError(f"stall_limit must be >= 1, got {self.stall_limit}")
        _check_range("compound_rep_range", self.compound_rep_range)
        _check_range("isolation_rep_range", self.isolation_rep_range)


@dataclass(frozen=True)
class RecommendedDurationConfig:
    """Recommended session length by day type."""

    base_minutes: dict[str, int] = field(
        default_factory=lambda: {
            "push": 45,
            "pull": 45,
            "legs": 50,
            "lower": 50,
            "upper": 50,
            "full": 55,
        }
    )
    training_day_adjustment: dict[int, int] = field(default_factory=lambda: {4: 10, 5: 5})
    extra_minutes_per_muscle: int = 2
    muscles_included: int = 4
    min_minutes: int = 30
    max_minutes: int = 75
    rounding_minutes: int = 5

    def __post_init__(self):
        if not 0 < self.min_minutes <= self.max_minutes:
            raise GenerationConfigValidationError(
                f"min_minutes ({self.min_minutes}) must be <= max_minutes ({self.max_minutes})"
            )
        if self.rounding_minutes <= 0:
            raise GenerationConfigValidationError(
                f"rounding_minutes must be > 0, got {self.rounding_minutes}"
            )


@dataclass(frozen=True)
class PlannerConfig:
    """Caller-level retry loop that grows duration to improve coverage."""

    max_attempts: int = 8
    duration_step_minutes: int = 10
    max_duration_minutes: int = 120
    coverage_goal: float = 0.98
    coverage_tolerance: float = 0.01
    recovery_muscles: tuple[str, ...] = (
        "abs",
        "glutes",
        "hamstrings",
        "shoulder_rear",
        "back_thickness",
    )
    recommended_duration: RecommendedDurationConfig = field(
        default_factory=RecommendedDurationConfig
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise GenerationConfigValidationError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.duration_step_minutes <= 0:
            raise GenerationConfigValidationError(
                f"duration_step_minutes must be > 0, got {self.duration_step_minutes}"
            )
        if not 0 < self.coverage_goal <= 1:
            raise GenerationConfigValidationError(
                f"coverage_goal ({self.coverage_goal}) must be between 0 and 1"
            )


@dataclass(frozen=True)
class GenerationConfig:
    """Unified generation configuration."""

    version: str = "1.0.0"
    last_updated: str = ""
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    recovery: RecoveryConfig = field(default_factory=RecoveryConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    allocation: AllocationConfig = field(default_factory=AllocationConfig)
    progression: ProgressionConfig = field(default_factory=ProgressionConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)


class GenerationConfigLoader:
    """Loader for generation configuration (thread-safe, reloadable)."""

    def __init__(self, config_path: Path | None = None):
        self._lock = RLock()
        self._config: GenerationConfig | None = None
        self._config_path = Path(config_path) if config_path else self._default_config_path()
        self._reload_count = 0

        self._load_config()

    @staticmethod
    def _default_config_path() -> Path:
        """Get default configuration file path."""
        return Path(__file__).parent / "generation_config.yaml"

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise GenerationConfigLoadError(
                f"Configuration file not found: {self._config_path}"
            )
        except yaml.YAMLError as e:
            raise GenerationConfigLoadError(
                f"Failed to parse YAML configuration: {e}",
                details={"file_path": str(self._config_path)},
            )

        try:
            self._config = self._parse_config(data)
            self._reload_count += 1
        except GenerationConfigValidationError:
            raise
        except Exception as e:
            raise GenerationConfigLoadError(
                f"Failed to parse configuration: {e}",
                details={"file_path": str(self._config_path)},
            )

    def _parse_config(self, data: dict[str, Any]) -> GenerationConfig:
        """Parse raw YAML data into GenerationConfig.

        Args:
            data: Raw YAML data as dictionary.

        Returns:
            Parsed GenerationConfig.

        Raises:
            GenerationConfigValidationError: If validation fails.
        """
        scoring_data = dict(data.get("scoring", {}))
        focus_config = FocusWeights(**scoring_data.pop("focus", {}))
        scoring_config = ScoringConfig(focus=focus_config, **scoring_data)

        recovery_data = dict(data.get("recovery_windows", {}))
        default_window = recovery_data.pop("default", 3.0)
        windows = dict(DEFAULT_RECOVERY_WINDOWS)
        windows.update({str(k): float(v) for k, v in recovery_data.items()})
        recovery_config = RecoveryConfig(default=float(default_window), windows=windows)

        allocation_data = dict(data.get("allocation", {}))
        caps = SetCaps(**allocation_data.pop("max_sets", {}))
        ranges = RepRanges(
            **{
                name: tuple(value)
                for name, value in allocation_data.pop("rep_ranges", {}).items()
            }
        )
        allocation_config = AllocationConfig(max_sets=caps, rep_ranges=ranges, **allocation_data)

        progression_data = dict(data.get("progression", {}))
        for key in ("compound_rep_range", "isolation_rep_range"):
            if key in progression_data:
                progression_data[key] = tuple(progression_data[key])
        progression_config = ProgressionConfig(**progression_data)

        planner_data = dict(data.get("planner", {}))
        recommended = RecommendedDurationConfig(**planner_data.pop("recommended_duration", {}))
        if "recovery_muscles" in planner_data:
            planner_data["recovery_muscles"] = tuple(planner_data["recovery_muscles"])
        planner_config = PlannerConfig(recommended_duration=recommended, **planner_data)

        return GenerationConfig(
            version=str(data.get("version", "1.0.0")),
            last_updated=str(data.get("last_updated", "")),
            profile=ProfileConfig(**data.get("profile", {})),
            strategy=StrategyConfig(**data.get("strategy", {})),
            scoring=scoring_config,
            recovery=recovery_config,
            selection=SelectionConfig(**data.get("selection", {})),
            allocation=allocation_config,
            progression=progression_config,
            planner=planner_config,
        )

    @property
    def config(self) -> GenerationConfig:
        """Get current configuration (thread-safe).

        Returns:
            Current GenerationConfig instance.
        """
        with self._lock:
            if self._config is None:
                self._load_config()
            return self._config

    def reload(self) -> None:
        """Force reload configuration from file."""
        with self._lock:
            self._load_config()

    @property
    def reload_count(self) -> int:
        """Get number of times configuration has been loaded."""
        return self._reload_count


_loader_instance: GenerationConfigLoader | None = None
_loader_lock = RLock()


def get_generation_config_loader(config_path: Path | None = None) -> GenerationConfigLoader:
    """Get or create the shared GenerationConfigLoader.

    The path defaults to ``Settings.generation_config_path`` and then to the
    packaged generation_config.yaml.

    Example:
        >>> loader = get_generation_config_loader()
        >>> loader.config.selection.minutes_per_set
        3
    """
    global _loader_instance
    with _loader_lock:
        if _loader_instance is None:
            if config_path is None:
                from liftplan.config.settings import get_settings

                config_path = get_settings().generation_config_path
            _loader_instance = GenerationConfigLoader(config_path)
        return _loader_instance


def get_generation_config() -> GenerationConfig:
    """Get current generation configuration.

    Services take an explicit ``config`` argument; this is the default they
    fall back to when none is given.
    """
    return get_generation_config_loader().config
