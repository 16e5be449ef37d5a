"""Weekly split plan: training days, per-muscle weekly targets, 7 day slots."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from liftplan.models.enums import DayType, MuscleGroup, SplitType

DEFAULT_WEEKLY_SETS = 20.0
DAYS_PER_WEEK = 7

_D = DayType
SPLIT_TEMPLATES: dict[tuple[SplitType, int], tuple[DayType, ...]] = {
    (SplitType.UPPER_LOWER, 4): (_D.UPPER, _D.LOWER, _D.REST, _D.UPPER, _D.LOWER, _D.REST, _D.REST),
    (SplitType.HYBRID, 5): (_D.PUSH, _D.PULL, _D.LEGS, _D.REST, _D.UPPER, _D.LOWER, _D.REST),
    (SplitType.PUSH_PULL_LEGS, 6): (_D.PUSH, _D.PULL, _D.LEGS, _D.PUSH, _D.PULL, _D.LEGS, _D.REST),
    (SplitType.FULL_BODY, 4): (_D.FULL, _D.REST, _D.FULL, _D.REST, _D.FULL, _D.REST, _D.REST),
    (SplitType.FULL_BODY, 5): (_D.FULL, _D.REST, _D.FULL, _D.REST, _D.FULL, _D.REST, _D.FULL),
    (SplitType.FULL_BODY, 6): (_D.FULL, _D.REST, _D.FULL, _D.REST, _D.FULL, _D.REST, _D.FULL),
    (SplitType.UPPER_LOWER, 5): (_D.UPPER, _D.LOWER, _D.REST, _D.UPPER, _D.LOWER, _D.UPPER, _D.REST),
    (SplitType.UPPER_LOWER, 6): (_D.UPPER, _D.LOWER, _D.UPPER, _D.LOWER, _D.UPPER, _D.LOWER, _D.REST),
    (SplitType.PUSH_PULL_LEGS, 4): (_D.PUSH, _D.PULL, _D.LEGS, _D.REST, _D.PUSH, _D.REST, _D.REST),
    (SplitType.PUSH_PULL_LEGS, 5): (_D.PUSH, _D.PULL, _D.LEGS, _D.REST, _D.PUSH, _D.PULL, _D.REST),
    (SplitType.HYBRID, 4): (_D.UPPER, _D.LOWER, _D.REST, _D.PUSH, _D.PULL, _D.REST, _D.REST),
    (SplitType.HYBRID, 6): (_D.PUSH, _D.PULL, _D.LEGS, _D.UPPER, _D.LOWER, _D.PUSH, _D.REST),
}
FALLBACK_TEMPLATE = SPLIT_TEMPLATES[(SplitType.UPPER_LOWER, 4)]

_M = MuscleGroup
_LOWER_BODY = (_M.QUADS, _M.HAMSTRINGS, _M.GLUTES, _M.CALVES, _M.ABS)
DAY_TYPE_MUSCLES: dict[DayType, tuple[MuscleGroup, ...]] = {
    DayType.PUSH: (_M.CHEST_UPPER, _M.CHEST_LOWER, _M.SHOULDER_FRONT, _M.SHOULDER_SIDE, _M.TRICEPS),
    DayType.PULL: (_M.BACK_WIDTH, _M.BACK_THICKNESS, _M.SHOULDER_REAR, _M.BICEPS),
    DayType.LEGS: _LOWER_BODY,
    DayType.UPPER: (
        _M.CHEST_UPPER,
        _M.CHEST_LOWER,
        _M.BACK_WIDTH,
        _M.BACK_THICKNESS,
        _M.SHOULDER_FRONT,
        _M.SHOULDER_SIDE,
        _M.SHOULDER_REAR,
    ),
    DayType.LOWER: _LOWER_BODY,
    DayType.FULL: tuple(MuscleGroup),
    DayType.REST: (),
}


def template_for(split_type: SplitType, training_days: int) -> tuple[DayType, ...]:
    """Day-type layout for a split; unknown combinations use 4-day upper/lower."""
    return SPLIT_TEMPLATES.get((split_type, training_days), FALLBACK_TEMPLATE)


def default_muscles(day_type: DayType) -> tuple[MuscleGroup, ...]:
    return DAY_TYPE_MUSCLES[day_type]


def default_targets() -> dict[MuscleGroup, float]:
    return {muscle: DEFAULT_WEEKLY_SETS for muscle in MuscleGroup}


class SplitDayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_index: int = Field(ge=0)
    day_type: DayType
    custom_muscles: tuple[MuscleGroup, ...] | None = None

    @property
    def is_rest(self) -> bool:
        return self.day_type == DayType.REST

    def resolved_muscles(self) -> tuple[MuscleGroup, ...]:
        """Custom muscle list when set, otherwise the day type default."""
        if self.custom_muscles is not None:
            return self.custom_muscles
        return default_muscles(self.day_type)


class SplitPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    training_days: int = Field(ge=0, le=DAYS_PER_WEEK)
    split_type: SplitType
    weekly_targets: dict[MuscleGroup, float] = Field(default_factory=default_targets)
    days: tuple[SplitDayConfig, ...] = ()

    @field_validator("weekly_targets")
    @classmethod
    def validate_weekly_targets(cls, v: dict[MuscleGroup, float]) -> dict[MuscleGroup, float]:
        for muscle, target in v.items():
            if target < 0:
                raise ValueError(f"weekly target for {muscle.value} must be >= 0, got {target}")
        return v

    @classmethod
    def apply_template(
        cls,
        split_type: SplitType,
        training_days: int,
        weekly_targets: dict[MuscleGroup, float] | None = None,
    ) -> "SplitPlan":
        """Build a plan whose day slots follow the split template."""
        template = template_for(split_type, training_days)
        return cls(
            training_days=training_days,
            split_type=split_type,
            weekly_targets=weekly_targets if weekly_targets is not None else default_targets(),
            days=tuple(
                SplitDayConfig(day_index=index, day_type=day_type)
                for index, day_type in enumerate(template)
            ),
        )

    @classmethod
    def default_plan(cls) -> "SplitPlan":
        """4-day upper/lower with 20 weekly sets for every muscle."""
        return cls.apply_template(SplitType.UPPER_LOWER, 4)

    def with_targets(self, weekly_targets: dict[MuscleGroup, float]) -> "SplitPlan":
        return self.model_copy(update={"weekly_targets": dict(weekly_targets)})

    def with_day(self, day: SplitDayConfig) -> "SplitPlan":
        """Replace the slot at ``day.day_index``."""
        days = tuple(day if slot.day_index == day.day_index else slot for slot in self.days)
        return self.model_copy(update={"days": days})

    def day_index_for_date(self, on: date) -> int:
        """Monday-based slot index for a calendar date, clamped to the plan."""
        if not self.days:
            return 0
        return max(0, min(on.weekday(), len(self.days) - 1))

    def day_for_date(self, on: date) -> SplitDayConfig:
        if not self.days:
            return SplitDayConfig(day_index=0, day_type=DayType.REST)
        index = self.day_index_for_date(on)
        return self.days[index].model_copy(update={"day_index": index})
