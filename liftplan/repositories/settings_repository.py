"""Split plan and preferred session length."""
from __future__ import annotations

from threading import RLock
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from liftplan.core.exceptions import PersistenceError, ValidationError
from liftplan.models.split_plan import SplitPlan
from liftplan.repositories.persistence import Persistence

PLAN_KEY = "split_plan_v1"
DURATION_KEY = "preferred_workout_duration_minutes"


class SettingsStore(Protocol):
    def load_plan(self) -> SplitPlan:
        ...

    def save_plan(self, plan: SplitPlan) -> None:
        ...

    def preferred_duration(self) -> int | None:
        ...

    def set_preferred_duration(self, minutes: int | None) -> None:
        ...


class SettingsRepository:
    def __init__(self, persistence: Persistence):
        self._persistence = persistence
        self._lock = RLock()

    def load_plan(self) -> SplitPlan:
        """Stored plan, or the default 4-day upper/lower plan when none is saved."""
        raw = self._persistence.load(PLAN_KEY)
        if raw is None:
            return SplitPlan.default_plan()
        try:
            return SplitPlan.model_validate(raw)
        except PydanticValidationError as e:
            raise PersistenceError(PLAN_KEY, f"Data corrupted: {e}", code="PS_CORRUPT")

    def save_plan(self, plan: SplitPlan) -> None:
        with self._lock:
            self._persistence.save(PLAN_KEY, plan.model_dump(mode="json"))

    def preferred_duration(self) -> int | None:
        """User-chosen session length, None when the user never overrode it."""
        raw = self._persistence.load(DURATION_KEY)
        if raw is None:
            return None
        return int(raw)

    def set_preferred_duration(self, minutes: int | None) -> None:
        with self._lock:
            if minutes is None:
                self._persistence.delete(DURATION_KEY)
                return
            if minutes <= 0:
                raise ValidationError("duration", f"must be > 0 minutes, got {minutes}")
            self._persistence.save(DURATION_KEY, minutes)
