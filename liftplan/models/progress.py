"""Persisted progression state for one exercise."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExerciseProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    last_weight: float = Field(ge=0)
    next_weight: float = Field(ge=0)
    fail_streak: int = Field(default=0, ge=0)
    last_updated: datetime
