"""Workout history records.

Sessions are immutable once completed: every model here is frozen and holds
tuples, so history handed to the engine cannot be altered by it.
"""
from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExerciseSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    weight: float = Field(default=0.0, ge=0, description="Working weight in pounds")
    reps: int = Field(default=1, ge=1, le=100)
    completed: bool = True


class ExerciseLog(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    sets: tuple[ExerciseSet, ...] = ()
    notes: str = ""

    @property
    def completed_sets(self) -> list[ExerciseSet]:
        return [s for s in self.sets if s.completed]

    @property
    def key(self) -> str:
        return self.name.lower()


class WorkoutSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    date: datetime
    exercises: tuple[ExerciseLog, ...] = ()
    notes: str = ""
    duration: float = Field(default=0.0, ge=0, description="Elapsed seconds")
    calories_burned: int = Field(default=0, ge=0)

    @field_validator("date")
    @classmethod
    def to_naive_local(cls, v: datetime) -> datetime:
        """Offset-carrying timestamps are stored as naive local time."""
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def total_sets(self) -> int:
        return sum(len(log.sets) for log in self.exercises)

    @property
    def completed_set_count(self) -> int:
        return sum(len(log.completed_sets) for log in self.exercises)

    def log_for(self, name: str) -> ExerciseLog | None:
        """First log whose name matches case-insensitively."""
        key = name.lower()
        return next((log for log in self.exercises if log.key == key), None)
