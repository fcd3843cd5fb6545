from datetime import datetime, timezone
from enum import Enum

from pydantic import field_validator
from sqlmodel import Field, SQLModel


def as_utc(value: datetime | None) -> datetime | None:
    """Normalize a timestamp to naive UTC; naive input is taken to be UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SessionStatus(str, Enum):
    active = "active"
    paused = "paused"
    completed = "completed"
    cancelled = "cancelled"


class Feeling(str, Enum):
    GOOD = "GOOD"
    TIGHT = "TIGHT"
    SORE = "SORE"
    INJURED = "INJURED"


class TargetType(str, Enum):
    reps = "reps"
    time = "time"


class LoggedSet(SQLModel):
    set_number: int = 1
    reps: int | None = Field(default=None, ge=0)
    duration_seconds: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)  # external load in kg, None = bodyweight
    completed: bool = False


class SessionExercise(SQLModel):
    exercise_id: str | None = None
    name: str
    target_type: TargetType = TargetType.reps
    target_sets: int | None = None
    target_reps: int | None = None
    primary_muscles: list[str] = Field(default_factory=list)
    secondary_muscles: list[str] = Field(default_factory=list)
    sets: list[LoggedSet] = Field(default_factory=list)


class WorkoutSession(SQLModel):
    id: str
    name: str = ""
    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    status: SessionStatus = SessionStatus.completed
    exercises: list[SessionExercise] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value):
        return as_utc(value)

    @property
    def performed_at(self) -> datetime:
        return self.end_time or self.start_time


class FeedbackReport(SQLModel):
    id: str | None = None
    body_part: str = Field(min_length=1)
    feeling: Feeling
    intensity: int = Field(default=0, ge=0, le=10)
    note: str | None = Field(default=None, max_length=300)
    created_at: datetime
    resolved_at: datetime | None = None

    @field_validator("created_at", "resolved_at")
    @classmethod
    def normalize_times(cls, value):
        return as_utc(value)


class HistorySnapshot(SQLModel):
    """Everything the engine needs for one user and one window."""

    sessions: list[WorkoutSession] = Field(default_factory=list)
    feedback: list[FeedbackReport] = Field(default_factory=list)
    now: datetime
    window_days: int | None = Field(default=None, ge=1)
    rest_hours_by_body_part: dict[str, int] | None = None

    @field_validator("now")
    @classmethod
    def normalize_now(cls, value):
        return as_utc(value)


class TimerSnapshot(SQLModel):
    elapsed_seconds: int = Field(default=0, ge=0)
    exercise_seconds: int = Field(default=0, ge=0)
    rest_seconds: int = Field(default=0, ge=0)
    is_running: bool = False
    is_resting: bool = False
    current_exercise_index: int = Field(default=0, ge=0)
