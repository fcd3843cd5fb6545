from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from trainload.models import LoggedSet, WorkoutSession
from trainload.services.volume import counts_toward_load

DAY_BUCKET_MAX_DAYS = 31
WEEK_BUCKET_MAX_DAYS = 180
DEFAULT_TOP_N = 3


class Metric(str, Enum):
    weight = "weight"
    reps = "reps"


class Bucket(str, Enum):
    day = "day"
    week = "week"
    month = "month"


class PerformanceCategory(str, Enum):
    strength = "strength"
    endurance = "endurance"
    volume = "volume"


@dataclass
class PersonalRecord:
    exercise: str
    max_weight: float = 0.0
    max_reps: int = 0
    max_volume: float = 0.0
    average_reps: float = 0.0
    average_volume: float = 0.0
    frequency: float = 0.0
    last_workout_date: date | None = None
    muscle_groups: list[str] = field(default_factory=list)
    total_sets: int = 0
    max_duration_seconds: int = 0


@dataclass
class ProgressionPoint:
    date: date
    value: float


@dataclass
class TopPerformance:
    exercise: str
    metric: str
    value: float
    unit: str
    category: PerformanceCategory


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _is_loaded(s: LoggedSet) -> bool:
    return s.weight is not None and s.weight > 0


def _set_volume(s: LoggedSet) -> float | None:
    """Return weight * reps for externally loaded sets, None for bodyweight sets."""
    if not _is_loaded(s) or s.reps is None:
        return None
    return s.weight * s.reps


def _completed_exercise_sets(sessions: Iterable[WorkoutSession]):
    """Yield (session, exercise, completed_sets) for every exercise with completed work."""
    for session in sessions:
        if not counts_toward_load(session):
            continue
        for exercise in session.exercises:
            completed = [s for s in exercise.sets if s.completed]
            if completed:
                yield session, exercise, completed


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def bucket_start(day: date, bucket: Bucket) -> date:
    if bucket == Bucket.week:
        return day - timedelta(days=day.weekday())
    if bucket == Bucket.month:
        return day.replace(day=1)
    return day


def bucket_for_window(window_days: int) -> Bucket:
    if window_days <= DAY_BUCKET_MAX_DAYS:
        return Bucket.day
    if window_days <= WEEK_BUCKET_MAX_DAYS:
        return Bucket.week
    return Bucket.month


def personal_records(
    sessions: Iterable[WorkoutSession], window_days: int
) -> dict[str, PersonalRecord]:
    """Compute per-exercise bests and averages over the completed sets in the window."""
    records: dict[str, PersonalRecord] = {}
    totals: dict[str, dict] = {}

    for session, exercise, completed in _completed_exercise_sets(sessions):
        name = exercise.name
        record = records.get(name)
        if record is None:
            record = PersonalRecord(exercise=name)
            records[name] = record
            totals[name] = {"reps": 0, "volume": 0.0, "days": set()}
        for muscle in [*exercise.primary_muscles, *exercise.secondary_muscles]:
            if muscle not in record.muscle_groups:
                record.muscle_groups.append(muscle)

        day = session.performed_at.date()
        totals[name]["days"].add(day)
        if record.last_workout_date is None or day > record.last_workout_date:
            record.last_workout_date = day

        for s in completed:
            record.total_sets += 1
            if _is_loaded(s) and s.weight > record.max_weight:
                record.max_weight = s.weight
            if s.reps is not None:
                totals[name]["reps"] += s.reps
                record.max_reps = max(record.max_reps, s.reps)
            if s.duration_seconds is not None:
                record.max_duration_seconds = max(record.max_duration_seconds, s.duration_seconds)
            volume = _set_volume(s)
            if volume is not None:
                totals[name]["volume"] += volume
                record.max_volume = max(record.max_volume, volume)

    weeks = max(window_days, 1) / 7
    for name, record in records.items():
        record.average_reps = round(totals[name]["reps"] / record.total_sets, 1)
        record.average_volume = round(totals[name]["volume"] / record.total_sets, 1)
        record.frequency = round(len(totals[name]["days"]) / weeks, 2)
        if record.max_weight == 0:
            record.max_volume = 0.0

    return records


def progression_series(
    sessions: Iterable[WorkoutSession],
    exercise: str,
    metric: Metric,
    bucket: Bucket = Bucket.day,
) -> list[ProgressionPoint]:
    """Peak value of the metric per time bucket, ordered by date ASC.

    Each bucket keeps the maximum observed value, never a sum or average.
    """
    peaks: dict[date, float] = {}
    for session, ex, completed in _completed_exercise_sets(sessions):
        if ex.name != exercise:
            continue
        key = bucket_start(session.performed_at.date(), bucket)
        for s in completed:
            if metric == Metric.weight:
                value = s.weight if _is_loaded(s) else None
            else:
                value = s.reps
            if value is None:
                continue
            if key not in peaks or value > peaks[key]:
                peaks[key] = value

    return [ProgressionPoint(date=day, value=value) for day, value in sorted(peaks.items())]


def _ranked(candidates: list[TopPerformance], records: dict[str, PersonalRecord], n: int):
    def key(p: TopPerformance):
        last = records[p.exercise].last_workout_date
        return (-p.value, -(last.toordinal() if last else 0), p.exercise)

    return sorted(candidates, key=key)[:n]


def top_performances(
    records: dict[str, PersonalRecord], n: int = DEFAULT_TOP_N, unit: str = "kg"
) -> list[TopPerformance]:
    """Top-N strength, endurance and volume performances across all exercises.

    Bodyweight-only exercises (max_weight == 0) are ranked for endurance only.
    """
    strength: list[TopPerformance] = []
    endurance: list[TopPerformance] = []
    volume: list[TopPerformance] = []

    for name, record in records.items():
        loaded = record.max_weight > 0
        if loaded:
            strength.append(
                TopPerformance(name, "Max Weight", record.max_weight, unit, PerformanceCategory.strength)
            )
        if record.max_reps > 0:
            endurance.append(
                TopPerformance(name, "Max Reps", record.max_reps, "reps", PerformanceCategory.endurance)
            )
        if loaded and record.max_volume > 0:
            volume.append(
                TopPerformance(name, "Max Volume", record.max_volume, unit, PerformanceCategory.volume)
            )

    return [
        *_ranked(strength, records, n),
        *_ranked(endurance, records, n),
        *_ranked(volume, records, n),
    ]
