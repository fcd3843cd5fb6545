from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from trainload.models import WorkoutSession
from trainload.services.volume import counts_toward_load


@dataclass
class GeneralStats:
    total_workouts: int
    total_sets: int
    total_volume: float
    average_workout_seconds: int
    average_sets_per_workout: int
    average_volume_per_workout: int
    unique_exercises: int


@dataclass
class WeeklyVolume:
    week_start: date
    volume: float
    workouts: int
    sets: int


def session_duration_seconds(session: WorkoutSession) -> int:
    """Explicit duration if recorded, else end - start, else 0."""
    if session.duration_seconds:
        return session.duration_seconds
    if session.end_time is not None and session.end_time > session.start_time:
        return int((session.end_time - session.start_time).total_seconds())
    return 0


def _session_totals(session: WorkoutSession) -> tuple[int, float]:
    sets = 0
    volume = 0.0
    for exercise in session.exercises:
        for s in exercise.sets:
            if not s.completed:
                continue
            sets += 1
            if s.weight and s.reps:
                volume += s.weight * s.reps
    return sets, volume


def general_stats(sessions: Iterable[WorkoutSession]) -> GeneralStats:
    """Totals and per-workout-day averages over the sessions in the window."""
    workout_days: set[date] = set()
    exercises: set[str] = set()
    total_sets = 0
    total_volume = 0.0
    total_seconds = 0

    for session in sessions:
        if not counts_toward_load(session):
            continue
        workout_days.add(session.performed_at.date())
        total_seconds += session_duration_seconds(session)
        sets, volume = _session_totals(session)
        total_sets += sets
        total_volume += volume
        exercises.update(e.name for e in session.exercises if any(s.completed for s in e.sets))

    days = len(workout_days)
    return GeneralStats(
        total_workouts=days,
        total_sets=total_sets,
        total_volume=total_volume,
        average_workout_seconds=round(total_seconds / days) if days else 0,
        average_sets_per_workout=round(total_sets / days) if days else 0,
        average_volume_per_workout=round(total_volume / days) if days else 0,
        unique_exercises=len(exercises),
    )


def weekly_volume(sessions: Iterable[WorkoutSession]) -> list[WeeklyVolume]:
    """Loaded volume, workouts and completed sets per ISO week of performed_at, ordered by week ASC."""
    weeks: dict[date, WeeklyVolume] = {}
    for session in sessions:
        if not counts_toward_load(session):
            continue
        day = session.performed_at.date()
        week_start = day - timedelta(days=day.weekday())
        sets, volume = _session_totals(session)
        current = weeks.setdefault(week_start, WeeklyVolume(week_start, 0.0, 0, 0))
        current.volume += volume
        current.workouts += 1
        current.sets += sets
    return [weeks[key] for key in sorted(weeks)]
