from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable

from trainload.models import SessionExercise, SessionStatus, WorkoutSession
from trainload.services.muscles import CATEGORIES, category_for, normalize_muscle

PRIMARY_WEIGHT = 1.0
SECONDARY_WEIGHT = 0.5


@dataclass
class BodyPartVolume:
    body_part: str
    volume: float = 0.0
    completed_sets: int = 0
    last_worked_at: datetime | None = None
    session_ids: set[str] = field(default_factory=set)
    worked_at: set[datetime] = field(default_factory=set)
    trend: dict[date, float] = field(default_factory=dict)


@dataclass
class CategoryVolume:
    category: str
    volume: float
    completed_sets: int


@dataclass
class VolumeAggregate:
    body_parts: dict[str, BodyPartVolume] = field(default_factory=dict)
    category_sets: dict[str, int] = field(default_factory=dict)
    total_completed_sets: int = 0
    session_ids: set[str] = field(default_factory=set)

    def volume_by_body_part(self) -> dict[str, float]:
        return {slug: bp.volume for slug, bp in self.body_parts.items()}

    def last_worked(self) -> dict[str, datetime]:
        return {
            slug: bp.last_worked_at
            for slug, bp in self.body_parts.items()
            if bp.last_worked_at is not None
        }

    def sets_by_body_part(self) -> dict[str, int]:
        return {slug: bp.completed_sets for slug, bp in self.body_parts.items()}


def counts_toward_load(session: WorkoutSession) -> bool:
    """Cancelled sessions never contribute to training load."""
    return session.status != SessionStatus.cancelled


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _completed_set_count(exercise: SessionExercise) -> int:
    return sum(1 for s in exercise.sets if s.completed)


def _muscle_weights(exercise: SessionExercise) -> dict[str, float]:
    """Return body-part slug -> per-set weight for one exercise.

    A muscle listed as both primary and secondary counts as primary.
    """
    primary = {m.strip().lower(): m for m in exercise.primary_muscles if m.strip()}
    secondary = {
        m.strip().lower(): m
        for m in exercise.secondary_muscles
        if m.strip() and m.strip().lower() not in primary
    }
    weights: dict[str, float] = defaultdict(float)
    for raw in primary.values():
        weights[normalize_muscle(raw)] += PRIMARY_WEIGHT
    for raw in secondary.values():
        weights[normalize_muscle(raw)] += SECONDARY_WEIGHT
    return dict(weights)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sessions_in_window(
    sessions: Iterable[WorkoutSession], now: datetime, window_days: int
) -> list[WorkoutSession]:
    """Return sessions performed within (now - window_days, now]."""
    since = now - timedelta(days=window_days)
    return [s for s in sessions if since < s.performed_at <= now]


def sessions_up_to(sessions: Iterable[WorkoutSession], now: datetime) -> list[WorkoutSession]:
    """Return every session performed at or before now."""
    return [s for s in sessions if s.performed_at <= now]


def aggregate_volume(sessions: Iterable[WorkoutSession]) -> VolumeAggregate:
    """Fold sessions into per-body-part training volume.

    Only completed sets of sessions that are not cancelled count. Primary
    muscles receive 1.0 per completed set, secondary muscles 0.5.
    """
    aggregate = VolumeAggregate()
    category_sets: dict[str, int] = defaultdict(int)

    for session in sessions:
        if not counts_toward_load(session):
            continue
        performed_at = session.performed_at
        day = performed_at.date()
        session_counted = False

        for exercise in session.exercises:
            set_count = _completed_set_count(exercise)
            if set_count == 0:
                continue
            session_counted = True
            aggregate.total_completed_sets += set_count

            weights = _muscle_weights(exercise)
            categories = {category_for(slug) for slug in weights} - {None}
            for category in categories:
                category_sets[category] += set_count

            for slug, weight in weights.items():
                bp = aggregate.body_parts.get(slug)
                if bp is None:
                    bp = BodyPartVolume(body_part=slug)
                    aggregate.body_parts[slug] = bp
                volume = weight * set_count
                bp.volume += volume
                bp.completed_sets += set_count
                bp.session_ids.add(session.id)
                bp.worked_at.add(performed_at)
                bp.trend[day] = bp.trend.get(day, 0.0) + volume
                if bp.last_worked_at is None or performed_at > bp.last_worked_at:
                    bp.last_worked_at = performed_at

        if session_counted:
            aggregate.session_ids.add(session.id)

    aggregate.category_sets = dict(category_sets)
    return aggregate


def merge_aggregates(a: VolumeAggregate, b: VolumeAggregate) -> VolumeAggregate:
    """Combine two aggregates of disjoint session sets."""
    merged = VolumeAggregate(
        total_completed_sets=a.total_completed_sets + b.total_completed_sets,
        session_ids=a.session_ids | b.session_ids,
    )
    for category in set(a.category_sets) | set(b.category_sets):
        merged.category_sets[category] = a.category_sets.get(category, 0) + b.category_sets.get(
            category, 0
        )

    for slug in set(a.body_parts) | set(b.body_parts):
        parts = [p for p in (a.body_parts.get(slug), b.body_parts.get(slug)) if p is not None]
        combined = BodyPartVolume(body_part=slug)
        for part in parts:
            combined.volume += part.volume
            combined.completed_sets += part.completed_sets
            combined.session_ids |= part.session_ids
            combined.worked_at |= part.worked_at
            for day, volume in part.trend.items():
                combined.trend[day] = combined.trend.get(day, 0.0) + volume
            if part.last_worked_at is not None and (
                combined.last_worked_at is None or part.last_worked_at > combined.last_worked_at
            ):
                combined.last_worked_at = part.last_worked_at
        merged.body_parts[slug] = combined

    return merged


def category_volumes(aggregate: VolumeAggregate) -> list[CategoryVolume]:
    """Roll body-part volume up into the six top-level categories, in fixed order."""
    volumes = {category: 0.0 for category in CATEGORIES}
    for slug, bp in aggregate.body_parts.items():
        category = category_for(slug)
        if category is not None:
            volumes[category] += bp.volume
    return [
        CategoryVolume(
            category=category,
            volume=volumes[category],
            completed_sets=aggregate.category_sets.get(category, 0),
        )
        for category in CATEGORIES
    ]
