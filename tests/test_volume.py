"""Unit tests for the volume aggregator."""

from datetime import datetime, timedelta

import pytest

from trainload.models import LoggedSet, SessionExercise, SessionStatus, WorkoutSession
from trainload.services.volume import (
    aggregate_volume,
    category_volumes,
    merge_aggregates,
    sessions_in_window,
)

NOW = datetime(2025, 6, 1, 12, 0)


# ---------------------------------------------------------------------------
# Helper factories
# ---------------------------------------------------------------------------


def _make_exercise(
    name: str,
    primary: list[str],
    secondary: list[str] | None = None,
    completed: int = 3,
    skipped: int = 0,
) -> SessionExercise:
    sets = [LoggedSet(set_number=i + 1, reps=8, weight=50.0, completed=True) for i in range(completed)]
    sets += [
        LoggedSet(set_number=completed + i + 1, reps=8, weight=50.0, completed=False)
        for i in range(skipped)
    ]
    return SessionExercise(
        name=name,
        primary_muscles=primary,
        secondary_muscles=secondary or [],
        sets=sets,
    )


def _make_session(
    session_id: str,
    hours_ago: float,
    *exercises: SessionExercise,
    status: SessionStatus = SessionStatus.completed,
) -> WorkoutSession:
    return WorkoutSession(
        id=session_id,
        start_time=NOW - timedelta(hours=hours_ago),
        status=status,
        exercises=list(exercises),
    )


# ---------------------------------------------------------------------------
# Weighting
# ---------------------------------------------------------------------------


def test_primary_and_secondary_weighting():
    """Primary muscles get 1.0 per completed set, secondary muscles 0.5."""
    session = _make_session(
        "s1", 24, _make_exercise("Bench Press", ["chest"], ["triceps"], completed=4)
    )

    aggregate = aggregate_volume([session])

    assert aggregate.volume_by_body_part() == {"chest": 4.0, "triceps": 2.0}
    assert aggregate.sets_by_body_part() == {"chest": 4, "triceps": 4}
    assert aggregate.total_completed_sets == 4


def test_only_completed_sets_count():
    session = _make_session("s1", 24, _make_exercise("Squat", ["quads"], completed=2, skipped=3))

    aggregate = aggregate_volume([session])

    assert aggregate.volume_by_body_part() == {"quadriceps": 2.0}
    assert aggregate.total_completed_sets == 2


def test_cancelled_sessions_are_ignored():
    cancelled = _make_session(
        "s1", 24, _make_exercise("Squat", ["quads"]), status=SessionStatus.cancelled
    )

    aggregate = aggregate_volume([cancelled])

    assert aggregate.body_parts == {}
    assert aggregate.total_completed_sets == 0


def test_active_and_paused_sessions_count():
    active = _make_session("s1", 2, _make_exercise("Curl", ["biceps"]), status=SessionStatus.active)
    paused = _make_session("s2", 30, _make_exercise("Curl", ["biceps"]), status=SessionStatus.paused)

    aggregate = aggregate_volume([active, paused])

    assert aggregate.volume_by_body_part() == {"biceps": 6.0}


def test_muscle_listed_as_primary_and_secondary_counts_once_as_primary():
    session = _make_session("s1", 24, _make_exercise("Row", ["Biceps"], ["biceps"], completed=2))

    aggregate = aggregate_volume([session])

    assert aggregate.volume_by_body_part() == {"biceps": 2.0}


def test_synonyms_regroup_into_one_body_part():
    """Different raw names for the same body part are summed into one bucket."""
    session = _make_session(
        "s1", 24, _make_exercise("Fly", ["pecs"], ["Pectoralis Major"], completed=2)
    )

    aggregate = aggregate_volume([session])

    assert aggregate.volume_by_body_part() == {"chest": 3.0}


def test_last_worked_is_latest_performed_at():
    older = _make_session("s1", 72, _make_exercise("Squat", ["quads"]))
    newer = _make_session("s2", 10, _make_exercise("Squat", ["quads"]))
    newer.end_time = newer.start_time + timedelta(hours=1)

    aggregate = aggregate_volume([newer, older])

    assert aggregate.last_worked()["quadriceps"] == NOW - timedelta(hours=9)
    assert aggregate.body_parts["quadriceps"].session_ids == {"s1", "s2"}


def test_trend_groups_volume_per_day():
    morning = _make_session("s1", 4, _make_exercise("Squat", ["quads"], completed=2))
    evening = _make_session("s2", 2, _make_exercise("Lunge", ["quads"], completed=3))

    aggregate = aggregate_volume([morning, evening])

    assert aggregate.body_parts["quadriceps"].trend == {NOW.date(): 5.0}


def test_exercise_without_completed_sets_does_not_touch_body_part():
    session = _make_session("s1", 24, _make_exercise("Squat", ["quads"], completed=0, skipped=3))

    aggregate = aggregate_volume([session])

    assert aggregate.body_parts == {}
    assert aggregate.session_ids == set()


# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------


def test_sessions_in_window_excludes_old_and_future_sessions():
    inside = _make_session("in", 24 * 6)
    too_old = _make_session("old", 24 * 8)
    future = _make_session("future", -2)

    result = sessions_in_window([inside, too_old, future], NOW, 7)

    assert [s.id for s in result] == ["in"]


# ---------------------------------------------------------------------------
# Associativity
# ---------------------------------------------------------------------------


def _sample_sessions() -> list[WorkoutSession]:
    return [
        _make_session("a1", 10, _make_exercise("Bench", ["chest"], ["triceps", "front deltoids"])),
        _make_session("a2", 50, _make_exercise("Row", ["lats"], ["biceps"], completed=5)),
        _make_session("b1", 30, _make_exercise("Squat", ["quads"], ["glutes"], completed=4)),
        _make_session("b2", 90, _make_exercise("Dip", ["triceps"], ["chest"], completed=2)),
        _make_session(
            "b3", 5, _make_exercise("Curl", ["biceps"]), _make_exercise("Plank", ["core"])
        ),
    ]


@pytest.mark.parametrize("split", [0, 1, 2, 3, 5])
def test_aggregation_is_associative(split: int):
    """Aggregating A ∪ B equals merging the aggregates of A and B."""
    sessions = _sample_sessions()
    part_a, part_b = sessions[:split], sessions[split:]

    whole = aggregate_volume(sessions)
    merged = merge_aggregates(aggregate_volume(part_a), aggregate_volume(part_b))

    assert merged.volume_by_body_part() == whole.volume_by_body_part()
    assert merged.last_worked() == whole.last_worked()
    assert merged.sets_by_body_part() == whole.sets_by_body_part()
    assert merged.total_completed_sets == whole.total_completed_sets
    assert merged.category_sets == whole.category_sets
    for slug, bp in whole.body_parts.items():
        assert merged.body_parts[slug].trend == bp.trend
        assert merged.body_parts[slug].session_ids == bp.session_ids


def test_aggregation_is_order_independent():
    sessions = _sample_sessions()

    forward = aggregate_volume(sessions)
    backward = aggregate_volume(list(reversed(sessions)))

    assert forward.volume_by_body_part() == backward.volume_by_body_part()
    assert forward.last_worked() == backward.last_worked()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def test_category_volumes_fold_slugs_into_six_categories():
    session = _make_session(
        "s1",
        24,
        _make_exercise("Curl", ["biceps"], ["forearms"], completed=2),
        _make_exercise("Pushdown", ["triceps"], completed=3),
        _make_exercise("Odd", ["hip flexors"], completed=4),
    )

    volumes = {v.category: v for v in category_volumes(aggregate_volume([session]))}

    assert list(volumes) == ["Chest", "Back", "Shoulders", "Arms", "Legs", "Core"]
    assert volumes["Arms"].volume == 6.0  # 2 + 1 (forearms) + 3
    assert volumes["Arms"].completed_sets == 5  # each exercise counted once per category
    assert volumes["Legs"].volume == 0.0  # unmapped slugs stay out of the distribution
    assert volumes["Chest"].completed_sets == 0
