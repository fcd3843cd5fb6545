"""Unit tests for the session timer state machine."""

from datetime import datetime

import pytest

from trainload.models import SessionExercise, TargetType, TimerSnapshot, WorkoutSession
from trainload.services import timer


def _running(**kwargs) -> TimerSnapshot:
    return TimerSnapshot(is_running=True, **kwargs)


def _make_session() -> WorkoutSession:
    return WorkoutSession(
        id="s1",
        start_time=datetime(2025, 6, 1, 12, 0),
        exercises=[
            SessionExercise(name="Bench Press", target_type=TargetType.reps),
            SessionExercise(name="Plank", target_type=TargetType.time),
        ],
    )


# ---------------------------------------------------------------------------
# Ticking
# ---------------------------------------------------------------------------


def test_tick_counts_elapsed_only_for_rep_exercise():
    snapshot = timer.tick(_running())

    assert snapshot.elapsed_seconds == 1
    assert snapshot.exercise_seconds == 0


def test_tick_counts_exercise_time_for_timed_exercise():
    snapshot = timer.advance(_running(), 5, timed=True)

    assert snapshot.elapsed_seconds == 5
    assert snapshot.exercise_seconds == 5


def test_paused_timer_does_not_move():
    snapshot = TimerSnapshot(elapsed_seconds=10, rest_seconds=30, is_resting=True)

    assert timer.advance(snapshot, 20, timed=True) == snapshot


def test_pause_toggles_running():
    snapshot = timer.start(TimerSnapshot())
    assert snapshot.is_running

    paused = timer.pause(snapshot)
    assert not paused.is_running
    assert timer.pause(paused).is_running


def test_rest_countdown_ends_resting_at_zero():
    snapshot = timer.log_set(_running(), 3)
    assert snapshot.is_resting
    assert snapshot.rest_seconds == 3

    snapshot = timer.advance(snapshot, 2)
    assert snapshot.rest_seconds == 1
    assert snapshot.is_resting

    snapshot = timer.tick(snapshot)
    assert snapshot.rest_seconds == 0
    assert not snapshot.is_resting
    assert snapshot.elapsed_seconds == 3


def test_exercise_counter_frozen_while_resting():
    snapshot = timer.start_rest(_running(exercise_seconds=12), 10)

    snapshot = timer.advance(snapshot, 4, timed=True)

    assert snapshot.exercise_seconds == 12
    assert snapshot.rest_seconds == 6


def test_tick_session_uses_current_exercise_target():
    session = _make_session()

    on_bench = timer.tick_session(_running(), session)
    on_plank = timer.tick_session(_running(current_exercise_index=1), session)

    assert on_bench.exercise_seconds == 0
    assert on_plank.exercise_seconds == 1


def test_default_rest_duration():
    snapshot = timer.log_set(_running())

    assert snapshot.rest_seconds == timer.DEFAULT_REST_SECONDS == 90


# ---------------------------------------------------------------------------
# Rest controls
# ---------------------------------------------------------------------------


def test_skip_rest_clears_countdown():
    snapshot = timer.skip_rest(timer.start_rest(_running(), 60))

    assert snapshot.rest_seconds == 0
    assert not snapshot.is_resting


def test_zero_rest_duration_is_a_skip():
    snapshot = timer.start_rest(_running(rest_seconds=5, is_resting=True), 0)

    assert snapshot.rest_seconds == 0
    assert not snapshot.is_resting


# ---------------------------------------------------------------------------
# Exercise navigation
# ---------------------------------------------------------------------------


def test_switch_exercise_resets_exercise_counter():
    snapshot = timer.switch_exercise(_running(exercise_seconds=40, elapsed_seconds=100), 2, 4)

    assert snapshot.current_exercise_index == 2
    assert snapshot.exercise_seconds == 0
    assert snapshot.elapsed_seconds == 100


def test_switch_to_current_exercise_keeps_counter():
    snapshot = _running(exercise_seconds=40, current_exercise_index=1)

    assert timer.switch_exercise(snapshot, 1, 3) == snapshot


@pytest.mark.parametrize("index", [-1, 3])
def test_switch_exercise_out_of_range(index):
    with pytest.raises(ValueError):
        timer.switch_exercise(_running(), index, 3)


def test_next_and_previous_clamp_at_edges():
    last = _running(current_exercise_index=2, exercise_seconds=7)
    first = _running(current_exercise_index=0, exercise_seconds=7)

    assert timer.next_exercise(last, 3) == last
    assert timer.previous_exercise(first, 3) == first
    assert timer.next_exercise(first, 3).current_exercise_index == 1
    assert timer.previous_exercise(last, 3).current_exercise_index == 1
    assert timer.previous_exercise(last, 3).exercise_seconds == 0


def test_reset_returns_fresh_snapshot():
    snapshot = _running(elapsed_seconds=300, rest_seconds=20, is_resting=True, current_exercise_index=2)

    assert timer.reset(snapshot) == TimerSnapshot()


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def test_snapshot_resumes_from_serialized_state():
    snapshot = timer.advance(timer.log_set(_running(current_exercise_index=1), 30), 10)

    restored = TimerSnapshot.model_validate_json(snapshot.model_dump_json())

    assert restored == snapshot
    assert timer.tick(restored).rest_seconds == 19
