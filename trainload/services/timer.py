"""
Session timer bookkeeping.

Three counters share one cooperative one-second tick gated by is_running:
elapsed time counts up, the exercise counter counts up for time-based
exercises while not resting, and the rest countdown counts down to zero.
Every operation returns a new TimerSnapshot; the snapshot is what gets
persisted, so a session resumes exactly where it left off.
"""

from trainload.models import TargetType, TimerSnapshot, WorkoutSession

DEFAULT_REST_SECONDS = 90


def start(snapshot: TimerSnapshot) -> TimerSnapshot:
    return snapshot.model_copy(update={"is_running": True})


def pause(snapshot: TimerSnapshot) -> TimerSnapshot:
    """Toggle running/paused; pausing suspends all three counters."""
    return snapshot.model_copy(update={"is_running": not snapshot.is_running})


def tick(snapshot: TimerSnapshot, timed: bool = False) -> TimerSnapshot:
    """Advance every active counter by one second."""
    if not snapshot.is_running:
        return snapshot

    update: dict = {"elapsed_seconds": snapshot.elapsed_seconds + 1}
    if snapshot.is_resting:
        if snapshot.rest_seconds <= 1:
            update["rest_seconds"] = 0
            update["is_resting"] = False
        else:
            update["rest_seconds"] = snapshot.rest_seconds - 1
    elif timed:
        update["exercise_seconds"] = snapshot.exercise_seconds + 1
    return snapshot.model_copy(update=update)


def advance(snapshot: TimerSnapshot, seconds: int, timed: bool = False) -> TimerSnapshot:
    for _ in range(max(seconds, 0)):
        snapshot = tick(snapshot, timed)
    return snapshot


def is_timed_exercise(session: WorkoutSession, index: int) -> bool:
    if not 0 <= index < len(session.exercises):
        return False
    return session.exercises[index].target_type == TargetType.time


def tick_session(snapshot: TimerSnapshot, session: WorkoutSession) -> TimerSnapshot:
    return tick(snapshot, is_timed_exercise(session, snapshot.current_exercise_index))


def start_rest(snapshot: TimerSnapshot, duration: int = DEFAULT_REST_SECONDS) -> TimerSnapshot:
    if duration <= 0:
        return skip_rest(snapshot)
    return snapshot.model_copy(update={"rest_seconds": duration, "is_resting": True})


def skip_rest(snapshot: TimerSnapshot) -> TimerSnapshot:
    return snapshot.model_copy(update={"rest_seconds": 0, "is_resting": False})


def log_set(snapshot: TimerSnapshot, rest_duration: int = DEFAULT_REST_SECONDS) -> TimerSnapshot:
    """Logging a set starts the rest countdown."""
    return start_rest(snapshot, rest_duration)


def switch_exercise(snapshot: TimerSnapshot, index: int, exercise_count: int) -> TimerSnapshot:
    if not 0 <= index < exercise_count:
        raise ValueError(f"Exercise index {index} out of range for {exercise_count} exercises")
    if index == snapshot.current_exercise_index:
        return snapshot
    return snapshot.model_copy(update={"current_exercise_index": index, "exercise_seconds": 0})


def next_exercise(snapshot: TimerSnapshot, exercise_count: int) -> TimerSnapshot:
    if snapshot.current_exercise_index >= exercise_count - 1:
        return snapshot
    return switch_exercise(snapshot, snapshot.current_exercise_index + 1, exercise_count)


def previous_exercise(snapshot: TimerSnapshot, exercise_count: int) -> TimerSnapshot:
    if snapshot.current_exercise_index <= 0:
        return snapshot
    return switch_exercise(snapshot, snapshot.current_exercise_index - 1, exercise_count)


def reset(snapshot: TimerSnapshot) -> TimerSnapshot:
    return TimerSnapshot()
