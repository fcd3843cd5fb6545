from enum import Enum
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, SQLModel

from trainload.config import Settings, get_settings
from trainload.models import TimerSnapshot, WorkoutSession
from trainload.services import timer

router = APIRouter()

SettingsDep = Annotated[Settings, Depends(get_settings)]


class TimerAction(str, Enum):
    start = "start"
    pause = "pause"
    tick = "tick"
    advance = "advance"
    rest = "rest"
    skip_rest = "skip-rest"
    log_set = "log-set"
    next = "next"
    previous = "previous"
    switch = "switch"
    reset = "reset"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TimerActionBody(SQLModel):
    snapshot: TimerSnapshot = Field(default_factory=TimerSnapshot)
    session: WorkoutSession | None = None
    exercise_count: int | None = Field(default=None, ge=0)
    index: int | None = None
    seconds: int = Field(default=1, ge=0, le=86_400)
    rest_seconds: int | None = Field(default=None, ge=0)
    timed: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _exercise_count(body: TimerActionBody) -> int:
    if body.exercise_count is not None:
        return body.exercise_count
    if body.session is not None:
        return len(body.session.exercises)
    raise HTTPException(status_code=400, detail="exercise_count or session is required")


def _is_timed(body: TimerActionBody) -> bool:
    if body.session is not None:
        return timer.is_timed_exercise(body.session, body.snapshot.current_exercise_index)
    return body.timed


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/{action}", response_model=TimerSnapshot)
def apply_timer_action(action: TimerAction, body: TimerActionBody, settings: SettingsDep):
    snapshot = body.snapshot
    rest_seconds = (
        body.rest_seconds if body.rest_seconds is not None else settings.rest_countdown_seconds
    )

    if action == TimerAction.start:
        return timer.start(snapshot)
    if action == TimerAction.pause:
        return timer.pause(snapshot)
    if action == TimerAction.tick:
        return timer.tick(snapshot, _is_timed(body))
    if action == TimerAction.advance:
        return timer.advance(snapshot, body.seconds, _is_timed(body))
    if action == TimerAction.rest:
        return timer.start_rest(snapshot, rest_seconds)
    if action == TimerAction.skip_rest:
        return timer.skip_rest(snapshot)
    if action == TimerAction.log_set:
        return timer.log_set(snapshot, rest_seconds)
    if action == TimerAction.next:
        return timer.next_exercise(snapshot, _exercise_count(body))
    if action == TimerAction.previous:
        return timer.previous_exercise(snapshot, _exercise_count(body))
    if action == TimerAction.switch:
        if body.index is None:
            raise HTTPException(status_code=400, detail="index is required")
        try:
            return timer.switch_exercise(snapshot, body.index, _exercise_count(body))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    return timer.reset(snapshot)
