from datetime import datetime
from statistics import median
from typing import Protocol

from trainload.config import Settings
from trainload.services.muscles import normalize_muscle
from trainload.services.volume import BodyPartVolume

LEARNED_MIN_HOURS = 24
LEARNED_MAX_HOURS = 96
LEARNED_MIN_GAPS = 2

GUIDELINE_REST_HOURS: dict[str, int] = {
    "chest": 48,
    "upper-back": 48,
    "lats": 48,
    "back": 48,
    "trapezius": 48,
    "lower-back": 72,
    "deltoids": 48,
    "front-deltoids": 48,
    "back-deltoids": 48,
    "neck": 24,
    "biceps": 36,
    "triceps": 36,
    "forearms": 36,
    "abs": 24,
    "obliques": 24,
    "quadriceps": 72,
    "hamstring": 72,
    "gluteal": 72,
    "calves": 48,
    "ankles": 48,
}


class RestWindowStrategy(Protocol):
    def rest_hours(self, body_part: str, history: BodyPartVolume | None) -> int: ...


class FlatRestWindow:
    def __init__(self, hours: int):
        self.hours = hours

    def rest_hours(self, body_part: str, history: BodyPartVolume | None) -> int:
        return self.hours


class GuidelineRestWindow:
    def __init__(self, default_hours: int):
        self.default_hours = default_hours

    def rest_hours(self, body_part: str, history: BodyPartVolume | None) -> int:
        return GUIDELINE_REST_HOURS.get(body_part, self.default_hours)


class LearnedRestWindow:
    """Median gap between the user's own training days for a body part."""

    def __init__(self, default_hours: int):
        self.default_hours = default_hours

    def rest_hours(self, body_part: str, history: BodyPartVolume | None) -> int:
        if history is None:
            return self.default_hours
        gaps = _training_day_gaps(history.worked_at)
        if len(gaps) < LEARNED_MIN_GAPS:
            return self.default_hours
        learned = round(median(gaps))
        return max(LEARNED_MIN_HOURS, min(LEARNED_MAX_HOURS, learned))


def _training_day_gaps(worked_at: set[datetime]) -> list[float]:
    """Hours between the last session of each consecutive training day."""
    last_per_day: dict = {}
    for ts in worked_at:
        day = ts.date()
        if day not in last_per_day or ts > last_per_day[day]:
            last_per_day[day] = ts
    ordered = sorted(last_per_day.values())
    return [(b - a).total_seconds() / 3600 for a, b in zip(ordered, ordered[1:])]


def strategy_from_settings(settings: Settings) -> RestWindowStrategy:
    if settings.rest_window_strategy == "guideline":
        return GuidelineRestWindow(settings.default_rest_hours)
    if settings.rest_window_strategy == "learned":
        return LearnedRestWindow(settings.default_rest_hours)
    return FlatRestWindow(settings.default_rest_hours)


class RestWindowResolver:
    """Explicit per-body-part overrides first, then the configured strategy."""

    def __init__(self, strategy: RestWindowStrategy, overrides: dict[str, int] | None = None):
        self.strategy = strategy
        self.overrides = {normalize_muscle(k): v for k, v in (overrides or {}).items()}

    def rest_hours(self, body_part: str, history: BodyPartVolume | None = None) -> int:
        if body_part in self.overrides:
            return self.overrides[body_part]
        return self.strategy.rest_hours(body_part, history)
