"""Unit tests for rest-window strategies."""

from datetime import datetime, timedelta

from trainload.config import Settings
from trainload.services.rest_windows import (
    FlatRestWindow,
    GuidelineRestWindow,
    LearnedRestWindow,
    RestWindowResolver,
    strategy_from_settings,
)
from trainload.services.volume import BodyPartVolume

NOW = datetime(2025, 6, 1, 12, 0)


def _history(*hours_ago: float) -> BodyPartVolume:
    return BodyPartVolume(
        body_part="chest",
        worked_at={NOW - timedelta(hours=h) for h in hours_ago},
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def test_flat_strategy_ignores_body_part():
    strategy = FlatRestWindow(48)
    assert strategy.rest_hours("quadriceps", None) == 48
    assert strategy.rest_hours("abs", _history(10, 60)) == 48


def test_guideline_strategy_uses_table_then_default():
    strategy = GuidelineRestWindow(48)
    assert strategy.rest_hours("quadriceps", None) == 72
    assert strategy.rest_hours("biceps", None) == 36
    assert strategy.rest_hours("abs", None) == 24
    assert strategy.rest_hours("hip-flexors", None) == 48


def test_learned_strategy_uses_median_gap():
    strategy = LearnedRestWindow(48)
    # gaps of 60h, 72h, 96h -> median 72
    assert strategy.rest_hours("chest", _history(0, 60, 132, 228)) == 72


def test_learned_strategy_collapses_same_day_sessions():
    strategy = LearnedRestWindow(48)
    # two sessions on one day count as a single training day
    history = _history(1, 3, 49, 97)
    assert strategy.rest_hours("chest", history) == 48


def test_learned_strategy_is_clamped():
    strategy = LearnedRestWindow(48)
    assert strategy.rest_hours("chest", _history(0, 24 * 7, 24 * 14)) == 96
    assert strategy.rest_hours("chest", _history(0, 25, 50)) == 25


def test_learned_strategy_falls_back_without_enough_history():
    strategy = LearnedRestWindow(48)
    assert strategy.rest_hours("chest", None) == 48
    assert strategy.rest_hours("chest", _history(10, 80)) == 48


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


def test_override_takes_precedence_over_strategy():
    resolver = RestWindowResolver(GuidelineRestWindow(48), {"Hamstrings": 30})
    assert resolver.rest_hours("hamstring") == 30
    assert resolver.rest_hours("quadriceps") == 72


def test_strategy_from_settings():
    assert isinstance(strategy_from_settings(Settings(_env_file=None)), FlatRestWindow)
    assert isinstance(
        strategy_from_settings(Settings(_env_file=None, rest_window_strategy="guideline")),
        GuidelineRestWindow,
    )
    learned = strategy_from_settings(
        Settings(_env_file=None, rest_window_strategy="learned", default_rest_hours=36)
    )
    assert isinstance(learned, LearnedRestWindow)
    assert learned.default_hours == 36
