from dataclasses import dataclass
from datetime import datetime

import structlog

from trainload.config import Settings, get_settings
from trainload.models import HistorySnapshot
from trainload.services.balance import CategoryShare, Recommendation, advise, distribution
from trainload.services.readiness import (
    BodyPartInsight,
    ReadinessSummary,
    build_insights,
    summarize,
)
from trainload.services.records import (
    PersonalRecord,
    TopPerformance,
    personal_records,
    top_performances,
)
from trainload.services.rest_windows import (
    RestWindowResolver,
    RestWindowStrategy,
    strategy_from_settings,
)
from trainload.services.stats import GeneralStats, WeeklyVolume, general_stats, weekly_volume
from trainload.services.volume import (
    VolumeAggregate,
    aggregate_volume,
    category_volumes,
    sessions_in_window,
    sessions_up_to,
)

logger = structlog.get_logger(__name__)

SEVEN_DAYS = 7


@dataclass
class ReadinessReport:
    body_part_insights: list[BodyPartInsight]
    summary: ReadinessSummary


@dataclass
class TrainingReport:
    now: datetime
    window_days: int
    body_part_insights: list[BodyPartInsight]
    readiness_summary: ReadinessSummary
    distribution: list[CategoryShare]
    recommendations: list[Recommendation]
    personal_records: dict[str, PersonalRecord]
    top_performances: list[TopPerformance]
    general_stats: GeneralStats
    weekly_volume: list[WeeklyVolume]


def resolve_window_days(snapshot: HistorySnapshot, settings: Settings) -> int:
    return snapshot.window_days or settings.default_window_days


def build_readiness(
    snapshot: HistorySnapshot,
    settings: Settings | None = None,
    strategy: RestWindowStrategy | None = None,
) -> ReadinessReport:
    """Per-body-part readiness for the snapshot, as of snapshot.now."""
    settings = settings or get_settings()
    window_days = resolve_window_days(snapshot, settings)
    window = aggregate_volume(sessions_in_window(snapshot.sessions, snapshot.now, window_days))
    return _readiness(snapshot, window, settings, strategy)


def _readiness(
    snapshot: HistorySnapshot,
    window: VolumeAggregate,
    settings: Settings,
    strategy: RestWindowStrategy | None,
) -> ReadinessReport:
    resolver = RestWindowResolver(
        strategy or strategy_from_settings(settings), snapshot.rest_hours_by_body_part
    )
    seven_day = aggregate_volume(sessions_in_window(snapshot.sessions, snapshot.now, SEVEN_DAYS))
    lifetime = aggregate_volume(sessions_up_to(snapshot.sessions, snapshot.now))
    insights = build_insights(
        window, seven_day, snapshot.feedback, snapshot.now, resolver, lifetime=lifetime
    )
    return ReadinessReport(body_part_insights=insights, summary=summarize(insights, snapshot.now))


def build_report(
    snapshot: HistorySnapshot,
    settings: Settings | None = None,
    strategy: RestWindowStrategy | None = None,
) -> TrainingReport:
    """Assemble readiness, balance and record aggregates for one history snapshot."""
    settings = settings or get_settings()
    window_days = resolve_window_days(snapshot, settings)
    sessions = sessions_in_window(snapshot.sessions, snapshot.now, window_days)

    window = aggregate_volume(sessions)
    readiness = _readiness(snapshot, window, settings, strategy)

    shares = distribution(category_volumes(window))
    recommendations = advise(
        shares,
        window.total_completed_sets,
        deload_set_threshold=settings.deload_set_threshold,
    )

    records = personal_records(sessions, window_days)
    top = top_performances(records, n=settings.top_performance_count, unit=settings.weight_unit)

    logger.info(
        "training_report_built",
        sessions=len(sessions),
        window_days=window_days,
        body_parts=len(readiness.body_part_insights),
        recommendations=len(recommendations),
        exercises=len(records),
    )

    return TrainingReport(
        now=snapshot.now,
        window_days=window_days,
        body_part_insights=readiness.body_part_insights,
        readiness_summary=readiness.summary,
        distribution=shares,
        recommendations=recommendations,
        personal_records=records,
        top_performances=top,
        general_stats=general_stats(sessions),
        weekly_volume=weekly_volume(sessions),
    )
