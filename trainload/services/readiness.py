from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable

import structlog

from trainload.models import Feeling, FeedbackReport
from trainload.services.muscles import display_name, normalize_muscle
from trainload.services.rest_windows import RestWindowResolver
from trainload.services.volume import VolumeAggregate

logger = structlog.get_logger(__name__)

HOURS_IN_SECONDS = 3600
CAUTION_WINDOW_HOURS = 24
WORKED_RECENTLY_HOURS = 12
SUGGESTED_FOCUS_LIMIT = 5
PAIN_FEELINGS = {Feeling.SORE, Feeling.INJURED}


class ReadinessStatus(str, Enum):
    ready = "ready"
    caution = "caution"
    rest = "rest"
    worked_recently = "worked-recently"
    pain = "pain"


STATUS_ORDER = {
    ReadinessStatus.ready: 0,
    ReadinessStatus.worked_recently: 1,
    ReadinessStatus.caution: 2,
    ReadinessStatus.rest: 3,
    ReadinessStatus.pain: 4,
}


@dataclass
class TrendPoint:
    date: date
    volume: float


@dataclass
class BodyPartInsight:
    body_part: str
    display_name: str
    status: ReadinessStatus
    hours_since_last: float | None
    recommended_rest_hours: int
    hours_until_eligible: float
    seven_day_volume: float
    feedback: FeedbackReport | None = None
    last_worked_at: datetime | None = None
    seven_day_session_count: int = 0
    average_sets: float = 0.0
    trend: list[TrendPoint] = field(default_factory=list)


@dataclass
class EligibleBodyPart:
    body_part: str
    hours_until_eligible: float


@dataclass
class ReadinessSummary:
    counts: dict[str, int]
    suggested_focus: list[str]
    next_eligible: list[EligibleBodyPart]
    pain_alerts: list[str]
    last_updated: datetime


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def hours_between(earlier: datetime | None, now: datetime) -> float | None:
    if earlier is None:
        return None
    return max(0.0, (now - earlier).total_seconds() / HOURS_IN_SECONDS)


def classify(
    hours_since_last: float | None,
    recommended_rest_hours: float,
    feedback: FeedbackReport | None = None,
) -> tuple[ReadinessStatus, float]:
    """Return (status, hours_until_eligible) for one body part.

    First match wins: active SORE/INJURED feedback, never trained, rest window
    elapsed, under a day left (split at 12h since training), a day or more left.
    """
    if hours_since_last is None:
        hours_until_eligible = 0.0
    else:
        hours_until_eligible = max(0.0, recommended_rest_hours - hours_since_last)

    if feedback is not None and feedback.feeling in PAIN_FEELINGS:
        return ReadinessStatus.pain, hours_until_eligible
    if hours_since_last is None or hours_until_eligible <= 0:
        return ReadinessStatus.ready, hours_until_eligible
    if hours_until_eligible < CAUTION_WINDOW_HOURS:
        if hours_since_last < WORKED_RECENTLY_HOURS:
            return ReadinessStatus.worked_recently, hours_until_eligible
        return ReadinessStatus.caution, hours_until_eligible
    return ReadinessStatus.rest, hours_until_eligible


def active_feedback(
    feedback: Iterable[FeedbackReport], now: datetime
) -> dict[str, FeedbackReport]:
    """Return the most recent unresolved report per body-part slug, as of now."""
    by_part: dict[str, list[FeedbackReport]] = defaultdict(list)
    for report in feedback:
        if report.created_at > now:
            continue
        if report.resolved_at is not None and report.resolved_at <= now:
            continue
        by_part[normalize_muscle(report.body_part)].append(report)

    latest: dict[str, FeedbackReport] = {}
    for slug, reports in by_part.items():
        if len(reports) > 1:
            logger.warning("duplicate_active_feedback", body_part=slug, count=len(reports))
        latest[slug] = max(reports, key=lambda r: r.created_at)
    return latest


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _sort_key(insight: BodyPartInsight):
    hours = insight.hours_since_last if insight.hours_since_last is not None else -1.0
    return (STATUS_ORDER[insight.status], -hours, insight.body_part)


def build_insights(
    window: VolumeAggregate,
    seven_day: VolumeAggregate,
    feedback: Iterable[FeedbackReport],
    now: datetime,
    resolver: RestWindowResolver,
    lifetime: VolumeAggregate | None = None,
) -> list[BodyPartInsight]:
    """Classify every trained or reported body part. Results are snapshots for one query.

    Recency comes from `lifetime` (all history up to now, defaulting to `window`)
    so a short window never hides recent training. Trend, average sets and
    learned rest windows stay within `window`.
    """
    if lifetime is None:
        lifetime = window
    reports = active_feedback(feedback, now)
    insights: list[BodyPartInsight] = []

    for slug in sorted(set(lifetime.body_parts) | set(window.body_parts) | set(reports)):
        history = window.body_parts.get(slug)
        recent = seven_day.body_parts.get(slug)
        report = reports.get(slug)
        trained = lifetime.body_parts.get(slug) or history

        last_worked_at = trained.last_worked_at if trained else None
        hours_since_last = hours_between(last_worked_at, now)
        rest_hours = resolver.rest_hours(slug, history)
        status, hours_until_eligible = classify(hours_since_last, rest_hours, report)

        average_sets = 0.0
        if history and history.session_ids:
            average_sets = round(history.completed_sets / len(history.session_ids), 1)

        insights.append(
            BodyPartInsight(
                body_part=slug,
                display_name=display_name(slug),
                status=status,
                hours_since_last=hours_since_last,
                recommended_rest_hours=rest_hours,
                hours_until_eligible=hours_until_eligible,
                seven_day_volume=recent.volume if recent else 0.0,
                feedback=report,
                last_worked_at=last_worked_at,
                seven_day_session_count=len(recent.session_ids) if recent else 0,
                average_sets=average_sets,
                trend=[
                    TrendPoint(date=day, volume=volume)
                    for day, volume in sorted(history.trend.items())
                ]
                if history
                else [],
            )
        )

    insights.sort(key=_sort_key)
    return insights


def summarize(insights: list[BodyPartInsight], now: datetime) -> ReadinessSummary:
    counts = {status.value: 0 for status in ReadinessStatus}
    for insight in insights:
        counts[insight.status.value] += 1

    ready = [i for i in insights if i.status == ReadinessStatus.ready]
    ready.sort(key=lambda i: (-(i.hours_since_last if i.hours_since_last is not None else -1.0), i.body_part))

    waiting = [
        i for i in insights if i.status in (ReadinessStatus.caution, ReadinessStatus.rest)
    ]
    waiting.sort(key=lambda i: (i.hours_until_eligible, i.body_part))

    return ReadinessSummary(
        counts=counts,
        suggested_focus=[i.body_part for i in ready[:SUGGESTED_FOCUS_LIMIT]],
        next_eligible=[
            EligibleBodyPart(body_part=i.body_part, hours_until_eligible=round(i.hours_until_eligible, 1))
            for i in waiting
        ],
        pain_alerts=[i.body_part for i in insights if i.status == ReadinessStatus.pain],
        last_updated=now,
    )
