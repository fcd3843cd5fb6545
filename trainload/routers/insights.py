from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import SQLModel

from trainload.config import Settings, get_settings
from trainload.models import FeedbackReport, HistorySnapshot
from trainload.services.engine import (
    build_readiness,
    build_report,
    resolve_window_days,
)
from trainload.services.readiness import BodyPartInsight, ReadinessSummary
from trainload.services.records import (
    Bucket,
    Metric,
    bucket_for_window,
    progression_series,
)
from trainload.services.volume import sessions_in_window

router = APIRouter()

SettingsDep = Annotated[Settings, Depends(get_settings)]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TrendPointRead(SQLModel):
    date: str  # ISO format
    volume: float


class BodyPartInsightRead(SQLModel):
    body_part: str
    display_name: str
    status: str
    hours_since_last: float | None
    recommended_rest_hours: int
    hours_until_eligible: float
    seven_day_volume: float
    feedback: FeedbackReport | None
    last_worked_at: datetime | None
    seven_day_session_count: int
    average_sets: float
    trend: list[TrendPointRead]


class EligibleRead(SQLModel):
    body_part: str
    hours_until_eligible: float


class ReadinessSummaryRead(SQLModel):
    counts: dict[str, int]
    suggested_focus: list[str]
    next_eligible: list[EligibleRead]
    pain_alerts: list[str]
    last_updated: datetime


class ReadinessRead(SQLModel):
    body_part_insights: list[BodyPartInsightRead]
    summary: ReadinessSummaryRead


class CategoryShareRead(SQLModel):
    category: str
    percent: float
    total_sets: int


class RecommendationRead(SQLModel):
    type: str
    message: str
    category: str | None = None


class PersonalRecordRead(SQLModel):
    max_weight: float
    max_reps: int
    max_volume: float
    average_reps: float
    average_volume: float
    frequency: float
    last_workout_date: str | None  # ISO format
    muscle_groups: list[str]
    total_sets: int
    max_duration_seconds: int


class TopPerformanceRead(SQLModel):
    exercise: str
    metric: str
    value: float
    unit: str
    category: str


class GeneralStatsRead(SQLModel):
    total_workouts: int
    total_sets: int
    total_volume: float
    average_workout_seconds: int
    average_sets_per_workout: int
    average_volume_per_workout: int
    unique_exercises: int


class WeeklyVolumeRead(SQLModel):
    week_start: str  # ISO format
    volume: float
    workouts: int
    sets: int


class TrainingReportRead(SQLModel):
    now: datetime
    window_days: int
    body_part_insights: list[BodyPartInsightRead]
    readiness_summary: ReadinessSummaryRead
    distribution: list[CategoryShareRead]
    recommendations: list[RecommendationRead]
    personal_records: dict[str, PersonalRecordRead]
    top_performances: list[TopPerformanceRead]
    general_stats: GeneralStatsRead
    weekly_volume: list[WeeklyVolumeRead]


class ProgressionPointRead(SQLModel):
    date: str  # ISO format, start of bucket
    value: float


class ProgressionRead(SQLModel):
    exercise: str
    metric: str
    bucket: str
    points: list[ProgressionPointRead]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _iso(d: date | None) -> str | None:
    return d.isoformat() if d is not None else None


def _insight_read(insight: BodyPartInsight) -> BodyPartInsightRead:
    return BodyPartInsightRead(
        body_part=insight.body_part,
        display_name=insight.display_name,
        status=insight.status.value,
        hours_since_last=round(insight.hours_since_last, 1)
        if insight.hours_since_last is not None
        else None,
        recommended_rest_hours=insight.recommended_rest_hours,
        hours_until_eligible=round(insight.hours_until_eligible, 1),
        seven_day_volume=insight.seven_day_volume,
        feedback=insight.feedback,
        last_worked_at=insight.last_worked_at,
        seven_day_session_count=insight.seven_day_session_count,
        average_sets=insight.average_sets,
        trend=[TrendPointRead(date=p.date.isoformat(), volume=p.volume) for p in insight.trend],
    )


def _summary_read(summary: ReadinessSummary) -> ReadinessSummaryRead:
    return ReadinessSummaryRead(
        counts=summary.counts,
        suggested_focus=summary.suggested_focus,
        next_eligible=[
            EligibleRead(body_part=e.body_part, hours_until_eligible=e.hours_until_eligible)
            for e in summary.next_eligible
        ],
        pain_alerts=summary.pain_alerts,
        last_updated=summary.last_updated,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/", response_model=TrainingReportRead)
def get_training_report(body: HistorySnapshot, settings: SettingsDep):
    report = build_report(body, settings)
    return TrainingReportRead(
        now=report.now,
        window_days=report.window_days,
        body_part_insights=[_insight_read(i) for i in report.body_part_insights],
        readiness_summary=_summary_read(report.readiness_summary),
        distribution=[
            CategoryShareRead(
                category=s.category,
                percent=round(s.percent, 1),
                total_sets=s.total_sets,
            )
            for s in report.distribution
        ],
        recommendations=[
            RecommendationRead(type=r.type.value, message=r.message, category=r.category)
            for r in report.recommendations
        ],
        personal_records={
            name: PersonalRecordRead(
                max_weight=r.max_weight,
                max_reps=r.max_reps,
                max_volume=r.max_volume,
                average_reps=r.average_reps,
                average_volume=r.average_volume,
                frequency=r.frequency,
                last_workout_date=_iso(r.last_workout_date),
                muscle_groups=r.muscle_groups,
                total_sets=r.total_sets,
                max_duration_seconds=r.max_duration_seconds,
            )
            for name, r in report.personal_records.items()
        },
        top_performances=[
            TopPerformanceRead(
                exercise=p.exercise,
                metric=p.metric,
                value=p.value,
                unit=p.unit,
                category=p.category.value,
            )
            for p in report.top_performances
        ],
        general_stats=GeneralStatsRead(
            total_workouts=report.general_stats.total_workouts,
            total_sets=report.general_stats.total_sets,
            total_volume=report.general_stats.total_volume,
            average_workout_seconds=report.general_stats.average_workout_seconds,
            average_sets_per_workout=report.general_stats.average_sets_per_workout,
            average_volume_per_workout=report.general_stats.average_volume_per_workout,
            unique_exercises=report.general_stats.unique_exercises,
        ),
        weekly_volume=[
            WeeklyVolumeRead(
                week_start=w.week_start.isoformat(),
                volume=w.volume,
                workouts=w.workouts,
                sets=w.sets,
            )
            for w in report.weekly_volume
        ],
    )


@router.post("/readiness", response_model=ReadinessRead)
def get_readiness(body: HistorySnapshot, settings: SettingsDep):
    readiness = build_readiness(body, settings)
    return ReadinessRead(
        body_part_insights=[_insight_read(i) for i in readiness.body_part_insights],
        summary=_summary_read(readiness.summary),
    )


@router.post("/progression", response_model=ProgressionRead)
def get_progression(
    body: HistorySnapshot,
    settings: SettingsDep,
    exercise: str,
    metric: Metric = Metric.weight,
    bucket: Bucket | None = None,
):
    window_days = resolve_window_days(body, settings)
    sessions = sessions_in_window(body.sessions, body.now, window_days)
    if not any(e.name == exercise for s in sessions for e in s.exercises):
        raise HTTPException(status_code=404, detail="Exercise not found in history")

    bucket = bucket or bucket_for_window(window_days)
    points = progression_series(sessions, exercise, metric, bucket)
    return ProgressionRead(
        exercise=exercise,
        metric=metric.value,
        bucket=bucket.value,
        points=[ProgressionPointRead(date=p.date.isoformat(), value=p.value) for p in points],
    )
