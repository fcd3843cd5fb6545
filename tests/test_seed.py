from datetime import datetime

from trainload.models import SessionStatus
from trainload.seed import SESSION_COUNT, build_demo_snapshot
from trainload.services.engine import build_report

NOW = datetime(2025, 6, 1, 12, 0)


def test_demo_snapshot_is_deterministic():
    first = build_demo_snapshot(NOW)
    second = build_demo_snapshot(NOW)

    assert first.model_dump_json() == second.model_dump_json()
    assert len(first.sessions) == SESSION_COUNT + 1
    assert first.now == NOW


def test_demo_snapshot_contents():
    snapshot = build_demo_snapshot(NOW)

    cancelled = [s for s in snapshot.sessions if s.status == SessionStatus.cancelled]
    assert len(cancelled) == 1
    assert all(s.start_time <= NOW for s in snapshot.sessions)
    assert {f.feeling.value for f in snapshot.feedback} == {"SORE", "INJURED", "TIGHT"}


def test_engine_runs_on_demo_snapshot(settings):
    snapshot = build_demo_snapshot(NOW)

    report = build_report(snapshot, settings)

    statuses = {i.body_part: i.status.value for i in report.body_part_insights}
    assert statuses["lower-back"] == "pain"
    assert statuses["hamstring"] != "pain"
    assert "deltoids" in statuses
    assert report.readiness_summary.pain_alerts == ["lower-back"]
    assert "Squat" in report.personal_records
    # The cancelled squat session this morning never counts
    assert report.personal_records["Squat"].last_workout_date < NOW.date()
    assert report.general_stats.total_workouts > 0
    assert report.top_performances
