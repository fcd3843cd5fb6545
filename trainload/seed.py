"""
Build a demo history snapshot with realistic fake training data.
Run with: python -m trainload.seed > snapshot.json

The output can be posted as-is to /api/insights/.
"""

import random
from datetime import datetime, timedelta, timezone

from trainload.models import (
    Feeling,
    FeedbackReport,
    HistorySnapshot,
    LoggedSet,
    SessionExercise,
    SessionStatus,
    TargetType,
    WorkoutSession,
)

# Reproducible data
RANDOM_SEED = 42

WINDOW_DAYS = 30

# ---------------------------------------------------------------------------
# Exercise catalogue
# ---------------------------------------------------------------------------

# name -> (primary muscles, secondary muscles)
EXERCISES: dict[str, tuple[list[str], list[str]]] = {
    "Bench Press": (["Pectoralis Major"], ["Anterior Deltoid", "Triceps"]),
    "Incline Dumbbell Press": (["Chest"], ["Front Deltoids"]),
    "Deadlift": (["Lower Back", "Hamstrings"], ["Glutes", "Forearms"]),
    "Pull-up": (["Latissimus Dorsi"], ["Biceps"]),
    "Barbell Row": (["Upper Back"], ["Biceps", "Rear Delts"]),
    "Overhead Press": (["Shoulders"], ["Triceps"]),
    "Lateral Raise": (["Lateral Deltoid"], []),
    "Barbell Curl": (["Biceps"], ["Forearms"]),
    "Tricep Pushdown": (["Triceps"], []),
    "Squat": (["Quads"], ["Glutes", "Lower Back"]),
    "Romanian Deadlift": (["Hamstrings"], ["Glutes"]),
    "Hip Thrust": (["Gluteus Maximus"], ["Hamstrings"]),
    "Standing Calf Raise": (["Gastrocnemius"], ["Soleus"]),
    "Hanging Leg Raise": (["Abs"], ["Obliques"]),
    "Plank": (["Core"], ["Obliques"]),
}

# Base weights in kg (None = bodyweight / reps-only)
BASE_WEIGHTS: dict[str, float | None] = {
    "Bench Press": 80.0,
    "Incline Dumbbell Press": 24.0,
    "Deadlift": 120.0,
    "Pull-up": None,
    "Barbell Row": 70.0,
    "Overhead Press": 50.0,
    "Lateral Raise": 10.0,
    "Barbell Curl": 30.0,
    "Tricep Pushdown": 35.0,
    "Squat": 100.0,
    "Romanian Deadlift": 80.0,
    "Hip Thrust": 80.0,
    "Standing Calf Raise": 60.0,
    "Hanging Leg Raise": None,
    "Plank": None,
}

TIMED_EXERCISES = {"Plank"}

# Sessions cycle through these templates.
SESSION_TEMPLATES = [
    ("Push day", ["Bench Press", "Incline Dumbbell Press", "Overhead Press", "Tricep Pushdown"]),
    ("Pull day", ["Deadlift", "Pull-up", "Barbell Row", "Barbell Curl"]),
    ("Leg day", ["Squat", "Romanian Deadlift", "Hip Thrust", "Standing Calf Raise"]),
    ("Upper body", ["Bench Press", "Barbell Row", "Lateral Raise", "Hanging Leg Raise"]),
    ("Core and arms", ["Plank", "Hanging Leg Raise", "Barbell Curl", "Tricep Pushdown"]),
]

SESSION_COUNT = 14
INTERVAL_HOURS = 50


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _progression_weight(base: float, session_idx: int, rng: random.Random) -> float:
    """Progressive overload with realistic noise. Rounds to nearest 2.5 kg."""
    factor = 1.0 + 0.025 * session_idx + rng.uniform(-0.05, 0.05)
    return round(base * factor / 2.5) * 2.5


def _progression_reps(session_idx: int, rng: random.Random) -> int:
    """Reps for bodyweight lifts: starts at 5, trends up."""
    base = 5 + session_idx // 3
    return max(1, base + rng.randint(-1, 1))


def _build_sets(name: str, session_idx: int, rng: random.Random) -> list[LoggedSet]:
    base = BASE_WEIGHTS.get(name)
    sets: list[LoggedSet] = []
    for set_num in range(1, rng.randint(3, 4) + 1):
        completed = rng.random() > 0.1
        if name in TIMED_EXERCISES:
            sets.append(
                LoggedSet(
                    set_number=set_num,
                    duration_seconds=30 + 5 * session_idx + rng.randint(0, 10),
                    completed=completed,
                )
            )
        elif base is None:
            sets.append(
                LoggedSet(
                    set_number=set_num,
                    reps=_progression_reps(session_idx, rng),
                    completed=completed,
                )
            )
        else:
            sets.append(
                LoggedSet(
                    set_number=set_num,
                    reps=rng.randint(5, 10),
                    weight=_progression_weight(base, session_idx, rng),
                    completed=completed,
                )
            )
    return sets


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def build_demo_snapshot(now: datetime) -> HistorySnapshot:
    rng = random.Random(RANDOM_SEED)
    first_start = now - timedelta(hours=INTERVAL_HOURS * SESSION_COUNT)

    sessions: list[WorkoutSession] = []
    for session_idx in range(SESSION_COUNT):
        name, exercise_names = SESSION_TEMPLATES[session_idx % len(SESSION_TEMPLATES)]
        start = first_start + timedelta(hours=INTERVAL_HOURS * session_idx + rng.randint(-3, 3))
        exercises = []
        for exercise_name in exercise_names:
            primary, secondary = EXERCISES[exercise_name]
            exercises.append(
                SessionExercise(
                    exercise_id=exercise_name.lower().replace(" ", "-"),
                    name=exercise_name,
                    target_type=TargetType.time
                    if exercise_name in TIMED_EXERCISES
                    else TargetType.reps,
                    target_sets=3,
                    primary_muscles=primary,
                    secondary_muscles=secondary,
                    sets=_build_sets(exercise_name, session_idx, rng),
                )
            )
        sessions.append(
            WorkoutSession(
                id=f"session-{session_idx + 1}",
                name=name,
                start_time=start,
                end_time=start + timedelta(minutes=rng.randint(45, 80)),
                status=SessionStatus.completed,
                exercises=exercises,
            )
        )

    # A cancelled session that must never count toward training load
    sessions.append(
        WorkoutSession(
            id="session-cancelled",
            name="Abandoned leg day",
            start_time=now - timedelta(hours=6),
            status=SessionStatus.cancelled,
            exercises=[
                SessionExercise(
                    name="Squat",
                    primary_muscles=["Quads"],
                    sets=[LoggedSet(set_number=1, reps=5, weight=100.0, completed=True)],
                )
            ],
        )
    )

    feedback = [
        FeedbackReport(
            id="feedback-1",
            body_part="Lower Back",
            feeling=Feeling.SORE,
            intensity=6,
            note="Tight after deadlifts",
            created_at=now - timedelta(hours=20),
        ),
        FeedbackReport(
            id="feedback-2",
            body_part="Shoulders",
            feeling=Feeling.INJURED,
            intensity=4,
            created_at=now - timedelta(days=12),
            resolved_at=now - timedelta(days=5),
        ),
        FeedbackReport(
            id="feedback-3",
            body_part="Hamstrings",
            feeling=Feeling.TIGHT,
            intensity=3,
            created_at=now - timedelta(hours=30),
        ),
    ]

    return HistorySnapshot(
        sessions=sessions,
        feedback=feedback,
        now=now,
        window_days=WINDOW_DAYS,
    )


def seed() -> None:
    snapshot = build_demo_snapshot(datetime.now(timezone.utc).replace(microsecond=0))
    print(snapshot.model_dump_json(indent=2))


if __name__ == "__main__":
    seed()
