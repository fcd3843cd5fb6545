from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import structlog

from trainload.services.volume import CategoryVolume

logger = structlog.get_logger(__name__)

REST_PERCENT = 40.0
WARNING_PERCENT = 35.0
FOCUS_PERCENT = 5.0
SUGGESTION_PERCENT = 10.0
ANTAGONIST_RATIO = 1.5
BALANCED_SPREAD = 20.0
BALANCED_MIN_CATEGORIES = 4
DEFAULT_DELOAD_SET_THRESHOLD = 100

# Core is never pushed with a "focus" alert; it only gets the softer suggestion.
SOFT_ONLY_CATEGORIES = {"Core"}

DEFAULT_ANTAGONIST_PAIRS: list[tuple[str, str]] = [("Chest", "Back")]


class RecommendationType(str, Enum):
    rest = "rest"
    warning = "warning"
    focus = "focus"
    suggestion = "suggestion"
    balance = "balance"
    success = "success"


@dataclass
class CategoryShare:
    category: str
    percent: float
    total_sets: int
    volume: float = 0.0


@dataclass
class Recommendation:
    type: RecommendationType
    message: str
    category: str | None = None


def distribution(volumes: Iterable[CategoryVolume]) -> list[CategoryShare]:
    """Convert category volumes into percentages of the total."""
    volumes = list(volumes)
    total = sum(v.volume for v in volumes)
    return [
        CategoryShare(
            category=v.category,
            percent=(v.volume / total * 100) if total > 0 else 0.0,
            total_sets=v.completed_sets,
            volume=v.volume,
        )
        for v in volumes
    ]


def _share_recommendations(share: CategoryShare) -> list[Recommendation]:
    name = share.category
    pct = share.percent
    if pct > REST_PERCENT:
        return [
            Recommendation(
                type=RecommendationType.rest,
                message=f"{name} makes up {pct:.1f}% of your training volume. "
                f"Take active rest for {name.lower()} and shift work to other groups.",
                category=name,
            )
        ]
    if pct > WARNING_PERCENT:
        return [
            Recommendation(
                type=RecommendationType.warning,
                message=f"{name} is at {pct:.1f}% of your training volume. "
                f"Consider balancing with other muscle groups.",
                category=name,
            )
        ]
    if pct < FOCUS_PERCENT and name not in SOFT_ONLY_CATEGORIES:
        return [
            Recommendation(
                type=RecommendationType.focus,
                message=f"{name} is only {pct:.1f}% of your training volume. "
                f"Add 2-3 exercises targeting {name.lower()}.",
                category=name,
            )
        ]
    if pct < SUGGESTION_PERCENT:
        return [
            Recommendation(
                type=RecommendationType.suggestion,
                message=f"{name} is at {pct:.1f}% of your training volume. "
                f"A little more {name.lower()} work would round out your training.",
                category=name,
            )
        ]
    return []


def _antagonist_recommendation(
    shares: dict[str, CategoryShare], first: str, second: str
) -> Recommendation | None:
    a = shares.get(first)
    b = shares.get(second)
    if a is None or b is None or b.percent == 0:
        logger.info("antagonist_pair_skipped", first=first, second=second)
        return None
    ratio = a.percent / b.percent
    if ratio > ANTAGONIST_RATIO:
        return Recommendation(
            type=RecommendationType.balance,
            message=f"Your {first.lower()}:{second.lower()} ratio is {ratio:.1f}:1. "
            f"Add more {second.lower()} work to balance it out.",
            category=second,
        )
    if ratio < 1 / ANTAGONIST_RATIO:
        return Recommendation(
            type=RecommendationType.balance,
            message=f"Your {first.lower()}:{second.lower()} ratio is {ratio:.1f}:1. "
            f"Add more {first.lower()} work to balance it out.",
            category=first,
        )
    return None


def advise(
    shares: list[CategoryShare],
    total_completed_sets: int,
    deload_set_threshold: int = DEFAULT_DELOAD_SET_THRESHOLD,
    antagonist_pairs: list[tuple[str, str]] | None = None,
) -> list[Recommendation]:
    """Emit balance recommendations for a category distribution.

    Thresholds are exact cutoffs, so the same input always yields the same list.
    """
    recommendations: list[Recommendation] = []
    has_volume = any(s.percent > 0 for s in shares)

    if has_volume:
        for share in shares:
            recommendations.extend(_share_recommendations(share))

        by_category = {s.category: s for s in shares}
        pairs = DEFAULT_ANTAGONIST_PAIRS if antagonist_pairs is None else antagonist_pairs
        for first, second in pairs:
            recommendation = _antagonist_recommendation(by_category, first, second)
            if recommendation is not None:
                recommendations.append(recommendation)

        trained = [s.percent for s in shares if s.percent > 0]
        if len(trained) >= BALANCED_MIN_CATEGORIES and max(trained) - min(trained) < BALANCED_SPREAD:
            recommendations.append(
                Recommendation(
                    type=RecommendationType.success,
                    message="Your training is well balanced across muscle groups. Keep it up!",
                )
            )

    if total_completed_sets > deload_set_threshold:
        recommendations.append(
            Recommendation(
                type=RecommendationType.rest,
                message=f"You completed {total_completed_sets} sets in this period. "
                f"Plan a deload or prioritise extra sleep to recover.",
            )
        )

    return recommendations
