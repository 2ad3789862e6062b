"""Distribution statistics over a batch of scores."""

import math
from typing import Optional
from pydantic import BaseModel, Field

from screener.models import MSPLikelihood

PERCENTILES = (0.25, 0.5, 0.75, 0.9, 0.95)
SCORE_RANGES = [(0, 10)] + [(low, low + 9) for low in range(11, 100, 10)]


class ScoreStatistics(BaseModel):
    count: int
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    percentiles: dict[str, float] = Field(default_factory=dict)
    distribution: dict[str, int] = Field(default_factory=dict)


class ConfidenceGroup(BaseModel):
    count: int
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None


class MSPStatistics(BaseModel):
    overall: ScoreStatistics
    by_confidence: dict[str, ConfidenceGroup]


def _range_label(score: float) -> str:
    for low, high in SCORE_RANGES:
        if score <= high:
            return f"{low}-{high}"
    low, high = SCORE_RANGES[-1]
    return f"{low}-{high}"


def summarize_scores(scores: list[float]) -> Optional[ScoreStatistics]:
    """Summarise scores; percentiles index the sorted list at floor(n * p)."""
    if not scores:
        return None

    ordered = sorted(scores)
    n = len(ordered)
    mean = sum(ordered) / n
    variance = sum((s - mean) ** 2 for s in ordered) / n

    distribution = {f"{low}-{high}": 0 for low, high in SCORE_RANGES}
    for score in ordered:
        distribution[_range_label(score)] += 1

    return ScoreStatistics(
        count=n,
        mean=mean,
        median=ordered[n // 2],
        std_dev=math.sqrt(variance),
        min=ordered[0],
        max=ordered[-1],
        percentiles={f"p{int(p * 100)}": ordered[min(n - 1, math.floor(n * p))] for p in PERCENTILES},
        distribution=distribution,
    )


def summarize_msp_results(results: list[MSPLikelihood]) -> Optional[MSPStatistics]:
    """Overall statistics plus a per-confidence-tier breakdown."""
    overall = summarize_scores([r.score for r in results])
    if overall is None:
        return None

    by_confidence = {}
    for tier in ("high", "medium", "low"):
        tier_scores = sorted(r.score for r in results if r.confidence == tier)
        if tier_scores:
            by_confidence[tier] = ConfidenceGroup(
                count=len(tier_scores),
                mean=sum(tier_scores) / len(tier_scores),
                min=tier_scores[0],
                max=tier_scores[-1],
            )
        else:
            by_confidence[tier] = ConfidenceGroup(count=0)

    return MSPStatistics(overall=overall, by_confidence=by_confidence)
