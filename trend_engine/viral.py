"""
Viral Potential — which items could still break out.

Every item is re-read as if its counters had accumulated over a single
day, which puts old and new uploads on the same footing. Items scoring
above the candidate floor are ranked and the top five surfaced.
"""

import logging
from typing import Dict, List, Sequence

from .keywords import ATTENTION_KEYWORDS, EXCLUSIVITY_KEYWORDS, has_any
from .metrics import HIGH, MEDIUM, VERY_HIGH, NormalizedMetrics, compute_metrics
from .models import ContentItem
from .tiers import tier_above

logger = logging.getLogger(__name__)

VIRAL_WINDOW_HOURS = 24
CANDIDATE_FLOOR = 30
MAX_CANDIDATES = 5

VELOCITY_POINTS = ((1000, 40), (500, 25), (200, 15))
ENGAGEMENT_POINTS = ((5, 30), (3, 20), (2, 10))
COMMENT_VELOCITY_POINTS = ((20, 20), (10, 15), (5, 10))
SHARE_POINTS = {VERY_HIGH: 10, HIGH: 7, MEDIUM: 4}

RECOMMENDATIONS = (
    (70, "High viral potential - boost promotion immediately"),
    (50, "Good viral potential - increase marketing efforts"),
    (30, "Moderate potential - optimize and monitor closely"),
)
LOW_POTENTIAL = "Low viral potential - focus on steady growth"


def viral_score(metrics: NormalizedMetrics) -> int:
    score = (
        tier_above(metrics.view_velocity, VELOCITY_POINTS)
        + tier_above(metrics.engagement_rate, ENGAGEMENT_POINTS)
        + tier_above(metrics.comment_velocity, COMMENT_VELOCITY_POINTS)
        + SHARE_POINTS.get(metrics.share_projection, 0)
    )
    return min(score, 100)


def viral_factors(item: ContentItem, metrics: NormalizedMetrics) -> List[str]:
    factors = []
    if metrics.view_velocity > 500:
        factors.append("Exceptional view velocity")
    if metrics.engagement_rate > 3:
        factors.append("High audience engagement")
    if metrics.comment_velocity > 10:
        factors.append("Strong discussion generation")
    if has_any(item.title, ATTENTION_KEYWORDS):
        factors.append("Attention-grabbing language")
    if has_any(item.title, EXCLUSIVITY_KEYWORDS):
        factors.append("Novelty and exclusivity")
    return factors


def assess_viral_potential(items: Sequence[ContentItem]) -> List[Dict]:
    """Rank the batch's viral candidates, strongest first."""
    candidates = []
    for item in items:
        metrics = compute_metrics(item, VIRAL_WINDOW_HOURS)
        score = viral_score(metrics)
        if score <= CANDIDATE_FLOOR:
            continue
        candidates.append({
            "videoId": item.video_id,
            "title": item.title,
            "viralScore": score,
            "viralFactors": viral_factors(item, metrics),
            "recommendation": _recommendation(score),
        })

    candidates.sort(key=lambda c: c["viralScore"], reverse=True)
    logger.info(f"Viral potential: {len(candidates)} candidates above {CANDIDATE_FLOOR}")
    return candidates[:MAX_CANDIDATES]


def _recommendation(score: int) -> str:
    for floor, message in RECOMMENDATIONS:
        if score > floor:
            return message
    return LOW_POTENTIAL
