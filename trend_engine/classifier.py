"""
Trend Classifier — velocity-based performance scoring and trend states.

Scores each item 0-100 from its normalized rates, then maps the score to
one of five ordered states. Velocity and engagement floors guard the top
tiers, so a high score alone is not enough to call something viral.

Core insight: velocity beats volume. 5,000 views in four hours is a
stronger signal than 50,000 views accumulated over a year.
"""

import logging
from typing import List, Sequence

from . import reasons as factors
from .metrics import NormalizedMetrics
from .tiers import tier_above, tier_below

logger = logging.getLogger(__name__)

# ── Trend states, weakest first ──
DECLINING = "declining"
STABLE = "stable"
RISING = "rising"
TRENDING = "trending"
VIRAL = "viral"

TREND_ORDER = (DECLINING, STABLE, RISING, TRENDING, VIRAL)
RISING_STATES = frozenset({RISING, TRENDING, VIRAL})

# ── Performance score weights ──
#   view velocity     40 points
#   engagement rate   35 points
#   comment velocity  15 points
#   recency           10 points
VIEW_VELOCITY_POINTS = ((1000, 40), (500, 30), (100, 20), (50, 10))
ENGAGEMENT_POINTS = ((5, 35), (3, 25), (2, 15), (1, 10))
COMMENT_VELOCITY_POINTS = ((10, 15), (5, 10), (1, 5))
RECENCY_POINTS = ((24, 10), (72, 5))  # hours old, youngest first
MAX_SCORE = 100

# ── Classification rules ──
# (state, min score, view velocity floor, engagement floor), checked in
# order; the first match wins. Floors are exclusive, the score inclusive.
CLASSIFICATION_RULES = (
    (VIRAL, 80, 1000, 4),
    (TRENDING, 60, 300, 2.5),
    (RISING, 40, 100, 1.5),
    (STABLE, 25, None, None),
)

# ── Follow-up actions ──
STATUS_ACTIONS = {
    VIRAL: (
        "Capitalize on momentum with follow-up content",
        "Create content series around this topic",
        "Actively engage with comments to maintain discussion",
        "Cross-promote on other platforms immediately",
    ),
    TRENDING: (
        "Boost promotion with additional marketing",
        "Create similar content while trend is hot",
        "Monitor metrics closely for optimization opportunities",
        "Reach out to collaborators while content is trending",
    ),
    RISING: (
        "Increase promotion to boost momentum",
        "Optimize tags and description for better discovery",
        "Analyze successful elements for future content",
        "Consider optimal timing for similar content",
    ),
    STABLE: (
        "Optimize title and thumbnail for better performance",
        "Update description with trending keywords",
        "Target specific audience segments",
    ),
    DECLINING: (
        "Analyze what went wrong for learning",
        "Consider content refresh or update",
        "Review audience retention analytics",
    ),
}

REASON_ACTIONS = {
    factors.AI_TECH: "Create more AI-related content while trend is hot",
    factors.EDUCATIONAL: "Develop comprehensive tutorial series",
    factors.ENGAGEMENT: "Create Q&A or discussion-based follow-up content",
}

MAX_ACTIONS = 5


def performance_score(metrics: NormalizedMetrics) -> int:
    """Composite 0-100 score from velocity, engagement, discussion and recency."""
    score = (
        tier_above(metrics.view_velocity, VIEW_VELOCITY_POINTS)
        + tier_above(metrics.engagement_rate, ENGAGEMENT_POINTS)
        + tier_above(metrics.comment_velocity, COMMENT_VELOCITY_POINTS)
        + tier_below(metrics.age_hours, RECENCY_POINTS)
    )
    return min(score, MAX_SCORE)


def classify(metrics: NormalizedMetrics, score: int) -> str:
    """Map a scored item to its trend state."""
    for state, min_score, min_velocity, min_engagement in CLASSIFICATION_RULES:
        if score < min_score:
            continue
        if min_velocity is not None and metrics.view_velocity <= min_velocity:
            continue
        if min_engagement is not None and metrics.engagement_rate <= min_engagement:
            continue
        return state
    return DECLINING


def trend_rank(state: str) -> int:
    """Position of a state on the ordered scale (declining = 0)."""
    return TREND_ORDER.index(state)


def is_rising(state: str) -> bool:
    return state in RISING_STATES


def recommend_actions(state: str, reason_factors: Sequence[str]) -> List[str]:
    """Status playbook followed by reason-specific follow-ups, top 5."""
    actions = list(STATUS_ACTIONS.get(state, ()))
    for factor in reason_factors:
        extra = REASON_ACTIONS.get(factor)
        if extra:
            actions.append(extra)
    return actions[:MAX_ACTIONS]
