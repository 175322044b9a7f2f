"""
Channel Health Scorer — one 0-100 number for how the channel is doing.

Scores the channel in 5 dimensions, each capped on its own:
  1. Engagement (max 90)        — mean engagement rate across the batch
  2. Consistency (max 90)       — regularity of recent upload intervals
  3. Growth (max 90)            — views per video and subscriber tiers
  4. Market Alignment (max 90)  — which external market signals exist
  5. Content Quality (max 100)  — title, tags, description, engagement

Overall = 30% engagement + 20% consistency + 20% growth
          + 15% market alignment + 15% content quality.

Recommendations come from three fixed bands of the overall score.
No LLM calls — deterministic and auditable.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .metrics import engagement_rate
from .models import ChannelAggregates, ContentItem, MarketSignals
from .tiers import round_half_up, safe_divide, tier_above

logger = logging.getLogger(__name__)

WEIGHTS = {
    "engagement": 0.30,
    "consistency": 0.20,
    "growth": 0.20,
    "marketAlignment": 0.15,
    "contentQuality": 0.15,
}

SUBSCORE_CAP = 90

# ── Engagement ──
EMPTY_BATCH_ENGAGEMENT = 50
ENGAGEMENT_TIERS = ((5, 90), (3, 75), (1, 60))
LOW_ENGAGEMENT_SCORE = 40

# ── Consistency ──
MIN_ITEMS_FOR_CONSISTENCY = 3
UNDERSIZED_CONSISTENCY = 30
RECENT_UPLOADS = 10
SECONDS_PER_DAY = 86400

# ── Growth ──
GROWTH_BASE = 50
VIEWS_PER_VIDEO_BONUS = ((100000, 20), (10000, 10))
SUBSCRIBER_RATIO_BONUS = ((0.01, 15), (0.005, 10))
SUBSCRIBER_BONUS = ((100000, 15), (10000, 10), (1000, 5))

# ── Market alignment ──
MARKET_BASE = 50
MARKET_SIGNAL_POINTS = 15
BUSINESS_PROFILE_POINTS = 10

# ── Content quality ──
EMPTY_BATCH_QUALITY = 50
QUALITY_BASE = 50
QUALITY_FEATURE_POINTS = 10
MIN_TITLE_LENGTH = 30
MIN_TAG_COUNT = 5
MIN_DESCRIPTION_LENGTH = 100
QUALITY_ENGAGEMENT_BONUS = ((3, 20), (1, 10))

# ── Recommendations, by overall score band ──
RECOMMENDATION_BANDS = (
    (40, (
        "Focus on improving content quality and consistency",
        "Analyze top-performing videos and replicate successful elements",
        "Engage more with your audience through comments and community posts",
    )),
    (70, (
        "Optimize video titles and thumbnails for better click-through rates",
        "Maintain consistent upload schedule",
        "Explore trending topics in your niche",
    )),
)
HEALTHY_RECOMMENDATIONS = (
    "Experiment with new content formats",
    "Consider expanding to new platforms",
    "Develop monetization strategies",
)


@dataclass(frozen=True)
class HealthScore:
    overall: int
    breakdown: Dict[str, int]
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            "overall": self.overall,
            "breakdown": dict(self.breakdown),
            "recommendations": list(self.recommendations),
        }


def score_engagement(items: Sequence[ContentItem]) -> float:
    if not items:
        return EMPTY_BATCH_ENGAGEMENT
    mean_rate = sum(engagement_rate(i) for i in items) / len(items)
    return tier_above(mean_rate, ENGAGEMENT_TIERS, LOW_ENGAGEMENT_SCORE)


def upload_intervals(items: Sequence[ContentItem]) -> List[float]:
    """Days between consecutive uploads among the most recent ones."""
    dates = sorted((i.published_at for i in items), reverse=True)[:RECENT_UPLOADS]
    return [
        (newer - older).total_seconds() / SECONDS_PER_DAY
        for newer, older in zip(dates, dates[1:])
    ]


def score_consistency(items: Sequence[ContentItem]) -> float:
    if len(items) < MIN_ITEMS_FOR_CONSISTENCY:
        return UNDERSIZED_CONSISTENCY

    intervals = upload_intervals(items)
    mean_interval = sum(intervals) / len(intervals)
    variance = sum((d - mean_interval) ** 2 for d in intervals) / len(intervals)

    consistency = max(0.0, 100 - safe_divide(variance, mean_interval) * 10)
    return min(SUBSCORE_CAP, consistency)


def score_growth(aggregates: ChannelAggregates) -> float:
    views_per_video = safe_divide(aggregates.view_count, aggregates.video_count)
    subscriber_ratio = safe_divide(aggregates.subscriber_count, aggregates.view_count)

    score = (
        GROWTH_BASE
        + tier_above(views_per_video, VIEWS_PER_VIDEO_BONUS)
        + tier_above(subscriber_ratio, SUBSCRIBER_RATIO_BONUS)
        + tier_above(aggregates.subscriber_count, SUBSCRIBER_BONUS)
    )
    return min(SUBSCORE_CAP, score)


def score_market_alignment(signals: MarketSignals) -> float:
    score = MARKET_BASE
    for present in (signals.competitors, signals.audience, signals.trends):
        if present:
            score += MARKET_SIGNAL_POINTS
    if signals.business_profile:
        score += BUSINESS_PROFILE_POINTS
    return min(SUBSCORE_CAP, score)


def score_item_quality(item: ContentItem) -> int:
    score = QUALITY_BASE
    if len(item.title) > MIN_TITLE_LENGTH:
        score += QUALITY_FEATURE_POINTS
    if len(item.tags) > MIN_TAG_COUNT:
        score += QUALITY_FEATURE_POINTS
    if len(item.description) > MIN_DESCRIPTION_LENGTH:
        score += QUALITY_FEATURE_POINTS
    return score + tier_above(engagement_rate(item), QUALITY_ENGAGEMENT_BONUS)


def score_content_quality(items: Sequence[ContentItem]) -> float:
    if not items:
        return EMPTY_BATCH_QUALITY
    return sum(score_item_quality(i) for i in items) / len(items)


def health_recommendations(overall: int) -> Tuple[str, ...]:
    for ceiling, recommendations in RECOMMENDATION_BANDS:
        if overall < ceiling:
            return recommendations
    return HEALTHY_RECOMMENDATIONS


def weighted_overall(breakdown: Dict[str, int]) -> int:
    """Round of the weighted sum of the breakdown, clamped to 0-100."""
    total = sum(breakdown[name] * weight for name, weight in WEIGHTS.items())
    return min(100, max(0, round_half_up(total)))


def score_channel_health(items: Sequence[ContentItem],
                         aggregates: ChannelAggregates,
                         signals: MarketSignals) -> HealthScore:
    """Combine the five dimension scores into a HealthScore."""
    breakdown = {
        "engagement": round_half_up(score_engagement(items)),
        "consistency": round_half_up(score_consistency(items)),
        "growth": round_half_up(score_growth(aggregates)),
        "marketAlignment": round_half_up(score_market_alignment(signals)),
        "contentQuality": round_half_up(score_content_quality(items)),
    }
    overall = weighted_overall(breakdown)
    logger.info(f"Channel health {overall}/100: {breakdown}")

    return HealthScore(
        overall=overall,
        breakdown=breakdown,
        recommendations=health_recommendations(overall),
    )
