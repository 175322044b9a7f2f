"""
Reason Attributor — explains why an item is performing.

Each rule is independent; an item collects every reason that applies, in
the order the rules are listed. An empty list is a valid answer.
"""

from dataclasses import dataclass
from typing import Dict, List

from .keywords import (
    NOVELTY_KEYWORDS, TECH_KEYWORDS, TUTORIAL_KEYWORDS,
    has_any, has_year_token, match_trending_tags,
)
from .metrics import HIGH, LOW, MEDIUM, NormalizedMetrics
from .models import ContentItem

# ── Factor labels ──
AI_TECH = "AI/Technology Trend"
EDUCATIONAL = "Educational Content Demand"
NOVELTY = "Timeliness/Novelty"
ENGAGEMENT = "High Audience Engagement"
MOMENTUM = "Strong Initial Momentum"
DISCUSSION = "Active Discussion Generation"
TRENDING_TAGS = "Trending Keywords/Tags"
TIMING = "Optimal Publishing Time"

# Peak audience activity window, UTC hours inclusive
OPTIMAL_PUBLISH_HOURS = (14, 16)


@dataclass(frozen=True)
class TrendReason:
    factor: str
    impact: str
    description: str

    def to_dict(self) -> Dict:
        return {
            "factor": self.factor,
            "impact": self.impact,
            "description": self.description,
        }


def attribute_reasons(item: ContentItem, metrics: NormalizedMetrics) -> List[TrendReason]:
    """Collect every trend reason that applies to the item."""
    reasons = []
    title = item.title

    # Title factors
    if has_any(title, TECH_KEYWORDS):
        reasons.append(TrendReason(
            AI_TECH, HIGH,
            "Content aligns with current AI technology interest",
        ))

    if has_any(title, TUTORIAL_KEYWORDS):
        reasons.append(TrendReason(
            EDUCATIONAL, MEDIUM,
            "Tutorial content consistently performs well",
        ))

    if has_any(title, NOVELTY_KEYWORDS) or has_year_token(title):
        reasons.append(TrendReason(
            NOVELTY, MEDIUM,
            "Current and timely content attracts more attention",
        ))

    # Audience signals
    if metrics.engagement_rate > 3:
        reasons.append(TrendReason(
            ENGAGEMENT, HIGH,
            "Strong like-to-view and comment-to-view ratios indicate resonant content",
        ))

    if metrics.view_velocity > 500:
        reasons.append(TrendReason(
            MOMENTUM, HIGH,
            "Rapid view accumulation suggests algorithmic promotion and audience interest",
        ))

    if metrics.comment_velocity > 5:
        reasons.append(TrendReason(
            DISCUSSION, MEDIUM,
            "High comment velocity indicates content sparking conversation",
        ))

    trending_tags = match_trending_tags(item.tags)
    if trending_tags:
        reasons.append(TrendReason(
            TRENDING_TAGS, MEDIUM,
            f"Uses trending keywords: {', '.join(trending_tags)}",
        ))

    start_hour, end_hour = OPTIMAL_PUBLISH_HOURS
    if start_hour <= item.published_at.hour <= end_hour:
        reasons.append(TrendReason(
            TIMING, LOW,
            "Published during peak audience activity hours",
        ))

    return reasons
