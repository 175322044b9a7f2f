"""
Metric Normalizer — turns raw counters into per-hour rates.

Views and comments are divided by the hours since publish, likes and
comments by views. Every ratio is total: a zero denominator yields 0, so
nothing downstream ever sees NaN or infinity.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict

from .models import ContentItem
from .tiers import safe_divide

logger = logging.getLogger(__name__)

# ── Qualitative levels ──
LOW = "Low"
MEDIUM = "Medium"
HIGH = "High"
VERY_HIGH = "VeryHigh"

# ── Retention ──
# Long videos hold attention with less engagement than shorts need.
LONG_VIDEO_SECONDS = 600
SHORT_VIDEO_SECONDS = 300
LONG_VIDEO_MIN_ENGAGEMENT = 2
SHORT_VIDEO_MIN_ENGAGEMENT = 3
MEDIUM_RETENTION_ENGAGEMENT = 1.5

# ── Share projection ──
# (level, engagement rate floor, comment velocity floor), strongest first
SHARE_PROJECTION_TIERS = (
    (VERY_HIGH, 4, 8),
    (HIGH, 3, 5),
    (MEDIUM, 2, 2),
)


@dataclass(frozen=True)
class NormalizedMetrics:
    """Rates derived from one ContentItem for a single analysis run."""
    age_hours: float
    view_velocity: float
    comment_velocity: float
    engagement_rate: float
    retention_signal: str
    share_projection: str

    def to_dict(self) -> Dict:
        return {
            "ageHours": self.age_hours,
            "viewVelocity": self.view_velocity,
            "commentVelocity": self.comment_velocity,
            "engagementRate": self.engagement_rate,
            "retentionSignal": self.retention_signal,
            "shareProjection": self.share_projection,
        }


def age_in_hours(item: ContentItem, now: datetime) -> float:
    """Hours since publish, clamped to 0 for future timestamps."""
    hours = (now - item.published_at).total_seconds() / 3600
    return max(hours, 0.0)


def engagement_rate(item: ContentItem) -> float:
    """(likes + comments) / views as a percentage."""
    return safe_divide(item.like_count + item.comment_count, item.view_count) * 100


def assess_retention(duration_seconds: int, rate: float) -> str:
    if duration_seconds > LONG_VIDEO_SECONDS and rate > LONG_VIDEO_MIN_ENGAGEMENT:
        return HIGH
    if duration_seconds < SHORT_VIDEO_SECONDS and rate > SHORT_VIDEO_MIN_ENGAGEMENT:
        return HIGH
    if rate > MEDIUM_RETENTION_ENGAGEMENT:
        return MEDIUM
    return LOW


def project_share_potential(rate: float, comment_velocity: float) -> str:
    for level, min_rate, min_comment_velocity in SHARE_PROJECTION_TIERS:
        if rate > min_rate and comment_velocity > min_comment_velocity:
            return level
    return LOW


def compute_metrics(item: ContentItem, age_hours: float) -> NormalizedMetrics:
    """Derive rates for an item assumed to be age_hours old."""
    age_hours = max(age_hours, 0.0)
    rate = engagement_rate(item)
    comment_velocity = safe_divide(item.comment_count, age_hours)

    return NormalizedMetrics(
        age_hours=age_hours,
        view_velocity=safe_divide(item.view_count, age_hours),
        comment_velocity=comment_velocity,
        engagement_rate=rate,
        retention_signal=assess_retention(item.duration_seconds, rate),
        share_projection=project_share_potential(rate, comment_velocity),
    )


def normalize(item: ContentItem, now: datetime) -> NormalizedMetrics:
    """Derive rates for an item as of the analysis clock."""
    metrics = compute_metrics(item, age_in_hours(item, now))
    logger.debug(
        f"{item.video_id}: age={metrics.age_hours:.1f}h "
        f"views/h={metrics.view_velocity:.1f} er={metrics.engagement_rate:.2f}%"
    )
    return metrics
