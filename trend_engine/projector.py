"""
Peak Projector — point forecast of where an item's views will top out.

The multiplier grows with the performance score; time-to-peak grows with
its logarithm. Confidence rises with the amount and strength of evidence.
"""

import math
from dataclasses import dataclass
from typing import Dict

from .metrics import NormalizedMetrics
from .tiers import round_half_up, tier_above

# (score floor, view multiplier)
PEAK_MULTIPLIERS = ((80, 5), (60, 3), (40, 2))
BASELINE_MULTIPLIER = 1.2

HOURS_PER_GROWTH_UNIT = 24

BASE_CONFIDENCE = 50
MAX_CONFIDENCE = 95


@dataclass(frozen=True)
class PeakProjection:
    estimated_peak_views: int
    estimated_peak_time_hours: int
    confidence: int

    def to_dict(self) -> Dict:
        return {
            "estimatedPeakViews": self.estimated_peak_views,
            "estimatedPeakTimeHours": self.estimated_peak_time_hours,
            "confidence": self.confidence,
        }


def peak_multiplier(score: int) -> float:
    return tier_above(score, PEAK_MULTIPLIERS, BASELINE_MULTIPLIER)


def projection_confidence(metrics: NormalizedMetrics) -> int:
    confidence = BASE_CONFIDENCE
    if metrics.age_hours > 48:
        confidence += 30  # more history to extrapolate from
    if metrics.engagement_rate > 2:
        confidence += 20
    if metrics.view_velocity > 100:
        confidence += 20
    if metrics.comment_velocity > 1:
        confidence += 10
    return min(confidence, MAX_CONFIDENCE)


def project_peak(current_views: int, metrics: NormalizedMetrics,
                 score: int) -> PeakProjection:
    """Extrapolate peak views and time-to-peak from the current trajectory."""
    multiplier = peak_multiplier(score)
    peak_views = round_half_up(current_views * multiplier)
    peak_time = metrics.age_hours + HOURS_PER_GROWTH_UNIT * math.log(multiplier)

    return PeakProjection(
        estimated_peak_views=max(peak_views, current_views),
        estimated_peak_time_hours=round_half_up(peak_time),
        confidence=projection_confidence(metrics),
    )
