"""
Engine — runs the full analysis over one channel snapshot.

  1. Validate the snapshot (items, channel aggregates, market signals)
  2. Map every item to a trend record (normalize, score, classify,
     attribute reasons, project peak)
  3. Reduce: rank rising content, tally reasons, find opportunities
  4. Assess viral potential and batch performance patterns
  5. Mine historical winners for guaranteed topics
  6. Score channel health

Pure and synchronous: the same input and `now` give the same output.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .aggregator import DEFAULT_TIMEFRAME_HOURS, TrendAggregator, TrendRecord, analyze_item
from .health import HealthScore, score_channel_health
from .models import load_aggregates, load_items, load_market_signals, resolve_now
from .performance_patterns import analyze_performance_patterns
from .predictor import SuccessPatternMiner, TopicPrediction
from .viral import assess_viral_potential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    rising_content: Tuple[TrendRecord, ...]
    trending_reasons: Dict
    content_opportunities: Tuple[Dict, ...]
    viral_potential: Tuple[Dict, ...]
    guaranteed_topics: Tuple[TopicPrediction, ...]
    channel_health_score: HealthScore
    performance_patterns: Dict
    success_patterns: Dict
    next_video_recommendations: Tuple[Dict, ...]
    analyzed_at: datetime

    def to_dict(self) -> Dict:
        """Plain JSON-serializable view with camelCase keys."""
        return {
            "risingContent": [r.to_dict() for r in self.rising_content],
            "trendingReasons": self.trending_reasons,
            "contentOpportunities": list(self.content_opportunities),
            "viralPotential": list(self.viral_potential),
            "guaranteedTopics": [t.to_dict() for t in self.guaranteed_topics],
            "channelHealthScore": self.channel_health_score.to_dict(),
            "performancePatterns": self.performance_patterns,
            "successPatterns": self.success_patterns,
            "nextVideoRecommendations": list(self.next_video_recommendations),
            "analyzedAt": self.analyzed_at.isoformat(),
        }


def analyze(items: Any, channel_aggregates: Any,
            market_signals: Optional[Any] = None,
            now: Optional[Any] = None,
            timeframe_hours: Optional[float] = DEFAULT_TIMEFRAME_HOURS) -> AnalysisResult:
    """
    Analyze a channel snapshot.

    Args:
        items: List of video records (dicts or ContentItem).
        channel_aggregates: {subscriberCount, viewCount, videoCount}.
        market_signals: Optional {competitors, audience, trends, businessProfile}.
        now: Analysis clock (datetime or ISO string). Defaults to current UTC time.
        timeframe_hours: Only items younger than this are trend-analysed
            (default one week). None analyses every item.

    Returns:
        AnalysisResult for this snapshot.

    Raises:
        InvalidInputError: If the snapshot violates the input contract.
    """
    batch = load_items(items)
    aggregates = load_aggregates(channel_aggregates)
    signals = load_market_signals(market_signals)
    clock = resolve_now(now)
    logger.info(f"Analyzing {len(batch)} videos as of {clock.isoformat()}")

    records = [analyze_item(item, clock, timeframe_hours) for item in batch]
    summary = TrendAggregator(records).summarize()

    prediction = SuccessPatternMiner().predict(batch, aggregates)

    return AnalysisResult(
        rising_content=tuple(summary["risingContent"]),
        trending_reasons=summary["trendingReasons"],
        content_opportunities=tuple(summary["contentOpportunities"]),
        viral_potential=tuple(assess_viral_potential(batch)),
        guaranteed_topics=prediction.guaranteed_topics,
        channel_health_score=score_channel_health(batch, aggregates, signals),
        performance_patterns=analyze_performance_patterns(batch),
        success_patterns=prediction.success_patterns,
        next_video_recommendations=prediction.next_video_recommendations,
        analyzed_at=clock,
    )
