"""
Trend Aggregator — ranks rising content and explains what it has in common.

Two passes over the batch:
  1. analyze_item() maps each ContentItem to a TrendRecord (metrics,
     score, state, reasons, peak projection, follow-up actions).
  2. TrendAggregator reduces the records: keeps rising/trending/viral
     items ranked by score, tallies reasons and title topics, picks an
     overall pattern and derives content opportunities.

No LLM calls — purely rule-based with template narratives.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from . import reasons as factors
from .classifier import (
    STABLE, classify, is_rising, performance_score, recommend_actions,
)
from .keywords import (
    REVIEW_KEYWORDS, TECH_KEYWORDS, TIPS_KEYWORDS, TUTORIAL_KEYWORDS, has_any,
)
from .metrics import NormalizedMetrics, normalize
from .models import ContentItem
from .projector import PeakProjection, project_peak
from .reasons import TrendReason, attribute_reasons
from .tiers import round_half_up

logger = logging.getLogger(__name__)

# Items older than the window (hours) get a baseline record
DEFAULT_TIMEFRAME_HOURS = 168
BASELINE_SCORE = 50

TOP_REASONS = 5
TOP_TOPICS = 3
MAX_OPPORTUNITIES = 5

# ── Title topics (label, keywords) ──
TOPIC_RULES = (
    ("AI/Tech", ("ai",)),
    ("Educational", TUTORIAL_KEYWORDS),
    ("Tips/Advice", ("tips",)),
)

# ── Overall pattern rules ──
# (label fragments looked for in the dominant reason, message)
PATTERN_RULES = (
    (("AI", "Technology"), "Strong technology trend driving content performance"),
    (("Educational", "Tutorial"), "Educational content outperforming entertainment"),
    (("Engagement",), "Audience interaction quality over quantity trend"),
    (("Timing", "Momentum"), "Strategic timing and momentum-based success pattern"),
)
DIVERSIFIED_PATTERN = "Mixed success factors - diversified content strategy working"
NO_PATTERN = "Insufficient data for pattern analysis"

# ── Content opportunity themes (label, keywords, suggested topics) ──
OPPORTUNITY_THEMES = (
    ("AI Content", TECH_KEYWORDS, (
        "AI Tools for Content Creation",
        "ChatGPT vs Gemini Comparison",
        "AI Coding Assistants Review",
    )),
    ("Tutorial Content", TUTORIAL_KEYWORDS, (
        "Step-by-Step Guide to...",
        "Complete Beginner Tutorial",
        "Advanced Techniques Masterclass",
    )),
    ("Tips Content", TIPS_KEYWORDS, (
        "10 Pro Tips for...",
        "Hidden Features You Should Know",
        "Productivity Hacks That Work",
    )),
    ("Review Content", REVIEW_KEYWORDS, (
        "Honest Review of...",
        "Before You Buy: Analysis",
        "Comparing Top Solutions",
    )),
)

STANDING_OPPORTUNITY = {
    "type": "Trending Topic Integration",
    "potential": "High",
    "reason": "Current market trends favor technology and AI content",
    "suggestedTopics": [
        "AI Tools for Creators",
        "Latest Tech Trends",
        "Productivity Automation",
    ],
    "priority": "Immediate",
}


@dataclass(frozen=True)
class TrendRecord:
    """One item's trend assessment for a single analysis run."""
    item: ContentItem
    metrics: NormalizedMetrics
    status: str
    performance_score: int
    reasons: Tuple[TrendReason, ...] = ()
    projected_peak: Optional[PeakProjection] = None
    recommended_actions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        m = self.metrics
        return {
            "videoId": self.item.video_id,
            "title": self.item.title,
            "publishedAt": self.item.published_at.isoformat(),
            "hoursOld": round_half_up(m.age_hours),
            "status": self.status,
            "performanceScore": self.performance_score,
            "metrics": {
                "viewVelocity": m.view_velocity,
                "engagementRate": m.engagement_rate,
                "commentVelocity": m.comment_velocity,
                "shareProjection": m.share_projection,
                "retentionSignal": m.retention_signal,
            },
            "trendReasons": [r.to_dict() for r in self.reasons],
            "projectedPeak": self.projected_peak.to_dict() if self.projected_peak else None,
            "recommendedActions": list(self.recommended_actions),
        }


def analyze_item(item: ContentItem, now: datetime,
                 timeframe_hours: Optional[float] = DEFAULT_TIMEFRAME_HOURS) -> TrendRecord:
    """Score, classify, explain and project a single item (None = no window)."""
    metrics = normalize(item, now)

    if timeframe_hours is not None and metrics.age_hours > timeframe_hours:
        return TrendRecord(
            item=item, metrics=metrics,
            status=STABLE, performance_score=BASELINE_SCORE,
        )

    score = performance_score(metrics)
    status = classify(metrics, score)
    item_reasons = tuple(attribute_reasons(item, metrics))

    return TrendRecord(
        item=item,
        metrics=metrics,
        status=status,
        performance_score=score,
        reasons=item_reasons,
        projected_peak=project_peak(item.view_count, metrics, score),
        recommended_actions=tuple(
            recommend_actions(status, [r.factor for r in item_reasons])
        ),
    )


class TrendAggregator:
    """Reduces trend records into ranked rising content and shared patterns."""

    def __init__(self, records: Sequence[TrendRecord]):
        # sorted() is stable: equal scores keep batch order
        self.rising = sorted(
            (r for r in records if is_rising(r.status)),
            key=lambda r: r.performance_score,
            reverse=True,
        )

    def summarize(self) -> Dict:
        """
        Returns:
            {
                "risingContent": [TrendRecord],
                "trendingReasons": {topReasons, trendingTopics,
                                    overallPattern, marketInsights},
                "contentOpportunities": [dict],
            }
        """
        logger.info(f"Aggregating {len(self.rising)} rising items")
        return {
            "risingContent": list(self.rising),
            "trendingReasons": self.trending_reasons(),
            "contentOpportunities": self.content_opportunities(),
        }

    def trending_reasons(self) -> Dict:
        reason_counts = Counter()
        topic_counts = Counter()

        for record in self.rising:
            for reason in record.reasons:
                reason_counts[reason.factor] += 1
            for topic, keywords in TOPIC_RULES:
                if has_any(record.item.title, keywords):
                    topic_counts[topic] += 1

        top_reasons = [
            {"reason": reason, "frequency": count}
            for reason, count in _rank(reason_counts)[:TOP_REASONS]
        ]
        trending_topics = [
            {"topic": topic, "frequency": count}
            for topic, count in _rank(topic_counts)[:TOP_TOPICS]
        ]

        return {
            "topReasons": top_reasons,
            "trendingTopics": trending_topics,
            "overallPattern": self._overall_pattern(top_reasons),
            "marketInsights": self._market_insights(top_reasons, trending_topics),
        }

    def content_opportunities(self) -> List[Dict]:
        opportunities = []

        for label, keywords, suggestions in OPPORTUNITY_THEMES:
            count = sum(1 for r in self.rising if has_any(r.item.title, keywords))
            if count < 2:
                continue
            opportunities.append({
                "type": label,
                "potential": "High",
                "reason": f"{count} rising videos in this category",
                "suggestedTopics": list(suggestions),
                "priority": "Immediate" if count > 3 else "High",
            })

        opportunities.append(dict(
            STANDING_OPPORTUNITY,
            suggestedTopics=list(STANDING_OPPORTUNITY["suggestedTopics"]),
        ))
        return opportunities[:MAX_OPPORTUNITIES]

    def _overall_pattern(self, top_reasons: List[Dict]) -> str:
        if not top_reasons:
            return NO_PATTERN

        dominant = top_reasons[0]["reason"]
        for fragments, message in PATTERN_RULES:
            if any(fragment in dominant for fragment in fragments):
                return message
        return DIVERSIFIED_PATTERN

    def _market_insights(self, top_reasons: List[Dict],
                         trending_topics: List[Dict]) -> List[Dict]:
        insights = []
        reason_names = [r["reason"] for r in top_reasons]

        if any(t["topic"] == "AI/Tech" for t in trending_topics):
            insights.append({
                "insight": "AI and technology content experiencing significant growth",
                "action": "Increase technology-focused content production",
                "opportunity": "High audience demand for AI tutorials and insights",
            })

        if factors.EDUCATIONAL in reason_names:
            insights.append({
                "insight": "Educational content consistently outperforming entertainment",
                "action": "Focus on tutorial and how-to content formats",
                "opportunity": "Untapped demand for comprehensive learning content",
            })

        if factors.ENGAGEMENT in reason_names:
            insights.append({
                "insight": "Audience prioritizing interactive and discussion-worthy content",
                "action": "Create more discussion-generating and community-focused content",
                "opportunity": "Build stronger community through engagement-first strategy",
            })

        return insights


def _rank(counts: Counter) -> List[Tuple[str, int]]:
    """Sort by count descending; ties keep first-seen order."""
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
