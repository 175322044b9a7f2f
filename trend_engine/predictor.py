"""
Success-Pattern Miner — predicts topics likely to repeat past wins.

Works over the channel's full history, not just the trend window:
  1. Baseline = channel views / channel videos (batch mean as fallback)
  2. Top performers = items above 1.2x the baseline
  3. Mine title words, winning phrases, emotional triggers, topic
     clusters, timing and content formats from the top performers
  4. Match detected phrases and the strongest cluster against a fixed
     template library; only predictions at or above 85 confidence are
     kept as guaranteed topics.

Template confidences are fixed, not learned. Predictions under the
threshold are dropped, never demoted.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .keywords import has_any
from .models import ChannelAggregates, ContentItem
from .tiers import round_half_up, safe_divide

logger = logging.getLogger(__name__)

GUARANTEED_CONFIDENCE = 85
TOP_PERFORMER_MULTIPLIER = 1.2
VIRAL_VIEWS = 100000
TOP_WORDS = 10
MIN_WORD_LENGTH = 4
MAX_CLUSTER_CONFIDENCE = 95
MIN_CLUSTER_CONFIDENCE_FOR_PREDICTION = 80
MAX_NEXT_VIDEOS = 5

# ── Winning phrases (name, exact lowercase substring) ──
WINNING_PHRASES = (
    ("ACTUALLY", "actually"),   # authenticity
    ("INSANE", "insane"),       # superlative
    ("Ultimate", "ultimate"),
    ("Complete", "complete"),   # completeness
    ("3 Ways to", "3 ways"),
    ("How I", "how i"),
)

EMOTIONAL_TRIGGERS = (
    ("Exclamation", "!"),
    ("Ellipsis Curiosity", "..."),
    ("Why Questions", "why"),
)

# ── Psychological triggers per title (name, keywords) ──
TITLE_TRIGGERS = (
    ("Authenticity", ("actually",)),
    ("Surprise", ("insane", "shocking")),
    ("Completeness", ("complete", "ultimate")),
    ("Personal Story", ("how i",)),
    ("Comparison", ("vs", "comparison")),
    ("Novelty", ("new", "latest")),
    ("Exclusivity", ("secret", "hidden")),
)

# ── Topic clusters (name, keywords, example titles) ──
TOPIC_CLUSTERS = (
    ("AI Development Tools", ("cursor", "claude", "ai"), (
        "I Built the Same App with 5 AI Tools (Results Shocking)",
        "Cursor vs Windsurf vs Copilot: The Ultimate Comparison",
        "This AI Coding Assistant Actually Writes Better Code Than Me",
    )),
    ("Automation & MCP", ("mcp", "automation", "n8n"), (
        "I Automated My Entire Workflow with MCP Servers",
        "This n8n Integration Changes Everything for Developers",
        "Building AI Agents That Actually Work (MCP Tutorial)",
    )),
    ("Workflow & Productivity", ("workflow", "method", "system"), (
        "My Complete Development Workflow (Copy This)",
        "The BMAD Method: Revolutionary AI Development System",
        "How I Code 10x Faster with This Simple Method",
    )),
    ("Web Development", ("website", "web", "shadcn"), (
        "3 More Ways to Build ACTUALLY Beautiful Websites",
        "Shadcn Just Changed Everything (New Features)",
        "I Rebuilt My Website with AI (Before/After)",
    )),
)

CONTENT_FORMATS = (
    ("tutorials", ("how", "tutorial")),
    ("comparisons", ("vs", "comparison")),
    ("reviews", ("review", "tested")),
    ("workflows", ("workflow", "method")),
)


@dataclass(frozen=True)
class PredictionTemplate:
    """A title template unlocked by a winning phrase (None = always offered)."""
    topic: str
    confidence: int
    reasoning: str
    expected_views: str
    examples: Tuple[str, ...]
    phrase: Optional[str] = None


TEMPLATE_LIBRARY = (
    PredictionTemplate(
        topic="How to ACTUALLY Build [Popular Tool] Projects",
        confidence=92,
        reasoning='Title pattern "ACTUALLY" has proven high performance',
        expected_views="250K-400K",
        examples=(
            "How to ACTUALLY Build Production Apps with AI",
            "How to ACTUALLY Master Cursor AI (No Fluff)",
            "How to ACTUALLY Use MCP Servers in Real Projects",
        ),
        phrase="ACTUALLY",
    ),
    PredictionTemplate(
        topic="This [New Tool] is INSANE... [Benefit]",
        confidence=89,
        reasoning='Title pattern "INSANE" generates high engagement',
        expected_views="150K-300K",
        examples=(
            "This New Model is INSANE... It Codes Better Than Humans",
            "This Windsurf IDE is INSANE... Cursor Alternative",
            "This MCP Integration is INSANE... Automate Everything",
        ),
        phrase="INSANE",
    ),
    PredictionTemplate(
        topic="Latest AI Development Tool Reviews",
        confidence=88,
        reasoning="AI tool content consistently performs well for your audience",
        expected_views="200K-350K",
        examples=(
            "I Tested 5 AI Coding Assistants (Surprising Winner)",
            "New vs Old: Cursor vs Windsurf vs Copilot",
            "This AI Tool Will Replace Your Entire Stack",
        ),
    ),
    PredictionTemplate(
        topic="Year-End AI Tool Roundup",
        confidence=85,
        reasoning="Seasonal content with proven AI tool angle",
        expected_views="180K-280K",
        examples=(
            "Top 10 AI Tools That Changed Development This Year",
            "Next Year's AI Development Stack Predictions",
            "The AI Tools I'm Ditching (And What I'm Keeping)",
        ),
    ),
)


@dataclass(frozen=True)
class TopicPrediction:
    topic: str
    confidence: int
    reasoning: str
    expected_views_range: str
    example_titles: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "topic": self.topic,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "expectedViewsRange": self.expected_views_range,
            "exampleTitles": list(self.example_titles),
        }


@dataclass(frozen=True)
class SuccessPattern:
    """A topic cluster mined from the top performers."""
    name: str
    frequency: int
    avg_views: int
    avg_engagement: float  # like-to-view ratio, as a fraction
    confidence: float
    example_titles: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "videoCount": self.frequency,
            "avgViews": self.avg_views,
            "avgEngagement": self.avg_engagement,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PredictionResult:
    guaranteed_topics: Tuple[TopicPrediction, ...]
    success_patterns: Dict
    performance_metrics: Dict
    confidence_breakdown: Dict
    next_video_recommendations: Tuple[Dict, ...]


def baseline_views(items: Sequence[ContentItem],
                   aggregates: Optional[ChannelAggregates]) -> float:
    """Average views per video from channel totals, else from the batch."""
    if aggregates and aggregates.view_count > 0 and aggregates.video_count > 0:
        return aggregates.view_count / aggregates.video_count
    return safe_divide(sum(i.view_count for i in items), len(items))


def top_performers(items: Sequence[ContentItem], baseline: float) -> List[ContentItem]:
    """Items beating the baseline by 20%, most viewed first."""
    floor = baseline * TOP_PERFORMER_MULTIPLIER
    winners = [i for i in items if i.view_count > floor]
    return sorted(winners, key=lambda i: i.view_count, reverse=True)


def extract_title_patterns(videos: Sequence[ContentItem]) -> Dict:
    """Word histogram plus presence flags for phrases and triggers."""
    words = Counter()
    for video in videos:
        for word in video.title.lower().split():
            if len(word) >= MIN_WORD_LENGTH:
                words[word] += 1

    titles = [v.title.lower() for v in videos]
    phrases = {
        name: any(needle in t for t in titles)
        for name, needle in WINNING_PHRASES
    }
    triggers = {
        name: any(needle in t for t in titles)
        for name, needle in EMOTIONAL_TRIGGERS
    }

    top_words = sorted(words.items(), key=lambda kv: kv[1], reverse=True)[:TOP_WORDS]
    return {
        "topWords": [{"word": w, "frequency": c} for w, c in top_words],
        "winningPhrases": phrases,
        "emotionalTriggers": triggers,
    }


def identify_topic_clusters(videos: Sequence[ContentItem]) -> List[SuccessPattern]:
    """Score each fixed cluster: 60 + 10 per video + 1000 x like ratio, max 95."""
    clusters = []
    for name, keywords, examples in TOPIC_CLUSTERS:
        members = [v for v in videos if has_any(v.title, keywords)]
        if not members:
            clusters.append(SuccessPattern(name, 0, 0, 0.0, 0.0, examples))
            continue

        avg_views = sum(v.view_count for v in members) / len(members)
        avg_ratio = sum(v.like_to_view_ratio for v in members) / len(members)
        confidence = min(
            MAX_CLUSTER_CONFIDENCE, 60 + len(members) * 10 + avg_ratio * 1000
        )
        clusters.append(SuccessPattern(
            name=name,
            frequency=len(members),
            avg_views=round_half_up(avg_views),
            avg_engagement=avg_ratio,
            confidence=confidence,
            example_titles=examples,
        ))
    return clusters


def analyze_timing_patterns(videos: Sequence[ContentItem]) -> Dict:
    days = Counter(v.published_at.strftime("%A") for v in videos)
    hours = Counter(v.published_at.hour for v in videos)
    return {"dayPatterns": dict(days), "hourPatterns": dict(hours)}


def find_engagement_triggers(videos: Sequence[ContentItem]) -> List[Dict]:
    rows = [
        {
            "title": v.title,
            "engagementRate": v.like_to_view_ratio,
            "triggers": [
                name for name, keywords in TITLE_TRIGGERS if has_any(v.title, keywords)
            ],
        }
        for v in videos
    ]
    rows.sort(key=lambda r: r["engagementRate"], reverse=True)
    return rows


def analyze_content_formats(videos: Sequence[ContentItem]) -> Dict:
    formats = {}
    for name, keywords in CONTENT_FORMATS:
        members = [v for v in videos if has_any(v.title, keywords)]
        if not members:
            formats[name] = {"count": 0, "avgViews": 0, "avgEngagement": 0.0}
            continue
        formats[name] = {
            "count": len(members),
            "avgViews": round_half_up(sum(v.view_count for v in members) / len(members)),
            "avgEngagement": sum(v.like_to_view_ratio for v in members) / len(members),
        }
    return formats


class SuccessPatternMiner:
    """Mines historical winners and emits confidence-scored topic predictions."""

    def __init__(self, threshold: int = GUARANTEED_CONFIDENCE):
        self.threshold = threshold

    def predict(self, items: Sequence[ContentItem],
                aggregates: Optional[ChannelAggregates] = None) -> PredictionResult:
        if not items:
            logger.warning("No video data available for prediction")
            return PredictionResult((), {}, {}, {}, ())

        baseline = baseline_views(items, aggregates)
        winners = top_performers(items, baseline)
        logger.info(
            f"Mining {len(winners)} top performers above "
            f"{baseline * TOP_PERFORMER_MULTIPLIER:.0f} views"
        )

        title_patterns = extract_title_patterns(winners)
        clusters = identify_topic_clusters(winners)
        patterns = {
            "titlePatterns": title_patterns,
            "topicClusters": {c.name: c.to_dict() for c in clusters},
            "timingPatterns": analyze_timing_patterns(winners),
            "engagementTriggers": find_engagement_triggers(winners),
            "contentFormats": analyze_content_formats(winners),
        }
        metrics = self._performance_metrics(items, winners, baseline)

        predictions = self.generate_predictions(title_patterns["winningPhrases"], clusters)
        guaranteed = self.filter_guaranteed(predictions)
        logger.info(f"Found {len(guaranteed)} guaranteed high-performing topics")

        return PredictionResult(
            guaranteed_topics=tuple(guaranteed),
            success_patterns=patterns,
            performance_metrics=metrics,
            confidence_breakdown=self._pattern_confidence(title_patterns, metrics),
            next_video_recommendations=tuple(next_video_topics(guaranteed)),
        )

    def generate_predictions(self, phrases: Dict[str, bool],
                             clusters: Sequence[SuccessPattern]) -> List[TopicPrediction]:
        """Match detected phrases and the top cluster against the template library."""
        predictions = [
            TopicPrediction(
                topic=t.topic,
                confidence=t.confidence,
                reasoning=t.reasoning,
                expected_views_range=t.expected_views,
                example_titles=t.examples,
            )
            for t in TEMPLATE_LIBRARY
            if t.phrase is None or phrases.get(t.phrase)
        ]

        # max() keeps the first cluster on ties
        top = max(clusters, key=lambda c: c.confidence, default=None)
        if top and top.confidence > MIN_CLUSTER_CONFIDENCE_FOR_PREDICTION:
            predictions.append(TopicPrediction(
                topic=f"Advanced {top.name} Techniques",
                confidence=round_half_up(top.confidence),
                reasoning=f"{top.name} cluster shows consistent high performance",
                expected_views_range=f"{round_half_up(top.avg_views / 1000)}K+",
                example_titles=top.example_titles,
            ))

        predictions.sort(key=lambda p: p.confidence, reverse=True)
        return predictions

    def filter_guaranteed(self, predictions: Sequence[TopicPrediction]) -> List[TopicPrediction]:
        return [p for p in predictions if p.confidence >= self.threshold]

    def _performance_metrics(self, items: Sequence[ContentItem],
                             winners: Sequence[ContentItem], baseline: float) -> Dict:
        return {
            "baselineViews": baseline,
            "avgTopPerformerViews": safe_divide(
                sum(v.view_count for v in winners), len(winners)
            ),
            "avgEngagementRate": safe_divide(
                sum(v.like_to_view_ratio for v in winners), len(winners)
            ),
            "successRate": safe_divide(len(winners), len(items)) * 100,
            "viralVideos": sum(1 for v in winners if v.view_count > VIRAL_VIEWS),
        }

    def _pattern_confidence(self, title_patterns: Dict, metrics: Dict) -> Dict:
        phrase_count = sum(1 for present in title_patterns["winningPhrases"].values() if present)
        confidence = {
            "titlePatterns": min(95, 50 + phrase_count * 10),
            "topicClusters": min(95, 40 + metrics["successRate"]),
            "overallPrediction": min(95, 60 + metrics["viralVideos"] * 15),
        }
        confidence["average"] = round_half_up(sum(confidence.values()) / 3)
        return confidence


def next_video_topics(guaranteed: Sequence[TopicPrediction]) -> List[Dict]:
    """Turn the top guaranteed topics into a publishing queue."""
    queue = []
    for index, topic in enumerate(guaranteed[:MAX_NEXT_VIDEOS]):
        if index == 0:
            priority, timeline = "IMMEDIATE", "This week"
        else:
            priority = "HIGH" if index < 3 else "MEDIUM"
            timeline = f"Week {index + 1}"

        queue.append({
            "title": topic.example_titles[0] if topic.example_titles else f"{topic.topic} - Part 1",
            "confidence": topic.confidence,
            "priority": priority,
            "timeline": timeline,
            "expectedViews": topic.expected_views_range,
            "viralPotential": "HIGH" if topic.confidence > 90 else "MEDIUM",
        })
    return queue
