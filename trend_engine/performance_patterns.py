"""
Performance Patterns — batch-wide breakdowns of what engages the audience.

Groups every item (not just rising ones) by publish hour, weekday, month,
title keyword and video length, and reports mean engagement per group.
All calendar fields are read in UTC.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from .metrics import engagement_rate
from .models import ContentItem

TOP_TIME_SLOTS = 3
TOP_KEYWORDS = 10
MIN_KEYWORD_FREQUENCY = 2
MAX_HIGH_PERFORMERS = 5

SHORT_SECONDS = 300
MEDIUM_SECONDS = 900

HIGH_ENGAGEMENT = 3
LOW_ENGAGEMENT = 1.5


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _ranked_groups(groups: Dict, key_name: str) -> List[Dict]:
    """Mean engagement per group, best first (ties keep first-seen order)."""
    rows = [
        {key_name: key, "avgEngagement": _mean(values), "sampleSize": len(values)}
        for key, values in groups.items()
    ]
    rows.sort(key=lambda r: r["avgEngagement"], reverse=True)
    return rows


def _group(pairs: Iterable[Tuple[object, float]]) -> Dict:
    groups = defaultdict(list)
    for key, value in pairs:
        groups[key].append(value)
    return groups


def analyze_time_patterns(items: Sequence[ContentItem]) -> Dict:
    hours = _group((i.published_at.hour, engagement_rate(i)) for i in items)
    days = _group((i.published_at.strftime("%A"), engagement_rate(i)) for i in items)
    return {
        "bestHours": _ranked_groups(hours, "hour")[:TOP_TIME_SLOTS],
        "bestDays": _ranked_groups(days, "day")[:TOP_TIME_SLOTS],
    }


def _length_bucket(duration_seconds: int) -> str:
    if duration_seconds < SHORT_SECONDS:
        return "short"
    if duration_seconds < MEDIUM_SECONDS:
        return "medium"
    return "long"


def analyze_content_patterns(items: Sequence[ContentItem]) -> Dict:
    keywords = defaultdict(list)
    lengths = {"short": [], "medium": [], "long": []}

    for item in items:
        rate = engagement_rate(item)
        for word in item.title.lower().split():
            if len(word) > 3:
                keywords[word].append(rate)
        lengths[_length_bucket(item.duration_seconds)].append(rate)

    top_keywords = [
        {"keyword": word, "avgEngagement": _mean(rates), "frequency": len(rates)}
        for word, rates in keywords.items()
        if len(rates) >= MIN_KEYWORD_FREQUENCY
    ]
    top_keywords.sort(key=lambda k: k["avgEngagement"], reverse=True)

    return {
        "topKeywords": top_keywords[:TOP_KEYWORDS],
        "lengthAnalysis": _ranked_groups(lengths, "length"),
    }


def analyze_engagement_patterns(items: Sequence[ContentItem]) -> Dict:
    rated = [(item, engagement_rate(item)) for item in items]
    high = [(i, r) for i, r in rated if r > HIGH_ENGAGEMENT]
    medium = [(i, r) for i, r in rated if LOW_ENGAGEMENT <= r <= HIGH_ENGAGEMENT]
    low = [(i, r) for i, r in rated if r < LOW_ENGAGEMENT]

    return {
        "distribution": {"high": len(high), "medium": len(medium), "low": len(low)},
        "highPerformers": [
            {"title": item.title, "engagement": rate}
            for item, rate in high[:MAX_HIGH_PERFORMERS]
        ],
    }


def analyze_seasonal_patterns(items: Sequence[ContentItem]) -> List[Dict]:
    months = _group((i.published_at.strftime("%B"), engagement_rate(i)) for i in items)
    return _ranked_groups(months, "month")


def analyze_performance_patterns(items: Sequence[ContentItem]) -> Dict:
    return {
        "timePatterns": analyze_time_patterns(items),
        "contentPatterns": analyze_content_patterns(items),
        "engagementPatterns": analyze_engagement_patterns(items),
        "seasonalPatterns": analyze_seasonal_patterns(items),
    }
