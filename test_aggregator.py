"""
Trend aggregator, viral potential and performance pattern tests.

Run: python -m pytest test_aggregator.py
"""

import unittest
from datetime import datetime, timedelta, timezone

from trend_engine import reasons as factors
from trend_engine.aggregator import (
    DIVERSIFIED_PATTERN, NO_PATTERN, TrendAggregator, analyze_item,
)
from trend_engine.classifier import RISING, STABLE, VIRAL
from trend_engine.models import ContentItem
from trend_engine.performance_patterns import analyze_performance_patterns
from trend_engine.viral import assess_viral_potential

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_item(video_id, title, hours_old, views, likes, comments, duration=0):
    return ContentItem(
        video_id=video_id,
        title=title,
        published_at=NOW - timedelta(hours=hours_old),
        duration_seconds=duration,
        view_count=views,
        like_count=likes,
        comment_count=comments,
    )


def viral_item(video_id, title="Python tutorial part 1"):
    # 5,000 views/h, 4.5% engagement, 25 comments/h, 20h old -> score 90
    return make_item(video_id, title, 20, 100_000, 4_000, 500)


def rising_item(video_id, title="Weekend vlog"):
    # 400 views/h, 2.5% engagement, 2 comments/h, 50h old -> score 45
    return make_item(video_id, title, 50, 20_000, 400, 100)


def declining_item(video_id, title="Old upload"):
    return make_item(video_id, title, 100, 500, 2, 0)


class TestAnalyzeItem(unittest.TestCase):

    def test_record_fields(self):
        record = analyze_item(viral_item("a"), NOW)
        self.assertEqual(record.status, VIRAL)
        self.assertEqual(record.performance_score, 90)
        self.assertIsNotNone(record.projected_peak)
        self.assertLessEqual(len(record.recommended_actions), 5)

        data = record.to_dict()
        self.assertEqual(data["videoId"], "a")
        self.assertEqual(data["hoursOld"], 20)
        self.assertEqual(data["metrics"]["viewVelocity"], 5000)

    def test_rising_record(self):
        record = analyze_item(rising_item("b"), NOW)
        self.assertEqual(record.performance_score, 45)
        self.assertEqual(record.status, RISING)

    def test_default_window_is_one_week(self):
        week_old = make_item("w", "Old hit", 169, 2_000_000, 100_000, 20_000)
        self.assertEqual(analyze_item(week_old, NOW).status, STABLE)
        self.assertEqual(analyze_item(week_old, NOW, timeframe_hours=None).status, VIRAL)

    def test_outside_timeframe_gets_baseline(self):
        record = analyze_item(viral_item("old"), NOW, timeframe_hours=12)
        self.assertEqual(record.status, STABLE)
        self.assertEqual(record.performance_score, 50)
        self.assertIsNone(record.projected_peak)
        self.assertEqual(record.reasons, ())


class TestTrendAggregator(unittest.TestCase):

    def test_educational_batch(self):
        records = [
            analyze_item(viral_item(f"t{i}", f"Python tutorial part {i}"), NOW)
            for i in range(15)
        ]
        summary = TrendAggregator(records).summarize()
        reasons = summary["trendingReasons"]

        self.assertEqual(len(summary["risingContent"]), 15)
        topics = {t["topic"]: t["frequency"] for t in reasons["trendingTopics"]}
        self.assertGreaterEqual(topics["Educational"], 15)
        self.assertEqual(reasons["topReasons"][0]["reason"], factors.EDUCATIONAL)
        self.assertEqual(
            reasons["overallPattern"],
            "Educational content outperforming entertainment",
        )
        self.assertLessEqual(len(reasons["topReasons"]), 5)

        opportunity = summary["contentOpportunities"][0]
        self.assertEqual(opportunity["type"], "Tutorial Content")
        self.assertEqual(opportunity["priority"], "Immediate")

    def test_ranking_is_descending_and_stable(self):
        records = [
            analyze_item(rising_item("r1"), NOW),
            analyze_item(declining_item("d1"), NOW),
            analyze_item(viral_item("v1"), NOW),
            analyze_item(rising_item("r2"), NOW),
        ]
        rising = TrendAggregator(records).rising
        self.assertEqual([r.item.video_id for r in rising], ["v1", "r1", "r2"])

    def test_empty_batch(self):
        summary = TrendAggregator([]).summarize()
        self.assertEqual(summary["risingContent"], [])
        self.assertEqual(summary["trendingReasons"]["topReasons"], [])
        self.assertEqual(summary["trendingReasons"]["overallPattern"], NO_PATTERN)
        self.assertEqual(
            [o["type"] for o in summary["contentOpportunities"]],
            ["Trending Topic Integration"],
        )

    def test_theme_needs_two_rising_items(self):
        records = [
            analyze_item(viral_item("a", "AI agents tutorial"), NOW),
            analyze_item(viral_item("b", "AI coding review"), NOW),
            analyze_item(viral_item("c", "Camera tips"), NOW),
        ]
        opportunities = TrendAggregator(records).content_opportunities()
        by_type = {o["type"]: o for o in opportunities}
        self.assertEqual(by_type["AI Content"]["priority"], "High")
        self.assertNotIn("Tips Content", by_type)
        self.assertNotIn("Tutorial Content", by_type)

    def test_ai_dominant_pattern_and_insights(self):
        records = [analyze_item(viral_item(f"a{i}", f"AI news {i}"), NOW) for i in range(3)]
        reasons = TrendAggregator(records).trending_reasons()
        self.assertEqual(
            reasons["overallPattern"],
            "Strong technology trend driving content performance",
        )
        insights = [i["insight"] for i in reasons["marketInsights"]]
        self.assertIn("AI and technology content experiencing significant growth", insights)

    def test_ai_topic_counts_the_short_form_only(self):
        records = [
            analyze_item(viral_item("l", "Artificial intelligence explained"), NOW),
            analyze_item(viral_item("s", "AI explained"), NOW),
        ]
        reasons = TrendAggregator(records).trending_reasons()
        topics = {t["topic"]: t["frequency"] for t in reasons["trendingTopics"]}
        self.assertEqual(topics["AI/Tech"], 1)
        top = {r["reason"]: r["frequency"] for r in reasons["topReasons"]}
        self.assertEqual(top[factors.AI_TECH], 2)

    def test_generic_pattern(self):
        aggregator = TrendAggregator([])
        pattern = aggregator._overall_pattern([
            {"reason": factors.TRENDING_TAGS, "frequency": 3},
        ])
        self.assertEqual(pattern, DIVERSIFIED_PATTERN)


class TestViralPotential(unittest.TestCase):

    def test_candidate_scoring(self):
        # Over a 24h window: 1,250 views/h, 5.8% engagement, 10 comments/h
        item = make_item("v", "Shocking new feature", 300, 30_000, 1_500, 240)
        candidates = assess_viral_potential([item, declining_item("d")])

        self.assertEqual(len(candidates), 1)
        candidate = candidates[0]
        self.assertEqual(candidate["viralScore"], 90)
        self.assertEqual(
            candidate["recommendation"],
            "High viral potential - boost promotion immediately",
        )
        self.assertEqual(candidate["viralFactors"], [
            "Exceptional view velocity",
            "High audience engagement",
            "Attention-grabbing language",
            "Novelty and exclusivity",
        ])

    def test_zero_view_items_never_qualify(self):
        item = make_item("z", "Nothing yet", 1, 0, 0, 0)
        self.assertEqual(assess_viral_potential([item]), [])

    def test_at_most_five_candidates(self):
        items = [viral_item(f"v{i}") for i in range(8)]
        self.assertEqual(len(assess_viral_potential(items)), 5)


class TestPerformancePatterns(unittest.TestCase):

    def test_patterns_shape(self):
        items = [
            make_item("a", "Python tutorial basics", 10, 1000, 50, 10, duration=200),
            make_item("b", "Python tutorial advanced", 30, 1000, 10, 0, duration=1200),
            make_item("c", "Vlog", 50, 0, 0, 0, duration=600),
        ]
        patterns = analyze_performance_patterns(items)

        keywords = {k["keyword"]: k for k in patterns["contentPatterns"]["topKeywords"]}
        self.assertEqual(keywords["python"]["frequency"], 2)
        self.assertAlmostEqual(keywords["python"]["avgEngagement"], 3.5)

        lengths = patterns["contentPatterns"]["lengthAnalysis"]
        self.assertEqual(lengths[0]["length"], "short")

        distribution = patterns["engagementPatterns"]["distribution"]
        self.assertEqual(distribution, {"high": 1, "medium": 0, "low": 2})
        self.assertLessEqual(len(patterns["timePatterns"]["bestHours"]), 3)
        self.assertEqual(patterns["seasonalPatterns"][0]["month"], "June")

    def test_empty_batch(self):
        patterns = analyze_performance_patterns([])
        self.assertEqual(patterns["contentPatterns"]["topKeywords"], [])
        self.assertEqual(patterns["seasonalPatterns"], [])


if __name__ == "__main__":
    unittest.main()
