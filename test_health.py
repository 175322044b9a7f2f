"""
Channel health scorer tests.

Run: python -m pytest test_health.py
"""

import unittest
from datetime import datetime, timedelta, timezone

from trend_engine.health import (
    HEALTHY_RECOMMENDATIONS, WEIGHTS,
    health_recommendations, score_channel_health, score_consistency,
    score_content_quality, score_engagement, score_growth,
    score_market_alignment, upload_intervals, weighted_overall,
)
from trend_engine.models import ChannelAggregates, ContentItem, MarketSignals

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
EMPTY_CHANNEL = ChannelAggregates(subscriber_count=0, view_count=0, video_count=0)


def make_item(days_old=0, views=1000, likes=0, comments=0, **kwargs):
    return ContentItem(
        video_id=kwargs.pop("video_id", f"v{days_old}"),
        title=kwargs.pop("title", "Video"),
        published_at=NOW - timedelta(days=days_old),
        view_count=views,
        like_count=likes,
        comment_count=comments,
        **kwargs,
    )


class TestEmptyChannel(unittest.TestCase):

    def test_fallback_scores(self):
        health = score_channel_health([], EMPTY_CHANNEL, MarketSignals())
        self.assertEqual(health.breakdown, {
            "engagement": 50,
            "consistency": 30,
            "growth": 50,
            "marketAlignment": 50,
            "contentQuality": 50,
        })
        # 0.3*50 + 0.2*30 + 0.2*50 + 0.15*50 + 0.15*50 = 46
        self.assertEqual(health.overall, 46)
        self.assertEqual(
            health.recommendations[0],
            "Optimize video titles and thumbnails for better click-through rates",
        )

    def test_to_dict(self):
        data = score_channel_health([], EMPTY_CHANNEL, MarketSignals()).to_dict()
        self.assertEqual(set(data), {"overall", "breakdown", "recommendations"})
        self.assertEqual(len(data["recommendations"]), 3)


class TestEngagement(unittest.TestCase):

    def test_mean_engagement_tiers(self):
        items = [make_item(views=100, likes=6), make_item(views=100)]
        # mean 3% is not above 3
        self.assertEqual(score_engagement(items), 60)
        self.assertEqual(score_engagement([make_item(views=100, likes=6)]), 90)
        self.assertEqual(score_engagement([make_item(views=100)]), 40)


class TestConsistency(unittest.TestCase):

    def test_irregular_intervals(self):
        items = [make_item(d) for d in (0, 1, 8, 9)]
        self.assertEqual(upload_intervals(items), [1, 7, 1])
        # variance 8 over mean 3
        self.assertAlmostEqual(score_consistency(items), 100 - 80 / 3)

    def test_regular_uploads_hit_cap(self):
        items = [make_item(d) for d in (0, 7, 14, 21)]
        self.assertEqual(score_consistency(items), 90)

    def test_same_day_uploads_do_not_divide_by_zero(self):
        items = [make_item(0, video_id=str(i)) for i in range(3)]
        self.assertEqual(score_consistency(items), 90)

    def test_too_few_items(self):
        self.assertEqual(score_consistency([make_item(0), make_item(3)]), 30)

    def test_only_ten_most_recent_uploads_count(self):
        items = [make_item(d) for d in range(10)] + [make_item(400)]
        self.assertEqual(len(upload_intervals(items)), 9)
        self.assertEqual(score_consistency(items), 90)


class TestGrowth(unittest.TestCase):

    def test_large_channel_hits_cap(self):
        aggregates = ChannelAggregates(150_000, 10_000_000, 50)
        self.assertEqual(score_growth(aggregates), 90)

    def test_mid_tiers(self):
        # 20K views/video, 0.83% subscriber ratio, 5K subscribers
        aggregates = ChannelAggregates(5_000, 600_000, 30)
        self.assertEqual(score_growth(aggregates), 75)

    def test_zero_totals(self):
        self.assertEqual(score_growth(EMPTY_CHANNEL), 50)


class TestMarketAlignment(unittest.TestCase):

    def test_all_signals_capped(self):
        signals = MarketSignals(True, True, True, True)
        self.assertEqual(score_market_alignment(signals), 90)

    def test_partial_signals(self):
        signals = MarketSignals(competitors=True, business_profile=True)
        self.assertEqual(score_market_alignment(signals), 75)


class TestContentQuality(unittest.TestCase):

    def test_average_item_quality(self):
        polished = make_item(
            title="A thorough walkthrough of the whole setup",
            tags=tuple(f"tag{i}" for i in range(6)),
            description="x" * 101,
            views=100, likes=4,
        )
        bare = make_item(title="Clip", views=100)
        self.assertEqual(score_content_quality([polished, bare]), 75)


class TestOverall(unittest.TestCase):

    def test_weights_sum_to_one(self):
        self.assertAlmostEqual(sum(WEIGHTS.values()), 1.0)

    def test_overall_stays_within_breakdown(self):
        breakdowns = [
            {"engagement": 90, "consistency": 30, "growth": 75,
             "marketAlignment": 50, "contentQuality": 100},
            {"engagement": 40, "consistency": 0, "growth": 50,
             "marketAlignment": 90, "contentQuality": 60},
        ]
        for breakdown in breakdowns:
            overall = weighted_overall(breakdown)
            self.assertGreaterEqual(overall, min(breakdown.values()))
            self.assertLessEqual(overall, max(breakdown.values()))
            self.assertTrue(0 <= overall <= 100)

    def test_recommendation_bands(self):
        self.assertEqual(
            health_recommendations(39)[0],
            "Focus on improving content quality and consistency",
        )
        self.assertEqual(health_recommendations(40), health_recommendations(69))
        self.assertEqual(health_recommendations(70), HEALTHY_RECOMMENDATIONS)


if __name__ == "__main__":
    unittest.main()
