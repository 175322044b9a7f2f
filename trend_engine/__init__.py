"""
Channel Trend Engine -- scores a channel's videos and predicts what to make next.

Works on one snapshot per call (video records plus channel totals) and
returns plain value objects. No I/O, no persistence, no model training.

Components:
  metrics.py               -- per-hour velocities and engagement rate
  classifier.py            -- performance score and trend state
  reasons.py               -- why an item is trending
  projector.py             -- peak views and time-to-peak forecast
  aggregator.py            -- rising content, reason/topic tallies, opportunities
  viral.py                 -- viral candidates
  performance_patterns.py  -- batch-wide engagement breakdowns
  predictor.py             -- success-pattern mining and guaranteed topics
  health.py                -- weighted channel health score
  engine.py                -- analyze(), the single entry point
"""

from .engine import AnalysisResult, analyze
from .models import InvalidInputError

__all__ = ["AnalysisResult", "InvalidInputError", "analyze"]
