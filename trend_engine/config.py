"""
Global configuration for the Channel Trend Engine.

Scoring thresholds and keyword dictionaries live next to the code that
uses them. This module only holds environment-driven settings and defaults.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_TREND_TIMEFRAME_HOURS = 168.0  # one week

# Values that switch the trend window off entirely
NO_WINDOW_VALUES = {"none", "off", "all"}


def _get_timeframe(name: str, default: float) -> Optional[float]:
    """Read the trend window in hours; None when explicitly switched off."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    if raw.lower() in NO_WINDOW_VALUES:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default:g}h")
        return default


# ── Trend Window ──
# Older items get a stable baseline record instead of a trend assessment.
TREND_TIMEFRAME_HOURS = _get_timeframe("TREND_TIMEFRAME_HOURS", DEFAULT_TREND_TIMEFRAME_HOURS)

# ── Output ──
JSON_INDENT = int(os.getenv("JSON_INDENT", "2"))

# ── Logging ──
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
