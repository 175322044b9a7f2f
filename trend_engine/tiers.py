"""
Tiers — ordered threshold tables and the lookups that evaluate them.

A table is a tuple of (floor, value) pairs ordered from the highest floor
down. Every heuristic in the engine (velocity points, engagement tiers,
growth bonuses, recommendation bands) is expressed as one of these tables
so thresholds can be tested and tuned in one place.
"""

import math
from typing import Any, Sequence, Tuple

Table = Sequence[Tuple[float, Any]]


def tier_above(value: float, table: Table, default: Any = 0) -> Any:
    """Return the value of the first tier whose floor is strictly exceeded."""
    for floor, points in table:
        if value > floor:
            return points
    return default


def tier_below(value: float, table: Table, default: Any = 0) -> Any:
    """
    Return the value of the first tier whose ceiling is not reached.

    Tables for this lookup are ordered from the lowest ceiling up, e.g.
    recency bonuses where younger content scores higher.
    """
    for ceiling, points in table:
        if value < ceiling:
            return points
    return default


def safe_divide(numerator: float, denominator: float) -> float:
    """Division that returns 0 instead of raising or producing inf/NaN."""
    if not denominator:
        return 0.0
    result = numerator / denominator
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))
