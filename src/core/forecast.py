"""
Linear trend forecast over a weekly revenue series.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..config import DEFAULT_FORECAST_HORIZON_WEEKS, MIN_FORECAST_POINTS
from .models import ForecastPoint

logger = logging.getLogger(__name__)

WEEK_KEY_PATTERN = re.compile(r"^(\d{4})-W(\d{1,2})$")

T = TypeVar("T")


def _revenue_of(point: Any) -> float:
    if isinstance(point, Mapping):
        return float(point["revenue"])
    return float(point.revenue)


def _week_of(point: Any) -> str:
    if isinstance(point, Mapping):
        return str(point["week"])
    return str(point.week)


def parse_week_key(key: str) -> Tuple[int, int]:
    """Split "2024-W7" into (2024, 7). Raises ValueError on anything else."""
    match = WEEK_KEY_PATTERN.match(key or "")
    if not match:
        raise ValueError(f"Malformed week key: {key!r}")
    year, week = int(match.group(1)), int(match.group(2))
    if not 1 <= week <= 53:
        raise ValueError(f"Week number out of range in {key!r}")
    return year, week


def sort_weeks_chronologically(points: Sequence[T]) -> List[T]:
    """Return weekly points (models or mappings with a "week" key) in calendar order."""
    return sorted(points, key=lambda p: parse_week_key(_week_of(p)))


def compute_forecast(
    weekly: Sequence[Any],
    horizon_weeks: Optional[int] = None,
) -> List[ForecastPoint]:
    """
    Least-squares line through revenue against x = 0..n-1, projected forward.

    Args:
        weekly: Ordered points exposing ``revenue`` (WeeklyThroughput,
            ForecastPoint or a mapping). Their order is the time axis.
        horizon_weeks: Number of future periods, default 4.
    Returns:
        Points labelled "+1".."+horizon", revenue floored at 0. Empty when
        fewer than two observations are supplied.
    """
    horizon = DEFAULT_FORECAST_HORIZON_WEEKS if horizon_weeks is None else int(horizon_weeks)
    if horizon < 0:
        raise ValueError(f"horizon_weeks must be >= 0, got {horizon}")

    n = len(weekly)
    if n < MIN_FORECAST_POINTS:
        logger.warning("Forecast skipped: need %s weekly points, have %s", MIN_FORECAST_POINTS, n)
        return []

    y = np.array([_revenue_of(p) for p in weekly], dtype=float)
    x = np.arange(n, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = float(np.dot(x, y))
    sum_xx = float(np.dot(x, x))

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        denominator = 1.0
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    logger.debug("Forecast trend: slope=%.4f intercept=%.4f over %s points", slope, intercept, n)

    return [
        ForecastPoint(week=f"+{i + 1}", revenue=max(0.0, float(slope * (n + i) + intercept)))
        for i in range(horizon)
    ]
