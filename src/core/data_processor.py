"""
Date handling and tabular views of task lists.
"""

import math
import logging
from datetime import datetime, timezone
from typing import Sequence, Union

import pandas as pd

from ..config import SECONDS_PER_DAY
from .models import Task

logger = logging.getLogger(__name__)

TASK_FRAME_COLUMNS = [
    "id",
    "title",
    "revenue",
    "time_taken",
    "priority",
    "status",
    "created_at",
    "completed_at",
]

Timestamp = Union[datetime, pd.Timestamp, str]


def to_utc(value: Timestamp) -> pd.Timestamp:
    """Parse an ISO-8601 string or datetime into a tz-aware UTC Timestamp (naive means UTC)."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize(timezone.utc)
    return ts.tz_convert(timezone.utc)


def days_between(start: Timestamp, end: Timestamp) -> int:
    """
    Whole days from ``start`` to ``end``.

    Half days round up (2.5 -> 3), and negative spans from clock skew are
    floored at 0.
    """
    elapsed = (to_utc(end) - to_utc(start)).total_seconds() / SECONDS_PER_DAY
    return max(0, int(math.floor(elapsed + 0.5)))


def iso_week_key(value: Timestamp) -> str:
    """
    ``"<ISO week-year>-W<week>"`` for the UTC date of ``value``.

    The year is the ISO week-year, so 2021-01-01 maps to "2020-W53" and
    2019-12-30 maps to "2020-W1".
    """
    iso_year, iso_week, _ = to_utc(value).isocalendar()
    return f"{iso_year}-W{iso_week}"


def tasks_to_frame(tasks: Sequence[Task]) -> pd.DataFrame:
    """
    One row per task, in input order. Enum columns hold their labels and
    timestamps are UTC (NaT where a task was never completed).
    """
    rows = [
        {
            "id": t.id,
            "title": t.title,
            "revenue": t.revenue,
            "time_taken": t.time_taken,
            "priority": t.priority.value,
            "status": t.status.value,
            "created_at": t.created_at,
            "completed_at": t.completed_at,
        }
        for t in tasks
    ]
    df = pd.DataFrame(rows, columns=TASK_FRAME_COLUMNS)
    df["revenue"] = pd.to_numeric(df["revenue"], errors="coerce").astype(float)
    df["time_taken"] = pd.to_numeric(df["time_taken"], errors="coerce").astype(float)
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
    df["completed_at"] = pd.to_datetime(df["completed_at"], utc=True)
    logger.debug("Built task frame with %s rows", len(df))
    return df
