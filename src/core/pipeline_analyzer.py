"""
Status pipeline analytics: funnel occupancy, cycle time by priority,
weekly throughput and the weighted pipeline value.
"""

import logging
from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

from ..config import STATUS_WEIGHTS
from .data_processor import days_between, iso_week_key, tasks_to_frame
from .models import FunnelCounts, Priority, Status, Task, VelocityStats, WeeklyThroughput
from .numeric_utils import safe_ratio

logger = logging.getLogger(__name__)


def compute_funnel(tasks: Sequence[Task]) -> FunnelCounts:
    """
    Count tasks per stage and derive point-in-time stage ratios.

    These are occupancy ratios, not cohort conversion: tasks are counted
    by current status only.
    """
    counts = Counter(t.status for t in tasks)
    todo = counts[Status.TODO]
    in_progress = counts[Status.IN_PROGRESS]
    done = counts[Status.DONE]
    total = todo + in_progress + done

    return FunnelCounts(
        todo=todo,
        in_progress=in_progress,
        done=done,
        conversion_todo_to_in_progress=safe_ratio(in_progress + done, total),
        conversion_in_progress_to_done=safe_ratio(done, in_progress),
    )


def compute_velocity_by_priority(tasks: Sequence[Task]) -> Dict[Priority, VelocityStats]:
    """
    Cycle time (created -> completed, whole days) per priority.

    Tasks without ``completed_at`` are left out. ``median_days`` is the
    element at index n // 2 of the sorted durations, i.e. the upper middle
    value for even-sized buckets.
    """
    durations: Dict[Priority, List[int]] = {p: [] for p in Priority}
    for t in tasks:
        if t.completed_at is None:
            continue
        durations[t.priority].append(days_between(t.created_at, t.completed_at))

    result: Dict[Priority, VelocityStats] = {}
    for priority, values in durations.items():
        if not values:
            result[priority] = VelocityStats()
            continue
        arr = np.sort(np.asarray(values, dtype=float))
        result[priority] = VelocityStats(
            avg_days=float(arr.mean()),
            median_days=float(arr[len(arr) // 2]),
            sample_size=len(arr),
        )
    return result


def compute_throughput_by_week(tasks: Sequence[Task]) -> List[WeeklyThroughput]:
    """
    Completions and revenue per ISO week (UTC) of ``completed_at``.

    Weeks come back in the order they are first seen in ``tasks``, not in
    calendar order.
    """
    df = tasks_to_frame(tasks)
    completed = df[df["completed_at"].notna()]
    if completed.empty:
        return []

    completed = completed.assign(week=completed["completed_at"].map(iso_week_key))
    grouped = completed.groupby("week", sort=False).agg(
        count=("id", "size"),
        revenue=("revenue", "sum"),
    )
    return [
        WeeklyThroughput(week=str(week), count=int(row["count"]), revenue=float(row["revenue"]))
        for week, row in grouped.iterrows()
    ]


def compute_weighted_pipeline(tasks: Sequence[Task]) -> float:
    """Revenue discounted by stage: Todo 0.1, In Progress 0.5, Done 1.0."""
    return float(sum(t.revenue * STATUS_WEIGHTS[t.status.value] for t in tasks))
