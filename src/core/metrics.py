"""
Aggregate KPIs over a task list.
"""

import logging
from typing import Sequence

from ..config import PERFORMANCE_GRADE_EXCELLENT_ABOVE, PERFORMANCE_GRADE_GOOD_FROM
from .models import Metrics, PerformanceGrade, Status, Task
from .numeric_utils import round_half_up, safe_ratio
from .ranking import compute_roi

logger = logging.getLogger(__name__)


def compute_total_revenue(tasks: Sequence[Task]) -> float:
    """Revenue of Done tasks only."""
    return float(sum(t.revenue for t in tasks if t.status == Status.DONE))


def compute_total_time_taken(tasks: Sequence[Task]) -> float:
    """Time across every task, whatever its status."""
    return float(sum(t.time_taken for t in tasks))


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Percentage of tasks that are Done (0 for an empty list)."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.status == Status.DONE)
    return done / len(tasks) * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """Done revenue over total time, rounded to cents (0 when no time is logged)."""
    return round_half_up(safe_ratio(compute_total_revenue(tasks), compute_total_time_taken(tasks)))


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """Mean per-task ROI over all tasks, not just Done ones."""
    if not tasks:
        return 0.0
    total = sum(compute_roi(t.revenue, t.time_taken) for t in tasks)
    return round_half_up(total / len(tasks))


def compute_performance_grade(average_roi: float) -> PerformanceGrade:
    """
    Excellent above 500 (strict), Good from 200 to 500 inclusive,
    Needs Improvement otherwise.
    """
    if average_roi > PERFORMANCE_GRADE_EXCELLENT_ABOVE:
        return PerformanceGrade.EXCELLENT
    if average_roi >= PERFORMANCE_GRADE_GOOD_FROM:
        return PerformanceGrade.GOOD
    return PerformanceGrade.NEEDS_IMPROVEMENT


def compute_metrics(tasks: Sequence[Task]) -> Metrics:
    average_roi = compute_average_roi(tasks)
    metrics = Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi),
    )
    logger.debug(
        "Metrics over %s tasks: revenue=%.2f avg_roi=%.2f grade=%s",
        len(tasks),
        metrics.total_revenue,
        metrics.average_roi,
        metrics.performance_grade.value,
    )
    return metrics
