import logging
from typing import Iterable, Optional

from ..config import DEFAULT_FORECAST_HORIZON_WEEKS
from ..core.forecast import compute_forecast, sort_weeks_chronologically
from ..core.metrics import compute_metrics
from ..core.models import AnalyticsReport, Task
from ..core.pipeline_analyzer import (
    compute_funnel,
    compute_throughput_by_week,
    compute_velocity_by_priority,
    compute_weighted_pipeline,
)
from ..core.ranking import derive_and_sort

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Runs every task analytic over one task list. Holds no state between calls."""

    def __init__(self, forecast_horizon: Optional[int] = None):
        self.forecast_horizon = (
            DEFAULT_FORECAST_HORIZON_WEEKS if forecast_horizon is None else int(forecast_horizon)
        )
        if self.forecast_horizon < 0:
            raise ValueError(f"forecast_horizon must be >= 0, got {self.forecast_horizon}")
        logger.info("AnalyticsService initialized with %s week forecast horizon", self.forecast_horizon)

    def build_report(self, tasks: Iterable[Task]) -> AnalyticsReport:
        """
        Compute ranking, KPIs, funnel, cycle time, throughput, pipeline value
        and forecast for ``tasks``.

        Throughput is reported in first-seen week order; the forecast is fitted
        on the same weeks in calendar order.
        """
        snapshot = list(tasks)

        throughput = compute_throughput_by_week(snapshot)
        forecast = compute_forecast(
            sort_weeks_chronologically(throughput),
            horizon_weeks=self.forecast_horizon,
        )

        report = AnalyticsReport(
            task_count=len(snapshot),
            ranked_tasks=derive_and_sort(snapshot),
            metrics=compute_metrics(snapshot),
            funnel=compute_funnel(snapshot),
            velocity_by_priority=compute_velocity_by_priority(snapshot),
            throughput_by_week=throughput,
            weighted_pipeline=compute_weighted_pipeline(snapshot),
            forecast=forecast,
            forecast_horizon=self.forecast_horizon,
        )

        logger.info(
            "Built analytics report: tasks=%s weeks=%s grade=%s pipeline=%.2f",
            report.task_count,
            len(report.throughput_by_week),
            report.metrics.performance_grade.value,
            report.weighted_pipeline,
        )
        return report
