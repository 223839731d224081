from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.core.models import AnalyticsReport, PerformanceGrade, Priority, Task
from src.services.analytics_service import AnalyticsService

MONDAY = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _task(task_id, status, revenue, time_taken, priority="Medium", completed_days=None, offset_hours=0):
    completed_at = MONDAY + timedelta(days=completed_days) if completed_days is not None else None
    return Task(
        id=task_id,
        title=task_id,
        revenue=revenue,
        time_taken=time_taken,
        priority=priority,
        status=status,
        created_at=MONDAY + timedelta(hours=offset_hours),
        completed_at=completed_at,
    )


@pytest.fixture
def tasks():
    # Completions land in weeks 3, 1 and 2 of 2024, in that scan order.
    return [
        _task("w3", "Done", 30, 1, priority="High", completed_days=16),
        _task("w1", "Done", 10, 1, priority="Low", completed_days=2),
        _task("w2", "Done", 20, 1, priority="High", completed_days=9),
        _task("doing", "In Progress", 100, 2),
        _task("todo", "Todo", 50, 5, offset_hours=1),
    ]


def test_report_contents(tasks):
    report = AnalyticsService(forecast_horizon=2).build_report(tasks)

    assert isinstance(report, AnalyticsReport)
    assert report.task_count == 5
    assert [t.id for t in report.ranked_tasks] == ["doing", "w3", "w2", "todo", "w1"]
    assert report.metrics.total_revenue == 60
    assert report.metrics.total_time_taken == 10
    assert report.metrics.time_efficiency_pct == pytest.approx(60.0)
    assert report.metrics.performance_grade is PerformanceGrade.NEEDS_IMPROVEMENT
    assert (report.funnel.todo, report.funnel.in_progress, report.funnel.done) == (1, 1, 3)
    assert report.weighted_pipeline == pytest.approx(50 * 0.1 + 100 * 0.5 + 60)


def test_report_throughput_and_forecast_ordering(tasks):
    report = AnalyticsService(forecast_horizon=2).build_report(tasks)

    assert [w.week for w in report.throughput_by_week] == ["2024-W3", "2024-W1", "2024-W2"]
    # fitted on calendar order: 10, 20, 30
    assert [p.revenue for p in report.forecast] == pytest.approx([40.0, 50.0])
    assert report.forecast_horizon == 2


def test_report_velocity(tasks):
    report = AnalyticsService().build_report(tasks)

    high = report.velocity_by_priority[Priority.HIGH]
    assert high.avg_days == pytest.approx(12.5)
    assert high.median_days == 16
    assert report.velocity_by_priority[Priority.MEDIUM].sample_size == 0


def test_report_accepts_any_iterable_and_does_not_mutate(tasks):
    before = [t.model_dump() for t in tasks]

    report = AnalyticsService().build_report(iter(tasks))

    assert report.task_count == len(tasks)
    assert [t.model_dump() for t in tasks] == before


def test_empty_report():
    report = AnalyticsService().build_report([])

    assert report.task_count == 0
    assert report.ranked_tasks == []
    assert report.throughput_by_week == []
    assert report.forecast == []
    assert report.weighted_pipeline == 0


def test_report_serialises_to_json_friendly_dict(tasks):
    payload = AnalyticsService(forecast_horizon=1).build_report(tasks).model_dump(mode="json")

    assert payload["metrics"]["performance_grade"] == "Needs Improvement"
    assert set(payload["velocity_by_priority"]) == {"High", "Medium", "Low"}
    assert payload["ranked_tasks"][0]["priority_weight"] == 2


def test_negative_horizon_rejected():
    with pytest.raises(ValueError):
        AnalyticsService(forecast_horizon=-1)
