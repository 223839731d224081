from datetime import datetime, timedelta, timezone
from pathlib import Path
import math
import sys

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.core.models import PerformanceGrade, Priority, Status, Task


def _payload(**overrides):
    payload = {
        "id": "t-1",
        "title": "Renewal call",
        "revenue": 1200,
        "timeTaken": 3,
        "priority": "High",
        "status": "Todo",
        "createdAt": "2024-04-01T10:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def test_task_accepts_camel_case_payload():
    task = Task.model_validate(_payload(completedAt="2024-04-03T10:00:00.000Z", notes="VIP"))

    assert task.time_taken == 3
    assert task.created_at == datetime(2024, 4, 1, 10, tzinfo=timezone.utc)
    assert task.completed_at == datetime(2024, 4, 3, 10, tzinfo=timezone.utc)
    assert task.notes == "VIP"


def test_task_accepts_snake_case_fields():
    task = Task(
        id="t-2",
        title="Proposal",
        revenue=10,
        time_taken=1,
        priority=Priority.LOW,
        status=Status.DONE,
        created_at=datetime(2024, 1, 1),
    )
    assert task.created_at.tzinfo == timezone.utc


def test_offset_timestamps_are_converted_to_utc():
    task = Task.model_validate(_payload(createdAt="2024-04-01T10:00:00+02:00"))
    assert task.created_at == datetime(2024, 4, 1, 8, tzinfo=timezone.utc)
    assert task.created_at.utcoffset() == timedelta(0)


@pytest.mark.parametrize("label", ["In Progress", "InProgress", "in_progress", "IN_PROGRESS"])
def test_status_labels_resolve_to_in_progress(label):
    assert Task.model_validate(_payload(status=label)).status is Status.IN_PROGRESS


def test_unknown_enumerants_are_rejected():
    with pytest.raises(ValidationError):
        Task.model_validate(_payload(priority="Urgent"))
    with pytest.raises(ValueError):
        Task.model_validate(_payload(status="Archived"))
    with pytest.raises(ValueError):
        Status("Blocked")


def test_non_finite_numbers_are_accepted_for_downstream_defence():
    task = Task.model_validate(_payload(revenue=math.inf, timeTaken=math.nan))
    assert math.isinf(task.revenue)
    assert math.isnan(task.time_taken)


def test_tasks_are_frozen():
    task = Task.model_validate(_payload())
    with pytest.raises(ValidationError):
        task.revenue = 0


def test_performance_grade_compares_to_label():
    assert PerformanceGrade.NEEDS_IMPROVEMENT == "Needs Improvement"
