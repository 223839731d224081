"""
Per-task ROI derivation and the deterministic ranking of derived tasks.
"""

import logging
from typing import Iterable, List, Sequence, Union

from ..config import PRIORITY_WEIGHTS
from .models import DerivedTask, Priority, Task
from .numeric_utils import is_finite_number, round_half_up

logger = logging.getLogger(__name__)


def compute_roi(revenue: float, time_taken: float) -> float:
    """
    Revenue per unit of time, rounded to 2 decimals.

    Never raises: non-finite operands or a non-positive ``time_taken`` give 0.
    """
    if not is_finite_number(revenue) or not is_finite_number(time_taken) or time_taken <= 0:
        logger.debug("ROI degraded to 0 (revenue=%r, time_taken=%r)", revenue, time_taken)
        return 0.0
    return round_half_up(revenue / time_taken)


def compute_priority_weight(priority: Union[Priority, str]) -> int:
    """High=3, Medium=2, Low=1. Unknown priorities raise ValueError."""
    return PRIORITY_WEIGHTS[Priority(priority).value]


def with_derived(task: Task) -> DerivedTask:
    """Return a new DerivedTask; ``task`` itself is left untouched."""
    return DerivedTask(
        **task.model_dump(exclude={"roi", "priority_weight"}),
        roi=compute_roi(task.revenue, task.time_taken),
        priority_weight=compute_priority_weight(task.priority),
    )


def _rank_key(task: DerivedTask):
    return (-task.roi, -task.priority_weight, task.created_at)


def sort_tasks(tasks: Sequence[DerivedTask]) -> List[DerivedTask]:
    """
    Order by ROI desc, then priority weight desc, then created_at asc.

    Returns a new list. Python's sort is stable, so tasks equal on all three
    keys keep their input order.
    """
    return sorted(tasks, key=_rank_key)


def derive_and_sort(tasks: Iterable[Task]) -> List[DerivedTask]:
    """Derive every task and return them in rank order."""
    return sort_tasks([with_derived(task) for task in tasks])
