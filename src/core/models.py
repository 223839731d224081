"""
Pydantic models for task records and the analytics derived from them.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field
from pydantic import ConfigDict
from pydantic import field_validator
from pydantic.alias_generators import to_camel


def _normalise_label(value: str) -> str:
    return value.replace(" ", "").replace("_", "").replace("-", "").lower()


class _LabelEnum(str, Enum):
    """String enum that also resolves loosely formatted labels ("InProgress", "in_progress")."""

    @classmethod
    def _missing_(cls, value: Any):
        if isinstance(value, str):
            key = _normalise_label(value)
            for member in cls:
                if _normalise_label(member.value) == key or _normalise_label(member.name) == key:
                    return member
        return None


class Priority(_LabelEnum):
    """Task priority"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Status(_LabelEnum):
    """Pipeline stage, ordered Todo -> In Progress -> Done"""
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class PerformanceGrade(str, Enum):
    """Grade assigned from average ROI"""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class Task(BaseModel):
    """A unit of work supplied by the external task store. Read-only here."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: Status
    notes: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, value: Any) -> Priority:
        return Priority(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value: Any) -> Status:
        return Status(value)

    @field_validator("created_at", "completed_at")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class DerivedTask(Task):
    """Task plus the values computed for ranking"""
    roi: float = Field(default=0.0)
    priority_weight: int = Field(ge=1, le=3)

    def to_task(self) -> Task:
        """Drop the derived fields and return the source task value."""
        return Task(**self.model_dump(exclude={"roi", "priority_weight"}))


class Metrics(BaseModel):
    """Aggregate KPI snapshot, rebuilt on every request"""
    model_config = ConfigDict(frozen=True)

    total_revenue: float = 0.0
    total_time_taken: float = 0.0
    time_efficiency_pct: float = Field(default=0.0, ge=0, le=100)
    revenue_per_hour: float = 0.0
    average_roi: float = 0.0
    performance_grade: PerformanceGrade = PerformanceGrade.NEEDS_IMPROVEMENT


class FunnelCounts(BaseModel):
    """Stage occupancy counts and stage-to-stage ratios"""
    model_config = ConfigDict(frozen=True)

    todo: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    done: int = Field(default=0, ge=0)
    conversion_todo_to_in_progress: float = Field(default=0.0, ge=0)
    # Can exceed 1 when more tasks are done than currently in progress
    conversion_in_progress_to_done: float = Field(default=0.0, ge=0)


class VelocityStats(BaseModel):
    """Cycle-time statistics for one priority bucket, in whole days"""
    model_config = ConfigDict(frozen=True)

    avg_days: float = 0.0
    median_days: float = 0.0
    sample_size: int = Field(default=0, ge=0)


class WeeklyThroughput(BaseModel):
    """Completions and revenue for one ISO week"""
    model_config = ConfigDict(frozen=True)

    week: str
    count: int = Field(ge=0)
    revenue: float = 0.0


class ForecastPoint(BaseModel):
    """A revenue value on the forecast axis ("+1", "+2", ...)"""
    model_config = ConfigDict(frozen=True)

    week: str
    revenue: float = 0.0


class AnalyticsReport(BaseModel):
    """Everything the reporting layer renders for one task list"""
    task_count: int = Field(ge=0)
    ranked_tasks: List[DerivedTask] = Field(default_factory=list)
    metrics: Metrics
    funnel: FunnelCounts
    velocity_by_priority: Dict[Priority, VelocityStats] = Field(default_factory=dict)
    throughput_by_week: List[WeeklyThroughput] = Field(default_factory=list)
    weighted_pipeline: float = 0.0
    forecast: List[ForecastPoint] = Field(default_factory=list)
    forecast_horizon: int = Field(default=0, ge=0)
