"""Unified business models for task scheduling and conflict detection.

This module holds the Pydantic v2 models shared by the conflict engine, the
repositories and the service layer. Database tables live in ``database.py``
and convert to and from these models.
"""

from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from sqlmodel import SQLModel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# ============================================================================
# UNIFIED ENUMS
# ============================================================================


class TaskPriority(StrEnum):
    """Task priority enum shared by Pydantic and SQLModel."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ConflictType(StrEnum):
    """Kinds of scheduling conflict."""

    OVERLAP = "overlap"
    OVERLOAD = "overload"


class ConflictSeverity(StrEnum):
    """How disruptive a conflict is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActivityAction(StrEnum):
    """Actions recorded in a task's activity log."""

    CONFLICTS_DETECTED = "conflicts_detected"
    CONFLICT_RESOLVED = "conflict_resolved"


# ============================================================================
# UNIFIED CONFIGURATION (Pydantic v2 ConfigDict patterns)
# ============================================================================


class UnifiedConfig:
    """Centralized configuration for all models.

    Provides standardized configuration for consistent model behavior across the
    project.
    """

    PYDANTIC_CONFIG = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        use_enum_values=False,
        serialize_by_alias=True,
        frozen=False,
        from_attributes=True,
    )


# ============================================================================
# BASE MODELS
# ============================================================================


class BaseBusinessModel(BaseModel):
    """Base for pure business logic models with modern Pydantic configuration."""

    model_config = UnifiedConfig.PYDANTIC_CONFIG


class BaseEntityModel(SQLModel):
    """Base for database entity models with automatic timestamps."""

    model_config = UnifiedConfig.PYDANTIC_CONFIG
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("updated_at", mode="before")
    @classmethod
    def ensure_updated_at(cls, v: Any) -> datetime:
        """Ensure updated_at field is set to current datetime if None."""
        return utc_now() if v is None else v


# ============================================================================
# SCHEDULING MODELS
# ============================================================================


class TaskSnapshot(BaseBusinessModel):
    """Scheduling-relevant projection of a task.

    The conflict engine only ever reads these; it never mutates them.
    """

    id: int | None = None
    title: str = ""
    start_date: date | None = None
    due_date: date | None = None
    estimated_hours: float | None = Field(default=None, ge=0.0)
    priority: TaskPriority | None = TaskPriority.MEDIUM

    @property
    def has_schedule(self) -> bool:
        """True when at least one of the two dates is set."""
        return self.start_date is not None or self.due_date is not None

    @property
    def has_workload(self) -> bool:
        """True when the task can contribute hours to a daily workload."""
        return (
            self.start_date is not None
            and self.due_date is not None
            and bool(self.estimated_hours)
        )


class CandidateTask(TaskSnapshot):
    """The task being checked. ``id`` is only set when editing."""


class Conflict(BaseBusinessModel):
    """A detected conflict between the candidate and one other task."""

    type: ConflictType
    severity: ConflictSeverity
    conflicting_task_id: int
    conflicting_task_title: str
    message: str
    suggestions: list[str] = Field(default_factory=list)
    overlap_days: int | None = Field(default=None, ge=1)
    hours_per_day: float | None = Field(default=None, ge=0.0)

    @model_validator(mode="after")
    def validate_magnitude(self) -> "Conflict":
        """Each conflict type carries its own magnitude field only."""
        if self.type == ConflictType.OVERLAP and self.hours_per_day is not None:
            raise ValueError("Overlap conflicts do not carry hours_per_day")
        if self.type == ConflictType.OVERLOAD and self.overlap_days is not None:
            raise ValueError("Overload conflicts do not carry overlap_days")
        return self


class ConflictCheckRequest(BaseBusinessModel):
    """Candidate schedule submitted to the "check conflicts" boundary."""

    task_id: int | None = None
    title: str = Field(default="", max_length=200)
    start_date: date | None = None
    due_date: date | None = None
    estimated_hours: float | None = Field(default=None, ge=0.0)
    priority: TaskPriority | None = None

    def to_candidate(self) -> CandidateTask:
        """Convert to the engine's candidate model."""
        return CandidateTask(
            id=self.task_id,
            title=self.title,
            start_date=self.start_date,
            due_date=self.due_date,
            estimated_hours=self.estimated_hours,
            priority=self.priority,
        )


class ConflictCheckResult(BaseBusinessModel):
    """Structured answer of the "check conflicts" boundary."""

    conflicts: list[Conflict] = Field(default_factory=list)

    @computed_field
    @property
    def has_conflicts(self) -> bool:
        """Whether any conflict was found."""
        return bool(self.conflicts)


class ConflictRecordCore(BaseBusinessModel):
    """Business view of a stored conflict record."""

    id: int | None = None
    task_id: int
    conflicting_task_id: int
    type: ConflictType
    severity: ConflictSeverity = ConflictSeverity.MEDIUM
    message: str = Field(..., min_length=1, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_distinct_tasks(self) -> "ConflictRecordCore":
        """A task cannot conflict with itself."""
        if self.task_id == self.conflicting_task_id:
            raise ValueError("A conflict must reference two different tasks")
        return self


class ActivityEntry(BaseBusinessModel):
    """Business view of an activity note on a task."""

    id: int | None = None
    task_id: int
    action: ActivityAction
    details: str = Field(default="", max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


PRIORITY_WEIGHTS: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}


def normalize_priority(priority: TaskPriority | str | None) -> TaskPriority:
    """Map a raw priority value to a TaskPriority, defaulting to MEDIUM."""
    if isinstance(priority, TaskPriority):
        return priority
    if isinstance(priority, str):
        try:
            return TaskPriority(priority.lower())
        except ValueError:
            return TaskPriority.MEDIUM
    return TaskPriority.MEDIUM


def get_priority_weight(priority: TaskPriority | str | None) -> int:
    """Numeric weight of a priority; unknown or missing weighs as MEDIUM."""
    return PRIORITY_WEIGHTS[normalize_priority(priority)]
