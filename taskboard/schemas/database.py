"""SQLModel database entity models with Pydantic integration.

This module provides SQLModel table definitions that convert to and from
the business models in ``unified_models``, so repositories can hand the
conflict engine plain snapshots and persist its output as records.
"""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Index
from sqlmodel import Field, Relationship

from .unified_models import (
    ActivityAction,
    BaseEntityModel,
    Conflict,
    ConflictRecordCore,
    ConflictSeverity,
    ConflictType,
    TaskPriority,
)


class Task(BaseEntityModel, table=True):
    """SQLModel task table holding the scheduling projection of a task."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_completed", "completed"),
        Index("ix_tasks_priority", "priority"),
        Index("ix_tasks_start_date", "start_date"),
        Index("ix_tasks_due_date", "due_date"),
        CheckConstraint(
            "estimated_hours IS NULL OR estimated_hours >= 0",
            name="ck_non_negative_hours",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(min_length=1, max_length=200, index=True)
    description: str = Field(default="", max_length=2000)
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    start_date: date | None = None
    due_date: date | None = None
    estimated_hours: float | None = Field(default=None, ge=0.0)
    parent_id: int | None = Field(
        default=None, foreign_key="tasks.id", ondelete="CASCADE"
    )

    # Relationships
    subtasks: list["Task"] = Relationship(back_populates="parent")
    parent: Optional["Task"] = Relationship(
        back_populates="subtasks", sa_relationship_kwargs={"remote_side": "[Task.id]"}
    )
    conflicts: list["DateConflict"] = Relationship(
        back_populates="task",
        sa_relationship_kwargs={
            "foreign_keys": "[DateConflict.task_id]",
            "cascade": "all",
        },
    )
    conflicted_by: list["DateConflict"] = Relationship(
        back_populates="conflicting_task",
        sa_relationship_kwargs={
            "foreign_keys": "[DateConflict.conflicting_task_id]",
            "cascade": "all",
        },
    )
    activities: list["ActivityLog"] = Relationship(
        back_populates="task",
        sa_relationship_kwargs={"cascade": "all"},
    )


class DateConflict(BaseEntityModel, table=True):
    """SQLModel record of a conflict between two tasks."""

    __tablename__ = "date_conflicts"
    __table_args__ = (
        Index("ix_date_conflicts_task_id", "task_id"),
        Index("ix_date_conflicts_conflicting_task_id", "conflicting_task_id"),
        Index("ix_date_conflicts_severity", "severity"),
        CheckConstraint(
            "task_id != conflicting_task_id", name="ck_no_self_conflict"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE")
    conflicting_task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE")
    type: ConflictType
    severity: ConflictSeverity = ConflictSeverity.MEDIUM
    message: str = Field(max_length=1000)

    # Relationships
    task: Task = Relationship(
        back_populates="conflicts",
        sa_relationship_kwargs={"foreign_keys": "[DateConflict.task_id]"},
    )
    conflicting_task: Task = Relationship(
        back_populates="conflicted_by",
        sa_relationship_kwargs={"foreign_keys": "[DateConflict.conflicting_task_id]"},
    )

    def to_core_model(self) -> ConflictRecordCore:
        """Convert to ConflictRecordCore business model."""
        return ConflictRecordCore(
            id=self.id,
            task_id=self.task_id,
            conflicting_task_id=self.conflicting_task_id,
            type=self.type,
            severity=self.severity,
            message=self.message,
            created_at=self.created_at,
        )

    @classmethod
    def from_conflict(cls, task_id: int, conflict: Conflict) -> "DateConflict":
        """Create a record for ``task_id`` from a detected conflict."""
        return cls(
            task_id=task_id,
            conflicting_task_id=conflict.conflicting_task_id,
            type=conflict.type,
            severity=conflict.severity,
            message=conflict.message,
        )


class ActivityLog(BaseEntityModel, table=True):
    """SQLModel activity notes attached to a task."""

    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_task_id", "task_id"),
        Index("ix_activity_logs_created_at", "created_at"),
    )

    id: int | None = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE")
    action: ActivityAction
    details: str = Field(default="", max_length=2000)

    # Relationships
    task: Task = Relationship(back_populates="activities")
