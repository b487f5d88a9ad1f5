"""Task and activity repositories.

Reads the comparison set handed to the conflict engine and records activity
notes. General task editing is left to the surrounding application.
"""

from sqlalchemy import or_

from ..schemas.database import ActivityLog, Task
from ..schemas.unified_models import (
    ActivityAction,
    ActivityEntry,
    TaskSnapshot,
    normalize_priority,
)
from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskSnapshot]):
    """Repository for the scheduling projection of tasks."""

    def get_entity_class(self) -> type[Task]:
        """Return the database entity class for this repository."""
        return Task

    def get_business_class(self) -> type[TaskSnapshot]:
        """Return the business model class for this repository."""
        return TaskSnapshot

    def add_task(
        self,
        snapshot: TaskSnapshot,
        description: str = "",
        completed: bool = False,
        parent_id: int | None = None,
    ) -> Task:
        """Insert a task row from a snapshot; the snapshot's id is ignored."""
        return self.create(
            snapshot,
            id=None,
            title=snapshot.title,
            priority=normalize_priority(snapshot.priority),
            description=description,
            completed=completed,
            parent_id=parent_id,
        )

    def get_snapshot(self, task_id: int) -> TaskSnapshot | None:
        """Snapshot of a single task."""
        return self.get_business(task_id)

    def get_comparison_set(self, exclude_task_id: int | None = None) -> list[TaskSnapshot]:
        """Active tasks relevant to scheduling, excluding ``exclude_task_id``.

        A task is relevant when it is not completed and has at least one date
        or an estimate. Ordered by id so detection output is stable.
        """
        criteria = [
            Task.completed == False,  # noqa: E712
            or_(
                Task.start_date.is_not(None),
                Task.due_date.is_not(None),
                Task.estimated_hours.is_not(None),
            ),
        ]
        if exclude_task_id is not None:
            criteria.append(Task.id != exclude_task_id)

        return [self.to_business(task) for task in self.find(*criteria)]


class ActivityLogRepository(BaseRepository[ActivityLog, ActivityEntry]):
    """Repository for per-task activity notes."""

    def get_entity_class(self) -> type[ActivityLog]:
        """Return the database entity class for this repository."""
        return ActivityLog

    def get_business_class(self) -> type[ActivityEntry]:
        """Return the business model class for this repository."""
        return ActivityEntry

    def log(self, task_id: int, action: ActivityAction, details: str = "") -> ActivityLog:
        """Append an activity note to a task."""
        return self.create(ActivityEntry(task_id=task_id, action=action, details=details))

    def get_for_task(self, task_id: int) -> list[ActivityLog]:
        """Activity notes of a task, newest first."""
        return self.find(
            ActivityLog.task_id == task_id,
            order_by=(ActivityLog.created_at.desc(), ActivityLog.id.desc()),
        )
