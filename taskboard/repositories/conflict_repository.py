"""Conflict record repository.

Stores detected conflicts as records tied to the two tasks involved and
implements the replace-all refresh used after every task create or update.
"""

from collections.abc import Sequence

from sqlalchemy import and_, or_
from sqlalchemy.orm import selectinload
from sqlmodel import select

from ..schemas.database import DateConflict
from ..schemas.unified_models import (
    Conflict,
    ConflictRecordCore,
    ConflictSeverity,
)
from .base import BaseRepository


class ConflictRepository(BaseRepository[DateConflict, ConflictRecordCore]):
    """Repository for stored conflict records."""

    def get_entity_class(self) -> type[DateConflict]:
        """Return the database entity class for this repository."""
        return DateConflict

    def get_business_class(self) -> type[ConflictRecordCore]:
        """Return the business model class for this repository."""
        return ConflictRecordCore

    @staticmethod
    def _involves(task_id: int):
        return or_(
            DateConflict.task_id == task_id,
            DateConflict.conflicting_task_id == task_id,
        )

    def get_for_task(self, task_id: int) -> list[DateConflict]:
        """Records where the task appears on either side."""
        return self.find(self._involves(task_id))

    def delete_for_task(self, task_id: int) -> int:
        """Delete every record touching the task; returns how many were removed."""
        return self.delete_where(self._involves(task_id))

    def replace_for_task(
        self, task_id: int, conflicts: Sequence[Conflict]
    ) -> list[DateConflict]:
        """Replace all records touching ``task_id`` with ``conflicts``.

        Runs inside the caller's transaction; nothing is committed here.
        """
        self.delete_for_task(task_id)

        records = [DateConflict.from_conflict(task_id, conflict) for conflict in conflicts]
        self.session.add_all(records)
        self.session.flush()
        return records

    def list_conflicts(
        self,
        task_id: int | None = None,
        severity: ConflictSeverity | None = None,
    ) -> list[DateConflict]:
        """Records filtered by task (either side) and severity, newest first."""
        statement = select(DateConflict).options(
            selectinload(DateConflict.task),
            selectinload(DateConflict.conflicting_task),
        )
        if task_id is not None:
            statement = statement.where(self._involves(task_id))
        if severity is not None:
            statement = statement.where(DateConflict.severity == severity)

        statement = statement.order_by(
            DateConflict.created_at.desc(), DateConflict.id.desc()
        )
        return list(self.session.exec(statement).all())

    def find_between(self, task_id: int, other_task_id: int) -> DateConflict | None:
        """First record linking the two tasks in either direction."""
        statement = select(DateConflict).where(
            or_(
                and_(
                    DateConflict.task_id == task_id,
                    DateConflict.conflicting_task_id == other_task_id,
                ),
                and_(
                    DateConflict.task_id == other_task_id,
                    DateConflict.conflicting_task_id == task_id,
                ),
            )
        )
        return self.session.exec(statement).first()

    def update_details(
        self,
        conflict_id: int,
        severity: ConflictSeverity | None = None,
        message: str | None = None,
    ) -> DateConflict | None:
        """Update severity and/or message, leaving omitted fields unchanged."""
        updates = {}
        if severity is not None:
            updates["severity"] = severity
        if message:
            updates["message"] = message
        return self.update(conflict_id, updates)
