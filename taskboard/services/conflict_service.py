"""Service layer bridging the conflict engine and persistence.

Coordinates the repositories and the detector: reads the comparison set,
runs detection, and performs the replace-all store of conflict records.
Store failures surface as ``ConflictStoreError`` and are never reported as
an empty result.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..config import get_settings
from ..conflicts import ConflictDetector
from ..database import get_sync_session
from ..exceptions import (
    ConflictNotFoundError,
    ConflictStoreError,
    DuplicateConflictError,
    TaskNotFoundError,
)
from ..repositories import ActivityLogRepository, ConflictRepository, TaskRepository
from ..schemas.database import DateConflict, Task
from ..schemas.unified_models import (
    ActivityAction,
    CandidateTask,
    Conflict,
    ConflictCheckRequest,
    ConflictCheckResult,
    ConflictRecordCore,
    ConflictSeverity,
    ConflictType,
)

logger = logging.getLogger(__name__)


class ConflictService:
    """High-level conflict operations over a single database session."""

    def __init__(
        self,
        session: Session | None = None,
        detector: ConflictDetector | None = None,
    ):
        """Initialize conflict service with database session.

        Args:
            session: SQLModel session. If None, creates default sync session.
            detector: Conflict detector. If None, one is built from settings.

        """
        if session is None:
            session = get_sync_session()
        if detector is None:
            detector = ConflictDetector(get_settings().get_conflict_rules())

        self.session = session
        self.detector = detector
        self.task_repo = TaskRepository(session)
        self.conflict_repo = ConflictRepository(session)
        self.activity_repo = ActivityLogRepository(session)

    @contextmanager
    def _store_operation(self, operation: str) -> Generator[None, None, None]:
        """Roll back and re-raise database or stored-row errors as ConflictStoreError."""
        try:
            yield
        except (SQLAlchemyError, ValidationError) as e:
            self.session.rollback()
            logger.error(f"Conflict store failure during {operation}: {e}")
            raise ConflictStoreError(operation, e) from e

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def check_conflicts(self, request: ConflictCheckRequest) -> ConflictCheckResult:
        """Check a candidate schedule against the stored active tasks.

        Nothing is written. A request without dates has nothing to overlap
        and returns immediately without reading the store.
        """
        if request.start_date is None and request.due_date is None:
            return ConflictCheckResult()

        with self._store_operation("comparison set retrieval"):
            comparison_set = self.task_repo.get_comparison_set(
                exclude_task_id=request.task_id
            )

        conflicts = self.detector.detect(request.to_candidate(), comparison_set)
        return ConflictCheckResult(conflicts=conflicts)

    def detect_for_task(self, task_id: int) -> list[Conflict]:
        """Detect conflicts for a stored task without persisting them."""
        with self._store_operation("comparison set retrieval"):
            snapshot = self.task_repo.get_snapshot(task_id)
            if snapshot is None:
                raise TaskNotFoundError(task_id)
            comparison_set = self.task_repo.get_comparison_set(exclude_task_id=task_id)

        candidate = CandidateTask(**snapshot.model_dump())
        return self.detector.detect(candidate, comparison_set)

    def refresh_conflicts(self, task_id: int) -> list[ConflictRecordCore]:
        """Recompute and replace the stored conflicts of a task.

        Call after creating or updating a task. Every stored record where the
        task appears on either side is deleted, then one record per detected
        conflict is inserted, all in one transaction.
        """
        conflicts = self.detect_for_task(task_id)

        with self._store_operation("conflict replacement"):
            records = self.conflict_repo.replace_for_task(task_id, conflicts)
            if records:
                self.activity_repo.log(
                    task_id,
                    ActivityAction.CONFLICTS_DETECTED,
                    f"{len(records)} conflict(s) detected",
                )
            self.session.commit()

        logger.info(f"Stored {len(records)} conflict(s) for task {task_id}")
        return [record.to_core_model() for record in records]

    # ------------------------------------------------------------------
    # Stored records
    # ------------------------------------------------------------------

    def list_conflicts(
        self,
        task_id: int | None = None,
        severity: ConflictSeverity | None = None,
    ) -> list[dict[str, Any]]:
        """Stored conflicts with both tasks, newest first."""
        with self._store_operation("conflict listing"):
            records = self.conflict_repo.list_conflicts(
                task_id=task_id, severity=severity
            )
            return [self._record_details(record) for record in records]

    def get_conflict(self, conflict_id: int) -> dict[str, Any]:
        """A single stored conflict with both tasks."""
        with self._store_operation("conflict retrieval"):
            record = self.conflict_repo.get_by_id(conflict_id)
            if record is None:
                raise ConflictNotFoundError(conflict_id)
            return self._record_details(record)

    def update_conflict(
        self,
        conflict_id: int,
        severity: ConflictSeverity | None = None,
        message: str | None = None,
    ) -> dict[str, Any]:
        """Edit severity and/or message of a stored conflict."""
        with self._store_operation("conflict update"):
            record = self.conflict_repo.update_details(
                conflict_id, severity=severity, message=message
            )
            if record is None:
                raise ConflictNotFoundError(conflict_id)
            self.session.commit()
            return self._record_details(record)

    def resolve_conflict(self, conflict_id: int) -> None:
        """Delete a stored conflict and note the resolution on both tasks."""
        with self._store_operation("conflict resolution"):
            record = self.conflict_repo.get_by_id(conflict_id)
            if record is None:
                raise ConflictNotFoundError(conflict_id)

            task_id = record.task_id
            conflicting_task_id = record.conflicting_task_id
            self.conflict_repo.delete(conflict_id)

            self.activity_repo.log(
                task_id,
                ActivityAction.CONFLICT_RESOLVED,
                f"Conflict resolved with task ID: {conflicting_task_id}",
            )
            self.activity_repo.log(
                conflicting_task_id,
                ActivityAction.CONFLICT_RESOLVED,
                f"Conflict resolved with task ID: {task_id}",
            )
            self.session.commit()

        logger.info(
            f"Resolved conflict {conflict_id} between tasks {task_id} "
            f"and {conflicting_task_id}"
        )

    def record_conflict(
        self,
        task_id: int,
        conflicting_task_id: int,
        conflict_type: ConflictType,
        message: str,
        severity: ConflictSeverity | None = None,
    ) -> dict[str, Any]:
        """Store a manually reported conflict between two existing tasks."""
        record_core = ConflictRecordCore(
            task_id=task_id,
            conflicting_task_id=conflicting_task_id,
            type=conflict_type,
            severity=severity or ConflictSeverity.MEDIUM,
            message=message,
        )

        with self._store_operation("manual conflict creation"):
            for required_id in (task_id, conflicting_task_id):
                if not self.task_repo.exists(required_id):
                    raise TaskNotFoundError(required_id)

            if self.conflict_repo.find_between(task_id, conflicting_task_id):
                raise DuplicateConflictError(task_id, conflicting_task_id)

            record = self.conflict_repo.create(record_core)
            self.session.commit()
            return self._record_details(record)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _task_summary(task: Task | None) -> dict[str, Any] | None:
        if task is None:
            return None
        return {
            "id": task.id,
            "title": task.title,
            "start_date": task.start_date.isoformat() if task.start_date else None,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "priority": task.priority.value,
            "estimated_hours": task.estimated_hours,
        }

    def _record_details(self, record: DateConflict) -> dict[str, Any]:
        return {
            **record.to_core_model().model_dump(mode="json"),
            "task": self._task_summary(record.task),
            "conflicting_task": self._task_summary(record.conflicting_task),
        }

    def close(self):
        """Close the database session."""
        if self.session:
            self.session.close()
