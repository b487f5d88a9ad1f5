"""Tests for the repository layer over an in-memory database."""

import pytest

from taskboard.repositories import (
    ActivityLogRepository,
    ConflictRepository,
    TaskRepository,
)
from taskboard.schemas.database import Task
from taskboard.schemas.unified_models import (
    ActivityAction,
    Conflict,
    ConflictSeverity,
    ConflictType,
    TaskPriority,
)
from tests.utils.factories import day, make_snapshot


def overlap_conflict(conflicting_id: int, title: str = "Other") -> Conflict:
    return Conflict(
        type=ConflictType.OVERLAP,
        severity=ConflictSeverity.LOW,
        conflicting_task_id=conflicting_id,
        conflicting_task_title=title,
        message=f'Date conflict with "{title}". Overlap of 1 day(s).',
        overlap_days=1,
    )


@pytest.fixture
def conflict_repo(db_session):
    return ConflictRepository(db_session)


@pytest.fixture
def activity_repo(db_session):
    return ActivityLogRepository(db_session)


class TestTaskRepository:
    """Test task storage and comparison set retrieval."""

    def test_add_task_and_snapshot(self, task_repo, add_task):
        """Test inserting a task and reading its snapshot back."""
        task_id = add_task("Plan", start=day(1), due=day(3), hours=6.0)

        snapshot = task_repo.get_snapshot(task_id)

        assert snapshot.id == task_id
        assert snapshot.title == "Plan"
        assert snapshot.due_date == day(3)
        assert snapshot.estimated_hours == 6.0

    def test_missing_snapshot(self, task_repo):
        """Test that unknown ids yield None."""
        assert task_repo.get_snapshot(404) is None

    def test_add_task_normalizes_missing_priority(self, task_repo, db_session):
        """Test that a snapshot without priority is stored as MEDIUM."""
        task = task_repo.add_task(make_snapshot(None, title="No priority", priority=None))
        db_session.commit()

        assert task.priority == TaskPriority.MEDIUM

    def test_comparison_set_filters(self, task_repo, add_task):
        """Test that only active, schedule-relevant tasks are returned."""
        dated = add_task("Dated", due=day(2))
        estimated = add_task("Estimated", hours=3.0)
        add_task("Bare")
        add_task("Done", start=day(1), due=day(2), completed=True)

        comparison = task_repo.get_comparison_set()

        assert [s.id for s in comparison] == [dated, estimated]

    def test_comparison_set_excludes_task(self, task_repo, add_task):
        """Test exclusion of the task being edited."""
        first = add_task("First", due=day(2))
        second = add_task("Second", due=day(3))

        comparison = task_repo.get_comparison_set(exclude_task_id=first)

        assert [s.id for s in comparison] == [second]

    def test_base_operations(self, task_repo, add_task):
        """Test count, exists and delete."""
        task_id = add_task("Counted")

        assert task_repo.count() == 1
        assert task_repo.exists(task_id)
        assert task_repo.delete(task_id) is True
        assert task_repo.delete(task_id) is False
        assert task_repo.count() == 0


class TestConflictRepository:
    """Test conflict record storage."""

    def test_replace_for_task_inserts_records(self, conflict_repo, add_task, db_session):
        """Test storing detected conflicts for a task."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))

        records = conflict_repo.replace_for_task(
            a, [overlap_conflict(b, "B"), overlap_conflict(c, "C")]
        )
        db_session.commit()

        assert [(r.task_id, r.conflicting_task_id) for r in records] == [(a, b), (a, c)]
        assert conflict_repo.count() == 2

    def test_replace_removes_records_on_either_side(
        self, conflict_repo, add_task, db_session
    ):
        """Test that old records touching the task are deleted first."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))
        conflict_repo.replace_for_task(b, [overlap_conflict(a, "A")])
        conflict_repo.replace_for_task(c, [overlap_conflict(b, "B")])
        db_session.commit()

        conflict_repo.replace_for_task(a, [])
        db_session.commit()

        remaining = conflict_repo.list_conflicts()
        assert [(r.task_id, r.conflicting_task_id) for r in remaining] == [(c, b)]

    def test_replace_is_idempotent(self, conflict_repo, add_task, db_session):
        """Test that repeating a refresh leaves one record per conflict."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))

        for _ in range(3):
            conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
            db_session.commit()

        assert conflict_repo.count() == 1

    def test_get_for_task_either_side(self, conflict_repo, add_task):
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
        conflict_repo.replace_for_task(c, [overlap_conflict(b, "B")])

        assert [r.task_id for r in conflict_repo.get_for_task(b)] == [a, c]
        assert [r.task_id for r in conflict_repo.get_for_task(a)] == [a]

    def test_delete_for_task_counts(self, conflict_repo, add_task, db_session):
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])

        assert conflict_repo.delete_for_task(b) == 1
        assert conflict_repo.delete_for_task(b) == 0

    def test_list_conflicts_filters(self, conflict_repo, add_task, db_session):
        """Test filtering by task and severity."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
        high = overlap_conflict(a, "A").model_copy(update={"severity": ConflictSeverity.HIGH})
        conflict_repo.replace_for_task(c, [high])
        db_session.commit()

        assert len(conflict_repo.list_conflicts()) == 2
        assert [r.task_id for r in conflict_repo.list_conflicts(task_id=b)] == [a]
        assert [
            r.task_id for r in conflict_repo.list_conflicts(severity=ConflictSeverity.HIGH)
        ] == [c]
        assert conflict_repo.list_conflicts(task_id=b, severity=ConflictSeverity.HIGH) == []

    def test_list_conflicts_newest_first(self, conflict_repo, add_task, db_session):
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
        conflict_repo.replace_for_task(c, [overlap_conflict(b, "B")])
        db_session.commit()

        listed = conflict_repo.list_conflicts()

        assert [r.task_id for r in listed] == [c, a]

    def test_find_between_either_direction(self, conflict_repo, add_task, db_session):
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        c = add_task("C", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])

        assert conflict_repo.find_between(a, b) is not None
        assert conflict_repo.find_between(b, a) is not None
        assert conflict_repo.find_between(a, c) is None

    def test_update_details(self, conflict_repo, add_task, db_session):
        """Test partial updates of severity and message."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        (record,) = conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
        original_message = record.message

        updated = conflict_repo.update_details(record.id, severity=ConflictSeverity.HIGH)

        assert updated.severity == ConflictSeverity.HIGH
        assert updated.message == original_message

        updated = conflict_repo.update_details(record.id, message="Handled by team B")
        assert updated.severity == ConflictSeverity.HIGH
        assert updated.message == "Handled by team B"

        assert conflict_repo.update_details(9999, message="nothing") is None

    def test_cascade_on_task_delete(self, conflict_repo, task_repo, add_task, db_session):
        """Test that deleting a task removes its conflict records."""
        a = add_task("A", due=day(1))
        b = add_task("B", due=day(1))
        conflict_repo.replace_for_task(a, [overlap_conflict(b, "B")])
        db_session.commit()

        task_repo.delete(b)
        db_session.commit()

        assert db_session.get(Task, a) is not None
        assert conflict_repo.count() == 0


class TestActivityLogRepository:
    """Test activity notes."""

    def test_log_and_read_back(self, activity_repo, add_task, db_session):
        task_id = add_task("A")
        activity_repo.log(task_id, ActivityAction.CONFLICTS_DETECTED, "1 conflict(s) detected")
        activity_repo.log(task_id, ActivityAction.CONFLICT_RESOLVED, "Conflict resolved")
        db_session.commit()

        entries = activity_repo.get_for_task(task_id)

        assert [e.action for e in entries] == [
            ActivityAction.CONFLICT_RESOLVED,
            ActivityAction.CONFLICTS_DETECTED,
        ]
        assert activity_repo.to_business(entries[0]).details == "Conflict resolved"

    def test_other_tasks_are_separate(self, activity_repo, add_task):
        a = add_task("A")
        b = add_task("B")
        activity_repo.log(a, ActivityAction.CONFLICTS_DETECTED)

        assert activity_repo.get_for_task(b) == []
        assert [e.task_id for e in activity_repo.get_for_task(a)] == [a]
