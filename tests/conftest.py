"""Pytest configuration and fixtures for taskboard tests."""

from datetime import date

import pytest
from sqlmodel import Session, SQLModel

from taskboard.conflicts import ConflictDetector
from taskboard.database import build_engine
from taskboard.repositories import TaskRepository
from taskboard.schemas.unified_models import TaskPriority
from taskboard.services import ConflictService
from tests.utils.factories import make_candidate, make_snapshot


@pytest.fixture
def snapshot_factory():
    """Factory fixture for comparison snapshots."""
    return make_snapshot


@pytest.fixture
def candidate_factory():
    """Factory fixture for candidate tasks."""
    return make_candidate


@pytest.fixture
def detector():
    """Detector with default rules."""
    return ConflictDetector()


@pytest.fixture
def in_memory_db():
    """Create in-memory SQLite database for testing."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(in_memory_db):
    """Create database session for testing."""
    with Session(in_memory_db) as session:
        yield session


@pytest.fixture
def task_repo(db_session):
    """Task repository bound to the test session."""
    return TaskRepository(db_session)


@pytest.fixture
def add_task(task_repo, db_session):
    """Insert a task row and return its id."""

    def _add(
        title: str,
        start: date | None = None,
        due: date | None = None,
        hours: float | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        completed: bool = False,
    ) -> int:
        task = task_repo.add_task(
            make_snapshot(
                task_id=None,
                title=title,
                start=start,
                due=due,
                hours=hours,
                priority=priority,
            ),
            completed=completed,
        )
        db_session.commit()
        return task.id

    return _add


@pytest.fixture
def conflict_service(db_session, detector):
    """Conflict service over the test session."""
    return ConflictService(session=db_session, detector=detector)
