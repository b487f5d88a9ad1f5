"""Taskboard - scheduling conflict detection for task management.

Core Components:
- conflicts: pure overlap/overload detection engine
- schemas: business models and SQLModel tables
- repositories: conflict persistence adapter over SQLModel sessions
- services: conflict service composing detection and persistence
- cli: typer command line front-end
"""

from .conflicts import ConflictDetector, ConflictRules, detect_conflicts
from .exceptions import (
    ConflictNotFoundError,
    ConflictStoreError,
    DuplicateConflictError,
    TaskboardError,
    TaskNotFoundError,
)
from .schemas import (
    CandidateTask,
    Conflict,
    ConflictCheckRequest,
    ConflictCheckResult,
    ConflictSeverity,
    ConflictType,
    TaskPriority,
    TaskSnapshot,
)
from .services import ConflictService

__version__ = "0.1.0"

__all__ = [
    "CandidateTask",
    "Conflict",
    "ConflictCheckRequest",
    "ConflictCheckResult",
    "ConflictDetector",
    "ConflictNotFoundError",
    "ConflictRules",
    "ConflictService",
    "ConflictSeverity",
    "ConflictStoreError",
    "ConflictType",
    "DuplicateConflictError",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskSnapshot",
    "TaskboardError",
    "detect_conflicts",
]
