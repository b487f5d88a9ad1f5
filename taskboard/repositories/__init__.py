"""Repository pattern implementations for clean data access.

This module provides the repository layer that bridges the conflict engine
with database persistence.
"""

from .base import BaseRepository
from .conflict_repository import ConflictRepository
from .task_repository import ActivityLogRepository, TaskRepository


__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "ConflictRepository",
    "TaskRepository",
]
