"""Schema package for taskboard.

This package provides:
- Business models and enums shared with the conflict engine
- Database entity models

Quick usage:
    from taskboard.schemas import CandidateTask, TaskSnapshot, TaskPriority
    from taskboard.repositories import ConflictRepository
    from taskboard.services import ConflictService
"""

# Database entities
from .database import ActivityLog, DateConflict, Task

# Business models and types
from .unified_models import (
    PRIORITY_WEIGHTS,
    ActivityAction,
    ActivityEntry,
    BaseBusinessModel,
    BaseEntityModel,
    CandidateTask,
    Conflict,
    ConflictCheckRequest,
    ConflictCheckResult,
    ConflictRecordCore,
    ConflictSeverity,
    ConflictType,
    TaskPriority,
    TaskSnapshot,
    UnifiedConfig,
    get_priority_weight,
    normalize_priority,
)


__all__ = [
    "PRIORITY_WEIGHTS",
    "ActivityAction",
    "ActivityEntry",
    "ActivityLog",
    "BaseBusinessModel",
    "BaseEntityModel",
    "CandidateTask",
    "Conflict",
    "ConflictCheckRequest",
    "ConflictCheckResult",
    "ConflictRecordCore",
    "ConflictSeverity",
    "ConflictType",
    "DateConflict",
    "Task",
    "TaskPriority",
    "TaskSnapshot",
    "UnifiedConfig",
    "get_priority_weight",
    "normalize_priority",
]
