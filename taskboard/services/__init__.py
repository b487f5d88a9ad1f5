"""Service layer coordinating the conflict engine and persistence."""

from .conflict_service import ConflictService

__all__ = ["ConflictService"]
