"""Domain exceptions raised by the repositories and service layer."""


class TaskboardError(Exception):
    """Base class for all taskboard errors."""


class TaskNotFoundError(TaskboardError):
    """Raised when a referenced task does not exist."""

    def __init__(self, task_id: int):
        """Initialize with the missing task id."""
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ConflictNotFoundError(TaskboardError):
    """Raised when a stored conflict record does not exist."""

    def __init__(self, conflict_id: int):
        """Initialize with the missing conflict id."""
        self.conflict_id = conflict_id
        super().__init__(f"Conflict {conflict_id} not found")


class DuplicateConflictError(TaskboardError):
    """Raised when a conflict already links the two tasks in either direction."""

    def __init__(self, task_id: int, conflicting_task_id: int):
        """Initialize with both task ids."""
        self.task_id = task_id
        self.conflicting_task_id = conflicting_task_id
        super().__init__(
            f"Conflict already exists between tasks {task_id} and "
            f"{conflicting_task_id}"
        )


class ConflictStoreError(TaskboardError):
    """Raised when reading or writing conflict data fails.

    Distinguishes "detection could not run" from "no conflicts found".
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        """Initialize with the failed operation and its cause."""
        self.operation = operation
        self.cause = cause
        message = f"Conflict store failure during {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
