"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the tasks core."""

    # Read outcomes
    DATA_NOT_AVAILABLE = "DATA_NOT_AVAILABLE"

    # Precondition errors
    TASK_NOT_CACHED = "TASK_NOT_CACHED"

    # Validation errors
    EMPTY_TASK = "EMPTY_TASK"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(self.message)


class DataNotAvailableError(AppException):
    """No data could be loaded for a read.

    This signals absence, not a fault: a store that is down and a store that
    is empty look the same to the caller.
    """

    def __init__(self, task_id: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.DATA_NOT_AVAILABLE,
            message=f"Task not available: {task_id}" if task_id else "Tasks not available",
            details={"task_id": task_id} if task_id else None,
        )


class TaskNotCachedError(AppException):
    """An id-based operation needed a cached task that is not there."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_CACHED,
            message=f"Task not in cache: {task_id}",
            details={"task_id": task_id},
        )


class EmptyTaskError(AppException):
    """A task needs a title or a description."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.EMPTY_TASK,
            message="Task must have a title or a description",
        )
