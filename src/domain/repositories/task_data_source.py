"""Tasks data source protocol."""

from typing import Protocol

from domain.entities.task import Task


class ITasksDataSource(Protocol):
    """Data source interface for Task entities.

    Reads raise ``DataNotAvailableError`` when there is nothing to return.
    Task-or-id arguments accept either a ``Task`` or its id.
    """

    async def get_tasks(self) -> list[Task]:
        """Get all tasks."""
        ...

    async def get_task(self, task_id: str) -> Task:
        """Get a task by ID."""
        ...

    async def save_task(self, task: Task) -> None:
        """Create or replace a task."""
        ...

    async def complete_task(self, task: Task | str) -> None:
        """Mark a task as completed."""
        ...

    async def activate_task(self, task: Task | str) -> None:
        """Mark a task as active."""
        ...

    async def clear_completed_tasks(self) -> None:
        """Delete every completed task."""
        ...

    async def delete_all_tasks(self) -> None:
        """Delete every task."""
        ...

    async def delete_task(self, task_id: str) -> None:
        """Delete a single task."""
        ...

    def refresh_tasks(self) -> None:
        """Hint that the next full read should bypass any cached state."""
        ...


def task_id_of(task: Task | str) -> str:
    """Resolve a task-or-id argument to the id."""
    return task.id if isinstance(task, Task) else task
