"""Task service layer used by presenters."""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from core.exceptions import DataNotAvailableError, EmptyTaskError
from domain.entities.task import Task
from domain.repositories.task_data_source import ITasksDataSource

logger = structlog.get_logger()


class TasksFilterType(StrEnum):
    """Which tasks a listing should show."""

    ALL_TASKS = "all"
    ACTIVE_TASKS = "active"
    COMPLETED_TASKS = "completed"


@dataclass(frozen=True)
class TaskStatistics:
    """Counts of active and completed tasks."""

    active: int
    completed: int

    @property
    def total(self) -> int:
        return self.active + self.completed


def filter_tasks(tasks: list[Task], filtering: TasksFilterType) -> list[Task]:
    """Keep the tasks matching ``filtering``, preserving order."""
    if filtering is TasksFilterType.ACTIVE_TASKS:
        return [task for task in tasks if task.is_active]
    if filtering is TasksFilterType.COMPLETED_TASKS:
        return [task for task in tasks if task.completed]
    return list(tasks)


class TaskService:
    """Service layer for task listing, editing and statistics.

    Works against any ITasksDataSource, normally the caching
    TasksRepository.
    """

    def __init__(self, repository: ITasksDataSource) -> None:
        self._repository = repository
        self._first_load = True

    async def load_tasks(
        self,
        filtering: TasksFilterType = TasksFilterType.ALL_TASKS,
        force_update: bool = False,
    ) -> list[Task]:
        """Load tasks, forcing a remote refresh on the very first load."""
        if force_update or self._first_load:
            self._repository.refresh_tasks()
        self._first_load = False

        tasks = await self._repository.get_tasks()
        return filter_tasks(tasks, filtering)

    async def get_task(self, task_id: str) -> Task:
        if not task_id:
            raise DataNotAvailableError()
        return await self._repository.get_task(task_id)

    async def create_task(self, title: str | None, description: str | None) -> Task:
        """Create a new task. Requires a title or a description."""
        task = Task(title=title, description=description)
        if task.is_empty:
            raise EmptyTaskError()

        await self._repository.save_task(task)
        logger.info("task_created", task_id=task.id)
        return task

    async def update_task(self, task_id: str, title: str | None, description: str | None) -> Task:
        """Replace a task's title and description.

        The saved task is active regardless of its previous state.
        """
        task = Task(title=title, description=description, id=task_id)
        if task.is_empty:
            raise EmptyTaskError()

        await self._repository.save_task(task)
        logger.info("task_updated", task_id=task.id)
        return task

    async def complete_task(self, task: Task | str) -> None:
        await self._repository.complete_task(task)

    async def activate_task(self, task: Task | str) -> None:
        await self._repository.activate_task(task)

    async def delete_task(self, task_id: str) -> None:
        await self._repository.delete_task(task_id)
        logger.info("task_deleted", task_id=task_id)

    async def clear_completed_tasks(self) -> None:
        await self._repository.clear_completed_tasks()

    async def get_statistics(self) -> TaskStatistics:
        """Count active and completed tasks."""
        tasks = await self._repository.get_tasks()
        completed = sum(1 for task in tasks if task.completed)
        return TaskStatistics(active=len(tasks) - completed, completed=completed)
