"""Simulated remote tasks service."""

import asyncio

import structlog

from core.exceptions import DataNotAvailableError
from domain.entities.task import Task
from domain.repositories.task_data_source import task_id_of

logger = structlog.get_logger()

DEMO_TASKS = (
    Task(title="Build tower in Pisa", description="Ground looks good, no foundation work required."),
    Task(title="Finish bridge in Tacoma", description="Found awesome girders at half the cost!"),
)


class InMemoryTasksRemoteDataSource:
    """Remote data source backed by a dict, with artificial read latency.

    Stands in for a network service: reads are delayed by ``latency``
    seconds, writes apply immediately.
    """

    def __init__(self, latency: float = 0.0, seed: tuple[Task, ...] | list[Task] = ()) -> None:
        self._latency = latency
        self._tasks: dict[str, Task] = {task.id: task for task in seed}

    async def get_tasks(self) -> list[Task]:
        await self._simulate_latency()
        if not self._tasks:
            raise DataNotAvailableError()
        return list(self._tasks.values())

    async def get_task(self, task_id: str) -> Task:
        await self._simulate_latency()
        task = self._tasks.get(task_id)
        if task is None:
            raise DataNotAvailableError(task_id)
        return task

    async def save_task(self, task: Task) -> None:
        self._tasks[task.id] = task

    async def complete_task(self, task: Task | str) -> None:
        task_id = task_id_of(task)
        if task_id in self._tasks:
            self._tasks[task_id] = self._tasks[task_id].complete()

    async def activate_task(self, task: Task | str) -> None:
        task_id = task_id_of(task)
        if task_id in self._tasks:
            self._tasks[task_id] = self._tasks[task_id].activate()

    async def clear_completed_tasks(self) -> None:
        self._tasks = {task_id: task for task_id, task in self._tasks.items() if task.is_active}

    async def delete_all_tasks(self) -> None:
        self._tasks.clear()

    async def delete_task(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)

    def refresh_tasks(self) -> None:
        # Refresh logic lives in the repository.
        pass

    async def _simulate_latency(self) -> None:
        if self._latency > 0:
            logger.debug("remote_latency", seconds=self._latency)
            await asyncio.sleep(self._latency)
