"""Shared fixtures for unit tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.exceptions import DataNotAvailableError
from domain.entities.task import Task
from domain.repositories.tasks_repository import TasksRepository


def make_source() -> AsyncMock:
    """Data source double recording every call.

    Reads report not available until a test sets a return value.
    """
    source = AsyncMock()
    source.get_tasks.side_effect = DataNotAvailableError()
    source.get_task.side_effect = DataNotAvailableError()
    source.refresh_tasks = MagicMock()
    return source


def serve(source: AsyncMock, tasks: list[Task]) -> None:
    """Make a source double answer reads with ``tasks``."""
    by_id = {task.id: task for task in tasks}

    async def get_task(task_id: str) -> Task:
        if task_id not in by_id:
            raise DataNotAvailableError(task_id)
        return by_id[task_id]

    source.get_tasks.side_effect = None
    source.get_tasks.return_value = list(tasks)
    source.get_task.side_effect = get_task


@pytest.fixture
def remote() -> AsyncMock:
    return make_source()


@pytest.fixture
def local() -> AsyncMock:
    return make_source()


@pytest.fixture
def write_failures() -> list[tuple[str, str, Exception]]:
    return []


@pytest.fixture
def repository(
    remote: AsyncMock,
    local: AsyncMock,
    write_failures: list[tuple[str, str, Exception]],
) -> TasksRepository:
    """Repository over two recording doubles; write failures are collected."""
    return TasksRepository(
        remote,
        local,
        on_write_failure=lambda store, op, exc: write_failures.append((store, op, exc)),
    )


@pytest.fixture
def buy_milk() -> Task:
    return Task(title="Buy milk", description="Two litres")


@pytest.fixture
def sample_tasks() -> list[Task]:
    return [
        Task(title="Title1", description="Description1"),
        Task(title="Title2", description="Description2", completed=True),
        Task(title="Title3", description="Description3", completed=True),
    ]
