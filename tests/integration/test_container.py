"""Integration tests for building the repository from settings."""

import pytest

from core.config import Settings
from core.exceptions import DataNotAvailableError
from domain.services.task_service import TasksFilterType, TaskStatistics
from infrastructure.container import build_container, open_container
from main import run


class TestContainer:
    @pytest.mark.asyncio
    async def test_first_load_comes_from_seeded_remote(self, test_settings: Settings) -> None:
        async with open_container(test_settings) as container:
            tasks = await container.service.load_tasks()

            assert {task.title for task in tasks} == {
                "Build tower in Pisa",
                "Finish bridge in Tacoma",
            }
            assert await container.service.get_statistics() == TaskStatistics(active=2, completed=0)

    @pytest.mark.asyncio
    async def test_local_store_survives_a_new_container(self, test_settings: Settings) -> None:
        async with open_container(test_settings) as container:
            created = await container.service.create_task("Buy milk", None)
            await container.service.complete_task(created.id)

        settings = test_settings.model_copy(update={"seed_remote": False})
        async with open_container(settings) as container:
            tasks = await container.repository.get_tasks()

            assert [(task.id, task.completed) for task in tasks] == [(created.id, True)]

    @pytest.mark.asyncio
    async def test_unseeded_remote_reports_not_available(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"seed_remote": False})
        container = await build_container(settings)
        try:
            with pytest.raises(DataNotAvailableError):
                await container.service.load_tasks(TasksFilterType.ACTIVE_TASKS)
        finally:
            await container.dispose()

    @pytest.mark.asyncio
    async def test_run_returns_statistics(self, test_settings: Settings) -> None:
        stats = await run(test_settings)

        assert stats == TaskStatistics(active=2, completed=0)
