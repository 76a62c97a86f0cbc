"""Entry point: load tasks through the repository and log statistics."""

import asyncio

import structlog

from core.config import Settings, settings as default_settings
from core.exceptions import DataNotAvailableError
from core.logging import setup_logging
from domain.services.task_service import TaskStatistics
from infrastructure.container import open_container

logger = structlog.get_logger()


async def run(settings: Settings | None = None) -> TaskStatistics | None:
    """Load all tasks once and report the active/completed counts."""
    async with open_container(settings or default_settings) as container:
        try:
            tasks = await container.service.load_tasks()
        except DataNotAvailableError:
            logger.warning("tasks_not_available")
            return None

        for task in tasks:
            logger.info("task", task_id=task.id, title=task.title_for_list, completed=task.completed)

        stats = await container.service.get_statistics()
        logger.info("task_statistics", active=stats.active, completed=stats.completed)
        return stats


if __name__ == "__main__":
    setup_logging()
    asyncio.run(run())
