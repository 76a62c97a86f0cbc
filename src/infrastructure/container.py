"""Composition of the tasks repository and its collaborators."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine

from core.config import Settings, get_settings
from domain.repositories.tasks_repository import TasksRepository, WriteFailureHook
from domain.services.task_service import TaskService
from infrastructure.database.session import create_engine, create_session_factory, create_tables
from infrastructure.database.sqlalchemy_task_data_source import SQLAlchemyTasksLocalDataSource
from infrastructure.remote.in_memory_remote import DEMO_TASKS, InMemoryTasksRemoteDataSource

logger = structlog.get_logger()


@dataclass
class TasksContainer:
    """One repository instance with the resources it depends on.

    The caller owns the container and passes the repository or service to
    presenters. Building a new container is how state is reset.
    """

    engine: AsyncEngine
    repository: TasksRepository
    service: TaskService

    async def dispose(self) -> None:
        await self.engine.dispose()


async def build_container(
    settings: Settings | None = None,
    on_write_failure: WriteFailureHook | None = None,
) -> TasksContainer:
    """Create the local schema, both data sources and the repository."""
    settings = settings or get_settings()

    engine = create_engine(settings)
    await create_tables(engine)

    local = SQLAlchemyTasksLocalDataSource(create_session_factory(engine))
    remote = InMemoryTasksRemoteDataSource(
        latency=settings.remote_latency_seconds,
        seed=DEMO_TASKS if settings.seed_remote else (),
    )
    repository = TasksRepository(remote, local, on_write_failure=on_write_failure)

    logger.info(
        "tasks_repository_built",
        database_url=engine.url.render_as_string(hide_password=True),
        remote_latency_ms=settings.remote_latency_ms,
    )
    return TasksContainer(engine=engine, repository=repository, service=TaskService(repository))


@asynccontextmanager
async def open_container(
    settings: Settings | None = None,
    on_write_failure: WriteFailureHook | None = None,
) -> AsyncIterator[TasksContainer]:
    """Build a container and dispose of its engine on exit."""
    container = await build_container(settings, on_write_failure)
    try:
        yield container
    finally:
        await container.dispose()
