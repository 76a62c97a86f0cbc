"""SQLAlchemy implementation of the local tasks data source."""

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import DataNotAvailableError
from domain.entities.task import Task
from domain.repositories.task_data_source import task_id_of
from infrastructure.database.models import TaskModel

logger = structlog.get_logger()


class SQLAlchemyTasksLocalDataSource:
    """SQLAlchemy implementation of ITasksDataSource backed by the local db.

    Each call runs in its own session and commits before returning. A
    database fault on a read is reported as not available.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_tasks(self) -> list[Task]:
        """Get all tasks. An empty table is reported as not available."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(TaskModel))
                tasks = [self._to_entity(model) for model in result.scalars()]
        except SQLAlchemyError as exc:
            logger.warning("local_read_failed", operation="get_tasks", error=str(exc))
            raise DataNotAvailableError() from exc

        if not tasks:
            raise DataNotAvailableError()
        return tasks

    async def get_task(self, task_id: str) -> Task:
        try:
            async with self._session_factory() as session:
                model = await session.get(TaskModel, task_id)
        except SQLAlchemyError as exc:
            logger.warning(
                "local_read_failed", operation="get_task", task_id=task_id, error=str(exc)
            )
            raise DataNotAvailableError(task_id) from exc

        if not model:
            raise DataNotAvailableError(task_id)
        return self._to_entity(model)

    async def save_task(self, task: Task) -> None:
        """Insert or replace the row for ``task``."""
        async with self._session_factory() as session:
            await session.merge(self._to_model(task))
            await session.commit()

    async def complete_task(self, task: Task | str) -> None:
        await self._set_completed(task_id_of(task), True)

    async def activate_task(self, task: Task | str) -> None:
        await self._set_completed(task_id_of(task), False)

    async def clear_completed_tasks(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(TaskModel).where(TaskModel.completed.is_(True)))
            await session.commit()

    async def delete_all_tasks(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(TaskModel))
            await session.commit()

    async def delete_task(self, task_id: str) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(TaskModel).where(TaskModel.id == task_id))
            await session.commit()

    def refresh_tasks(self) -> None:
        # Refresh logic lives in the repository.
        pass

    async def _set_completed(self, task_id: str, completed: bool) -> None:
        async with self._session_factory() as session:
            stmt = update(TaskModel).where(TaskModel.id == task_id).values(completed=completed)
            await session.execute(stmt)
            await session.commit()

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            title=model.title,
            description=model.description,
            completed=model.completed,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            completed=entity.completed,
        )
