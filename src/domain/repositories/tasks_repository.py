"""Caching tasks repository over a remote and a local data source."""

from collections.abc import Awaitable, Callable
from functools import partial

import structlog

from core.exceptions import DataNotAvailableError, TaskNotCachedError
from domain.entities.task import Task
from domain.repositories.task_cache import TaskCache
from domain.repositories.task_data_source import ITasksDataSource

logger = structlog.get_logger()

WriteFailureHook = Callable[[str, str, Exception], None]

REMOTE = "remote"
LOCAL = "local"


class TasksRepository:
    """Loads tasks from the data sources into an in-memory cache.

    Synchronisation is deliberately simple: the local store is used unless
    it is empty or the cache was invalidated, in which case the remote
    store is queried and its answer overwrites the local store.

    Writes go to the remote store, then the local store, then the cache.
    A store write that raises is logged and reported to ``on_write_failure``
    but never reaches the caller, and never stops the cache update.
    """

    def __init__(
        self,
        remote: ITasksDataSource,
        local: ITasksDataSource,
        on_write_failure: WriteFailureHook | None = None,
    ) -> None:
        self._remote = remote
        self._local = local
        self._on_write_failure = on_write_failure
        self._cache = TaskCache()

    @property
    def cached_tasks(self) -> dict[str, Task] | None:
        """Snapshot of the cache, or None before anything was cached."""
        return self._cache.as_dict()

    @property
    def cache_is_dirty(self) -> bool:
        return self._cache.dirty

    async def get_tasks(self) -> list[Task]:
        """Get tasks from the cache, the local store or the remote store.

        Raises DataNotAvailableError if every consulted source is empty.
        """
        if self._cache.is_fresh:
            logger.debug("tasks_served_from_cache", count=len(self._cache.snapshot()))
            return self._cache.snapshot()

        if self._cache.dirty:
            return await self._get_tasks_from_remote()

        try:
            tasks = await self._local.get_tasks()
        except DataNotAvailableError:
            logger.debug("local_tasks_not_available")
            return await self._get_tasks_from_remote()

        self._cache.replace_all(tasks)
        logger.info("tasks_loaded", source=LOCAL, count=len(tasks))
        return self._cache.snapshot()

    async def get_task(self, task_id: str) -> Task:
        """Get a task from the cache, the local store or the remote store."""
        cached = self._cache.get(task_id)
        if cached is not None:
            return cached

        try:
            task = await self._local.get_task(task_id)
        except DataNotAvailableError:
            task = await self._remote.get_task(task_id)
            logger.debug("task_loaded", source=REMOTE, task_id=task_id)
        else:
            logger.debug("task_loaded", source=LOCAL, task_id=task_id)

        self._cache.put(task)
        return task

    async def save_task(self, task: Task) -> None:
        await self._write_through("save_task", lambda store: store.save_task(task))
        self._cache.put(task)

    async def complete_task(self, task: Task | str) -> None:
        """Mark a task completed; an id must already be cached."""
        task = self._resolve(task)
        await self._write_through("complete_task", lambda store: store.complete_task(task))
        self._cache.put(task.complete())

    async def activate_task(self, task: Task | str) -> None:
        """Mark a task active; an id must already be cached."""
        task = self._resolve(task)
        await self._write_through("activate_task", lambda store: store.activate_task(task))
        self._cache.put(task.activate())

    async def clear_completed_tasks(self) -> None:
        await self._write_through("clear_completed_tasks", lambda store: store.clear_completed_tasks())
        self._cache.retain_active()

    async def delete_all_tasks(self) -> None:
        await self._write_through("delete_all_tasks", lambda store: store.delete_all_tasks())
        self._cache.clear()

    async def delete_task(self, task_id: str) -> None:
        """Delete a task everywhere. An uncached id leaves the cache as is."""
        await self._write_through("delete_task", lambda store: store.delete_task(task_id))
        if not self._cache.remove(task_id):
            logger.debug("deleted_task_not_cached", task_id=task_id)

    def refresh_tasks(self) -> None:
        """Force the next get_tasks through the remote store."""
        self._cache.invalidate()

    async def _get_tasks_from_remote(self) -> list[Task]:
        tasks = await self._remote.get_tasks()
        self._cache.replace_all(tasks)
        await self._refresh_local(tasks)
        logger.info("tasks_loaded", source=REMOTE, count=len(tasks))
        return self._cache.snapshot()

    async def _refresh_local(self, tasks: list[Task]) -> None:
        await self._write(LOCAL, "delete_all_tasks", self._local.delete_all_tasks)
        for task in tasks:
            await self._write(LOCAL, "save_task", partial(self._local.save_task, task))

    def _resolve(self, task: Task | str) -> Task:
        if isinstance(task, Task):
            return task
        cached = self._cache.get(task)
        if cached is None:
            raise TaskNotCachedError(task)
        return cached

    async def _write_through(
        self,
        operation: str,
        call: Callable[[ITasksDataSource], Awaitable[None]],
    ) -> None:
        await self._write(REMOTE, operation, lambda: call(self._remote))
        await self._write(LOCAL, operation, lambda: call(self._local))

    async def _write(
        self, store: str, operation: str, call: Callable[[], Awaitable[None]]
    ) -> None:
        try:
            await call()
        except Exception as exc:
            logger.warning(
                "task_store_write_failed",
                store=store,
                operation=operation,
                error=str(exc),
            )
            if self._on_write_failure:
                self._report_write_failure(store, operation, exc)

    def _report_write_failure(self, store: str, operation: str, exc: Exception) -> None:
        try:
            self._on_write_failure(store, operation, exc)  # type: ignore[misc]
        except Exception as hook_exc:
            logger.error(
                "write_failure_hook_failed",
                store=store,
                operation=operation,
                error=str(hook_exc),
            )
