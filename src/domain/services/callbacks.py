"""Callback delivery for repository reads.

Presenters that expect the two-case callback contract (loaded or not
available) use ``CallbackDispatcher`` instead of awaiting the data source
directly. Callbacks run through an injected ``deliver`` function so they
land on whatever context the caller renders from, for example
``loop.call_soon_threadsafe`` of a UI loop.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

import structlog

from core.exceptions import DataNotAvailableError
from domain.entities.task import Task
from domain.repositories.task_data_source import ITasksDataSource

logger = structlog.get_logger()

Deliver = Callable[[Callable[[], None]], None]


class LoadTasksCallback(Protocol):
    def on_tasks_loaded(self, tasks: list[Task]) -> None: ...

    def on_data_not_available(self) -> None: ...


class GetTaskCallback(Protocol):
    def on_task_loaded(self, task: Task) -> None: ...

    def on_data_not_available(self) -> None: ...


def deliver_inline(callback: Callable[[], None]) -> None:
    callback()


class CallbackDispatcher:
    """Runs data source reads as tasks and reports through callbacks.

    The dispatcher holds a reference to every read in flight, so callers
    may drop the returned task. A read that fails with anything other than
    DataNotAvailableError fires no callback and is logged as
    ``callback_read_failed``.
    """

    def __init__(self, data_source: ITasksDataSource, deliver: Deliver = deliver_inline) -> None:
        self._data_source = data_source
        self._deliver = deliver
        self._pending: set[asyncio.Task[None]] = set()

    def get_tasks(self, callback: LoadTasksCallback) -> asyncio.Task[None]:
        """Schedule a full load; must be called from a running event loop."""
        return self._track(asyncio.create_task(self._get_tasks(callback)))

    def get_task(self, task_id: str, callback: GetTaskCallback) -> asyncio.Task[None]:
        """Schedule a single-task load; must be called from a running event loop."""
        return self._track(asyncio.create_task(self._get_task(task_id, callback)))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _track(self, task: asyncio.Task[None]) -> asyncio.Task[None]:
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("callback_read_failed", error=str(exc), error_type=type(exc).__name__)

    async def _get_tasks(self, callback: LoadTasksCallback) -> None:
        try:
            tasks = await self._data_source.get_tasks()
        except DataNotAvailableError:
            logger.debug("tasks_not_available")
            self._deliver(callback.on_data_not_available)
            return
        self._deliver(lambda: callback.on_tasks_loaded(tasks))

    async def _get_task(self, task_id: str, callback: GetTaskCallback) -> None:
        try:
            task = await self._data_source.get_task(task_id)
        except DataNotAvailableError:
            logger.debug("task_not_available", task_id=task_id)
            self._deliver(callback.on_data_not_available)
            return
        self._deliver(lambda: callback.on_task_loaded(task))
