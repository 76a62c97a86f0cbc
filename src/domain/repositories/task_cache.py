"""In-memory task cache owned by the tasks repository."""

from domain.entities.task import Task


class TaskCache:
    """Insertion-ordered map of task id to Task plus a dirty flag.

    The map starts uninitialized. A populated, clean cache is an
    authoritative snapshot of all tasks. The dirty flag may be raised
    before the first load.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] | None = None
        self.dirty = False

    @property
    def is_initialized(self) -> bool:
        return self._tasks is not None

    @property
    def is_fresh(self) -> bool:
        """Safe to serve a full listing without consulting any store."""
        return self.is_initialized and not self.dirty

    def invalidate(self) -> None:
        self.dirty = True

    def snapshot(self) -> list[Task]:
        """Copy of the cached tasks in insertion order."""
        return list(self._tasks.values()) if self._tasks else []

    def as_dict(self) -> dict[str, Task] | None:
        if not self.is_initialized:
            return None
        return dict(self._entries())

    def get(self, task_id: str) -> Task | None:
        if not self._tasks:
            return None
        return self._tasks.get(task_id)

    def replace_all(self, tasks: list[Task]) -> None:
        """Wholesale refresh after a full load; clears the dirty flag."""
        self._tasks = {task.id: task for task in tasks}
        self.dirty = False

    def put(self, task: Task) -> None:
        self._entries()[task.id] = task

    def remove(self, task_id: str) -> bool:
        """Drop a task; returns False when it was not cached."""
        return self._entries().pop(task_id, None) is not None

    def retain_active(self) -> None:
        self._tasks = {
            task_id: task for task_id, task in self._entries().items() if not task.completed
        }

    def clear(self) -> None:
        self._entries().clear()

    def _entries(self) -> dict[str, Task]:
        if self._tasks is None:
            self._tasks = {}
        return self._tasks
