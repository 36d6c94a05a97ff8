"""In-memory Task registry keyed by task id."""

import threading

from yeticore.core.domain.errors import TaskNotFoundError
from yeticore.core.domain.models import Task, TaskStatus


class TaskRegistry:
    """
    Stores every Task the engine has planned.

    Insert and lookup are guarded by a lock so that hosts may plan and run
    different Tasks concurrently. Tasks are never evicted by the engine;
    ``remove`` and ``clear`` exist for hosts that need to purge.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def add(self, task: Task) -> None:
        with self._lock:
            self._tasks[task.id] = task

    def get(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def find(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        """Return the registered Tasks in insertion order, optionally filtered."""
        with self._lock:
            tasks = list(self._tasks.values())
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return tasks

    def remove(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.pop(task_id, None)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
