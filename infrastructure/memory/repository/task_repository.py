import itertools
import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from core.domain.errors import NotFoundError
from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy, TaskRepository, check_fields

logger = logging.getLogger(__name__)


class InMemoryTaskRepository(TaskRepository):
    """
    Repositorio en memoria del proceso.

    Devuelve copias de las tareas, nunca las instancias guardadas, para que
    ningún llamador pueda mutar el estado persistido sin pasar por update().
    """

    def __init__(self) -> None:
        self._data: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert(self, task: Task) -> int:
        with self._lock:
            task_id = next(self._ids)
            self._data[task_id] = replace(task, id=task_id)
        logger.debug(f"✓ Tarea {task_id} insertada en memoria")
        return task_id

    def query_where(
        self,
        filters: Mapping[str, Any],
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Task]:
        check_fields(filters)
        check_fields(o.field for o in order_by)

        with self._lock:
            tasks = [
                replace(t)
                for t in self._data.values()
                if all(getattr(t, name) == value for name, value in filters.items())
            ]

        # Orden estable: se aplica del criterio menos al más significativo.
        for order in reversed(order_by):
            tasks.sort(key=lambda t: getattr(t, order.field), reverse=order.descending)

        return tasks if limit is None else tasks[:limit]

    def get_by_id(self, task_id: int) -> Task | None:
        with self._lock:
            task = self._data.get(task_id)
            return replace(task) if task is not None else None

    def update(self, task: Task) -> None:
        with self._lock:
            if task.id not in self._data:
                raise NotFoundError(task.id)
            self._data[task.id] = replace(task)
