from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from core.domain.models.task import Task

TASK_FIELDS = frozenset(
    {"id", "title", "description", "is_completed", "created_at", "updated_at"}
)


@dataclass(frozen=True, slots=True)
class OrderBy:
    field: str
    descending: bool = False


def check_fields(names: Iterable[str]) -> None:
    unknown = sorted(set(names) - TASK_FIELDS)
    if unknown:
        raise ValueError(f"Campos desconocidos para Task: {', '.join(unknown)}")


class TaskRepository(ABC):
    @abstractmethod
    def insert(self, task: Task) -> int:
        """Persiste una tarea nueva y devuelve el id asignado por la BDD."""
        raise NotImplementedError

    @abstractmethod
    def query_where(
        self,
        filters: Mapping[str, Any],
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, task_id: int) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, task: Task) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Libera la conexión. Por defecto no hace nada."""
        return None
