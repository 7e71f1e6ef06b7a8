from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy, TaskRepository

RECENT_TASKS_LIMIT = 5

# Más recientes primero; en empate de created_at gana el último insertado.
_RECENT_ORDER = (OrderBy("created_at", descending=True), OrderBy("id", descending=True))


class ListRecentTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self) -> list[Task]:
        return self._repository.query_where(
            {"is_completed": False},
            order_by=_RECENT_ORDER,
            limit=RECENT_TASKS_LIMIT,
        )
