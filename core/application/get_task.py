from core.domain.errors import NotFoundError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository

# Límite de INTEGER en SQLite, BIGINT y enteros BSON.
MAX_TASK_ID = 2**63 - 1


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: int) -> Task:
        # Un id fuera de rango no puede existir en ninguna BDD soportada.
        if 0 < task_id <= MAX_TASK_ID:
            task = self._repository.get_by_id(task_id)
        else:
            task = None
        if task is None:
            raise NotFoundError(task_id)
        return task
