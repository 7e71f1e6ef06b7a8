from dataclasses import replace

from core.application.clock import Clock, utc_now
from core.application.get_task import GetTaskUseCase
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


class CompleteTaskUseCase:
    """
    Marca una tarea como completada.

    Completar una tarea ya completada no es un error: solo refresca
    `updated_at`. No existe la transición inversa.
    """

    def __init__(self, repository: TaskRepository, clock: Clock = utc_now) -> None:
        self._repository = repository
        self._get_task = GetTaskUseCase(repository)
        self._clock = clock

    def execute(self, task_id: int) -> Task:
        task = self._get_task.execute(task_id)
        # updated_at nunca retrocede aunque el reloj lo haga.
        updated = replace(
            task,
            is_completed=True,
            updated_at=max(self._clock(), task.updated_at),
        )
        self._repository.update(updated)
        return updated
