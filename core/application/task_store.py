"""
TaskStore: fachada de los casos de uso de tareas.

No guarda estado entre llamadas; cada operación consulta la BDD a través
del repositorio inyectado. La capa HTTP crea uno por request.
"""

from core.application.clock import Clock, utc_now
from core.application.complete_task import CompleteTaskUseCase
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_recent_tasks import ListRecentTasksUseCase
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


class TaskStore:
    def __init__(self, repository: TaskRepository, clock: Clock = utc_now) -> None:
        self._create = CreateTaskUseCase(repository, clock)
        self._list_recent = ListRecentTasksUseCase(repository)
        self._get = GetTaskUseCase(repository)
        self._complete = CompleteTaskUseCase(repository, clock)

    def create(self, title: str, description: str | None = None) -> Task:
        """
        Crea una tarea incompleta con created_at == updated_at.

        Raises:
            ValidationError: Si el título está vacío o supera 255 caracteres.
            PersistenceError: Si la BDD rechaza la escritura.
        """
        return self._create.execute(
            CreateTaskCommand(title=title, description=description)
        )

    def find_recent_incomplete(self) -> list[Task]:
        """Las 5 tareas incompletas más recientes, de la más nueva a la más vieja."""
        return self._list_recent.execute()

    def find_by_id(self, task_id: int) -> Task:
        """
        Raises:
            NotFoundError: Si no existe una tarea con ese id.
        """
        return self._get.execute(task_id)

    def mark_complete(self, task_id: int) -> Task:
        """
        Raises:
            NotFoundError: Si no existe una tarea con ese id.
            PersistenceError: Si la BDD rechaza la escritura.
        """
        return self._complete.execute(task_id)
