from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from core.application.clock import Clock, utc_now
from core.domain.errors import ValidationError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository

TITLE_MAX_LENGTH = 255
_ALLOWED_FIELDS = ("title", "description")


@dataclass(slots=True)
class CreateTaskCommand:
    title: str
    description: str | None = None


def validate_new_task(title: Any, description: Any = None) -> CreateTaskCommand:
    """
    Valida los campos de una tarea nueva.

    El título no se recorta: "   " es un título válido, "" no lo es.

    Raises:
        ValidationError: Si el título está vacío, es demasiado largo o
            algún campo tiene un tipo incorrecto.
    """
    if not isinstance(title, str):
        raise ValidationError("Title must be a string.")
    if title == "":
        raise ValidationError("Title cannot be empty.")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title cannot be longer than {TITLE_MAX_LENGTH} characters."
        )
    if description is not None and not isinstance(description, str):
        raise ValidationError("Description must be a string.")
    return CreateTaskCommand(title=title, description=description)


def parse_create_task(payload: Any) -> CreateTaskCommand:
    """
    Convierte el cuerpo JSON de POST /tasks en un comando validado.

    Rechaza propiedades que no sean `title` o `description`.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object.")

    extra = [key for key in payload if key not in _ALLOWED_FIELDS]
    if extra:
        raise ValidationError(f"property {extra[0]} should not exist")
    if "title" not in payload:
        raise ValidationError("Title cannot be empty.")

    return validate_new_task(payload["title"], payload.get("description"))


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository, clock: Clock = utc_now) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, cmd: CreateTaskCommand) -> Task:
        cmd = validate_new_task(cmd.title, cmd.description)
        now = self._clock()
        task = Task(
            title=cmd.title,
            description=cmd.description,
            is_completed=False,
            created_at=now,
            updated_at=now,
        )
        task_id = self._repository.insert(task)
        return replace(task, id=task_id)
