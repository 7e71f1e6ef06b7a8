from datetime import datetime

from pydantic import BaseModel, Field

from core.domain.models.task import Task
from infrastructure.timestamps import as_utc


class TaskMongo(BaseModel):
    """
    Modelo de Task para MongoDB.
    Representa cómo se almacena la tarea en la colección `tasks`.
    """

    id: int = Field(alias="_id")
    title: str
    description: str | None = None
    is_completed: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}

    def to_domain(self) -> Task:
        """
        Convierte el documento al modelo de dominio.

        Retorna:
            Task: La entidad de dominio, con timestamps en UTC.
        """
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            is_completed=self.is_completed,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskMongo":
        """
        Crea el documento a partir de una tarea que ya tiene id asignado.

        Argumentos:
            task (Task): La entidad de dominio.
        """
        if task.id is None:
            raise ValueError("La tarea no tiene id asignado")
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            is_completed=task.is_completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
