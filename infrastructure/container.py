import logging
import os

from core.application.task_store import TaskStore
from core.domain.ports.task_repository import TaskRepository
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from infrastructure.mongo.repository.task_repository import MongoTaskRepository
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
from infrastructure.sqlalchemy.repository.task_repository import (
    SqlAlchemyTaskRepository,
)

logger = logging.getLogger(__name__)

SUPPORTED_ORMS = ("peewee", "sqlalchemy", "mongo", "memory")


def build_task_repository(orm: str | None = None) -> TaskRepository:
    """
    Abre el repositorio indicado por `orm` o por la variable ORM.

    Se llama una sola vez al arrancar la aplicación; quien lo abre lo cierra.
    """
    orm = (orm or os.getenv("ORM", "peewee")).lower()
    logger.info(f"Abriendo repositorio de tareas (ORM={orm})")

    if orm == "mongo":
        return MongoTaskRepository()
    elif orm == "sqlalchemy":
        return SqlAlchemyTaskRepository()
    elif orm == "memory":
        return InMemoryTaskRepository()
    elif orm == "peewee":
        return PeeweeTaskRepository()
    raise ValueError(
        f"ORM no soportado: {orm!r}. Opciones: {', '.join(SUPPORTED_ORMS)}"
    )


def build_task_store(repository: TaskRepository) -> TaskStore:
    return TaskStore(repository=repository)
