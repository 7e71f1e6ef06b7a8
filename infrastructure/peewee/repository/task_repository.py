import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from peewee import Database, PeeweeException

from core.domain.errors import NotFoundError, PersistenceError
from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy, TaskRepository, check_fields
from infrastructure.peewee.model.models import TaskModel, bind_task_model
from infrastructure.peewee.session.db import open_database
from infrastructure.timestamps import as_utc, to_naive_utc

logger = logging.getLogger(__name__)


@contextmanager
def _persistence_errors(operacion: str) -> Iterator[None]:
    try:
        yield
    except PeeweeException as e:
        logger.error(f"✗ Peewee falló en {operacion}: {e}")
        raise PersistenceError(f"{operacion} falló: {e}") from e


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        description=model.description,
        is_completed=model.is_completed,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


class PeeweeTaskRepository(TaskRepository):
    def __init__(self, database: Database | None = None) -> None:
        self._db = database if database is not None else open_database()
        self.model = bind_task_model(self._db)
        # Sin migraciones: la tabla se crea al abrir el repositorio.
        with _persistence_errors("init"):
            self._db.connect(reuse_if_open=True)
            self._db.create_tables([self.model], safe=True)
        logger.info("PeeweeTaskRepository inicializado")

    def insert(self, task: Task) -> int:
        with _persistence_errors("insert"), self._db.atomic():
            model = self.model.create(
                title=task.title,
                description=task.description,
                is_completed=task.is_completed,
                created_at=to_naive_utc(task.created_at),
                updated_at=to_naive_utc(task.updated_at),
            )
        logger.info(f"✓ Tarea {model.id} insertada")
        return model.id

    def query_where(
        self,
        filters: Mapping[str, Any],
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Task]:
        check_fields(filters)
        check_fields(o.field for o in order_by)

        query = self.model.select()
        if filters:
            query = query.where(
                *[getattr(self.model, name) == value for name, value in filters.items()]
            )
        if order_by:
            query = query.order_by(
                *[
                    getattr(self.model, o.field).desc()
                    if o.descending
                    else getattr(self.model, o.field).asc()
                    for o in order_by
                ]
            )
        if limit is not None:
            query = query.limit(limit)

        with _persistence_errors("query_where"):
            return [_to_domain(model) for model in query]

    def get_by_id(self, task_id: int) -> Task | None:
        with _persistence_errors("get_by_id"):
            model = self.model.get_or_none(self.model.id == task_id)
        return _to_domain(model) if model is not None else None

    def update(self, task: Task) -> None:
        with _persistence_errors("update"), self._db.atomic():
            rows = (
                self.model.update(
                    title=task.title,
                    description=task.description,
                    is_completed=task.is_completed,
                    updated_at=to_naive_utc(task.updated_at),
                )
                .where(self.model.id == task.id)
                .execute()
            )
            # MySQL cuenta filas modificadas, no encontradas: se confirma con exists().
            found = rows > 0 or self.model.select().where(self.model.id == task.id).exists()
        if not found:
            raise NotFoundError(task.id)
        logger.info(f"✓ Tarea {task.id} actualizada")

    def close(self) -> None:
        if not self._db.is_closed():
            self._db.close()
