import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError

from core.domain.errors import NotFoundError, PersistenceError
from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy, TaskRepository, check_fields
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.session.db import (
    build_engine,
    build_session_factory,
    init_db,
)
from infrastructure.timestamps import as_utc, to_naive_utc

logger = logging.getLogger(__name__)


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        description=model.description,
        is_completed=model.is_completed,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine if engine is not None else build_engine()
        self._session_factory = build_session_factory(self._engine)
        try:
            init_db(self._engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"init falló: {e}") from e
        logger.info("SqlAlchemyTaskRepository inicializado")

    def insert(self, task: Task) -> int:
        session = self._session_factory()
        try:
            model = TaskModel(
                title=task.title,
                description=task.description,
                is_completed=task.is_completed,
                created_at=to_naive_utc(task.created_at),
                updated_at=to_naive_utc(task.updated_at),
            )
            session.add(model)
            session.commit()
            logger.info(f"✓ Tarea {model.id} insertada")
            return model.id
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"✗ SQLAlchemy falló en insert: {e}")
            raise PersistenceError(f"insert falló: {e}") from e
        finally:
            session.close()

    def query_where(
        self,
        filters: Mapping[str, Any],
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Task]:
        check_fields(filters)
        check_fields(o.field for o in order_by)

        stmt = select(TaskModel).filter_by(**filters)
        if order_by:
            stmt = stmt.order_by(
                *[
                    getattr(TaskModel, o.field).desc()
                    if o.descending
                    else getattr(TaskModel, o.field).asc()
                    for o in order_by
                ]
            )
        if limit is not None:
            stmt = stmt.limit(limit)

        session = self._session_factory()
        try:
            return [_to_domain(model) for model in session.scalars(stmt).all()]
        except SQLAlchemyError as e:
            logger.error(f"✗ SQLAlchemy falló en query_where: {e}")
            raise PersistenceError(f"query_where falló: {e}") from e
        finally:
            session.close()

    def get_by_id(self, task_id: int) -> Task | None:
        session = self._session_factory()
        try:
            model = session.get(TaskModel, task_id)
            if model is None:
                return None
            return _to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"✗ SQLAlchemy falló en get_by_id: {e}")
            raise PersistenceError(f"get_by_id falló: {e}") from e
        finally:
            session.close()

    def update(self, task: Task) -> None:
        session = self._session_factory()
        try:
            model = session.get(TaskModel, task.id)
            if model is None:
                raise NotFoundError(task.id)

            model.title = task.title
            model.description = task.description
            model.is_completed = task.is_completed
            model.updated_at = to_naive_utc(task.updated_at)

            session.commit()
            logger.info(f"✓ Tarea {task.id} actualizada")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"✗ SQLAlchemy falló en update: {e}")
            raise PersistenceError(f"update falló: {e}") from e
        finally:
            session.close()

    def close(self) -> None:
        self._engine.dispose()
