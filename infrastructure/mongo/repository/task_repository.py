import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from core.domain.errors import NotFoundError, PersistenceError
from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy, TaskRepository, check_fields
from infrastructure.mongo.models.task import TaskMongo
from infrastructure.mongo.session.client import create_client, get_db

logger = logging.getLogger(__name__)

_COUNTER_ID = "tasks"


@contextmanager
def _persistence_errors(operacion: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.error(f"✗ MongoDB falló en {operacion}: {e}")
        raise PersistenceError(f"{operacion} falló: {e}") from e


def _mongo_field(name: str) -> str:
    return "_id" if name == "id" else name


class MongoTaskRepository(TaskRepository):
    """
    Implementación de TaskRepository usando MongoDB (Synchronous).

    Los ids son enteros secuenciales obtenidos de forma atómica del
    documento `counters.tasks`.
    """

    def __init__(
        self,
        client: MongoClient[Any] | None = None,
        db_name: str | None = None,
    ) -> None:
        self._client = client if client is not None else create_client()
        self.db = get_db(self._client, db_name)
        self.collection: Collection[Any] = self.db.tasks
        self.counters: Collection[Any] = self.db.counters
        logger.info("MongoTaskRepository inicializado")

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {"_id": _COUNTER_ID},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    def insert(self, task: Task) -> int:
        """
        Inserta la tarea con un id nuevo.

        Argumentos:
            task (Task): La tarea a guardar; su id se ignora.

        Retorna:
            int: El id asignado.
        """
        with _persistence_errors("insert"):
            task_id = self._next_id()
            doc = TaskMongo.from_domain(replace(task, id=task_id)).model_dump(
                by_alias=True
            )
            self.collection.insert_one(doc)
        logger.info(f"✓ Tarea {task_id} insertada en MongoDB")
        return task_id

    def query_where(
        self,
        filters: Mapping[str, Any],
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Task]:
        check_fields(filters)
        check_fields(o.field for o in order_by)

        with _persistence_errors("query_where"):
            cursor = self.collection.find(
                {_mongo_field(name): value for name, value in filters.items()}
            )
            if order_by:
                cursor = cursor.sort(
                    [
                        (_mongo_field(o.field), DESCENDING if o.descending else ASCENDING)
                        for o in order_by
                    ]
                )
            if limit is not None:
                cursor = cursor.limit(limit)
            return [TaskMongo(**doc).to_domain() for doc in cursor]

    def get_by_id(self, task_id: int) -> Task | None:
        """
        Obtiene una tarea por su ID.

        Retorna:
            Task | None: La tarea encontrada o None si no existe.
        """
        with _persistence_errors("get_by_id"):
            doc = self.collection.find_one({"_id": task_id})
        if not doc:
            return None
        return TaskMongo(**doc).to_domain()

    def update(self, task: Task) -> None:
        doc = TaskMongo.from_domain(task).model_dump(by_alias=True)
        doc.pop("_id")
        doc.pop("created_at")

        with _persistence_errors("update"):
            result = self.collection.update_one({"_id": task.id}, {"$set": doc})
        if result.matched_count == 0:
            raise NotFoundError(task.id)
        logger.info(f"✓ Tarea {task.id} actualizada en MongoDB")

    def close(self) -> None:
        self._client.close()
