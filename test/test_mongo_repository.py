from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pymongo import DESCENDING
from pymongo.errors import ServerSelectionTimeoutError

from core.domain.errors import NotFoundError, PersistenceError
from core.domain.models.task import Task
from core.domain.ports.task_repository import OrderBy
from infrastructure.mongo.repository.task_repository import MongoTaskRepository

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _doc(task_id: int, title: str, is_completed: bool = False) -> dict:
    return {
        "_id": task_id,
        "title": title,
        "description": None,
        "is_completed": is_completed,
        "created_at": T0,
        "updated_at": T0,
    }


@pytest.fixture
def mock_mongo_collection():
    return MagicMock()


@pytest.fixture
def mock_counters():
    counters = MagicMock()
    counters.find_one_and_update.return_value = {"_id": "tasks", "seq": 3}
    return counters


@pytest.fixture
def mongo_repository(mock_mongo_collection, mock_counters):
    repo = MongoTaskRepository(client=MagicMock())
    repo.collection = mock_mongo_collection
    repo.counters = mock_counters
    return repo


def test_insert_asigna_id_del_contador(mongo_repository, mock_mongo_collection, mock_counters):
    task = Task(title="Test Task", description="desc", created_at=T0, updated_at=T0)

    task_id = mongo_repository.insert(task)

    assert task_id == 3
    args, kwargs = mock_counters.find_one_and_update.call_args
    assert args[0] == {"_id": "tasks"}
    assert args[1] == {"$inc": {"seq": 1}}
    assert kwargs["upsert"] is True
    inserted = mock_mongo_collection.insert_one.call_args[0][0]
    assert inserted["_id"] == 3
    assert inserted["title"] == "Test Task"
    assert inserted["is_completed"] is False


def test_get_task_found(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = _doc(7, "Found Task")

    result = mongo_repository.get_by_id(7)

    mock_mongo_collection.find_one.assert_called_once_with({"_id": 7})
    assert result is not None
    assert result.id == 7
    assert result.title == "Found Task"
    assert result.created_at == T0


def test_get_task_not_found(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.return_value = None

    assert mongo_repository.get_by_id(8) is None


def test_get_reasigna_utc_a_fechas_naive(mongo_repository, mock_mongo_collection):
    doc = _doc(1, "Naive")
    doc["created_at"] = doc["updated_at"] = datetime(2024, 5, 1, 12, 0)
    mock_mongo_collection.find_one.return_value = doc

    result = mongo_repository.get_by_id(1)

    assert result.created_at == T0
    assert result.created_at.tzinfo == timezone.utc


def test_query_where_traduce_filtros_orden_y_limite(mongo_repository, mock_mongo_collection):
    cursor = mock_mongo_collection.find.return_value
    cursor.sort.return_value.limit.return_value = [_doc(2, "Task 2"), _doc(1, "Task 1")]

    results = mongo_repository.query_where(
        {"is_completed": False},
        order_by=[OrderBy("created_at", descending=True), OrderBy("id", descending=True)],
        limit=5,
    )

    mock_mongo_collection.find.assert_called_once_with({"is_completed": False})
    cursor.sort.assert_called_once_with([("created_at", DESCENDING), ("_id", DESCENDING)])
    cursor.sort.return_value.limit.assert_called_once_with(5)
    assert [t.id for t in results] == [2, 1]


def test_update_no_toca_created_at(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.update_one.return_value.matched_count = 1
    task = Task(id=4, title="Hecha", is_completed=True, created_at=T0, updated_at=T0)

    mongo_repository.update(task)

    args, _ = mock_mongo_collection.update_one.call_args
    assert args[0] == {"_id": 4}
    assert args[1]["$set"]["is_completed"] is True
    assert "created_at" not in args[1]["$set"]
    assert "_id" not in args[1]["$set"]


def test_update_inexistente_lanza_not_found(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.update_one.return_value.matched_count = 0
    task = Task(id=99, title="Fantasma", created_at=T0, updated_at=T0)

    with pytest.raises(NotFoundError):
        mongo_repository.update(task)


def test_error_de_pymongo_se_traduce(mongo_repository, mock_mongo_collection):
    mock_mongo_collection.find_one.side_effect = ServerSelectionTimeoutError("caída")

    with pytest.raises(PersistenceError, match="caída"):
        mongo_repository.get_by_id(1)


def test_close_cierra_el_cliente():
    client = MagicMock()
    repo = MongoTaskRepository(client=client)

    repo.close()

    client.close.assert_called_once()
