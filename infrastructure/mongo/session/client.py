import os
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "task_tracker"


def create_client(mongo_uri: str | None = None) -> MongoClient[Any]:
    """
    Crea un cliente de MongoDB. Quien lo crea es responsable de cerrarlo.

    Los datetimes se leen con zona horaria (tz_aware=True).
    """
    uri = mongo_uri or os.getenv("MONGO_URI", DEFAULT_MONGO_URI)
    return MongoClient(uri, tz_aware=True)


def get_db(client: MongoClient[Any], db_name: str | None = None) -> Database[Any]:
    """
    Obtiene la base de datos de MongoDB.

    Retorna:
        Database: La instancia indicada por `db_name` o por MONGO_DB_NAME.
    """
    name = db_name or os.getenv("MONGO_DB_NAME", DEFAULT_DB_NAME)
    return client[name]
