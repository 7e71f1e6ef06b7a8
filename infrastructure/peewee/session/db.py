import os

from peewee import Database
from playhouse.db_url import connect

DEFAULT_DATABASE_URL = "sqlite:///tasks.db"


def open_database(database_url: str | None = None) -> Database:
    """
    Abre la BDD indicada por `database_url` o por la variable DATABASE_URL.

    Acepta cualquier URL soportada por playhouse (sqlite, postgresql, mysql).
    """
    url = database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    return connect(url)
