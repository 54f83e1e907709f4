from .models import Base, KeyValueTable
from .operations import (
    create_new_sqlite_database,
    get_sqlite_engine,
    get_sqlite_session_factory,
)

__all__ = (
    "Base",
    "KeyValueTable",
    "create_new_sqlite_database",
    "get_sqlite_engine",
    "get_sqlite_session_factory",
)
