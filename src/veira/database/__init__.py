"""Database layer for veira application."""

from veira.database.base import Database
from veira.database.factories import create_sqlite_database, create_memory_database

__all__ = ["Database", "create_sqlite_database", "create_memory_database"]
