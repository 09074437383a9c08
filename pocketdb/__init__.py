"""
pocketdb: a minimal in-memory SQL statement executor.

    >>> from pocketdb import Database
    >>> db = Database()
    >>> db.execute("CREATE TABLE users (id INTEGER UNIQUE, name TEXT)").message
    'CREATE TABLE statement done'
"""

from .catalog import Column, ColumnType, Table
from .db import Database, execute
from .parser import QueryKind, SQLQuery
from .result import CommandOk

__all__ = [
    "Column",
    "ColumnType",
    "CommandOk",
    "Database",
    "QueryKind",
    "SQLQuery",
    "Table",
    "execute",
]
