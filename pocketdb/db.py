"""
pocketdb/db.py

Public Database API for pocketdb.

Responsibilities:
- Own the table registry of one session (name -> Table, create-only)
- Provide a simple library interface:
    - Database()
    - db.execute(sql) -> CommandOk
    - execute(sql, db) -> CommandOk

Tables live in memory only; nothing is persisted and nothing is shared between
Database instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import Table
from .errors import DuplicateTable, UnknownTable
from .exec.executor import Executor
from .parser import parse_sql
from .result import CommandOk


@dataclass
class Database:
    """
    In-memory database.

    Attributes:
        tables: Mapping of table name -> Table. Lookups are exact and
            case-sensitive. Tables are added by CREATE TABLE and never removed.
    """
    tables: dict[str, Table] = field(default_factory=dict)

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def get_table(self, name: str) -> Table | None:
        """Return the (mutable) Table registered under `name`, or None."""
        return self.tables.get(name)

    def require_table(self, name: str) -> Table:
        """
        Fetch a table by name or raise UnknownTable.

        Args:
            name: Name of the table.

        Returns:
            Table.
        """
        table = self.tables.get(name)
        if table is None:
            raise UnknownTable(name)
        return table

    def add_table(self, table: Table) -> None:
        """
        Register a new table.

        Raises:
            DuplicateTable: if a table with the same name exists.
        """
        if self.has_table(table.name):
            raise DuplicateTable(table.name)
        self.tables[table.name] = table

    def table_names(self) -> list[str]:
        """Table names in creation order."""
        return list(self.tables)

    def execute(self, sql: str) -> CommandOk:
        """
        Execute a single SQL statement.

        Args:
            sql: SQL string containing exactly one statement (semicolon optional).

        Returns:
            CommandOk describing the completed statement.

        Raises:
            ParseError / UnsupportedInput: when the text is not exactly one valid statement.
            MalformedStatement / StatementNotImplemented: when the statement cannot be handled.
            ExecutionError / ConstraintError: on validation failure.
        """
        stmt = parse_sql(sql)
        return Executor(database=self).execute(stmt)


def execute(sql: str, database: Database) -> CommandOk:
    """Execute one SQL statement against `database`; see Database.execute()."""
    return database.execute(sql)
