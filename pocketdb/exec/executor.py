"""
pocketdb/exec/executor.py

Statement execution engine for pocketdb.

Responsibilities:
- Classify a parsed sqlglot statement into a closed set of StatementKind values
- Dispatch each kind to exactly one handler:
    - CREATE TABLE: translate, check the name, register the table
    - INSERT: translate, check table/columns, apply tuples one by one
    - SELECT / UPDATE / DELETE: acknowledged without effect
- Reject every other statement with StatementNotImplemented

Multi-row INSERT is not atomic: each tuple is checked and appended on its own,
so when tuple k fails, tuples 1..k-1 stay in the table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from sqlglot import exp

from ..catalog import Table
from ..errors import ArityMismatch, StatementNotImplemented, UnknownColumn
from ..query import build_create_query, build_insert_query
from ..result import CommandOk

if TYPE_CHECKING:
    from ..db import Database

logger = logging.getLogger(__name__)


class StatementKind(Enum):
    """Statement kinds the executor knows how to handle."""
    CREATE_TABLE = "CREATE TABLE"
    QUERY = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def statement_kind(stmt: exp.Expression) -> StatementKind | None:
    """
    Classify a parsed statement.

    Returns:
        The StatementKind, or None for statements without a handler.
    """
    if isinstance(stmt, exp.Create):
        if str(stmt.args.get("kind") or "").upper() == "TABLE":
            return StatementKind.CREATE_TABLE
        return None
    if isinstance(stmt, exp.Insert):
        return StatementKind.INSERT
    if isinstance(stmt, exp.Query):
        return StatementKind.QUERY
    if isinstance(stmt, exp.Update):
        return StatementKind.UPDATE
    if isinstance(stmt, exp.Delete):
        return StatementKind.DELETE
    return None


def _describe(stmt: exp.Expression) -> str:
    if isinstance(stmt, exp.Create):
        return f"CREATE {stmt.args.get('kind') or ''}".strip()
    if isinstance(stmt, exp.Command):
        return str(stmt.this).upper()
    return stmt.key.upper()


@dataclass
class Executor:
    """
    Executes parsed statements against a Database.

    Args:
        database: The session's Database; borrowed for the duration of one call.
    """
    database: "Database"

    # --------------------------
    # public entry point
    # --------------------------

    def execute(self, stmt: exp.Expression) -> CommandOk:
        """
        Execute a single statement.

        Args:
            stmt: sqlglot statement AST.

        Returns:
            CommandOk with a message naming the completed statement kind.

        Raises:
            StatementNotImplemented for unhandled statement kinds; handler
            errors propagate unchanged.
        """
        kind = statement_kind(stmt)
        if kind is None:
            raise StatementNotImplemented(f"{_describe(stmt)} statement is not implemented")

        handlers: dict[StatementKind, Callable[[exp.Expression], CommandOk]] = {
            StatementKind.CREATE_TABLE: self._create_table,
            StatementKind.QUERY: self._select,
            StatementKind.INSERT: self._insert,
            StatementKind.UPDATE: self._update,
            StatementKind.DELETE: self._delete,
        }
        logger.debug("Dispatching %s statement", kind.value)
        result = handlers[kind](stmt)
        logger.debug("%s", result.message)
        return result

    # --------------------------
    # DDL
    # --------------------------

    def _create_table(self, stmt: exp.Create) -> CommandOk:
        """
        CREATE TABLE execution.

        - Translates the statement into a CreateQuery
        - Rejects an existing name (unless IF NOT EXISTS)
        - Builds the Table and registers it

        Returns:
            CommandOk
        """
        query = build_create_query(stmt)

        if query.if_not_exists and self.database.has_table(query.table_name):
            logger.debug("Table %s exists, skipping CREATE TABLE IF NOT EXISTS", query.table_name)
            return CommandOk(rows_affected=0, message="CREATE TABLE statement done")

        table = Table.from_query(query)
        self.database.add_table(table)
        logger.info("%s", table.schema_text())

        return CommandOk(rows_affected=0, message="CREATE TABLE statement done")

    # --------------------------
    # DML: INSERT
    # --------------------------

    def _insert(self, stmt: exp.Insert) -> CommandOk:
        """
        INSERT execution.

        - Validates table and target columns once for the whole statement
        - For each VALUES tuple: arity check, uniqueness check, then append

        Returns:
            CommandOk(rows_affected=<tuples applied>)
        """
        query = build_insert_query(stmt)
        table = self.database.require_table(query.table_name)

        columns = query.columns or table.column_names()
        missing = [c for c in columns if not table.has_column(c)]
        if missing:
            raise UnknownColumn(table.name, missing)

        inserted = 0
        for values in query.rows:
            if len(values) != len(columns):
                raise ArityMismatch(len(values), len(columns))
            table.check_unique_constraint(columns, values)
            table.insert_row(columns, values)
            inserted += 1

        logger.info("%s", table.data_text())

        return CommandOk(rows_affected=inserted, message="INSERT statement done")

    # --------------------------
    # SELECT / UPDATE / DELETE
    # --------------------------

    # Not implemented yet: these report success without reading or touching
    # the database.

    def _select(self, stmt: exp.Query) -> CommandOk:
        return CommandOk(rows_affected=0, message="SELECT statement done")

    def _update(self, stmt: exp.Update) -> CommandOk:
        return CommandOk(rows_affected=0, message="UPDATE statement done")

    def _delete(self, stmt: exp.Delete) -> CommandOk:
        return CommandOk(rows_affected=0, message="DELETE statement done")
