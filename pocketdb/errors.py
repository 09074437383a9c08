"""
pocketdb/errors.py

Centralized exception types for pocketdb.

This module defines:
- A common base exception for all engine errors
- A lightweight Position structure for reporting parse errors with line/column context
- Specialized error types raised by the parser wrapper, the translators, the
  executor and the table model
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class PocketDBError(Exception):
    """
    Base class for all pocketdb errors.

    Catching this exception allows callers (REPL, embedding code) to handle all
    engine errors without accidentally swallowing unrelated system exceptions.
    """


@dataclass(frozen=True)
class Position:
    """
    Represents a location in an input SQL string.

    Attributes:
        line: 1-based line number
        col:  1-based column number
    """
    line: int
    col: int


class ParseError(PocketDBError):
    """
    Raised when the SQL parser rejects the input text.

    Args:
        message: Parser diagnostic.
        position: Optional Position indicating where the error occurred.
    """

    def __init__(self, message: str, position: Position | None = None):
        self.message = message
        self.position = position
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.position is None:
            return f"ParseError: {self.message}"
        return f"ParseError at line {self.position.line}, col {self.position.col}: {self.message}"


class UnsupportedInput(PocketDBError):
    """Raised when the input does not contain exactly one statement."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Expected a single SQL statement, but got {count}; "
            "only one statement per call is supported"
        )


class MalformedStatement(PocketDBError):
    """
    Raised when a parsed statement does not have the shape its translator expects.

    Examples:
      - CREATE TABLE without a column definition list
      - INSERT ... SELECT instead of INSERT ... VALUES
      - A column type or constraint this engine does not model
    """


class StatementNotImplemented(PocketDBError):
    """Raised for statements the parser accepts but the executor does not handle."""


class ExecutionError(PocketDBError):
    """
    Raised when a statement is well formed but cannot be applied to the database.

    Subclasses name the specific failure so callers can react to it.
    """


class DuplicateTable(ExecutionError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Can not create table, because table '{table_name}' already exists")


class DuplicateColumn(ExecutionError):
    def __init__(self, table_name: str, column_name: str):
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(f"Duplicate column name '{column_name}' in table '{table_name}'")


class UnknownTable(ExecutionError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' does not exist")


class UnknownColumn(ExecutionError):
    def __init__(self, table_name: str, columns: list[str]):
        self.table_name = table_name
        self.columns = list(columns)
        names = ", ".join(self.columns)
        super().__init__(f"Unknown column(s) in table '{table_name}': {names}")


class ArityMismatch(ExecutionError):
    def __init__(self, value_count: int, column_count: int):
        self.value_count = value_count
        self.column_count = column_count
        super().__init__(f"{value_count} values for {column_count} columns")


class TypeMismatch(ExecutionError):
    def __init__(self, table_name: str, column_name: str, expected: str, value: Any):
        self.table_name = table_name
        self.column_name = column_name
        self.expected = expected
        self.value = value
        super().__init__(f"Type error: {table_name}.{column_name} expects {expected}, got {value!r}")


class ConstraintError(PocketDBError):
    """
    Raised when a data integrity constraint is violated.

    Examples:
      - PRIMARY KEY duplicate
      - UNIQUE duplicate
      - NOT NULL violation
    """


class UniqueConstraintViolation(ConstraintError):
    def __init__(self, table_name: str, column_name: str, value: Any):
        self.table_name = table_name
        self.column_name = column_name
        self.value = value
        super().__init__(
            f"Unique key constraint violation: duplicate value {value!r} for {table_name}.{column_name}"
        )


class NotNullViolation(ConstraintError):
    def __init__(self, table_name: str, column_name: str):
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(f"NOT NULL constraint failed: {table_name}.{column_name}")
