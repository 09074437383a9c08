"""
pocketdb/parser.py

Thin wrapper around the sqlglot parser.

Responsibilities:
- Parse SQL text with a fixed dialect (SQLite)
- Translate sqlglot diagnostics into pocketdb ParseError with line/column positions
- Enforce the single-statement rule before anything is executed
- Provide the legacy keyword classifier (SQLQuery) for callers that only need a
  coarse category without parsing

Notes:
- Empty statements produced by stray semicolons (e.g. ";;") are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError as SqlglotParseError
from sqlglot.errors import TokenError

from .errors import ParseError, Position, UnsupportedInput

logger = logging.getLogger(__name__)

DIALECT = "sqlite"

# Top-level node classes that are statements; looked up by name since some
# were renamed across sqlglot releases (e.g. AlterTable -> Alter).
_STATEMENT_TYPES: tuple[type, ...] = tuple(
    getattr(exp, name)
    for name in (
        "Query", "DDL", "DML", "Create", "Drop", "Alter", "AlterTable",
        "Insert", "Update", "Delete", "Merge", "Command", "Pragma",
        "Transaction", "Commit", "Rollback", "Use", "Set", "Describe",
        "Analyze", "Cache", "Uncache", "Refresh", "Grant",
    )
    if isinstance(getattr(exp, name, None), type)
)


def _to_parse_error(error: SqlglotParseError | TokenError) -> ParseError:
    """Convert a sqlglot error into a ParseError, keeping the first reported location."""
    details = getattr(error, "errors", None) or []
    if details:
        first = details[0]
        line, col = first.get("line"), first.get("col")
        position = Position(int(line), int(col)) if line and col else None
        return ParseError(str(first.get("description") or error), position)
    return ParseError(str(error))


def parse_statements(sql: str) -> list[exp.Expression]:
    """
    Parse SQL text into a list of statement ASTs.

    Args:
        sql: SQL text, possibly containing several ';'-separated statements.

    Returns:
        Non-empty statements in source order.

    Raises:
        ParseError: if sqlglot cannot tokenize or parse the text.
    """
    try:
        parsed = sqlglot.parse(sql, read=DIALECT)
    except (SqlglotParseError, TokenError) as e:
        raise _to_parse_error(e) from e

    stmts = [stmt for stmt in parsed if stmt is not None]
    for stmt in stmts:
        # sqlglot accepts bare expressions ("hello", "1 + 1") at the top level
        if not isinstance(stmt, _STATEMENT_TYPES):
            raise ParseError(f"Expected a SQL statement, got: {stmt.sql(dialect=DIALECT)}")
    return stmts


def parse_sql(sql: str) -> exp.Expression:
    """
    Parse exactly one SQL statement.

    Args:
        sql: SQL string (trailing semicolon optional).

    Returns:
        The statement AST.

    Raises:
        ParseError: if parsing fails.
        UnsupportedInput: if the text holds zero or several statements.
    """
    stmts = parse_statements(sql)
    logger.debug("Parsed %d statement(s)", len(stmts))
    if len(stmts) != 1:
        raise UnsupportedInput(len(stmts))
    return stmts[0]


# ---------- legacy keyword classifier ----------

class QueryKind(Enum):
    """Coarse statement category derived from the leading keyword."""
    CREATE_TABLE = "create"
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SQLQuery:
    """
    Raw command string tagged with its QueryKind.

    Independent of the AST path: nothing here is parsed or validated.
    """
    kind: QueryKind
    command: str

    @classmethod
    def classify(cls, command: str) -> "SQLQuery":
        """Tag `command` by its first whitespace-separated word (case-insensitive)."""
        words = command.split()
        first = words[0].lower() if words else ""
        for kind in QueryKind:
            if kind is not QueryKind.UNKNOWN and kind.value == first:
                return cls(kind=kind, command=command)
        return cls(kind=QueryKind.UNKNOWN, command=command)
