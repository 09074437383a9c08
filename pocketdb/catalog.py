"""
pocketdb/catalog.py

In-memory schema and row storage for pocketdb.

Responsibilities:
- Model column types and per-column constraints (UNIQUE, PRIMARY KEY, NOT NULL)
- Hold a table's ordered schema and its rows in insertion order
- Enforce schema invariants on construction and data invariants on insert

Design notes:
- A row is a plain list aligned with the table's column order.
- Columns not named in an INSERT are stored as None.
- Only a single PRIMARY KEY column per table is supported; PRIMARY KEY implies
  UNIQUE and NOT NULL.
- UNIQUE ignores NULLs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

from .display import format_table
from .errors import (
    DuplicateColumn,
    MalformedStatement,
    NotNullViolation,
    TypeMismatch,
    UniqueConstraintViolation,
    UnknownColumn,
)

if TYPE_CHECKING:
    from .query import CreateQuery

# sqlglot DataType.Type member names grouped by the column type they map onto
_SQL_TYPE_NAMES: dict[str, set[str]] = {
    "INTEGER": {
        "INT", "BIGINT", "SMALLINT", "TINYINT", "MEDIUMINT",
        "UINT", "UBIGINT", "USMALLINT", "UTINYINT", "UMEDIUMINT",
    },
    "REAL": {"FLOAT", "DOUBLE", "DECIMAL"},
    "TEXT": {"TEXT", "VARCHAR", "CHAR", "NCHAR", "NVARCHAR", "TINYTEXT", "MEDIUMTEXT", "LONGTEXT"},
    "BOOLEAN": {"BOOLEAN"},
}


class ColumnType(Enum):
    """Column types supported by the table model."""
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BOOLEAN = "BOOLEAN"

    @classmethod
    def from_sql_type(cls, type_name: str) -> "ColumnType | None":
        """Map a parser type name (e.g. "INT", "VARCHAR") onto a ColumnType, or None if unsupported."""
        upper = type_name.upper()
        for typ in cls:
            if upper == typ.value or upper in _SQL_TYPE_NAMES[typ.value]:
                return typ
        return None

    def accepts(self, value: Any) -> bool:
        """
        Check whether a non-NULL Python value conforms to this type.

        bool is a subclass of int in Python, so it is rejected explicitly for
        the numeric types.
        """
        if self is ColumnType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is ColumnType.REAL:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is ColumnType.TEXT:
            return isinstance(value, str)
        return isinstance(value, bool)


@dataclass(frozen=True)
class Column:
    """
    Column definition of a table.

    Attributes:
        name: Column name.
        typ: Declared ColumnType.
        unique: Whether UNIQUE is required.
        primary_key: Whether this column is the (single) PRIMARY KEY.
        not_null: Whether NOT NULL is required.
    """
    name: str
    typ: ColumnType
    unique: bool = False
    primary_key: bool = False
    not_null: bool = False

    @property
    def is_unique(self) -> bool:
        return self.unique or self.primary_key

    @property
    def is_not_null(self) -> bool:
        return self.not_null or self.primary_key

    def flags(self) -> list[str]:
        """Constraint keywords in display order."""
        out: list[str] = []
        if self.primary_key:
            out.append("PRIMARY KEY")
        if self.unique:
            out.append("UNIQUE")
        if self.not_null:
            out.append("NOT NULL")
        return out


@dataclass
class Table:
    """
    A table: ordered schema plus rows in insertion order.

    Attributes:
        name: Table name.
        columns: Column definitions in declaration order.
        rows: Stored rows; each row has exactly len(columns) values.
    """
    name: str
    columns: list[Column]
    rows: list[list[Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for c in self.columns:
            if c.name in seen:
                raise DuplicateColumn(self.name, c.name)
            seen.add(c.name)

        if len([c for c in self.columns if c.primary_key]) > 1:
            raise MalformedStatement(f"Only one PRIMARY KEY column is supported in table '{self.name}'")

    @classmethod
    def from_query(cls, query: "CreateQuery") -> "Table":
        """Build an empty table from a CREATE TABLE request, preserving column order."""
        columns = [
            Column(
                name=c.name,
                typ=c.typ,
                unique=c.unique,
                primary_key=c.primary_key,
                not_null=c.not_null,
            )
            for c in query.columns
        ]
        return cls(name=query.table_name, columns=columns)

    # ---------- schema lookup ----------

    def column_names(self) -> list[str]:
        """Return column names in declaration order."""
        return [c.name for c in self.columns]

    def has_column(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)

    def get_column(self, name: str) -> Column | None:
        """Return Column by name, or None if not found."""
        for c in self.columns:
            if c.name == name:
                return c
        return None

    def column_index(self, name: str) -> int:
        """
        Position of a column in the schema.

        Raises:
            UnknownColumn: if the column does not exist.
        """
        for i, c in enumerate(self.columns):
            if c.name == name:
                return i
        raise UnknownColumn(self.name, [name])

    @property
    def row_count(self) -> int:
        return len(self.rows)

    # ---------- constraint enforcement ----------

    def check_unique_constraint(self, column_names: Sequence[str], values: Sequence[Any]) -> None:
        """
        Check a candidate tuple against UNIQUE / PRIMARY KEY columns.

        Only columns among `column_names` are checked; each unique column is
        compared independently against every stored row. NULLs never collide,
        and a value the column type does not accept never equals a stored one
        (TRUE is not a duplicate of 1 in an INTEGER column); insert_row()
        reports it as a TypeMismatch instead.

        Args:
            column_names: Target columns, aligned with `values`.
            values: Candidate values.

        Raises:
            UniqueConstraintViolation: on the first duplicate found.
        """
        for name, value in zip(column_names, values):
            col = self.get_column(name)
            if col is None or not col.is_unique or value is None or not col.typ.accepts(value):
                continue
            pos = self.column_index(name)
            for row in self.rows:
                if row[pos] == value:
                    raise UniqueConstraintViolation(self.name, name, value)

    def _validate_row(self, row: list[Any]) -> None:
        """Type and NOT NULL checks for a full, schema-aligned row."""
        for col, val in zip(self.columns, row):
            if val is None:
                if col.is_not_null:
                    raise NotNullViolation(self.name, col.name)
                continue
            if not col.typ.accepts(val):
                raise TypeMismatch(self.name, col.name, col.typ.value, val)

    def insert_row(self, column_names: Sequence[str], values: Sequence[Any]) -> list[Any]:
        """
        Append a row built from the named columns.

        Columns not named are stored as None. The row is validated (types,
        NOT NULL) before it is appended; uniqueness is checked separately by
        check_unique_constraint().

        Args:
            column_names: Target columns.
            values: Values aligned with `column_names`.

        Returns:
            The stored row.

        Raises:
            UnknownColumn / TypeMismatch / NotNullViolation.
        """
        row: list[Any] = [None] * len(self.columns)
        for name, value in zip(column_names, values):
            row[self.column_index(name)] = value

        self._validate_row(row)
        self.rows.append(row)
        return row

    # ---------- diagnostics ----------

    def schema_text(self) -> str:
        """Render the schema as a column/type/constraints table."""
        rows = [[c.name, c.typ.value, " ".join(c.flags())] for c in self.columns]
        return f"TABLE {self.name}\n" + format_table(["column", "type", "constraints"], rows)

    def data_text(self) -> str:
        """Render all stored rows under the column headers."""
        return format_table(self.column_names(), self.rows) + f"\n({self.row_count} row(s))"
