"""
pocketdb/query.py

Translators from sqlglot statement ASTs into validated request objects.

The executor never inspects the sqlglot tree for CREATE TABLE / INSERT beyond
classification; it hands the statement to build_create_query() or
build_insert_query() and works with the owned value objects they return.

Supported shapes:
    CREATE TABLE [IF NOT EXISTS] <name> ( <coldef>, ... [, PRIMARY KEY (<col>)] [, UNIQUE (<col>)] )
        <coldef> := <name> <type> [PRIMARY KEY] [UNIQUE] [NOT NULL] [NULL]
    INSERT INTO <name> [( <col>, ... )] VALUES ( <literal>, ... ) [, ( ... )]*

Literals: integers, reals, strings, TRUE/FALSE, NULL, negated numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlglot import exp

from .catalog import ColumnType
from .errors import MalformedStatement, UnknownColumn
from .parser import DIALECT


@dataclass(frozen=True)
class ColumnSpec:
    """
    Column definition as written in CREATE TABLE.

    Attributes:
        name: Column name.
        typ: Declared ColumnType.
        unique: Whether UNIQUE was declared.
        primary_key: Whether PRIMARY KEY was declared.
        not_null: Whether NOT NULL was declared.
    """
    name: str
    typ: ColumnType
    unique: bool = False
    primary_key: bool = False
    not_null: bool = False


@dataclass(frozen=True)
class CreateQuery:
    """Validated CREATE TABLE request."""
    table_name: str
    columns: list[ColumnSpec]
    if_not_exists: bool = False


@dataclass(frozen=True)
class InsertQuery:
    """
    Validated INSERT request.

    Attributes:
        table_name: Target table.
        columns: Target column names as written; empty when the statement has no column list.
        rows: One tuple of values per VALUES group, in source order.
    """
    table_name: str
    columns: list[str]
    rows: list[tuple[Any, ...]] = field(default_factory=list)


# ---------- helpers ----------

def _sql(node: exp.Expression) -> str:
    return node.sql(dialect=DIALECT)


def _table_name(node: exp.Expression | None, stmt_kind: str) -> str:
    if not isinstance(node, exp.Table) or not node.name:
        raise MalformedStatement(f"{stmt_kind} requires a table name")
    return node.name


def _key_column_name(node: exp.Expression) -> str:
    """Column name inside a table-level key constraint; entries may be wrapped in Ordered."""
    if isinstance(node, exp.Ordered):
        node = node.this
    return node.name


def _single_key_column(names: list[str], constraint: str) -> str:
    if len(names) != 1:
        raise MalformedStatement(f"Only single-column {constraint} constraints are supported")
    return names[0]


def _column_spec(node: exp.ColumnDef) -> ColumnSpec:
    name = node.name
    kind = node.args.get("kind")
    if not isinstance(kind, exp.DataType):
        raise MalformedStatement(f"Column '{name}' has no type")

    typ = ColumnType.from_sql_type(kind.this.name)
    if typ is None:
        raise MalformedStatement(f"Unsupported type for column '{name}': {_sql(kind)}")

    unique = False
    primary_key = False
    not_null = False

    for constraint in node.args.get("constraints") or []:
        ckind = constraint.args.get("kind") if isinstance(constraint, exp.ColumnConstraint) else constraint
        if isinstance(ckind, exp.PrimaryKeyColumnConstraint):
            primary_key = True
        elif isinstance(ckind, exp.UniqueColumnConstraint):
            unique = True
        elif isinstance(ckind, exp.NotNullColumnConstraint):
            # Plain NULL parses as NotNullColumnConstraint(allow_null=True)
            not_null = not ckind.args.get("allow_null")
        else:
            raise MalformedStatement(f"Unsupported constraint on column '{name}': {_sql(constraint)}")

    return ColumnSpec(name=name, typ=typ, unique=unique, primary_key=primary_key, not_null=not_null)


def _literal_value(node: exp.Expression) -> Any:
    """
    Convert a VALUES item into a Python value.

    Returns:
        int | float | str | bool | None

    Raises:
        MalformedStatement if the item is not a supported literal.
    """
    if isinstance(node, exp.Paren):
        return _literal_value(node.this)
    if isinstance(node, exp.Null):
        return None
    if isinstance(node, exp.Boolean):
        return bool(node.this)
    if isinstance(node, exp.Literal):
        if node.is_string:
            return node.this
        text = node.this
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise MalformedStatement(f"Invalid numeric literal: {text}") from None
    if isinstance(node, exp.Neg):
        value = _literal_value(node.this)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return -value
    raise MalformedStatement(f"Unsupported value in INSERT: {_sql(node)}")


# ---------- translators ----------

def build_create_query(stmt: exp.Create) -> CreateQuery:
    """
    Translate a CREATE TABLE statement.

    Table-level PRIMARY KEY (col) / UNIQUE (col) constraints are folded into
    the named column's flags; the column must exist in the definition list.

    Raises:
        MalformedStatement: if the statement does not carry column definitions
            in a supported shape.
        UnknownColumn: if a table-level key names a column that is not defined.
    """
    schema = stmt.this
    if not isinstance(schema, exp.Schema):
        raise MalformedStatement("CREATE TABLE requires a column definition list")
    table_name = _table_name(schema.this, "CREATE TABLE")

    columns: list[ColumnSpec] = []
    table_pk: list[str] = []
    table_unique: list[str] = []

    for node in schema.expressions:
        if isinstance(node, exp.ColumnDef):
            columns.append(_column_spec(node))
        elif isinstance(node, exp.PrimaryKey):
            names = [_key_column_name(e) for e in node.expressions]
            table_pk.append(_single_key_column(names, "PRIMARY KEY"))
        elif isinstance(node, exp.UniqueColumnConstraint) and isinstance(node.this, exp.Schema):
            names = [_key_column_name(e) for e in node.this.expressions]
            table_unique.append(_single_key_column(names, "UNIQUE"))
        else:
            raise MalformedStatement(f"Unsupported table element in CREATE TABLE: {_sql(node)}")

    if not columns:
        raise MalformedStatement("CREATE TABLE requires at least one column")

    if table_pk or table_unique:
        declared = {c.name for c in columns}
        for name in table_pk + table_unique:
            if name not in declared:
                raise UnknownColumn(table_name, [name])
        columns = [
            ColumnSpec(
                name=c.name,
                typ=c.typ,
                unique=c.unique or c.name in table_unique,
                primary_key=c.primary_key or c.name in table_pk,
                not_null=c.not_null,
            )
            for c in columns
        ]

    return CreateQuery(
        table_name=table_name,
        columns=columns,
        if_not_exists=bool(stmt.args.get("exists")),
    )


def build_insert_query(stmt: exp.Insert) -> InsertQuery:
    """
    Translate an INSERT ... VALUES statement.

    Raises:
        MalformedStatement: if the source is not a VALUES list, a value is not a
            literal, or a target column is named twice.
    """
    target = stmt.this
    if isinstance(target, exp.Schema):
        table_name = _table_name(target.this, "INSERT")
        columns = [c.name for c in target.expressions]
    else:
        table_name = _table_name(target, "INSERT")
        columns = []

    seen: set[str] = set()
    for c in columns:
        if c in seen:
            raise MalformedStatement(f"Column '{c}' specified more than once in INSERT")
        seen.add(c)

    source = stmt.expression
    if not isinstance(source, exp.Values):
        raise MalformedStatement("INSERT requires a VALUES clause")

    rows: list[tuple[Any, ...]] = []
    for group in source.expressions:
        items = group.expressions if isinstance(group, exp.Tuple) else [group]
        rows.append(tuple(_literal_value(v) for v in items))

    return InsertQuery(table_name=table_name, columns=columns, rows=rows)
