import pytest
from sqlglot import exp

from pocketdb import Database, QueryKind, SQLQuery, execute
from pocketdb.errors import (
    ParseError,
    PocketDBError,
    StatementNotImplemented,
    UnsupportedInput,
)
from pocketdb.exec import StatementKind, statement_kind
from pocketdb.parser import parse_sql


def test_execute_function_delegates_to_database():
    db = Database()
    res = execute("CREATE TABLE t (id INTEGER)", db)
    assert res.message == "CREATE TABLE statement done"
    assert db.has_table("t")


def test_invalid_sql_raises_parse_error():
    db = Database()
    with pytest.raises(ParseError) as excinfo:
        db.execute("SELECT (1")
    assert isinstance(excinfo.value, PocketDBError)
    assert db.tables == {}


@pytest.mark.parametrize("sql", ["hello", "hello world", "1 + 1", "foo(bar)"])
def test_bare_expression_is_not_a_statement(sql):
    db = Database()
    with pytest.raises(ParseError):
        db.execute(sql)
    assert db.tables == {}


def test_unterminated_string_raises_parse_error():
    with pytest.raises(ParseError):
        Database().execute("INSERT INTO t (name) VALUES ('abc")


def test_two_statements_rejected_and_nothing_created():
    db = Database()
    with pytest.raises(UnsupportedInput) as excinfo:
        db.execute("CREATE TABLE t(id INTEGER); CREATE TABLE u(id INTEGER)")

    assert excinfo.value.count == 2
    assert db.tables == {}


@pytest.mark.parametrize("sql", ["", "   ", ";"])
def test_empty_input_rejected(sql):
    with pytest.raises(UnsupportedInput) as excinfo:
        Database().execute(sql)
    assert excinfo.value.count == 0


def test_trailing_semicolon_is_a_single_statement():
    stmt = parse_sql("CREATE TABLE t (id INTEGER);")
    assert statement_kind(stmt) is StatementKind.CREATE_TABLE


@pytest.mark.parametrize(
    "sql, message",
    [
        ("SELECT * FROM users", "SELECT statement done"),
        ("UPDATE users SET name = 'z' WHERE id = 1", "UPDATE statement done"),
        ("DELETE FROM users WHERE id = 1", "DELETE statement done"),
    ],
)
def test_placeholder_statements_acknowledged_without_effect(sql, message):
    db = Database()
    db.execute("CREATE TABLE users (id INTEGER, name TEXT)")
    db.execute("INSERT INTO users (id, name) VALUES (1, 'a')")

    res = db.execute(sql)

    assert res.message == message
    assert res.rows_affected == 0
    assert db.get_table("users").rows == [[1, "a"]]


def test_select_on_missing_table_is_still_acknowledged():
    assert Database().execute("SELECT * FROM nowhere").message == "SELECT statement done"


@pytest.mark.parametrize(
    "sql",
    [
        "DROP TABLE users",
        "CREATE INDEX idx_id ON users (id)",
    ],
)
def test_other_statements_not_implemented(sql):
    db = Database()
    db.execute("CREATE TABLE users (id INTEGER)")
    with pytest.raises(StatementNotImplemented):
        db.execute(sql)
    assert db.table_names() == ["users"]


def test_statement_kind_classification():
    assert statement_kind(parse_sql("INSERT INTO t (a) VALUES (1)")) is StatementKind.INSERT
    assert statement_kind(parse_sql("SELECT 1 UNION SELECT 2")) is StatementKind.QUERY
    assert statement_kind(parse_sql("DROP TABLE t")) is None
    assert isinstance(parse_sql("DELETE FROM t"), exp.Delete)


@pytest.mark.parametrize(
    "command, kind",
    [
        ("create table t (id integer)", QueryKind.CREATE_TABLE),
        ("SELECT * FROM t", QueryKind.SELECT),
        ("insert into t values (1)", QueryKind.INSERT),
        ("update t set a = 1", QueryKind.UPDATE),
        ("delete from t", QueryKind.DELETE),
        ("drop table t", QueryKind.UNKNOWN),
        ("", QueryKind.UNKNOWN),
    ],
)
def test_sql_query_classifier(command, kind):
    q = SQLQuery.classify(command)
    assert q.kind is kind
    assert q.command == command
