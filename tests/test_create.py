import pytest

from pocketdb import ColumnType, Database
from pocketdb.errors import DuplicateColumn, DuplicateTable, MalformedStatement, UnknownColumn


def test_create_table_registers_columns_in_order():
    db = Database()
    res = db.execute("CREATE TABLE users(id INTEGER UNIQUE, name TEXT)")

    assert res.message == "CREATE TABLE statement done"
    assert res.rows_affected == 0
    assert db.has_table("users")

    table = db.get_table("users")
    assert [c.name for c in table.columns] == ["id", "name"]
    assert table.columns[0].typ is ColumnType.INTEGER
    assert table.columns[0].unique
    assert not table.columns[0].primary_key
    assert table.columns[1].typ is ColumnType.TEXT
    assert not table.columns[1].is_unique
    assert table.row_count == 0


def test_duplicate_table_keeps_first_schema():
    db = Database()
    db.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT);")

    with pytest.raises(DuplicateTable):
        db.execute("CREATE TABLE users (email TEXT);")

    assert db.table_names() == ["users"]
    assert db.get_table("users").column_names() == ["id", "name"]


def test_table_names_are_case_sensitive():
    db = Database()
    db.execute("CREATE TABLE users (id INTEGER)")
    db.execute("CREATE TABLE Users (id INTEGER)")

    assert db.table_names() == ["users", "Users"]


def test_create_if_not_exists_is_a_no_op_for_existing_table():
    db = Database()
    db.execute("CREATE TABLE users (id INTEGER)")
    db.execute("INSERT INTO users (id) VALUES (1)")

    res = db.execute("CREATE TABLE IF NOT EXISTS users (other TEXT)")

    assert res.message == "CREATE TABLE statement done"
    assert db.get_table("users").column_names() == ["id"]
    assert db.get_table("users").row_count == 1


def test_column_constraints_and_types():
    db = Database()
    db.execute(
        "CREATE TABLE items ("
        "id INTEGER PRIMARY KEY, sku VARCHAR(20) UNIQUE NOT NULL, price REAL, active BOOLEAN"
        ")"
    )
    table = db.get_table("items")

    id_col, sku, price, active = table.columns
    assert id_col.primary_key and id_col.is_unique and id_col.is_not_null
    assert sku.typ is ColumnType.TEXT and sku.unique and sku.not_null
    assert price.typ is ColumnType.REAL
    assert active.typ is ColumnType.BOOLEAN


def test_table_level_primary_key_marks_column():
    db = Database()
    db.execute("CREATE TABLE t (id INTEGER, name TEXT, PRIMARY KEY (id))")

    table = db.get_table("t")
    assert table.get_column("id").primary_key
    assert not table.get_column("name").primary_key


def test_table_level_key_on_undefined_column():
    db = Database()
    with pytest.raises(UnknownColumn) as excinfo:
        db.execute("CREATE TABLE t (a INTEGER, UNIQUE (b))")
    assert excinfo.value.columns == ["b"]
    assert not db.has_table("t")


def test_two_primary_key_columns_rejected():
    db = Database()
    with pytest.raises(MalformedStatement):
        db.execute("CREATE TABLE t (a INTEGER PRIMARY KEY, b INTEGER PRIMARY KEY)")
    assert not db.has_table("t")


def test_duplicate_column_name_rejected():
    db = Database()
    with pytest.raises(DuplicateColumn):
        db.execute("CREATE TABLE t (id INTEGER, id TEXT)")
    assert not db.has_table("t")


def test_create_without_column_list_is_malformed():
    db = Database()
    with pytest.raises(MalformedStatement):
        db.execute("CREATE TABLE t AS SELECT 1")
    assert not db.has_table("t")


def test_unsupported_column_type_is_malformed():
    db = Database()
    with pytest.raises(MalformedStatement):
        db.execute("CREATE TABLE events (happened DATE)")
    assert not db.has_table("events")
