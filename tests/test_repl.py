import builtins

from pocketdb import Database
from pocketdb.display import format_table
from pocketdb.repl import is_complete_statement, main, repl


def feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)


def test_is_complete_statement_ignores_semicolons_in_strings():
    assert not is_complete_statement("INSERT INTO t (a) VALUES ('x;y')")
    assert is_complete_statement("INSERT INTO t (a) VALUES ('x;y');")


def test_format_table_aligns_columns():
    out = format_table(["id", "name"], [[1, "alice"], [22, None]])
    lines = out.splitlines()
    assert lines[0] == "id | name"
    assert lines[1] == "---+------"
    assert lines[2] == "1  | alice"
    assert lines[3] == "22 |"


def test_repl_session(monkeypatch, capsys):
    db = Database()
    feed(
        monkeypatch,
        [
            "CREATE TABLE users (id INTEGER UNIQUE,",
            "  name TEXT);",
            "INSERT INTO users (id, name) VALUES (1, 'a');",
            "INSERT INTO users (id, name) VALUES (1, 'b');",
            ".tables",
            ".dump users",
            ".exit",
        ],
    )

    assert repl(db) == 0

    out = capsys.readouterr().out
    assert "CREATE TABLE statement done" in out
    assert "INSERT statement done" in out
    assert "Error: Unique key constraint violation" in out
    assert "(1 row(s))" in out
    assert db.get_table("users").row_count == 1


def test_repl_reports_unknown_meta_command(monkeypatch, capsys):
    feed(monkeypatch, [".bogus", ".schema missing"])
    assert repl(Database()) == 0
    out = capsys.readouterr().out
    assert "Unknown command: .bogus" in out
    assert "Table not found: missing" in out


def test_main_rejects_unknown_arguments(capsys):
    assert main(["pocketdb", "--nope"]) == 2
    assert "Usage" in capsys.readouterr().err
