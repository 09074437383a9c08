"""
pocketdb/repl.py

Interactive REPL (Read-Eval-Print Loop) for pocketdb.

Responsibilities:
- Provide a CLI shell executing SQL statements against an in-memory Database.
- Support multiline SQL input until a semicolon ';' is entered outside of quotes.
- Provide small meta-commands for introspection:
    - .help
    - .exit / .quit
    - .tables
    - .schema <table>
    - .dump <table>

Usage:
    python -m pocketdb [-v|--verbose]

With --verbose the engine's diagnostic log output (schema listing after CREATE
TABLE, table dump after INSERT) is printed as well.
"""

from __future__ import annotations

import logging
import sys

try:
    import readline  # noqa: F401
except ImportError:
    # readline is optional; if missing, REPL still works.
    readline = None  # type: ignore[assignment]

from .db import Database
from .errors import PocketDBError

PROMPT = "pocketdb> "
PROMPT_CONT = "....> "

HELP_TEXT = """\
Meta commands:
  .help              show this help
  .tables            list tables
  .schema <table>    show table schema
  .dump <table>      show table rows
  .exit / .quit      exit

SQL statements end with ';', one statement at a time. Example:
  CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT UNIQUE NOT NULL);
  INSERT INTO users (id, email) VALUES (1, 'a@b.com'), (2, 'c@d.com');"""


def is_complete_statement(buf: str) -> bool:
    """
    Decide whether the current buffer contains a complete statement.

    A statement is considered complete when a semicolon ';' appears outside of
    single-quoted string literals.

    Args:
        buf: Current accumulated input buffer.

    Returns:
        True if complete, else False.
    """
    in_str = False
    for ch in buf:
        if ch == "'":
            in_str = not in_str
        elif ch == ";" and not in_str:
            return True
    return False


def cmd_tables(db: Database) -> None:
    """Meta-command: list all tables in creation order."""
    names = db.table_names()
    if not names:
        print("(no tables)")
        return
    for n in names:
        print(n)


def cmd_schema(db: Database, table: str) -> None:
    """Meta-command: print a table's schema."""
    t = db.get_table(table)
    if t is None:
        print(f"Table not found: {table}")
        return
    print(t.schema_text())


def cmd_dump(db: Database, table: str) -> None:
    """Meta-command: print a table's rows."""
    t = db.get_table(table)
    if t is None:
        print(f"Table not found: {table}")
        return
    print(t.data_text())


def handle_meta(db: Database, line: str) -> bool:
    """
    Run a meta command.

    Returns:
        False when the REPL should exit, True otherwise.
    """
    parts = line.split()
    cmd = parts[0].lower()

    if cmd in (".exit", ".quit"):
        return False

    if cmd == ".help":
        print(HELP_TEXT)
    elif cmd == ".tables":
        cmd_tables(db)
    elif cmd in (".schema", ".dump"):
        if len(parts) != 2:
            print(f"Usage: {cmd} <table>")
        elif cmd == ".schema":
            cmd_schema(db, parts[1])
        else:
            cmd_dump(db, parts[1])
    else:
        print(f"Unknown command: {cmd}. Type .help")
    return True


def run_statement(db: Database, sql: str) -> None:
    """Execute one buffered statement and print the outcome."""
    try:
        print(db.execute(sql).message)
    except PocketDBError as e:
        print(f"Error: {e}")
    except Exception as e:
        # Unexpected internal error; keep REPL alive but show message
        print(f"Internal error: {e}")


def repl(db: Database | None = None) -> int:
    """
    Run the interactive REPL.

    Args:
        db: Database to operate on; a fresh one is created if omitted.

    Returns:
        Process exit code (0 on normal exit).
    """
    db = db if db is not None else Database()
    print("pocketdb REPL (in-memory)")
    print("Type .help for commands. End SQL with ';'.")

    buf = ""
    while True:
        try:
            prompt = PROMPT if not buf else PROMPT_CONT
            line = input(prompt)
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            # Clear current buffer on Ctrl+C
            print()
            buf = ""
            continue

        line_stripped = line.strip()

        # Meta commands only apply if we're not in the middle of a multi-line SQL buffer.
        if not buf and line_stripped.startswith("."):
            if not handle_meta(db, line_stripped):
                return 0
            continue

        if not buf and not line_stripped:
            continue

        buf += line + "\n"
        if not is_complete_statement(buf):
            continue

        run_statement(db, buf)
        buf = ""


def main(argv: list[str]) -> int:
    """
    CLI entrypoint.

    Args:
        argv: sys.argv list.

    Returns:
        Exit code.
    """
    flags = set(argv[1:])
    unknown = flags - {"-v", "--verbose"}
    if unknown:
        print(f"Unknown argument(s): {' '.join(sorted(unknown))}", file=sys.stderr)
        print("Usage: pocketdb [-v|--verbose]", file=sys.stderr)
        return 2

    if flags:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    return repl()


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
