"""
pocketdb/__main__.py

Package entry point for running pocketdb as a module:

    python -m pocketdb [-v|--verbose]

This also serves as the target for the console script entry point defined in
pyproject.toml:

    pocketdb [-v|--verbose]
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Entry point for `python -m pocketdb` and the installed `pocketdb` command.

    Returns:
        Exit code (0 for normal exit).
    """
    from .repl import main as repl_main

    return int(repl_main(sys.argv))


if __name__ == "__main__":
    raise SystemExit(main())
