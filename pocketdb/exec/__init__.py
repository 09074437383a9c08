"""Statement execution for pocketdb."""

from .executor import Executor, StatementKind, statement_kind

__all__ = ["Executor", "StatementKind", "statement_kind"]
