"""
pocketdb/result.py

Result object returned by Database.execute().

Every supported statement completes with a CommandOk; SELECT is acknowledged
without producing rows, so there is no row-returning result type yet.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandOk:
    """
    Represents successful execution of a statement.

    Attributes:
        rows_affected: Number of rows inserted (0 for every other statement).
        message: Human-readable status message, e.g. "INSERT statement done".
    """
    rows_affected: int = 0
    message: str = "OK"

    def __str__(self) -> str:
        return self.message
