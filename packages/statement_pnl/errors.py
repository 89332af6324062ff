"""Exceptions surfaced to callers of the batch loader.

Content problems inside a statement (unknown layout, bad amount) are handled
by omission in :mod:`statement_pnl.parser` and never raise. Only conditions
that leave the caller without a usable batch are exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence


class StatementError(Exception):
    """Base class for batch-level statement failures."""


class NoStatementFilesError(StatementError):
    def __init__(self, message: str = "No CSV files found. Please select CSV files.") -> None:
        super().__init__(message)


class NoTransactionsFoundError(StatementError):
    def __init__(
        self,
        message: str = "No transactions found in CSV files. Please check the file format.",
    ) -> None:
        super().__init__(message)


class StatementReadError(StatementError):
    """One or more files in a batch could not be read; nothing was committed."""

    def __init__(self, failed: Sequence[str], causes: Sequence[BaseException] = ()) -> None:
        self.failed = list(failed)
        self.causes = list(causes)
        names = ", ".join(self.failed)
        super().__init__(f"Failed to read file(s): {names}")


__all__ = [
    "NoStatementFilesError",
    "NoTransactionsFoundError",
    "StatementError",
    "StatementReadError",
]
