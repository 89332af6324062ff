"""Public interface for the ``statement_pnl`` package.

Parses bank and credit-card CSV statement exports into normalized
transactions and aggregates them into profit-and-loss totals. This module only
re-exports the stable import surface.
"""

from .aggregate import (
    DEFAULT_PAGE_SIZE,
    Totals,
    TypeFilter,
    active_subset,
    distinct_types,
    page_count,
    paginate,
    summarize,
)
from .batch import BatchResult, load_statements, parse_statement_texts, select_statement_files
from .errors import (
    NoStatementFilesError,
    NoTransactionsFoundError,
    StatementError,
    StatementReadError,
)
from .headers import HeaderIndex
from .models import (
    CreditCardTransaction,
    DepositAccountTransaction,
    GenericTransaction,
    StatementSchema,
    StatementTransaction,
    Transaction,
)
from .parser import classify_headers, parse_amount, parse_statement
from .report import StatementReport, build_report, format_currency
from .tokenizer import split_line

__all__ = [
    # Parsing
    "split_line",
    "HeaderIndex",
    "classify_headers",
    "parse_amount",
    "parse_statement",
    # Batches
    "BatchResult",
    "load_statements",
    "parse_statement_texts",
    "select_statement_files",
    # Aggregation
    "DEFAULT_PAGE_SIZE",
    "Totals",
    "TypeFilter",
    "active_subset",
    "distinct_types",
    "page_count",
    "paginate",
    "summarize",
    "StatementReport",
    "build_report",
    "format_currency",
    # Models / types
    "Transaction",
    "CreditCardTransaction",
    "DepositAccountTransaction",
    "GenericTransaction",
    "StatementSchema",
    "StatementTransaction",
    # Errors
    "StatementError",
    "NoStatementFilesError",
    "NoTransactionsFoundError",
    "StatementReadError",
]
