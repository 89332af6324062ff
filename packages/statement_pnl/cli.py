"""CLI for the ``statement_pnl`` package.

A Typer console interface over :func:`statement_pnl.batch.load_statements`.
Environment variables (``STATEMENT_PNL_LOG_LEVEL``,
``STATEMENT_PNL_MAX_WORKERS``, ``STATEMENT_PNL_PAGE_SIZE``) may be supplied
through a local ``.env`` which is loaded with ``python-dotenv`` before any
command runs. Business logic lives in the library modules.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo, OptionInfo

from .aggregate import (
    DEFAULT_PAGE_SIZE,
    TypeFilter,
    active_subset,
    distinct_types,
    page_count,
    paginate,
)
from .batch import BatchResult, load_statements
from .errors import StatementError
from .logging_setup import configure_logging
from .report import build_report, format_currency


# ---- Small module-level helpers used by CLI commands -------------------------


def _resolve_page_size(page_size: int | None) -> int:
    """Explicit option, then ``STATEMENT_PNL_PAGE_SIZE``, then the default."""

    if page_size is not None:
        return page_size
    env_val = os.getenv("STATEMENT_PNL_PAGE_SIZE")
    try:
        value = int(env_val) if env_val else None
    except ValueError:
        value = None
    if value is not None and value > 0:
        return value
    return DEFAULT_PAGE_SIZE


def _load_or_report(files: Sequence[Path]) -> BatchResult | None:
    """Load a batch, printing a short error to stderr on failure."""

    try:
        return load_statements(files)
    except StatementError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def _filter_from(batch: BatchResult, exclude_types: Sequence[str] | None) -> TypeFilter:
    type_filter = TypeFilter.seed(distinct_types(batch.transactions))
    for t in exclude_types or ():
        type_filter.disable(t)
    return type_filter


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Compute profit and loss from bank and credit-card CSV statement exports.",
)

# Module-level argument/option objects to satisfy ruff B008.
FILES_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="One or more statement CSV files (non-.csv names are ignored).",
    dir_okay=False,
    exists=False,  # missing files surface as a batch read error
)
EXCLUDE_TYPE_OPTION: OptionInfo = typer.Option(
    ...,
    "--exclude-type",
    "-x",
    help="Transaction type to leave out of listings and totals (repeatable).",
)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Override STATEMENT_PNL_LOG_LEVEL (e.g. DEBUG, WARNING)."
    ),
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


@app.command("transactions")
def transactions_cmd(
    files: Annotated[list[Path], FILES_ARGUMENT],
    exclude_types: Annotated[list[str] | None, EXCLUDE_TYPE_OPTION] = None,
    page: int = typer.Option(1, min=1, help="1-indexed page to print."),
    page_size: int | None = typer.Option(
        None, min=1, help="Rows per page (falls back to STATEMENT_PNL_PAGE_SIZE, then 20)."
    ),
) -> None:
    """Print one page of the active transactions as tab-separated rows."""

    batch = _load_or_report(files)
    if batch is None:
        raise typer.Exit(1)

    size = _resolve_page_size(page_size)
    active = active_subset(batch.transactions, _filter_from(batch, exclude_types))
    pages = page_count(len(active), size)
    for tx in paginate(active, page, size):
        typer.echo(f"{tx.date}\t{tx.description}\t{tx.type}\t{format_currency(tx.amount)}")
    typer.echo(f"Page {page} of {pages}")


@app.command("types")
def types_cmd(files: Annotated[list[Path], FILES_ARGUMENT]) -> None:
    """Print the distinct transaction types found in the batch."""

    batch = _load_or_report(files)
    if batch is None:
        raise typer.Exit(1)
    for t in distinct_types(batch.transactions):
        typer.echo(t)


@app.command("summary")
def summary_cmd(
    files: Annotated[list[Path], FILES_ARGUMENT],
    exclude_types: Annotated[list[str] | None, EXCLUDE_TYPE_OPTION] = None,
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
) -> None:
    """Print revenue, expense, and net over the active transactions."""

    batch = _load_or_report(files)
    if batch is None:
        raise typer.Exit(1)

    report = build_report(batch, _filter_from(batch, exclude_types))
    if as_json:
        typer.echo(report.model_dump_json())
        return

    plural = "" if report.files_loaded == 1 else "s"
    typer.echo(
        f"Loaded {report.transaction_count} transactions from "
        f"{report.files_loaded} file{plural}"
    )
    typer.echo(f"Revenue:\t{format_currency(report.revenue)}")
    typer.echo(f"Expense:\t{format_currency(report.expense)}")
    typer.echo(f"Net:\t{format_currency(report.net)}")


if __name__ == "__main__":  # pragma: no cover
    app()
