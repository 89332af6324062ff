"""Multi-file statement ingestion.

Files are read concurrently on a small thread pool, then parsed and stitched
together in submission order regardless of which read finished first. The
batch is all-or-nothing at the I/O level: if any read fails, no transactions
are returned. Parse-level gaps (skipped lines, a file with no recognizable
layout) never fail the batch.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .errors import NoStatementFilesError, NoTransactionsFoundError, StatementReadError
from .logging_setup import get_logger
from .models import StatementTransaction
from .parser import parse_statement

logger = get_logger("statement_pnl.batch")

STATEMENT_SUFFIX = ".csv"


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Combined parse output of one batch.

    ``files_loaded`` counts files that had content and were parsed, even if
    they contributed zero transactions.
    """

    transactions: tuple[StatementTransaction, ...]
    files_loaded: int


def select_statement_files(paths: Iterable[str | PathLike[str]]) -> list[Path]:
    """Keep only paths whose name ends in ``.csv`` (case-insensitive)."""

    selected = [Path(p) for p in paths if Path(p).name.lower().endswith(STATEMENT_SUFFIX)]
    if not selected:
        raise NoStatementFilesError()
    return selected


def resolve_max_workers(n_files: int, requested: int | None = None) -> int:
    """Resolve the read pool size.

    Honors ``requested`` or the ``STATEMENT_PNL_MAX_WORKERS`` env var, caps to
    ``n_files`` and 32, and defaults to ``min(8, n_files)``.
    """

    if requested is None:
        env_workers = os.getenv("STATEMENT_PNL_MAX_WORKERS")
        try:
            requested = int(env_workers) if env_workers else None
        except ValueError:
            logger.warning("Ignoring invalid STATEMENT_PNL_MAX_WORKERS=%r", env_workers)
            requested = None

    if requested is not None and requested > 0:
        return max(1, min(requested, n_files, 32))
    return max(1, min(8, n_files))


def _read_text(path: Path) -> str:
    # utf-8-sig drops a leading BOM so the first header name stays clean.
    return path.read_text(encoding="utf-8-sig")


def read_statement_texts(
    paths: Sequence[Path], *, max_workers: int | None = None
) -> list[str]:
    """Read every file concurrently and return their texts in input order.

    Waits for all reads to settle; raises :class:`StatementReadError` listing
    every failed file when at least one read failed.
    """

    if not paths:
        return []

    workers = resolve_max_workers(len(paths), max_workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures: list[Future[str]] = [pool.submit(_read_text, p) for p in paths]
        wait(futures)

    failed: list[str] = []
    causes: list[BaseException] = []
    texts: list[str] = []
    for path, fut in zip(paths, futures, strict=True):
        exc = fut.exception()
        if exc is not None:
            logger.error("Error reading file %s: %s", path, exc)
            failed.append(path.name)
            causes.append(exc)
            continue
        texts.append(fut.result())

    if failed:
        raise StatementReadError(failed, causes)
    return texts


def parse_statement_texts(
    texts: Iterable[str], names: Sequence[str] | None = None
) -> BatchResult:
    """Parse already-read statement texts and concatenate in order."""

    transactions: list[StatementTransaction] = []
    files_loaded = 0
    for pos, text in enumerate(texts):
        name = names[pos] if names is not None else f"#{pos + 1}"
        if not text.strip():
            logger.warning("File %s is empty", name)
            continue
        parsed = parse_statement(text)
        logger.info("Parsed %d transaction(s) from %s", len(parsed), name)
        transactions.extend(parsed)
        files_loaded += 1
    return BatchResult(transactions=tuple(transactions), files_loaded=files_loaded)


def load_statements(
    paths: Iterable[str | PathLike[str]], *, max_workers: int | None = None
) -> BatchResult:
    """Select, read, and parse a batch of statement files.

    Raises
    ------
    NoStatementFilesError
        When no path has a ``.csv`` name.
    StatementReadError
        When any selected file could not be read.
    NoTransactionsFoundError
        When the batch as a whole produced no transactions.
    """

    selected = select_statement_files(paths)
    texts = read_statement_texts(selected, max_workers=max_workers)
    result = parse_statement_texts(texts, names=[p.name for p in selected])
    logger.info(
        "Total transactions parsed: %d from %d file(s)",
        len(result.transactions),
        result.files_loaded,
    )
    if not result.transactions:
        raise NoTransactionsFoundError()
    return result


__all__ = [
    "BatchResult",
    "load_statements",
    "parse_statement_texts",
    "read_statement_texts",
    "resolve_max_workers",
    "select_statement_files",
]
