"""Statement CSV text → normalized transactions.

Parsing is best effort and never raises for content problems:

- fewer than two non-blank lines, or a header set that matches no known
  layout, yields an empty list;
- a data line whose amount does not parse as a finite number is skipped.

Layout detection runs once per file against the header line:

1. ``Transaction Date`` + ``Post Date``  → credit card
2. ``Posting Date`` + ``Details``        → deposit account (checking/savings)
3. ``Amount`` + ``Type``                 → generic fallback

All header lookups are case-insensitive and tolerate whitespace variation.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation

from .headers import HeaderIndex, canonical_header, strip_enclosing_quote
from .logging_setup import get_logger
from .models import (
    CreditCardTransaction,
    DepositAccountTransaction,
    GenericTransaction,
    StatementSchema,
    StatementTransaction,
)
from .tokenizer import split_line

logger = get_logger("statement_pnl.parser")

_NEWLINE_RE = re.compile(r"\r\n|\r")

# Literal fallbacks used when a layout column cannot be resolved.
DEFAULT_CHECK_OR_SLIP_HEADER = "Check or Slip #"
DEFAULT_DESCRIPTION_HEADER = "Description"

type Row = Mapping[str, str]
type RowMapper = Callable[[Row, HeaderIndex], StatementTransaction | None]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _logical_lines(text: str) -> list[str]:
    lines = (line.strip() for line in _NEWLINE_RE.sub("\n", text).split("\n"))
    return [line for line in lines if line]


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse an amount cell, returning ``None`` when it is not a finite number.

    Thousands-separator commas and surrounding whitespace are removed; no
    other currency decoration is accepted.
    """

    if raw is None:
        return None
    s = raw.replace(",", "").strip()
    if not s:
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def _cell(row: Row, header: str | None) -> str:
    if header is None:
        return ""
    return row.get(header, "")


def _build_row(headers: tuple[str, ...], line: str) -> dict[str, str]:
    values = [strip_enclosing_quote(v.strip()) for v in split_line(line)]
    if len(values) < len(headers):
        # Some exporters omit trailing blank columns.
        values.extend([""] * (len(headers) - len(values)))
    elif len(values) > len(headers):
        logger.debug(
            "Truncating %d extra value(s); expected %d", len(values) - len(headers), len(headers)
        )
        values = values[: len(headers)]
    return dict(zip(headers, values, strict=True))


# ---------------------------------------------------------------------------
# Layout detection and row mapping
# ---------------------------------------------------------------------------


def classify_headers(index: HeaderIndex) -> StatementSchema | None:
    """Return the statement layout implied by ``index`` (``None`` if unknown)."""

    if index.has("transaction date") and index.has("post date"):
        return StatementSchema.CREDIT_CARD
    if index.has("posting date") and index.has("details"):
        return StatementSchema.DEPOSIT_ACCOUNT
    if index.has("amount") and index.has("type"):
        return StatementSchema.GENERIC
    return None


def _map_credit_card(row: Row, index: HeaderIndex) -> CreditCardTransaction | None:
    amount = parse_amount(_cell(row, index.resolve("amount")))
    if amount is None:
        return None
    transaction_date = _cell(row, index.resolve("transaction date"))
    post_date = _cell(row, index.resolve("post date"))
    return CreditCardTransaction(
        description=_cell(row, index.resolve("description")),
        type=_cell(row, index.resolve("type")),
        amount=amount,
        date=transaction_date or post_date,
        transaction_date=transaction_date,
        post_date=post_date,
        category=_cell(row, index.resolve("category")),
        memo=_cell(row, index.resolve("memo")),
    )


def _map_deposit_account(row: Row, index: HeaderIndex) -> DepositAccountTransaction | None:
    amount = parse_amount(_cell(row, index.resolve("amount")))
    if amount is None:
        return None
    check_key = index.first_containing("check", "slip") or DEFAULT_CHECK_OR_SLIP_HEADER
    posting_date = _cell(row, index.resolve("posting date"))
    return DepositAccountTransaction(
        description=_cell(row, index.resolve("description")),
        type=_cell(row, index.resolve("type")),
        amount=amount,
        date=posting_date,
        details=_cell(row, index.resolve("details")),
        posting_date=posting_date,
        balance=_cell(row, index.resolve("balance")),
        check_or_slip=_cell(row, check_key),
    )


def _map_generic(row: Row, index: HeaderIndex) -> GenericTransaction | None:
    amount = parse_amount(_cell(row, index.resolve("amount")))
    if amount is None:
        return None
    desc_key = index.first_containing("description") or DEFAULT_DESCRIPTION_HEADER
    return GenericTransaction(
        description=_cell(row, desc_key),
        type=_cell(row, index.resolve("type")),
        amount=amount,
        date=_cell(row, index.first_containing("date")),
    )


_MAPPERS: dict[StatementSchema, RowMapper] = {
    StatementSchema.CREDIT_CARD: _map_credit_card,
    StatementSchema.DEPOSIT_ACCOUNT: _map_deposit_account,
    StatementSchema.GENERIC: _map_generic,
}


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def parse_statement(text: str) -> list[StatementTransaction]:
    """Parse one statement export into transactions, in input line order."""

    lines = _logical_lines(text)
    if len(lines) < 2:
        logger.debug("Statement has fewer than 2 non-blank lines; nothing to parse")
        return []

    headers = tuple(canonical_header(h) for h in split_line(lines[0]))
    index = HeaderIndex.from_headers(headers)
    logger.debug("Parsed %d header column(s): %s", len(headers), list(headers))

    schema = classify_headers(index)
    if schema is None:
        logger.warning("Unrecognized statement layout. Headers: %s", ", ".join(headers))
        return []
    logger.debug("Detected %s layout", schema)

    mapper = _MAPPERS[schema]
    transactions: list[StatementTransaction] = []
    for line_no, line in enumerate(lines[1:], start=2):
        row = _build_row(headers, line)
        tx = mapper(row, index)
        if tx is None:
            logger.debug("Line %d: skipped, amount is not a number", line_no)
            continue
        transactions.append(tx)

    logger.info("Parsed %d transaction(s) from %s statement", len(transactions), schema)
    return transactions


__all__ = ["classify_headers", "parse_amount", "parse_statement"]
