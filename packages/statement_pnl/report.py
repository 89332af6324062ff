"""Typed batch summary and currency formatting for display.

``StatementReport`` is the serializable view the CLI prints with ``--json``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from .aggregate import TypeFilter, active_subset, distinct_types, summarize
from .batch import BatchResult


class StatementReport(BaseModel):
    """Totals over the active subset of a parsed batch."""

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    files_loaded: int
    transaction_count: int
    active_count: int
    types: dict[str, bool]
    revenue: Decimal
    expense: Decimal
    net: Decimal

    @model_validator(mode="after")
    def _check_totals(self) -> StatementReport:
        if self.revenue < 0 or self.expense < 0:
            raise ValueError("revenue and expense must be non-negative")
        if self.revenue - self.expense != self.net:
            raise ValueError("net must equal revenue - expense")
        return self


def build_report(batch: BatchResult, type_filter: TypeFilter | None = None) -> StatementReport:
    """Summarize ``batch`` under ``type_filter`` (all types enabled when omitted)."""

    types = distinct_types(batch.transactions)
    if type_filter is None:
        type_filter = TypeFilter.seed(types)
    else:
        type_filter.observe(types)
    active = active_subset(batch.transactions, type_filter)
    totals = summarize(active)
    return StatementReport(
        files_loaded=batch.files_loaded,
        transaction_count=len(batch.transactions),
        active_count=len(active),
        types={t: type_filter.is_enabled(t) for t in types},
        revenue=totals.revenue,
        expense=totals.expense,
        net=totals.net,
    )


def format_currency(amount: Decimal) -> str:
    """Render ``amount`` as US dollars, e.g. ``$1,234.50`` or ``-$4.50``."""

    q = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"


__all__ = ["StatementReport", "build_report", "format_currency"]
