"""Type filtering, summary totals, and pagination over parsed transactions.

These helpers operate on the parser's output and never mutate it. Filtering
and pagination preserve the input order.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TypeVar

from .models import Transaction

T = TypeVar("T")
TxT = TypeVar("TxT", bound=Transaction)

DEFAULT_PAGE_SIZE = 20


def distinct_types(transactions: Iterable[Transaction]) -> list[str]:
    """Return the distinct ``type`` labels, sorted lexicographically."""

    return sorted({tx.type for tx in transactions})


@dataclass(slots=True)
class TypeFilter:
    """Caller-owned enable/disable toggle per transaction type.

    Types that were never observed count as enabled, so a freshly parsed
    batch is shown in full until the caller explicitly disables something.
    """

    enabled: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def seed(cls, types: Iterable[str]) -> TypeFilter:
        return cls(enabled={t: True for t in types})

    def observe(self, types: Iterable[str]) -> None:
        """Enable newly seen types, leaving existing toggles untouched."""

        for t in types:
            self.enabled.setdefault(t, True)

    def is_enabled(self, type_: str) -> bool:
        return self.enabled.get(type_, True)

    def toggle(self, type_: str) -> bool:
        self.enabled[type_] = not self.is_enabled(type_)
        return self.enabled[type_]

    def enable(self, type_: str) -> None:
        self.enabled[type_] = True

    def disable(self, type_: str) -> None:
        self.enabled[type_] = False


def active_subset(transactions: Iterable[TxT], type_filter: TypeFilter | None) -> list[TxT]:
    """Transactions whose type is not explicitly disabled."""

    if type_filter is None:
        return list(transactions)
    return [tx for tx in transactions if type_filter.is_enabled(tx.type)]


@dataclass(frozen=True, slots=True)
class Totals:
    revenue: Decimal
    expense: Decimal
    net: Decimal


def summarize(transactions: Iterable[Transaction]) -> Totals:
    """Sum positive amounts into revenue and negative amounts into expense.

    ``expense`` is reported as a non-negative magnitude; zero amounts count
    toward neither side.
    """

    revenue = Decimal("0")
    expense = Decimal("0")
    for tx in transactions:
        if tx.amount > 0:
            revenue += tx.amount
        elif tx.amount < 0:
            expense += -tx.amount
    return Totals(revenue=revenue, expense=expense, net=revenue - expense)


def _check_page_size(page_size: int) -> None:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError("page_size must be a positive integer")


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    _check_page_size(page_size)
    return math.ceil(total / page_size)


def paginate(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """Return 1-indexed page ``page``; pages outside the range are empty."""

    _check_page_size(page_size)
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Totals",
    "TypeFilter",
    "active_subset",
    "distinct_types",
    "page_count",
    "paginate",
    "summarize",
]
