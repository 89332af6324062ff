"""Normalized transaction records produced by the statement parser.

Every statement layout maps onto the same four common fields:

- ``description``: free text (may be empty)
- ``type``: the statement's own classification label (may be empty)
- ``amount``: signed :class:`~decimal.Decimal`, sign kept exactly as exported
- ``date``: the single date string chosen for the layout (may be empty)

Layout-specific columns live on the variant dataclasses below. Instances are
frozen; nothing downstream mutates a transaction once the parser built it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar


class StatementSchema(StrEnum):
    """Recognized statement column layouts."""

    CREDIT_CARD = "credit_card"
    DEPOSIT_ACCOUNT = "deposit_account"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class Transaction:
    """Fields shared by every statement layout."""

    schema: ClassVar[StatementSchema]

    description: str
    type: str
    amount: Decimal
    date: str

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping using the display field names."""

        return {
            "schema": str(self.schema),
            "description": self.description,
            "type": self.type,
            "amount": str(self.amount),
            "date": self.date,
        }


@dataclass(frozen=True, slots=True)
class CreditCardTransaction(Transaction):
    schema: ClassVar[StatementSchema] = StatementSchema.CREDIT_CARD

    transaction_date: str = ""
    post_date: str = ""
    category: str = ""
    memo: str = ""

    def to_record(self) -> dict[str, Any]:
        record = Transaction.to_record(self)
        record.update(
            transactionDate=self.transaction_date,
            postDate=self.post_date,
            category=self.category,
            memo=self.memo,
        )
        return record


@dataclass(frozen=True, slots=True)
class DepositAccountTransaction(Transaction):
    schema: ClassVar[StatementSchema] = StatementSchema.DEPOSIT_ACCOUNT

    details: str = ""
    posting_date: str = ""
    balance: str = ""
    check_or_slip: str = ""

    def to_record(self) -> dict[str, Any]:
        record = Transaction.to_record(self)
        record.update(
            details=self.details,
            postingDate=self.posting_date,
            balance=self.balance,
            checkOrSlip=self.check_or_slip,
        )
        return record


@dataclass(frozen=True, slots=True)
class GenericTransaction(Transaction):
    """Fallback layout: only the common fields are known."""

    schema: ClassVar[StatementSchema] = StatementSchema.GENERIC


type StatementTransaction = CreditCardTransaction | DepositAccountTransaction | GenericTransaction
"""Any transaction the parser can emit."""


__all__ = [
    "CreditCardTransaction",
    "DepositAccountTransaction",
    "GenericTransaction",
    "StatementSchema",
    "StatementTransaction",
    "Transaction",
]
