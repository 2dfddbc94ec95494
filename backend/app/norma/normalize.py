"""
Norma - normalization layer.

Responsibility:
- Hold the canonical Transaction record every other layer works with.
- Clean each row once (date + amount) into a NormalizedTransaction so the
  aggregation code never re-parses raw strings.

Design notes:
- This module must be PURE:
  - no file IO
  - no network calls
  - no global state mutation
- Legacy/bilingual field names are NOT handled here; the store adapter
  translates them before rows reach this layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Union

from .amounts import format_amount, normalize_amount
from .dates import parse_date

TxnId = Union[str, int]

DEFAULT_CATEGORY = "Other"


# -------------------------
# Core records
# -------------------------

@dataclass(frozen=True)
class Transaction:
    id: Optional[TxnId]
    account: str
    amount: Any                      # number or string, as stored/transmitted
    date: Any                        # ISO string or "MM月DD日HH:mm" token
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def category(self) -> str:
        return self.description or DEFAULT_CATEGORY


@dataclass(frozen=True)
class NormalizedTransaction:
    txn: Transaction
    amount: Decimal
    occurred_at: Optional[datetime]  # None means invalid date

    @property
    def has_valid_date(self) -> bool:
        return self.occurred_at is not None

    @property
    def category(self) -> str:
        return self.txn.category

    @property
    def amount_display(self) -> str:
        return format_amount(self.amount)


def normalize_transaction(txn: Transaction, now: Optional[datetime] = None) -> NormalizedTransaction:
    return NormalizedTransaction(
        txn=txn,
        amount=normalize_amount(txn.amount),
        occurred_at=parse_date(txn.date, now),
    )


def normalize_transactions(
    txns: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> List[NormalizedTransaction]:
    return [normalize_transaction(t, now) for t in txns]
