from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from backend.app.norma.dates import format_month, month_key
from backend.app.norma.normalize import NormalizedTransaction, Transaction, normalize_transactions

COMPUTATION_VERSION = "analytics_core_v1"

T = TypeVar("T")


@dataclass(frozen=True)
class Bucket:
    label: str
    total: Decimal
    count: int
    supporting_ids: List[Any] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "total": float(self.total),
            "count": self.count,
            "supporting_ids": list(self.supporting_ids),
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total: int
    pages: int


def _normalized(
    txns: Iterable[Transaction | NormalizedTransaction],
    now: Optional[datetime],
) -> List[NormalizedTransaction]:
    out: List[NormalizedTransaction] = []
    for t in txns:
        if isinstance(t, NormalizedTransaction):
            out.append(t)
        else:
            out.extend(normalize_transactions([t], now))
    return out


def aggregate_by_month(
    txns: Iterable[Transaction | NormalizedTransaction],
    *,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Bucket]:
    """
    Monthly totals in chronological order.

    Rows with an invalid date are skipped. `limit` keeps the most recent
    N months; None or 0 keeps all of them.
    """
    grouped: Dict[Tuple[int, int], Dict[str, Any]] = {}
    for line in _normalized(txns, now):
        if line.occurred_at is None:
            continue
        key = month_key(line.occurred_at)
        entry = grouped.setdefault(
            key,
            {"label": format_month(line.occurred_at), "total": Decimal("0.00"), "ids": []},
        )
        entry["total"] += line.amount
        entry["ids"].append(line.txn.id)

    buckets = [
        Bucket(label=entry["label"], total=entry["total"], count=len(entry["ids"]), supporting_ids=entry["ids"])
        for _, entry in sorted(grouped.items())
    ]
    if limit:
        buckets = buckets[-limit:]
    return buckets


def aggregate_by_category(
    txns: Iterable[Transaction | NormalizedTransaction],
    *,
    top_n: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Bucket]:
    """
    Category totals, largest first; ties keep first-seen order.
    Date validity does not matter here.
    """
    grouped: Dict[str, Dict[str, Any]] = {}
    for line in _normalized(txns, now):
        entry = grouped.setdefault(line.category, {"total": Decimal("0.00"), "ids": []})
        entry["total"] += line.amount
        entry["ids"].append(line.txn.id)

    buckets = [
        Bucket(label=label, total=entry["total"], count=len(entry["ids"]), supporting_ids=entry["ids"])
        for label, entry in grouped.items()
    ]
    buckets.sort(key=lambda b: -b.total)
    if top_n:
        buckets = buckets[:top_n]
    return buckets


def recent_transactions(txns: Sequence[T], limit: int = 5) -> List[T]:
    """First N rows of a date-descending listing."""
    return list(txns[: max(limit, 0)])


def sort_by_date(
    txns: Iterable[NormalizedTransaction],
    *,
    descending: bool = True,
) -> List[NormalizedTransaction]:
    """Re-sort by parsed date; rows with an invalid date always go last."""
    rows = list(txns)
    valid = [r for r in rows if r.occurred_at is not None]
    invalid = [r for r in rows if r.occurred_at is None]
    valid.sort(key=lambda r: r.occurred_at, reverse=descending)
    return valid + invalid


def paginate(items: Sequence[T], page: int = 1, page_size: int = 20) -> Page[T]:
    """1-based pages; out-of-range page numbers clamp to the nearest page."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    total = len(items)
    pages = max(math.ceil(total / page_size), 1)
    page = min(max(page, 1), pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        pages=pages,
    )


def bucket_total(buckets: Iterable[Bucket]) -> Decimal:
    return sum((b.total for b in buckets), Decimal("0.00"))
