from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from backend.app.analytics.core import (
    COMPUTATION_VERSION,
    Bucket,
    aggregate_by_category,
    aggregate_by_month,
    bucket_total,
)
from backend.app.norma.normalize import NormalizedTransaction, Transaction, normalize_transactions
from backend.app.services.transaction_service import TransactionListing, recent_rows


def build_analytics_lines(txns: Iterable[Transaction], now: Optional[datetime] = None) -> List[NormalizedTransaction]:
    return normalize_transactions(txns, now)


def build_dashboard_analytics(
    listing: TransactionListing,
    *,
    months: int,
    recent_limit: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Compact view: the last `months` monthly totals plus the newest rows."""
    lines = build_analytics_lines(listing.transactions, now)
    monthly = aggregate_by_month(lines, limit=months)
    recent = recent_rows(listing, limit=recent_limit, now=now)

    return {
        "computation_version": COMPUTATION_VERSION,
        "is_sample": listing.is_sample,
        "monthly": _buckets(monthly),
        "recent": recent["transactions"],
    }


def build_full_analytics(
    listing: TransactionListing,
    *,
    top_categories: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    lines = build_analytics_lines(listing.transactions, now)
    monthly = aggregate_by_month(lines)
    categories = aggregate_by_category(lines, top_n=top_categories)
    invalid = [line.txn.id for line in lines if not line.has_valid_date]

    return {
        "computation_version": COMPUTATION_VERSION,
        "is_sample": listing.is_sample,
        "monthly": _buckets(monthly),
        "categories": _buckets(categories),
        "totals": {
            "all": float(sum((line.amount for line in lines), Decimal("0.00"))),
            "dated": float(bucket_total(monthly)),
            "transaction_count": len(lines),
            "invalid_date_ids": invalid,
        },
    }


def _buckets(buckets: Iterable[Bucket]) -> List[Dict[str, Any]]:
    return [b.as_dict() for b in buckets]
