from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from backend.app.analytics.core import Page, paginate, recent_transactions, sort_by_date
from backend.app.norma.dates import full_label, relative_label
from backend.app.norma.normalize import Transaction, TxnId, normalize_transaction, normalize_transactions
from backend.app.services.access_gate import require_author_key, resolve_data_source
from backend.app.services.sample_data import sample_transactions
from backend.app.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionListing:
    transactions: List[Transaction]
    is_sample: bool


def list_transactions(
    store: TransactionStore,
    author_key: Optional[str],
    *,
    now: Optional[datetime] = None,
) -> TransactionListing:
    """
    Reads never fail: a missing/invalid key, a store error or an empty
    table all yield the sample set, flagged with is_sample=True.

    Stored rows come back date-descending whatever order the store used;
    rows with an unparsable date go last.
    """
    if resolve_data_source(author_key, store).use_sample:
        return TransactionListing(sample_transactions(now), is_sample=True)

    try:
        rows = store.list()
    except Exception as exc:
        logger.warning("Transaction list failed, using sample data: %s", exc)
        return TransactionListing(sample_transactions(now), is_sample=True)

    if not rows:
        logger.info("No transactions stored yet, using sample data")
        return TransactionListing(sample_transactions(now), is_sample=True)
    ordered = [line.txn for line in sort_by_date(normalize_transactions(rows, now))]
    return TransactionListing(ordered, is_sample=False)


def create_transaction(
    store: TransactionStore,
    author_key: Optional[str],
    row: Mapping[str, Any],
) -> Transaction:
    require_author_key(author_key, store, action="create transactions")
    return store.insert(row)


def update_transaction(
    store: TransactionStore,
    author_key: Optional[str],
    txn_id: TxnId,
    partial: Mapping[str, Any],
) -> Transaction:
    require_author_key(author_key, store, action="update transactions")
    return store.update(txn_id, partial)


def transaction_row(
    txn: Transaction,
    *,
    now: Optional[datetime] = None,
    relative: bool = False,
) -> Dict[str, Any]:
    line = normalize_transaction(txn, now)
    return {
        "id": txn.id,
        "account": txn.account,
        "amount": float(line.amount),
        "amount_display": line.amount_display,
        "date": line.occurred_at,
        "date_label": relative_label(txn.date, now) if relative else full_label(txn.date, now),
        "description": txn.description,
        "category": line.category,
        "created_at": txn.created_at,
    }


def transaction_page(
    listing: TransactionListing,
    *,
    page: int,
    page_size: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    paged: Page[Transaction] = paginate(listing.transactions, page=page, page_size=page_size)
    return {
        "is_sample": listing.is_sample,
        "page": paged.page,
        "page_size": paged.page_size,
        "total": paged.total,
        "pages": paged.pages,
        "transactions": [transaction_row(t, now=now) for t in paged.items],
    }


def recent_rows(
    listing: TransactionListing,
    *,
    limit: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    return {
        "is_sample": listing.is_sample,
        "transactions": [
            transaction_row(t, now=now, relative=True)
            for t in recent_transactions(listing.transactions, limit)
        ],
    }
