from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.app.api.config import default_page_size, recent_limit
from backend.app.api.deps import get_author_key, get_store, http_error
from backend.app.domain.contracts import (
    RecentTransactionsOut,
    TransactionIn,
    TransactionOut,
    TransactionPageOut,
    TransactionPatch,
)
from backend.app.services import transaction_service
from backend.app.services.errors import LedgerliteError
from backend.app.services.transaction_store import TransactionStore

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


def _payload(req: TransactionIn | TransactionPatch) -> dict:
    # legacy field names arrive as extras; the store translates them
    return {**req.model_dump(exclude_unset=True), **(req.model_extra or {})}


@router.get("", response_model=TransactionPageOut)
def get_transactions(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=500),
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    """
    Date-descending listing, paginated. Falls back to sample rows when the
    author key is missing or invalid.
    """
    listing = transaction_service.list_transactions(store, author_key)
    return transaction_service.transaction_page(
        listing,
        page=page,
        page_size=page_size or default_page_size(),
    )


@router.get("/recent", response_model=RecentTransactionsOut)
def get_recent_transactions(
    limit: Optional[int] = Query(None, ge=1, le=100),
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    listing = transaction_service.list_transactions(store, author_key)
    return transaction_service.recent_rows(listing, limit=limit or recent_limit())


@router.post("", response_model=TransactionOut, status_code=201)
def post_transaction(
    req: TransactionIn,
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    try:
        txn = transaction_service.create_transaction(store, author_key, _payload(req))
    except LedgerliteError as exc:
        raise http_error(exc) from exc
    return transaction_service.transaction_row(txn)


@router.patch("/{txn_id}", response_model=TransactionOut)
def patch_transaction(
    txn_id: str,
    req: TransactionPatch,
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    partial = _payload(req)
    if not partial:
        raise HTTPException(status_code=422, detail="no fields to update")
    try:
        txn = transaction_service.update_transaction(store, author_key, txn_id, partial)
    except LedgerliteError as exc:
        raise http_error(exc) from exc
    return transaction_service.transaction_row(txn)
