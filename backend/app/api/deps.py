# backend/app/api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from backend.app.api.config import AUTHOR_KEY_HEADER
from backend.app.db import get_db
from backend.app.services.errors import (
    AuthorKeyRequiredError,
    LedgerliteError,
    StoreError,
    TransactionNotFoundError,
    TransactionValidationError,
)
from backend.app.services.transaction_store import SqlTransactionStore, TransactionStore


def get_author_key(request: Request) -> Optional[str]:
    """
    Author key for this request only.

    Read from the X-Author-Key header; blank values count as absent. The key
    is handed to the gate explicitly and never stored on the app.
    """
    raw = request.headers.get(AUTHOR_KEY_HEADER)
    if raw is None:
        return None
    key = raw.strip()
    return key or None


def get_store(db: Session = Depends(get_db)) -> TransactionStore:
    return SqlTransactionStore(db)


def http_error(exc: LedgerliteError) -> HTTPException:
    if isinstance(exc, AuthorKeyRequiredError):
        return HTTPException(status_code=403, detail=exc.message)
    if isinstance(exc, TransactionNotFoundError):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, TransactionValidationError):
        return HTTPException(status_code=422, detail=exc.message)
    if isinstance(exc, StoreError):
        return HTTPException(status_code=502, detail=exc.message)
    return HTTPException(status_code=500, detail=exc.message)
