from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_store
from backend.app.domain.contracts import AuthorKeyIn, AuthorKeyOut
from backend.app.services.access_gate import resolve_data_source
from backend.app.services.transaction_store import TransactionStore

router = APIRouter()


# ----------------------------
# Health
# ----------------------------

@router.get("/health")
def health():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}


# ----------------------------
# Author key
# ----------------------------

@router.post("/api/author-key/validate", response_model=AuthorKeyOut)
def validate_author_key(req: AuthorKeyIn, store: TransactionStore = Depends(get_store)):
    """Boolean only; the stored key is never returned."""
    source = resolve_data_source(req.key.strip() or None, store)
    return AuthorKeyOut(valid=not source.use_sample)
