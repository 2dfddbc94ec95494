from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.app.api.config import dashboard_months, recent_limit
from backend.app.api.deps import get_author_key, get_store
from backend.app.domain.contracts import AnalyticsOut, DashboardAnalyticsOut
from backend.app.services import analytics_service, transaction_service
from backend.app.services.transaction_store import TransactionStore

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardAnalyticsOut)
def get_dashboard_analytics(
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    listing = transaction_service.list_transactions(store, author_key)
    return analytics_service.build_dashboard_analytics(
        listing,
        months=dashboard_months(),
        recent_limit=recent_limit(),
    )


@router.get("", response_model=AnalyticsOut)
def get_analytics(
    top: Optional[int] = Query(None, ge=1, le=100),
    author_key: Optional[str] = Depends(get_author_key),
    store: TransactionStore = Depends(get_store),
):
    """Full view: every month plus the category breakdown."""
    listing = transaction_service.list_transactions(store, author_key)
    return analytics_service.build_full_analytics(listing, top_categories=top)
