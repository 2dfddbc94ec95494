from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from backend.app.api.config import AUTHOR_KEY_HEADER, dashboard_months, default_page_size, recent_limit

router = APIRouter(prefix="/api", tags=["config"])


class ConfigOut(BaseModel):
    author_key_header: str
    dashboard_months: int
    recent_limit: int
    default_page_size: int


@router.get("/config", response_model=ConfigOut)
def get_config() -> ConfigOut:
    return ConfigOut(
        author_key_header=AUTHOR_KEY_HEADER,
        dashboard_months=dashboard_months(),
        recent_limit=recent_limit(),
        default_page_size=default_page_size(),
    )
