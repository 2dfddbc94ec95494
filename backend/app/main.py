import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.config import AUTHOR_KEY_HEADER
from backend.app.api.routes.analytics import router as analytics_router
from backend.app.api.routes.config import router as config_router
from backend.app.api.routes.core import router as core_router
from backend.app.api.routes.transactions import router as transactions_router


logger = logging.getLogger(__name__)

DEV_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS")
    if raw is None:
        return list(DEV_ORIGINS)
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        raise RuntimeError("CORS_ALLOW_ORIGINS is set but lists no origins.")
    if not set(DEV_ORIGINS) & set(origins):
        logger.warning("Dashboard dev server is not in the CORS allowlist: %s", origins)
    return origins


app = FastAPI(title="Ledgerlite API", version="0.1.0")

# the dashboard sends the author key as a custom header, so it must be allowed
# explicitly alongside JSON bodies
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", AUTHOR_KEY_HEADER],
)

for router in (core_router, config_router, transactions_router, analytics_router):
    app.include_router(router)
