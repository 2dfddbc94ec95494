from __future__ import annotations

import os

AUTHOR_KEY_HEADER = "X-Author-Key"
DEFAULT_AUTHOR_KEY = "YourSecretKey"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise RuntimeError(f"{name} must be >= 1, got {value}")
    return value


def dashboard_months() -> int:
    return _int_env("DASHBOARD_MONTHS", 6)


def recent_limit() -> int:
    return _int_env("RECENT_LIMIT", 5)


def default_page_size() -> int:
    return _int_env("DEFAULT_PAGE_SIZE", 20)


def initial_author_key() -> str:
    return os.getenv("INITIAL_AUTHOR_KEY") or DEFAULT_AUTHOR_KEY


def force_author_key_update() -> bool:
    return os.getenv("UPDATE_AUTHOR_KEY") == "true"
