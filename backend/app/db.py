from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)

URL_ENV_VARS = ("DATABASE_URL", "SQLALCHEMY_DATABASE_URL")


def database_url() -> str:
    for name in URL_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    raise RuntimeError(f"Set one of {', '.join(URL_ENV_VARS)} before touching the bill store.")


def create_db_engine(url: str) -> Engine:
    """
    SQLite (tests, local runs) needs cross-thread access for TestClient;
    server databases get pre-ping so stale pooled connections are replaced.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    logger.debug("Connecting to %s", parsed.render_as_string(hide_password=True))
    return create_engine(url, future=True, pool_pre_ping=True)


engine = create_db_engine(database_url())

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    pass


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts: commit on success, roll back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
