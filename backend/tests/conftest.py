import os
import pathlib
import sys
import tempfile

import pytest


REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT))

AUTHOR_KEY = "test-author-key"


def pytest_configure():
    # db.py builds its engine at import time, so the URL must exist first
    if any(os.getenv(name) for name in ("DATABASE_URL", "SQLALCHEMY_DATABASE_URL")):
        return
    db_file = pathlib.Path(tempfile.mkdtemp(prefix="ledgerlite-tests-")) / "bills.db"
    os.environ["DATABASE_URL"] = f"sqlite:///{db_file}"


@pytest.fixture(scope="session")
def sqlite_engine():
    from backend.app import models  # noqa: F401
    from backend.app.db import Base, engine

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def sqlite_session(sqlite_engine):
    """Session whose rows are wiped afterwards so tests never see each other's bills."""
    from backend.app.db import Base, SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture()
def author_key(sqlite_session):
    from backend.app.seed.run import seed_author_key

    seed_author_key(sqlite_session, AUTHOR_KEY, force=True)
    return AUTHOR_KEY


@pytest.fixture()
def api_client(sqlite_session):
    from fastapi.testclient import TestClient

    from backend.app.db import get_db
    from backend.app.main import app

    app.dependency_overrides[get_db] = lambda: sqlite_session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
