"""Shared test fixtures.

Every test gets its own in-memory SQLite database wired into a fresh app, so
no test can see another's rows and no real database or API is touched.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.database import Base, create_db_engine
from app.main import create_app

USER_ID = "user-1"


@pytest.fixture()
def engine():
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def app(engine):
    return create_app(database_url=None, engine=engine)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app):
    """A session on the same database the app uses; commit what you add."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture()
def headers():
    return {"X-User-Id": USER_ID}


@pytest.fixture()
def org_id(client, headers):
    """Bootstrap the caller's workspace and return its organization id."""
    response = client.post("/workspace/init", json={"full_name": "Ada"}, headers=headers)
    assert response.status_code == 200
    return response.json()["default_org_id"]


@pytest.fixture()
def unconfigured_client():
    """An app started without DATABASE_URL."""
    with TestClient(create_app(database_url=None)) as test_client:
        yield test_client
