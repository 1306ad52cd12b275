"""
Shared pytest fixtures for the KeyFort test suite.

Every API test runs against a private in-memory SQLite database that
replaces the ``get_session`` dependency, so nothing touches ./keyfort.db.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from keyfort.server.config import settings
from keyfort.server.database import get_session, init_db
from keyfort.server.main import app

PASSWORD = "correct horse battery"


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch):
    """bcrypt's minimum cost keeps registration/login tests fast."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register and log in a user, returning its auth headers."""
    def _register(email="alice@example.com", name="Alice", password=PASSWORD):
        resp = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post("/auth/token", data={"username": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _register


@pytest.fixture
def auth_headers(register_user):
    return register_user()
