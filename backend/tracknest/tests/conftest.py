"""
Shared fixtures: a fresh in-memory database per test and a login helper.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_FIXTURES"] = "false"

import pytest
from fastapi.testclient import TestClient
from tracknest.db.base import Base
from tracknest.db.seed import seed_fixtures
from tracknest.db.session import SessionLocal, engine
from tracknest.main import app
import tracknest.models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_db():
    """Recreate every table so each test starts from an empty store."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """Load the development fixtures: five users, four groups, seven entries."""
    seed_fixtures(db)
    return db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login(client):
    """Log in and return request headers carrying the bearer token."""

    def _login(username: str, password: str) -> dict:
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        token = response.json()["accessToken"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
