"""
Tests for first-run bootstrap and fixture seeding.
"""
from tracknest.core.config import settings
from tracknest.core.security import verify_password
from tracknest.db.init_db import bootstrap_admin
from tracknest.db.seed import seed_fixtures
from tracknest.models.entry import Entry, EntryGroup
from tracknest.models.user import User


def test_seed_loads_fixtures(db):
    assert seed_fixtures(db) is True
    assert db.query(User).count() == 5
    assert db.query(EntryGroup).count() == 4
    assert db.query(Entry).count() == 7
    assert db.query(Entry).filter(Entry.created_by == "alice").count() == 3


def test_seed_skips_populated_store(db):
    seed_fixtures(db)
    assert seed_fixtures(db) is False
    assert db.query(User).count() == 5


def test_bootstrap_needs_password(db, monkeypatch):
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_PASSWORD", None)
    assert bootstrap_admin(db) is None
    assert db.query(User).count() == 0


def test_bootstrap_creates_admin(db, monkeypatch, client):
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_USERNAME", "root")
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_PASSWORD", "changeme")

    user = bootstrap_admin(db)
    assert user.username == "root"
    assert user.role_names == ["ADMIN"]
    assert verify_password("changeme", user.password)

    response = client.post("/auth/login", json={"username": "root", "password": "changeme"})
    assert response.status_code == 200


def test_bootstrap_skips_when_users_exist(db, monkeypatch):
    seed_fixtures(db)
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_PASSWORD", "changeme")
    assert bootstrap_admin(db) is None
    assert db.query(User).count() == 5
