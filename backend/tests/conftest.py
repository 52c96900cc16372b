"""
Pytest fixtures for the pageflow test suite.

Provides:
- An in-memory storage plus one actor per role for core tests
- A Flask app on sqlite (in memory) with a test client
- JWT auth headers per role for API tests
- A ticking clock so workflow timestamps are strictly ordered
"""
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from flask_jwt_extended import create_access_token

from pageflow import create_app
from pageflow.application import pages as page_service
from pageflow.domain.roles import Actor, Role
from pageflow.extensions import db
from pageflow.storage.memory import InMemoryStorage


@pytest.fixture
def store():
    return InMemoryStorage()


@pytest.fixture
def maker():
    return Actor(actor_id="maker-1", role=Role.MAKER)


@pytest.fixture
def checker():
    return Actor(actor_id="checker-1", role=Role.CHECKER)


@pytest.fixture
def admin():
    return Actor(actor_id="admin-1", role=Role.ADMIN)


@pytest.fixture
def make_page(store, maker):
    def _make_page(**overrides):
        data = {
            "name": "Landing",
            "html": "<p>v1</p>",
            "css": "p { color: red; }",
            "js": "",
            "page_type": "landing",
        }
        data.update(overrides)
        return page_service.create_page(store, actor=maker, data=data)
    return _make_page


@pytest.fixture
def ticking_clock(monkeypatch):
    """Each call to utcnow() in the lifecycle engine advances one second."""
    start = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = count()

    def fake_utcnow():
        return start + timedelta(seconds=next(ticks))

    monkeypatch.setattr("pageflow.application.pages.transition.utcnow", fake_utcnow)
    return fake_utcnow


# ---------------------------------------------------------------------------
# Flask
# ---------------------------------------------------------------------------

@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _auth_headers(role="maker", actor_id=None):
        token = create_access_token(
            identity=actor_id or f"{role}-user",
            additional_claims={"role": role},
        )
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
