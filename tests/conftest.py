# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Every test gets its own SQLite file under tmp_path, so the seed rows
# (Alice = 1, Bob = 2) are always fresh and ids are predictable.
# =============================================================================

import os

# Keep a developer's .env / shell overrides out of the test run
os.environ.setdefault("USERS_API_ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from users_api.core.config import Settings
from users_api.main import create_app


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # context manager → lifespan runs (schema + seed) and one event loop is
    # kept for the whole test
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token(client) -> str:
    resp = client.post("/login", json={"email": "alice@example.com", "password": "x"})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}
