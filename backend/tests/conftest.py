import pytest
from fastapi.testclient import TestClient

from seatplan.config import Settings
from seatplan.core.store import ArrangementStore


@pytest.fixture
def settings():
    return Settings(default_table_limit=5, seat_offset=20.0)


@pytest.fixture
def store(settings):
    store = ArrangementStore(settings=settings)
    store.initialize()
    return store


@pytest.fixture
def roomy_store(settings):
    """Initialized store with a table limit high enough for bulk scenarios."""
    store = ArrangementStore(table_limit=50, settings=settings)
    store.initialize()
    return store


@pytest.fixture
def client():
    from seatplan.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_url(client):
    response = client.post("/api/v1/sessions", json={})
    assert response.status_code == 201
    return f"/api/v1/sessions/{response.json()['session_id']}"
