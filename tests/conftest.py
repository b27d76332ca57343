"""
Test configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from surftracker.config import Settings
from surftracker.main import create_app

# Use in-memory async SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EXAMPLE_SPOT = {
    "name": "Test Point",
    "latitude": 34.0,
    "longitude": -118.5,
    "breakType": "point",
    "skillRequirement": "advanced",
    "description": "test",
}

EXAMPLE_SESSION = {
    "surfSpot": "Test Point",
    "date": "2025-01-01",
    "duration": 60,
    "waveCount": 5,
    "rating": 7,
    "conditionsRating": 6,
    "notes": "ok",
}


def make_settings(**overrides) -> Settings:
    values = {"DATABASE_URL": TEST_DATABASE_URL, "ENVIRONMENT": "test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    """A fresh app, and so a fresh empty database, for every test."""
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def create_spot(client, **overrides):
    response = client.post("/api/surf-spots", json={**EXAMPLE_SPOT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def create_session(client, **overrides):
    response = client.post("/api/surf-sessions", json={**EXAMPLE_SESSION, **overrides})
    assert response.status_code == 201, response.text
    return response.json()
