"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from venuedesk.app import create_app
from venuedesk.config import Config


@pytest.fixture
def app_config(tmp_path):
    class TestConfig(Config):
        SECRET_KEY = "test-secret"
        DB_PATH = str(tmp_path / "venuedesk.db")
        UPLOAD_DIR = str(tmp_path / "uploads")
        MAX_CONNECTIONS = 5
        CONNECT_TIMEOUT = 1.0
        CALENDAR_TZ = "UTC"
        DEBUG = False

    return TestConfig


@pytest.fixture
def client(app_config):
    with TestClient(create_app(app_config)) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        payload = {
            "role": "Booker",
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "password": "secret123",
        }
        payload.update(overrides)
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def make_artist(client):
    def _make_artist(name, artist_type="DJ", **extra):
        response = client.post("/api/artists", json={"name": name, "type": artist_type, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _make_artist


@pytest.fixture
def make_event(client):
    def _make_event(title="Launch Night", start="2025-06-01T22:00:00Z", **extra):
        response = client.post("/api/events", json={"title": title, "start_": start, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _make_event
