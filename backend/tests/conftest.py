import pytest
from fastapi.testclient import TestClient

from intake.config import Settings
from intake.main import create_app
from intake.store import InMemoryStore


@pytest.fixture
def settings():
    return Settings(SEED_SAMPLE_DATA=True)


@pytest.fixture
def store(settings):
    return InMemoryStore(settings)


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store))


def _login(client, name, password):
    response = client.post("/api/auth/login", json={"name": name, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, settings):
    return _login(client, settings.SEED_ADMIN_NAME, settings.SEED_ADMIN_PASSWORD)


@pytest.fixture
def agent_headers(client, settings):
    return _login(client, settings.SEED_AGENT_NAME, settings.SEED_AGENT_PASSWORD)
