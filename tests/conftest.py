"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from grocery_list.config import Settings
from grocery_list.database import open_database
from grocery_list.main import create_app


@pytest.fixture
def database_url(tmp_path):
    """A fresh SQLite file per test."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def settings(database_url, tmp_path):
    return Settings(
        database_url=database_url,
        environment="test",
        gl_demo=False,
        demo_database_path=tmp_path / "grocery_demo.db",
    )


@pytest.fixture
def client(settings):
    """Create a test client; the lifespan opens and migrates the database."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(database_url):
    """Open the test database outside of the app."""
    database = open_database(database_url)
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    """Create a database session for service-level tests."""
    session = database.session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def make_category(client):
    """Create a category through the API and return its JSON."""

    def _make(name: str) -> dict:
        response = client.post("/api/categories", json={"name": name})
        assert response.status_code == 201
        return response.json()

    return _make


@pytest.fixture
def make_entry(client):
    """Create an entry through the API and return its JSON."""

    def _make(name: str, **fields) -> dict:
        response = client.post("/api/entries", json={"name": name, **fields})
        assert response.status_code == 201
        return response.json()

    return _make
