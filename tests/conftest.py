# tests/conftest.py

"""
Shared fixtures. The app is pointed at an in-memory SQLite database before
it is imported, so the suite needs no running PostgreSQL.
"""
import logging
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FRONTEND_URL"] = "http://localhost:5173"

import pytest
from fastapi.testclient import TestClient

from products_api.db import Base, engine
from products_api.main import app

# Suppress noisy logs from SQLAlchemy during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from empty tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """
    Provides a TestClient for making HTTP requests to the FastAPI application.
    The TestClient manages the app's lifespan (startup/shutdown).
    """
    with TestClient(app) as test_client:
        yield test_client
        app.dependency_overrides.clear()


@pytest.fixture
def product(client: TestClient) -> dict:
    """A product created through the API."""
    response = client.post(
        "/api/products", json={"name": "Teclado Logitech - Test", "price": 120}
    )
    assert response.status_code == 201
    return response.json()["data"]
