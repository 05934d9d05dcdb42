import pytest
from fastapi.testclient import TestClient

from store_api.main import create_app
from ..conftest import make_test_settings


@pytest.fixture
def app():
    return create_app(make_test_settings(), configure_logging=False)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the in-memory schema
    with TestClient(app) as client:
        yield client


@pytest.fixture
def create_product(client):
    def _create(**overrides) -> dict:
        payload = {"name": "Widget", "price": 10.0, "stock": 10}
        payload.update(overrides)
        response = client.post("/produtos", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_customer(client):
    def _create(**overrides) -> dict:
        payload = {"name": "Ana", "email": "ana@example.com"}
        payload.update(overrides)
        response = client.post("/clientes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
