"""
Shared fixtures.

Every test gets a fresh ``MemoryStore``; the API fixtures build an
application around it so no MongoDB server is needed.
"""

import pytest
from fastapi.testclient import TestClient

from swap_api.app.main import create_app
from swap_api.app.repositories.memory_repository import MemoryStore


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def client(store):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(client):
    counter = {"n": 0}

    def _make(first_name="Paul", last_name="George", email=None):
        counter["n"] += 1
        payload = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email or f"user{counter['n']}@example.com",
        }
        response = client.post("/users", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_product(client):
    counter = {"n": 0}

    def _make(name=None, image=None):
        counter["n"] += 1
        payload = {
            "name": name or f"Product {counter['n']}",
            "image": image or [f"http://example.com/image{counter['n']}.jpg"],
        }
        response = client.post("/products", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_swap_order(client):
    def _make(products, users):
        response = client.post(
            "/swap-orders",
            json={"products": [p["_id"] for p in products], "users": [u["_id"] for u in users]},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _make
