"""HTTP surface of ``/swap-orders`` and the cascades triggered from users and products."""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from swap_api.app.main import create_app


@pytest.fixture()
def parties(make_user, make_product):
    users = [
        make_user(first_name="Paul", last_name="George", email="pg13@example.com"),
        make_user(first_name="Alice", last_name="Smith", email="alicesmith@example.com"),
    ]
    products = [make_product(), make_product()]
    return users, products


def test_create_swap_order(client, parties):
    users, products = parties
    response = client.post(
        "/swap-orders",
        json={"products": [p["_id"] for p in products], "users": [u["_id"] for u in users]},
    )
    assert response.status_code == 200
    body = response.json()
    assert ObjectId.is_valid(body["_id"])
    assert sorted(body["products"]) == sorted(p["_id"] for p in products)
    assert sorted(body["users"]) == sorted(u["_id"] for u in users)
    assert "insertionDate" in body


@pytest.mark.parametrize(
    "products,users",
    [
        (1, 2),  # too few products
        (2, 1),  # too few users
        (2, 3),  # too many users
    ],
)
def test_create_swap_order_wrong_cardinality(client, make_user, make_product, products, users):
    product_ids = [make_product()["_id"] for _ in range(products)]
    user_ids = [make_user()["_id"] for _ in range(users)]
    response = client.post("/swap-orders", json={"products": product_ids, "users": user_ids})
    assert response.status_code == 400
    assert client.get("/swap-orders").json() == []


def test_create_swap_order_duplicates(client, parties):
    users, products = parties
    response = client.post(
        "/swap-orders",
        json={"products": [products[0]["_id"], products[0]["_id"]], "users": [users[0]["_id"], users[0]["_id"]]},
    )
    assert response.status_code == 400
    assert {e["msg"] for e in response.json()["errors"]} == {
        "Duplicate product IDs are not allowed",
        "Duplicate user IDs are not allowed",
    }
    assert client.get("/swap-orders").json() == []


def test_create_swap_order_invalid_request(client):
    response = client.post("/swap-orders", json={"products": ["invalid-product"], "users": ["invalid-user"]})
    assert response.status_code == 400


def test_create_swap_order_malformed_ids(client):
    response = client.post(
        "/swap-orders",
        json={"products": ["new-product", "new-product2"], "users": ["new-user", "new-user2"]},
    )
    assert response.status_code == 400
    assert client.get("/swap-orders").json() == []


def test_create_swap_order_with_unknown_ids_is_accepted(client):
    response = client.post(
        "/swap-orders",
        json={"products": [str(ObjectId()), str(ObjectId())], "users": [str(ObjectId()), str(ObjectId())]},
    )
    assert response.status_code == 200
    assert client.get(f"/swap-orders/{response.json()['_id']}").json()["users"] == []


def test_create_swap_order_with_unknown_ids_when_verified(store):
    app = create_app(store=store, verify_references=True)
    with TestClient(app) as client:
        response = client.post(
            "/swap-orders",
            json={"products": [str(ObjectId()), str(ObjectId())], "users": [str(ObjectId()), str(ObjectId())]},
        )
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 4


def test_list_swap_orders_expands_references(client, parties, make_swap_order):
    users, products = parties
    make_swap_order(products, users)
    response = client.get("/swap-orders")
    assert response.status_code == 200
    [order] = response.json()
    assert order["users"] == users
    assert order["products"] == products


def test_get_swap_order_by_id(client, parties, make_swap_order):
    users, products = parties
    order = make_swap_order(products, users)
    response = client.get(f"/swap-orders/{order['_id']}")
    assert response.status_code == 200
    assert response.json()["_id"] == order["_id"]
    assert response.json()["insertionDate"] == order["insertionDate"]


def test_get_unknown_swap_order(client):
    assert client.get("/swap-orders/1").status_code == 404
    assert client.get(f"/swap-orders/{ObjectId()}").status_code == 404


def test_find_by_user_and_product(client, parties, make_user, make_product, make_swap_order):
    users, products = parties
    outsider = make_user()
    other_product = make_product()
    order = make_swap_order(products, users)
    make_swap_order([products[1], other_product], [users[1], outsider])

    by_user = client.get(f"/swap-orders/user/{users[0]['_id']}")
    assert by_user.status_code == 200
    assert [o["_id"] for o in by_user.json()] == [order["_id"]]
    assert any(u["_id"] == users[0]["_id"] for u in by_user.json()[0]["users"])

    by_product = client.get(f"/swap-orders/product/{products[1]['_id']}")
    assert by_product.status_code == 200
    assert len(by_product.json()) == 2

    assert client.get("/swap-orders/user/1").json() == []
    assert client.get(f"/swap-orders/product/{ObjectId()}").json() == []


def test_update_swap_order(client, parties, make_user, make_swap_order):
    users, products = parties
    order = make_swap_order(products, users)
    newcomer = make_user()
    response = client.put(
        f"/swap-orders/{order['_id']}",
        json={"users": [users[1]["_id"], newcomer["_id"]]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["_id"] == order["_id"]
    assert body["users"] == [users[1]["_id"], newcomer["_id"]]
    assert body["products"] == order["products"]


def test_update_swap_order_invalid(client, parties, make_swap_order):
    users, products = parties
    order = make_swap_order(products, users)
    response = client.put(
        f"/swap-orders/{order['_id']}",
        json={"products": [products[1]["_id"]], "users": [users[0]["_id"]]},
    )
    assert response.status_code == 400
    assert client.get(f"/swap-orders/{order['_id']}").json()["products"] == products


def test_update_unknown_swap_order(client):
    response = client.put(
        "/swap-orders/non-existent-id",
        json={"products": ["new-product", "new-product2"], "users": ["new-user", "new-user2"]},
    )
    assert response.status_code == 404


def test_delete_swap_order(client, parties, make_swap_order):
    users, products = parties
    order = make_swap_order(products, users)
    response = client.delete(f"/swap-orders/{order['_id']}")
    assert response.status_code == 200
    assert response.json()["_id"] == order["_id"]
    # users and products are untouched
    assert len(client.get("/users").json()) == 2
    assert len(client.get("/products").json()) == 2


def test_delete_unknown_swap_order(client):
    assert client.delete("/swap-orders/non-existent-id").status_code == 404


def test_user_deletion_cascades(client, parties, make_swap_order):
    users, products = parties
    orders = [make_swap_order(products, users) for _ in range(3)]

    response = client.delete(f"/users/{users[0]['_id']}")
    assert response.status_code == 200
    assert response.json()[1]["deletedCount"] == 3

    for order in orders:
        assert client.get(f"/swap-orders/{order['_id']}").status_code == 404
    assert client.get(f"/swap-orders/user/{users[0]['_id']}").json() == []
    assert client.get(f"/swap-orders/user/{users[1]['_id']}").json() == []


def test_product_deletion_cascades(client, parties, make_swap_order):
    users, products = parties
    order = make_swap_order(products, users)

    response = client.delete(f"/products/{products[0]['_id']}")
    assert response.status_code == 200
    assert response.json()[1]["deletedCount"] == 1

    assert client.get(f"/swap-orders/{order['_id']}").status_code == 404
    assert client.get(f"/swap-orders/product/{products[0]['_id']}").json() == []


@pytest.mark.parametrize("path,count_key", [("/users", "deletedSwapOrders"), ("/products", "deletedSwapOrders")])
def test_bulk_delete_removes_every_swap_order(client, parties, make_swap_order, path, count_key):
    users, products = parties
    make_swap_order(products, users)
    # an order naming nothing that exists is removed as well
    client.post(
        "/swap-orders",
        json={"products": [str(ObjectId()), str(ObjectId())], "users": [str(ObjectId()), str(ObjectId())]},
    )

    response = client.delete(path)
    assert response.status_code == 200
    assert response.json()[count_key] == 2
    assert client.get("/swap-orders").json() == []


def test_delete_all_swap_orders(client, parties, make_swap_order):
    users, products = parties
    make_swap_order(products, users)
    response = client.delete("/swap-orders")
    assert response.status_code == 200
    assert response.json() == {"message": "All swap orders deleted", "deletedSwapOrders": 1}
    assert client.get("/swap-orders").json() == []


def test_cascade_failure_is_reported(store, parties, make_swap_order, client, monkeypatch):
    users, products = parties
    make_swap_order(products, users)

    async def broken_delete_all(filter=None):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(store.swap_orders, "delete_all", broken_delete_all)
    response = client.delete(f"/users/{users[0]['_id']}")
    assert response.status_code == 500
    assert users[0]["_id"] in response.json()["error"]
    assert client.get(f"/users/{users[0]['_id']}").status_code == 404


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "up"}


def test_unexpected_store_failure_is_500(store, monkeypatch):
    async def broken_find_all(filter=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(store.users, "find_all", broken_find_all)
    with TestClient(create_app(store=store), raise_server_exceptions=False) as client:
        response = client.get("/users")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
