# tests/test_main.py

"""
API tests for the Inventory Service.
These tests drive the FastAPI application through TestClient against a
freshly seeded in-memory backend (three sample products, ids 1-3).
"""

import pytest
from fastapi.testclient import TestClient

from inventory_service.backends import MemoryBackend
from inventory_service.main import create_app

DESK = {"name": "Desk", "category": "Furniture", "quantity": 5, "price": 49.5}


def test_health_check_memory_mode(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "mode": "memory"}


def test_health_check_postgresql_mode(sql_backend):
    client = TestClient(create_app(sql_backend))
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "mode": "postgresql"}


def test_list_products_seeded(client: TestClient):
    response = client.get("/api/products")
    assert response.status_code == 200
    products = response.json()
    assert [p["id"] for p in products] == [3, 2, 1]
    assert {p["name"] for p in products} == {"Laptop Pro", "Wireless Mouse", "Office Chair"}
    for product in products:
        assert set(product) == {
            "id",
            "name",
            "category",
            "quantity",
            "price",
            "description",
            "created_at",
            "updated_at",
        }


def test_stats_seeded(client: TestClient):
    response = client.get("/api/stats")
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_products"] == 3
    assert stats["categories"] == 2
    assert stats["total_items"] == 15 + 45 + 8
    assert stats["total_value"] == pytest.approx(15 * 1299.99 + 45 * 29.99 + 8 * 199.99)


def test_create_product_success(client: TestClient):
    response = client.post("/api/products", json=DESK)
    assert response.status_code == 200
    assert response.json() == {"id": 4, "message": "Product created successfully"}

    product = client.get("/api/products/4").json()
    assert product["name"] == "Desk"
    assert product["category"] == "Furniture"
    assert product["quantity"] == 5
    assert product["price"] == 49.5
    assert product["description"] == ""
    assert product["created_at"] == product["updated_at"]


def test_create_product_accepts_zero_quantity_and_price(client: TestClient):
    payload = {**DESK, "quantity": 0, "price": 0, "description": "Display model"}
    response = client.post("/api/products", json=payload)
    assert response.status_code == 200

    product = client.get(f"/api/products/{response.json()['id']}").json()
    assert product["quantity"] == 0
    assert product["price"] == 0
    assert product["description"] == "Display model"


@pytest.mark.parametrize("field", ["name", "category", "quantity", "price"])
def test_create_product_missing_required_field(client: TestClient, field):
    payload = {k: v for k, v in DESK.items() if k != field}
    response = client.post("/api/products", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert client.get("/api/stats").json()["total_products"] == 3


def test_create_product_empty_name_rejected(client: TestClient):
    response = client.post("/api/products", json={**DESK, "name": ""})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


@pytest.mark.parametrize("field", ["quantity", "price"])
@pytest.mark.parametrize("value", ["", None, "many"])
def test_create_product_unusable_number_is_present_but_fails(backend, field, value):
    # Presence only looks at which keys were sent; conversion fails in storage.
    client = TestClient(create_app(backend))
    count = client.get("/api/stats").json()["total_products"]

    response = client.post("/api/products", json={**DESK, field: value})
    assert response.status_code == 500
    assert "error" in response.json()
    assert client.get("/api/stats").json()["total_products"] == count


def test_create_product_numeric_strings_are_converted(backend):
    client = TestClient(create_app(backend))
    response = client.post("/api/products", json={**DESK, "quantity": "7", "price": "12.5"})
    assert response.status_code == 200

    product = client.get(f"/api/products/{response.json()['id']}").json()
    assert product["quantity"] == 7
    assert product["price"] == 12.5


def test_create_product_malformed_body_rejected(client: TestClient):
    response = client.post(
        "/api/products",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_get_product_not_found(client: TestClient):
    response = client.get("/api/products/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


@pytest.mark.parametrize("product_id", ["abc", "99999999999999999999", "-99999999999"])
def test_unusable_id_is_not_found(backend, product_id):
    client = TestClient(create_app(backend))
    for response in (
        client.get(f"/api/products/{product_id}"),
        client.put(f"/api/products/{product_id}", json=DESK),
        client.delete(f"/api/products/{product_id}"),
    ):
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}


def test_update_product_full(client: TestClient, memory_backend):
    before = memory_backend.get_product(1)
    update = {
        "name": "Laptop Pro 2",
        "category": "Computers",
        "quantity": 3,
        "price": 1499.0,
        "description": "Refreshed model",
    }
    response = client.put("/api/products/1", json=update)
    assert response.status_code == 200
    assert response.json() == {"message": "Product updated successfully"}

    product = client.get("/api/products/1").json()
    for key, value in update.items():
        assert product[key] == value

    after = memory_backend.get_product(1)
    assert after["created_at"] == before["created_at"]
    assert after["updated_at"] > before["updated_at"]


def test_update_product_clears_absent_description(client: TestClient):
    update = {"name": "Chair", "category": "Furniture", "quantity": 8, "price": 199.99}
    response = client.put("/api/products/3", json=update)
    assert response.status_code == 200
    assert client.get("/api/products/3").json()["description"] == ""


def test_update_product_not_found(client: TestClient):
    response = client.put("/api/products/999", json=DESK)
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_update_product_missing_fields_is_not_a_validation_error(client: TestClient):
    # Update does not check presence; the storage layer rejects the null column.
    response = client.put("/api/products/1", json={"category": "Electronics"})
    assert response.status_code == 500
    assert response.json() == {"error": 'Missing value for column "name"'}
    assert client.get("/api/products/1").json()["name"] == "Laptop Pro"


def test_delete_product_success(client: TestClient):
    response = client.delete("/api/products/2")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}

    get_response = client.get("/api/products/2")
    assert get_response.status_code == 404
    assert get_response.json() == {"error": "Product not found"}
    assert client.get("/api/stats").json()["total_products"] == 2


def test_delete_product_not_found(client: TestClient):
    response = client.delete("/api/products/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_ids_are_not_reused_after_delete(client: TestClient):
    client.delete("/api/products/3")
    response = client.post("/api/products", json=DESK)
    assert response.json()["id"] == 4


class BrokenBackend(MemoryBackend):
    def list_products(self):
        raise RuntimeError("connection to server was lost")

    def get_stats(self):
        raise RuntimeError("relation \"products\" does not exist")


def test_backend_failure_returns_internal_error():
    client = TestClient(create_app(BrokenBackend()))

    response = client.get("/api/products")
    assert response.status_code == 500
    assert response.json() == {"error": "connection to server was lost"}

    response = client.get("/api/stats")
    assert response.status_code == 500
    assert "does not exist" in response.json()["error"]

    # Other requests keep working
    assert client.get("/api/products/1").status_code == 200
    assert client.get("/health").status_code == 200


def test_unknown_route_uses_error_shape(client: TestClient):
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert "error" in response.json()


def test_api_against_relational_backend(sql_backend):
    client = TestClient(create_app(sql_backend))

    assert client.get("/api/stats").json()["total_products"] == 5

    created = client.post("/api/products", json=DESK).json()
    product = client.get(f"/api/products/{created['id']}").json()
    assert product["quantity"] == 5
    assert product["price"] == 49.5
    assert product["description"] == ""

    assert client.put("/api/products/999", json=DESK).status_code == 404
    assert client.delete(f"/api/products/{created['id']}").status_code == 200
    assert client.get(f"/api/products/{created['id']}").status_code == 404
