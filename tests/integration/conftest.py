import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pantry.api import cart_router, item_router, order_router, pantry_router, register_error_handlers

_ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(item_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(pantry_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def stock_item(client):
    """Factory: stock an item through the API and return its id."""

    def _stock(name="Rice", quantity=10, pantry_id="pantry-001"):
        response = client.post(
            "/items",
            json={"name": name, "pantry_id": pantry_id, "quantity": quantity},
            headers=_ADMIN,
        )
        assert response.status_code == 201
        return response.json()["item_id"]

    return _stock
