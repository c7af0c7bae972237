from bistro.models import Collections

from tests.conftest import CUSTOMER_EMAIL


def test_add_and_list_cart_items(client, customer_headers):
    client.post("/carts", json={"email": CUSTOMER_EMAIL, "menuId": "m1", "price": 5}, headers=customer_headers)
    client.post("/carts", json={"email": "other@bistroboss.com", "menuId": "m2"}, headers=customer_headers)

    items = client.get("/carts", params={"email": CUSTOMER_EMAIL}, headers=customer_headers).json()

    assert len(items) == 1
    assert items[0]["menuId"] == "m1"


def test_list_cart_without_email_is_empty(client, db, customer_headers):
    db[Collections.CARTS].insert_one({"email": CUSTOMER_EMAIL})
    assert client.get("/carts", headers=customer_headers).json() == []


def test_remove_cart_item(client, db, customer_headers):
    item_id = str(db[Collections.CARTS].insert_one({"email": CUSTOMER_EMAIL}).inserted_id)

    response = client.delete(f"/carts/{item_id}", headers=customer_headers)

    assert response.json() == {"acknowledged": True, "deletedCount": 1}
    assert db[Collections.CARTS].count_documents({}) == 0


def test_carts_require_token_by_default(client):
    assert client.get("/carts", params={"email": CUSTOMER_EMAIL}).status_code == 401
    assert client.post("/carts", json={"email": CUSTOMER_EMAIL}).status_code == 401


def test_carts_open_when_protection_disabled(client, settings_env):
    settings_env(PROTECT_CARTS="false")

    created = client.post("/carts", json={"email": CUSTOMER_EMAIL, "menuId": "m1"})

    assert created.json()["acknowledged"] is True
    assert len(client.get("/carts", params={"email": CUSTOMER_EMAIL}).json()) == 1
