import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from bistro.database import get_db
from bistro.main import app
from bistro.models import Collections
from bistro.services.payment import MockPaymentService, get_payment_service

from tests.conftest import ADMIN_EMAIL, CUSTOMER_EMAIL


@pytest.fixture
def cart_ids(db):
    carts = db[Collections.CARTS]
    return [
        str(carts.insert_one({"email": CUSTOMER_EMAIL, "name": name}).inserted_id)
        for name in ("salad", "soup", "pizza")
    ]


def payment_body(cart_ids, menu_ids=()):
    return {
        "email": CUSTOMER_EMAIL,
        "price": 21.5,
        "transactionId": "pi_test_123",
        "cartIds": list(cart_ids),
        "menuItemIds": list(menu_ids),
        "status": "pending",
    }


def test_create_payment_intent(client, customer_headers):
    response = client.post("/create-payment-intent", json={"price": 21.5}, headers=customer_headers)

    assert response.status_code == 200
    assert response.json()["clientSecret"].startswith("pi_mock_")


def test_create_payment_intent_requires_token(client):
    assert client.post("/create-payment-intent", json={"price": 21.5}).status_code == 401


def test_create_payment_intent_rejects_non_positive_price(client, customer_headers):
    response = client.post("/create-payment-intent", json={"price": 0}, headers=customer_headers)
    assert response.status_code == 422


def test_payment_provider_failure_in_error_envelope(client, customer_headers):
    app.dependency_overrides[get_payment_service] = lambda: MockPaymentService(
        failure_rate=1.0, min_latency=0.0, max_latency=0.0
    )

    response = client.post("/create-payment-intent", json={"price": 10}, headers=customer_headers)

    assert response.status_code == 200
    assert response.json()["error"] is True


def test_recording_payment_clears_paid_cart_items(client, db, customer_headers, cart_ids):
    paid, unpaid = cart_ids[:2], cart_ids[2]

    response = client.post("/payments", json=payment_body(paid), headers=customer_headers)

    body = response.json()
    assert body["paymentResult"]["acknowledged"] is True
    assert body["deleteResult"]["deletedCount"] == 2

    remaining = client.get("/carts", params={"email": CUSTOMER_EMAIL}, headers=customer_headers).json()
    assert [item["_id"] for item in remaining] == [unpaid]


def test_payment_stores_menu_item_ids_as_object_ids(client, db, customer_headers, cart_ids):
    menu_id = ObjectId()

    client.post("/payments", json=payment_body(cart_ids, [str(menu_id)]), headers=customer_headers)

    stored = db[Collections.PAYMENTS].find_one({"email": CUSTOMER_EMAIL})
    assert stored["menuItemIds"] == [menu_id]
    assert stored["cartIds"] == cart_ids
    assert stored["date"] is not None


def test_invalid_cart_id_records_nothing(client, db, customer_headers, cart_ids):
    response = client.post("/payments", json=payment_body(["bogus"]), headers=customer_headers)

    assert response.json()["error"] is True
    assert db[Collections.PAYMENTS].count_documents({}) == 0
    assert db[Collections.CARTS].count_documents({}) == 3


class _FailingCollection:
    def __init__(self, collection):
        self._collection = collection

    def delete_many(self, filter, *args, **kwargs):
        # removes the first matching item, then fails
        first = filter["_id"]["$in"][0]
        self._collection.delete_one({"_id": first})
        raise OperationFailure("cart cleanup failed")

    def __getattr__(self, name):
        return getattr(self._collection, name)


class _FailingCartsDatabase:
    def __init__(self, db):
        self._db = db

    def __getitem__(self, name):
        if name == Collections.CARTS:
            return _FailingCollection(self._db[name])
        return self._db[name]


def test_payment_kept_when_cart_cleanup_fails_midway(client, db, customer_headers, cart_ids):
    app.dependency_overrides[get_db] = lambda: _FailingCartsDatabase(db)

    response = client.post("/payments", json=payment_body(cart_ids), headers=customer_headers)

    body = response.json()
    assert response.status_code == 200
    assert body["error"] is True
    assert "cart cleanup failed" in body["message"]

    payment = db[Collections.PAYMENTS].find_one({"email": CUSTOMER_EMAIL})
    assert payment is not None
    assert payment["transactionId"] == "pi_test_123"
    assert payment["pendingCartIds"] == cart_ids[1:]
    assert db[Collections.CARTS].count_documents({}) == 2


def test_payment_history_is_self_only(client, db, customer_headers, admin_headers, cart_ids):
    client.post("/payments", json=payment_body(cart_ids), headers=customer_headers)

    own = client.get(f"/payments/{CUSTOMER_EMAIL}", headers=customer_headers)
    assert len(own.json()) == 1
    assert own.json()[0]["transactionId"] == "pi_test_123"

    assert client.get(f"/payments/{CUSTOMER_EMAIL}", headers=admin_headers).status_code == 403
    assert client.get(f"/payments/{ADMIN_EMAIL}", headers=admin_headers).json() == []
