"""
Shared fixtures.

The app runs against an in-memory mongomock database and the mock payment
service, both injected through FastAPI dependency overrides. The lifespan is
not started, so no real MongoDB connection is attempted.
"""

import os

os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-token-secret")
os.environ.setdefault("ENV_MODE", "development")

import mongomock
import pytest
from fastapi.testclient import TestClient

from bistro.core.config import get_settings
from bistro.core.security import issue_token
from bistro.database import ensure_indexes, get_db
from bistro.main import app
from bistro.models import Collections, UserRole
from bistro.services.payment import MockPaymentService, get_payment_service

ADMIN_EMAIL = "admin@bistroboss.com"
CUSTOMER_EMAIL = "jane@bistroboss.com"


def bearer(email: str) -> dict[str, str]:
    """Authorization header for a token carrying ``email``."""
    return {"Authorization": f"Bearer {issue_token({'email': email})}"}


@pytest.fixture
def db():
    database = mongomock.MongoClient()["bistro-test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def payment_service():
    return MockPaymentService(failure_rate=0.0, min_latency=0.0, max_latency=0.0)


@pytest.fixture
def client(db, payment_service):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_payment_service] = lambda: payment_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(db):
    db[Collections.USERS].insert_one(
        {"email": ADMIN_EMAIL, "name": "Boss", "role": UserRole.ADMIN.value}
    )
    return bearer(ADMIN_EMAIL)


@pytest.fixture
def customer_headers(db):
    db[Collections.USERS].insert_one({"email": CUSTOMER_EMAIL, "name": "Jane"})
    return bearer(CUSTOMER_EMAIL)


@pytest.fixture
def settings_env(monkeypatch):
    """Set environment overrides and reload settings; restored afterwards."""
    def apply(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

    yield apply
    get_settings.cache_clear()
