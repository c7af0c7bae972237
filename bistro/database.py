"""
Database Connection Module

Handles the MongoDB connection using the PyMongo driver.
The client is created once in the application lifespan and stored on
``app.state``; route handlers receive the Database through the ``get_db``
dependency, which tests override with an in-memory database.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from bistro.core.config import Settings
from bistro.models import Collections

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> MongoClient:
    """
    Create the long-lived MongoDB client.

    The driver pools connections internally, so one client is shared by
    every request for the lifetime of the process.
    """
    client = MongoClient(
        settings.db_uri,
        serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
        tz_aware=True,
    )
    logger.info(f"MongoDB client created for database '{settings.database_name}'")
    return client


def init_db(db: Database) -> None:
    """
    Ping the deployment and create the indexes the API relies on.
    Called once at application startup.
    """
    db.client.admin.command("ping")
    logger.info("Pinged MongoDB deployment")
    ensure_indexes(db)


def ensure_indexes(db: Database) -> None:
    """Create uniqueness and lookup indexes (idempotent)."""
    db[Collections.USERS].create_index(
        [("email", ASCENDING)], unique=True, name="email_unique"
    )
    db[Collections.MENU].create_index(
        [("name", ASCENDING), ("category", ASCENDING), ("price", ASCENDING)],
        unique=True,
        name="name_category_price_unique",
    )
    db[Collections.CARTS].create_index([("email", ASCENDING)], name="cart_owner")
    db[Collections.PAYMENTS].create_index([("email", ASCENDING)], name="payment_owner")
    logger.debug("MongoDB indexes ensured")


def get_db(request: Request) -> Database:
    """
    Dependency injection for FastAPI routes.
    Returns the Database handle opened by the lifespan.
    """
    return request.app.state.db


# =============================================================================
# SERIALIZATION HELPERS
# =============================================================================

def serialize_doc(doc: Any) -> Any:
    """
    Convert a BSON document into JSON-friendly values.

    ObjectIds become their hex string, datetimes become ISO-8601 strings.
    Nested lists and dicts are converted recursively.
    """
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    if isinstance(doc, dict):
        return {k: serialize_doc(v) for k, v in doc.items()}
    if isinstance(doc, list):
        return [serialize_doc(v) for v in doc]
    return doc


def serialize_docs(docs) -> list[dict]:
    return [serialize_doc(d) for d in docs]


def _id_or_none(value: Optional[Any]) -> Optional[str]:
    return str(value) if value is not None else None


def insert_result_to_dict(result) -> dict[str, Any]:
    """Render an InsertOneResult the way the MongoDB wire protocol reports it."""
    return {
        "acknowledged": result.acknowledged,
        "insertedId": _id_or_none(result.inserted_id),
    }


def update_result_to_dict(result) -> dict[str, Any]:
    """Render an UpdateResult the way the MongoDB wire protocol reports it."""
    upserted_id = _id_or_none(result.upserted_id)
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedCount": 1 if upserted_id else 0,
        "upsertedId": upserted_id,
    }


def delete_result_to_dict(result) -> dict[str, Any]:
    """Render a DeleteResult the way the MongoDB wire protocol reports it."""
    return {
        "acknowledged": result.acknowledged,
        "deletedCount": result.deleted_count,
    }
