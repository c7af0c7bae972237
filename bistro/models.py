"""
MongoDB Document Models

Collection names, the user role enum and the id conversion helpers shared
by the route handlers. Document shapes themselves are validated by the
Pydantic schemas in bistro.schemas; the store keeps whatever extra fields
the client sends.
"""

import enum
from typing import Iterable

from bson import ObjectId


class Collections:
    """Names of the collections in the bistro database."""
    USERS = "users"
    MENU = "menu"
    REVIEWS = "reviews"
    CARTS = "carts"
    PAYMENTS = "payments"


class UserRole(str, enum.Enum):
    """Stored user roles. A user without a role is a customer."""
    ADMIN = "admin"


def object_id(value: str) -> ObjectId:
    """
    Parse a path parameter into an ObjectId.

    Raises:
        bson.errors.InvalidId: If the value is not a 24-hex string
    """
    return ObjectId(value)


def object_ids(values: Iterable[str]) -> list[ObjectId]:
    """Parse every value, failing on the first invalid one."""
    return [ObjectId(v) for v in values]


def coerce_object_ids(values: Iterable) -> list:
    """Convert valid ObjectId strings, leaving anything else untouched."""
    return [
        ObjectId(v) if isinstance(v, str) and ObjectId.is_valid(v) else v
        for v in values
    ]
