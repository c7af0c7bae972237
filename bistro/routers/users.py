"""
User Endpoints

Users are created on first sign-in (idempotent by email) and can be
promoted to admin or removed by an existing admin.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from bistro.core.errors import Forbidden
from bistro.database import (
    delete_result_to_dict,
    get_db,
    insert_result_to_dict,
    serialize_docs,
    update_result_to_dict,
)
from bistro.dependencies import bearer_claims, is_admin, require_admin
from bistro.models import Collections, UserRole, object_id
from bistro.schemas import AdminStatusResponse, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])

ALREADY_EXISTS = {"message": "Already exists"}


@router.get("/users", dependencies=[Depends(require_admin)])
def list_users(db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    """All registered users (admin only)."""
    return serialize_docs(db[Collections.USERS].find())


@router.get("/users/admin/{email}", response_model=AdminStatusResponse)
def admin_status(
    email: str,
    claims: dict[str, Any] = Depends(bearer_claims),
    db: Database = Depends(get_db),
) -> AdminStatusResponse:
    """Tell the caller whether they are an admin. Callers may only ask about themselves."""
    if email != claims.get("email"):
        raise Forbidden()
    return AdminStatusResponse(admin=is_admin(db, email))


@router.post("/users")
def create_user(payload: UserCreate, db: Database = Depends(get_db)) -> dict[str, Any]:
    users = db[Collections.USERS]

    if users.find_one({"email": payload.email}):
        return ALREADY_EXISTS

    try:
        result = users.insert_one(payload.to_document())
    except DuplicateKeyError:
        # Lost a race with a concurrent sign-in for the same email
        return ALREADY_EXISTS

    logger.info(f"User created: {payload.email}")
    return insert_result_to_dict(result)


@router.patch("/users/{user_id}", dependencies=[Depends(require_admin)])
def promote_user(user_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    """Grant the admin role. There is no demotion endpoint."""
    result = db[Collections.USERS].update_one(
        {"_id": object_id(user_id)},
        {"$set": {"role": UserRole.ADMIN.value}},
    )
    logger.info(f"User {user_id} promoted to admin (matched={result.matched_count})")
    return update_result_to_dict(result)


@router.delete("/users/{user_id}", dependencies=[Depends(require_admin)])
def delete_user(user_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    result = db[Collections.USERS].delete_one({"_id": object_id(user_id)})
    logger.info(f"User {user_id} deleted (count={result.deleted_count})")
    return delete_result_to_dict(result)
