"""
Cart Endpoints

Each add-to-cart action stores one cart item owned by an email. Items are
removed one at a time here, or in bulk when a payment is recorded.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from bistro.database import (
    delete_result_to_dict,
    get_db,
    insert_result_to_dict,
    serialize_docs,
)
from bistro.dependencies import cart_access
from bistro.models import Collections, object_id
from bistro.schemas import CartItemCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Carts"], dependencies=[Depends(cart_access)])


@router.get("/carts")
def list_cart(
    email: Optional[str] = Query(None),
    db: Database = Depends(get_db),
) -> list[dict[str, Any]]:
    """Cart items owned by ``email``; empty when no email is given."""
    if not email:
        return []
    return serialize_docs(db[Collections.CARTS].find({"email": email}))


@router.post("/carts")
def add_to_cart(payload: CartItemCreate, db: Database = Depends(get_db)) -> dict[str, Any]:
    result = db[Collections.CARTS].insert_one(payload.to_document())
    logger.debug(f"Cart item {result.inserted_id} added for {payload.email}")
    return insert_result_to_dict(result)


@router.delete("/carts/{item_id}")
def remove_from_cart(item_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    result = db[Collections.CARTS].delete_one({"_id": object_id(item_id)})
    return delete_result_to_dict(result)
