"""
Menu Endpoints

Public catalog reads; writes are admin only. A menu item is a duplicate
when another item has the same name, category and price.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from bistro.database import (
    delete_result_to_dict,
    get_db,
    insert_result_to_dict,
    serialize_doc,
    serialize_docs,
    update_result_to_dict,
)
from bistro.dependencies import require_admin
from bistro.models import Collections, object_id
from bistro.schemas import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Menu"])

ALREADY_EXISTS = {"message": "Already exists"}


@router.get("/menu")
def list_menu(db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    return serialize_docs(db[Collections.MENU].find())


@router.get("/menu/{item_id}")
def get_menu_item(item_id: str, db: Database = Depends(get_db)) -> Optional[dict[str, Any]]:
    """Single menu item, or null when no item has this id."""
    return serialize_doc(db[Collections.MENU].find_one({"_id": object_id(item_id)}))


@router.post("/menu", dependencies=[Depends(require_admin)])
def create_menu_item(
    payload: MenuItemCreate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    menu = db[Collections.MENU]
    duplicate_filter = {
        "name": payload.name,
        "category": payload.category,
        "price": payload.price,
    }

    if menu.find_one(duplicate_filter):
        logger.info(f"Menu item already exists: {payload.name} ({payload.category})")
        return ALREADY_EXISTS

    try:
        result = menu.insert_one(payload.to_document())
    except DuplicateKeyError:
        return ALREADY_EXISTS

    logger.info(f"Menu item created: {payload.name} ({payload.category})")
    return insert_result_to_dict(result)


@router.patch("/menu/{item_id}", dependencies=[Depends(require_admin)])
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    result = db[Collections.MENU].update_one(
        {"_id": object_id(item_id)},
        {"$set": payload.to_update()},
    )
    return update_result_to_dict(result)


@router.delete("/menu/{item_id}", dependencies=[Depends(require_admin)])
def delete_menu_item(item_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    result = db[Collections.MENU].delete_one({"_id": object_id(item_id)})
    logger.info(f"Menu item {item_id} deleted (count={result.deleted_count})")
    return delete_result_to_dict(result)
