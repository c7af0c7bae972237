"""Customer reviews (read only)."""

from typing import Any

from fastapi import APIRouter, Depends
from pymongo.database import Database

from bistro.database import get_db, serialize_docs
from bistro.models import Collections

router = APIRouter(tags=["Reviews"])


@router.get("/reviews")
def list_reviews(db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    return serialize_docs(db[Collections.REVIEWS].find())
