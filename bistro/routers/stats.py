"""Admin dashboard reports."""

from fastapi import APIRouter, Depends
from pymongo.database import Database

from bistro.database import get_db
from bistro.dependencies import require_admin
from bistro.schemas import AdminStats, OrderStat
from bistro.services import stats

router = APIRouter(tags=["Stats"], dependencies=[Depends(require_admin)])


@router.get("/admin-stats", response_model=AdminStats)
def admin_stats(db: Database = Depends(get_db)) -> AdminStats:
    return AdminStats(**stats.admin_stats(db))


@router.get("/order-stats", response_model=list[OrderStat])
def order_stats(db: Database = Depends(get_db)) -> list[OrderStat]:
    return [OrderStat(**row) for row in stats.order_stats(db)]
