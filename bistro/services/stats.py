"""
Reporting Queries

Read-only aggregations over the payments collection used by the admin
dashboard.
"""

import logging
from typing import Any

from pymongo.database import Database

from bistro.models import Collections, UserRole

logger = logging.getLogger(__name__)


REVENUE_PIPELINE: list[dict[str, Any]] = [
    {"$group": {"_id": None, "totalRevenue": {"$sum": "$price"}}},
]

ORDER_STATS_PIPELINE: list[dict[str, Any]] = [
    {"$unwind": "$menuItemIds"},
    {
        "$lookup": {
            "from": Collections.MENU,
            "localField": "menuItemIds",
            "foreignField": "_id",
            "as": "menuItems",
        }
    },
    {"$unwind": "$menuItems"},
    {"$match": {"menuItems.category": {"$exists": True, "$ne": None}}},
    {
        "$group": {
            "_id": "$menuItems.category",
            "quantity": {"$sum": 1},
            "revenue": {"$sum": "$menuItems.price"},
        }
    },
    {"$project": {"_id": 0, "category": "$_id", "quantity": 1, "revenue": 1}},
    {"$sort": {"category": 1}},
]


def admin_stats(db: Database) -> dict[str, Any]:
    """
    Headline numbers for the admin dashboard.

    Customers are users without the admin role; revenue is the sum of
    recorded payment prices, 0 when nothing has been paid yet.
    """
    customers = db[Collections.USERS].count_documents(
        {"role": {"$ne": UserRole.ADMIN.value}}
    )
    products = db[Collections.MENU].count_documents({})
    orders = db[Collections.PAYMENTS].count_documents({})

    revenue_rows = list(db[Collections.PAYMENTS].aggregate(REVENUE_PIPELINE))
    total_revenue = revenue_rows[0]["totalRevenue"] if revenue_rows else 0

    logger.debug(
        f"Admin stats: customers={customers} products={products} "
        f"orders={orders} revenue={total_revenue}"
    )

    return {
        "customers": customers,
        "products": products,
        "orders": orders,
        "totalRevenue": total_revenue,
    }


def order_stats(db: Database) -> list[dict[str, Any]]:
    """
    Units sold and revenue per menu category across all payments.

    Menu documents without a category are left out of the report.
    """
    return list(db[Collections.PAYMENTS].aggregate(ORDER_STATS_PIPELINE))
