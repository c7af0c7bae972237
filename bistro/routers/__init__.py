"""
API Routers

One router per resource; bistro.main mounts them all at the root path.
"""

from bistro.routers import auth, carts, menu, payments, reviews, stats, users

all_routers = [
    auth.router,
    users.router,
    menu.router,
    reviews.router,
    carts.router,
    payments.router,
    stats.router,
]

__all__ = ["all_routers"]
