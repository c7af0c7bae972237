"""
                        Services Module

Business logic that sits behind the routers.

Services:
    - payment: Stripe PaymentIntent creation (Mock in development)
    - stats: Aggregation reports for the admin dashboard
"""

from bistro.services.payment import get_payment_service

__all__ = ["get_payment_service"]
