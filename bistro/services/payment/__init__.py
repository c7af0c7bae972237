"""
Payment Service Factory

    ENV_MODE=development -> MockPaymentService (no API calls)
    ENV_MODE=staging     -> StripePaymentService (test keys)
    ENV_MODE=production  -> StripePaymentService (live keys)

``get_payment_service`` doubles as the FastAPI dependency; tests override it.
"""

import logging
from functools import lru_cache

from bistro.core.config import get_settings
from bistro.services.payment.base import (
    BasePaymentService,
    PaymentIntentResult,
)
from bistro.services.payment.mock import MockPaymentService
from bistro.services.payment.stripe import StripePaymentService

logger = logging.getLogger(__name__)


@lru_cache()
def get_payment_service() -> BasePaymentService:
    """
    Provider for the current ENV_MODE, created once per process.

    Raises:
        ValueError: Outside development mode without a Stripe key
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Payment Service: Using MockPaymentService (development mode)")
        return MockPaymentService()

    logger.info(f"Payment Service: Using StripePaymentService ({settings.env_mode.value} mode)")
    return StripePaymentService()


__all__ = [
    "get_payment_service",
    "BasePaymentService",
    "PaymentIntentResult",
    "MockPaymentService",
    "StripePaymentService",
]
