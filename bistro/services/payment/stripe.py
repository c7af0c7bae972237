"""
Stripe Payment Service Implementation

Used when ENV_MODE=staging or ENV_MODE=production. Requires
STRIPE_SECRET_KEY; client secrets are never logged.
"""

import asyncio
import logging

import stripe

from bistro.core.config import get_settings
from bistro.services.payment.base import (
    BasePaymentService,
    PaymentIntentResult,
)

logger = logging.getLogger(__name__)


class StripePaymentService(BasePaymentService):
    """Card PaymentIntents through the Stripe SDK; SDK calls run in a worker thread."""

    def __init__(self):
        """
        Raises:
            ValueError: If STRIPE_SECRET_KEY is not configured
        """
        settings = get_settings()

        if not settings.stripe_secret_key:
            raise ValueError(
                "STRIPE_SECRET_KEY is required outside development mode. "
                "Set it in your .env file or environment variables."
            )

        stripe.api_key = settings.stripe_secret_key
        self._currency = settings.stripe_currency

        logger.info(f"StripePaymentService initialized (currency={self._currency})")

    @property
    def provider_name(self) -> str:
        return "stripe"

    async def create_payment_intent(self, amount: float) -> PaymentIntentResult:
        if amount <= 0:
            return PaymentIntentResult.failed("invalid_amount", "Amount must be greater than 0")

        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.create,
                amount=self.to_cents(amount),
                currency=self._currency,
                payment_method_types=["card"],
            )
        except stripe.AuthenticationError as e:
            logger.critical(f"Stripe: Authentication failed - {e}")
            return PaymentIntentResult.failed(
                "authentication_error", "Payment service configuration error"
            )
        except stripe.APIConnectionError as e:
            logger.error(f"Stripe: Connection error - {e}")
            return PaymentIntentResult.failed(
                "connection_error", "Payment service temporarily unavailable"
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe: Failed to create PaymentIntent - {e}")
            return PaymentIntentResult.failed(
                e.code or "stripe_error", e.user_message or str(e)
            )

        logger.info(f"Stripe: PaymentIntent {intent.id} created - status={intent.status}")
        return PaymentIntentResult(success=True, client_secret=intent.client_secret)

    async def health_check(self) -> bool:
        """Lightweight account lookup to confirm credentials and connectivity."""
        try:
            await asyncio.to_thread(stripe.Account.retrieve)
        except stripe.StripeError as e:
            logger.error(f"Stripe: Health check failed - {e}")
            return False
        return True
