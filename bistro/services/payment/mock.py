"""
Mock Payment Service Implementation

Stands in for Stripe in development mode (ENV_MODE=development) and in
the test suite. Hands out Stripe-shaped client secrets
(pi_mock_xxx_secret_xxx) after a configurable delay, and can be told to
fail a share of requests.
"""

import asyncio
import random
import uuid
import logging

from bistro.services.payment.base import (
    BasePaymentService,
    PaymentIntentResult,
)

logger = logging.getLogger(__name__)


class MockPaymentService(BasePaymentService):
    """
    Attributes:
        failure_rate: Probability of a simulated provider failure (0.0-1.0)
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
    """

    FAILURE_REASONS = [
        ("api_connection_error", "Payment service temporarily unavailable"),
        ("rate_limit", "Too many requests made to the API too quickly"),
        ("processing_error", "An error occurred while processing the request."),
    ]

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.05,
        max_latency: float = 0.2,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency

        logger.info(
            f"MockPaymentService initialized "
            f"(failure_rate={failure_rate:.0%}, "
            f"latency={min_latency}-{max_latency}s)"
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    async def create_payment_intent(self, amount: float) -> PaymentIntentResult:
        if amount <= 0:
            return PaymentIntentResult.failed("invalid_amount", "Amount must be greater than 0")

        await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

        if random.random() < self.failure_rate:
            error_code, error_message = random.choice(self.FAILURE_REASONS)
            logger.debug(f"Mock: PaymentIntent failed - {error_code}")
            return PaymentIntentResult.failed(error_code, error_message)

        intent_id = f"pi_mock_{uuid.uuid4().hex[:24]}"
        logger.info(f"Mock: Created payment intent {intent_id} for {self.to_cents(amount)} cents")

        return PaymentIntentResult(
            success=True,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:16]}",
        )

    async def health_check(self) -> bool:
        return True
