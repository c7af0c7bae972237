"""
Payment Service Abstract Base Class

Interface shared by MockPaymentService and StripePaymentService. The
checkout endpoint only needs a client secret for a card PaymentIntent,
so that is the whole contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class PaymentIntentResult:
    """
    Outcome of asking the provider for a PaymentIntent.

    Attributes:
        success: Whether the intent was created
        client_secret: Secret the browser confirms the payment with
        error_message: Provider message when creation failed
        error_code: Machine-readable failure code
    """
    success: bool
    client_secret: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def failed(cls, error_code: str, error_message: str) -> "PaymentIntentResult":
        return cls(success=False, error_code=error_code, error_message=error_message)


class BasePaymentService(ABC):
    """
    Strategy interface for payment providers.

    Example:
        >>> service = get_payment_service()  # Mock or Stripe
        >>> result = await service.create_payment_intent(29.99)
        >>> result.client_secret
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short provider name reported by /health ("mock", "stripe")."""

    @staticmethod
    def to_cents(amount: float) -> int:
        """Dollars to the smallest currency unit: 29.99 -> 2999."""
        return int(round(amount * 100))

    @abstractmethod
    async def create_payment_intent(self, amount: float) -> PaymentIntentResult:
        """
        Create a card PaymentIntent for ``amount`` dollars.

        Non-positive amounts fail with error_code "invalid_amount"
        without contacting the provider.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the provider is reachable with the configured credentials."""
