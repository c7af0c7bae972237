import asyncio

import pytest

from bistro.services.payment import (
    MockPaymentService,
    StripePaymentService,
    get_payment_service,
)


def quiet_mock(**kwargs):
    return MockPaymentService(min_latency=0.0, max_latency=0.0, **kwargs)


def test_mock_rejects_non_positive_amount():
    result = asyncio.run(quiet_mock().create_payment_intent(amount=0))

    assert not result.success
    assert result.error_code == "invalid_amount"
    assert result.client_secret is None


def test_mock_returns_client_secret():
    result = asyncio.run(quiet_mock().create_payment_intent(amount=12.5))

    assert result.success
    assert result.client_secret.startswith("pi_mock_")
    assert "_secret_" in result.client_secret


def test_mock_failure_rate_forces_failure():
    result = asyncio.run(quiet_mock(failure_rate=1.0).create_payment_intent(amount=12.5))

    assert not result.success
    assert result.error_code
    assert result.error_message


def test_to_cents_rounds_to_whole_cents():
    assert MockPaymentService.to_cents(19.99) == 1999


def test_stripe_service_requires_secret_key(settings_env):
    settings_env(ENV_MODE="staging", STRIPE_SECRET_KEY="")

    with pytest.raises(ValueError):
        StripePaymentService()


def test_factory_uses_mock_in_development(settings_env):
    settings_env(ENV_MODE="development")
    get_payment_service.cache_clear()
    try:
        service = get_payment_service()
        assert isinstance(service, MockPaymentService)
        assert service.provider_name == "mock"
        assert asyncio.run(service.health_check()) is True
    finally:
        get_payment_service.cache_clear()
