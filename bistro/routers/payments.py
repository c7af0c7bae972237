"""
Payment Endpoints

Checkout is two steps for the client: create a Stripe PaymentIntent, confirm
it in the browser, then record the payment here. Recording a payment empties
the cart items it paid for.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from bistro.core.errors import Forbidden, UpstreamFault
from bistro.database import (
    delete_result_to_dict,
    get_db,
    insert_result_to_dict,
    serialize_docs,
)
from bistro.dependencies import bearer_claims
from bistro.models import Collections, coerce_object_ids, object_ids
from bistro.schemas import PaymentCreate, PaymentIntentRequest, PaymentIntentResponse
from bistro.services.payment import BasePaymentService, get_payment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"], dependencies=[Depends(bearer_claims)])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create Payment Intent",
)
async def create_payment_intent(
    body: PaymentIntentRequest,
    payment_service: BasePaymentService = Depends(get_payment_service),
) -> PaymentIntentResponse:
    """Create a card PaymentIntent for ``price`` dollars and hand back its client secret."""
    result = await payment_service.create_payment_intent(amount=body.price)

    if not result.success:
        logger.warning(
            f"PaymentIntent failed via {payment_service.provider_name}: "
            f"{result.error_code} - {result.error_message}"
        )
        raise UpstreamFault(result.error_message or "Payment provider error")

    return PaymentIntentResponse(clientSecret=result.client_secret)


@router.get("/payments/{email}")
def list_payments(
    email: str,
    claims: dict[str, Any] = Depends(bearer_claims),
    db: Database = Depends(get_db),
) -> list[dict[str, Any]]:
    """Payment history; callers may only read their own."""
    if email != claims.get("email"):
        raise Forbidden()
    return serialize_docs(db[Collections.PAYMENTS].find({"email": email}))


def _carts_left_behind(db: Database, cart_ids: list) -> list[str]:
    """Ids among ``cart_ids`` still present in the cart collection."""
    try:
        found = db[Collections.CARTS].find({"_id": {"$in": cart_ids}}, {"_id": 1})
        return [str(doc["_id"]) for doc in found]
    except PyMongoError:
        logger.exception("Could not list cart items left behind; assuming all of them")
        return [str(cart_id) for cart_id in cart_ids]


@router.post("/payments")
def record_payment(payload: PaymentCreate, db: Database = Depends(get_db)) -> dict[str, Any]:
    """
    Store the payment, then delete the cart items it consumed.

    The payment stands for a charge the browser already confirmed, so it is
    never removed. If the cart cleanup fails, the ids of the cart items still
    present are written to the payment's ``pendingCartIds`` and logged, and
    the fault is reported.
    """
    cart_ids = object_ids(payload.cartIds)

    doc = payload.model_dump(exclude_none=True)
    doc.pop("_id", None)
    doc.setdefault("date", datetime.now(timezone.utc))
    doc["menuItemIds"] = coerce_object_ids(payload.menuItemIds)

    payments = db[Collections.PAYMENTS]
    payment_result = payments.insert_one(doc)
    payment_id = payment_result.inserted_id

    try:
        delete_result = db[Collections.CARTS].delete_many({"_id": {"$in": cart_ids}})
    except PyMongoError as e:
        pending = _carts_left_behind(db, cart_ids)
        logger.error(
            f"Cart cleanup failed for payment {payment_id} ({e}); "
            f"cart items left behind: {pending}"
        )
        payments.update_one({"_id": payment_id}, {"$set": {"pendingCartIds": pending}})
        raise UpstreamFault(
            f"Payment {payment_id} recorded but cart cleanup failed: {e}"
        ) from e

    logger.info(
        f"Payment {payment_id} recorded for {payload.email}: "
        f"{payload.price:.2f}, {delete_result.deleted_count} cart item(s) cleared"
    )

    return {
        "paymentResult": insert_result_to_dict(payment_result),
        "deleteResult": delete_result_to_dict(delete_result),
    }
