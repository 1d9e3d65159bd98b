"""
Checkout endpoints.

Returns the checkout summary and, when customer details are supplied,
the order notification payload computed from that same summary.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...services.checkout import (
    AppliedPromo,
    CartItem,
    CustomerDetails,
    build_order_notification,
    build_order_summary,
    generate_order_number,
)
from ...services.checkout.totals import DEFAULT_PAYMENT_METHOD

router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


class CheckoutRequest(BaseModel):
    items: List[CartItem] = Field(..., min_length=1)
    promo: Optional[AppliedPromo] = None
    customer: Optional[CustomerDetails] = None
    payment_method: str = DEFAULT_PAYMENT_METHOD


@router.post("/summary")
async def checkout_summary(payload: CheckoutRequest) -> Dict[str, Any]:
    summary = build_order_summary(payload.items, payload.promo)
    response: Dict[str, Any] = {"summary": summary.model_dump()}

    if payload.customer is not None:
        response["order_number"] = generate_order_number()
        response["notification"] = build_order_notification(
            payload.customer, summary, payment_method=payload.payment_method
        )

    return response
