"""
Checkout Totals

Promo discount arithmetic for a cart. The checkout summary and the order
notification payload are both built from ``build_order_summary`` so the
amounts a customer sees always match the amounts reported for the order.
"""

import math
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...domain.cache.entities import to_epoch_ms, utc_now
from .models import (
    AppliedPromo,
    CartItem,
    CustomerDetails,
    OrderLineItem,
    OrderSummary,
    OrderTotals,
)

DEFAULT_PAYMENT_METHOD = "Cash on Delivery"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (storefront rounding)."""
    return int(math.floor(value + 0.5))


def calculate_totals(
    items: List[CartItem], promo: Optional[AppliedPromo] = None
) -> OrderTotals:
    """
    Subtotal, discount and total for a cart.

    Each line's discount is rounded on its own before summing; lines whose
    brand has no discount in the promo contribute nothing.
    """
    subtotal = sum(item.line_total for item in items)
    discount = 0

    if promo is not None:
        for item in items:
            percentage = promo.discount_for(item.brand_id)
            if percentage > 0:
                discount += round_half_up(item.line_total * percentage / 100)

    return OrderTotals(subtotal=subtotal, discount=discount, total=subtotal - discount)


def build_line_items(
    items: List[CartItem], promo: Optional[AppliedPromo] = None
) -> List[OrderLineItem]:
    lines = []
    for item in items:
        percentage = promo.discount_for(item.brand_id) if promo else 0
        price = (
            round_half_up(item.price - item.price * percentage / 100)
            if percentage > 0
            else item.price
        )
        lines.append(
            OrderLineItem(
                product_id=item.product_id,
                name=item.name,
                price=price,
                original_price=item.price,
                discount_percent=percentage,
                quantity=item.quantity,
                color=item.color,
                storage=item.storage,
                image=item.image,
            )
        )
    return lines


def build_order_summary(
    items: List[CartItem], promo: Optional[AppliedPromo] = None
) -> OrderSummary:
    """Summary shown at checkout for ``items`` with ``promo`` applied."""
    return OrderSummary(
        items=build_line_items(items, promo),
        totals=calculate_totals(items, promo),
        promo_code=promo.code if promo else None,
        quantity=sum(item.quantity for item in items),
    )


def build_order_notification(
    customer: CustomerDetails,
    summary: OrderSummary,
    payment_method: str = DEFAULT_PAYMENT_METHOD,
    created_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Payload handed to the order notification function."""
    totals = summary.totals
    return {
        "type": "order",
        "data": {
            "customer_name": customer.customer_name,
            "phone_number": customer.phone_number,
            "address": customer.address,
            "total_price": totals.total,
            "subtotal": totals.subtotal,
            "total_discount": totals.discount,
            "promo_code": summary.promo_code,
            "payment_method": payment_method,
            "items": [
                {
                    "name": line.name,
                    "quantity": line.quantity,
                    "originalPrice": line.original_price,
                    "price": line.price,
                    "discountPercent": line.discount_percent,
                    "color": line.color.name if line.color else None,
                }
                for line in summary.items
            ],
            "created_at": (created_at or utc_now()).isoformat(),
        },
    }


def generate_order_number(now: Optional[datetime] = None) -> str:
    """Order number in the ``ORD-<epoch ms>-<0..999>`` format."""
    timestamp = to_epoch_ms(now or utc_now())
    return f"ORD-{timestamp}-{random.randint(0, 999)}"
