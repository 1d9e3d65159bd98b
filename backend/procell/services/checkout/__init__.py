"""
Checkout Services

Cart totals with per-brand promo discounts and the order payloads built
from them.
"""

from .models import (
    AppliedPromo,
    BrandDiscount,
    CartItem,
    ColorOption,
    CustomerDetails,
    OrderLineItem,
    OrderSummary,
    OrderTotals,
    StorageOption,
)
from .totals import (
    build_line_items,
    build_order_notification,
    build_order_summary,
    calculate_totals,
    generate_order_number,
    round_half_up,
)

__all__ = [
    "AppliedPromo",
    "BrandDiscount",
    "CartItem",
    "ColorOption",
    "CustomerDetails",
    "OrderLineItem",
    "OrderSummary",
    "OrderTotals",
    "StorageOption",
    "build_line_items",
    "build_order_notification",
    "build_order_summary",
    "calculate_totals",
    "generate_order_number",
    "round_half_up",
]
