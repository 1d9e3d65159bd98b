"""
Checkout Models

Cart, promo and order models shared by the checkout summary and the
order notification payload.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ColorOption(BaseModel):
    name: str
    value: str


class StorageOption(BaseModel):
    size: str
    price: Optional[float] = None


class CartItem(BaseModel):
    """Line in the shopping cart."""

    product_id: str = Field(..., description="Product identifier")
    name: str = Field(..., description="Display name")
    price: float = Field(..., ge=0, description="Unit price before promo discount")
    quantity: int = Field(..., ge=1, description="Units ordered")
    brand_id: Optional[str] = Field(
        None, description="Brand used to match promo discounts"
    )
    color: Optional[ColorOption] = None
    storage: Optional[StorageOption] = None
    image: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class BrandDiscount(BaseModel):
    """Per-brand discount granted by a promo code."""

    brand_id: str
    discount_percentage: float = Field(..., ge=0, le=100)
    profit_percentage: float = Field(0, ge=0)


class AppliedPromo(BaseModel):
    """Promo code applied to the cart."""

    code: str = Field(..., min_length=1)
    brand_discounts: List[BrandDiscount] = Field(default_factory=list)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    def discount_for(self, brand_id: Optional[str]) -> float:
        """Discount percentage for ``brand_id`` (first match), 0 when none."""
        if brand_id is None:
            return 0
        for brand_discount in self.brand_discounts:
            if brand_discount.brand_id == brand_id:
                return brand_discount.discount_percentage
        return 0


class OrderTotals(BaseModel):
    subtotal: float
    discount: int
    total: float


class OrderLineItem(BaseModel):
    """Cart line as recorded on the order, with its discount applied."""

    product_id: str
    name: str
    price: float = Field(..., description="Unit price after discount")
    original_price: float
    discount_percent: float
    quantity: int
    color: Optional[ColorOption] = None
    storage: Optional[StorageOption] = None
    image: Optional[str] = None


class OrderSummary(BaseModel):
    """Totals and lines shown to the customer before placing the order."""

    items: List[OrderLineItem]
    totals: OrderTotals
    promo_code: Optional[str] = None
    quantity: int

    @property
    def has_discount(self) -> bool:
        return self.totals.discount > 0


class CustomerDetails(BaseModel):
    customer_name: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    additional_details: Optional[str] = None
