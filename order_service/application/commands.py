"""
Commands - validated input for the order use cases.

Commands check shape and basic ranges at the boundary, including that an
order has at least one line. The domain enforces the same rule again
(EmptyOrderError) along with single currency and allowed transitions.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderItemInput(BaseModel):
    """One requested order line, as received from the catalog/caller"""
    product_id: str = Field(..., min_length=1, description="Catalog product ID")
    product_name: str = Field(..., min_length=1, description="Product name at time of order")
    quantity: int = Field(..., gt=0, description="Units ordered")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit")
    currency: Optional[str] = Field(
        None, min_length=1, max_length=10,
        description="Currency code; defaults to settings.default_currency"
    )

    model_config = {"frozen": True, "str_strip_whitespace": True}


class CreateOrderCommand(BaseModel):
    """Place a new order for a customer"""
    customer_id: str = Field(..., min_length=1, description="Customer ID from customer context")
    items: List[OrderItemInput] = Field(..., min_length=1, description="At least one line")

    model_config = {"frozen": True, "str_strip_whitespace": True}


class CancelOrderCommand(BaseModel):
    """Cancel an order before payment starts"""
    order_id: str = Field(..., min_length=1)
    reason: str = Field("cancelled by customer", min_length=1)

    model_config = {"frozen": True, "str_strip_whitespace": True}
