"""
Pydantic models for purchase orders and their line items.

An order links one client to one supplier and owns one or more line
items.  The order ``totalValue`` is supplied by the caller (normally
the sum of the item totals) and is stored as given.  A line item's
``totalPrice`` may be omitted, in which case it is computed from
quantity and unit price when the order is created.

Creation requests wrap both parts in a single body::

    {"order": {"clientId": "...", "supplierId": "..."},
     "items": [{"productId": "...", "quantity": "30", "unitPrice": "150.00"}]}
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel, OptionalMoney, PartialUpdate

OrderStatus = Literal["pending", "confirmed", "delivered", "cancelled"]


class OrderItemCreate(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3, examples=["30"])
    unit_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, examples=["150.00"])
    total_price: OptionalMoney = Field(None, examples=["4500.00"])


class OrderItem(CamelModel):
    id: str
    order_id: str
    product_id: str
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal


class OrderCreate(CamelModel):
    """Insertable order fields; the number and timestamp are server-assigned."""

    client_id: str = Field(..., min_length=1)
    supplier_id: str = Field(..., min_length=1)
    status: OrderStatus = "pending"
    total_value: OptionalMoney = Field(None, examples=["8250.00"])
    notes: Optional[str] = None


class OrderCreateRequest(CamelModel):
    order: OrderCreate
    items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderUpdate(PartialUpdate):
    """Schema for updating an order.

    Only provided fields are merged; ``orderNumber`` and ``createdAt``
    cannot be changed.
    """

    required_fields = frozenset({"client_id", "supplier_id", "status", "total_value"})

    client_id: Optional[str] = Field(None, min_length=1)
    supplier_id: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    total_value: OptionalMoney = None
    notes: Optional[str] = None


class Order(CamelModel):
    id: str
    order_number: int
    client_id: str
    supplier_id: str
    status: OrderStatus
    total_value: Decimal
    notes: Optional[str] = None
    created_at: datetime
