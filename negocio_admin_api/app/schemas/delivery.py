"""
Pydantic models for deliveries.

A delivery is a scheduled shipment of one order.  ``deliveredAt`` is
managed by the storage layer: it is stamped the first time the
delivery moves to ``delivered`` and never rewritten afterwards, so it
is absent from the input schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel, LocalDateTime, PartialUpdate

DeliveryStatus = Literal["pending", "in_transit", "delivered", "cancelled"]


class DeliveryCreate(CamelModel):
    order_id: str = Field(..., min_length=1)
    scheduled_date: LocalDateTime = Field(..., examples=["2025-03-14T00:00:00"])
    scheduled_time: Optional[str] = Field(None, examples=["14:00"])
    status: DeliveryStatus = "pending"
    delivery_address: Optional[str] = None
    driver_name: Optional[str] = None
    vehicle_plate: Optional[str] = Field(None, examples=["ABC-1234"])
    notes: Optional[str] = None


class DeliveryUpdate(PartialUpdate):
    """Schema for updating a delivery; all fields optional."""

    required_fields = frozenset({"order_id", "scheduled_date", "status"})

    order_id: Optional[str] = Field(None, min_length=1)
    scheduled_date: Optional[LocalDateTime] = None
    scheduled_time: Optional[str] = None
    status: Optional[DeliveryStatus] = None
    delivery_address: Optional[str] = None
    driver_name: Optional[str] = None
    vehicle_plate: Optional[str] = None
    notes: Optional[str] = None


class Delivery(CamelModel):
    id: str
    order_id: str
    scheduled_date: datetime
    scheduled_time: Optional[str] = None
    status: DeliveryStatus
    delivery_address: Optional[str] = None
    driver_name: Optional[str] = None
    vehicle_plate: Optional[str] = None
    notes: Optional[str] = None
    delivered_at: Optional[datetime] = None
