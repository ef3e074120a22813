"""
Pydantic models for invoices (notas fiscais) attached to orders.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .base import CamelModel, LocalDateTime, OptionalMoney


class InvoiceCreate(CamelModel):
    order_id: str = Field(..., min_length=1)
    invoice_number: str = Field(..., min_length=1, examples=["000123"])
    series: Optional[str] = Field(None, examples=["1"])
    issue_date: LocalDateTime
    value: OptionalMoney = Field(None, examples=["2100.00"])
    notes: Optional[str] = None


class Invoice(CamelModel):
    id: str
    order_id: str
    invoice_number: str
    series: Optional[str] = None
    issue_date: datetime
    value: Optional[Decimal] = None
    notes: Optional[str] = None
