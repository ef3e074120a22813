"""
Pydantic models for the dashboard and the period report.
"""

from datetime import date
from typing import List, Optional

from .base import CamelModel


class DashboardStats(CamelModel):
    pending_orders: int
    today_deliveries: int
    active_clients: int
    monthly_value: float


class OrderReport(CamelModel):
    total: int
    pending: int
    confirmed: int
    delivered: int
    cancelled: int
    total_value: float


class DeliveryReport(CamelModel):
    total: int
    pending: int
    in_transit: int
    delivered: int
    cancelled: int


class ClientReport(CamelModel):
    total: int
    active: int
    pj: int
    pf: int


class SupplierSales(CamelModel):
    supplier_id: str
    supplier: str
    orders: int
    value: float


class ReportSummary(CamelModel):
    date_from: date
    date_to: date
    supplier_id: Optional[str] = None
    orders: OrderReport
    deliveries: DeliveryReport
    clients: ClientReport
    sales_by_supplier: List[SupplierSales]
