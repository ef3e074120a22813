"""
Service layer for the period report.

The report aggregates orders created and deliveries scheduled within
an inclusive date range (whole days), optionally restricted to one
supplier, together with client counts and sales per supplier.  All
figures are computed in Python over a snapshot taken from the storage.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from negocio_admin_api.app.schemas.base import parse_money
from negocio_admin_api.app.schemas.dashboard import (
    ClientReport,
    DeliveryReport,
    OrderReport,
    ReportSummary,
    SupplierSales,
)
from negocio_admin_api.app.services.storage_service import MemStorage


def current_month(today: date) -> Tuple[date, date]:
    """Return the first and last day of the month containing ``today``."""
    first = today.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


class ReportService:
    """Period report built from the current storage state."""

    @classmethod
    def summary(
        cls,
        storage: MemStorage,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        supplier_id: Optional[str] = None,
    ) -> ReportSummary:
        """Summarize orders, deliveries, clients and supplier sales.

        ``date_from`` and ``date_to`` default to the current month.  Both
        ends are inclusive: ``date_to`` covers the whole day.  Raises
        ``ValueError`` when ``date_from`` is after ``date_to``.
        """
        month_start, month_end = current_month(storage.now().date())
        date_from = date_from or month_start
        date_to = date_to or month_end
        if date_from > date_to:
            raise ValueError("date_from must not be after date_to")

        start = datetime.combine(date_from, time.min)
        end = datetime.combine(date_to, time.max)

        with storage.locked():
            orders = [
                o
                for o in storage.get_orders()
                if start <= o.created_at <= end and (supplier_id is None or o.supplier_id == supplier_id)
            ]
            deliveries = [d for d in storage.get_deliveries() if start <= d.scheduled_date <= end]
            clients = storage.get_clients()
            suppliers = storage.get_suppliers()

        order_status = Counter(o.status for o in orders)
        delivery_status = Counter(d.status for d in deliveries)
        client_types = Counter(c.type for c in clients)

        sales = []
        for supplier in suppliers:
            supplier_orders = [o for o in orders if o.supplier_id == supplier.id]
            sales.append(
                SupplierSales(
                    supplier_id=supplier.id,
                    supplier=supplier.name,
                    orders=len(supplier_orders),
                    value=float(sum((parse_money(o.total_value) for o in supplier_orders), Decimal("0"))),
                )
            )

        return ReportSummary(
            date_from=date_from,
            date_to=date_to,
            supplier_id=supplier_id,
            orders=OrderReport(
                total=len(orders),
                pending=order_status["pending"],
                confirmed=order_status["confirmed"],
                delivered=order_status["delivered"],
                cancelled=order_status["cancelled"],
                total_value=float(sum((parse_money(o.total_value) for o in orders), Decimal("0"))),
            ),
            deliveries=DeliveryReport(
                total=len(deliveries),
                pending=delivery_status["pending"],
                in_transit=delivery_status["in_transit"],
                delivered=delivery_status["delivered"],
                cancelled=delivery_status["cancelled"],
            ),
            clients=ClientReport(
                total=len(clients),
                active=sum(1 for c in clients if c.active),
                pj=client_types["PJ"],
                pf=client_types["PF"],
            ),
            sales_by_supplier=sales,
        )
