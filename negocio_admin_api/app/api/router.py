"""
Top-level API router.

Aggregates the per-collection routers under their prefixes.  When a
new collection is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import catalog, clients, dashboard, deliveries, invoices, orders

router = APIRouter()

router.include_router(dashboard.dashboard_router, prefix="/dashboard", tags=["dashboard"])
router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(catalog.products_router, prefix="/products", tags=["products"])
router.include_router(catalog.suppliers_router, prefix="/suppliers", tags=["suppliers"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(deliveries.router, prefix="/deliveries", tags=["deliveries"])
router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
router.include_router(dashboard.reports_router, prefix="/reports", tags=["reports"])
