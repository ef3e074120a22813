"""
API package.

``router.py`` aggregates one ``APIRouter`` per collection (clients,
catalog, orders, deliveries, invoices, dashboard, reports) defined in
``endpoints``.  The application mounts it under ``settings.api_prefix``.
"""
