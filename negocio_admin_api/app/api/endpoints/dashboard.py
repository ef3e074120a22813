"""
Dashboard and report endpoints.

``GET /dashboard/stats`` returns the four counters shown on the home
screen.  ``GET /reports/summary`` aggregates a date range (the current
month by default), optionally for a single supplier.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.dashboard import DashboardStats, ReportSummary
from negocio_admin_api.app.services.report_service import ReportService
from negocio_admin_api.app.services.storage_service import MemStorage

dashboard_router = APIRouter()
reports_router = APIRouter()


@dashboard_router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(storage: MemStorage = Depends(get_storage)) -> DashboardStats:
    """Pending orders, deliveries due today, active clients and value ordered this month."""
    return storage.get_dashboard_stats()


@reports_router.get("/summary", response_model=ReportSummary)
async def report_summary(
    date_from: Optional[date] = Query(None, description="First day of the period (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, description="Last day of the period, inclusive (YYYY-MM-DD)"),
    supplier_id: Optional[str] = Query(None, description="Restrict orders and sales to this supplier"),
    storage: MemStorage = Depends(get_storage),
) -> ReportSummary:
    try:
        return ReportService.summary(storage, date_from=date_from, date_to=date_to, supplier_id=supplier_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
