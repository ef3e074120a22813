"""
Invoice endpoints.

Invoices are registered against an existing order.  They are listed
per order through ``GET /orders/{order_id}/invoices``.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.invoice import Invoice, InvoiceCreate
from negocio_admin_api.app.services.storage_service import MemStorage

router = APIRouter()


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(data: InvoiceCreate, storage: MemStorage = Depends(get_storage)) -> Invoice:
    try:
        return storage.create_invoice(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
