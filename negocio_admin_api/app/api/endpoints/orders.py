"""
Order endpoints.

Orders are always returned as detail views (client, supplier, items
with their products, deliveries and invoices inlined), newest first.
An order is created together with its line items in a single request;
deleting it also removes its items, deliveries and invoices.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.details import OrderWithDetails
from negocio_admin_api.app.schemas.invoice import Invoice
from negocio_admin_api.app.schemas.order import Order, OrderCreateRequest, OrderItem, OrderUpdate
from negocio_admin_api.app.services.storage_service import MemStorage

router = APIRouter()


@router.get("", response_model=List[OrderWithDetails])
async def list_orders(storage: MemStorage = Depends(get_storage)) -> List[OrderWithDetails]:
    return storage.get_orders()


@router.get("/recent", response_model=List[OrderWithDetails])
async def recent_orders(
    request: Request,
    limit: Optional[int] = Query(None, ge=1, le=100),
    storage: MemStorage = Depends(get_storage),
) -> List[OrderWithDetails]:
    """Return the newest orders for the dashboard.

    ``limit`` defaults to the ``RECENT_ORDERS_LIMIT`` setting (5).
    """
    if limit is None:
        limit = request.app.state.settings.recent_orders_limit
    return storage.get_recent_orders(limit)


@router.get("/{order_id}", response_model=OrderWithDetails)
async def get_order(order_id: str, storage: MemStorage = Depends(get_storage)) -> OrderWithDetails:
    order = storage.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.get("/{order_id}/items", response_model=List[OrderItem])
async def list_order_items(order_id: str, storage: MemStorage = Depends(get_storage)) -> List[OrderItem]:
    if not storage.order_exists(order_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return storage.get_order_items(order_id)


@router.get("/{order_id}/invoices", response_model=List[Invoice])
async def list_order_invoices(order_id: str, storage: MemStorage = Depends(get_storage)) -> List[Invoice]:
    if not storage.order_exists(order_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return storage.get_invoices(order_id)


@router.post("", response_model=OrderWithDetails, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreateRequest,
    storage: MemStorage = Depends(get_storage),
) -> OrderWithDetails:
    """Create an order with its line items.

    The body carries ``order`` and a non-empty ``items`` list.  The
    ``totalValue`` is stored as sent; item ``totalPrice`` is computed
    from quantity and unit price when omitted.  Unknown client,
    supplier or product ids yield 404.
    """
    try:
        return storage.create_order(payload.order, payload.items)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.patch("/{order_id}", response_model=Order)
async def update_order(
    order_id: str,
    updates: OrderUpdate,
    storage: MemStorage = Depends(get_storage),
) -> Order:
    try:
        order = storage.update_order(order_id, updates.changes())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: str, storage: MemStorage = Depends(get_storage)) -> None:
    """Delete an order along with its items, deliveries and invoices."""
    if not storage.delete_order(order_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return None
