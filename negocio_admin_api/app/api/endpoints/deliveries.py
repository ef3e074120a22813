"""
Delivery endpoints.

Listings inline the parent order with its client and supplier and are
sorted by scheduled date, latest first.  Moving a delivery to
``delivered`` stamps ``deliveredAt`` once; later updates keep it.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.delivery import Delivery, DeliveryCreate, DeliveryUpdate
from negocio_admin_api.app.schemas.details import DeliveryWithDetails
from negocio_admin_api.app.services.storage_service import MemStorage

router = APIRouter()


@router.get("", response_model=List[DeliveryWithDetails])
async def list_deliveries(storage: MemStorage = Depends(get_storage)) -> List[DeliveryWithDetails]:
    return storage.get_deliveries()


@router.get("/today", response_model=List[DeliveryWithDetails])
async def today_deliveries(storage: MemStorage = Depends(get_storage)) -> List[DeliveryWithDetails]:
    """Deliveries scheduled for the current local calendar day."""
    return storage.get_today_deliveries()


@router.get("/{delivery_id}", response_model=DeliveryWithDetails)
async def get_delivery(delivery_id: str, storage: MemStorage = Depends(get_storage)) -> DeliveryWithDetails:
    delivery = storage.get_delivery(delivery_id)
    if delivery is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")
    return delivery


@router.post("", response_model=Delivery, status_code=status.HTTP_201_CREATED)
async def create_delivery(data: DeliveryCreate, storage: MemStorage = Depends(get_storage)) -> Delivery:
    try:
        return storage.create_delivery(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.patch("/{delivery_id}", response_model=Delivery)
async def update_delivery(
    delivery_id: str,
    updates: DeliveryUpdate,
    storage: MemStorage = Depends(get_storage),
) -> Delivery:
    try:
        delivery = storage.update_delivery(delivery_id, updates.changes())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if delivery is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")
    return delivery
