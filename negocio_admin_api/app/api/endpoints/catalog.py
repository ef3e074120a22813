"""
Catalog endpoints: products and suppliers.

Both collections are read-only through the API.  Two routers are
exported so that each can be mounted under its own prefix.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.catalog import Product, Supplier
from negocio_admin_api.app.services.storage_service import MemStorage

products_router = APIRouter()
suppliers_router = APIRouter()


@products_router.get("", response_model=List[Product])
async def list_products(storage: MemStorage = Depends(get_storage)) -> List[Product]:
    return storage.get_products()


@products_router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, storage: MemStorage = Depends(get_storage)) -> Product:
    product = storage.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@suppliers_router.get("", response_model=List[Supplier])
async def list_suppliers(storage: MemStorage = Depends(get_storage)) -> List[Supplier]:
    return storage.get_suppliers()


@suppliers_router.get("/{supplier_id}", response_model=Supplier)
async def get_supplier(supplier_id: str, storage: MemStorage = Depends(get_storage)) -> Supplier:
    supplier = storage.get_supplier(supplier_id)
    if supplier is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    return supplier
