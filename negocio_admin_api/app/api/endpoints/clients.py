"""
Client endpoints.

CRUD over the client catalog.  ``PATCH`` merges only the fields present
in the body; ``DELETE`` removes the client record and nothing else
(orders that referenced it keep their ``clientId``).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.schemas.client import Client, ClientCreate, ClientUpdate
from negocio_admin_api.app.services.storage_service import MemStorage

router = APIRouter()


@router.get("", response_model=List[Client])
async def list_clients(storage: MemStorage = Depends(get_storage)) -> List[Client]:
    """Return every client, active or not."""
    return storage.get_clients()


@router.get("/{client_id}", response_model=Client)
async def get_client(client_id: str, storage: MemStorage = Depends(get_storage)) -> Client:
    client = storage.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(data: ClientCreate, storage: MemStorage = Depends(get_storage)) -> Client:
    """Create a client; ``active`` defaults to ``true``."""
    return storage.create_client(data)


@router.patch("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    updates: ClientUpdate,
    storage: MemStorage = Depends(get_storage),
) -> Client:
    client = storage.update_client(client_id, updates.changes())
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: str, storage: MemStorage = Depends(get_storage)) -> None:
    if not storage.delete_client(client_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return None
