from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from negocio_admin_api.app.core.config import Settings
from negocio_admin_api.app.core.storage import get_storage
from negocio_admin_api.app.main import create_app
from negocio_admin_api.app.schemas.catalog import ProductCreate, SupplierCreate
from negocio_admin_api.app.schemas.client import ClientCreate
from negocio_admin_api.app.services.storage_service import MemStorage

# Local noon on the reference day used throughout the tests.
NOON = datetime(2025, 3, 14, 12, 0, 0)


class Clock:
    """Adjustable stand-in for ``datetime.now``."""

    def __init__(self, current: datetime = NOON) -> None:
        self.current = current

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def storage(clock):
    return MemStorage(now=clock)


@pytest.fixture
def catalog(storage):
    """One client, one supplier and two products in an otherwise empty storage."""
    client = storage.create_client(
        ClientCreate(type="PJ", name="Construtora Teste Ltda", document="11222333000144")
    )
    supplier = storage.create_supplier(SupplierCreate(name="Nova Areião"))
    sand = storage.create_product(ProductCreate(name="Areia Média"))
    gravel = storage.create_product(ProductCreate(name="Brita 1"))
    return {"client": client, "supplier": supplier, "sand": sand, "gravel": gravel}


@pytest.fixture
def app(clock):
    return create_app(Settings(seed_sample_data=True, log_level="WARNING"), now=clock)


@pytest.fixture
def api(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_storage(app) -> MemStorage:
    return app.state.storage


@pytest.fixture
def failing_api(app):
    """Client whose storage dependency blows up, with server errors returned as responses."""

    def broken_storage():
        raise RuntimeError("storage exploded")

    app.dependency_overrides[get_storage] = broken_storage
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
