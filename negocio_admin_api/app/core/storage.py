"""
Storage bootstrap and the FastAPI dependency that exposes it.

``init_storage`` builds the ``MemStorage`` for an application and, when
``SEED_SAMPLE_DATA`` is enabled, fills it with the sample catalog: the
two represented suppliers, the aggregate products they sell, three
clients and a few orders, deliveries and one invoice dated relative to
today.  State lives only in process memory, so the seed runs again on
every start.

``get_storage`` is the dependency endpoints declare to receive the
instance stored on ``app.state``.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from fastapi import Request

from negocio_admin_api.app.core.config import Settings
from negocio_admin_api.app.schemas.catalog import ProductCreate, SupplierCreate
from negocio_admin_api.app.schemas.client import ClientCreate
from negocio_admin_api.app.schemas.delivery import DeliveryCreate
from negocio_admin_api.app.schemas.invoice import InvoiceCreate
from negocio_admin_api.app.schemas.order import OrderCreate, OrderItemCreate
from negocio_admin_api.app.services.storage_service import MemStorage

logger = logging.getLogger(__name__)

PRODUCT_NAMES = [
    "Areia Média",
    "Areia Fina",
    "Areia Grossa",
    "Areia Média Grossa",
    "Areia Média Fina",
    "Brita 1",
    "Brita 2",
    "Brita 3",
    "Brita 4",
    "Rachão",
    "BGS",
    "Pedrisco Limpo",
    "Pó de Pedra",
    "Rachão Reciclado",
    "Areia Desclassificada",
    "Argila Expandida",
    "Bica Reciclada",
    "Brita Reciclada",
    "Brita 1 Reciclada",
    "Brita 2 Reciclada",
    "Brita 3 Reciclada",
    "Brita 4 Reciclada",
    "Areia De Quadra",
]


def init_storage(settings: Settings, now: Optional[Callable[[], datetime]] = None) -> MemStorage:
    """Create the application storage, seeded according to ``settings``."""
    storage = MemStorage(order_number_seed=settings.order_number_seed, now=now or datetime.now)
    if settings.seed_sample_data:
        seed_sample_data(storage)
    return storage


def get_storage(request: Request) -> MemStorage:
    """FastAPI dependency returning the storage of the running application."""
    return request.app.state.storage


def seed_sample_data(storage: MemStorage) -> None:
    """Populate ``storage`` with the demonstration catalog and orders."""
    nova_areiao = storage.create_supplier(SupplierCreate(name="Nova Areião"))
    ferrovia = storage.create_supplier(SupplierCreate(name="Ferrovia"))

    products = [storage.create_product(ProductCreate(name=name)) for name in PRODUCT_NAMES]

    abc = storage.create_client(
        ClientCreate(
            type="PJ",
            name="Construtora ABC Ltda",
            trade_name="Construtora ABC",
            document="12345678000199",
            state_registration="123456789",
            email="contato@construtorabc.com.br",
            phone="(11) 3333-4444",
            cellphone="(11) 99999-8888",
            zip_code="01310-100",
            street="Av. Paulista",
            number="1000",
            complement="Sala 501",
            neighborhood="Bela Vista",
            city="São Paulo",
            state="SP",
            notes="Cliente desde 2020",
        )
    )
    xyz = storage.create_client(
        ClientCreate(
            type="PJ",
            name="Incorporadora XYZ S/A",
            trade_name="XYZ Incorporações",
            document="98765432000188",
            state_registration="987654321",
            email="comercial@xyz.com.br",
            phone="(11) 2222-3333",
            cellphone="(11) 98888-7777",
            zip_code="04543-011",
            street="Rua Funchal",
            number="418",
            complement="10º andar",
            neighborhood="Vila Olímpia",
            city="São Paulo",
            state="SP",
            notes="Grande volume mensal",
        )
    )
    storage.create_client(
        ClientCreate(
            type="PF",
            name="João da Silva",
            document="12345678901",
            email="joao.silva@email.com",
            cellphone="(11) 97777-6666",
            zip_code="03102-000",
            street="Rua das Flores",
            number="123",
            neighborhood="Mooca",
            city="São Paulo",
            state="SP",
        )
    )

    today = storage.now()
    yesterday = today - timedelta(days=1)
    two_days_ago = today - timedelta(days=2)

    order1 = storage.create_order(
        OrderCreate(
            client_id=abc.id,
            supplier_id=nova_areiao.id,
            status="pending",
            total_value="4500.00",
            notes="Entrega urgente",
        ),
        [OrderItemCreate(product_id=products[0].id, quantity="30", unit_price="150.00", total_price="4500.00")],
        created_at=today,
    )
    order2 = storage.create_order(
        OrderCreate(client_id=xyz.id, supplier_id=ferrovia.id, status="confirmed", total_value="8750.00"),
        [
            OrderItemCreate(product_id=products[5].id, quantity="25", unit_price="200.00", total_price="5000.00"),
            OrderItemCreate(product_id=products[6].id, quantity="15", unit_price="250.00", total_price="3750.00"),
        ],
        created_at=yesterday,
    )
    order3 = storage.create_order(
        OrderCreate(client_id=abc.id, supplier_id=nova_areiao.id, status="delivered", total_value="2100.00"),
        [OrderItemCreate(product_id=products[1].id, quantity="14", unit_price="150.00", total_price="2100.00")],
        created_at=two_days_ago,
    )

    storage.create_delivery(
        DeliveryCreate(
            order_id=order1.id,
            scheduled_date=today,
            scheduled_time="14:00",
            delivery_address="Av. Paulista, 1000 - Bela Vista, São Paulo/SP",
            driver_name="Carlos Oliveira",
            vehicle_plate="ABC-1234",
            notes="Entrar pela portaria de serviço",
        )
    )
    storage.create_delivery(
        DeliveryCreate(
            order_id=order2.id,
            scheduled_date=today,
            scheduled_time="09:00",
            status="in_transit",
            delivery_address="Rua Funchal, 418 - Vila Olímpia, São Paulo/SP",
            driver_name="Roberto Santos",
            vehicle_plate="XYZ-5678",
        )
    )
    storage.create_delivery(
        DeliveryCreate(
            order_id=order3.id,
            scheduled_date=two_days_ago,
            scheduled_time="10:30",
            status="delivered",
            delivery_address="Av. Paulista, 1000 - Bela Vista, São Paulo/SP",
            driver_name="Carlos Oliveira",
            vehicle_plate="ABC-1234",
        ),
        delivered_at=two_days_ago,
    )

    storage.create_invoice(
        InvoiceCreate(
            order_id=order3.id,
            invoice_number="000123",
            series="1",
            issue_date=two_days_ago,
            value="2100.00",
        )
    )
    logger.info(
        "Seeded %d suppliers, %d products, %d clients and %d orders",
        len(storage.suppliers),
        len(storage.products),
        len(storage.clients),
        len(storage.orders),
    )
