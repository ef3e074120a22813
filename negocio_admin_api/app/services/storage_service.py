"""
In-memory storage for every entity of the admin backend.

``MemStorage`` is the sole owner of the entity maps (clients,
suppliers, products, orders, order items, deliveries and invoices) and
the only component allowed to mutate them.  One instance is created
per application by ``create_app`` and handed to the endpoints through
``core.storage.get_storage``; nothing here is a module-level singleton.

Records are pydantic models stored in dicts keyed by their UUID
string, so listings come back in insertion order.  Every public method
runs under a single re-entrant lock: cascade deletes and aggregate
statistics always observe a consistent snapshot, whether the host
server dispatches requests on the event loop or on worker threads.

Lookups return ``None`` (or ``False`` for deletes) when an id does not
resolve.  Creating or re-pointing a record at a client, supplier,
product or order that does not exist raises ``ValueError``.  Detail
views tolerate references that stopped resolving afterwards (e.g. a
deleted client) by rendering them as ``None`` and logging a warning.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Tuple

from negocio_admin_api.app.schemas.base import CENTS, parse_money
from negocio_admin_api.app.schemas.catalog import Product, ProductCreate, Supplier, SupplierCreate
from negocio_admin_api.app.schemas.client import Client, ClientCreate
from negocio_admin_api.app.schemas.dashboard import DashboardStats
from negocio_admin_api.app.schemas.delivery import Delivery, DeliveryCreate
from negocio_admin_api.app.schemas.details import (
    DeliveryWithDetails,
    OrderItemWithProduct,
    OrderWithDetails,
    OrderWithParties,
)
from negocio_admin_api.app.schemas.invoice import Invoice, InvoiceCreate
from negocio_admin_api.app.schemas.order import Order, OrderCreate, OrderItem, OrderItemCreate

logger = logging.getLogger(__name__)


def synchronized(method: Callable) -> Callable:
    """Run the decorated method while holding the storage lock."""

    @wraps(method)
    def wrapper(self: "MemStorage", *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


def _blanks_to_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Store empty optional strings as ``None``."""
    return {key: None if value == "" else value for key, value in data.items()}


class MemStorage:
    """Process-local store for clients, catalog, orders, deliveries and invoices."""

    def __init__(
        self,
        order_number_seed: int = 1000,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._lock = threading.RLock()
        self._now = now
        self.clients: Dict[str, Client] = {}
        self.suppliers: Dict[str, Supplier] = {}
        self.products: Dict[str, Product] = {}
        self.orders: Dict[str, Order] = {}
        self.order_items: Dict[str, OrderItem] = {}
        self.deliveries: Dict[str, Delivery] = {}
        self.invoices: Dict[str, Invoice] = {}
        self.order_counter = order_number_seed

    def locked(self) -> threading.RLock:
        """Hold the storage lock across several calls for a consistent snapshot."""
        return self._lock

    def now(self) -> datetime:
        """Current local time as seen by the storage clock."""
        return self._now()

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _require(table: Dict[str, Any], key: str, label: str) -> None:
        if key not in table:
            raise ValueError(f"{label} {key} does not exist")

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------
    @synchronized
    def get_clients(self) -> List[Client]:
        return list(self.clients.values())

    @synchronized
    def get_client(self, client_id: str) -> Optional[Client]:
        return self.clients.get(client_id)

    @synchronized
    def create_client(self, data: ClientCreate) -> Client:
        client = Client(id=self._new_id(), **data.model_dump())
        self.clients[client.id] = client
        logger.info("Created client %s (%s)", client.id, client.name)
        return client

    @synchronized
    def update_client(self, client_id: str, changes: Dict[str, Any]) -> Optional[Client]:
        """Merge ``changes`` onto a client; ``None`` if the client does not exist."""
        client = self.clients.get(client_id)
        if client is None:
            return None
        updated = client.model_copy(update=changes)
        self.clients[client_id] = updated
        logger.info("Updated client %s: %s", client_id, sorted(changes))
        return updated

    @synchronized
    def delete_client(self, client_id: str) -> bool:
        removed = self.clients.pop(client_id, None) is not None
        if removed:
            logger.info("Deleted client %s", client_id)
        return removed

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    @synchronized
    def get_products(self) -> List[Product]:
        return list(self.products.values())

    @synchronized
    def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    @synchronized
    def create_product(self, data: ProductCreate) -> Product:
        product = Product(id=self._new_id(), **data.model_dump())
        self.products[product.id] = product
        return product

    @synchronized
    def get_suppliers(self) -> List[Supplier]:
        return list(self.suppliers.values())

    @synchronized
    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return self.suppliers.get(supplier_id)

    @synchronized
    def create_supplier(self, data: SupplierCreate) -> Supplier:
        supplier = Supplier(id=self._new_id(), **data.model_dump())
        self.suppliers[supplier.id] = supplier
        return supplier

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    @synchronized
    def get_orders(self) -> List[OrderWithDetails]:
        """All orders as detail views, newest first."""
        details = [self._build_order_with_details(order) for order in self.orders.values()]
        return sorted(details, key=lambda o: o.created_at, reverse=True)

    @synchronized
    def get_order(self, order_id: str) -> Optional[OrderWithDetails]:
        order = self.orders.get(order_id)
        if order is None:
            return None
        return self._build_order_with_details(order)

    @synchronized
    def order_exists(self, order_id: str) -> bool:
        return order_id in self.orders

    @synchronized
    def get_recent_orders(self, limit: int) -> List[OrderWithDetails]:
        return self.get_orders()[: max(limit, 0)]

    @synchronized
    def create_order(
        self,
        data: OrderCreate,
        items: List[OrderItemCreate],
        *,
        created_at: Optional[datetime] = None,
    ) -> OrderWithDetails:
        """Store an order and its line items and return the detail view.

        ``totalValue`` is kept exactly as supplied (``0`` when omitted);
        it is not recomputed from the items.  ``created_at`` lets seed and
        import code backdate an order; it defaults to the storage clock.
        """
        self._require(self.clients, data.client_id, "Client")
        self._require(self.suppliers, data.supplier_id, "Supplier")
        for item in items:
            self._require(self.products, item.product_id, "Product")

        order_id = self._new_id()
        order_items = []
        for item in items:
            total_price = item.total_price
            if total_price is None:
                total_price = (item.quantity * item.unit_price).quantize(CENTS, rounding=ROUND_HALF_UP)
            order_items.append(
                OrderItem(
                    id=self._new_id(),
                    order_id=order_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=total_price,
                )
            )

        # Nothing is written until every item has been built.
        self.order_counter += 1
        order = Order(
            id=order_id,
            order_number=self.order_counter,
            client_id=data.client_id,
            supplier_id=data.supplier_id,
            status=data.status,
            total_value=data.total_value if data.total_value is not None else Decimal("0"),
            notes=data.notes or None,
            created_at=created_at or self.now(),
        )
        self.orders[order.id] = order
        for order_item in order_items:
            self.order_items[order_item.id] = order_item

        logger.info(
            "Created order #%s (%s) with %d item(s), total %s",
            order.order_number,
            order.id,
            len(items),
            order.total_value,
        )
        return self._build_order_with_details(order)

    @synchronized
    def update_order(self, order_id: str, changes: Dict[str, Any]) -> Optional[Order]:
        order = self.orders.get(order_id)
        if order is None:
            return None
        if "client_id" in changes:
            self._require(self.clients, changes["client_id"], "Client")
        if "supplier_id" in changes:
            self._require(self.suppliers, changes["supplier_id"], "Supplier")
        updated = order.model_copy(update=changes)
        self.orders[order_id] = updated
        logger.info("Updated order #%s: %s", updated.order_number, sorted(changes))
        return updated

    @synchronized
    def delete_order(self, order_id: str) -> bool:
        """Delete an order together with its items, deliveries and invoices."""
        if order_id not in self.orders:
            return False
        items = [key for key, item in self.order_items.items() if item.order_id == order_id]
        for key in items:
            del self.order_items[key]
        deliveries = [key for key, d in self.deliveries.items() if d.order_id == order_id]
        for key in deliveries:
            del self.deliveries[key]
        invoices = [key for key, i in self.invoices.items() if i.order_id == order_id]
        for key in invoices:
            del self.invoices[key]
        del self.orders[order_id]
        logger.info(
            "Deleted order %s (%d item(s), %d delivery(ies), %d invoice(s))",
            order_id,
            len(items),
            len(deliveries),
            len(invoices),
        )
        return True

    @synchronized
    def get_order_items(self, order_id: str) -> List[OrderItem]:
        return [item for item in self.order_items.values() if item.order_id == order_id]

    # ------------------------------------------------------------------
    # Deliveries
    # ------------------------------------------------------------------
    @synchronized
    def get_deliveries(self) -> List[DeliveryWithDetails]:
        """All deliveries as detail views, latest scheduled date first."""
        details = [self._build_delivery_with_details(d) for d in self.deliveries.values()]
        return sorted(details, key=lambda d: d.scheduled_date, reverse=True)

    @synchronized
    def get_delivery(self, delivery_id: str) -> Optional[DeliveryWithDetails]:
        delivery = self.deliveries.get(delivery_id)
        if delivery is None:
            return None
        return self._build_delivery_with_details(delivery)

    @synchronized
    def get_today_deliveries(self) -> List[DeliveryWithDetails]:
        """Deliveries scheduled between local midnight today and tomorrow."""
        start, end = self._day_window()
        return [
            self._build_delivery_with_details(d)
            for d in self.deliveries.values()
            if start <= d.scheduled_date < end
        ]

    @synchronized
    def create_delivery(
        self,
        data: DeliveryCreate,
        *,
        delivered_at: Optional[datetime] = None,
    ) -> Delivery:
        self._require(self.orders, data.order_id, "Order")
        delivery = Delivery(id=self._new_id(), delivered_at=delivered_at, **_blanks_to_none(data.model_dump()))
        self.deliveries[delivery.id] = delivery
        logger.info(
            "Scheduled delivery %s for order %s on %s",
            delivery.id,
            delivery.order_id,
            delivery.scheduled_date.isoformat(),
        )
        return delivery

    @synchronized
    def update_delivery(self, delivery_id: str, changes: Dict[str, Any]) -> Optional[Delivery]:
        """Merge ``changes`` onto a delivery.

        The first update that sets the status to ``delivered`` stamps
        ``deliveredAt`` with the current time; an existing stamp is
        always preserved as is.
        """
        delivery = self.deliveries.get(delivery_id)
        if delivery is None:
            return None
        if "order_id" in changes:
            self._require(self.orders, changes["order_id"], "Order")
        delivered_at = delivery.delivered_at
        if changes.get("status") == "delivered" and delivered_at is None:
            delivered_at = self.now()
        updated = delivery.model_copy(update={**changes, "delivered_at": delivered_at})
        self.deliveries[delivery_id] = updated
        logger.info("Updated delivery %s: %s", delivery_id, sorted(changes))
        return updated

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------
    @synchronized
    def get_invoices(self, order_id: str) -> List[Invoice]:
        return [invoice for invoice in self.invoices.values() if invoice.order_id == order_id]

    @synchronized
    def create_invoice(self, data: InvoiceCreate) -> Invoice:
        self._require(self.orders, data.order_id, "Order")
        invoice = Invoice(id=self._new_id(), **_blanks_to_none(data.model_dump()))
        self.invoices[invoice.id] = invoice
        logger.info("Registered invoice %s for order %s", invoice.invoice_number, invoice.order_id)
        return invoice

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    @synchronized
    def get_dashboard_stats(self) -> DashboardStats:
        start, end = self._day_window()
        start_of_month = start.replace(day=1)
        monthly_value = sum(
            (parse_money(o.total_value) for o in self.orders.values() if o.created_at >= start_of_month),
            Decimal("0"),
        )
        return DashboardStats(
            pending_orders=sum(1 for o in self.orders.values() if o.status == "pending"),
            today_deliveries=sum(1 for d in self.deliveries.values() if start <= d.scheduled_date < end),
            active_clients=sum(1 for c in self.clients.values() if c.active),
            monthly_value=float(monthly_value),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _day_window(self) -> Tuple[datetime, datetime]:
        start = self.now().replace(hour=0, minute=0, second=0, microsecond=0)
        return start, start + timedelta(days=1)

    def _resolve(self, table: Dict[str, Any], key: str, label: str, owner: str) -> Any:
        record = table.get(key)
        if record is None:
            logger.warning("%s %s referenced by %s does not exist", label, key, owner)
        return record

    def _build_order_with_parties(self, order: Order) -> OrderWithParties:
        owner = f"order {order.id}"
        return OrderWithParties(
            **order.model_dump(),
            client=self._resolve(self.clients, order.client_id, "Client", owner),
            supplier=self._resolve(self.suppliers, order.supplier_id, "Supplier", owner),
        )

    def _build_order_with_details(self, order: Order) -> OrderWithDetails:
        parties = self._build_order_with_parties(order)
        items = [
            OrderItemWithProduct(
                **item.model_dump(),
                product=self._resolve(self.products, item.product_id, "Product", f"item {item.id}"),
            )
            for item in self.get_order_items(order.id)
        ]
        return OrderWithDetails(
            **parties.model_dump(exclude={"client", "supplier"}),
            client=parties.client,
            supplier=parties.supplier,
            items=items,
            deliveries=[d for d in self.deliveries.values() if d.order_id == order.id],
            invoices=self.get_invoices(order.id),
        )

    def _build_delivery_with_details(self, delivery: Delivery) -> DeliveryWithDetails:
        order = self._resolve(self.orders, delivery.order_id, "Order", f"delivery {delivery.id}")
        return DeliveryWithDetails(
            **delivery.model_dump(),
            order=self._build_order_with_parties(order) if order is not None else None,
        )
