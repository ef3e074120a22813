"""
Denormalized read models used by the admin UI.

``OrderWithDetails`` inlines the client, supplier, line items (each
with its product), deliveries and invoices of an order.
``DeliveryWithDetails`` inlines the parent order together with its
client and supplier.  A reference that no longer resolves (for example
an order whose client was deleted) is rendered as ``null``.
"""

from typing import List, Optional

from .catalog import Product, Supplier
from .client import Client
from .delivery import Delivery
from .invoice import Invoice
from .order import Order, OrderItem


class OrderItemWithProduct(OrderItem):
    product: Optional[Product] = None


class OrderWithParties(Order):
    client: Optional[Client] = None
    supplier: Optional[Supplier] = None


class OrderWithDetails(OrderWithParties):
    items: List[OrderItemWithProduct] = []
    deliveries: List[Delivery] = []
    invoices: List[Invoice] = []


class DeliveryWithDetails(Delivery):
    order: Optional[OrderWithParties] = None
