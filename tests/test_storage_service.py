from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

import pytest
from pydantic import ValidationError

from negocio_admin_api.app.schemas.base import parse_money
from negocio_admin_api.app.schemas.client import ClientCreate
from negocio_admin_api.app.schemas.delivery import DeliveryCreate
from negocio_admin_api.app.schemas.invoice import InvoiceCreate
from negocio_admin_api.app.schemas.order import OrderCreate, OrderItemCreate
from negocio_admin_api.app.services.storage_service import MemStorage

from .conftest import NOON


def _order(storage, catalog, **kwargs):
    order = OrderCreate(
        client_id=catalog["client"].id,
        supplier_id=catalog["supplier"].id,
        total_value=kwargs.pop("total_value", "1500.00"),
        **kwargs,
    )
    items = [OrderItemCreate(product_id=catalog["sand"].id, quantity="10", unit_price="150.00")]
    return storage.create_order(order, items)


def _delivery(storage, order_id, scheduled_date, **kwargs):
    return storage.create_delivery(DeliveryCreate(order_id=order_id, scheduled_date=scheduled_date, **kwargs))


class TestClients:
    def test_create_assigns_unique_ids_and_defaults(self, storage):
        created = [
            storage.create_client(ClientCreate(type="PF", name=f"Cliente {i}", document="12345678901"))
            for i in range(5)
        ]
        ids = [c.id for c in created]
        assert all(ids)
        assert len(set(ids)) == 5
        assert all(c.active is True for c in created)
        assert created[0].trade_name is None

    def test_round_trip_returns_input_plus_id(self, storage):
        data = ClientCreate(
            type="PJ",
            name="Incorporadora XYZ S/A",
            trade_name="XYZ",
            document="98765432000188",
            city="São Paulo",
            state="SP",
        )
        client = storage.create_client(data)
        fetched = storage.get_client(client.id)
        assert fetched is not None
        assert fetched.model_dump(exclude={"id"}) == data.model_dump()
        assert fetched.id == client.id

    def test_get_missing_returns_none(self, storage):
        assert storage.get_client("does-not-exist") is None

    def test_update_merges_supplied_fields(self, storage, catalog):
        client = catalog["client"]
        updated = storage.update_client(client.id, {"city": "Campinas", "active": False})
        assert updated.city == "Campinas"
        assert updated.active is False
        assert updated.name == client.name
        assert storage.get_client(client.id) == updated

    def test_update_missing_returns_none(self, storage):
        assert storage.update_client("nope", {"name": "Outro"}) is None

    def test_delete(self, storage, catalog):
        client_id = catalog["client"].id
        assert storage.delete_client(client_id) is True
        assert storage.get_client(client_id) is None
        assert storage.delete_client(client_id) is False

    def test_list_is_unfiltered(self, storage, catalog):
        storage.update_client(catalog["client"].id, {"active": False})
        assert [c.id for c in storage.get_clients()] == [catalog["client"].id]


class TestOrders:
    def test_two_item_order_keeps_caller_total(self, storage, catalog):
        order = storage.create_order(
            OrderCreate(
                client_id=catalog["client"].id,
                supplier_id=catalog["supplier"].id,
                total_value="8250.00",
            ),
            [
                OrderItemCreate(product_id=catalog["sand"].id, quantity=30, unit_price="150.00"),
                OrderItemCreate(product_id=catalog["gravel"].id, quantity=15, unit_price="250.00"),
            ],
        )
        fetched = storage.get_order(order.id)
        assert fetched is not None
        assert [str(item.total_price) for item in fetched.items] == ["4500.00", "3750.00"]
        assert str(fetched.total_value) == "8250.00"
        assert [item.product.name for item in fetched.items] == ["Areia Média", "Brita 1"]
        assert fetched.client == catalog["client"]
        assert fetched.supplier == catalog["supplier"]
        assert fetched.status == "pending"

    def test_total_is_not_recomputed(self, storage, catalog):
        order = _order(storage, catalog, total_value="1.00")
        assert storage.get_order(order.id).total_value == Decimal("1.00")

    def test_missing_total_defaults_to_zero(self, storage, catalog):
        order = storage.create_order(
            OrderCreate(client_id=catalog["client"].id, supplier_id=catalog["supplier"].id),
            [OrderItemCreate(product_id=catalog["sand"].id, quantity="1", unit_price="10")],
        )
        assert order.total_value == Decimal("0")

    def test_supplied_item_total_is_stored_verbatim(self, storage, catalog):
        order = storage.create_order(
            OrderCreate(client_id=catalog["client"].id, supplier_id=catalog["supplier"].id),
            [OrderItemCreate(product_id=catalog["sand"].id, quantity="3", unit_price="10", total_price="25.00")],
        )
        assert order.items[0].total_price == Decimal("25.00")

    def test_order_numbers_increase_and_are_never_reused(self, storage, catalog):
        first = _order(storage, catalog)
        second = _order(storage, catalog)
        assert first.order_number == 1001
        assert second.order_number == 1002
        storage.delete_order(second.id)
        third = _order(storage, catalog)
        assert third.order_number == 1003

    def test_unknown_references_are_rejected(self, storage, catalog):
        with pytest.raises(ValueError, match="Client"):
            storage.create_order(
                OrderCreate(client_id="ghost", supplier_id=catalog["supplier"].id),
                [OrderItemCreate(product_id=catalog["sand"].id, quantity="1", unit_price="1")],
            )
        with pytest.raises(ValueError, match="Product"):
            storage.create_order(
                OrderCreate(client_id=catalog["client"].id, supplier_id=catalog["supplier"].id),
                [OrderItemCreate(product_id="ghost", quantity="1", unit_price="1")],
            )
        assert storage.orders == {}
        assert storage.order_items == {}
        assert storage.order_counter == 1000

    def test_failed_item_total_leaves_storage_untouched(self, storage, catalog):
        first = _order(storage, catalog)
        # Built without validation to reach the arithmetic in storage.
        huge = OrderItemCreate.model_construct(
            product_id=catalog["sand"].id,
            quantity=Decimal("1e30"),
            unit_price=Decimal("150.00"),
            total_price=None,
        )
        valid = OrderItemCreate(product_id=catalog["gravel"].id, quantity="1", unit_price="10")
        with pytest.raises(InvalidOperation):
            storage.create_order(
                OrderCreate(client_id=catalog["client"].id, supplier_id=catalog["supplier"].id),
                [valid, huge],
            )
        assert list(storage.orders) == [first.id]
        assert len(storage.order_items) == 1
        assert storage.order_counter == 1001
        assert _order(storage, catalog).order_number == 1002

    def test_oversized_quantity_fails_validation(self, catalog):
        with pytest.raises(ValidationError):
            OrderItemCreate(product_id=catalog["sand"].id, quantity="1e30", unit_price="150.00")

    def test_update_merges_and_missing_returns_none(self, storage, catalog):
        order = _order(storage, catalog)
        updated = storage.update_order(order.id, {"status": "confirmed"})
        assert updated.status == "confirmed"
        assert updated.order_number == order.order_number
        assert updated.created_at == order.created_at
        assert storage.update_order("nope", {"status": "confirmed"}) is None

    def test_delete_cascades(self, storage, catalog):
        order = _order(storage, catalog)
        other = _order(storage, catalog)
        _delivery(storage, order.id, NOON)
        _delivery(storage, other.id, NOON)
        storage.create_invoice(InvoiceCreate(order_id=order.id, invoice_number="000001", issue_date=NOON))

        assert storage.delete_order(order.id) is True

        assert storage.get_order(order.id) is None
        assert storage.get_order_items(order.id) == []
        assert storage.get_invoices(order.id) == []
        assert [d for d in storage.deliveries.values() if d.order_id == order.id] == []
        assert len(storage.get_order_items(other.id)) == 1
        assert len(storage.get_deliveries()) == 1

    def test_delete_missing_order(self, storage):
        assert storage.delete_order("nope") is False

    def test_orders_sorted_newest_first_and_recent_is_prefix(self, storage, catalog, clock):
        created = []
        for hours in (5, 1, 3, 2):
            clock.current = NOON - timedelta(hours=hours)
            created.append(_order(storage, catalog))
        clock.current = NOON

        orders = storage.get_orders()
        stamps = [o.created_at for o in orders]
        assert stamps == sorted(stamps, reverse=True)

        recent = storage.get_recent_orders(2)
        assert len(recent) == 2
        assert [o.id for o in recent] == [o.id for o in orders[:2]]
        assert recent[0].id == created[1].id
        assert len(storage.get_recent_orders(10)) == 4

    def test_detail_view_tolerates_deleted_client(self, storage, catalog):
        order = _order(storage, catalog)
        storage.delete_client(catalog["client"].id)
        detail = storage.get_order(order.id)
        assert detail.client is None
        assert detail.client_id == catalog["client"].id


class TestDeliveries:
    def test_create_defaults(self, storage, catalog):
        order = _order(storage, catalog)
        delivery = _delivery(storage, order.id, NOON)
        assert delivery.id
        assert delivery.status == "pending"
        assert delivery.delivered_at is None

    def test_blank_optional_strings_become_none(self, storage, catalog):
        order = _order(storage, catalog)
        delivery = _delivery(storage, order.id, NOON, scheduled_time="", driver_name="", notes="")
        assert delivery.scheduled_time is None
        assert delivery.driver_name is None
        assert delivery.notes is None
        invoice = storage.create_invoice(
            InvoiceCreate(order_id=order.id, invoice_number="000001", series="", issue_date=NOON, notes="")
        )
        assert invoice.series is None
        assert invoice.notes is None
        assert invoice.invoice_number == "000001"

    def test_create_for_unknown_order(self, storage):
        with pytest.raises(ValueError, match="Order"):
            _delivery(storage, "ghost", NOON)

    def test_delivered_at_is_stamped_once(self, storage, catalog, clock):
        order = _order(storage, catalog)
        delivery = _delivery(storage, order.id, NOON)

        in_transit = storage.update_delivery(delivery.id, {"status": "in_transit"})
        assert in_transit.delivered_at is None

        clock.current = NOON + timedelta(hours=2)
        delivered = storage.update_delivery(delivery.id, {"status": "delivered"})
        assert delivered.delivered_at == NOON + timedelta(hours=2)

        clock.current = NOON + timedelta(hours=5)
        again = storage.update_delivery(delivery.id, {"status": "delivered", "notes": "conferido"})
        assert again.delivered_at == NOON + timedelta(hours=2)
        assert again.notes == "conferido"

        reopened = storage.update_delivery(delivery.id, {"status": "pending"})
        assert reopened.delivered_at == NOON + timedelta(hours=2)

    def test_update_missing_returns_none(self, storage):
        assert storage.update_delivery("nope", {"status": "delivered"}) is None

    def test_today_window_is_local_calendar_day(self, storage, catalog):
        order = _order(storage, catalog)
        day = datetime(2025, 3, 14)
        yesterday_late = _delivery(storage, order.id, day - timedelta(minutes=1))
        midnight = _delivery(storage, order.id, day)
        evening = _delivery(storage, order.id, day + timedelta(hours=23, minutes=59))
        tomorrow = _delivery(storage, order.id, day + timedelta(days=1))

        today_ids = {d.id for d in storage.get_today_deliveries()}
        assert today_ids == {midnight.id, evening.id}
        assert yesterday_late.id not in today_ids
        assert tomorrow.id not in today_ids

    def test_deliveries_sorted_by_schedule_with_order_details(self, storage, catalog):
        order = _order(storage, catalog)
        early = _delivery(storage, order.id, NOON - timedelta(days=3))
        late = _delivery(storage, order.id, NOON + timedelta(days=3))
        listed = storage.get_deliveries()
        assert [d.id for d in listed] == [late.id, early.id]
        assert listed[0].order.id == order.id
        assert listed[0].order.client.name == "Construtora Teste Ltda"
        assert listed[0].order.supplier.name == "Nova Areião"

    def test_order_detail_lists_deliveries_and_invoices(self, storage, catalog):
        order = _order(storage, catalog)
        delivery = _delivery(storage, order.id, NOON)
        invoice = storage.create_invoice(
            InvoiceCreate(order_id=order.id, invoice_number="000123", series="1", issue_date=NOON, value="1500.00")
        )
        detail = storage.get_order(order.id)
        assert [d.id for d in detail.deliveries] == [delivery.id]
        assert [i.id for i in detail.invoices] == [invoice.id]


class TestDashboard:
    def test_stats(self, storage, catalog, clock):
        storage.create_client(ClientCreate(type="PF", name="Inativo", document="12345678901", active=False))
        pending = _order(storage, catalog, total_value="1000.00")
        confirmed = _order(storage, catalog, total_value="250.50", status="confirmed")
        clock.current = datetime(2025, 2, 28, 18, 0)
        _order(storage, catalog, total_value="9999.00")
        clock.current = NOON

        _delivery(storage, pending.id, NOON)
        _delivery(storage, confirmed.id, NOON + timedelta(days=1))

        stats = storage.get_dashboard_stats()
        assert stats.pending_orders == 2
        assert stats.today_deliveries == 1
        assert stats.active_clients == 1
        assert stats.monthly_value == pytest.approx(1250.50)

    def test_pending_count_tracks_status_changes(self, storage, catalog):
        order = _order(storage, catalog)
        assert storage.get_dashboard_stats().pending_orders == 1
        storage.update_order(order.id, {"status": "cancelled"})
        assert storage.get_dashboard_stats().pending_orders == 0


def test_parse_money_treats_blank_as_zero():
    assert parse_money(None) == Decimal("0")
    assert parse_money("") == Decimal("0")
    assert parse_money("  ") == Decimal("0")
    assert parse_money("8250.00") == Decimal("8250.00")


def test_seed_data(clock):
    from negocio_admin_api.app.core.config import Settings
    from negocio_admin_api.app.core.storage import init_storage

    seeded = init_storage(Settings(seed_sample_data=True), now=clock)
    assert isinstance(seeded, MemStorage)
    assert len(seeded.get_suppliers()) == 2
    assert len(seeded.get_products()) == 23
    assert len(seeded.get_clients()) == 3
    assert [o.order_number for o in seeded.get_orders()] == [1001, 1002, 1003]
    assert len(seeded.get_today_deliveries()) == 2
    delivered = [d for d in seeded.get_deliveries() if d.status == "delivered"]
    assert delivered[0].delivered_at == NOON - timedelta(days=2)

    empty = init_storage(Settings(seed_sample_data=False), now=clock)
    assert empty.get_clients() == []


def test_date_only_input_means_local_midnight():
    delivery = DeliveryCreate(order_id="o1", scheduled_date="2025-03-14")
    assert delivery.scheduled_date == datetime(2025, 3, 14)


def test_timestamp_strings_are_not_mistaken_for_dates():
    delivery = DeliveryCreate(order_id="o1", scheduled_date="1710417600")
    assert delivery.scheduled_date == datetime.fromtimestamp(1710417600)
    assert delivery.scheduled_date.tzinfo is None
