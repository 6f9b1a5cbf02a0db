"""Integration tests for the SQLAlchemy store against a SQLite file."""

from datetime import datetime, timedelta, timezone

import pytest

from orderledger.application.cancel_order import CancelOrderHandler
from orderledger.application.create_order import CreateOrderHandler
from orderledger.application.dto import OrderItemSpec
from orderledger.application.list_orders import ListOrdersHandler
from orderledger.domain.exceptions import ConflictError, EntityNotFoundError
from orderledger.domain.model.item import Item
from orderledger.domain.model.order import Order, OrderLine, OrderStatus
from orderledger.domain.model.value_objects import Money, Quantity
from orderledger.infrastructure import bootstrap
from orderledger.infrastructure.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'ledger.db'}")


@pytest.fixture
def uow_factory(settings):
    return lambda: bootstrap.unit_of_work(settings)


def _add_item(uow_factory, name="Apple", price=100, stock=2) -> Item:
    item = Item.create(name=name, price=price, stock=stock)
    with uow_factory() as uow:
        uow.items.add(item)
        uow.commit()
    return item


def _load_item(uow_factory, item_id) -> Item:
    with uow_factory() as uow:
        return uow.items.get_by_id(item_id)


class TestItemRepository:

    def test_round_trip(self, uow_factory):
        item = _add_item(uow_factory)
        loaded = _load_item(uow_factory, item.id)
        assert loaded.name == "Apple"
        assert loaded.price == Money(100)
        assert loaded.stock == 2
        assert loaded.version == 0
        assert loaded.created_at.tzinfo is not None

    def test_get_many_skips_missing(self, uow_factory):
        a = _add_item(uow_factory, "A")
        b = _add_item(uow_factory, "B")
        with uow_factory() as uow:
            found = uow.items.get_many([a.id, b.id, "ghost"])
        assert set(found) == {a.id, b.id}

    def test_conditional_decrement(self, uow_factory):
        item = _add_item(uow_factory, stock=3)
        with uow_factory() as uow:
            assert uow.items.decrement_stock_if_available(item.id, 2) == 1
            assert uow.items.decrement_stock_if_available(item.id, 2) == 0
            assert uow.items.decrement_stock_if_available("ghost", 1) == 0
            uow.commit()
        loaded = _load_item(uow_factory, item.id)
        assert loaded.stock == 1
        assert loaded.version == 1

    def test_increment(self, uow_factory):
        item = _add_item(uow_factory, stock=0)
        with uow_factory() as uow:
            assert uow.items.increment_stock(item.id, 4) == 1
            assert uow.items.increment_stock("ghost", 4) == 0
            uow.commit()
        loaded = _load_item(uow_factory, item.id)
        assert (loaded.stock, loaded.version) == (4, 1)

    def test_uncommitted_writes_are_rolled_back(self, uow_factory):
        item = _add_item(uow_factory, stock=3)
        with uow_factory() as uow:
            uow.items.decrement_stock_if_available(item.id, 3)
        assert _load_item(uow_factory, item.id).stock == 3

    def test_save_never_writes_stock(self, uow_factory):
        item = _add_item(uow_factory, stock=3)
        item.stock = 999
        item.update_price(Money(150))
        with uow_factory() as uow:
            uow.items.save(item)
            uow.commit()
        loaded = _load_item(uow_factory, item.id)
        assert loaded.price == Money(150)
        assert loaded.stock == 3

    def test_list_newest_first(self, uow_factory):
        old = _add_item(uow_factory, "Old")
        new = _add_item(uow_factory, "New")
        with uow_factory() as uow:
            ids = [i.id for i in uow.items.list_all()]
        assert ids.index(new.id) < ids.index(old.id)


class TestOrderRepository:

    def test_add_assigns_ids_and_round_trips(self, uow_factory):
        item = _add_item(uow_factory)
        order = Order.create([
            OrderLine(item_id=item.id, quantity=Quantity(2), unit_price=Money(100))
        ])
        with uow_factory() as uow:
            uow.orders.add(order)
            uow.commit()

        assert order.id is not None
        assert order.lines[0].id is not None
        with uow_factory() as uow:
            loaded = uow.orders.get_by_id(order.id)
        assert loaded.total == Money(200)
        assert loaded.status == OrderStatus.CREATED
        assert loaded.lines[0].item_id == item.id
        assert loaded.lines[0].unit_price == Money(100)

    def test_missing_order_is_none(self, uow_factory):
        with uow_factory() as uow:
            assert uow.orders.get_by_id(12345) is None

    def test_transition_only_from_expected_status(self, uow_factory):
        item = _add_item(uow_factory)
        order = Order.create([
            OrderLine(item_id=item.id, quantity=Quantity(1), unit_price=Money(100))
        ])
        later = datetime(2026, 2, 1, tzinfo=timezone.utc)
        with uow_factory() as uow:
            uow.orders.add(order)
            assert uow.orders.transition_status(
                order.id, OrderStatus.CREATED, OrderStatus.SHIPPED, later
            ) == 1
            assert uow.orders.transition_status(
                order.id, OrderStatus.CREATED, OrderStatus.CANCELLED, later
            ) == 0
            assert uow.orders.transition_status(
                999, OrderStatus.CREATED, OrderStatus.CANCELLED, later
            ) == 0
            uow.commit()

        with uow_factory() as uow:
            loaded = uow.orders.get_by_id(order.id)
        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.updated_at == later

    def test_list_newest_first(self, uow_factory):
        item = _add_item(uow_factory, stock=10)
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        with uow_factory() as uow:
            for hours in (1, 3, 2):
                order = Order.create([
                    OrderLine(item_id=item.id, quantity=Quantity(hours), unit_price=Money(1))
                ])
                order.created_at = base + timedelta(hours=hours)
                uow.orders.add(order)
            uow.commit()

        listed = ListOrdersHandler(uow_factory()).handle()
        assert [o.lines[0].quantity for o in listed] == [3, 2, 1]


class TestLifecycleOnSqlite:

    def test_example_scenario(self, uow_factory):
        item = _add_item(uow_factory, stock=2, price=100)
        create = CreateOrderHandler(uow_factory())
        cancel = CancelOrderHandler(uow_factory())

        o1 = create.handle([OrderItemSpec(item.id, 2)])
        assert o1.total == 200
        assert _load_item(uow_factory, item.id).stock == 0

        with pytest.raises(ConflictError):
            create.handle([OrderItemSpec(item.id, 1)])
        assert _load_item(uow_factory, item.id).stock == 0

        assert cancel.handle(o1.id).status == "CANCELLED"
        assert _load_item(uow_factory, item.id).stock == 2

        assert cancel.handle(o1.id).status == "CANCELLED"
        restored = _load_item(uow_factory, item.id)
        assert restored.stock == 2
        assert restored.version == 2

    def test_failed_multi_line_order_leaves_no_trace(self, uow_factory):
        plenty = _add_item(uow_factory, "Plenty", stock=10)
        scarce = _add_item(uow_factory, "Scarce", stock=1)

        with pytest.raises(ConflictError):
            CreateOrderHandler(uow_factory()).handle(
                [OrderItemSpec(plenty.id, 5), OrderItemSpec(scarce.id, 2)]
            )

        assert _load_item(uow_factory, plenty.id).stock == 10
        assert _load_item(uow_factory, plenty.id).version == 0
        assert ListOrdersHandler(uow_factory()).handle() == []

    def test_missing_item_aborts_order(self, uow_factory):
        item = _add_item(uow_factory, stock=5)
        with pytest.raises(EntityNotFoundError):
            CreateOrderHandler(uow_factory()).handle(
                [OrderItemSpec(item.id, 1), OrderItemSpec("ghost", 1)]
            )
        assert _load_item(uow_factory, item.id).stock == 5

    def test_price_change_does_not_touch_order_total(self, uow_factory):
        item = _add_item(uow_factory, stock=5, price=100)
        order = CreateOrderHandler(uow_factory()).handle([OrderItemSpec(item.id, 3)])

        item.update_price(Money(1000))
        with uow_factory() as uow:
            uow.items.save(item)
            uow.commit()

        with uow_factory() as uow:
            assert uow.orders.get_by_id(order.id).total == Money(300)

    def test_delete_skips_referenced_items(self, uow_factory):
        item = _add_item(uow_factory, stock=5)
        other = _add_item(uow_factory, "Other", stock=5)
        CreateOrderHandler(uow_factory()).handle([OrderItemSpec(item.id, 1)])
        with uow_factory() as uow:
            assert uow.items.delete_if_unreferenced(item.id) == 0
            assert uow.items.delete_if_unreferenced(other.id) == 1
            assert uow.items.delete_if_unreferenced("ghost") == 0
            uow.commit()
        assert _load_item(uow_factory, item.id) is not None
        assert _load_item(uow_factory, other.id) is None
