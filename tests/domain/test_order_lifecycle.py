"""Unit tests for the order lifecycle service (who may move an order)."""

import pytest

from storefront.domain.exceptions import Forbidden, InvalidTransition, Unauthenticated
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.order_lifecycle import OrderLifecycle
from tests.fakes import FakeUnitOfWork, make_product

OWNER = Identity(id="user1", role="customer")
STRANGER = Identity(id="user9", role="customer")
SELLER = Identity(id="seller1", role="seller")
ADMIN = Identity(id="admin1", role="admin")


def _order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    return Order(
        id=1,
        user_id="user1",
        status=status,
        items=[
            OrderItem(
                product_id="1",
                product_name="Widget",
                quantity=Quantity(2),
                unit_price=Money.of("10.00"),
            )
        ],
    )


def _ledger(stock: int = 3):
    uow = FakeUnitOfWork(products=[make_product(stock=stock)])
    tx = uow.begin()
    return tx, InventoryLedger(tx.products)


class TestAdvance:

    @pytest.mark.parametrize("staff", [ADMIN, SELLER, Identity(id="v", role="VENDOR")])
    def test_staff_can_process_then_complete(self, staff):
        order = _order()
        lifecycle = OrderLifecycle()
        lifecycle.advance(order, OrderStatus.PROCESSING, staff)
        lifecycle.advance(order, OrderStatus.COMPLETED, staff)
        assert order.status == OrderStatus.COMPLETED

    def test_customer_cannot_advance_even_own_order(self):
        order = _order()
        with pytest.raises(Forbidden):
            OrderLifecycle().advance(order, OrderStatus.PROCESSING, OWNER)
        assert order.status == OrderStatus.PENDING

    def test_anonymous_cannot_advance(self):
        with pytest.raises(Unauthenticated):
            OrderLifecycle().advance(_order(), OrderStatus.PROCESSING, None)

    def test_pending_cannot_jump_to_completed(self):
        with pytest.raises(InvalidTransition):
            OrderLifecycle().advance(_order(), OrderStatus.COMPLETED, ADMIN)

    def test_advance_cannot_cancel(self):
        with pytest.raises(InvalidTransition):
            OrderLifecycle().advance(_order(), OrderStatus.CANCELLED, ADMIN)


class TestCancel:

    @pytest.mark.parametrize("caller", [OWNER, ADMIN])
    def test_owner_or_admin_can_cancel_pending(self, caller):
        order = _order()
        _, ledger = _ledger()
        OrderLifecycle().cancel(order, caller, ledger)
        assert order.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize("caller", [STRANGER, SELLER])
    def test_others_cannot_cancel(self, caller):
        order = _order()
        _, ledger = _ledger()
        with pytest.raises(Forbidden):
            OrderLifecycle().cancel(order, caller, ledger)
        assert order.status == OrderStatus.PENDING

    @pytest.mark.parametrize(
        "status", [OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.CANCELLED]
    )
    def test_only_pending_orders_can_be_cancelled(self, status):
        _, ledger = _ledger()
        with pytest.raises(InvalidTransition, match="Only pending orders"):
            OrderLifecycle().cancel(_order(status), OWNER, ledger)

    def test_cancel_does_not_restock_by_default(self):
        tx, ledger = _ledger(stock=3)
        OrderLifecycle().cancel(_order(), OWNER, ledger)
        assert tx.products.get_by_id("1").stock == 3

    def test_cancel_restocks_when_enabled(self):
        tx, ledger = _ledger(stock=3)
        OrderLifecycle(restock_on_cancel=True).cancel(_order(), OWNER, ledger)
        assert tx.products.get_by_id("1").stock == 5

    def test_restock_skips_products_removed_from_catalog(self):
        tx, ledger = _ledger(stock=3)
        tx.products.delete("1")
        order = _order()
        OrderLifecycle(restock_on_cancel=True).cancel(order, OWNER, ledger)
        assert order.status == OrderStatus.CANCELLED


class TestChangeStatus:

    def test_cancelled_target_uses_cancel_rules(self):
        _, ledger = _ledger()
        with pytest.raises(Forbidden):
            OrderLifecycle().change_status(_order(), OrderStatus.CANCELLED, SELLER, ledger)

    def test_forward_target_uses_advance_rules(self):
        order = _order()
        _, ledger = _ledger()
        OrderLifecycle().change_status(order, OrderStatus.PROCESSING, SELLER, ledger)
        assert order.status == OrderStatus.PROCESSING

    def test_back_to_pending_is_invalid(self):
        _, ledger = _ledger()
        with pytest.raises(InvalidTransition):
            OrderLifecycle().change_status(
                _order(OrderStatus.PROCESSING), OrderStatus.PENDING, ADMIN, ledger
            )
