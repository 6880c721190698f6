"""Integration tests for the CancelOrder and ChangeOrderStatus use cases."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.change_order_status import ChangeOrderStatusHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    Forbidden,
    InvalidTransition,
    Unauthenticated,
    ValidationError,
)
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import OrderStatus
from storefront.domain.service.order_lifecycle import OrderLifecycle
from tests.fakes import FakeUnitOfWork, make_product

OWNER = Identity(id="user1", role="customer")
STRANGER = Identity(id="user2", role="customer")
SELLER = Identity(id="seller1", role="seller")
ADMIN = Identity(id="admin1", role="admin")


def _setup(restock_on_cancel: bool = False):
    uow = FakeUnitOfWork(products=[make_product("1", "Widget", stock=5)])
    order_id = PlaceOrderHandler(uow).handle(OWNER, [OrderItemSpec("1", 2)]).id
    lifecycle = OrderLifecycle(restock_on_cancel=restock_on_cancel)
    return uow, order_id, lifecycle


class TestCancelOrder:

    @pytest.mark.parametrize("caller", [OWNER, ADMIN])
    def test_owner_or_admin_cancels_pending_order(self, caller):
        uow, order_id, lifecycle = _setup()
        dto = CancelOrderHandler(uow, lifecycle).handle(caller, order_id)
        assert dto.status == "cancelled"
        assert uow.orders[order_id].status == OrderStatus.CANCELLED

    def test_stranger_forbidden(self):
        uow, order_id, lifecycle = _setup()
        with pytest.raises(Forbidden):
            CancelOrderHandler(uow, lifecycle).handle(STRANGER, order_id)
        assert uow.orders[order_id].status == OrderStatus.PENDING

    def test_anonymous_rejected(self):
        uow, order_id, lifecycle = _setup()
        with pytest.raises(Unauthenticated):
            CancelOrderHandler(uow, lifecycle).handle(None, order_id)

    def test_cancel_processing_order_is_invalid_transition(self):
        uow, order_id, lifecycle = _setup()
        ChangeOrderStatusHandler(uow, lifecycle).handle(SELLER, order_id, "processing")

        with pytest.raises(InvalidTransition):
            CancelOrderHandler(uow, lifecycle).handle(OWNER, order_id)
        assert uow.orders[order_id].status == OrderStatus.PROCESSING

    def test_unknown_order(self):
        uow, _, lifecycle = _setup()
        with pytest.raises(EntityNotFoundError, match="#999 not found"):
            CancelOrderHandler(uow, lifecycle).handle(OWNER, 999)

    def test_stock_stays_reserved_by_default(self):
        uow, order_id, lifecycle = _setup()
        CancelOrderHandler(uow, lifecycle).handle(OWNER, order_id)
        assert uow.stock_of("1") == 3

    def test_stock_returned_when_restock_enabled(self):
        uow, order_id, lifecycle = _setup(restock_on_cancel=True)
        CancelOrderHandler(uow, lifecycle).handle(OWNER, order_id)
        assert uow.stock_of("1") == 5


class TestChangeOrderStatus:

    def test_seller_moves_order_through_to_completed(self):
        uow, order_id, lifecycle = _setup()
        handler = ChangeOrderStatusHandler(uow, lifecycle)

        assert handler.handle(SELLER, order_id, "processing").status == "processing"
        assert handler.handle(ADMIN, order_id, "COMPLETED").status == "completed"
        assert uow.orders[order_id].status == OrderStatus.COMPLETED

    def test_customer_cannot_advance_own_order(self):
        uow, order_id, lifecycle = _setup()
        with pytest.raises(Forbidden):
            ChangeOrderStatusHandler(uow, lifecycle).handle(OWNER, order_id, "processing")
        assert uow.orders[order_id].status == OrderStatus.PENDING

    def test_cancel_through_status_change_follows_cancel_rules(self):
        uow, order_id, lifecycle = _setup()
        handler = ChangeOrderStatusHandler(uow, lifecycle)
        with pytest.raises(Forbidden):
            handler.handle(SELLER, order_id, "cancelled")
        assert handler.handle(OWNER, order_id, "cancelled").status == "cancelled"

    def test_unknown_status_rejected(self):
        uow, order_id, lifecycle = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            ChangeOrderStatusHandler(uow, lifecycle).handle(ADMIN, order_id, "shipped")

    def test_completed_is_terminal(self):
        uow, order_id, lifecycle = _setup()
        handler = ChangeOrderStatusHandler(uow, lifecycle)
        handler.handle(ADMIN, order_id, "processing")
        handler.handle(ADMIN, order_id, "completed")
        with pytest.raises(InvalidTransition):
            handler.handle(ADMIN, order_id, "processing")
