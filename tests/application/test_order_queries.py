"""Integration tests for the ShowOrder and ListOrders queries."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, Forbidden, Unauthenticated
from storefront.domain.model.identity import Identity
from storefront.domain.service.order_lifecycle import OrderLifecycle
from tests.fakes import FakeUnitOfWork, make_product

ALICE = Identity(id="alice", role="customer")
BOB = Identity(id="bob", role="customer")
ADMIN = Identity(id="root", role="Admin")


def _setup():
    uow = FakeUnitOfWork(products=[make_product("1", stock=100)])
    place = PlaceOrderHandler(uow)
    alice_first = place.handle(ALICE, [OrderItemSpec("1", 1)]).id
    alice_second = place.handle(ALICE, [OrderItemSpec("1", 2)]).id
    bob_order = place.handle(BOB, [OrderItemSpec("1", 3)]).id
    return uow, alice_first, alice_second, bob_order


class TestShowOrder:

    def test_owner_sees_order(self):
        uow, alice_first, _, _ = _setup()
        dto = ShowOrderHandler(uow).handle(ALICE, alice_first)
        assert dto.id == alice_first
        assert dto.items[0].unit_price == "$10.00"

    def test_admin_sees_any_order(self):
        uow, _, _, bob_order = _setup()
        assert ShowOrderHandler(uow).handle(ADMIN, bob_order).user_id == "bob"

    def test_non_owner_forbidden(self):
        uow, _, _, bob_order = _setup()
        with pytest.raises(Forbidden):
            ShowOrderHandler(uow).handle(ALICE, bob_order)

    def test_seller_is_not_an_owner(self):
        uow, _, _, bob_order = _setup()
        with pytest.raises(Forbidden):
            ShowOrderHandler(uow).handle(Identity(id="s", role="seller"), bob_order)

    def test_anonymous_rejected(self):
        uow, alice_first, _, _ = _setup()
        with pytest.raises(Unauthenticated):
            ShowOrderHandler(uow).handle(None, alice_first)

    def test_unknown_order_is_reported_to_admins(self):
        uow, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle(ADMIN, 404)

    def test_unknown_order_looks_like_a_foreign_one(self):
        uow, _, _, bob_order = _setup()
        with pytest.raises(Forbidden) as missing:
            ShowOrderHandler(uow).handle(ALICE, 404)
        with pytest.raises(Forbidden) as foreign:
            ShowOrderHandler(uow).handle(ALICE, bob_order)
        assert str(missing.value) == str(foreign.value)


class TestListOrders:

    def test_lists_only_own_orders(self):
        uow, alice_first, alice_second, _ = _setup()
        ids = [dto.id for dto in ListOrdersHandler(uow).handle(ALICE)]
        assert ids == [alice_first, alice_second]

    def test_admin_also_sees_only_own_orders(self):
        uow, _, _, _ = _setup()
        assert ListOrdersHandler(uow).handle(ADMIN) == []

    def test_status_filter(self):
        uow, alice_first, alice_second, _ = _setup()
        CancelOrderHandler(uow, OrderLifecycle()).handle(ALICE, alice_first)

        cancelled = ListOrdersHandler(uow).handle(ALICE, status="cancelled")
        pending = ListOrdersHandler(uow).handle(ALICE, status="pending")

        assert [dto.id for dto in cancelled] == [alice_first]
        assert [dto.id for dto in pending] == [alice_second]

    def test_anonymous_rejected(self):
        uow, _, _, _ = _setup()
        with pytest.raises(Unauthenticated):
            ListOrdersHandler(uow).handle(None)
