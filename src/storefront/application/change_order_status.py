"""Application service: Change Order Status use case.

Loads the order, lets the lifecycle decide whether the caller may make
the move, and persists the result in one transaction. Cancelling through
this handler follows the same rules as ``CancelOrderHandler``.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import parse_status
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import require_authenticated
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.order_lifecycle import OrderLifecycle


class ChangeOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, lifecycle: OrderLifecycle) -> None:
        self._uow = uow
        self._lifecycle = lifecycle

    def handle(self, identity: Identity | None, order_id: int, status: str) -> OrderDTO:
        require_authenticated(identity)
        target = parse_status(status)

        with self._uow.begin() as tx:
            order = tx.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            self._lifecycle.change_status(order, target, identity, InventoryLedger(tx.products))
            tx.orders.save(order)
            tx.commit()

        return OrderDTO.from_order(order)
