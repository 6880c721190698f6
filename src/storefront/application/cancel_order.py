"""Application service: Cancel Order use case.

Only pending orders can be cancelled, by their owner or an admin. Stock
is returned only when the deployment enables restock-on-cancel; the
status change and any restock commit together.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import require_authenticated
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.order_lifecycle import OrderLifecycle


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, lifecycle: OrderLifecycle) -> None:
        self._uow = uow
        self._lifecycle = lifecycle

    def handle(self, identity: Identity | None, order_id: int) -> OrderDTO:
        require_authenticated(identity)

        with self._uow.begin() as tx:
            order = tx.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            self._lifecycle.cancel(order, identity, InventoryLedger(tx.products))
            tx.orders.save(order)
            tx.commit()

        return OrderDTO.from_order(order)
