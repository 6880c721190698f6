"""Domain service: Order Lifecycle.

    pending -> processing -> completed
    pending -> cancelled

Moving an order forward is staff work (admin or seller). Cancelling is
allowed for the order's owner or an admin, and only while the order is
still pending. Whether cancellation returns the items to stock is a
deployment choice passed in as ``restock_on_cancel``.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InvalidTransition, ProductNotFound
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.service.authorization_policy import (
    Capability,
    authorize,
    require_owner_or_admin,
)
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class OrderLifecycle:

    def __init__(self, restock_on_cancel: bool = False) -> None:
        self._restock_on_cancel = restock_on_cancel

    def change_status(
        self,
        order: Order,
        target: OrderStatus,
        identity: Identity | None,
        ledger: InventoryLedger,
    ) -> None:
        if target == OrderStatus.CANCELLED:
            self.cancel(order, identity, ledger)
        else:
            self.advance(order, target, identity)

    def advance(self, order: Order, target: OrderStatus, identity: Identity | None) -> None:
        """Move an order to processing or completed."""
        caller = authorize(identity, Capability.ADVANCE_ORDER)
        if target not in (OrderStatus.PROCESSING, OrderStatus.COMPLETED):
            raise InvalidTransition(f"Cannot move an order to {target.value}")
        previous = order.status
        order.transition_to(target)
        logger.info(
            "order_status_changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=target.value,
            by=caller.id,
        )

    def cancel(self, order: Order, identity: Identity | None, ledger: InventoryLedger) -> None:
        caller = require_owner_or_admin(identity, order.user_id)
        if order.status != OrderStatus.PENDING:
            raise InvalidTransition(
                f"Only pending orders can be cancelled; order #{order.id} "
                f"is {order.status.value}"
            )
        order.transition_to(OrderStatus.CANCELLED)
        if self._restock_on_cancel:
            for item in order.items:
                try:
                    ledger.restock(item.product_id, item.quantity.value)
                except ProductNotFound:
                    # removed from the catalog since the order was placed
                    logger.warning(
                        "restock_skipped",
                        order_id=order.id,
                        product_id=item.product_id,
                    )
        logger.info(
            "order_cancelled",
            order_id=order.id,
            by=caller.id,
            restocked=self._restock_on_cancel,
        )
