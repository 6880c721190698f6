"""Application service: List Orders use case (query).

Callers only ever see their own orders, whatever their role.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, status: str | None = None) -> list[OrderDTO]:
        caller = authorize(identity, Capability.VIEW_OWN_ORDERS)
        wanted = parse_status(status) if status else None
        with self._uow.begin() as tx:
            orders = tx.orders.list_by_user(caller.id)
        return [
            OrderDTO.from_order(order)
            for order in orders
            if wanted is None or order.status == wanted
        ]


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError:
        names = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of: {names})") from None
