"""Application service: Show Order use case (query).

A caller who is neither the owner nor an admin gets ``Forbidden`` whether
or not the order exists, so order ids reveal nothing. Only admins are
told that an id is unknown.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import (
    require_authenticated,
    require_owner_or_admin,
)


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, order_id: int) -> OrderDTO:
        caller = require_authenticated(identity)
        with self._uow.begin() as tx:
            order = tx.orders.get_by_id(order_id)
        require_owner_or_admin(caller, order.user_id if order is not None else None)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)
