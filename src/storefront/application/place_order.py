"""Application service: Place Order use case.

    authorization -> assembly (read-only) -> atomic write

Assembly runs in its own read transaction that is discarded afterwards,
so price computation never holds the write transaction open.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize
from storefront.domain.service.order_assembler import OrderAssembler
from storefront.domain.service.order_writer import TransactionalOrderWriter

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, item_specs: list[OrderItemSpec]) -> OrderDTO:
        caller = authorize(identity, Capability.PLACE_ORDER)
        items = [(spec.product_id, spec.quantity) for spec in item_specs]

        try:
            with self._uow.begin() as tx:
                plan = OrderAssembler(tx.products).assemble(items, caller)
        except DomainException as exc:
            logger.info(
                "order_rejected",
                user_id=caller.id,
                kind=exc.kind.value,
                reason=str(exc),
            )
            raise

        order = TransactionalOrderWriter(self._uow).place(plan, owner_id=caller.id)
        return OrderDTO.from_order(order)
