"""Application service: Delete Product use case.

Orders that reference the product keep their own name and price
snapshot, so deleting from the catalog never changes order history.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, product_id: str) -> None:
        caller = authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            if tx.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            tx.products.delete(product_id)
            tx.commit()

        logger.info("product_deleted", product_id=product_id, by=caller.id)
