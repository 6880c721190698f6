"""Application service: Delete Category use case.

A category that still has products cannot be removed; products must
always point at an existing category.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize

logger = structlog.get_logger(__name__)


class DeleteCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, category_id: str) -> None:
        caller = authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            category = tx.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError(f"Category '{category_id}' not found")

            in_use = len(tx.products.list_by_category(category_id))
            if in_use:
                raise ValidationError(
                    f"Category '{category.name}' still has {in_use} product(s)"
                )
            tx.categories.delete(category_id)
            tx.commit()

        logger.info("category_deleted", category_id=category_id, by=caller.id)
