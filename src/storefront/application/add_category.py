"""Application service: Add Category use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import CategoryDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.category import Category
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize

logger = structlog.get_logger(__name__)


class AddCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, identity: Identity | None, name: str, description: str = "") -> CategoryDTO:
        caller = authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            category = Category.create(tx.categories.next_id(), name, description)
            if tx.categories.get_by_name(category.name) is not None:
                raise ValidationError(f"Category '{category.name}' already exists")
            tx.categories.save(category)
            tx.commit()

        logger.info("category_added", category_id=category.id, by=caller.id)
        return CategoryDTO.from_category(category, products_count=0)
