"""Application service: Update Category use case.

Only the fields that are passed are changed.
"""

from __future__ import annotations

from storefront.application.dto import CategoryDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.identity import Identity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize


class UpdateCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        identity: Identity | None,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
        active: bool | None = None,
    ) -> CategoryDTO:
        authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            category = tx.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError(f"Category '{category_id}' not found")

            if name is not None:
                clash = tx.categories.get_by_name(name)
                if clash is not None and clash.id != category_id:
                    raise ValidationError(f"Category '{clash.name}' already exists")
                category.rename(name)
            if description is not None:
                category.describe(description)
            if active is not None:
                category.set_active(active)

            tx.categories.save(category)
            count = len(tx.products.list_by_category(category_id))
            tx.commit()

        return CategoryDTO.from_category(category, products_count=count)
