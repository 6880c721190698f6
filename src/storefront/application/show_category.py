"""Application service: Show Category use case (query)."""

from __future__ import annotations

from storefront.application.dto import CategoryDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, category_id: str) -> CategoryDTO:
        with self._uow.begin() as tx:
            category = tx.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError(f"Category '{category_id}' not found")
            count = len(tx.products.list_by_category(category_id))
        return CategoryDTO.from_category(category, products_count=count)
