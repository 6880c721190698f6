"""Application service: List Categories use case (query)."""

from __future__ import annotations

from collections import Counter

from storefront.application.dto import CategoryDTO
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[CategoryDTO]:
        with self._uow.begin() as tx:
            categories = tx.categories.list_all()
            counts = Counter(p.category_id for p in tx.products.list_all())
        return [CategoryDTO.from_category(c, counts[c.id]) for c in categories]
