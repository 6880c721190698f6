"""Application service: List Products use case (query).

Filtering and pagination over the catalog. Reads are public.
"""

from __future__ import annotations

import math

from storefront.application.dto import ProductDTO, ProductFilters, ProductPageDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

MAX_PAGE_SIZE = 100

_SORT_KEYS = {
    "created_at": lambda p: p.created_at,
    "price": lambda p: p.price.amount,
    "name": lambda p: p.name.lower(),
    "stock": lambda p: p.stock,
}


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, filters: ProductFilters | None = None) -> ProductPageDTO:
        filters = filters or ProductFilters()
        self._validate(filters)

        with self._uow.begin() as tx:
            products = tx.products.list_all()

        matching = [p for p in products if _matches(p, filters)]
        matching.sort(
            key=_SORT_KEYS[filters.sort_by],
            reverse=filters.sort_order.lower() == "desc",
        )

        total = len(matching)
        total_pages = math.ceil(total / filters.limit) if total else 0
        start = (filters.page - 1) * filters.limit
        page = matching[start:start + filters.limit]

        return ProductPageDTO(
            products=[ProductDTO.from_product(p) for p in page],
            total=total,
            page=filters.page,
            total_pages=total_pages,
            has_more=filters.page < total_pages,
        )

    @staticmethod
    def _validate(filters: ProductFilters) -> None:
        if filters.page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= filters.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if filters.sort_by not in _SORT_KEYS:
            raise ValidationError(
                f"Cannot sort by '{filters.sort_by}' "
                f"(expected one of: {', '.join(_SORT_KEYS)})"
            )
        if filters.sort_order.lower() not in ("asc", "desc"):
            raise ValidationError("Sort order must be 'asc' or 'desc'")


def _matches(product: Product, filters: ProductFilters) -> bool:
    if filters.category_id is not None and product.category_id != filters.category_id:
        return False
    if filters.search:
        needle = filters.search.lower()
        if needle not in product.name.lower() and needle not in product.description.lower():
            return False
    if filters.min_price is not None and product.price < Money.of(filters.min_price):
        return False
    if filters.max_price is not None and Money.of(filters.max_price) < product.price:
        return False
    if filters.featured is not None and product.featured != filters.featured:
        return False
    if filters.active is not None and product.active != filters.active:
        return False
    if filters.in_stock is not None and (product.stock > 0) != filters.in_stock:
        return False
    return True
