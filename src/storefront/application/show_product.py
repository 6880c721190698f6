"""Application service: Show Product use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow.begin() as tx:
            product = tx.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_product(product)
