"""Application service: Update Product use case.

Only the fields that are passed are changed. Price changes do NOT affect
existing orders; their items captured a price snapshot.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        identity: Identity | None,
        product_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category_id: str | None = None,
        active: bool | None = None,
        featured: bool | None = None,
    ) -> ProductDTO:
        caller = authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            product = tx.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if category_id is not None and category_id != product.category_id:
                if tx.categories.get_by_id(category_id) is None:
                    raise EntityNotFoundError(f"Category '{category_id}' not found")
                product.recategorize(category_id)
            if name is not None:
                product.rename(name)
            if description is not None:
                product.describe(description)
            if price is not None:
                product.update_price(Money.of(price))
            if stock is not None:
                product.set_stock(stock)
            if active is not None or featured is not None:
                product.set_flags(active=active, featured=featured)

            tx.products.save(product)
            tx.commit()

        logger.info("product_updated", product_id=product_id, by=caller.id)
        return ProductDTO.from_product(product)
