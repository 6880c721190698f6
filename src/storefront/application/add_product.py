"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Identity
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.authorization_policy import Capability, authorize

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        identity: Identity | None,
        name: str,
        price: str,
        stock: int,
        category_id: str,
        description: str = "",
        featured: bool = False,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        caller = authorize(identity, Capability.MANAGE_CATALOG)

        with self._uow.begin() as tx:
            if tx.categories.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category '{category_id}' not found")

            product = Product.create(
                product_id=tx.products.next_id(),
                name=name,
                price=Money.of(price),
                stock=stock,
                category_id=category_id,
                description=description,
                featured=featured,
            )
            tx.products.save(product)
            tx.commit()

        logger.info("product_added", product_id=product.id, by=caller.id)
        return ProductDTO.from_product(product)
