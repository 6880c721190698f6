"""Domain service: Inventory Ledger.

Moves product stock inside a caller-provided transaction. The ledger is
handed the transaction's product repository, so a decrement only becomes
visible to others when that transaction commits.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InvalidQuantity, ProductNotFound
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, product_id: str, quantity: int) -> Product:
        """Decrement stock for *product_id* by *quantity*.

        Raises InvalidQuantity, ProductNotFound or InsufficientStock and
        leaves the stock untouched in every failure case.
        """
        if quantity <= 0:
            raise InvalidQuantity(f"Quantity must be positive, got {quantity}")
        product = self._load(product_id)
        product.withdraw_stock(quantity)
        self._product_repo.save(product)
        logger.debug(
            "stock_reserved",
            product_id=product_id,
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    def restock(self, product_id: str, quantity: int) -> Product:
        """Return *quantity* units to stock (used on cancellation)."""
        product = self._load(product_id)
        product.return_stock(quantity)
        self._product_repo.save(product)
        logger.debug(
            "stock_returned",
            product_id=product_id,
            quantity=quantity,
            remaining=product.stock,
        )
        return product

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product '{product_id}' not found")
        return product
