"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are added and removed from the
catalog. The product also owns its stock level; the rules for taking
stock out live here and are driven by the inventory ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ValidationError,
)
from storefront.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is a non-negative amount in whole cents
    """

    id: str
    name: str
    price: Money
    stock: int
    category_id: str
    description: str = ""
    active: bool = True
    featured: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        stock: int,
        category_id: str,
        description: str = "",
        featured: bool = False,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_stock_level(stock)
        return Product(
            id=product_id,
            name=name.strip(),
            price=price.rounded(),
            stock=stock,
            category_id=category_id,
            description=(description or "").strip(),
            featured=featured,
        )

    # --- Catalog changes ------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected; their items hold a price snapshot.
        """
        self.price = new_price.rounded()
        self._touch()

    def set_stock(self, stock: int) -> None:
        _check_stock_level(stock)
        self.stock = stock
        self._touch()

    def recategorize(self, category_id: str) -> None:
        self.category_id = category_id
        self._touch()

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()
        self._touch()

    def describe(self, description: str) -> None:
        self.description = description.strip()
        self._touch()

    def set_flags(self, active: bool | None = None, featured: bool | None = None) -> None:
        if active is not None:
            self.active = active
        if featured is not None:
            self.featured = featured
        self._touch()

    # --- Stock movements ------------------------------------------------------

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def withdraw_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises without touching ``stock`` if the withdrawal would leave it
        negative.
        """
        if quantity <= 0:
            raise InvalidQuantity(f"Quantity must be positive, got {quantity}")
        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                f"Insufficient stock for {self.name} "
                f"(requested {quantity}, available {self.stock})"
            )
        self.stock -= quantity
        self._touch()

    def return_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidQuantity(f"Quantity must be positive, got {quantity}")
        self.stock += quantity
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _now()


def _check_stock_level(stock: int) -> None:
    if not isinstance(stock, int) or isinstance(stock, bool):
        raise ValidationError(f"Stock must be an integer, got {type(stock).__name__}")
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")
