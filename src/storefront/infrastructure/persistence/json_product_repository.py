"""JSON-document implementation of ProductRepository.

Works on the ``products`` section of a transaction's working document;
nothing reaches the file until the transaction commits.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, document: dict) -> None:
        self._rows: list[dict] = document.setdefault("products", [])

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        if not self._rows:
            return "1"
        return str(max(int(row["id"]) for row in self._rows) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for row in self._rows:
            if row["id"] == product_id:
                return self._to_domain(row)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(row) for row in self._rows]

    def save(self, product: Product) -> None:
        raw = self._to_raw(product)
        for i, row in enumerate(self._rows):
            if row["id"] == product.id:
                self._rows[i] = raw
                return
        self._rows.append(raw)

    def delete(self, product_id: str) -> None:
        self._rows[:] = [row for row in self._rows if row["id"] != product_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "category_id": product.category_id,
            "active": product.active,
            "featured": product.featured,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw["stock"],
            category_id=raw["category_id"],
            active=raw.get("active", True),
            featured=raw.get("featured", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
