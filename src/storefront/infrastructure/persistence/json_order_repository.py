"""JSON-document implementation of OrderRepository.

Order items are stored nested under their order, so an item can never
exist without its parent and (order id, product id) stays unique.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, document: dict) -> None:
        self._rows: list[dict] = document.setdefault("orders", [])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        if not self._rows:
            return 1
        return max(row["id"] for row in self._rows) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for row in self._rows:
            if row["id"] == order_id:
                return self._to_domain(row)
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [self._to_domain(row) for row in self._rows if row["user_id"] == user_id]

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        raw = self._to_raw(order)
        for i, row in enumerate(self._rows):
            if row["id"] == order.id:
                self._rows[i] = raw
                return
        self._rows.append(raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "price": str(item.unit_price.amount),
                    "subtotal": str(item.subtotal.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["price"]), currency),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            status=OrderStatus(raw["status"]),
            total=Money(Decimal(raw["total"]), currency),
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
