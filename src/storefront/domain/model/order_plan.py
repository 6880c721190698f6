"""A validated, priced order that has not been written yet."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class PlannedLine:
    """A product snapshot paired with the requested quantity."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at assembly time
    available_stock: int  # as read during assembly; advisory only

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderPlan:

    requester_id: str
    lines: tuple[PlannedLine, ...]
    total: Money
