"""Order aggregate and its line items.

The Order is an aggregate root that owns its line items.
Status changes go through ``transition_to`` so the state machine is
enforced in one place; who may trigger a transition is decided by the
order lifecycle service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    DuplicateProduct,
    InvalidTransition,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """One product line of an order.

    Immutable. ``unit_price`` is the price snapshot taken when the order
    was assembled and never follows later catalog price changes.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.open()`` for new orders. The ``__init__`` is kept simple
    so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    user_id: str
    status: OrderStatus = OrderStatus.PENDING
    total: Money = field(default_factory=Money.zero)
    items: list[OrderItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def open(user_id: str) -> Order:
        """Create an empty pending order with a zero total."""
        if not user_id:
            raise ValidationError("Order owner is required")
        return Order(id=None, user_id=user_id)

    # --- Population (only while the order is being written) -------------------

    def add_item(self, item: OrderItem) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                f"Cannot add items to order in {self.status.value} status"
            )
        if any(existing.product_id == item.product_id for existing in self.items):
            raise DuplicateProduct(
                f"Product '{item.product_id}' already has a line in this order"
            )
        self.items.append(item)
        self._touch()

    def set_total(self, total: Money) -> None:
        self.total = total
        self._touch()

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidTransition(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target
        self._touch()

    # --- Computed properties --------------------------------------------------

    @property
    def items_subtotal(self) -> Money:
        result = Money.zero(self.total.currency)
        for item in self.items:
            result = result + item.subtotal
        return result

    def _touch(self) -> None:
        self.updated_at = _now()
