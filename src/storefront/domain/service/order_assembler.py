"""Domain service: Order Assembler.

Turns a requested item list into a priced ``OrderPlan`` or rejects it.
Assembly only reads; nothing is written until the order writer runs, so
a rejected request never leaves partial state behind.

Checks run in a fixed order and each maps to its own error kind:

  1. the list is non-empty                        -> EmptyOrder
  2. no product id appears twice                  -> DuplicateProduct
  3. every quantity is a positive integer         -> InvalidQuantity
  4. every product exists and is active           -> ProductNotFound
  5. every product has enough stock (advisory)    -> InsufficientStock
"""

from __future__ import annotations

from collections.abc import Sequence

from storefront.domain.exceptions import (
    DuplicateProduct,
    EmptyOrder,
    InsufficientStock,
    ProductNotFound,
)
from storefront.domain.model.identity import Identity
from storefront.domain.model.order_plan import OrderPlan, PlannedLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.product_repository import ProductRepository


class OrderAssembler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def assemble(
        self,
        items: Sequence[tuple[str, int]],
        requester: Identity,
    ) -> OrderPlan:
        if not items:
            raise EmptyOrder("Order must contain at least one item")

        self._check_duplicates(items)
        quantities = [Quantity(qty) for _, qty in items]
        products = [self._resolve(product_id) for product_id, _ in items]

        for product, qty in zip(products, quantities):
            if not product.has_stock_for(qty.value):
                raise InsufficientStock(
                    f"Insufficient stock for {product.name} "
                    f"(requested {qty.value}, available {product.stock})"
                )

        lines = tuple(
            PlannedLine(
                product_id=product.id,
                product_name=product.name,
                quantity=qty,
                unit_price=product.price,  # <-- price snapshot
                available_stock=product.stock,
            )
            for product, qty in zip(products, quantities)
        )
        return OrderPlan(
            requester_id=requester.id,
            lines=lines,
            total=_grand_total(lines),
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_duplicates(items: Sequence[tuple[str, int]]) -> None:
        seen: set[str] = set()
        for product_id, _ in items:
            if product_id in seen:
                raise DuplicateProduct(
                    f"Product '{product_id}' appears more than once; "
                    f"combine the quantities into a single line"
                )
            seen.add(product_id)

    def _resolve(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.active:
            raise ProductNotFound(f"Product not found: '{product_id}'")
        return product


def _grand_total(lines: Sequence[PlannedLine]) -> Money:
    """Sum the exact subtotals, then round once."""
    total = Money.zero()
    for line in lines:
        total = total + line.subtotal
    return total.rounded()
