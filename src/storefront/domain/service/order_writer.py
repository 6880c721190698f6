"""Domain service: Transactional Order Writer.

Persists an ``OrderPlan`` as one atomic unit:

  1. begin a transaction
  2. insert the order header (pending, total 0)
  3. for each plan line, in input order: reserve stock through the
     inventory ledger, then insert the line with the plan's price snapshot
  4. set the order total to the plan's rounded total
  5. commit

Any failure rolls the whole transaction back. The stock check done by
the assembler is advisory; the reservation in step 3 is the one that
counts, since stock may have moved since the plan was built.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import DomainException, WriteError
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.order_plan import OrderPlan
from storefront.domain.repository.unit_of_work import Transaction, UnitOfWork
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class TransactionalOrderWriter:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def place(self, plan: OrderPlan, owner_id: str) -> Order:
        tx = self._uow.begin()
        try:
            order = self._write(tx, plan, owner_id)
            tx.commit()
        except DomainException as exc:
            self._abort(tx, owner_id, exc)
            raise
        except Exception as exc:
            self._abort(tx, owner_id, exc)
            raise WriteError(f"Order could not be written: {exc}") from exc

        logger.info(
            "order_written",
            order_id=order.id,
            user_id=owner_id,
            lines=len(order.items),
            total=str(order.total.amount),
        )
        return order

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _write(tx: Transaction, plan: OrderPlan, owner_id: str) -> Order:
        order = Order.open(owner_id)
        tx.orders.save(order)

        ledger = InventoryLedger(tx.products)
        for line in plan.lines:
            ledger.reserve(line.product_id, line.quantity.value)
            order.add_item(
                OrderItem(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
            )
            tx.orders.save(order)

        order.set_total(plan.total)
        tx.orders.save(order)
        return order

    @staticmethod
    def _abort(tx: Transaction, owner_id: str, exc: Exception) -> None:
        if tx.is_open:
            tx.rollback()
        logger.warning(
            "order_write_rolled_back",
            user_id=owner_id,
            error=type(exc).__name__,
            reason=str(exc),
        )
