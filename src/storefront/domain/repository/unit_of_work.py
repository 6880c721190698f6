"""Transaction boundary between the domain and the storage layer.

A ``UnitOfWork`` hands out ``Transaction`` objects. Everything written
through a transaction's repositories becomes visible to other
transactions only after ``commit()``; ``rollback()`` (or leaving the
``with`` block without committing) discards it all.

    with uow.begin() as tx:
        product = tx.products.get_by_id("1")
        ...
        tx.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class Transaction(ABC):

    products: ProductRepository
    categories: CategoryRepository
    orders: OrderRepository

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this transaction durable and visible."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write of this transaction."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """False once the transaction has been committed or rolled back."""

    def __enter__(self) -> Transaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.is_open:
            self.rollback()


class UnitOfWork(ABC):

    @abstractmethod
    def begin(self) -> Transaction:
        """Start a new transaction."""
