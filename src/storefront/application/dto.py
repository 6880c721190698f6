"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.category import Category
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: str
    status: str
    items: list[OrderItemDTO]
    total: str
    created_at: str
    updated_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            status=order.status.value,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    subtotal=str(item.subtotal),
                )
                for item in order.items
            ],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            updated_at=order.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    description: str
    price: str
    stock: int
    category_id: str
    active: bool
    featured: bool

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            stock=product.stock,
            category_id=product.category_id,
            active=product.active,
            featured=product.featured,
        )


@dataclass(frozen=True)
class ProductPageDTO:
    """Output: one page of a filtered product listing."""

    products: list[ProductDTO]
    total: int
    page: int
    total_pages: int
    has_more: bool


@dataclass(frozen=True)
class CategoryDTO:

    id: str
    name: str
    description: str
    products_count: int
    active: bool

    @staticmethod
    def from_category(category: Category, products_count: int) -> CategoryDTO:
        return CategoryDTO(
            id=category.id,
            name=category.name,
            description=category.description,
            products_count=products_count,
            active=category.active,
        )


@dataclass(frozen=True)
class ProductFilters:
    """Input: product listing filters, as accepted by the catalog query."""

    category_id: str | None = None
    search: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    featured: bool | None = None
    active: bool | None = None
    in_stock: bool | None = None
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    sort_order: str = "desc"
