"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO, ProductFilters
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.errors import DomainCommandError


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", "category_id", required=True, help="Category ID.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--featured", is_flag=True, default=False, help="Feature on the storefront.")
@click.pass_obj
def product_add(
    app: AppContext,
    name: str,
    price: str,
    stock: int,
    category_id: str,
    description: str,
    featured: bool,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=app.uow)

    try:
        product = handler.handle(
            app.identity,
            name=name,
            price=price,
            stock=stock,
            category_id=category_id,
            description=description,
            featured=featured,
        )
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--category", "category_id", default=None, help="Only this category.")
@click.option("--search", default=None, help="Text to look for in name or description.")
@click.option("--min-price", default=None, help="Lowest price to include.")
@click.option("--max-price", default=None, help="Highest price to include.")
@click.option("--in-stock/--out-of-stock", default=None, help="Filter on stock level.")
@click.option("--featured/--not-featured", default=None, help="Filter on the featured flag.")
@click.option("--active/--inactive", default=None, help="Filter on catalog visibility.")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--sort-by", default="created_at", show_default=True)
@click.option("--sort-order", default="desc", show_default=True)
@click.pass_obj
def product_list(
    app: AppContext,
    category_id: str | None,
    search: str | None,
    min_price: str | None,
    max_price: str | None,
    in_stock: bool | None,
    featured: bool | None,
    active: bool | None,
    page: int,
    limit: int,
    sort_by: str,
    sort_order: str,
) -> None:
    """List products in the catalog."""
    filters = ProductFilters(
        category_id=category_id,
        search=search,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        featured=featured,
        active=active,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    try:
        result = ListProductsHandler(uow=app.uow).handle(filters)
    except DomainException as exc:
        raise DomainCommandError(exc)

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>6} {'Category':>9}")
    click.echo("-" * 55)
    for p in result.products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.price:>10} {p.stock:>6} {p.category_id:>9}")
    click.echo(f"Page {result.page}/{result.total_pages}  ({result.total} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(app: AppContext, product_id: str) -> None:
    """Show a single product."""
    try:
        dto = ShowProductHandler(uow=app.uow).handle(product_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--category", "category_id", default=None, help="Move to this category.")
@click.option("--active/--inactive", default=None, help="Show or hide in the catalog.")
@click.option("--featured/--not-featured", default=None)
@click.pass_obj
def product_update(
    app: AppContext,
    product_id: str,
    name: str | None,
    description: str | None,
    price: str | None,
    stock: int | None,
    category_id: str | None,
    active: bool | None,
    featured: bool | None,
) -> None:
    """Update a product."""
    handler = UpdateProductHandler(uow=app.uow)

    try:
        dto = handler.handle(
            app.identity,
            product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            category_id=category_id,
            active=active,
            featured=featured,
        )
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Product #{dto.id} updated.")
    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(app: AppContext, product_id: str) -> None:
    """Remove a product from the catalog."""
    try:
        DeleteProductHandler(uow=app.uow).handle(app.identity, product_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Product #{product_id} deleted.")


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}: {dto.name}")
    click.echo(f"  Price:    {dto.price}")
    click.echo(f"  Stock:    {dto.stock}")
    click.echo(f"  Category: {dto.category_id}")
    click.echo(f"  Active:   {'yes' if dto.active else 'no'}")
    if dto.description:
        click.echo(f"  {dto.description}")
