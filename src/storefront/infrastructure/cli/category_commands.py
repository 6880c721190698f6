"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from storefront.application.add_category import AddCategoryHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.dto import CategoryDTO
from storefront.application.list_categories import ListCategoriesHandler
from storefront.application.show_category import ShowCategoryHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import AppContext
from storefront.infrastructure.cli.errors import DomainCommandError


@click.command("add")
@click.option("--name", required=True, help="Category name (unique).")
@click.option("--description", default="", help="Free-text description.")
@click.pass_obj
def category_add(app: AppContext, name: str, description: str) -> None:
    """Add a category."""
    try:
        dto = AddCategoryHandler(uow=app.uow).handle(app.identity, name, description)
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Category #{dto.id} '{dto.name}' added")


@click.command("list")
@click.pass_obj
def category_list(app: AppContext) -> None:
    """List all categories."""
    categories = ListCategoriesHandler(uow=app.uow).handle()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Products':>8}")
    click.echo("-" * 36)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<20} {c.products_count:>8}")


@click.command("show")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.pass_obj
def category_show(app: AppContext, category_id: str) -> None:
    """Show a single category."""
    try:
        dto = ShowCategoryHandler(uow=app.uow).handle(category_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    _display_category(dto)


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--active/--inactive", default=None, help="Mark the category active or inactive.")
@click.pass_obj
def category_update(
    app: AppContext,
    category_id: str,
    name: str | None,
    description: str | None,
    active: bool | None,
) -> None:
    """Update a category."""
    handler = UpdateCategoryHandler(uow=app.uow)

    try:
        dto = handler.handle(
            app.identity,
            category_id,
            name=name,
            description=description,
            active=active,
        )
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Category #{dto.id} updated.")
    _display_category(dto)


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.pass_obj
def category_delete(app: AppContext, category_id: str) -> None:
    """Delete an empty category."""
    try:
        DeleteCategoryHandler(uow=app.uow).handle(app.identity, category_id)
    except DomainException as exc:
        raise DomainCommandError(exc)

    click.echo(f"Category #{category_id} deleted.")


def _display_category(dto: CategoryDTO) -> None:
    click.echo(f"Category #{dto.id}: {dto.name}")
    click.echo(f"  Products: {dto.products_count}")
    click.echo(f"  Active:   {'yes' if dto.active else 'no'}")
    if dto.description:
        click.echo(f"  {dto.description}")
