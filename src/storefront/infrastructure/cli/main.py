import click

from storefront.infrastructure.bootstrap import build_context
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_show,
    category_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.logging import bind_caller, configure_logging
from storefront.infrastructure.settings import Settings


@click.group()
@click.option("--user-id", envvar="STOREFRONT_USER_ID", default=None, help="Verified caller id.")
@click.option("--role", envvar="STOREFRONT_ROLE", default=None, help="Caller role (admin, seller, customer).")
@click.option("--email", envvar="STOREFRONT_EMAIL", default=None, help="Caller email.")
@click.pass_context
def cli(ctx: click.Context, user_id: str | None, role: str | None, email: str | None) -> None:
    """Storefront: product catalog and order placement"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc))

    configure_logging(settings)
    bind_caller(user_id, role)
    ctx.obj = build_context(settings, user_id=user_id, role=role, email=email)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage categories."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_show)
category.add_command(category_update)
