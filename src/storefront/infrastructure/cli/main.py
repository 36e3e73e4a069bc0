import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.cart_commands import (
    cart_abandon,
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_confirm,
    order_deliver,
    order_list,
    order_process,
    order_ship,
    order_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.cli.user_commands import user_login, user_register
from storefront.infrastructure.logging import clear_context


@click.group()
def cli() -> None:
    """Storefront: products, carts and orders"""
    clear_context()
    try:
        bootstrap.init_app()
    except DomainException as exc:
        raise click.ClickException(str(exc))


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def user() -> None:
    """Manage user accounts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_abandon)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_confirm)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_process)
order.add_command(order_ship)
order.add_command(order_show)
user.add_command(user_login)
user.add_command(user_register)
