"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.abandon_cart import AbandonCartHandler
from storefront.application.add_item_to_cart import AddItemToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.get_cart import GetCartHandler
from storefront.application.remove_item_from_cart import RemoveItemFromCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    event_bus,
    product_repository,
)
from storefront.infrastructure.logging import add_context


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"Cart {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo()
    if not dto.items:
        click.echo("  (empty)")
        return
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>14} {item.total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Cart Total':<30} {dto.total_amount:>29}")


@click.command("add")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product", "product_id", required=True, help="Product ID to add.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
def cart_add(customer: str, product_id: str, quantity: int) -> None:
    """Add a product to the customer's cart (creating the cart if needed)."""
    add_context(customer_id=customer.strip())
    handler = AddItemToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        publisher=event_bus(),
    )

    try:
        dto = handler.handle(customer_id=customer, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product", "product_id", required=True, help="Product ID to remove.")
def cart_remove(customer: str, product_id: str) -> None:
    """Remove a product line from the customer's cart."""
    add_context(customer_id=customer.strip())
    handler = RemoveItemFromCartHandler(cart_repo=cart_repository(), publisher=event_bus())

    try:
        dto = handler.handle(customer_id=customer, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product", "product_id", required=True, help="Product ID to change.")
@click.option("--quantity", required=True, type=int, help="New quantity for the line.")
def cart_update(customer: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    add_context(customer_id=customer.strip())
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), publisher=event_bus())

    try:
        dto = handler.handle(customer_id=customer, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@click.option("--customer", required=True, help="Customer ID.")
def cart_clear(customer: str) -> None:
    """Remove every item from the customer's cart."""
    add_context(customer_id=customer.strip())
    handler = ClearCartHandler(cart_repo=cart_repository(), publisher=event_bus())

    try:
        handler.handle(customer_id=customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart for {customer} cleared.")


@click.command("show")
@click.option("--customer", required=True, help="Customer ID.")
def cart_show(customer: str) -> None:
    """Show the customer's active cart."""
    add_context(customer_id=customer.strip())
    dto = GetCartHandler(cart_repo=cart_repository()).handle(customer)
    if dto is None:
        click.echo(f"No active cart for {customer}.")
        return
    _display_cart(dto)


@click.command("abandon")
@click.option("--customer", required=True, help="Customer ID.")
def cart_abandon(customer: str) -> None:
    """Mark the customer's active cart as abandoned."""
    add_context(customer_id=customer.strip())
    handler = AbandonCartHandler(cart_repo=cart_repository(), publisher=event_bus())

    try:
        handler.handle(customer_id=customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart for {customer} abandoned.")
