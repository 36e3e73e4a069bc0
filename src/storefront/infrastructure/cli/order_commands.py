"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.advance_order import AdvanceOrderHandler, OrderTransition
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO, ShippingAddressSpec
from storefront.application.get_cart import GetCartHandler
from storefront.application.get_order import GetOrderHandler
from storefront.application.list_customer_orders import ListCustomerOrdersHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    event_bus,
    order_repository,
)
from storefront.infrastructure.cli.auth import acting_user, actor_options
from storefront.infrastructure.logging import add_context


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    if dto.cancellation_reason:
        click.echo(f"Cancelled: {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for line in dto.order_lines:
        click.echo(
            f"  {line.product_name:<24} {line.quantity:>5} {line.unit_price:>14} {line.total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<30} {dto.total_amount:>29}")


@click.command("checkout")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--cart", "cart_id", default=None, help="Cart ID (defaults to the active cart).")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True)
@click.option("--country", required=True)
def order_checkout(
    customer: str,
    cart_id: str | None,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
) -> None:
    """Check out a cart into a new order."""
    add_context(customer_id=customer.strip())
    carts = cart_repository()

    if cart_id is None:
        active = GetCartHandler(cart_repo=carts).handle(customer)
        if active is None:
            raise click.ClickException(f"No active cart for customer '{customer}'")
        cart_id = active.id

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        cart_repo=carts,
        publisher=event_bus(),
    )
    address = ShippingAddressSpec(
        street=street, city=city, state=state, zip_code=zip_code, country=country
    )

    try:
        dto = handler.handle(customer_id=customer, cart_id=cart_id, shipping_address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = GetOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", required=True, help="Customer ID.")
def order_list(customer: str) -> None:
    """List a customer's orders, oldest first."""
    add_context(customer_id=customer.strip())
    orders = ListCustomerOrdersHandler(order_repo=order_repository()).handle(customer)

    if not orders:
        click.echo(f"No orders for {customer}.")
        return

    click.echo(f"{'ID':<38} {'Status':<12} {'Items':>5} {'Total':>14}")
    click.echo("-" * 72)
    for o in orders:
        click.echo(f"{o.id:<38} {o.status:<12} {o.total_item_count:>5} {o.total_amount:>14}")


def _advance(
    actor_email: str,
    actor_password: str,
    order_id: str,
    transition: OrderTransition,
    tracking_number: str | None = None,
) -> None:
    actor = acting_user(actor_email, actor_password)
    handler = AdvanceOrderHandler(order_repo=order_repository(), publisher=event_bus())

    try:
        dto = handler.handle(actor, order_id, transition, tracking_number=tracking_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")


@click.command("confirm")
@click.option("--id", "order_id", required=True, help="Order ID to confirm.")
@actor_options
def order_confirm(order_id: str, actor_email: str, actor_password: str) -> None:
    """Confirm a pending order."""
    _advance(actor_email, actor_password, order_id, OrderTransition.CONFIRM)


@click.command("process")
@click.option("--id", "order_id", required=True, help="Order ID to start processing.")
@actor_options
def order_process(order_id: str, actor_email: str, actor_password: str) -> None:
    """Start processing a confirmed order."""
    _advance(actor_email, actor_password, order_id, OrderTransition.PROCESS)


@click.command("ship")
@click.option("--id", "order_id", required=True, help="Order ID to ship.")
@click.option("--tracking", "tracking_number", default=None, help="Carrier tracking number.")
@actor_options
def order_ship(
    order_id: str, tracking_number: str | None, actor_email: str, actor_password: str
) -> None:
    """Mark a processing order as shipped."""
    _advance(actor_email, actor_password, order_id, OrderTransition.SHIP, tracking_number)


@click.command("deliver")
@click.option("--id", "order_id", required=True, help="Order ID to deliver.")
@actor_options
def order_deliver(order_id: str, actor_email: str, actor_password: str) -> None:
    """Mark a shipped order as delivered."""
    _advance(actor_email, actor_password, order_id, OrderTransition.DELIVER)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", required=True, help="Why the order is cancelled.")
@actor_options
def order_cancel(order_id: str, reason: str, actor_email: str, actor_password: str) -> None:
    """Cancel a pending or confirmed order."""
    actor = acting_user(actor_email, actor_password)
    handler = CancelOrderHandler(order_repo=order_repository(), publisher=event_bus())

    try:
        handler.handle(actor, order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled.")
