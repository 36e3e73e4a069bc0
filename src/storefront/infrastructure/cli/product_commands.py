"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.create_product import CreateProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.get_product import GetProductHandler
from storefront.application.search_products import SearchProductsHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository, settings
from storefront.infrastructure.cli.auth import acting_user, actor_options


def _parse_metadata(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse ('color=red', 'size=L') into a dict."""
    result: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid metadata '{pair}'. Expected 'key=value'."
            )
        key, value = pair.split("=", 1)
        result[key.strip()] = value.strip()
    return result


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", required=True, help="Product description.")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--price", required=True, help="Unit price, e.g. 19.99.")
@click.option("--currency", default=None, help="Price currency (defaults to the store currency).")
@click.option("--category", required=True, help="Category name.")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--image", "images", multiple=True, help="Image URL (repeatable).")
@click.option("--meta", "meta", multiple=True, help="Metadata as key=value (repeatable).")
@actor_options
def product_add(
    name: str,
    description: str,
    sku: str,
    price: str,
    currency: str | None,
    category: str,
    stock: int,
    images: tuple[str, ...],
    meta: tuple[str, ...],
    actor_email: str,
    actor_password: str,
) -> None:
    """Add a product to the catalog."""
    actor = acting_user(actor_email, actor_password)
    handler = CreateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            actor,
            name=name,
            description=description,
            sku=sku,
            price=price,
            currency=currency or settings().default_currency,
            category=category,
            stock_quantity=stock,
            image_urls=list(images),
            metadata=_parse_metadata(meta),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} created")
    _display_product(dto)


@click.command("list")
@click.option("--query", default=None, help="Search name and description.")
@click.option("--category", default=None, help="Filter by category slug.")
@click.option("--limit", default=None, type=int, help="Maximum number of products.")
@click.option("--offset", default=0, type=int, help="Products to skip.")
def product_list(
    query: str | None, category: str | None, limit: int | None, offset: int
) -> None:
    """List products in the catalog."""
    handler = SearchProductsHandler(product_repo=product_repository())
    products = handler.handle(query=query, category=category, limit=limit, offset=offset)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<16} {'Name':<24} {'Price':>14} {'Stock':>6}  {'Active':<6}  ID")
    click.echo("-" * 100)
    for p in products:
        active = "yes" if p.is_active else "no"
        click.echo(
            f"{p.sku:<16} {p.name:<24} {p.price:>14} {p.stock_quantity:>6}  {active:<6}  {p.id}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    handler = GetProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID to update.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New unit price (same currency).")
@click.option("--category", default=None, help="New category name.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--active/--inactive", default=None, help="Activate or withdraw the product.")
@click.option("--meta", "meta", multiple=True, help="Metadata as key=value (repeatable).")
@actor_options
def product_update(
    product_id: str,
    name: str | None,
    description: str | None,
    price: str | None,
    category: str | None,
    stock: int | None,
    active: bool | None,
    meta: tuple[str, ...],
    actor_email: str,
    actor_password: str,
) -> None:
    """Update a product's details, price, stock or status."""
    actor = acting_user(actor_email, actor_password)
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            actor,
            product_id,
            name=name,
            description=description,
            price=price,
            category=category,
            stock_quantity=stock,
            is_active=active,
            metadata=_parse_metadata(meta),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated")
    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID to delete.")
@actor_options
def product_delete(product_id: str, actor_email: str, actor_password: str) -> None:
    """Remove a product from the catalog."""
    actor = acting_user(actor_email, actor_password)
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(actor, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"  Name:        {dto.name}")
    click.echo(f"  SKU:         {dto.sku}")
    click.echo(f"  Price:       {dto.price}")
    click.echo(f"  Category:    {dto.category_name} ({dto.category_slug})")
    click.echo(f"  Stock:       {dto.stock_quantity}")
    click.echo(f"  Available:   {'yes' if dto.is_available else 'no'}")
    click.echo(f"  Description: {dto.description}")
    for url in dto.image_urls:
        click.echo(f"  Image:       {url}")
    for key, value in dto.metadata.items():
        click.echo(f"  {key}: {value}")
