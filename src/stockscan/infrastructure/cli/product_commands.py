"""CLI commands for the product catalog."""

from __future__ import annotations

from pathlib import Path

import click

from stockscan.application.delete_product import DeleteProductHandler
from stockscan.application.dto import ProductDTO, to_product_dto
from stockscan.application.product_lifecycle import ProductLifecycle
from stockscan.application.search_products import SearchProductsHandler
from stockscan.application.show_product import ShowProductHandler
from stockscan.domain.exceptions import DomainException, EntityNotFoundError
from stockscan.domain.model.value_objects import Money
from stockscan.infrastructure.bootstrap import product_repository
from stockscan.infrastructure.config import get_settings

_IMAGE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def display_product(dto: ProductDTO) -> None:
    """Shared formatting for the product detail view."""
    label = get_settings().price_label
    click.echo(f"{dto.name}")
    click.echo(f"  ID:            {dto.id}")
    click.echo(f"  Barcode:       {dto.barcode or '-'}")
    click.echo(f"  Amount:        {dto.amount} ({'In Stock' if dto.in_stock else 'Out of Stock'})")
    click.echo(f"  Buy Price:     {dto.buy_price} {label}")
    click.echo(f"  Sell Price:    {dto.sell_price} {label}")
    if dto.offer_price is not None:
        click.echo(f"  Offer Price:   {dto.offer_price} {label}")
    click.echo(f"  Specification: {dto.specification or 'No specification'}")
    click.echo(f"  Image:         {'yes' if dto.has_image else 'No Image'}")
    click.echo(f"  Created:       {dto.created_at}")


def price_changes(**prices: str | None) -> dict[str, Money]:
    """Convert the price options that were given into Money values."""
    return {name: Money.of(raw) for name, raw in prices.items() if raw is not None}


@click.command("add")
@click.option("--barcode", default="", help="Barcode (may be left empty).")
@click.option("--name", default="", help="Product name (required).")
@click.option("--amount", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--buy-price", default="0", help="Buy price, must be greater than 0.")
@click.option("--sell-price", default="0", help="Sell price, must be greater than 0.")
@click.option("--offer-price", default="0", help="Offer price; 0 means no offer.")
@click.option("--specification", default="", help="Free-text specification.")
@click.option("--image", type=_IMAGE_PATH, default=None, help="Photo file to attach.")
def product_add(
    barcode: str,
    name: str,
    amount: int,
    buy_price: str,
    sell_price: str,
    offer_price: str,
    specification: str,
    image: Path | None,
) -> None:
    """Add a new product to the catalog."""
    try:
        lifecycle = ProductLifecycle.for_new(product_repository(), barcode=barcode)
        lifecycle.update(
            name=name,
            amount=amount,
            specification=specification,
            image=image.read_bytes() if image is not None else None,
            **price_changes(
                buy_price=buy_price, sell_price=sell_price, offer_price=offer_price
            ),
        )
        product = lifecycle.save()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' added with ID {product.id}")


@click.command("list")
@click.option("--search", "query", default="", help="Filter by name or barcode.")
def product_list(query: str) -> None:
    """List products, sorted by name."""
    try:
        handler = SearchProductsHandler(product_repo=product_repository())
        products = handler.handle(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<36} {'Name':<20} {'Barcode':<15} {'Stock':>6} {'Sell':>10} {'Offer':>10}"
    )
    click.echo("-" * 102)
    for p in products:
        stock = str(p.amount) if p.in_stock else "out"
        click.echo(
            f"{p.id:<36} {p.name:<20} {p.barcode:<15} {stock:>6} "
            f"{p.sell_price:>10} {p.offer_price or '':>10}"
        )


@click.command("show")
@click.argument("product_id")
def product_show(product_id: str) -> None:
    """Show the details of one product."""
    try:
        handler = ShowProductHandler(product_repo=product_repository())
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_product(dto)


@click.command("edit")
@click.argument("product_id")
@click.option("--barcode", default=None, help="New barcode.")
@click.option("--name", default=None, help="New name.")
@click.option("--amount", default=None, type=int, help="New stock amount.")
@click.option("--buy-price", default=None, help="New buy price.")
@click.option("--sell-price", default=None, help="New sell price.")
@click.option("--offer-price", default=None, help="New offer price; 0 removes the offer.")
@click.option("--specification", default=None, help="New specification.")
@click.option("--image", type=_IMAGE_PATH, default=None, help="Replace the photo.")
@click.option("--clear-image", is_flag=True, help="Remove the photo.")
def product_edit(
    product_id: str,
    barcode: str | None,
    name: str | None,
    amount: int | None,
    buy_price: str | None,
    sell_price: str | None,
    offer_price: str | None,
    specification: str | None,
    image: Path | None,
    clear_image: bool,
) -> None:
    """Edit fields of an existing product."""
    if image is not None and clear_image:
        raise click.UsageError("--image and --clear-image are mutually exclusive")

    try:
        repo = product_repository()
        product = repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        changes: dict = {
            key: value
            for key, value in (
                ("barcode", barcode),
                ("name", name),
                ("amount", amount),
                ("specification", specification),
            )
            if value is not None
        }
        changes.update(
            price_changes(
                buy_price=buy_price, sell_price=sell_price, offer_price=offer_price
            )
        )
        if image is not None:
            changes["image"] = image.read_bytes()
        elif clear_image:
            changes["image"] = None

        lifecycle = ProductLifecycle.for_existing(repo, product)
        lifecycle.begin_edit()
        lifecycle.update(**changes)
        updated = lifecycle.save()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {updated.id} updated")
    display_product(to_product_dto(updated))


@click.command("delete")
@click.argument("product_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
def product_delete(product_id: str, yes: bool) -> None:
    """Delete a product from the catalog."""
    if not yes:
        click.confirm(f"Delete product {product_id}?", abort=True)

    try:
        handler = DeleteProductHandler(product_repo=product_repository())
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
