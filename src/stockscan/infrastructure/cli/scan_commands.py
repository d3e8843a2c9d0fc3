"""CLI command for the scan-to-resolution flow."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import click

from stockscan.application.dto import ScanOutcome
from stockscan.application.product_lifecycle import ProductLifecycle
from stockscan.application.resolve_scan import ResolveScanHandler
from stockscan.domain.exceptions import DomainException
from stockscan.domain.repository.product_repository import ProductRepository
from stockscan.infrastructure.barcode.source import (
    SUPPORTED_SYMBOLOGIES,
    StreamBarcodeSource,
)
from stockscan.infrastructure.bootstrap import barcode_source, product_repository
from stockscan.infrastructure.cli.product_commands import display_product, price_changes


def _create_for_barcode(repo: ProductRepository, barcode: str) -> None:
    """Prompt for the new product's fields, pre-filled with the scanned barcode."""
    lifecycle = ProductLifecycle.for_new(repo, barcode=barcode)
    click.echo(f"New Product (Barcode: {barcode})")

    try:
        lifecycle.update(
            name=click.prompt("Name *", default="", show_default=False),
            amount=click.prompt("Amount", default=0, type=int),
            specification=click.prompt("Specification", default="", show_default=False),
            **price_changes(
                buy_price=click.prompt("Buy Price *", default="0"),
                sell_price=click.prompt("Sell Price *", default="0"),
                offer_price=click.prompt("Offer Price", default="0"),
            ),
        )
        product = lifecycle.save()
    except DomainException as exc:
        click.echo(f"Error: {exc}", err=True)
        return

    click.echo(f"Product '{product.name}' added with ID {product.id}")


@click.command("scan")
@click.option("--code", "codes", multiple=True, help="Barcode to resolve (repeatable).")
@click.option(
    "--device",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Scanner device or file to read barcodes from.",
)
def scan(codes: tuple[str, ...], device: Path | None) -> None:
    """Look up scanned barcodes; offer to create products that are missing.

    Without --code or --device, barcodes are read one per line from stdin,
    which is how keyboard-mode hand scanners deliver them.
    """
    try:
        repo = product_repository()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    resolver = ResolveScanHandler(product_repo=repo)

    if codes:
        source = StreamBarcodeSource(io.StringIO("\n".join(codes)))
    else:
        source = barcode_source(sys.stdin, device)
        if device is None and sys.stdin.isatty():
            click.echo(f"Point scanner at barcode ({', '.join(SUPPORTED_SYMBOLOGIES)}).")
            click.echo("Press Ctrl-D to stop.")

    for event in source.events():
        try:
            resolution = resolver.handle(event)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        if resolution.outcome is ScanOutcome.SOURCE_ERROR:
            click.echo(f"Error: {resolution.message}", err=True)
            continue

        if resolution.outcome is ScanOutcome.FOUND:
            display_product(resolution.product)
            continue

        click.echo(f"Scanned Barcode: {resolution.barcode}")
        click.echo("Product not found")
        if click.confirm("Create new product?", default=False):
            _create_for_barcode(repo, resolution.barcode)
        else:
            click.echo("Scan again.")
