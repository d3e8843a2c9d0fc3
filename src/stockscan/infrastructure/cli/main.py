import click

from stockscan.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_edit,
    product_list,
    product_show,
)
from stockscan.infrastructure.cli.scan_commands import scan
from stockscan.infrastructure.config import get_settings
from stockscan.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """stockscan — barcode inventory catalog"""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_edit)
product.add_command(product_list)
product.add_command(product_show)
cli.add_command(scan)
