"""Catalog queries — barcode lookup and list-view search.

Both functions are pure: they take the current catalog as an argument,
keep no state and can be re-run on every query or catalog change.
"""

from __future__ import annotations

from collections.abc import Iterable

from stockscan.domain.model.product import Product


def exact_match(barcode: str, products: Iterable[Product]) -> Product | None:
    """Return the product whose barcode equals ``barcode``, or None.

    Comparison is plain string equality: no trimming, no case folding.
    Barcodes are not unique; when several products share one, the
    earliest created wins and enumeration order breaks remaining ties.
    """
    best: Product | None = None
    for product in products:
        if product.barcode != barcode:
            continue
        if best is None or product.created_at < best.created_at:
            best = product
    return best


def search(query: str, products: Iterable[Product]) -> list[Product]:
    """Filter and sort products for the list view.

    An empty query returns everything. Otherwise a product matches when
    the query is a case-insensitive substring of its name or a literal
    substring of its barcode. Results are sorted by name (ordinal,
    case-sensitive); equal names keep their original order.
    """
    if query:
        needle = query.casefold()
        matched = [
            p for p in products
            if needle in p.name.casefold() or query in p.barcode
        ]
    else:
        matched = list(products)
    return sorted(matched, key=lambda p: p.name)
