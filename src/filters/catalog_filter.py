# src/filters/catalog_filter.py

"""Deny-list filtering and name deduplication for product listings.

Both the shopper feed and the seller's own product list go through
:func:`curate_catalog`, so a listing hidden from one is hidden from both.
"""

import logging

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("swipeshop.filters")


class CatalogFilter:
    """Pure helpers over product lists; inputs are never mutated."""

    @staticmethod
    def _normalise_name(name: str | None) -> str:
        """Comparable key: trimmed and lowercased."""
        return (name or "").strip().lower()

    @staticmethod
    def remove_denied(
        products: list[Product],
        deny_list: list[str] | None = None,
    ) -> tuple[list[Product], int]:
        """Drop products whose name exactly matches a deny-listed name.

        Matching ignores case and surrounding whitespace.
        Returns the kept list and the count of removed products.
        """
        names = Settings.DENY_LISTED_NAMES if deny_list is None else deny_list
        denied = {CatalogFilter._normalise_name(n) for n in names}

        kept: list[Product] = []
        removed = 0
        for product in products:
            if CatalogFilter._normalise_name(product.name) in denied:
                removed += 1
            else:
                kept.append(product)

        if removed:
            logger.info("Deny-list removed %d products", removed)

        return kept, removed

    @staticmethod
    def deduplicate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Keep the first product per normalised name.

        Returns the deduplicated list and the count of removed dupes.
        """
        seen: set[str] = set()
        kept: list[Product] = []
        removed = 0

        for product in products:
            key = CatalogFilter._normalise_name(product.name)
            if key in seen:
                removed += 1
                continue
            seen.add(key)
            kept.append(product)

        if removed:
            logger.info(
                "Deduplication removed %d duplicate products", removed,
            )

        return kept, removed


def curate_catalog(
    products: list[Product],
    deny_list: list[str] | None = None,
) -> list[Product]:
    """Deny-list then dedupe, preserving the incoming order."""
    allowed, _denied = CatalogFilter.remove_denied(products, deny_list)
    unique, _dupes = CatalogFilter.deduplicate(allowed)
    return unique
