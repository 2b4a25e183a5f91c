# tests/test_catalog_filter.py

"""Tests for deny-list filtering and name deduplication."""

import unittest

from src.filters.catalog_filter import CatalogFilter, curate_catalog
from src.models.product import Product


def _make(name: str, pid: str | None = None) -> Product:
    """Create a minimal Product with the given name."""
    return Product(id=pid or name, name=name, price=10.0)


class TestRemoveDenied(unittest.TestCase):
    """Deny-list matching."""

    def test_exact_match_ignoring_case_and_whitespace(self) -> None:
        products = [_make("  Ripped Jeans "), _make("Denim Jacket")]
        kept, removed = CatalogFilter.remove_denied(products)
        self.assertEqual([p.name for p in kept], ["Denim Jacket"])
        self.assertEqual(removed, 1)

    def test_substring_is_not_a_match(self) -> None:
        """'Ripped Jeans Deluxe' is not the deny-listed name."""
        kept, removed = CatalogFilter.remove_denied(
            [_make("Ripped Jeans Deluxe")],
        )
        self.assertEqual(len(kept), 1)
        self.assertEqual(removed, 0)

    def test_custom_deny_list(self) -> None:
        kept, _ = CatalogFilter.remove_denied(
            [_make("Socks"), _make("Hat")], deny_list=["SOCKS"],
        )
        self.assertEqual([p.name for p in kept], ["Hat"])

    def test_input_not_mutated(self) -> None:
        products = [_make("yes"), _make("Boots")]
        CatalogFilter.remove_denied(products)
        self.assertEqual(len(products), 2)


class TestDeduplicate(unittest.TestCase):
    """Name-based deduplication."""

    def test_first_occurrence_wins(self) -> None:
        products = [
            _make("Boots", "newest"),
            _make("boots ", "older"),
            _make("Scarf", "s"),
        ]
        kept, removed = CatalogFilter.deduplicate(products)
        self.assertEqual([p.id for p in kept], ["newest", "s"])
        self.assertEqual(removed, 1)

    def test_empty_list(self) -> None:
        self.assertEqual(CatalogFilter.deduplicate([]), ([], 0))


class TestCurateCatalog(unittest.TestCase):
    """The shared curation used by feed and seller list."""

    def test_order_preserved(self) -> None:
        products = [
            _make("C"), _make("hr"), _make("A"), _make("c"), _make("B"),
        ]
        curated = curate_catalog(products)
        self.assertEqual([p.name for p in curated], ["C", "A", "B"])

    def test_every_default_deny_name_removed(self) -> None:
        products = [
            _make(name.upper(), f"p{i}")
            for i, name in enumerate([
                "yes", "hr", "slim jean", "ripped jeans", "knit sweater",
                "trechn coart", "classic white shirt",
                "wireless headphones",
            ])
        ]
        self.assertEqual(curate_catalog(products), [])


if __name__ == "__main__":
    unittest.main()
