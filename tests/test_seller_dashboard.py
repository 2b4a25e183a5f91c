# tests/test_seller_dashboard.py

"""Tests for the seller dashboard controller and analytics."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from src.auth.session_context import SessionContext
from src.gateway.errors import AuthorizationError, ValidationError
from src.gateway.factory import build_local_backend
from src.models.interaction import Action, InteractionRecord
from src.services.decision_recorder import DecisionRecorder
from src.services.seller_dashboard import (
    SellerDashboardController,
    compute_analytics,
    parse_price,
)

_PASSWORD = "secret123"


def _record(action: Action, price: float = 10.0) -> InteractionRecord:
    """Create a minimal interaction record."""
    return InteractionRecord(
        id="", user_id="u", product_id="p", action=action,
        product_price=price,
    )


class TestComputeAnalytics(unittest.TestCase):
    """Pure aggregation over interaction records."""

    def test_no_views_gives_zero_conversion(self) -> None:
        stats = compute_analytics([])
        self.assertEqual(stats.total_views, 0)
        self.assertEqual(stats.conversion_rate, "0")
        self.assertEqual(stats.breakdown, [])

    def test_purchases_count_as_views(self) -> None:
        stats = compute_analytics([
            _record("right"), _record("purchased", 25.0),
            _record("purchased", 5.5),
        ])
        self.assertEqual(stats.total_views, 3)
        self.assertEqual(stats.total_purchases, 2)
        self.assertAlmostEqual(stats.total_revenue, 30.5)
        self.assertEqual(stats.conversion_rate, "33.3")
        self.assertEqual(stats.skipped, 2)
        self.assertEqual(
            stats.breakdown, [("Added to Cart", 1), ("Skipped", 2)],
        )


class TestParsePrice(unittest.TestCase):
    """Form price parsing."""

    def test_valid(self) -> None:
        self.assertEqual(parse_price(" 19.90 "), 19.9)
        self.assertEqual(parse_price(5), 5.0)

    def test_invalid(self) -> None:
        for raw in ("abc", "", None, "-1", "nan", "inf", "-inf", "1e999"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    parse_price(raw)


class _DashboardMixin:
    """Seller with two products; a buyer who swiped on them."""

    def _setup_backend(self) -> None:
        self.backend = build_local_backend(Path(":memory:"))
        self.sessions = self.backend.sessions
        self.gateway = self.backend.gateway
        seller = self.sessions.sign_up(
            "shop@x.io", _PASSWORD, {"role": "seller"},
        )
        assert seller is not None
        self.seller_id = seller.user_id
        self.context = SessionContext(self.sessions, self.gateway)
        self.context.start()
        self.dashboard = SellerDashboardController(self.context)
        self.boots = self.dashboard.add_product("Boots", "", "80")
        self.scarf = self.dashboard.add_product("Scarf", "Wool", "20.5")

    def _as_buyer(self) -> None:
        self.sessions.sign_out()
        self.sessions.sign_up("buyer@x.io", _PASSWORD)

    def _as_seller(self) -> None:
        self.sessions.sign_out()
        self.sessions.sign_in("shop@x.io", _PASSWORD)


class TestSellerDashboard(_DashboardMixin, unittest.TestCase):
    """Own-product CRUD and analytics against the local backend."""

    def setUp(self) -> None:
        self._setup_backend()

    def tearDown(self) -> None:
        self.backend.close()

    def test_three_rights_one_left_is_75_percent(self) -> None:
        self._as_buyer()
        recorder = DecisionRecorder(self.context)
        recorder.record(self.boots.id, "right")
        recorder.record(self.scarf.id, "right")
        recorder.record(self.boots.id, "right")
        recorder.record(self.scarf.id, "left")
        self._as_seller()

        stats = self.dashboard.load_analytics()
        self.assertEqual(stats.total_views, 4)
        self.assertEqual(stats.total_swipes_right, 3)
        self.assertEqual(stats.total_swipes_left, 1)
        self.assertEqual(stats.conversion_rate, "75.0")
        self.assertEqual(stats.skipped, 0)

    def test_no_interactions(self) -> None:
        stats = self.dashboard.load_analytics()
        self.assertEqual(stats.conversion_rate, "0")

    def test_add_product_refetches_list(self) -> None:
        names = [p.name for p in self.dashboard.products]
        self.assertEqual(names, ["Scarf", "Boots"])
        self.assertEqual(self.scarf.description, "Wool")
        self.assertEqual(self.scarf.price, 20.5)

    def test_invalid_price_inserts_nothing(self) -> None:
        with self.assertRaises(ValidationError):
            self.dashboard.add_product("Hat", "", "ten dollars")
        self.assertEqual(len(self.gateway.list_products()), 2)

    def test_deny_listed_product_hidden_from_seller(self) -> None:
        self.dashboard.add_product("Ripped Jeans", "", "30")
        names = [p.name for p in self.dashboard.products]
        self.assertNotIn("Ripped Jeans", names)
        self.assertEqual(len(self.gateway.list_products()), 3)

    def test_update_product(self) -> None:
        updated = self.dashboard.update_product(self.boots.id, price="99")
        self.assertEqual(updated.price, 99.0)
        local = {p.id: p for p in self.dashboard.products}
        self.assertEqual(local[self.boots.id].price, 99.0)

    def test_delete_own_product(self) -> None:
        self.dashboard.delete_product(self.boots.id)
        self.assertEqual(
            [p.id for p in self.dashboard.products], [self.scarf.id],
        )
        self.assertEqual(len(self.gateway.list_products()), 1)

    def test_delete_unknown_product_keeps_list(self) -> None:
        before = list(self.dashboard.products)
        with self.assertRaises(AuthorizationError):
            self.dashboard.delete_product("not-a-product")
        self.assertEqual(self.dashboard.products, before)

    def test_delete_other_sellers_product(self) -> None:
        self.sessions.sign_out()
        self.sessions.sign_up("rival@x.io", _PASSWORD, {"role": "seller"})
        rival = SellerDashboardController(self.context)
        rival.load_products()
        with self.assertRaises(AuthorizationError):
            rival.delete_product(self.boots.id)
        self.assertEqual(len(self.gateway.list_products()), 2)

    def test_shopper_cannot_add_products(self) -> None:
        self._as_buyer()
        with self.assertRaises(AuthorizationError):
            self.dashboard.add_product("Hat", "", "5")

    def test_export_engagement_chart(self) -> None:
        self._as_buyer()
        DecisionRecorder(self.context).record(self.boots.id, "right")
        self._as_seller()
        self.dashboard.load_analytics()
        with tempfile.TemporaryDirectory() as tmp:
            with patch(
                "src.storage.chart_exporter._CHARTS_DIR", Path(tmp),
            ):
                path = self.dashboard.export_engagement_chart()
                assert path is not None
                self.assertTrue(path.exists())
                self.assertEqual(path.suffix, ".html")


if __name__ == "__main__":
    unittest.main()
