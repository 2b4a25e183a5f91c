# tests/test_decision_recorder.py

"""Tests for the swipe decision recorder."""

import unittest
from pathlib import Path
from unittest.mock import patch

from src.auth.session_context import SessionContext
from src.gateway.errors import (
    AuthenticationError,
    DuplicateKeyError,
    GatewayError,
)
from src.gateway.factory import build_local_backend
from src.models.product import Product
from src.services.decision_recorder import (
    ADDED_TO_CART,
    CART_ERROR,
    SAVED_ERROR,
    SAVED_FOR_LATER,
    DecisionRecorder,
)

_PASSWORD = "secret123"


class _RecorderMixin:
    """One product and a signed-in shopper on a local backend."""

    def _setup_backend(self) -> None:
        self.backend = build_local_backend(Path(":memory:"))
        self.gateway = self.backend.gateway
        sessions = self.backend.sessions
        seller = sessions.sign_up("shop@x.io", _PASSWORD, {"role": "seller"})
        assert seller is not None
        self.product = self.gateway.insert_product(Product(
            id="", name="Boots", price=80.0, seller_id=seller.user_id,
        ))
        sessions.sign_out()
        buyer = sessions.sign_up("buyer@x.io", _PASSWORD)
        assert buyer is not None
        self.buyer_id = buyer.user_id
        self.context = SessionContext(sessions, self.gateway)
        self.context.start()
        self.recorder = DecisionRecorder(self.context)

    def _count(self, table: str) -> int:
        row = self.gateway.store.conn.execute(
            f"SELECT COUNT(*) FROM {table} WHERE user_id = ?",
            (self.buyer_id,),
        ).fetchone()
        return int(row[0])


class TestDecisionRecorder(_RecorderMixin, unittest.TestCase):
    """Interaction logging and idempotent cart/saved writes."""

    def setUp(self) -> None:
        self._setup_backend()

    def tearDown(self) -> None:
        self.backend.close()

    def test_right_swipe_adds_to_cart(self) -> None:
        outcome = self.recorder.record(self.product.id, "right")
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.message, ADDED_TO_CART)
        item = self.gateway.find_cart_item(self.buyer_id, self.product.id)
        assert item is not None
        self.assertEqual(item.quantity, 1)
        self.assertEqual(self._count("swipe_interactions"), 1)

    def test_repeated_right_swipe_keeps_one_row(self) -> None:
        """Quantity is never incremented by a second right swipe."""
        self.recorder.record(self.product.id, "right")
        self.recorder.record(self.product.id, "right")
        self.assertEqual(self._count("cart_items"), 1)
        items = self.gateway.list_cart_items(self.buyer_id)
        self.assertEqual(items[0].quantity, 1)
        self.assertEqual(self._count("swipe_interactions"), 2)

    def test_repeated_left_swipe_keeps_one_row(self) -> None:
        first = self.recorder.record(self.product.id, "left")
        second = self.recorder.record(self.product.id, "left")
        self.assertEqual(first.message, SAVED_FOR_LATER)
        self.assertTrue(second.ok)
        self.assertEqual(self._count("saved_items"), 1)

    def test_log_failure_does_not_block_cart_write(self) -> None:
        with patch.object(
            self.gateway, "record_interaction",
            side_effect=GatewayError("log down"),
        ):
            outcome = self.recorder.record(self.product.id, "right")
        self.assertTrue(outcome.ok)
        self.assertFalse(outcome.interaction_logged)
        self.assertEqual(self._count("cart_items"), 1)

    def test_cart_failure_keeps_interaction(self) -> None:
        with patch.object(
            self.gateway, "insert_cart_item",
            side_effect=GatewayError("write failed"),
        ):
            outcome = self.recorder.record(self.product.id, "right")
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.message, CART_ERROR)
        self.assertEqual(outcome.error, "write failed")
        self.assertEqual(self._count("swipe_interactions"), 1)

    def test_saved_failure_message(self) -> None:
        with patch.object(
            self.gateway, "insert_saved_item",
            side_effect=GatewayError("write failed"),
        ):
            outcome = self.recorder.record(self.product.id, "left")
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.message, SAVED_ERROR)

    def test_concurrent_cart_insert_counts_as_present(self) -> None:
        with patch.object(
            self.gateway, "find_cart_item", return_value=None,
        ), patch.object(
            self.gateway, "insert_cart_item",
            side_effect=DuplicateKeyError("dup"),
        ):
            outcome = self.recorder.record(self.product.id, "right")
        self.assertTrue(outcome.ok)

    def test_concurrent_saved_insert_counts_as_success(self) -> None:
        with patch.object(
            self.gateway, "insert_saved_item",
            side_effect=DuplicateKeyError("dup"),
        ):
            outcome = self.recorder.record(self.product.id, "left")
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.message, SAVED_FOR_LATER)

    def test_requires_session(self) -> None:
        self.backend.sessions.sign_out()
        with self.assertRaises(AuthenticationError):
            self.recorder.record(self.product.id, "right")


if __name__ == "__main__":
    unittest.main()
