# tests/test_account_service.py

"""Tests for sign-in, sign-up and profile bootstrap."""

import unittest
from pathlib import Path
from unittest.mock import patch

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import AuthenticationError
from src.gateway.factory import build_local_backend
from src.models.profile import Profile
from src.services.account_service import AccountService, landing_route


class TestLandingRoute(unittest.TestCase):
    """Role to route mapping."""

    def test_routes(self) -> None:
        self.assertEqual(landing_route("seller"), "/seller")
        self.assertEqual(landing_route("user"), "/swipe")
        self.assertEqual(landing_route(None), "/swipe")


class TestAccountService(unittest.TestCase):
    """Account flows against the local backend."""

    def setUp(self) -> None:
        self.backend = build_local_backend(Path(":memory:"))
        self.context = SessionContext(
            self.backend.sessions, self.backend.gateway,
        )
        self.context.start()
        self.accounts = AccountService(self.context)

    def tearDown(self) -> None:
        self.context.stop()
        self.backend.close()

    def test_sign_up_as_seller(self) -> None:
        route = self.accounts.sign_up("maker@x.io", "secret123", "seller")
        self.assertEqual(route, "/seller")
        self.assertTrue(self.context.is_seller)

    def test_sign_in_existing_user(self) -> None:
        self.accounts.sign_up("buyer@x.io", "secret123")
        self.accounts.sign_out()
        self.assertIsNone(self.context.session)

        route = self.accounts.sign_in(" buyer@x.io ", "secret123")
        self.assertEqual(route, "/swipe")
        self.assertEqual(self.context.role, "user")

    def test_demo_seller_auto_provisioned(self) -> None:
        route = self.accounts.sign_in(
            Settings.DEMO_SELLER_EMAIL, Settings.DEMO_PASSWORD,
        )
        self.assertEqual(route, "/seller")
        profile = self.backend.gateway.get_profile(
            self.context.require_user_id(),
        )
        assert profile is not None
        self.assertEqual(profile.role, "seller")

    def test_unknown_email_provisions_shopper(self) -> None:
        route = self.accounts.sign_in("new@x.io", "secret123")
        self.assertEqual(route, "/swipe")
        self.assertEqual(self.context.role, "user")

    def test_provisioning_disabled(self) -> None:
        with patch.object(Settings, "AUTO_PROVISION_ACCOUNTS", False):
            with self.assertRaises(AuthenticationError):
                self.accounts.sign_in("new@x.io", "secret123")
        self.assertIsNone(self.context.session)

    def test_wrong_password_for_existing_account(self) -> None:
        """Provisioning retries sign-up, which the duplicate rejects."""
        self.accounts.sign_up("buyer@x.io", "secret123")
        self.accounts.sign_out()
        with self.assertRaises(AuthenticationError):
            self.accounts.sign_in("buyer@x.io", "wrong-password")

    def test_existing_seller_keeps_role(self) -> None:
        """Signing in never downgrades a seller to a shopper."""
        self.accounts.sign_up("maker@x.io", "secret123", "seller")
        self.accounts.sign_out()
        route = self.accounts.sign_in("maker@x.io", "secret123")
        self.assertEqual(route, "/seller")

    def test_demo_seller_upgraded(self) -> None:
        self.accounts.sign_up(
            Settings.DEMO_SELLER_EMAIL, Settings.DEMO_PASSWORD, "user",
        )
        self.accounts.sign_out()
        route = self.accounts.sign_in(
            Settings.DEMO_SELLER_EMAIL, Settings.DEMO_PASSWORD,
        )
        self.assertEqual(route, "/seller")

    def test_missing_profile_is_created(self) -> None:
        self.accounts.sign_up("buyer@x.io", "secret123")
        user_id = self.context.require_user_id()
        self.accounts.sign_out()
        self.backend.gateway.store.conn.execute(
            "DELETE FROM profiles WHERE id = ?", (user_id,),
        )
        self.accounts.sign_in("buyer@x.io", "secret123")
        profile = self.backend.gateway.get_profile(user_id)
        self.assertEqual(
            profile, Profile(
                id=user_id, email="buyer@x.io", role="user",
                created_at=profile.created_at if profile else None,
            ),
        )

    def test_short_password_rejected(self) -> None:
        with self.assertRaises(AuthenticationError):
            self.accounts.sign_up("buyer@x.io", "123")


if __name__ == "__main__":
    unittest.main()
