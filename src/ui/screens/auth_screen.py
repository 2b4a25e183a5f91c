# src/ui/screens/auth_screen.py

"""/auth: sign in or create an account."""

import logging

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    RadioButton,
    RadioSet,
    Static,
)

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.models.profile import Role
from src.services.account_service import AccountService
from src.ui.screens.base import RoutedScreen

logger = logging.getLogger("swipeshop.ui.auth")


class AuthScreen(RoutedScreen):
    """Email/password form with sign-in, sign-up and demo shortcuts."""

    ROUTE = "/auth"

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__(session_context)
        self.busy = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("🛍️  SwipeShop", id="title"),
            Input(placeholder="Email", id="email"),
            Input(placeholder="Password", password=True, id="password"),
            RadioSet(
                RadioButton("Shopper", value=True, id="role_user"),
                RadioButton("Seller", id="role_seller"),
                id="role",
            ),
            Horizontal(
                Button("Sign in", variant="primary", id="sign_in"),
                Button("Sign up", id="sign_up"),
                id="auth_actions",
            ),
            Horizontal(
                Button("Demo shopper", id="demo_user"),
                Button("Demo seller", id="demo_seller"),
                id="demo_actions",
            ),
            Static("", id="auth_status"),
            id="auth_form",
        )
        yield Footer()

    @property
    def selected_role(self) -> Role:
        seller = self.query_one("#role_seller", RadioButton)
        return "seller" if seller.value else "user"

    def fill(self, email: str, password: str) -> None:
        self.query_one("#email", Input).value = email
        self.query_one("#password", Input).value = password

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "demo_user":
            self.fill(Settings.DEMO_USER_EMAIL, Settings.DEMO_PASSWORD)
            await self.submit("sign_in")
        elif button_id == "demo_seller":
            self.fill(Settings.DEMO_SELLER_EMAIL, Settings.DEMO_PASSWORD)
            await self.submit("sign_in")
        elif button_id in ("sign_in", "sign_up"):
            await self.submit(button_id)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        await self.submit("sign_in")

    async def submit(self, mode: str) -> str | None:
        """Run the sign-in or sign-up flow; returns the landing route."""
        if self.busy:
            return None
        email = self.query_one("#email", Input).value.strip()
        password = self.query_one("#password", Input).value
        if not email or not password:
            self.notify("Enter email and password", severity="warning")
            return None

        status = self.query_one("#auth_status", Static)
        status.update(
            "Signing in..." if mode == "sign_in" else "Creating account..."
        )
        self.busy = True
        accounts = AccountService(self.session_context)
        try:
            if mode == "sign_up":
                route = await self.run_blocking(
                    accounts.sign_up, email, password, self.selected_role,
                )
            else:
                route = await self.run_blocking(
                    accounts.sign_in, email, password,
                )
        except SwipeShopError as exc:
            status.update("")
            self.report_error("Authentication", exc)
            return None
        finally:
            self.busy = False

        logger.info("Authenticated %s, landing on %s", email, route)
        self.shop.navigate(route)
        return route
