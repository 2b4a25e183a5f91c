# src/ui/app.py

"""Terminal UI for the SwipeShop swipe-to-shop client."""

import asyncio
import logging

from textual.app import App
from textual.binding import Binding

from src.auth.session import Session
from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.gateway.factory import Backend, build_backend
from src.services.account_service import AccountService, landing_route
from src.ui.screens.auth_screen import AuthScreen
from src.ui.screens.base import RoutedScreen
from src.ui.screens.cart_screen import CartScreen
from src.ui.screens.saved_screen import SavedScreen
from src.ui.screens.seller_screen import SellerScreen
from src.ui.screens.swipe_screen import SwipeScreen

logger = logging.getLogger("swipeshop.ui")

ROUTE_SCREENS: dict[str, type[RoutedScreen]] = {
    "/auth": AuthScreen,
    "/swipe": SwipeScreen,
    "/seller": SellerScreen,
    "/cart": CartScreen,
    "/saved": SavedScreen,
}


class SwipeShopApp(App[object]):
    """Terminal UI for the SwipeShop swipe-to-shop client."""

    CSS_PATH = "styles.css"
    TITLE = "SwipeShop"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, backend: Backend | None = None) -> None:
        super().__init__()
        self._owns_backend = backend is None
        self.backend = backend or build_backend()
        self.context = SessionContext(
            self.backend.sessions, self.backend.gateway,
        )
        self.route: str = ""

    def on_mount(self) -> None:
        """Restore any existing session and show its landing route."""
        self.context.add_listener(self._on_session_change)
        self.context.start()
        if self.context.session is None:
            self.navigate(Settings.DEFAULT_ROUTE)
        else:
            self.navigate(landing_route(self.context.role))

    def on_unmount(self) -> None:
        self.context.stop()
        if self._owns_backend:
            self.backend.close()

    # ── Routing ──────────────────────────────────────────

    def navigate(self, route: str) -> None:
        """Show a fresh screen for *route*; each visit re-queries."""
        if route not in Settings.ROUTES or route not in ROUTE_SCREENS:
            logger.warning("Unknown route %s", route)
            route = Settings.DEFAULT_ROUTE
        if route != "/auth" and self.context.session is None:
            route = "/auth"
        if route == "/seller" and not self.context.is_seller:
            route = "/swipe"

        screen = ROUTE_SCREENS[route](self.context)
        logger.debug("Navigating %s -> %s", self.route or "-", route)
        self.route = route
        if len(self.screen_stack) > 1:
            self.switch_screen(screen)
        else:
            self.push_screen(screen)

    # ── Session handling ─────────────────────────────────

    def _on_session_change(self, session: Session | None) -> None:
        """Listener on the context; may run on a worker thread."""
        try:
            self.call_from_thread(self._handle_session, session)
        except RuntimeError:
            # Already on the app's thread
            self._handle_session(session)

    def _handle_session(self, session: Session | None) -> None:
        if session is None and self.route != "/auth":
            logger.info("Session ended, returning to /auth")
            self.navigate("/auth")

    async def sign_out(self) -> None:
        accounts = AccountService(self.context)
        try:
            await asyncio.to_thread(accounts.sign_out)
        except SwipeShopError as exc:
            logger.error("Sign-out failed: %s", exc, exc_info=True)
            self.notify(f"Sign-out failed: {exc}", severity="error")
            return
        # Providers that emit asynchronously may not have redirected yet
        if self.route != "/auth":
            self.navigate("/auth")
