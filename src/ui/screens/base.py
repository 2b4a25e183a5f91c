# src/ui/screens/base.py

"""Behaviour shared by every routed screen."""

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

from textual.screen import Screen

from src.auth.session_context import SessionContext
from src.gateway.errors import SwipeShopError

if TYPE_CHECKING:
    from src.ui.app import SwipeShopApp

logger = logging.getLogger("swipeshop.ui")

T = TypeVar("T")


class RoutedScreen(Screen[None]):
    """A screen bound to one route of the app."""

    ROUTE: str = ""

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__()
        self.session_context = session_context

    @property
    def shop(self) -> "SwipeShopApp":
        from src.ui.app import SwipeShopApp

        return cast(SwipeShopApp, self.app)

    async def run_blocking(
        self, func: Callable[..., T], *args: Any, **kwargs: Any,
    ) -> T:
        """Run a gateway-bound call off the event loop."""
        return await asyncio.to_thread(func, *args, **kwargs)

    def report_error(self, action: str, exc: SwipeShopError) -> None:
        """Log *exc* and show it as an error notification."""
        logger.error(
            "%s failed on %s: %s", action, self.ROUTE, exc, exc_info=True,
        )
        self.notify(f"{action} failed: {exc}", severity="error")
