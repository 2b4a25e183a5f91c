# src/ui/screens/swipe_screen.py

"""/swipe: the shopper feed."""

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Static

from src.auth.session_context import SessionContext
from src.gateway.errors import SwipeShopError
from src.models.interaction import Direction
from src.services.decision_recorder import DecisionOutcome, DecisionRecorder
from src.services.feed_controller import ProductFeedController
from src.ui.screens.base import RoutedScreen
from src.ui.widgets.product_card import ProductCard

logger = logging.getLogger("swipeshop.ui.swipe")

_STATE_TEXT: dict[str, str] = {
    "empty": "No products yet. Check back soon!",
    "exhausted": "You've seen everything! 🎉",
    "browsing": "Drag a card, or use ← save / → cart",
}


class SwipeScreen(RoutedScreen):
    """Product cards in feed order; each can be decided once."""

    ROUTE = "/swipe"

    BINDINGS = [
        Binding("left", "decide('left')", "Save"),
        Binding("right", "decide('right')", "Cart"),
        Binding("up", "focus_card(-1)", "Prev", show=False),
        Binding("down", "focus_card(1)", "Next", show=False),
        Binding("c", "go('/cart')", "Cart"),
        Binding("v", "go('/saved')", "Saved"),
    ]

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__(session_context)
        self.feed = ProductFeedController(session_context)
        self.recorder = DecisionRecorder(session_context)
        self.outcomes: list[DecisionOutcome] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            Button("🛒 Cart", id="go_cart"),
            Button("💜 Saved", id="go_saved"),
            Button("Sign out", variant="error", id="sign_out"),
            id="nav_bar",
        )
        yield Static("Loading products...", id="feed_status")
        yield VerticalScroll(id="cards")
        yield Footer()

    async def on_mount(self) -> None:
        await self.load_feed()

    async def load_feed(self) -> None:
        status = self.query_one("#feed_status", Static)
        try:
            await self.run_blocking(self.feed.load)
        except SwipeShopError as exc:
            self.report_error("Loading products", exc)
            status.update("Could not load products")
            return
        cards = self.query_one("#cards", VerticalScroll)
        await cards.remove_children()
        await cards.mount_all(ProductCard(p) for p in self.feed.visible())
        self._update_status()

    def _update_status(self) -> None:
        self.query_one("#feed_status", Static).update(
            _STATE_TEXT[self.feed.state]
        )

    # ── Decisions ────────────────────────────────────────

    async def on_product_card_swiped(
        self, event: ProductCard.Swiped,
    ) -> None:
        await self.decide(event.product_id, event.direction)

    async def action_decide(self, direction: Direction) -> None:
        product = self.feed.current()
        if product is not None:
            await self.decide(product.id, direction)

    async def decide(
        self, product_id: str, direction: Direction,
    ) -> DecisionOutcome | None:
        """Drop the card from the feed, then persist the decision."""
        if product_id in self.feed.decided:
            return None
        self.feed.mark_decided(product_id)
        for card in self.query(ProductCard):
            if card.product.id == product_id:
                await card.remove()
        self._update_status()

        try:
            outcome = await self.run_blocking(
                self.recorder.record, product_id, direction,
            )
        except SwipeShopError as exc:
            self.report_error("Recording swipe", exc)
            return None

        self.outcomes.append(outcome)
        self.notify(
            outcome.message,
            severity="information" if outcome.ok else "error",
        )
        return outcome

    # ── Navigation ───────────────────────────────────────

    def action_focus_card(self, step: int) -> None:
        cards = list(self.query(ProductCard))
        if not cards:
            return
        focused = self.focused
        index = cards.index(focused) if focused in cards else -1
        target = cards[max(0, min(len(cards) - 1, index + step))]
        target.focus()
        target.scroll_visible()

    def action_go(self, route: str) -> None:
        self.shop.navigate(route)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "go_cart":
            self.shop.navigate("/cart")
        elif event.button.id == "go_saved":
            self.shop.navigate("/saved")
        elif event.button.id == "sign_out":
            await self.shop.sign_out()
