# src/ui/screens/cart_screen.py

"""/cart: review, remove and check out."""

import logging
from typing import cast

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Static

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.services.cart_controller import CartController, CheckoutResult
from src.ui.screens.base import RoutedScreen

logger = logging.getLogger("swipeshop.ui.cart")


class CartScreen(RoutedScreen):
    """Cart lines with a running total."""

    ROUTE = "/cart"

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("delete", "remove", "Remove"),
    ]

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__(session_context)
        self.cart = CartController(session_context)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Horizontal(
                Button("← Back", id="back_btn"),
                Static("🛒 Your cart", id="title"),
                id="nav_bar",
            ),
            DataTable(id="cart_table", cursor_type="row"),
            Static("", id="cart_total"),
            Horizontal(
                Button("Remove", id="remove_btn"),
                Button("Checkout", variant="success", id="checkout_btn"),
                id="cart_actions",
            ),
            id="cart_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        self._table().add_columns("Product", "Price", "Qty", "Subtotal")
        await self.load()

    def _table(self) -> DataTable[str]:
        return cast(
            DataTable[str], self.query_one("#cart_table", DataTable),
        )

    async def load(self) -> None:
        try:
            await self.run_blocking(self.cart.load)
        except SwipeShopError as exc:
            self.report_error("Loading cart", exc)
        self.populate()

    def populate(self) -> None:
        table = self._table()
        table.clear()
        symbol = Settings.CURRENCY_SYMBOL
        for item in self.cart.items:
            name = item.product.name if item.product else "Unknown"
            price = item.product.price if item.product else 0.0
            table.add_row(
                name[:40],
                f"{symbol}{price:.2f}",
                str(item.quantity),
                f"{symbol}{item.line_total:.2f}",
                key=item.id,
            )
        if self.cart.items:
            text = f"Total: {symbol}{self.cart.total:.2f}"
        else:
            text = "Your cart is empty"
        self.query_one("#cart_total", Static).update(text)

    async def remove(self, item_id: str) -> bool:
        try:
            await self.run_blocking(self.cart.remove, item_id)
        except SwipeShopError as exc:
            self.report_error("Removing item", exc)
            return False
        self.populate()
        return True

    async def checkout(self) -> CheckoutResult | None:
        """Check out and go back to the feed."""
        if not self.cart.items:
            return None
        try:
            result = await self.run_blocking(self.cart.checkout)
        except SwipeShopError as exc:
            self.report_error("Checkout", exc)
            return None
        if result.purchases_failed:
            self.notify(
                f"{result.purchases_failed} purchase(s) could not be logged",
                severity="warning",
            )
        self.notify("Order placed! 🎉")
        self.shop.navigate("/swipe")
        return result

    async def action_remove(self) -> None:
        table = self._table()
        if table.row_count == 0:
            return
        row_key, _col = table.coordinate_to_cell_key(table.cursor_coordinate)
        if row_key.value is not None:
            await self.remove(row_key.value)

    def action_back(self) -> None:
        self.shop.navigate("/swipe")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "back_btn":
            self.action_back()
        elif button_id == "remove_btn":
            await self.action_remove()
        elif button_id == "checkout_btn":
            await self.checkout()
