# src/ui/screens/saved_screen.py

"""/saved: products saved for later."""

import logging
from typing import cast

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Static

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.models.collection_item import SavedItem
from src.services.saved_controller import SavedController
from src.ui.screens.base import RoutedScreen

logger = logging.getLogger("swipeshop.ui.saved")


class SavedScreen(RoutedScreen):
    """Saved items, newest first, with move-to-cart."""

    ROUTE = "/saved"

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("m", "move", "Move to cart"),
        Binding("delete", "remove", "Remove"),
    ]

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__(session_context)
        self.saved = SavedController(session_context)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Horizontal(
                Button("← Back", id="back_btn"),
                Static("💜 Saved for later", id="title"),
                id="nav_bar",
            ),
            DataTable(id="saved_table", cursor_type="row"),
            Static("", id="saved_status"),
            Horizontal(
                Button("Remove", id="remove_btn"),
                Button("Move to cart", variant="primary", id="move_btn"),
                id="saved_actions",
            ),
            id="saved_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        self._table().add_columns("Product", "Price", "Description")
        await self.load()

    def _table(self) -> DataTable[str]:
        return cast(
            DataTable[str], self.query_one("#saved_table", DataTable),
        )

    async def load(self) -> None:
        try:
            await self.run_blocking(self.saved.load)
        except SwipeShopError as exc:
            self.report_error("Loading saved items", exc)
        self.populate()

    def populate(self) -> None:
        table = self._table()
        table.clear()
        for item in self.saved.items:
            product = item.product
            table.add_row(
                product.name[:40] if product else "Unknown",
                f"{Settings.CURRENCY_SYMBOL}"
                f"{product.price if product else 0.0:.2f}",
                (product.description if product else "")[:50],
                key=item.id,
            )
        self.query_one("#saved_status", Static).update(
            "" if self.saved.items else "Nothing saved yet"
        )

    def _selected(self) -> SavedItem | None:
        table = self._table()
        if table.row_count == 0:
            return None
        row_key, _col = table.coordinate_to_cell_key(table.cursor_coordinate)
        for item in self.saved.items:
            if item.id == row_key.value:
                return item
        return None

    async def remove(self, item_id: str) -> bool:
        try:
            await self.run_blocking(self.saved.remove, item_id)
        except SwipeShopError as exc:
            self.report_error("Removing item", exc)
            return False
        self.populate()
        return True

    async def move_to_cart(self, item: SavedItem) -> bool:
        try:
            await self.run_blocking(self.saved.move_to_cart, item)
        except SwipeShopError as exc:
            self.report_error("Moving to cart", exc)
            return False
        self.populate()
        self.notify("Moved to cart 🛒")
        return True

    async def action_move(self) -> None:
        item = self._selected()
        if item is not None:
            await self.move_to_cart(item)

    async def action_remove(self) -> None:
        item = self._selected()
        if item is not None:
            await self.remove(item.id)

    def action_back(self) -> None:
        self.shop.navigate("/swipe")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "back_btn":
            self.action_back()
        elif button_id == "remove_btn":
            await self.action_remove()
        elif button_id == "move_btn":
            await self.action_move()
