# src/ui/screens/seller_screen.py

"""/seller: listing management and engagement figures."""

import logging
from typing import cast

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Input, Static

from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import SwipeShopError
from src.services.seller_dashboard import SellerDashboardController
from src.ui.screens.base import RoutedScreen

logger = logging.getLogger("swipeshop.ui.seller")

_FORM_FIELDS: tuple[str, ...] = (
    "name", "description", "price", "image_url", "category",
)


class SellerScreen(RoutedScreen):
    """Add and delete own products; view swipe analytics."""

    ROUTE = "/seller"

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("g", "chart", "Chart"),
    ]

    def __init__(self, session_context: SessionContext) -> None:
        super().__init__(session_context)
        self.dashboard = SellerDashboardController(session_context)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Horizontal(
                Static("📊 Seller dashboard", id="title"),
                Button("Chart", id="chart_btn"),
                Button("Sign out", variant="error", id="sign_out"),
                id="nav_bar",
            ),
            Static("", id="stats"),
            Horizontal(
                Input(placeholder="Name", id="name"),
                Input(placeholder="Description", id="description"),
                Input(placeholder="Price", id="price"),
                Input(placeholder="Image URL", id="image_url"),
                Input(placeholder="Category", id="category"),
                Button("Add", variant="primary", id="add_btn"),
                id="product_form",
            ),
            DataTable(id="products_table", cursor_type="row"),
            Button("Delete selected", variant="error", id="delete_btn"),
            id="seller_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        table = self._table()
        table.add_columns("Name", "Price", "Category", "Description")
        await self.refresh_data()

    def _table(self) -> DataTable[str]:
        return cast(
            DataTable[str], self.query_one("#products_table", DataTable),
        )

    async def refresh_data(self) -> None:
        """Re-fetch own products and analytics."""
        try:
            await self.run_blocking(self.dashboard.load_products)
            await self.run_blocking(self.dashboard.load_analytics)
        except SwipeShopError as exc:
            self.report_error("Loading dashboard", exc)
        self.populate()

    def populate(self) -> None:
        table = self._table()
        table.clear()
        for p in self.dashboard.products:
            table.add_row(
                p.name[:40],
                f"{Settings.CURRENCY_SYMBOL}{p.price:.2f}",
                p.category,
                p.description[:50],
                key=p.id,
            )

        stats = self.dashboard.analytics
        self.query_one("#stats", Static).update(
            f"👀 Views: {stats.total_views}   "
            f"🛒 Right: {stats.total_swipes_right}   "
            f"💜 Left: {stats.total_swipes_left}   "
            f"✅ Purchases: {stats.total_purchases}   "
            f"💰 Revenue: {Settings.CURRENCY_SYMBOL}"
            f"{stats.total_revenue:.2f}   "
            f"📈 Conversion: {stats.conversion_rate}%"
        )

    def _form_values(self) -> dict[str, str]:
        return {
            name: self.query_one(f"#{name}", Input).value
            for name in _FORM_FIELDS
        }

    def _clear_form(self) -> None:
        for name in _FORM_FIELDS:
            self.query_one(f"#{name}", Input).value = ""

    async def add_product(self) -> bool:
        values = self._form_values()
        try:
            await self.run_blocking(
                self.dashboard.add_product,
                values["name"],
                values["description"],
                values["price"],
                values["image_url"],
                values["category"],
            )
        except SwipeShopError as exc:
            self.report_error("Adding product", exc)
            return False
        self._clear_form()
        self.populate()
        self.notify("Product added")
        return True

    async def delete_product(self, product_id: str) -> bool:
        try:
            await self.run_blocking(
                self.dashboard.delete_product, product_id,
            )
        except SwipeShopError as exc:
            self.report_error("Deleting product", exc)
            return False
        self.populate()
        self.notify("Product deleted")
        return True

    async def delete_selected(self) -> bool:
        table = self._table()
        if not self.dashboard.products or table.row_count == 0:
            return False
        row_key, _col = table.coordinate_to_cell_key(table.cursor_coordinate)
        if row_key.value is None:
            return False
        return await self.delete_product(row_key.value)

    async def action_refresh(self) -> None:
        await self.refresh_data()

    def action_chart(self) -> None:
        try:
            path = self.dashboard.export_engagement_chart(open_browser=True)
        except OSError as exc:
            logger.error("Chart export failed: %s", exc, exc_info=True)
            self.notify(f"Chart export failed: {exc}", severity="error")
            return
        if path is None:
            self.notify("No engagement data yet", severity="warning")
        else:
            self.notify(f"Chart saved to {path}")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "add_btn":
            await self.add_product()
        elif button_id == "delete_btn":
            await self.delete_selected()
        elif button_id == "chart_btn":
            self.action_chart()
        elif button_id == "sign_out":
            await self.shop.sign_out()
