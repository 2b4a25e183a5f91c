# src/services/saved_controller.py

"""Saved-for-later listing, removal and promotion to the cart."""

import logging

from src.auth.session_context import SessionContext
from src.models.collection_item import SavedItem
from src.models.product import placeholder_product

logger = logging.getLogger("swipeshop.saved")


class SavedController:
    """The signed-in shopper's saved items, newest first."""

    def __init__(self, context: SessionContext) -> None:
        self.context = context
        self.items: list[SavedItem] = []

    def load(self) -> list[SavedItem]:
        """Fetch saved rows and attach their products.

        A row whose product has gone gets a placeholder product.
        """
        user_id = self.context.require_user_id()
        gateway = self.context.gateway
        rows = gateway.list_saved_items(user_id)
        ids = list(dict.fromkeys(r.product_id for r in rows))
        by_id = {p.id: p for p in gateway.get_products(ids)}
        for row in rows:
            row.product = by_id.get(row.product_id) or placeholder_product(
                row.product_id,
            )
        self.items = rows
        return self.items

    def remove(self, item_id: str) -> None:
        self.context.gateway.delete_saved_item(item_id)
        self.items = [i for i in self.items if i.id != item_id]

    def move_to_cart(self, item: SavedItem) -> None:
        """Upsert the cart row, then drop the saved row.

        When the cart write fails the saved row is kept and the error
        propagates.
        """
        user_id = self.context.require_user_id()
        gateway = self.context.gateway
        gateway.upsert_cart_item(user_id, item.product_id, quantity=1)
        gateway.delete_saved_item(item.id)
        self.items = [i for i in self.items if i.id != item.id]
        logger.info("Moved %s from saved to cart", item.product_id)
