# src/services/cart_controller.py

"""Cart listing, removal and checkout."""

import logging
from dataclasses import dataclass

from src.auth.session_context import SessionContext
from src.gateway.errors import SwipeShopError
from src.models.collection_item import CartItem

logger = logging.getLogger("swipeshop.cart")


@dataclass
class CheckoutResult:
    """Outcome of one checkout attempt."""

    lines: int = 0
    purchases_logged: int = 0
    purchases_failed: int = 0
    total: float = 0.0
    cart_cleared: bool = False


class CartController:
    """The signed-in shopper's cart as a fresh snapshot."""

    def __init__(self, context: SessionContext) -> None:
        self.context = context
        self.items: list[CartItem] = []

    def load(self) -> list[CartItem]:
        user_id = self.context.require_user_id()
        self.items = self.context.gateway.list_cart_items(user_id)
        return self.items

    @property
    def total(self) -> float:
        """Sum of price times quantity over the loaded lines."""
        return sum(item.line_total for item in self.items)

    def remove(self, item_id: str) -> None:
        self.context.gateway.delete_cart_item(item_id)
        self.items = [i for i in self.items if i.id != item_id]

    def checkout(self) -> CheckoutResult:
        """Log one purchase per line, then empty the cart.

        Purchase logging is best effort; the cart is cleared no matter
        how many purchase records failed.
        """
        user_id = self.context.require_user_id()
        gateway = self.context.gateway
        result = CheckoutResult(lines=len(self.items), total=self.total)
        if not self.items:
            return result

        for item in self.items:
            try:
                gateway.record_interaction(
                    user_id, item.product_id, "purchased",
                )
                result.purchases_logged += 1
            except SwipeShopError as exc:
                result.purchases_failed += 1
                logger.warning(
                    "Could not log purchase of %s: %s",
                    item.product_id, exc,
                )

        try:
            gateway.clear_cart(user_id)
            result.cart_cleared = True
            self.items = []
        except SwipeShopError as exc:
            logger.error("Could not clear cart: %s", exc, exc_info=True)

        logger.info(
            "Checkout for %s: %d lines, %d logged, %d failed",
            user_id,
            result.lines,
            result.purchases_logged,
            result.purchases_failed,
        )
        return result
