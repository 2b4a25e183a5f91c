# src/services/decision_recorder.py

"""Persist the effects of one committed swipe."""

import logging
from dataclasses import dataclass

from src.auth.session_context import SessionContext
from src.gateway.errors import DuplicateKeyError, SwipeShopError
from src.models.interaction import Direction

logger = logging.getLogger("swipeshop.recorder")

ADDED_TO_CART = "Added to cart! 🛒"
SAVED_FOR_LATER = "Saved for later 💜"
CART_ERROR = "Error adding to cart"
SAVED_ERROR = "Error saving item"


@dataclass
class DecisionOutcome:
    """What happened to one decision, with the text to notify."""

    product_id: str
    direction: Direction
    ok: bool
    message: str
    interaction_logged: bool = True
    error: str | None = None


class DecisionRecorder:
    """Logs the interaction, then makes the cart or saved write idempotent.

    Neither step is rolled back when the other fails; the caller never
    re-offers the card.
    """

    def __init__(self, context: SessionContext) -> None:
        self.context = context

    def record(
        self, product_id: str, direction: Direction,
    ) -> DecisionOutcome:
        """Record *direction* on *product_id* for the signed-in user.

        Raises AuthenticationError when there is no session; backend
        failures are reported in the outcome instead.
        """
        user_id = self.context.require_user_id()
        gateway = self.context.gateway

        logged = True
        try:
            gateway.record_interaction(user_id, product_id, direction)
        except SwipeShopError as exc:
            logged = False
            logger.warning(
                "Could not log %s swipe on %s: %s",
                direction, product_id, exc,
            )

        if direction == "right":
            ok_message, fail_message = ADDED_TO_CART, CART_ERROR
            write = self._add_to_cart
        else:
            ok_message, fail_message = SAVED_FOR_LATER, SAVED_ERROR
            write = self._save_for_later

        try:
            write(user_id, product_id)
        except SwipeShopError as exc:
            logger.error(
                "%s swipe on %s failed: %s",
                direction, product_id, exc, exc_info=True,
            )
            return DecisionOutcome(
                product_id=product_id,
                direction=direction,
                ok=False,
                message=fail_message,
                interaction_logged=logged,
                error=str(exc),
            )

        return DecisionOutcome(
            product_id=product_id,
            direction=direction,
            ok=True,
            message=ok_message,
            interaction_logged=logged,
        )

    # ── Writes ───────────────────────────────────────────

    def _add_to_cart(self, user_id: str, product_id: str) -> None:
        gateway = self.context.gateway
        if gateway.find_cart_item(user_id, product_id) is not None:
            logger.debug("Product %s already in cart", product_id)
            return
        try:
            gateway.insert_cart_item(user_id, product_id, quantity=1)
        except DuplicateKeyError:
            # A concurrent insert got there first
            logger.debug("Cart row for %s appeared concurrently", product_id)

    def _save_for_later(self, user_id: str, product_id: str) -> None:
        gateway = self.context.gateway
        gateway.delete_saved_for_product(user_id, product_id)
        try:
            gateway.insert_saved_item(user_id, product_id)
        except DuplicateKeyError:
            logger.debug(
                "Saved row for %s appeared concurrently", product_id,
            )
