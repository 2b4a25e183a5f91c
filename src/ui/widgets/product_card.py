# src/ui/widgets/product_card.py

"""Draggable product card for the swipe feed."""

import logging

from rich.text import Text
from textual.events import MouseDown, MouseMove, MouseUp
from textual.message import Message
from textual.widgets import Static

from src.config.settings import Settings
from src.interaction.swipe_gesture import GestureState, SwipeGesture
from src.models.interaction import Direction
from src.models.product import Product

logger = logging.getLogger("swipeshop.ui.card")


class ProductCard(Static, can_focus=True):
    """One product; drag it sideways past the threshold to decide.

    Mouse events feed :meth:`begin_drag`, :meth:`drag_to` and
    :meth:`end_drag`, which tests may call directly with column offsets.
    """

    class Swiped(Message):
        """Posted once when the card's gesture commits."""

        def __init__(self, card: "ProductCard", direction: Direction) -> None:
            super().__init__()
            self.card = card
            self.direction = direction

        @property
        def product_id(self) -> str:
            return self.card.product.id

    def __init__(self, product: Product) -> None:
        super().__init__(id=f"card_{product.id}")
        self.product = product
        self.gesture = SwipeGesture()
        self._anchor_x: int = 0
        self._cells: float = 0.0

    def on_mount(self) -> None:
        self.update(self._render_card())

    # ── Gesture plumbing ─────────────────────────────────

    def begin_drag(self, anchor_x: int = 0) -> bool:
        """Pointer down; ignored unless the card is idle."""
        if not self.gesture.press():
            return False
        self._anchor_x = anchor_x
        self._cells = 0.0
        self.add_class("-dragging")
        return True

    def drag_to(self, cells: float) -> None:
        """Move the card *cells* columns from where the drag began."""
        if self.gesture.state is not GestureState.DRAGGING:
            return
        self._cells = cells
        self.gesture.drag_to(cells * Settings.DRAG_PX_PER_CELL)
        self._apply_visuals()

    def end_drag(self) -> Direction | None:
        """Pointer up: post :class:`Swiped` on commit, else spring back."""
        direction = self.gesture.release()
        self.remove_class("-dragging")
        if direction is None:
            self._cells = 0.0
            self._apply_visuals()
            return None
        self.add_class("-committed")
        logger.debug("Card %s swiped %s", self.product.id, direction)
        self.post_message(self.Swiped(self, direction))
        return direction

    def _apply_visuals(self) -> None:
        self.styles.offset = (int(self._cells), 0)
        self.styles.opacity = self.gesture.opacity
        self.update(self._render_card())

    def _render_card(self) -> Text:
        product = self.product
        gesture = self.gesture
        text = Text()
        # Badges strengthen as the card nears the commit distance
        if gesture.left_badge_opacity > 0:
            strong = gesture.left_badge_opacity > 0.5
            text.append(
                "💜 SAVE  ", style="bold magenta" if strong else "magenta",
            )
        if gesture.right_badge_opacity > 0:
            strong = gesture.right_badge_opacity > 0.5
            text.append(
                "🛒 CART  ", style="bold green" if strong else "green",
            )
        if gesture.offset:
            text.append(f"{gesture.rotation:+.0f}°", style="dim")
        if text:
            text.append("\n")
        text.append(product.name or "Untitled", style="bold")
        text.append(
            f"\n{Settings.CURRENCY_SYMBOL}{product.price:.2f}",
            style="green",
        )
        if product.category:
            text.append(f"  · {product.category}", style="dim")
        if product.description:
            text.append(f"\n{product.description}")
        return text

    # ── Mouse events ─────────────────────────────────────

    def on_mouse_down(self, event: MouseDown) -> None:
        if self.begin_drag(event.screen_x):
            self.capture_mouse()

    def on_mouse_move(self, event: MouseMove) -> None:
        if self.gesture.state is GestureState.DRAGGING:
            self.drag_to(event.screen_x - self._anchor_x)

    def on_mouse_up(self, event: MouseUp) -> None:
        if self.gesture.state is GestureState.DRAGGING:
            self.release_mouse()
            self.end_drag()
