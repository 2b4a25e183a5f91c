# src/models/collection_item.py

"""Cart and saved-for-later rows."""

from dataclasses import dataclass
from datetime import datetime

from src.models.product import Product


@dataclass
class CartItem:
    """One product in a shopper's cart."""

    id: str
    user_id: str
    product_id: str
    quantity: int = 1
    created_at: datetime | None = None
    product: Product | None = None

    @property
    def line_total(self) -> float:
        """Price times quantity, zero when the product is unknown."""
        if self.product is None:
            return 0.0
        return self.product.price * self.quantity


@dataclass
class SavedItem:
    """One product saved for later."""

    id: str
    user_id: str
    product_id: str
    created_at: datetime | None = None
    product: Product | None = None
