# src/models/product.py

"""Product data model for inter-module data flow."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Product:
    """A seller's listing as shown in the feed, cart and dashboard."""

    id: str
    name: str
    price: float
    seller_id: str = ""
    description: str = ""
    image_url: str = ""
    category: str = ""
    created_at: datetime | None = None


def placeholder_product(product_id: str) -> Product:
    """Stand-in for a saved item whose product no longer exists."""
    return Product(
        id=product_id,
        name="Unknown",
        price=0.0,
        description="",
        image_url="",
    )
