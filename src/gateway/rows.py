# src/gateway/rows.py

"""Map table rows (plain dicts) onto the model dataclasses.

Both backends hand rows over in the PostgREST shape: joined tables are
nested dicts under the table name (``row["products"]``), timestamps are
ISO-8601 strings.
"""

from datetime import datetime
from typing import Any

from src.models.collection_item import CartItem, SavedItem
from src.models.interaction import InteractionRecord
from src.models.product import Product
from src.models.profile import Profile


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp, tolerating ``None`` and a trailing Z."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def product_from_row(row: dict[str, Any]) -> Product:
    """Build a Product; NULL text columns become empty strings."""
    return Product(
        id=str(row["id"]),
        name=row.get("name") or "",
        price=float(row.get("price") or 0),
        seller_id=str(row.get("seller_id") or ""),
        description=row.get("description") or "",
        image_url=row.get("image_url") or "",
        category=row.get("category") or "",
        created_at=parse_timestamp(row.get("created_at")),
    )


def profile_from_row(row: dict[str, Any]) -> Profile:
    """Build a Profile; unknown roles fall back to ``user``."""
    role = row.get("role") or "user"
    return Profile(
        id=str(row["id"]),
        email=row.get("email") or "",
        role="seller" if role == "seller" else "user",
        created_at=parse_timestamp(row.get("created_at")),
    )


def cart_item_from_row(row: dict[str, Any]) -> CartItem:
    """Build a CartItem with its joined product, when present."""
    joined = row.get("products")
    return CartItem(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        product_id=str(row.get("product_id") or ""),
        quantity=int(row.get("quantity") or 1),
        created_at=parse_timestamp(row.get("created_at")),
        product=product_from_row(joined) if joined else None,
    )


def saved_item_from_row(row: dict[str, Any]) -> SavedItem:
    """Build a SavedItem (products are attached by the controller)."""
    return SavedItem(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        product_id=str(row.get("product_id") or ""),
        created_at=parse_timestamp(row.get("created_at")),
    )


def interaction_from_row(row: dict[str, Any]) -> InteractionRecord:
    """Build an InteractionRecord, pulling price from the product join."""
    joined = row.get("products") or {}
    return InteractionRecord(
        id=str(row.get("id") or ""),
        user_id=str(row.get("user_id") or ""),
        product_id=str(row.get("product_id") or ""),
        action=row["action"],
        created_at=parse_timestamp(row.get("created_at")),
        product_price=float(joined.get("price") or 0),
    )
