# src/models/interaction.py

"""Append-only swipe / purchase log entries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Direction = Literal["left", "right"]
Action = Literal["left", "right", "purchased"]

ACTIONS: tuple[str, ...] = ("left", "right", "purchased")


@dataclass
class InteractionRecord:
    """A shopper's decision on a product, or one checkout line."""

    id: str
    user_id: str
    product_id: str
    action: Action
    created_at: datetime | None = None
    # Joined from products; only filled for seller analytics
    product_price: float = 0.0
