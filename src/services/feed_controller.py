# src/services/feed_controller.py

"""Shopper feed: curated candidates minus the products already decided."""

import logging
from typing import Literal

from src.auth.session_context import SessionContext
from src.filters.catalog_filter import curate_catalog
from src.models.product import Product

logger = logging.getLogger("swipeshop.feed")

FeedState = Literal["empty", "exhausted", "browsing"]


class ProductFeedController:
    """Holds the candidate sequence and the session's decided set.

    Nothing here is persisted: re-entering the feed starts over with a
    fresh snapshot and an empty decided set.
    """

    def __init__(self, context: SessionContext) -> None:
        self.context = context
        self.candidates: list[Product] = []
        self.decided: set[str] = set()

    def load(self) -> list[Product]:
        """Fetch every product newest first and curate it.

        Gateway errors propagate; the candidates stay as they were.
        """
        products = self.context.gateway.list_products()
        self.candidates = curate_catalog(products)
        self.decided = set()
        logger.info(
            "Feed loaded: %d candidates from %d products",
            len(self.candidates),
            len(products),
        )
        return self.candidates

    def visible(self) -> list[Product]:
        """Candidates not yet decided, in candidate order."""
        return [p for p in self.candidates if p.id not in self.decided]

    def current(self) -> Product | None:
        """First visible product (the keyboard target)."""
        for product in self.candidates:
            if product.id not in self.decided:
                return product
        return None

    def mark_decided(self, product_id: str) -> None:
        self.decided.add(product_id)

    @property
    def state(self) -> FeedState:
        if not self.candidates:
            return "empty"
        if all(p.id in self.decided for p in self.candidates):
            return "exhausted"
        return "browsing"
