# src/services/seller_dashboard.py

"""Seller-side listing management and engagement analytics."""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.auth.session_context import SessionContext
from src.filters.catalog_filter import curate_catalog
from src.gateway.errors import AuthorizationError, ValidationError
from src.models.interaction import InteractionRecord
from src.models.product import Product

logger = logging.getLogger("swipeshop.seller")

ENGAGEMENT_LABELS: tuple[str, str, str] = (
    "Added to Cart",
    "Saved for Later",
    "Skipped",
)


@dataclass
class SellerAnalytics:
    """Aggregates over every interaction on the seller's products."""

    total_views: int = 0
    total_swipes_right: int = 0
    total_swipes_left: int = 0
    total_purchases: int = 0
    total_revenue: float = 0.0
    conversion_rate: str = "0"
    skipped: int = 0
    breakdown: list[tuple[str, int]] = field(
        default_factory=lambda: list[tuple[str, int]]()
    )


def compute_analytics(records: list[InteractionRecord]) -> SellerAnalytics:
    """Aggregate interaction records into dashboard figures.

    Every record counts as a view, purchases included.
    """
    views = len(records)
    right = sum(1 for r in records if r.action == "right")
    left = sum(1 for r in records if r.action == "left")
    purchased = [r for r in records if r.action == "purchased"]
    revenue = sum(r.product_price for r in purchased)

    conversion = f"{right / views * 100:.1f}" if views > 0 else "0"
    skipped = max(0, views - right - left)

    slices = zip(ENGAGEMENT_LABELS, (right, left, skipped))
    breakdown = [(label, count) for label, count in slices if count > 0]

    return SellerAnalytics(
        total_views=views,
        total_swipes_right=right,
        total_swipes_left=left,
        total_purchases=len(purchased),
        total_revenue=revenue,
        conversion_rate=conversion,
        skipped=skipped,
        breakdown=breakdown,
    )


def parse_price(raw: Any) -> float:
    """Turn form input into a non-negative price."""
    try:
        price = float(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid price: {raw!r}") from exc
    if not math.isfinite(price) or price < 0:
        raise ValidationError(f"Invalid price: {raw!r}")
    return price


class SellerDashboardController:
    """Own-product CRUD plus analytics for the signed-in seller.

    ``products`` only changes after the backend confirmed a write.
    """

    def __init__(self, context: SessionContext) -> None:
        self.context = context
        self.products: list[Product] = []
        self.analytics = SellerAnalytics()

    def load_products(self) -> list[Product]:
        seller_id = self.context.require_user_id()
        rows = self.context.gateway.list_products(seller_id=seller_id)
        self.products = curate_catalog(rows)
        return self.products

    def load_analytics(self) -> SellerAnalytics:
        seller_id = self.context.require_user_id()
        records = self.context.gateway.list_seller_interactions(seller_id)
        self.analytics = compute_analytics(records)
        logger.info(
            "Analytics for %s: %d views, %s%% conversion",
            seller_id,
            self.analytics.total_views,
            self.analytics.conversion_rate,
        )
        return self.analytics

    def add_product(
        self,
        name: str,
        description: str,
        price: Any,
        image_url: str = "",
        category: str = "",
    ) -> Product:
        """Insert a listing, then re-fetch the seller's products."""
        seller_id = self.context.require_user_id()
        product = Product(
            id="",
            seller_id=seller_id,
            name=name,
            description=description,
            price=parse_price(price),
            image_url=image_url,
            category=category,
        )
        created = self.context.gateway.insert_product(product)
        logger.info("Seller %s added product %s", seller_id, created.id)
        self.load_products()
        return created

    def update_product(self, product_id: str, **fields: Any) -> Product:
        """Change fields of an owned listing."""
        seller_id = self.context.require_user_id()
        if "price" in fields:
            fields["price"] = parse_price(fields["price"])
        updated = self.context.gateway.update_product(
            product_id, seller_id, fields,
        )
        if updated is None:
            raise AuthorizationError(
                "Product not found or not owned by you"
            )
        self.products = [
            updated if p.id == product_id else p for p in self.products
        ]
        return updated

    def delete_product(self, product_id: str) -> None:
        """Delete an owned listing; the local list follows the server."""
        seller_id = self.context.require_user_id()
        deleted = self.context.gateway.delete_product(product_id, seller_id)
        if not deleted:
            logger.warning(
                "Delete of %s by %s matched no row", product_id, seller_id,
            )
            raise AuthorizationError(
                "Product not found or not owned by you"
            )
        self.products = [p for p in self.products if p.id != product_id]
        logger.info("Seller %s deleted product %s", seller_id, product_id)

    def export_engagement_chart(
        self, open_browser: bool = False,
    ) -> Path | None:
        """Write the engagement pie chart of the last loaded analytics."""
        from src.storage.chart_exporter import export_engagement_chart

        return export_engagement_chart(
            self.analytics, open_browser=open_browser,
        )
