# src/gateway/supabase_gateway.py

"""Supabase (PostgREST) implementation of the persistence gateway.

Ownership is enforced server-side by the project's row-level security
policies; this class only shapes queries and translates errors.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from supabase import Client, PostgrestAPIError

from src.gateway.base_gateway import PersistenceGateway
from src.gateway.errors import (
    AuthorizationError,
    DuplicateKeyError,
    GatewayError,
)
from src.gateway.rows import (
    cart_item_from_row,
    interaction_from_row,
    product_from_row,
    profile_from_row,
    saved_item_from_row,
)
from src.models.collection_item import CartItem, SavedItem
from src.models.interaction import Action, InteractionRecord
from src.models.product import Product
from src.models.profile import Profile

logger = logging.getLogger("swipeshop.gateway.supabase")

# Postgres SQLSTATE codes surfaced by PostgREST
_UNIQUE_VIOLATION = "23505"
_RLS_VIOLATION = "42501"

_CART_SELECT = (
    "id, user_id, product_id, quantity, created_at, "
    "products (id, seller_id, name, description, price, "
    "image_url, category, created_at)"
)
_SELLER_INTERACTIONS_SELECT = (
    "id, user_id, product_id, action, created_at, "
    "products!inner(seller_id, price)"
)


class SupabaseGateway(PersistenceGateway):
    """Gateway issuing table queries through a supabase-py client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    # ── Helpers ──────────────────────────────────────────

    def _run(
        self, label: str, query: Callable[[], Any],
    ) -> list[dict[str, Any]]:
        """Execute a built query, returning its rows or raising."""
        try:
            response = query()
        except PostgrestAPIError as exc:
            code = getattr(exc, "code", None)
            message = getattr(exc, "message", None) or str(exc)
            logger.warning(
                "%s failed (code=%s): %s", label, code, message,
            )
            if code == _UNIQUE_VIOLATION:
                raise DuplicateKeyError(message) from exc
            if code == _RLS_VIOLATION:
                raise AuthorizationError(message) from exc
            raise GatewayError(message) from exc
        except httpx.HTTPError as exc:
            logger.error("%s: network error: %s", label, exc, exc_info=True)
            raise GatewayError(f"Network error: {exc}") from exc
        data = response.data
        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        return list(data)

    # ── Profiles ─────────────────────────────────────────

    def upsert_profile(self, profile: Profile) -> Profile:
        rows = self._run(
            "upsert profile",
            lambda: self.client.table("profiles").upsert({
                "id": profile.id,
                "email": profile.email,
                "role": profile.role,
            }).execute(),
        )
        return profile_from_row(rows[0]) if rows else profile

    def get_profile(self, user_id: str) -> Profile | None:
        rows = self._run(
            "select profile",
            lambda: self.client.table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute(),
        )
        return profile_from_row(rows[0]) if rows else None

    # ── Products ─────────────────────────────────────────

    def list_products(
        self, seller_id: str | None = None,
    ) -> list[Product]:
        def query() -> Any:
            builder = self.client.table("products").select("*")
            if seller_id is not None:
                builder = builder.eq("seller_id", seller_id)
            return builder.order("created_at", desc=True).execute()

        return [
            product_from_row(r)
            for r in self._run("select products", query)
        ]

    def get_products(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        rows = self._run(
            "select products by id",
            lambda: self.client.table("products")
            .select("*")
            .in_("id", product_ids)
            .execute(),
        )
        return [product_from_row(r) for r in rows]

    def insert_product(self, product: Product) -> Product:
        payload: dict[str, Any] = {
            "seller_id": product.seller_id,
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "image_url": product.image_url,
            "category": product.category,
        }
        if product.id:
            payload["id"] = product.id
        rows = self._run(
            "insert product",
            lambda: self.client.table("products")
            .insert(payload)
            .execute(),
        )
        if not rows:
            raise GatewayError("Insert returned no product row")
        return product_from_row(rows[0])

    def update_product(
        self,
        product_id: str,
        seller_id: str,
        fields: dict[str, Any],
    ) -> Product | None:
        rows = self._run(
            "update product",
            lambda: self.client.table("products")
            .update(fields)
            .eq("id", product_id)
            .eq("seller_id", seller_id)
            .execute(),
        )
        return product_from_row(rows[0]) if rows else None

    def delete_product(self, product_id: str, seller_id: str) -> bool:
        rows = self._run(
            "delete product",
            lambda: self.client.table("products")
            .delete()
            .eq("id", product_id)
            .eq("seller_id", seller_id)
            .execute(),
        )
        return bool(rows)

    # ── Cart ─────────────────────────────────────────────

    def list_cart_items(self, user_id: str) -> list[CartItem]:
        rows = self._run(
            "select cart",
            lambda: self.client.table("cart_items")
            .select(_CART_SELECT)
            .eq("user_id", user_id)
            .order("created_at")
            .execute(),
        )
        return [cart_item_from_row(r) for r in rows]

    def find_cart_item(
        self, user_id: str, product_id: str,
    ) -> CartItem | None:
        rows = self._run(
            "select cart item",
            lambda: self.client.table("cart_items")
            .select("*")
            .eq("user_id", user_id)
            .eq("product_id", product_id)
            .limit(1)
            .execute(),
        )
        return cart_item_from_row(rows[0]) if rows else None

    def insert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> CartItem:
        rows = self._run(
            "insert cart item",
            lambda: self.client.table("cart_items").insert({
                "user_id": user_id,
                "product_id": product_id,
                "quantity": quantity,
            }).execute(),
        )
        if not rows:
            raise GatewayError("Insert returned no cart row")
        return cart_item_from_row(rows[0])

    def upsert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> None:
        self._run(
            "upsert cart item",
            lambda: self.client.table("cart_items").upsert(
                {
                    "user_id": user_id,
                    "product_id": product_id,
                    "quantity": quantity,
                },
                on_conflict="user_id,product_id",
                ignore_duplicates=True,
            ).execute(),
        )

    def delete_cart_item(self, item_id: str) -> None:
        self._run(
            "delete cart item",
            lambda: self.client.table("cart_items")
            .delete()
            .eq("id", item_id)
            .execute(),
        )

    def clear_cart(self, user_id: str) -> None:
        self._run(
            "clear cart",
            lambda: self.client.table("cart_items")
            .delete()
            .eq("user_id", user_id)
            .execute(),
        )

    # ── Saved items ──────────────────────────────────────

    def list_saved_items(self, user_id: str) -> list[SavedItem]:
        rows = self._run(
            "select saved items",
            lambda: self.client.table("saved_items")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute(),
        )
        return [saved_item_from_row(r) for r in rows]

    def insert_saved_item(
        self, user_id: str, product_id: str,
    ) -> SavedItem:
        rows = self._run(
            "insert saved item",
            lambda: self.client.table("saved_items").insert({
                "user_id": user_id,
                "product_id": product_id,
            }).execute(),
        )
        if not rows:
            raise GatewayError("Insert returned no saved row")
        return saved_item_from_row(rows[0])

    def delete_saved_item(self, item_id: str) -> None:
        self._run(
            "delete saved item",
            lambda: self.client.table("saved_items")
            .delete()
            .eq("id", item_id)
            .execute(),
        )

    def delete_saved_for_product(
        self, user_id: str, product_id: str,
    ) -> None:
        self._run(
            "delete saved item for product",
            lambda: self.client.table("saved_items")
            .delete()
            .eq("user_id", user_id)
            .eq("product_id", product_id)
            .execute(),
        )

    # ── Interaction log ──────────────────────────────────

    def record_interaction(
        self, user_id: str, product_id: str, action: Action,
    ) -> None:
        self._run(
            "insert interaction",
            lambda: self.client.table("swipe_interactions").insert({
                "user_id": user_id,
                "product_id": product_id,
                "action": action,
            }).execute(),
        )

    def list_seller_interactions(
        self, seller_id: str,
    ) -> list[InteractionRecord]:
        rows = self._run(
            "select seller interactions",
            lambda: self.client.table("swipe_interactions")
            .select(_SELLER_INTERACTIONS_SELECT)
            .eq("products.seller_id", seller_id)
            .execute(),
        )
        return [interaction_from_row(r) for r in rows]
