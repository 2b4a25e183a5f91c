# src/gateway/base_gateway.py

"""Abstract persistence gateway over the hosted tables."""

from abc import ABC, abstractmethod
from typing import Any

from src.models.collection_item import CartItem, SavedItem
from src.models.interaction import Action, InteractionRecord
from src.models.product import Product
from src.models.profile import Profile


class PersistenceGateway(ABC):
    """Authenticated CRUD over profiles, products, cart, saved items
    and the swipe interaction log.

    Implementations enforce row-level ownership themselves (Supabase via
    its policies, the local store in code); callers never re-check it.
    All methods raise :class:`~src.gateway.errors.SwipeShopError`
    subclasses on failure.
    """

    # ── Profiles ─────────────────────────────────────────

    @abstractmethod
    def upsert_profile(self, profile: Profile) -> Profile:
        """Create or replace the caller's profile row."""
        ...

    @abstractmethod
    def get_profile(self, user_id: str) -> Profile | None:
        """Return the profile for *user_id*, or ``None``."""
        ...

    # ── Products ─────────────────────────────────────────

    @abstractmethod
    def list_products(
        self, seller_id: str | None = None,
    ) -> list[Product]:
        """All products (or one seller's), newest first."""
        ...

    @abstractmethod
    def get_products(self, product_ids: list[str]) -> list[Product]:
        """Products whose id is in *product_ids* (missing ids skipped)."""
        ...

    @abstractmethod
    def insert_product(self, product: Product) -> Product:
        """Insert a listing owned by ``product.seller_id``."""
        ...

    @abstractmethod
    def update_product(
        self,
        product_id: str,
        seller_id: str,
        fields: dict[str, Any],
    ) -> Product | None:
        """Update an owned listing; ``None`` when nothing matched."""
        ...

    @abstractmethod
    def delete_product(self, product_id: str, seller_id: str) -> bool:
        """Delete an owned listing; ``False`` when nothing matched."""
        ...

    # ── Cart ─────────────────────────────────────────────

    @abstractmethod
    def list_cart_items(self, user_id: str) -> list[CartItem]:
        """The user's cart rows with their products joined."""
        ...

    @abstractmethod
    def find_cart_item(
        self, user_id: str, product_id: str,
    ) -> CartItem | None:
        """The cart row for (user, product), if any."""
        ...

    @abstractmethod
    def insert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> CartItem:
        """Plain insert; raises DuplicateKeyError on an existing pair."""
        ...

    @abstractmethod
    def upsert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> None:
        """Insert unless the pair exists; an existing row is untouched."""
        ...

    @abstractmethod
    def delete_cart_item(self, item_id: str) -> None:
        """Delete one cart row by id."""
        ...

    @abstractmethod
    def clear_cart(self, user_id: str) -> None:
        """Delete every cart row of *user_id*."""
        ...

    # ── Saved items ──────────────────────────────────────

    @abstractmethod
    def list_saved_items(self, user_id: str) -> list[SavedItem]:
        """The user's saved rows, newest first (products not joined)."""
        ...

    @abstractmethod
    def insert_saved_item(
        self, user_id: str, product_id: str,
    ) -> SavedItem:
        """Plain insert; raises DuplicateKeyError on an existing pair."""
        ...

    @abstractmethod
    def delete_saved_item(self, item_id: str) -> None:
        """Delete one saved row by id."""
        ...

    @abstractmethod
    def delete_saved_for_product(
        self, user_id: str, product_id: str,
    ) -> None:
        """Delete the saved row(s) for (user, product)."""
        ...

    # ── Interaction log ──────────────────────────────────

    @abstractmethod
    def record_interaction(
        self, user_id: str, product_id: str, action: Action,
    ) -> None:
        """Append one interaction record."""
        ...

    @abstractmethod
    def list_seller_interactions(
        self, seller_id: str,
    ) -> list[InteractionRecord]:
        """Records on *seller_id*'s products, with product price joined."""
        ...

    def close(self) -> None:
        """Release backend resources."""
