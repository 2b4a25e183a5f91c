# src/gateway/sqlite_gateway.py

"""Local SQLite implementation of the persistence gateway.

Ownership rules mirror the hosted row-level security policies: rows the
caller may not see are filtered out silently, writes on rows the caller
may not touch raise :class:`AuthorizationError`.
"""

import logging
import sqlite3
from typing import Any

from src.gateway.base_gateway import PersistenceGateway
from src.gateway.errors import (
    AuthenticationError,
    AuthorizationError,
    DuplicateKeyError,
    GatewayError,
)
from src.gateway.local_store import LocalStore, new_id, utc_now
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

logger = logging.getLogger("swipeshop.gateway.sqlite")

_PRODUCT_COLUMNS = (
    "id", "seller_id", "name", "description",
    "price", "image_url", "category", "created_at",
)
_UPDATABLE_PRODUCT_FIELDS: frozenset[str] = frozenset({
    "name", "description", "price", "image_url", "category",
})


def _product_join(row: sqlite3.Row, prefix: str = "p_") -> dict[str, Any] | None:
    """Pull the ``p_*`` columns of a LEFT JOIN into a nested dict."""
    if row[f"{prefix}id"] is None:
        return None
    return {col: row[f"{prefix}{col}"] for col in _PRODUCT_COLUMNS}


class SqliteGateway(PersistenceGateway):
    """Gateway over a :class:`LocalStore`."""

    def __init__(self, store: LocalStore) -> None:
        self.store = store
        self._conn = store.conn

    # ── Helpers ──────────────────────────────────────────

    def _uid(self) -> str:
        """The signed-in identity, required for every owned table."""
        uid = self.store.current_user_id
        if uid is None:
            raise AuthenticationError("Not signed in")
        return uid

    def _require_self(self, user_id: str, table: str) -> str:
        """Reject writes on behalf of another identity."""
        uid = self._uid()
        if user_id != uid:
            raise AuthorizationError(
                f"new row violates row-level security policy "
                f"for table \"{table}\""
            )
        return uid

    def _is_seller(self, uid: str) -> bool:
        row = self._conn.execute(
            "SELECT role FROM profiles WHERE id = ?", (uid,),
        ).fetchone()
        return row is not None and row["role"] == "seller"

    def _write(self, sql: str, params: tuple[Any, ...]) -> int:
        """Run one write statement and commit; map SQLite errors."""
        try:
            cur = self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            message = str(exc)
            if message.startswith("UNIQUE constraint failed"):
                raise DuplicateKeyError(
                    f"duplicate key value violates unique constraint "
                    f"({message.split(':', 1)[-1].strip()})"
                ) from exc
            raise GatewayError(message) from exc
        except sqlite3.Error as exc:
            self._conn.rollback()
            logger.error("SQLite write failed: %s", exc, exc_info=True)
            raise GatewayError(str(exc)) from exc
        return cur.rowcount

    def _read(
        self, sql: str, params: tuple[Any, ...] = (),
    ) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("SQLite read failed: %s", exc, exc_info=True)
            raise GatewayError(str(exc)) from exc

    # ── Profiles ─────────────────────────────────────────

    def upsert_profile(self, profile: Profile) -> Profile:
        self._require_self(profile.id, "profiles")
        self._write(
            "INSERT INTO profiles (id, email, role, created_at) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(id) DO UPDATE SET "
            "email = excluded.email, role = excluded.role",
            (profile.id, profile.email, profile.role, utc_now()),
        )
        stored = self.get_profile(profile.id)
        if stored is None:
            raise GatewayError(f"Profile {profile.id} was not stored")
        return stored

    def get_profile(self, user_id: str) -> Profile | None:
        uid = self._uid()
        if user_id != uid:
            return None
        rows = self._read(
            "SELECT * FROM profiles WHERE id = ?", (user_id,),
        )
        return profile_from_row(dict(rows[0])) if rows else None

    # ── Products ─────────────────────────────────────────

    def list_products(
        self, seller_id: str | None = None,
    ) -> list[Product]:
        if seller_id is None:
            rows = self._read(
                "SELECT * FROM products "
                "ORDER BY created_at DESC, rowid DESC",
            )
        else:
            rows = self._read(
                "SELECT * FROM products WHERE seller_id = ? "
                "ORDER BY created_at DESC, rowid DESC",
                (seller_id,),
            )
        return [product_from_row(dict(r)) for r in rows]

    def get_products(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        marks = ", ".join("?" for _ in product_ids)
        rows = self._read(
            f"SELECT * FROM products WHERE id IN ({marks})",
            tuple(product_ids),
        )
        return [product_from_row(dict(r)) for r in rows]

    def insert_product(self, product: Product) -> Product:
        uid = self._require_self(product.seller_id, "products")
        if not self._is_seller(uid):
            raise AuthorizationError("Only sellers can add products")
        product_id = product.id or new_id()
        created = utc_now()
        self._write(
            "INSERT INTO products (id, seller_id, name, description, "
            "price, image_url, category, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                product_id, uid, product.name, product.description,
                product.price, product.image_url, product.category,
                created,
            ),
        )
        logger.info("Product %s inserted for seller %s", product_id, uid)
        rows = self._read(
            "SELECT * FROM products WHERE id = ?", (product_id,),
        )
        return product_from_row(dict(rows[0]))

    def update_product(
        self,
        product_id: str,
        seller_id: str,
        fields: dict[str, Any],
    ) -> Product | None:
        uid = self._uid()
        if seller_id != uid or not self._is_seller(uid):
            return None
        unknown = set(fields) - _UPDATABLE_PRODUCT_FIELDS
        if unknown:
            raise GatewayError(
                f"Unknown product fields: {', '.join(sorted(unknown))}"
            )
        if not fields:
            rows = self._read(
                "SELECT * FROM products WHERE id = ? AND seller_id = ?",
                (product_id, uid),
            )
            return product_from_row(dict(rows[0])) if rows else None
        assignments = ", ".join(f"{name} = ?" for name in fields)
        changed = self._write(
            f"UPDATE products SET {assignments} "
            "WHERE id = ? AND seller_id = ?",
            (*fields.values(), product_id, uid),
        )
        if not changed:
            return None
        rows = self._read(
            "SELECT * FROM products WHERE id = ?", (product_id,),
        )
        return product_from_row(dict(rows[0]))

    def delete_product(self, product_id: str, seller_id: str) -> bool:
        uid = self._uid()
        if seller_id != uid or not self._is_seller(uid):
            return False
        deleted = self._write(
            "DELETE FROM products WHERE id = ? AND seller_id = ?",
            (product_id, uid),
        )
        return deleted > 0

    # ── Cart ─────────────────────────────────────────────

    def list_cart_items(self, user_id: str) -> list[CartItem]:
        uid = self._uid()
        if user_id != uid:
            return []
        rows = self._read(
            "SELECT c.*, "
            "       p.id AS p_id, p.seller_id AS p_seller_id, "
            "       p.name AS p_name, p.description AS p_description, "
            "       p.price AS p_price, p.image_url AS p_image_url, "
            "       p.category AS p_category, "
            "       p.created_at AS p_created_at "
            "FROM cart_items c "
            "LEFT JOIN products p ON p.id = c.product_id "
            "WHERE c.user_id = ? "
            "ORDER BY c.created_at ASC, c.rowid ASC",
            (uid,),
        )
        items: list[CartItem] = []
        for r in rows:
            data = dict(r)
            data["products"] = _product_join(r)
            items.append(cart_item_from_row(data))
        return items

    def find_cart_item(
        self, user_id: str, product_id: str,
    ) -> CartItem | None:
        uid = self._uid()
        if user_id != uid:
            return None
        rows = self._read(
            "SELECT * FROM cart_items "
            "WHERE user_id = ? AND product_id = ? LIMIT 1",
            (uid, product_id),
        )
        return cart_item_from_row(dict(rows[0])) if rows else None

    def insert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> CartItem:
        uid = self._require_self(user_id, "cart_items")
        item_id = new_id()
        self._write(
            "INSERT INTO cart_items "
            "(id, user_id, product_id, quantity, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (item_id, uid, product_id, quantity, utc_now()),
        )
        rows = self._read(
            "SELECT * FROM cart_items WHERE id = ?", (item_id,),
        )
        return cart_item_from_row(dict(rows[0]))

    def upsert_cart_item(
        self, user_id: str, product_id: str, quantity: int = 1,
    ) -> None:
        uid = self._require_self(user_id, "cart_items")
        self._write(
            "INSERT INTO cart_items "
            "(id, user_id, product_id, quantity, created_at) "
            "VALUES (?, ?, ?, ?, ?) "
            "ON CONFLICT(user_id, product_id) DO NOTHING",
            (new_id(), uid, product_id, quantity, utc_now()),
        )

    def delete_cart_item(self, item_id: str) -> None:
        uid = self._uid()
        self._write(
            "DELETE FROM cart_items WHERE id = ? AND user_id = ?",
            (item_id, uid),
        )

    def clear_cart(self, user_id: str) -> None:
        uid = self._uid()
        if user_id != uid:
            return
        self._write(
            "DELETE FROM cart_items WHERE user_id = ?", (uid,),
        )

    # ── Saved items ──────────────────────────────────────

    def list_saved_items(self, user_id: str) -> list[SavedItem]:
        uid = self._uid()
        if user_id != uid:
            return []
        rows = self._read(
            "SELECT * FROM saved_items WHERE user_id = ? "
            "ORDER BY created_at DESC, rowid DESC",
            (uid,),
        )
        return [saved_item_from_row(dict(r)) for r in rows]

    def insert_saved_item(
        self, user_id: str, product_id: str,
    ) -> SavedItem:
        uid = self._require_self(user_id, "saved_items")
        item_id = new_id()
        self._write(
            "INSERT INTO saved_items "
            "(id, user_id, product_id, created_at) "
            "VALUES (?, ?, ?, ?)",
            (item_id, uid, product_id, utc_now()),
        )
        rows = self._read(
            "SELECT * FROM saved_items WHERE id = ?", (item_id,),
        )
        return saved_item_from_row(dict(rows[0]))

    def delete_saved_item(self, item_id: str) -> None:
        uid = self._uid()
        self._write(
            "DELETE FROM saved_items WHERE id = ? AND user_id = ?",
            (item_id, uid),
        )

    def delete_saved_for_product(
        self, user_id: str, product_id: str,
    ) -> None:
        uid = self._uid()
        if user_id != uid:
            return
        self._write(
            "DELETE FROM saved_items "
            "WHERE user_id = ? AND product_id = ?",
            (uid, product_id),
        )

    # ── Interaction log ──────────────────────────────────

    def record_interaction(
        self, user_id: str, product_id: str, action: Action,
    ) -> None:
        uid = self._require_self(user_id, "swipe_interactions")
        self._write(
            "INSERT INTO swipe_interactions "
            "(id, user_id, product_id, action, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (new_id(), uid, product_id, action, utc_now()),
        )

    def list_seller_interactions(
        self, seller_id: str,
    ) -> list[InteractionRecord]:
        uid = self._uid()
        if seller_id != uid:
            return []
        rows = self._read(
            "SELECT s.*, p.seller_id AS p_seller_id, p.price AS p_price "
            "FROM swipe_interactions s "
            "JOIN products p ON p.id = s.product_id "
            "WHERE p.seller_id = ? "
            "ORDER BY s.created_at ASC, s.rowid ASC",
            (uid,),
        )
        records: list[InteractionRecord] = []
        for r in rows:
            data = dict(r)
            data["products"] = {
                "seller_id": r["p_seller_id"],
                "price": r["p_price"],
            }
            records.append(interaction_from_row(data))
        return records

    def close(self) -> None:
        self.store.close()
