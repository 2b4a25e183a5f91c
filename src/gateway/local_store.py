# src/gateway/local_store.py

"""SQLite file holding the same tables as the hosted backend.

The local backend is a self-contained stand-in for the hosted project:
the gateway and the session provider share one :class:`LocalStore`, and
the provider records which identity is signed in so the gateway can apply
the ownership rules.
"""

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from src.config.settings import Settings

logger = logging.getLogger("swipeshop.local_store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS accounts (
    id            TEXT PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE COLLATE NOCASE,
    password_hash TEXT NOT NULL,
    salt          TEXT NOT NULL,
    metadata      TEXT NOT NULL DEFAULT '{}',
    created_at    TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS profiles (
    id         TEXT PRIMARY KEY
               REFERENCES accounts(id) ON DELETE CASCADE,
    email      TEXT NOT NULL,
    role       TEXT NOT NULL DEFAULT 'user'
               CHECK (role IN ('user', 'seller')),
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS products (
    id          TEXT PRIMARY KEY,
    seller_id   TEXT NOT NULL
                REFERENCES profiles(id) ON DELETE CASCADE,
    name        TEXT NOT NULL,
    description TEXT,
    price       REAL NOT NULL,
    image_url   TEXT,
    category    TEXT,
    created_at  TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS cart_items (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL
               REFERENCES profiles(id) ON DELETE CASCADE,
    product_id TEXT NOT NULL
               REFERENCES products(id) ON DELETE CASCADE,
    quantity   INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    UNIQUE (user_id, product_id)
);

CREATE TABLE IF NOT EXISTS saved_items (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL,
    product_id TEXT NOT NULL
               REFERENCES products(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL,
    UNIQUE (user_id, product_id)
);

CREATE TABLE IF NOT EXISTS swipe_interactions (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL
               REFERENCES profiles(id) ON DELETE CASCADE,
    product_id TEXT NOT NULL
               REFERENCES products(id) ON DELETE CASCADE,
    action     TEXT NOT NULL
               CHECK (action IN ('left', 'right', 'purchased')),
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_products_seller
    ON products(seller_id, created_at);
CREATE INDEX IF NOT EXISTS idx_interactions_product
    ON swipe_interactions(product_id);
"""


def new_id() -> str:
    """Row id in the same shape as gen_random_uuid()."""
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


class LocalStore:
    """Shared SQLite connection plus the signed-in identity."""

    def __init__(self, db_path: Path | None = None) -> None:
        path = db_path or Settings.LOCAL_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys=ON")
        if str(path) != ":memory:":
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.executescript(_SCHEMA)
        self.current_user_id: str | None = None
        logger.debug("LocalStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()
