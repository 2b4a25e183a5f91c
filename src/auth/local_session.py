# src/auth/local_session.py

"""Password accounts stored in the local SQLite file."""

import hashlib
import hmac
import json
import logging
import secrets
import sqlite3
from typing import Any

from src.auth.session import Session, SessionProvider
from src.gateway.errors import AuthenticationError
from src.gateway.local_store import LocalStore, new_id, utc_now

logger = logging.getLogger("swipeshop.auth.local")

_PBKDF2_ROUNDS = 200_000
_MIN_PASSWORD_LENGTH = 6


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        bytes.fromhex(salt),
        _PBKDF2_ROUNDS,
    )
    return digest.hex()


class LocalSessionProvider(SessionProvider):
    """Session provider over the ``accounts`` table of a LocalStore.

    Signing up also creates the profile row with the role found in the
    metadata, like the hosted project's new-user trigger does.
    """

    def __init__(self, store: LocalStore) -> None:
        super().__init__()
        self.store = store
        self._session: Session | None = None

    def get_current_session(self) -> Session | None:
        return self._session

    def _activate(self, session: Session | None) -> None:
        self._session = session
        self.store.current_user_id = session.user_id if session else None
        self._emit(session)

    def sign_in(self, email: str, password: str) -> Session:
        row = self.store.conn.execute(
            "SELECT id, email, password_hash, salt, metadata "
            "FROM accounts WHERE email = ?",
            (email.strip(),),
        ).fetchone()
        if row is None or not hmac.compare_digest(
            row["password_hash"], _hash_password(password, row["salt"]),
        ):
            logger.info("Rejected sign-in for %s", email)
            raise AuthenticationError("Invalid login credentials")

        session = Session(
            user_id=row["id"],
            email=row["email"],
            access_token=secrets.token_urlsafe(24),
            metadata=json.loads(row["metadata"] or "{}"),
        )
        logger.info("Signed in %s (%s)", session.email, session.user_id)
        self._activate(session)
        return session

    def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> Session | None:
        email = email.strip()
        if not email or "@" not in email:
            raise AuthenticationError("Unable to validate email address")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise AuthenticationError(
                f"Password should be at least "
                f"{_MIN_PASSWORD_LENGTH} characters"
            )

        meta = dict(metadata or {})
        role = "seller" if meta.get("role") == "seller" else "user"
        user_id = new_id()
        salt = secrets.token_hex(16)
        now = utc_now()
        try:
            with self.store.conn:
                self.store.conn.execute(
                    "INSERT INTO accounts "
                    "(id, email, password_hash, salt, metadata, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        user_id, email, _hash_password(password, salt),
                        salt, json.dumps(meta), now,
                    ),
                )
                self.store.conn.execute(
                    "INSERT INTO profiles (id, email, role, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    (user_id, email, role, now),
                )
        except sqlite3.IntegrityError as exc:
            raise AuthenticationError("User already registered") from exc

        logger.info("Registered %s as %s", email, role)
        session = Session(
            user_id=user_id,
            email=email,
            access_token=secrets.token_urlsafe(24),
            metadata=meta,
        )
        self._activate(session)
        return session

    def sign_out(self) -> None:
        if self._session is not None:
            logger.info("Signed out %s", self._session.email)
        self._activate(None)
