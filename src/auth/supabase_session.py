# src/auth/supabase_session.py

"""Session provider backed by Supabase Auth."""

import logging
from typing import Any

from supabase import AuthError, Client

from src.auth.session import Session, SessionProvider
from src.gateway.errors import AuthenticationError

logger = logging.getLogger("swipeshop.auth.supabase")


def _to_session(raw: Any) -> Session | None:
    """Convert a supabase-py session object into our Session."""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    user = raw.user
    return Session(
        user_id=str(user.id),
        email=user.email or "",
        access_token=raw.access_token or "",
        metadata=dict(user.user_metadata or {}),
    )


class SupabaseSessionProvider(SessionProvider):
    """Wraps ``client.auth``; auth events are re-broadcast to listeners."""

    def __init__(self, client: Client) -> None:
        super().__init__()
        self.client = client
        self._subscription = client.auth.on_auth_state_change(
            self._on_auth_event,
        )

    def _on_auth_event(self, event: Any, raw_session: Any) -> None:
        logger.debug("Auth event %s", event)
        self._emit(_to_session(raw_session))

    def get_current_session(self) -> Session | None:
        try:
            return _to_session(self.client.auth.get_session())
        except AuthError as exc:
            logger.warning("Could not read session: %s", exc)
            return None

    def sign_in(self, email: str, password: str) -> Session:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password},
            )
        except AuthError as exc:
            logger.info("Rejected sign-in for %s: %s", email, exc)
            raise AuthenticationError(str(exc)) from exc

        session = _to_session(response.session)
        if session is None:
            raise AuthenticationError("Sign-in returned no session")
        return session

    def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> Session | None:
        try:
            response = self.client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": dict(metadata or {})},
            })
        except AuthError as exc:
            logger.info("Rejected sign-up for %s: %s", email, exc)
            raise AuthenticationError(str(exc)) from exc
        # No session when the project requires email confirmation
        return _to_session(response.session)

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except AuthError as exc:
            logger.warning("Sign-out failed: %s", exc)
            raise AuthenticationError(str(exc)) from exc

    def close(self) -> None:
        """Drop the auth-state subscription."""
        self._subscription.unsubscribe()
