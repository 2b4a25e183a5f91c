# src/auth/session_context.py

"""Explicit session state handed to every controller."""

import logging
from collections.abc import Callable

from src.auth.session import Session, SessionProvider, Unsubscribe
from src.gateway.base_gateway import PersistenceGateway
from src.gateway.errors import AuthenticationError, SwipeShopError
from src.models.profile import Role

logger = logging.getLogger("swipeshop.auth.context")


class SessionContext:
    """Current session + cached profile role, kept fresh by subscription.

    Controllers receive the context at construction and read
    :meth:`require_user_id` at call time instead of touching a global.
    """

    def __init__(
        self,
        provider: SessionProvider,
        gateway: PersistenceGateway,
    ) -> None:
        self.provider = provider
        self.gateway = gateway
        self.session: Session | None = None
        self.role: Role | None = None
        self._listeners: list[Callable[[Session | None], None]] = []
        self._unsubscribe: Unsubscribe | None = None

    def start(self) -> None:
        """Read the current session and subscribe to later changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self.provider.on_session_change(
                self._on_change,
            )
        self.apply_session(self.provider.get_current_session())

    def stop(self) -> None:
        """Unsubscribe from the provider."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def add_listener(
        self, callback: Callable[[Session | None], None],
    ) -> None:
        """Call *callback* after every session change."""
        self._listeners.append(callback)

    @property
    def user_id(self) -> str | None:
        return self.session.user_id if self.session else None

    @property
    def is_seller(self) -> bool:
        return self.role == "seller"

    def require_user_id(self) -> str:
        """The signed-in identity; raises when signed out."""
        if self.session is None:
            raise AuthenticationError("Please sign in first")
        return self.session.user_id

    def refresh_role(self) -> Role | None:
        """Re-read the role from the caller's profile row."""
        if self.session is None:
            self.role = None
            return None
        try:
            profile = self.gateway.get_profile(self.session.user_id)
        except SwipeShopError as exc:
            logger.warning("Could not load profile role: %s", exc)
            profile = None
        self.role = profile.role if profile else None
        return self.role

    def apply_session(self, session: Session | None) -> None:
        self.session = session
        self.refresh_role()

    def _on_change(self, session: Session | None) -> None:
        logger.info(
            "Session changed: %s",
            session.email if session else "signed out",
        )
        self.apply_session(session)
        for listener in list(self._listeners):
            listener(session)
