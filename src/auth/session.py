# src/auth/session.py

"""Session model and the abstract session provider."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("swipeshop.auth")


@dataclass
class Session:
    """An authenticated identity as issued by the provider."""

    user_id: str
    email: str
    access_token: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


SessionListener = Callable[[Session | None], None]
Unsubscribe = Callable[[], None]


class SessionProvider(ABC):
    """Issues sessions and tells subscribers when they change.

    Subclasses call :meth:`_emit` after every sign-in, sign-up and
    sign-out; listeners may be invoked from any thread.
    """

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []
        self._listeners_lock = threading.Lock()

    def on_session_change(self, callback: SessionListener) -> Unsubscribe:
        """Register *callback*; the returned function removes it."""
        with self._listeners_lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, session: Session | None) -> None:
        """Notify every listener; a failing listener does not stop others."""
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(session)
            except Exception:
                logger.error(
                    "Session listener %r failed", listener, exc_info=True,
                )

    @abstractmethod
    def get_current_session(self) -> Session | None:
        """The active session, or ``None`` when signed out."""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Session:
        """Password sign-in; raises AuthenticationError on failure."""
        ...

    @abstractmethod
    def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> Session | None:
        """Create an account; returns a session when one is issued."""
        ...

    @abstractmethod
    def sign_out(self) -> None:
        """End the active session."""
        ...
