# src/services/account_service.py

"""Sign-in, sign-up and sign-out flows with profile bootstrap."""

import logging

from src.auth.session import Session, SessionProvider
from src.auth.session_context import SessionContext
from src.config.settings import Settings
from src.gateway.errors import AuthenticationError
from src.models.profile import Profile, Role

logger = logging.getLogger("swipeshop.account")


def landing_route(role: Role | None) -> str:
    """Where a freshly signed-in identity goes."""
    return "/seller" if role == "seller" else "/swipe"


def _is_invalid_credentials(exc: AuthenticationError) -> bool:
    return "invalid" in str(exc).lower()


class AccountService:
    """Account flows used by the auth screen and the CLI."""

    def __init__(self, context: SessionContext) -> None:
        self.context = context

    @property
    def provider(self) -> SessionProvider:
        return self.context.provider

    def sign_in(self, email: str, password: str) -> str:
        """Sign in and return the landing route.

        Unknown credentials are provisioned as a new account when
        ``Settings.AUTO_PROVISION_ACCOUNTS`` is on.
        """
        email = email.strip()
        try:
            session = self.provider.sign_in(email, password)
        except AuthenticationError as exc:
            if not (
                Settings.AUTO_PROVISION_ACCOUNTS
                and _is_invalid_credentials(exc)
            ):
                raise
            logger.info("Provisioning account for %s", email)
            role = self._default_role(email)
            created = self.provider.sign_up(
                email, password, {"role": role},
            )
            session = created or self.provider.sign_in(email, password)

        self.context.apply_session(session)
        role = self._ensure_profile(session)
        self.context.role = role
        return landing_route(role)

    def sign_up(self, email: str, password: str, role: Role = "user") -> str:
        """Create an account with *role*; returns the landing route."""
        email = email.strip()
        session = self.provider.sign_up(email, password, {"role": role})
        if session is None:
            raise AuthenticationError(
                "Check your email to confirm the account, then sign in"
            )
        self.context.apply_session(session)
        self.context.gateway.upsert_profile(
            Profile(id=session.user_id, email=session.email, role=role),
        )
        self.context.role = role
        logger.info("Signed up %s as %s", email, role)
        return landing_route(role)

    def sign_out(self) -> None:
        self.provider.sign_out()

    # ── Profile bootstrap ────────────────────────────────

    @staticmethod
    def _default_role(email: str) -> Role:
        if email.lower() == Settings.DEMO_SELLER_EMAIL.lower():
            return "seller"
        return "user"

    def _ensure_profile(self, session: Session) -> Role:
        """Create a missing profile; an existing one keeps its role.

        The demo seller account is the only one upgraded in place.
        """
        gateway = self.context.gateway
        existing = gateway.get_profile(session.user_id)
        wanted = self._default_role(session.email)

        if existing is None:
            meta_role = session.metadata.get("role")
            role: Role = "seller" if "seller" in (meta_role, wanted) else "user"
            gateway.upsert_profile(
                Profile(id=session.user_id, email=session.email, role=role),
            )
            logger.info("Created %s profile for %s", role, session.email)
            return role

        if wanted == "seller" and existing.role != "seller":
            gateway.upsert_profile(
                Profile(
                    id=session.user_id, email=session.email, role="seller",
                ),
            )
            logger.info("Upgraded %s to seller", session.email)
            return "seller"

        return existing.role
