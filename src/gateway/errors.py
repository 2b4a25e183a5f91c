# src/gateway/errors.py

"""Error hierarchy shared by backends, controllers and screens.

Backends translate their native failures into these classes so that the
screens only ever catch :class:`SwipeShopError`.  The message is what the
user sees; there are no error codes.
"""


class SwipeShopError(Exception):
    """Base class for every failure surfaced to the user."""


class AuthenticationError(SwipeShopError):
    """Sign-in / sign-up failed, or an action needs a session."""


class AuthorizationError(SwipeShopError):
    """The acting identity does not own the row it tried to touch."""


class GatewayError(SwipeShopError):
    """A read or write against the persistence layer failed."""


class DuplicateKeyError(GatewayError):
    """A unique constraint rejected the write."""


class ValidationError(SwipeShopError):
    """Form input could not be turned into a valid row."""
