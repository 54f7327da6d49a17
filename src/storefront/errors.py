"""Exceptions raised by storefront operations.

Field-level input problems use ``protean.exceptions.ValidationError``. The
classes here cover the remaining failure kinds. Each carries a human readable
message, which the API layer returns to the caller unchanged.
"""


class StorefrontError(Exception):
    """Base class for storefront failures that map onto an HTTP status."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StorefrontError):
    """A referenced product, user or order does not exist."""

    status_code = 404


class Forbidden(StorefrontError):
    """The actor is authenticated but not allowed to do this."""

    status_code = 403


class InvalidState(StorefrontError):
    """The operation is not allowed in the target's current state."""

    status_code = 400


class Unauthenticated(StorefrontError):
    """No valid credentials were presented."""

    status_code = 401
