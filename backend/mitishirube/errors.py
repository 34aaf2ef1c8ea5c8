"""Error taxonomy shared by the auth layer and the content store.

Every error carries the HTTP status it maps to and a message that is safe to
return to the caller. The handlers in ``mitishirube.main`` turn them into the
``{"error": message}`` envelope.
"""
from typing import Optional


class MitishirubeError(Exception):
    status_code = 500
    default_message = "failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MitishirubeError):
    """Missing or malformed required fields."""

    status_code = 400
    default_message = "missing fields"


class AuthenticationError(MitishirubeError):
    """No credential, or one that does not resolve to an identity."""

    status_code = 401
    default_message = "Unauthorized. Please login."


class InvalidTokenError(AuthenticationError):
    """A self-issued token that is malformed, expired or badly signed."""

    status_code = 403
    default_message = "Invalid or expired token"


class AuthorizationError(MitishirubeError):
    """A valid identity whose role is below what the operation needs."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(MitishirubeError):
    status_code = 404
    default_message = "not found"


class ConflictError(MitishirubeError):
    # Duplicate ids are reported like any other storage failure.
    status_code = 500
    default_message = "failed (duplicate id?)"


class StorageError(MitishirubeError):
    status_code = 500
    default_message = "failed"
