"""
Error taxonomy for profile operations.

Each error carries the HTTP status the API layer reports it with; the
backend registers a single handler for ``ProfileServiceError``.
"""


class ProfileServiceError(Exception):
    """Base class for expected failures of profile operations."""

    status_code = 500
    default_message = "Profile operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotAuthenticatedError(ProfileServiceError):
    """The caller has no valid session."""

    status_code = 401
    default_message = "Not authenticated"


class NotAuthorizedError(ProfileServiceError):
    """The entity exists but belongs to another user's profile."""

    status_code = 403
    default_message = "Not authorized"


class NotFoundError(ProfileServiceError):
    status_code = 404
    default_message = "Not found"


class ProfileExistsError(ProfileServiceError):
    status_code = 409
    default_message = "Profile already exists"


class FormValidationError(ProfileServiceError):
    """A submitted form field could not be parsed."""

    status_code = 422
    default_message = "Invalid form data"

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Invalid value for '{field}'")


class UpstreamError(ProfileServiceError):
    """The identity provider, storage or media host call failed."""

    status_code = 502
    default_message = "Upstream service failed"


class MediaHostError(UpstreamError):
    default_message = "Media host request failed"


__all__ = [
    "ProfileServiceError",
    "NotAuthenticatedError",
    "NotAuthorizedError",
    "NotFoundError",
    "ProfileExistsError",
    "FormValidationError",
    "UpstreamError",
    "MediaHostError",
]
