"""
Error hierarchy for marketplace failures.

Every error carries an HTTP status, a machine-readable code and a
user-facing message. The optional ``detail`` is diagnostic text that is
only returned to clients outside production.
"""

from typing import Any, Optional


class MarketplaceError(Exception):
    """Base class for all errors the API reports as structured responses."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __repr__(self):
        return f"<{self.__class__.__name__}(code={self.code}, message='{self.message}')>"


class ValidationError(MarketplaceError):
    """Malformed or missing input; the caller must fix the request."""
    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(MarketplaceError):
    """Uniqueness or state-transition violation."""
    status_code = 400
    code = "CONFLICT"


class AuthenticationError(MarketplaceError):
    """Missing session or bad credentials."""
    status_code = 401
    code = "AUTHENTICATION_ERROR"


class AuthorizationError(MarketplaceError):
    """Authenticated caller does not own the resource."""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(MarketplaceError):
    """Referenced entity does not exist."""
    status_code = 404
    code = "NOT_FOUND"


class InternalError(MarketplaceError):
    """Unexpected defect. Message is suppressed in production."""
    status_code = 500
    code = "INTERNAL_ERROR"
