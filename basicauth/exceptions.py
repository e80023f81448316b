"""Custom exceptions for BasicAuth.

Every exception carries a short human-readable ``message`` and an optional
``details`` dict. The Flask error handlers in ``basicauth.main`` map each
class to an HTTP status and a JSON error envelope.
"""


class BasicAuthError(Exception):
    """Base exception for all BasicAuth errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(BasicAuthError):
    """Request body is missing, malformed, or fails validation (400)."""


class AuthenticationError(BasicAuthError):
    """Bad credentials, bad security answer, or bad/expired/missing token (401)."""


class ResourceNotFound(BasicAuthError):
    """Requested user does not exist (404)."""


class ConflictError(BasicAuthError):
    """Username or email already registered (409)."""


class DatabaseError(BasicAuthError):
    """Storage failure (500)."""


class HashingError(BasicAuthError):
    """Password or security-answer hashing failed (500)."""


class ConfigurationError(BasicAuthError):
    """Fatal configuration problem detected at startup."""
