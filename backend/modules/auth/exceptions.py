"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid, malformed, or badly signed."""

    def __init__(self, message: str = "Invalid session token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Session token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")
