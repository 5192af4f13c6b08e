"""
Base exception classes for the ZoškaGram backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class ZoskaGramError(Exception):
    """
    Base exception for all ZoškaGram errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ZoskaGramError):
    """Resource not found."""

    pass


class ValidationError(ZoskaGramError):
    """Input validation failed."""

    pass


class AuthenticationError(ZoskaGramError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ZoskaGramError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(ZoskaGramError):
    """Required configuration is missing or inconsistent."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting} if setting else None,
        )
        self.setting = setting


class ExternalServiceError(ZoskaGramError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
