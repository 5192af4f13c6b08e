"""
Authentication module.

Verifies signed session tokens and turns them into Identity values.

Public API:
- ISessionVerifier: Interface for session verification
- SessionTokenPayload: Decoded token claims
- Auth exceptions: InvalidTokenError, ExpiredTokenError, MissingTokenError
"""

from .interfaces import ISessionVerifier
from .models import SessionTokenPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

__all__ = [
    # Interface
    "ISessionVerifier",
    # Models
    "SessionTokenPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
]
