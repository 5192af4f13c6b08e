"""
Shared infrastructure for the ZoškaGram backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Root logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings, validate_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ZoskaGramError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
)
from .models import Identity

__all__ = [
    "Settings",
    "get_settings",
    "validate_settings",
    "get_supabase_client",
    "reset_client_cache",
    "ZoskaGramError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "ExternalServiceError",
    "Identity",
]
