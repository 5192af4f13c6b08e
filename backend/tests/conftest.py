"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import os

# Configure the process before any application module reads settings
TEST_SESSION_SECRET = "test-session-secret-for-testing-only"
os.environ["SESSION_SECRET"] = TEST_SESSION_SECRET
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-key"

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import AsyncMock, MagicMock, patch
import jwt  # PyJWT

from shared.config import Settings, get_settings
from shared.database import reset_client_cache
from shared.models import Identity
from modules.auth.service import reset_session_verifier
from api.dependencies import reset_container


SESSION_COOKIE = "next-auth.session-token"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_SESSION_SECRET,
    **claims,
) -> str:
    """
    Create a signed session token.

    Args:
        user_id: Subject to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing key
        claims: Extra claims to merge into the payload

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "name": "Test User",
        "picture": None,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def session_headers(token: str) -> dict[str, str]:
    """Request headers carrying a session cookie."""
    return {"cookie": f"{SESSION_COOKIE}={token}"}


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services before and after each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_session_verifier()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_session_verifier()
    reset_container()


@pytest.fixture(autouse=True)
def mock_supabase():
    """Never let a test reach a real Supabase project."""
    with patch("shared.database.create_client") as mock_create:
        mock_create.return_value = MagicMock()
        yield mock_create


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known session secret and no .env file."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SESSION_SECRET,
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-service-key",
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid session token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_cookies(auth_token: str) -> dict[str, str]:
    """Session cookie with a valid token."""
    return {SESSION_COOKIE: auth_token}


@pytest.fixture
def identity(test_user_id: str, auth_token: str) -> Identity:
    """A verified identity for the test user."""
    return Identity(id=test_user_id, email="test@example.com", token=auth_token)


@pytest.fixture
def profile_checker() -> AsyncMock:
    """Profile checker reporting an existing profile by default."""
    checker = AsyncMock()
    checker.has_profile.return_value = True
    return checker
