"""
Tests for the session authentication dependencies.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from typing import Optional

from api.middleware.auth import AuthError, get_current_user, get_optional_user
from shared.models import Identity
from tests.conftest import SESSION_COOKIE, create_test_token, session_headers


@pytest.fixture
def client() -> TestClient:
    """Bare app exposing the dependencies, without the gate middleware."""
    app = FastAPI()

    @app.get("/protected")
    async def protected(user: Identity = Depends(get_current_user)):
        return {"user_id": user.id, "email": user.email}

    @app.get("/optional")
    async def optional(user: Optional[Identity] = Depends(get_optional_user)):
        return {"user_id": user.id if user else None}

    return TestClient(app)


class TestGetCurrentUser:
    def test_session_cookie(self, client):
        response = client.get("/protected", headers=session_headers(create_test_token()))
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "test-user-123"
        assert data["email"] == "test@example.com"

    def test_secure_session_cookie(self, client):
        token = create_test_token(user_id="secure-user")
        response = client.get(
            "/protected",
            headers={"cookie": f"__Secure-{SESSION_COOKIE}={token}"},
        )
        assert response.status_code == 200
        assert response.json()["user_id"] == "secure-user"

    def test_bearer_token(self, client):
        response = client.get(
            "/protected",
            headers={"Authorization": f"Bearer {create_test_token()}"},
        )
        assert response.status_code == 200

    def test_missing_credentials(self, client):
        response = client.get("/protected")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["detail"] == "Authentication required"

    def test_expired_token(self, client):
        response = client.get("/protected", headers=session_headers(create_test_token(expired=True)))
        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_wrong_secret(self, client):
        token = create_test_token(secret="this-is-not-the-real-secret")
        response = client.get("/protected", headers=session_headers(token))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_reuses_gate_identity(self):
        """An identity already on request.state skips token validation."""
        identity = Identity(id="from-gate")
        request = AsyncMock()
        request.state.identity = identity
        verifier = AsyncMock()

        assert await get_current_user(request, verifier) is identity
        verifier.validate_token.assert_not_called()


class TestGetOptionalUser:
    def test_authenticated(self, client):
        response = client.get("/optional", headers=session_headers(create_test_token()))
        assert response.json()["user_id"] == "test-user-123"

    def test_anonymous(self, client):
        response = client.get("/optional")
        assert response.status_code == 200
        assert response.json()["user_id"] is None

    def test_invalid_token_is_anonymous(self, client):
        response = client.get("/optional", headers=session_headers("garbage"))
        assert response.status_code == 200
        assert response.json()["user_id"] is None


class TestAuthError:
    def test_format(self):
        error = AuthError("nope")
        assert error.status_code == 401
        assert error.detail == "nope"
        assert error.headers == {"WWW-Authenticate": "Bearer"}
