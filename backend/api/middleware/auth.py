"""
Session authentication dependencies.

Resolves the caller's Identity from the session cookie (or a bearer
token) for API routes. API routes answer 401 instead of redirecting.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status

from shared.models import Identity
from shared.exceptions import AuthenticationError
from modules.auth.interfaces import ISessionVerifier
from ..dependencies import get_session_verifier


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    request: Request,
    verifier: ISessionVerifier = Depends(get_session_verifier),
) -> Identity:
    """
    Dependency that requires authentication.

    Reuses the identity the gate middleware already resolved, if any.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Identity = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    identity = getattr(request.state, "identity", None)
    if identity is not None:
        return identity

    token = verifier.extract_token(request.cookies, request.headers.get("authorization"))
    try:
        return await verifier.validate_token(token)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_optional_user(
    request: Request,
    verifier: ISessionVerifier = Depends(get_session_verifier),
) -> Optional[Identity]:
    """
    Dependency that optionally extracts the user if authenticated.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[Identity] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    try:
        return await get_current_user(request, verifier)
    except AuthError:
        return None
