"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    An authenticated principal derived from a verified session token.

    Built once by the session verifier and never patched afterwards.
    Route handlers receive it via dependency injection and the request
    gate stores it on ``request.state.identity``.
    """

    id: str = Field(..., description="Subject ID from the session token")
    email: Optional[str] = Field(None, description="Email claim as issued by the auth provider")
    name: Optional[str] = Field(None, description="Display name from the auth provider")
    picture: Optional[str] = Field(None, description="Avatar URL from the auth provider")
    expires_at: Optional[datetime] = Field(None, description="Session token expiry")

    # Raw verified token, forwarded only when a lookup must act as the caller
    token: Optional[str] = Field(None, repr=False, exclude=True)

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
