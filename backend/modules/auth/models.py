"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SessionTokenPayload(BaseModel):
    """
    Decoded session token payload.

    Matches the claims the auth provider writes into its JWT session
    cookie (subject, profile basics, issue/expiry timestamps).
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    name: Optional[str] = Field(None, description="Display name")
    picture: Optional[str] = Field(None, description="Avatar URL")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")

    model_config = {"extra": "ignore"}
