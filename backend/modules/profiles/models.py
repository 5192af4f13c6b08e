"""
Profile module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ProfileRecord(BaseModel):
    """
    Minimal per-user profile.

    Created by the profile-setup form; the request gate only ever asks
    whether one exists for the signed-in user.
    """

    id: str = Field(..., description="Profile UUID")
    user_id: str = Field(..., description="Owner's subject ID")
    username: Optional[str] = Field(None, description="Public handle")
    name: Optional[str] = Field(None, description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    created_at: Optional[datetime] = Field(None, description="Creation time")


class ProfileCheckResponse(BaseModel):
    """Response body of the profile existence check."""

    has_profile: bool
