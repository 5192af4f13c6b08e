"""
User response models.
"""

from pydantic import BaseModel
from typing import Optional


class CurrentUserResponse(BaseModel):
    """The signed-in user as seen by the API."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None
    has_profile: bool
