"""
Profiles module.

Answers whether the signed-in user has completed their profile.

Public API:
- IProfileChecker: Interface for the profile-completeness lookup
- ProfileRecord, ProfileCheckResponse: Models
- ProfileLookupError: Raised when existence could not be determined
"""

from .interfaces import IProfileChecker
from .models import ProfileRecord, ProfileCheckResponse
from .exceptions import ProfileLookupError

__all__ = [
    "IProfileChecker",
    "ProfileRecord",
    "ProfileCheckResponse",
    "ProfileLookupError",
]
