"""API models package."""

from .errors import ErrorResponse
from .user import CurrentUserResponse

__all__ = [
    "ErrorResponse",
    "CurrentUserResponse",
]
