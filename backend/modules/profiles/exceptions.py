"""
Profile module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class ProfileLookupError(ExternalServiceError):
    """
    Raised when profile existence could not be determined.

    Covers database errors, HTTP errors, unexpected status codes and
    timeouts. It never means "no profile".
    """

    def __init__(self, reason: str, service: str = "profiles", user_id: Optional[str] = None):
        super().__init__(
            f"Profile lookup failed: {reason}",
            service=service,
            code="PROFILE_LOOKUP_FAILED",
            details={"user_id": user_id} if user_id else None,
        )
        self.reason = reason
