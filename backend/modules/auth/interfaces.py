"""
Authentication module interface.

Other modules should depend on ISessionVerifier, not the concrete implementation.
This enables testing with mocks and swapping the token format later.
"""

from typing import Mapping, Optional, Protocol, runtime_checkable

from shared.models import Identity


@runtime_checkable
class ISessionVerifier(Protocol):
    """
    Interface for session token verification.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: Optional[str]) -> Identity:
        """
        Validate a session token and return the identity it carries.

        Args:
            token: Signed session token from the session cookie or bearer header

        Returns:
            Identity built from the token claims

        Raises:
            AuthenticationError: If the token is missing, invalid or expired
        """
        ...

    def extract_token(
        self,
        cookies: Mapping[str, str],
        authorization: Optional[str] = None,
    ) -> Optional[str]:
        """
        Pick the session token out of request cookies or an Authorization header.

        Returns:
            The raw token, or None if the request carries none
        """
        ...

    async def verify(self, headers: Mapping[str, str]) -> Optional[Identity]:
        """
        Resolve the identity for a request from its headers.

        Never raises for bad credentials: a missing, malformed, expired or
        badly signed token yields None.
        """
        ...
