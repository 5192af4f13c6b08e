"""
Profile module interface.

The request gate depends on IProfileChecker only, so the lookup can run
in-process or against the HTTP check endpoint without the gate knowing.
"""

from typing import Protocol, runtime_checkable

from shared.models import Identity


@runtime_checkable
class IProfileChecker(Protocol):
    """Interface for the profile-completeness lookup."""

    async def has_profile(self, identity: Identity) -> bool:
        """
        Check whether the given signed-in user has created a profile.

        The identity must come from a verified session, never from
        request parameters.

        Returns:
            True if a profile exists, False if it does not

        Raises:
            ProfileLookupError: If existence could not be determined
        """
        ...
