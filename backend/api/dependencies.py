"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ISessionVerifier
    from modules.gate.service import RequestGate
    from modules.profiles.interfaces import IProfileChecker
    from modules.profiles.service import ProfileService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._session_verifier: "ISessionVerifier | None" = None
        self._profile_service: "ProfileService | None" = None
        self._profile_checker: "IProfileChecker | None" = None
        self._request_gate: "RequestGate | None" = None

    @property
    def auth(self) -> "ISessionVerifier":
        """Get the session verifier instance."""
        if self._session_verifier is None:
            from modules.auth.service import get_session_verifier
            self._session_verifier = get_session_verifier()
        return self._session_verifier

    @property
    def profiles(self) -> "ProfileService":
        """Get the in-process profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService()
        return self._profile_service

    @property
    def profile_checker(self) -> "IProfileChecker":
        """Get the profile checker used by the gate, chosen by profile_check_mode."""
        if self._profile_checker is None:
            if get_settings().profile_check_mode == "http":
                from modules.profiles.service import HttpProfileChecker
                self._profile_checker = HttpProfileChecker()
            else:
                self._profile_checker = self.profiles
        return self._profile_checker

    @property
    def gate(self) -> "RequestGate":
        """Get the request gate instance."""
        if self._request_gate is None:
            from modules.gate.paths import PathRules
            from modules.gate.service import RequestGate
            settings = get_settings()
            self._request_gate = RequestGate(
                rules=PathRules.from_settings(settings),
                verifier=self.auth,
                profiles=self.profile_checker,
                settings=settings,
            )
        return self._request_gate

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._session_verifier = None
        self._profile_service = None
        self._profile_checker = None
        self._request_gate = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() will create a fresh container with
    new service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_verifier() -> "ISessionVerifier":
    """FastAPI dependency for the session verifier."""
    return get_container().auth


def get_profile_service() -> "ProfileService":
    """FastAPI dependency for the profile service."""
    return get_container().profiles


def get_request_gate() -> "RequestGate":
    """Request gate used by GateMiddleware."""
    return get_container().gate
