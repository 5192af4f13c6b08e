"""
Session token verifier implementation.

Validates the signed JWT session token issued at sign-in and turns its
claims into an immutable Identity.
"""

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import cookie_parser

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError
from shared.models import Identity

from .interfaces import ISessionVerifier
from .models import SessionTokenPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

logger = logging.getLogger(__name__)


class SessionTokenVerifier(ISessionVerifier):
    """
    Implementation of the session verifier.

    Tokens are HMAC-signed JWTs keyed by ``session_secret``. The secret is
    checked once at construction; an unconfigured verifier cannot exist.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

        if not self._settings.session_secret:
            raise ConfigurationError(
                "Session secret is not configured. Set the SESSION_SECRET environment variable.",
                setting="session_secret",
            )

        self._secret = self._settings.session_secret
        self._algorithms = list(self._settings.session_token_algorithms)
        self._audience = self._settings.session_token_audience
        self._cookie_names = tuple(self._settings.session_cookie_names)

    async def validate_token(self, token: Optional[str]) -> Identity:
        """
        Validate a session token and return the identity it carries.

        The audience claim is only enforced when one is configured.
        """
        if not token:
            raise MissingTokenError()

        options = {"require": ["sub", "exp"]}
        if self._audience is None:
            options["verify_aud"] = False

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        try:
            claims = SessionTokenPayload(**payload)
            return Identity(
                id=claims.sub,
                email=claims.email or None,
                name=claims.name,
                picture=claims.picture,
                expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
                token=token,
            )
        except PydanticValidationError as e:
            raise InvalidTokenError(f"Malformed session claims: {e.error_count()} error(s)")

    def extract_token(
        self,
        cookies: Mapping[str, str],
        authorization: Optional[str] = None,
    ) -> Optional[str]:
        """
        Pick the session token out of request cookies or an Authorization header.

        Cookie names are tried in configured order; the bearer header is
        only consulted when no session cookie is present.
        """
        for name in self._cookie_names:
            token = cookies.get(name)
            if token:
                return token

        if authorization:
            scheme, _, credentials = authorization.partition(" ")
            if scheme.lower() == "bearer" and credentials.strip():
                return credentials.strip()

        return None

    async def verify(self, headers: Mapping[str, str]) -> Optional[Identity]:
        """Resolve the request identity, treating every token failure as anonymous."""
        cookies = cookie_parser(headers.get("cookie", ""))
        token = self.extract_token(cookies, headers.get("authorization"))
        if token is None:
            return None

        try:
            return await self.validate_token(token)
        except (InvalidTokenError, ExpiredTokenError) as e:
            logger.debug(f"Session token rejected: {e.code}")
            return None


# Module-level instance getter
_service_instance: Optional[SessionTokenVerifier] = None


def get_session_verifier() -> SessionTokenVerifier:
    """Get the session verifier singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SessionTokenVerifier()
    return _service_instance


def reset_session_verifier() -> None:
    """Reset the session verifier singleton (for testing)."""
    global _service_instance
    _service_instance = None
