"""
Request gate.

Decides, per request, whether to let it through or redirect it to the
login page, the feed, or the profile-completion form. Evaluation order:

1. auth-only paths (login, signup): signed-in users go to the feed
2. public and passthrough paths: allowed
3. no valid session: login, with the original path as ``callbackUrl``
4. exempt paths: allowed without a profile check
5. profile check: allowed if a profile exists, otherwise the completion
   form with ``returnTo``. A failed check is logged and allowed.
"""

import asyncio
import logging
from typing import Mapping, Optional
from urllib.parse import urlencode

from shared.config import Settings, get_settings
from shared.models import Identity
from modules.auth.interfaces import ISessionVerifier
from modules.profiles.exceptions import ProfileLookupError
from modules.profiles.interfaces import IProfileChecker

from .models import GateAction, GateDecision
from .paths import PathRules

logger = logging.getLogger(__name__)


class RequestGate:
    """
    Authentication and profile-completion gate.

    Holds only read-only configuration; every call to evaluate() is
    independent, so one instance serves all concurrent requests.
    """

    def __init__(
        self,
        rules: PathRules,
        verifier: ISessionVerifier,
        profiles: IProfileChecker,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._rules = rules
        self._verifier = verifier
        self._profiles = profiles
        self._login_path = settings.login_path
        self._feed_path = settings.feed_path
        self._completion_path = settings.profile_completion_path
        self._timeout = settings.profile_check_timeout

    async def evaluate(
        self,
        path: str,
        headers: Mapping[str, str],
        query: str = "",
    ) -> GateDecision:
        """
        Evaluate one request.

        Args:
            path: Request path, without query string
            headers: Request headers (cookie, authorization)
            query: Raw query string, kept in the login callback URL

        Returns:
            The terminal decision for this request
        """
        classification = self._rules.classify(path)

        if classification.is_auth_only:
            identity = await self._verifier.verify(headers)
            if identity is not None:
                return self._redirect(GateAction.REDIRECT_FEED, self._feed_path, "already_signed_in", identity)
            return self._allow("auth_only_anonymous")

        if classification.is_public or classification.is_passthrough:
            return self._allow("public")

        identity = await self._verifier.verify(headers)
        if identity is None:
            callback = f"{path}?{query}" if query else path
            location = f"{self._login_path}?{urlencode({'callbackUrl': callback})}"
            return self._redirect(GateAction.REDIRECT_LOGIN, location, "unauthenticated")

        if classification.is_exempt:
            return self._allow("exempt", identity)

        try:
            has_profile = await asyncio.wait_for(
                self._profiles.has_profile(identity),
                timeout=self._timeout,
            )
        except (ProfileLookupError, asyncio.TimeoutError) as e:
            logger.warning(f"Profile check failed for user {identity.id} on {path}, allowing: {e}")
            return self._allow("profile_check_failed", identity)

        if has_profile:
            return self._allow("profile_complete", identity)

        location = self._completion_path
        if path != self._completion_path:
            location = f"{location}?{urlencode({'returnTo': path})}"
        return self._redirect(GateAction.REDIRECT_PROFILE, location, "profile_missing", identity)

    def _allow(self, reason: str, identity: Optional[Identity] = None) -> GateDecision:
        return GateDecision(action=GateAction.ALLOW, reason=reason, identity=identity)

    def _redirect(
        self,
        action: GateAction,
        location: str,
        reason: str,
        identity: Optional[Identity] = None,
    ) -> GateDecision:
        return GateDecision(action=action, location=location, reason=reason, identity=identity)
