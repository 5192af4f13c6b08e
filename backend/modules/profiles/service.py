"""
Profile-completeness lookups.

Two IProfileChecker implementations:
- ProfileService: in-process query through the profile repository (default)
- HttpProfileChecker: calls the /api/profiles/check endpoint of a running
  instance, acting as the caller by forwarding their session cookie
"""

import asyncio
import logging
from typing import Optional

import httpx

from shared.config import Settings, get_settings
from shared.database import get_supabase_client
from shared.models import Identity

from .exceptions import ProfileLookupError
from .interfaces import IProfileChecker
from .models import ProfileRecord
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

PROFILE_CHECK_PATH = "/api/profiles/check"


class ProfileService(IProfileChecker):
    """
    In-process profile lookups backed by Supabase.

    Supabase calls are synchronous, so they run in a worker thread and
    are bounded by ``profile_check_timeout``. Without an explicit repository
    the Supabase client is created on the first lookup, so missing database
    configuration surfaces as a ProfileLookupError.
    """

    def __init__(
        self,
        repository: Optional[ProfileRepository] = None,
        settings: Optional[Settings] = None,
    ):
        self._repository = repository
        self._settings = settings or get_settings()
        self._timeout = self._settings.profile_check_timeout

    async def has_profile(self, identity: Identity) -> bool:
        """Check profile existence for the signed-in user."""
        return await self._run("exists_for_owner", identity)

    async def get_profile(self, identity: Identity) -> Optional[ProfileRecord]:
        """Get the signed-in user's profile, if they have created one."""
        return await self._run("get_by_owner_id", identity)

    def _get_repository(self) -> ProfileRepository:
        if self._repository is None:
            self._repository = ProfileRepository(
                get_supabase_client(),
                table=self._settings.profiles_table,
            )
        return self._repository

    async def _run(self, query: str, identity: Identity):
        try:
            lookup = getattr(self._get_repository(), query)
            return await asyncio.wait_for(
                asyncio.to_thread(lookup, identity.id),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            raise ProfileLookupError(
                f"timed out after {self._timeout}s",
                service="supabase",
                user_id=identity.id,
            )
        except Exception as e:
            raise ProfileLookupError(str(e), service="supabase", user_id=identity.id) from e


class HttpProfileChecker(IProfileChecker):
    """
    Profile lookups through the HTTP check endpoint.

    Status convention: 200 = profile exists, 404 = no profile. Every other
    status (401 included) and every transport error is a lookup failure.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings or get_settings()
        self._url = httpx.URL(self._settings.app_base_url).join(PROFILE_CHECK_PATH)
        self._cookie_name = self._settings.session_cookie_names[0]
        self._timeout = self._settings.profile_check_timeout
        self._transport = transport

    async def has_profile(self, identity: Identity) -> bool:
        """Ask the check endpoint whether the caller has a profile."""
        if not identity.token:
            raise ProfileLookupError("no session token to forward", service="http", user_id=identity.id)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.get(
                    self._url,
                    headers={
                        "Cookie": f"{self._cookie_name}={identity.token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            raise ProfileLookupError(
                f"{type(e).__name__}: {e}",
                service="http",
                user_id=identity.id,
            ) from e

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        raise ProfileLookupError(
            f"unexpected status {response.status_code}",
            service="http",
            user_id=identity.id,
        )
