"""Tests for the profile-completeness lookups."""

import time

import httpx
import pytest
from unittest.mock import MagicMock, patch

from modules.profiles.exceptions import ProfileLookupError
from modules.profiles.interfaces import IProfileChecker
from modules.profiles.models import ProfileRecord
from modules.profiles.service import HttpProfileChecker, ProfileService
from tests.conftest import SESSION_COOKIE


class TestProfileService:
    @pytest.fixture
    def repository(self):
        return MagicMock()

    @pytest.fixture
    def service(self, repository, test_settings):
        return ProfileService(repository, test_settings)

    def test_implements_interface(self, service):
        assert isinstance(service, IProfileChecker)

    @pytest.mark.asyncio
    async def test_has_profile_true(self, service, repository, identity):
        repository.exists_for_owner.return_value = True

        assert await service.has_profile(identity) is True
        repository.exists_for_owner.assert_called_once_with(identity.id)

    @pytest.mark.asyncio
    async def test_has_profile_false(self, service, repository, identity):
        repository.exists_for_owner.return_value = False

        assert await service.has_profile(identity) is False

    @pytest.mark.asyncio
    async def test_database_error_becomes_lookup_error(self, service, repository, identity):
        """A failed query is a lookup failure, never "no profile"."""
        repository.exists_for_owner.side_effect = ConnectionError("connection reset")

        with pytest.raises(ProfileLookupError) as exc_info:
            await service.has_profile(identity)

        assert "connection reset" in exc_info.value.message
        assert exc_info.value.service == "supabase"
        assert exc_info.value.details["user_id"] == identity.id

    @pytest.mark.asyncio
    async def test_slow_query_times_out(self, repository, test_settings, identity):
        settings = test_settings.model_copy(update={"profile_check_timeout": 0.05})
        service = ProfileService(repository, settings)
        repository.exists_for_owner.side_effect = lambda owner_id: time.sleep(0.5)

        with pytest.raises(ProfileLookupError, match="timed out"):
            await service.has_profile(identity)

    @pytest.mark.asyncio
    async def test_get_profile(self, service, repository, identity):
        record = ProfileRecord(id="profile-1", user_id=identity.id, username="janko")
        repository.get_by_owner_id.return_value = record

        assert await service.get_profile(identity) == record
        repository.get_by_owner_id.assert_called_once_with(identity.id)

    @pytest.mark.asyncio
    async def test_missing_database_config_is_lookup_error(self, test_settings, identity):
        """Without a repository the client is built on first lookup, inside the error mapping."""
        settings = test_settings.model_copy(update={"supabase_url": ""})
        service = ProfileService(settings=settings)

        with patch("shared.database.get_settings", return_value=settings):
            with pytest.raises(ProfileLookupError, match="Supabase configuration missing"):
                await service.has_profile(identity)


class TestHttpProfileChecker:
    @pytest.fixture
    def http_settings(self, test_settings):
        return test_settings.model_copy(
            update={"profile_check_mode": "http", "app_base_url": "http://zoskagram.internal"}
        )

    def make_checker(self, settings, handler) -> HttpProfileChecker:
        return HttpProfileChecker(settings, transport=httpx.MockTransport(handler))

    def test_implements_interface(self, http_settings):
        assert isinstance(HttpProfileChecker(http_settings), IProfileChecker)

    @pytest.mark.asyncio
    async def test_forwards_session_cookie(self, http_settings, identity):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["cookie"] = request.headers.get("cookie")
            return httpx.Response(200, json={"has_profile": True})

        checker = self.make_checker(http_settings, handler)

        assert await checker.has_profile(identity) is True
        assert seen["url"] == "http://zoskagram.internal/api/profiles/check"
        assert seen["cookie"] == f"{SESSION_COOKIE}={identity.token}"

    @pytest.mark.asyncio
    async def test_not_found_means_no_profile(self, http_settings, identity):
        checker = self.make_checker(
            http_settings, lambda request: httpx.Response(404, json={"has_profile": False})
        )
        assert await checker.has_profile(identity) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 500, 502, 503])
    async def test_other_status_is_lookup_error(self, http_settings, identity, status_code):
        checker = self.make_checker(http_settings, lambda request: httpx.Response(status_code))

        with pytest.raises(ProfileLookupError, match=f"unexpected status {status_code}"):
            await checker.has_profile(identity)

    @pytest.mark.asyncio
    async def test_transport_error_is_lookup_error(self, http_settings, identity):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        checker = self.make_checker(http_settings, handler)

        with pytest.raises(ProfileLookupError, match="ConnectError"):
            await checker.has_profile(identity)

    @pytest.mark.asyncio
    async def test_timeout_is_lookup_error(self, http_settings, identity):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        checker = self.make_checker(http_settings, handler)

        with pytest.raises(ProfileLookupError):
            await checker.has_profile(identity)

    @pytest.mark.asyncio
    async def test_identity_without_token(self, http_settings):
        from shared.models import Identity

        checker = self.make_checker(http_settings, lambda request: httpx.Response(200))

        with pytest.raises(ProfileLookupError, match="no session token"):
            await checker.has_profile(Identity(id="user-123"))
