"""
Centralized configuration for the ZoškaGram backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SESSION_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ZoškaGram API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    profiles_table: str = "profiles"

    # Session tokens
    session_secret: str = ""
    session_cookie_names: list[str] = [
        "next-auth.session-token",
        "__Secure-next-auth.session-token",
    ]
    session_token_algorithms: list[str] = ["HS256"]
    session_token_audience: Optional[str] = None

    # Request gate paths
    login_path: str = "/auth/prihlasenie"
    feed_path: str = "/prispevky"
    profile_completion_path: str = "/profily/upravit"
    api_prefix: str = "/api/"
    static_prefix: str = "/static/"
    public_paths: list[str] = [
        "/auth/prihlasenie",
        "/auth/registracia",
        "/auth/overenie",
        "/auth/odhlasenie",
        "/o-nas",
        "/",
    ]
    auth_only_paths: list[str] = [
        "/auth/prihlasenie",
        "/auth/registracia",
    ]
    exempt_paths: list[str] = ["/profily/upravit"]

    # Profile-completeness lookup
    profile_check_mode: Literal["local", "http"] = "local"
    profile_check_timeout: float = 0.3  # seconds
    app_base_url: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def validate_settings(settings: Settings) -> None:
    """
    Check settings that must be present before serving requests.

    Raises:
        ConfigurationError: If the session secret is missing, or the HTTP
            profile lookup is enabled without a base URL
    """
    if not settings.session_secret:
        raise ConfigurationError(
            "Session secret is not configured. Set the SESSION_SECRET environment variable.",
            setting="session_secret",
        )

    if settings.profile_check_mode == "http" and not settings.app_base_url:
        raise ConfigurationError(
            "HTTP profile lookup requires APP_BASE_URL to be set.",
            setting="app_base_url",
        )
