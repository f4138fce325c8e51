"""
OAuth provider configuration.

This module provides configuration settings for third-party login providers
loaded from environment variables.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root
_env_file = Path(__file__).parent.parent / ".env"

DEFAULT_TIMEOUT_SECONDS = 10.0


class ProviderConfig(BaseModel):
    """Credentials and enabled flag for one provider. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    client_secret: str = ""
    enabled: bool = False


class OAuthSettings(BaseSettings):
    """
    OAuth configuration from environment variables.

    All settings are prefixed with OAUTH_ in environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_",
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Weibo
    weibo_enabled: bool = False
    weibo_client_id: str = ""
    weibo_client_secret: str = ""

    # GitHub
    github_enabled: bool = False
    github_client_id: str = ""
    github_client_secret: str = ""

    # Strava
    strava_enabled: bool = False
    strava_client_id: str = ""
    strava_client_secret: str = ""

    # Shared HTTP transport
    http_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=120)

    log_level: str = "INFO"

    def provider_config(self, provider_id: str) -> ProviderConfig:
        """
        Build the immutable config for one provider.

        Args:
            provider_id: Provider identifier (e.g., 'weibo', 'github').

        Returns:
            ProviderConfig with credentials stripped of surrounding whitespace.

        Raises:
            KeyError: If no settings exist for the provider.
        """
        prefix = provider_id.lower()
        if f"{prefix}_enabled" not in type(self).model_fields:
            raise KeyError(provider_id)
        return ProviderConfig(
            client_id=str(getattr(self, f"{prefix}_client_id")).strip(),
            client_secret=str(getattr(self, f"{prefix}_client_secret")).strip(),
            enabled=bool(getattr(self, f"{prefix}_enabled")),
        )
