"""
OAuth provider registry.

Maps provider types to configured provider instances. The registry is built
once at startup from the explicit provider configurations; lookups afterwards
are read-only.
"""

from typing import Any

from oauthlink_core import get_logger
from oauthlink_core.auth.errors import ConfigurationError, ProviderUnavailable
from oauthlink_core.auth.transport import HttpTransport
from oauthlink_core.config import OAuthSettings, ProviderConfig

from .base import AuthProviderType, OAuthProvider
from .github_provider import GitHubProvider
from .strava_provider import StravaProvider
from .weibo_provider import WeiboProvider

logger = get_logger(__name__)

# One implementation per provider type
PROVIDER_CLASSES: dict[AuthProviderType, type[OAuthProvider[Any, Any]]] = {
    AuthProviderType.WEIBO: WeiboProvider,
    AuthProviderType.GITHUB: GitHubProvider,
    AuthProviderType.STRAVA: StravaProvider,
}


class ProviderRegistry:
    """
    Registry of enabled OAuth providers.

    Disabled providers are simply absent: looking one up is an expected
    outcome, not a configuration error.
    """

    def __init__(self, transport: HttpTransport) -> None:
        """
        Initialize an empty registry.

        Args:
            transport: Shared HTTP transport handed to every provider.
        """
        self.transport = transport
        self._providers: dict[AuthProviderType, OAuthProvider[Any, Any]] = {}

    @classmethod
    def from_settings(
        cls, settings: OAuthSettings, transport: HttpTransport | None = None
    ) -> "ProviderRegistry":
        """
        Build a registry from environment-backed settings.

        Args:
            settings: Loaded OAuth settings.
            transport: Shared transport (created from settings when omitted).

        Returns:
            Registry containing every enabled provider.

        Raises:
            ConfigurationError: If an enabled provider lacks credentials.
        """
        if transport is None:
            transport = HttpTransport(timeout=settings.http_timeout_seconds)
        registry = cls(transport)
        for provider_type in PROVIDER_CLASSES:
            registry.register(provider_type, settings.provider_config(provider_type.value))
        return registry

    def register(
        self, provider_type: AuthProviderType | str, config: ProviderConfig
    ) -> OAuthProvider[Any, Any] | None:
        """
        Register a provider from its configuration.

        Registering the same type twice with an equal config is a no-op.

        Args:
            provider_type: Provider type or identifier.
            config: Immutable provider configuration.

        Returns:
            The registered provider, or None when the config is disabled.

        Raises:
            ConfigurationError: Unknown type, missing credentials on an enabled
                provider, or a conflicting re-registration.
        """
        try:
            provider_type = AuthProviderType.parse(provider_type)
        except ProviderUnavailable as e:
            raise ConfigurationError(f"Unknown provider: {provider_type}") from e

        if not config.enabled:
            if provider_type in self._providers:
                raise ConfigurationError(f"{provider_type.value}: already registered as enabled")
            logger.debug("[Registry] {} disabled; skipping", provider_type.value)
            return None

        missing = [name for name in ("client_id", "client_secret") if not getattr(config, name)]
        if missing:
            raise ConfigurationError(
                f"{provider_type.value}: enabled but missing {', '.join(missing)}"
            )

        existing = self._providers.get(provider_type)
        if existing is not None:
            if existing.config == config:
                return existing
            raise ConfigurationError(f"{provider_type.value}: registered twice with different config")

        provider = PROVIDER_CLASSES[provider_type](config, self.transport)
        self._providers[provider_type] = provider
        logger.info("[Registry] registered provider {}", provider_type.value)
        return provider

    def get(self, provider_type: AuthProviderType | str) -> OAuthProvider[Any, Any]:
        """
        Get an enabled provider.

        Raises:
            ProviderUnavailable: If the provider is unknown, unregistered or disabled.
        """
        provider = self.find(provider_type)
        if provider is None:
            raise ProviderUnavailable(str(getattr(provider_type, "value", provider_type)))
        return provider

    def find(self, provider_type: AuthProviderType | str) -> OAuthProvider[Any, Any] | None:
        """Non-raising lookup: the provider, or None when not available."""
        try:
            provider_type = AuthProviderType.parse(provider_type)
        except ProviderUnavailable:
            return None
        return self._providers.get(provider_type)

    def is_available(self, provider_type: AuthProviderType | str) -> bool:
        return self.find(provider_type) is not None

    def available_providers(self) -> list[AuthProviderType]:
        """
        List enabled providers.

        Returns:
            Provider types in declaration order.
        """
        return [t for t in AuthProviderType if t in self._providers]
