"""
OAuth login service.

Caller-facing entry point: authorize URLs, code exchange, and localized
descriptions of failures for the login page.
"""

from oauthlink_core import get_logger, init_logging
from oauthlink_core.auth import (
    AuthenticationResult,
    AuthProviderType,
    OAuthError,
    ProviderRegistry,
)
from oauthlink_core.auth.errors import ExchangeError, ProviderUnavailable
from oauthlink_core.config import OAuthSettings
from oauthlink_core.i18n import Translators

logger = get_logger(__name__)


class OAuthService:
    """Third-party login service."""

    def __init__(self, registry: ProviderRegistry, translators: Translators | None = None):
        """
        Initialize OAuth service.

        Args:
            registry: Registry of enabled providers.
            translators: Locale translators (loaded from package resources when omitted).
        """
        self.registry = registry
        self.translators = translators or Translators.load()

    @classmethod
    def from_settings(cls, settings: OAuthSettings | None = None) -> "OAuthService":
        """
        Build the service at startup.

        Configures logging from the settings, then builds the provider registry.

        Raises:
            ConfigurationError: If an enabled provider lacks credentials.
        """
        settings = settings or OAuthSettings()
        init_logging(settings.log_level)
        return cls(ProviderRegistry.from_settings(settings))

    def available_providers(self) -> list[AuthProviderType]:
        return self.registry.available_providers()

    def authorize_url(self, provider: AuthProviderType | str, redirect_url: str) -> str:
        """
        Get the URL to send the user to for consent.

        Raises:
            ProviderUnavailable: If the provider is not enabled.
        """
        return self.registry.get(provider).get_authorization_url(redirect_url)

    async def exchange(
        self, provider: AuthProviderType | str, code: str, redirect_url: str
    ) -> AuthenticationResult:
        """
        Resolve an authorization code into an authentication result.

        Args:
            provider: Provider type or identifier.
            code: Authorization code from the callback.
            redirect_url: Redirect URL used for the authorize step.

        Returns:
            Normalized authentication result.

        Raises:
            ProviderUnavailable: If the provider is not enabled.
            ExchangeError: Any failure of the token or profile call.
        """
        oauth_provider = self.registry.get(provider)
        try:
            return await oauth_provider.authenticate(code, redirect_url)
        except ExchangeError as e:
            logger.warning(
                "[OAuthService] {} exchange failed at {} step: {}",
                e.provider,
                e.step,
                e.code,
            )
            raise

    def provider_display_name(self, provider: AuthProviderType | str, locale: str | None) -> str:
        translator = self.translators.get_translator(locale)
        try:
            provider_id = AuthProviderType.parse(provider).value
        except ProviderUnavailable:
            provider_id = str(provider)
        return translator.translate(f"provider.{provider_id}")

    def describe_error(self, error: OAuthError, locale: str | None) -> str:
        """
        Localized, user-facing description of a login failure.

        Args:
            error: Error raised by this package.
            locale: Locale name such as 'zh_CN' (default translator when None).
        """
        translator = self.translators.get_translator(locale)
        provider = getattr(error, "provider", None)
        provider_name = self.provider_display_name(provider, locale) if provider else ""
        return translator.translate(error.code, provider_name)

    async def aclose(self) -> None:
        await self.registry.transport.aclose()
