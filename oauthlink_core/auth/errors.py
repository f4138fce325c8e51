"""
OAuth error taxonomy.

Every failure raised by this package derives from OAuthError. Errors carry a
stable ``code`` that doubles as the i18n message key for the login page.
"""


class OAuthError(ValueError):
    """Base class for all OAuth subsystem errors."""

    code = "oauth.error"


class ConfigurationError(OAuthError):
    """An enabled provider is missing required configuration. Raised at startup only."""

    code = "oauth.configuration"


class ProviderUnavailable(OAuthError):
    """The requested provider is unknown, unregistered or disabled."""

    code = "oauth.unavailable"

    def __init__(self, provider: str) -> None:
        super().__init__(f"OAuth provider not available: {provider}")
        self.provider = provider


class ExchangeError(OAuthError):
    """
    Failure while resolving an authorization code.

    Attributes:
        provider: Provider identifier the exchange ran against.
        step: Which external call failed ("token" or "profile").
    """

    code = "oauth.exchange"

    def __init__(self, message: str, *, provider: str, step: str) -> None:
        super().__init__(message)
        self.provider = provider
        self.step = step


class TokenExchangeFailed(ExchangeError):
    """Token endpoint answered with a non-success status."""

    code = "oauth.token_exchange_failed"

    def __init__(self, status_code: int, *, provider: str) -> None:
        super().__init__(
            f"Token exchange failed (status={status_code})", provider=provider, step="token"
        )
        self.status_code = status_code


class ProfileFetchFailed(ExchangeError):
    """Profile endpoint answered with a non-success status."""

    code = "oauth.profile_fetch_failed"

    def __init__(self, status_code: int, *, provider: str) -> None:
        super().__init__(
            f"Profile fetch failed (status={status_code})", provider=provider, step="profile"
        )
        self.status_code = status_code


class MalformedResponse(ExchangeError):
    """A response body could not be parsed into the expected shape."""

    code = "oauth.malformed_response"

    def __init__(self, *, provider: str, step: str, detail: str = "") -> None:
        message = f"Malformed {step} response"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, provider=provider, step=step)
        self.detail = detail


class TransportTimeout(ExchangeError):
    """The fixed request deadline elapsed before the provider answered."""

    code = "oauth.transport_timeout"

    def __init__(self, timeout: float, *, provider: str, step: str) -> None:
        super().__init__(
            f"{step} request timed out after {timeout:g}s", provider=provider, step=step
        )
        self.timeout = timeout


class TransportError(ExchangeError):
    """The request failed at the connection level (DNS, refused, reset)."""

    code = "oauth.transport_error"
