"""
Third-party OAuth authentication.

Provides the provider registry, provider implementations, the shared HTTP
transport and the error taxonomy.
"""

from .errors import (
    ConfigurationError,
    ExchangeError,
    MalformedResponse,
    OAuthError,
    ProfileFetchFailed,
    ProviderUnavailable,
    TokenExchangeFailed,
    TransportError,
    TransportTimeout,
)
from .providers import AuthenticationResult, AuthProviderType, OAuthProvider, ProviderRegistry
from .transport import HttpTransport

__all__ = [
    "AuthenticationResult",
    "AuthProviderType",
    "OAuthProvider",
    "ProviderRegistry",
    "HttpTransport",
    "OAuthError",
    "ConfigurationError",
    "ProviderUnavailable",
    "ExchangeError",
    "TokenExchangeFailed",
    "ProfileFetchFailed",
    "MalformedResponse",
    "TransportTimeout",
    "TransportError",
]
