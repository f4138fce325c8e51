"""
OAuth providers package.

This package provides one provider implementation per supported identity
service plus the registry that exposes the enabled ones.
"""

from .base import AuthenticationResult, AuthProviderType, OAuthProvider
from .github_provider import GitHubProvider
from .registry import PROVIDER_CLASSES, ProviderRegistry
from .strava_provider import StravaProvider
from .weibo_provider import WeiboProvider

__all__ = [
    "AuthenticationResult",
    "AuthProviderType",
    "OAuthProvider",
    "GitHubProvider",
    "StravaProvider",
    "WeiboProvider",
    "PROVIDER_CLASSES",
    "ProviderRegistry",
]
