"""
Services package.

Contains the caller-facing OAuth login service.
"""

from .oauth_service import OAuthService

__all__ = ["OAuthService"]
