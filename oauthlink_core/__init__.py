"""
OAuthLink Core Package.

This package contains the third-party OAuth login providers, the provider
registry, and the shared HTTP transport used to talk to identity services.
"""

__version__ = "0.1.0"

from .logging_config import get_logger, init_logging

__all__ = ["init_logging", "get_logger"]
