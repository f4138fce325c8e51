"""Locale translators for login-page strings."""

from .translators import DEFAULT_TRANSLATOR, LOCALES, Translator, Translators, parse_locale

__all__ = ["DEFAULT_TRANSLATOR", "LOCALES", "Translator", "Translators", "parse_locale"]
