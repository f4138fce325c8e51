"""
Locale translators for login-page strings.

Locale resources are enumerated explicitly in LOCALES and read once at startup.
Lookup falls back from language+region to language only, then to the default
translator.
"""

import json
import re
from importlib import resources

from oauthlink_core import get_logger

logger = get_logger(__name__)

# (locale name, resource file under oauthlink_core/i18n/locales)
LOCALES: tuple[tuple[str, str], ...] = (
    ("en", "en.json"),
    ("zh", "zh.json"),
    ("zh_TW", "zh_TW.json"),
)

_LOCALE_LANGUAGE = re.compile(r"^([a-z]+)$")
_LOCALE_LANGUAGE_REGION = re.compile(r"^([a-z]+)_([A-Z]+)$")

DISPLAY_NAME_KEY = "__name__"


def parse_locale(name: str) -> tuple[str, str]:
    """
    Split a locale name into (language, region).

    Accepts ``en``, ``zh_CN`` and ``zh-cn`` style names.

    Raises:
        ValueError: If the name is not a valid locale.
    """
    candidate = name.strip().replace("-", "_")
    if "_" in candidate:
        language, _, region = candidate.partition("_")
        candidate = f"{language.lower()}_{region.upper()}"
    else:
        candidate = candidate.lower()

    m = _LOCALE_LANGUAGE.match(candidate)
    if m:
        return m.group(1), ""
    m = _LOCALE_LANGUAGE_REGION.match(candidate)
    if m:
        return m.group(1), m.group(2)
    raise ValueError(f"Invalid locale: {name}")


class Translator:
    """Message lookup for one locale. Missing keys translate to themselves."""

    def __init__(self, locale_name: str, display_name: str, messages: dict[str, str]) -> None:
        self.locale_name = locale_name
        self.display_name = display_name
        self._messages = dict(messages)

    def translate(self, key: str, *args: object) -> str:
        """
        Translate a message key.

        Args:
            key: Message key.
            args: Positional values for ``{0}``-style placeholders.
        """
        message = self._messages.get(key, key)
        return message.format(*args) if args else message

    def __repr__(self) -> str:
        return f"<Translator {self.locale_name}>"


DEFAULT_TRANSLATOR = Translator("default", "Default", {})


class Translators:
    """All loaded translators, keyed by locale name."""

    def __init__(self, translators: list[Translator]) -> None:
        ordered = sorted(translators, key=lambda t: t.locale_name)
        self._translators = {t.locale_name: t for t in ordered}
        self._names = [DEFAULT_TRANSLATOR.display_name] + [t.display_name for t in ordered]

    @classmethod
    def load(cls, locales: tuple[tuple[str, str], ...] = LOCALES) -> "Translators":
        """
        Load the enumerated locale resources.

        Raises:
            ValueError: If a locale name is invalid or a resource is not a JSON object.
        """
        translators = []
        package_files = resources.files("oauthlink_core.i18n") / "locales"
        for locale_name, filename in locales:
            language, region = parse_locale(locale_name)
            normalized = f"{language}_{region}" if region else language
            messages = json.loads((package_files / filename).read_bytes())
            if not isinstance(messages, dict):
                raise ValueError(f"Locale resource {filename} must be a JSON object")
            display_name = messages.pop(DISPLAY_NAME_KEY, None)
            if display_name is None:
                logger.warning(
                    "No display name found in resource {}: using default: {}.", filename, normalized
                )
                display_name = normalized
            translator = Translator(normalized, display_name, messages)
            logger.info("Found i18n translator {} for {} at {}", display_name, normalized, filename)
            translators.append(translator)
        return cls(translators)

    def get_translator(self, locale: str | None) -> Translator:
        """
        Pick a translator for a locale.

        Tries language+region, then language only, then the default translator.
        """
        if not locale:
            return DEFAULT_TRANSLATOR
        try:
            language, region = parse_locale(locale)
        except ValueError:
            return DEFAULT_TRANSLATOR

        translator = None
        if region:
            translator = self._translators.get(f"{language}_{region}")
        if translator is None:
            translator = self._translators.get(language)
        if translator is None:
            translator = DEFAULT_TRANSLATOR
        return translator

    def get_translator_names(self) -> list[str]:
        return list(self._names)
