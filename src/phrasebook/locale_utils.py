"""Locale identifier utilities.

Centralizes locale identifier handling used by the candidate builder,
the source registry, and locale-name lookup:

- Normalization of BCP-47 style codes to the underscore form used as
  registry keys
- Progressive prefix expansion ('de_DE' -> 'de_DE', 'de')
- Locale chain construction ending at the ultimate default locale
- Syntactic validation and CLDR display names via Babel

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError, parse_locale

from phrasebook.constants import DEFAULT_LOCALE, LOCALE_SEPARATOR
from phrasebook.diagnostics import InvalidLocaleError

if TYPE_CHECKING:
    from babel import Locale

    from phrasebook.localization.types import LocaleCode

__all__ = [
    "build_locale_chain",
    "get_babel_locale",
    "get_cldr_display_name",
    "get_system_locale",
    "locale_prefixes",
    "normalize_locale",
    "validate_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a locale code to the underscore form used for source lookup.

    Strips surrounding whitespace and converts BCP-47 hyphens to underscores.
    Case is preserved: registry keys are matched exactly, so 'de_DE' and
    'de_de' remain distinct.

    Args:
        locale_code: Locale code (e.g., "de-DE", "de_DE", " en ")

    Returns:
        Underscore-separated locale code (e.g., "de_DE", "en")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("de_DE")
        'de_DE'
    """
    return locale_code.strip().replace("-", LOCALE_SEPARATOR)


def locale_prefixes(locale_code: LocaleCode) -> tuple[LocaleCode, ...]:
    """Expand a locale into its progressive prefixes, most specific first.

    Segments are concatenated left to right ('de', then 'de_DE') and the
    result is reversed so that the most specific identifier comes first.
    Empty segments and duplicates are dropped.

    Example:
        >>> locale_prefixes("de_DE")
        ('de_DE', 'de')
        >>> locale_prefixes("zh_Hans_CN")
        ('zh_Hans_CN', 'zh_Hans', 'zh')
    """
    prefixes: list[LocaleCode] = []
    concatenated = ""
    for part in normalize_locale(locale_code).split(LOCALE_SEPARATOR):
        if not part:
            continue
        concatenated = part if not concatenated else f"{concatenated}{LOCALE_SEPARATOR}{part}"
        prefixes.append(concatenated)
    return tuple(dict.fromkeys(reversed(prefixes)))


def build_locale_chain(
    locale_code: LocaleCode | None,
    default_locale: LocaleCode = DEFAULT_LOCALE,
) -> tuple[LocaleCode, ...]:
    """Build the locale fallback chain for a resolution.

    The chain starts with the most specific prefix of ``locale_code`` and
    always ends with ``default_locale``. Prefixes equal to the default are
    not repeated, so the chain never contains duplicates.

    Args:
        locale_code: Requested locale, or None/empty for the default only
        default_locale: Ultimate fallback locale

    Returns:
        Tuple of locale codes, most specific first

    Example:
        >>> build_locale_chain("de_DE")
        ('de_DE', 'de', 'en')
        >>> build_locale_chain("en_US")
        ('en_US', 'en')
        >>> build_locale_chain("en")
        ('en',)
        >>> build_locale_chain(None)
        ('en',)
    """
    if not locale_code or normalize_locale(locale_code) == default_locale:
        return (default_locale,)
    prefixes = tuple(p for p in locale_prefixes(locale_code) if p != default_locale)
    return (*prefixes, default_locale)


def validate_locale(locale_code: str) -> LocaleCode:
    """Validate locale identifier syntax and return its normalized form.

    Uses Babel's identifier parser, which checks structure only (language,
    optional script, territory and variant). The locale does not need to
    exist in CLDR: application-specific identifiers are allowed as long as
    they are well formed.

    Args:
        locale_code: Locale code to validate

    Returns:
        Normalized locale code

    Raises:
        InvalidLocaleError: If the identifier is empty or malformed
    """
    normalized = normalize_locale(locale_code)
    if not normalized:
        msg = "Locale code cannot be empty"
        raise InvalidLocaleError(msg, locale_code=locale_code)
    try:
        parse_locale(normalized, sep=LOCALE_SEPARATOR)
    except ValueError as e:
        msg = f"Invalid locale code {locale_code!r}: {e}"
        raise InvalidLocaleError(msg, locale_code=locale_code) from e
    return normalized


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_cldr_display_name(locale_code: str) -> str | None:
    """Return the CLDR display name of a locale in its own language.

    Example:
        >>> get_cldr_display_name("de_DE")
        'Deutsch (Deutschland)'
        >>> get_cldr_display_name("xx") is None
        True
    """
    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        return None
    return locale.get_display_name() or None


def get_system_locale() -> LocaleCode | None:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and strips encoding suffixes.

    Returns:
        Normalized locale code, or None if the locale cannot be determined.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de_DE'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return normalize_locale(value.split(".")[0])

    return None
