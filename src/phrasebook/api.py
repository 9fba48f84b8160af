"""Process-wide resolution API.

Module-level functions operating on a shared default Resolver, for
applications that want one localization setup per process:

    >>> import phrasebook
    >>> phrasebook.register_locale_source(
    ...     "application", "en", phrasebook.MappingLocaleSource({"greeting": "Hello"})
    ... )
    >>> phrasebook.resolve("greeting", "de_DE")
    'Hello'

The default resolver is created on first use with configuration read from
``PHRASEBOOK_*`` environment variables (see ResolverConfig.from_env).

Python 3.13+.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from phrasebook.config import ResolverConfig
from phrasebook.localization.resolver import Resolver

if TYPE_CHECKING:
    from phrasebook.localization.candidates import Candidate
    from phrasebook.localization.resolver import ResolutionResult
    from phrasebook.localization.session import SessionLocaleProvider
    from phrasebook.localization.sources import SourceProvider
    from phrasebook.localization.types import LocaleCode, Namespace, Token

__all__ = [
    "build_candidates",
    "configure",
    "get_locale_name",
    "get_resolver",
    "register_locale_source",
    "reset_resolver",
    "resolve",
    "resolve_detailed",
    "set_session_provider",
]

_lock = threading.Lock()
_default_resolver: Resolver | None = None


def get_resolver() -> Resolver:
    """Get the process-wide resolver, creating it on first use."""
    global _default_resolver  # noqa: PLW0603
    resolver = _default_resolver
    if resolver is not None:
        return resolver
    with _lock:
        if _default_resolver is None:
            _default_resolver = Resolver(config=ResolverConfig.from_env())
        return _default_resolver


def reset_resolver(resolver: Resolver | None = None) -> None:
    """Replace the process-wide resolver.

    Args:
        resolver: New resolver, or None to recreate one from the environment
            on next use (dropping all registered sources)
    """
    global _default_resolver  # noqa: PLW0603
    with _lock:
        _default_resolver = resolver


def configure(**changes: Any) -> ResolverConfig:
    """Replace fields of the process-wide configuration.

    Example:
        >>> configure(debug_mode=True, soft_failure_suffixes={"Tooltip", "Hint"})

    Raises:
        ValueError: If the resulting configuration is invalid
    """
    return get_resolver().configure(**changes)


def set_session_provider(provider: SessionLocaleProvider | None) -> None:
    """Set the provider consulted when no explicit locale is passed."""
    get_resolver().session = provider


def register_locale_source(
    namespace: Namespace, locale: LocaleCode, provider: SourceProvider
) -> None:
    """Register a locale source with the process-wide resolver."""
    get_resolver().register_locale_source(namespace, locale, provider)


def build_candidates(token: Token, locale: LocaleCode | None = None) -> tuple[Candidate, ...]:
    """Build the ordered candidate list with the process-wide settings."""
    return get_resolver().build_candidates(token, locale)


def resolve(token: Token, locale: LocaleCode | None = None) -> str:
    """Resolve a token to a display string (never raises on missing data)."""
    return get_resolver().resolve(token, locale)


def resolve_detailed(token: Token, locale: LocaleCode | None = None) -> ResolutionResult:
    """Resolve a token and return the full ResolutionResult."""
    return get_resolver().resolve_detailed(token, locale)


def get_locale_name(locale: LocaleCode) -> str:
    """Get the configured display name of a locale, or the locale unchanged."""
    return get_resolver().get_locale_name(locale)
