"""Current-session locale providers.

The resolver consults a session provider only when a call does not pass an
explicit locale. Providers must be safe to call from any thread: the
context-variable provider below gives each thread and each asyncio task its
own locale, so concurrent requests never see each other's preference.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Protocol

from phrasebook.locale_utils import get_system_locale, normalize_locale
from phrasebook.localization.types import LocaleCode

__all__ = [
    "ContextLocaleProvider",
    "SessionLocaleProvider",
    "SystemLocaleProvider",
]


class SessionLocaleProvider(Protocol):
    """Protocol for the caller's current-session locale preference."""

    def current_locale(self) -> LocaleCode | None:
        """Return the current locale, or None to use the default locale."""
        ...


class ContextLocaleProvider:
    """Session locale stored in a context variable.

    Each thread and asyncio task sees its own value, which makes this the
    provider to use in multi-threaded or async request handlers.

    Example:
        >>> provider = ContextLocaleProvider()
        >>> with provider.use_locale("de_DE"):
        ...     provider.current_locale()
        'de_DE'
        >>> provider.current_locale() is None
        True
    """

    __slots__ = ("_var",)

    def __init__(self, name: str = "phrasebook_session_locale") -> None:
        """Initialize provider with its own context variable."""
        self._var: ContextVar[LocaleCode | None] = ContextVar(name, default=None)

    def current_locale(self) -> LocaleCode | None:
        """Return the locale set in the current context, if any."""
        return self._var.get()

    def set_locale(self, locale: LocaleCode | None) -> None:
        """Set the locale for the current context (until changed)."""
        self._var.set(normalize_locale(locale) if locale else None)

    @contextmanager
    def use_locale(self, locale: LocaleCode | None) -> Generator[None]:
        """Set the locale for the duration of a ``with`` block."""
        token = self._var.set(normalize_locale(locale) if locale else None)
        try:
            yield
        finally:
            self._var.reset(token)


class SystemLocaleProvider:
    """Session locale taken from the operating system environment."""

    __slots__ = ()

    def current_locale(self) -> LocaleCode | None:
        """Return the OS locale (LC_ALL, LC_MESSAGES, LANG), if determinable."""
        return get_system_locale()
