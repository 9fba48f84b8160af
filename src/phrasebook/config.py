"""Resolver configuration.

Provides a single frozen dataclass that encapsulates the process-wide
switches read at resolution time: debug variants, token annotation,
the ultimate default locale, soft-failure suffixes, fallback messages
and namespace names.

Python 3.13+.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from phrasebook.constants import (
    APPLICATION_NAMESPACE,
    DEFAULT_DEBUG_RESULT,
    DEFAULT_LOCALE,
    DEFAULT_RESULT,
    DEFAULT_SOFT_FAILURE_SUFFIXES,
    FRAMEWORK_NAMESPACE,
)
from phrasebook.locale_utils import validate_locale

__all__ = ["ENV_PREFIX", "ResolverConfig"]

ENV_PREFIX = "PHRASEBOOK_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(ENV_PREFIX + name, "").strip().lower() in _TRUE_VALUES


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for token resolution.

    All fields have sensible defaults; constructing ``ResolverConfig()`` with
    no arguments produces a usable configuration. A resolver reads its config
    once at the start of each call, so swapping the config on a live resolver
    never affects a resolution already in flight.

    Attributes:
        debug_mode: Try ``<segment>.debug.<rest>`` variants before each token,
            use ``default_debug_result`` for misses, and insert ``DEBUG: ``
            into annotated output (default: False).
        debug_token_annotation: Prefix every result with the original token,
            or with ``empty token`` for empty input (default: False).
        default_locale: Ultimate fallback locale ending every chain
            (default: "en").
        soft_failure_suffixes: Token endings that suppress the total-miss
            diagnostic (default: {"Tooltip", "Note"}). Any iterable of
            strings is accepted and stored as a frozenset.
        default_result: Value returned when nothing is found (normal mode).
        default_debug_result: Value returned when nothing is found (debug mode).
        application_namespace: Namespace searched first for every token.
        framework_namespace: Namespace searched after the application
            namespace for base-prefixed (``ns::``) tokens.
        cldr_locale_names: Let ``get_locale_name`` fall back to CLDR display
            names (via Babel) before returning the identifier unchanged
            (default: False).

    Example:
        >>> config = ResolverConfig(debug_token_annotation=True)
        >>> config.default_locale
        'en'
        >>> sorted(config.soft_failure_suffixes)
        ['Note', 'Tooltip']
    """

    debug_mode: bool = False
    debug_token_annotation: bool = False
    default_locale: str = DEFAULT_LOCALE
    soft_failure_suffixes: frozenset[str] = field(
        default=frozenset(DEFAULT_SOFT_FAILURE_SUFFIXES)
    )
    default_result: str = DEFAULT_RESULT
    default_debug_result: str = DEFAULT_DEBUG_RESULT
    application_namespace: str = APPLICATION_NAMESPACE
    framework_namespace: str = FRAMEWORK_NAMESPACE
    cldr_locale_names: bool = False

    def __post_init__(self) -> None:
        """Normalize and validate configuration values at construction time.

        Raises:
            InvalidLocaleError: If default_locale is empty or malformed
            ValueError: If a fallback message or namespace is empty, if the
                namespaces are equal, or if a soft suffix is empty
        """
        object.__setattr__(self, "default_locale", validate_locale(self.default_locale))

        suffixes = self.soft_failure_suffixes
        if isinstance(suffixes, str):
            suffixes = (suffixes,)
        suffixes = frozenset(suffixes)
        if any(not suffix for suffix in suffixes):
            msg = "soft_failure_suffixes must not contain empty strings"
            raise ValueError(msg)
        object.__setattr__(self, "soft_failure_suffixes", suffixes)

        if not self.default_result or not self.default_debug_result:
            msg = "default_result and default_debug_result must be non-empty"
            raise ValueError(msg)
        if not self.application_namespace or not self.framework_namespace:
            msg = "application_namespace and framework_namespace must be non-empty"
            raise ValueError(msg)
        if self.application_namespace == self.framework_namespace:
            msg = (
                "application_namespace and framework_namespace must differ, "
                f"got {self.application_namespace!r} for both"
            )
            raise ValueError(msg)

    @property
    def miss_result(self) -> str:
        """Value returned for a total miss under the current debug setting."""
        return self.default_debug_result if self.debug_mode else self.default_result

    def is_soft_failure(self, token: str) -> bool:
        """Check if a missing token should be left out of diagnostics."""
        return any(token.endswith(suffix) for suffix in self.soft_failure_suffixes)

    def with_changes(self, **changes: Any) -> ResolverConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResolverConfig:
        """Build configuration from ``PHRASEBOOK_*`` environment variables.

        Recognized variables:
            PHRASEBOOK_DEBUG: enable debug mode (1/true/yes/on)
            PHRASEBOOK_DEBUG_TOKEN: enable token annotation
            PHRASEBOOK_DEFAULT_LOCALE: ultimate fallback locale
            PHRASEBOOK_SOFT_SUFFIXES: comma-separated soft-failure suffixes
            PHRASEBOOK_CLDR_NAMES: enable CLDR locale display names

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            InvalidLocaleError: If PHRASEBOOK_DEFAULT_LOCALE is malformed
        """
        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {
            "debug_mode": _env_flag(env, "DEBUG"),
            "debug_token_annotation": _env_flag(env, "DEBUG_TOKEN"),
            "cldr_locale_names": _env_flag(env, "CLDR_NAMES"),
        }
        default_locale = env.get(ENV_PREFIX + "DEFAULT_LOCALE", "").strip()
        if default_locale:
            changes["default_locale"] = default_locale
        suffixes = env.get(ENV_PREFIX + "SOFT_SUFFIXES")
        if suffixes is not None:
            changes["soft_failure_suffixes"] = _split_suffixes(suffixes)
        return cls(**changes)


def _split_suffixes(value: str) -> Iterable[str]:
    return tuple(part.strip() for part in value.split(",") if part.strip())
