"""Locale sources and the source registry.

A locale source provides translated strings for one (namespace, locale)
pair. Each source covers a set of top-level token segments and returns the
data for a segment on request; the resolver then walks the remaining token
path through that data.

Components:
    LocaleSource - Protocol for locale sources (structural typing)
    MappingLocaleSource - In-memory source over a nested mapping
    PathLocaleSource - JSON file source with path-traversal prevention
    SourceRegistry - Explicit (namespace, locale) -> source registry
    register_path_sources - Register JSON sources for several locales

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from phrasebook.diagnostics import SourceRegistrationError
from phrasebook.locale_utils import normalize_locale, validate_locale
from phrasebook.localization.types import LocaleCode, Namespace, Segment, SourceData

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "LocaleSource",
    "SourceProvider",
    # Concrete sources
    "MappingLocaleSource",
    "PathLocaleSource",
    # Registry
    "SourceRegistry",
    "register_path_sources",
    "LOCALE_NAME_KEY",
]

logger = logging.getLogger(__name__)

# Top-level key holding the display name in JSON locale files.
LOCALE_NAME_KEY = "@locale_name"


class LocaleSource(Protocol):
    """Protocol for locale sources.

    Implementations provide a load() method returning the data stored under
    a top-level token segment, and a locale_name giving the display name of
    the locale (empty if not configured).

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom sources.

    Example:
        >>> class GermanLabels:
        ...     locale_name = "Deutsch"
        ...     def load(self, segment: str):
        ...         if segment == "button":
        ...             return {"save": "Speichern", "cancel": "Abbrechen"}
        ...         return None
        ...
        >>> registry = SourceRegistry()
        >>> registry.register("application", "de", GermanLabels())
    """

    @property
    def locale_name(self) -> str:
        """Display name of the locale (e.g., 'Deutsch'), or an empty string."""
        ...

    def load(self, segment: Segment) -> SourceData | None:
        """Materialize the data stored under a top-level segment.

        Args:
            segment: Top-level token segment (e.g., 'button')

        Returns:
            A leaf string, a nested mapping of string keys to strings or
            mappings, or None if this source does not cover the segment
        """
        ...


type SourceProvider = LocaleSource | Callable[[], LocaleSource | None]
"""A locale source instance, or a zero-argument factory creating one per lookup."""


@dataclass(frozen=True, slots=True)
class MappingLocaleSource:
    """In-memory locale source over a nested mapping.

    Top-level keys are token segments; values are strings or nested
    mappings. Non-string, non-mapping values are treated as absent.

    Example:
        >>> source = MappingLocaleSource(
        ...     {"greeting": "Hallo", "button": {"save": "Speichern"}},
        ...     locale_name="Deutsch",
        ... )
        >>> source.load("button")
        {'save': 'Speichern'}
        >>> source.load("missing") is None
        True

    Attributes:
        data: Segment name to segment data
        locale_name: Display name of the locale
    """

    data: Mapping[str, Any] = field(default_factory=dict)
    locale_name: str = ""

    def load(self, segment: Segment) -> SourceData | None:
        """Return the data stored under ``segment``, or None."""
        value = self.data.get(segment)
        if isinstance(value, str | Mapping):
            return value
        return None


class PathLocaleSource:
    """Locale source backed by a JSON file.

    The file holds one JSON object whose top-level keys are token segments.
    The optional ``"@locale_name"`` key holds the locale's display name.
    The file is read on first access and cached for the lifetime of the
    source; register one instance per (namespace, locale) to read each file
    once.

    Example:
        >>> # locales/de/application.json: {"@locale_name": "Deutsch",
        >>> #                               "greeting": "Hallo"}
        >>> source = PathLocaleSource.from_template(
        ...     "locales/{locale}/{namespace}.json", "application", "de"
        ... )
        >>> source.load("greeting")
        'Hallo'
    """

    __slots__ = ("_data", "_lock", "_path")

    def __init__(self, path: str | Path) -> None:
        """Initialize source for a JSON file.

        Args:
            path: Path to the JSON file (not read until first access)
        """
        self._path = Path(path)
        self._data: dict[str, Any] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_template(
        cls,
        base_path: str,
        namespace: Namespace,
        locale: LocaleCode,
        *,
        root_dir: str | None = None,
    ) -> PathLocaleSource:
        """Create a source from a path template.

        Args:
            base_path: Path template containing a ``{locale}`` placeholder and
                optionally a ``{namespace}`` placeholder
                (e.g., "locales/{locale}/{namespace}.json")
            namespace: Namespace substituted for ``{namespace}``
            locale: Locale code substituted for ``{locale}``
            root_dir: Fixed root directory for path traversal validation.
                Defaults to the static prefix of base_path.

        Raises:
            ValueError: If base_path lacks ``{locale}``, if namespace or locale
                contain path components, or if the resolved path escapes
                the root directory
        """
        if "{locale}" not in base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{base_path}'"
            )
            raise ValueError(msg)
        for label, value in (("locale", locale), ("namespace", namespace)):
            if not value:
                msg = f"{label.capitalize()} cannot be empty"
                raise ValueError(msg)
            if ".." in value or "/" in value or "\\" in value:
                msg = f"Path components not allowed in {label}: '{value}'"
                raise ValueError(msg)

        if root_dir is not None:
            root = Path(root_dir).resolve()
        else:
            static_prefix = base_path.split("{", 1)[0].rstrip("/\\")
            root = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()

        # replace() instead of format(): other braces in the template stay literal
        full_path = Path(
            base_path.replace("{locale}", locale).replace("{namespace}", namespace)
        ).resolve()
        try:
            full_path.relative_to(root)
        except ValueError:
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"namespace='{namespace}', locale='{locale}'"
            )
            raise ValueError(msg) from None
        return cls(full_path)

    @property
    def path(self) -> Path:
        """Path of the backing JSON file."""
        return self._path

    @property
    def locale_name(self) -> str:
        """Display name from the ``"@locale_name"`` key, or an empty string.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a JSON object
        """
        name = self._read().get(LOCALE_NAME_KEY)
        return name if isinstance(name, str) else ""

    def load(self, segment: Segment) -> SourceData | None:
        """Return the data stored under ``segment``, or None.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a JSON object
        """
        if segment == LOCALE_NAME_KEY:
            return None
        value = self._read().get(segment)
        if isinstance(value, str | Mapping):
            return value
        return None

    def _read(self) -> dict[str, Any]:
        if self._data is None:
            with self._lock:
                if self._data is None:
                    data = json.loads(self._path.read_text(encoding="utf-8"))
                    if not isinstance(data, dict):
                        msg = f"Locale file {self._path} must contain a JSON object"
                        raise ValueError(msg)
                    logger.debug("Loaded locale file %s: %d segments", self._path, len(data))
                    self._data = data
        return self._data

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"PathLocaleSource({str(self._path)!r})"


class SourceRegistry:
    """Registry of locale sources keyed by exact (namespace, locale).

    Replaces discovery by naming convention: a source exists for a
    (namespace, locale) pair only if it was registered. Providers are either
    source instances (shared across lookups) or zero-argument factories
    (called on every lookup, e.g. to build a fresh source per request).

    Thread-safe: registration is serialized by an internal lock; lookups
    read an immutable snapshot and never block.

    Example:
        >>> registry = SourceRegistry()
        >>> registry.register("application", "en", MappingLocaleSource({"greeting": "Hello"}))
        >>> registry.is_registered("application", "en")
        True
        >>> registry.create("application", "de") is None
        True
    """

    __slots__ = ("_lock", "_providers")

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._providers: dict[tuple[Namespace, LocaleCode], SourceProvider] = {}
        self._lock = threading.Lock()

    def register(self, namespace: Namespace, locale: LocaleCode, provider: SourceProvider) -> None:
        """Register a locale source for a namespace and locale.

        Re-registering the same (namespace, locale) replaces the provider.

        Args:
            namespace: Namespace (e.g., 'application', 'framework')
            locale: Locale code; hyphens are normalized to underscores
            provider: LocaleSource instance, or zero-argument factory (a class
                or callable) returning one

        Raises:
            SourceRegistrationError: If namespace is empty or provider is
                neither a source nor callable
            InvalidLocaleError: If locale is malformed
        """
        if not isinstance(namespace, str) or not namespace.strip():
            msg = f"Namespace must be a non-empty string, got {namespace!r}"
            raise SourceRegistrationError(msg)
        if not _is_factory(provider) and not _is_source(provider):
            msg = (
                f"Provider for {namespace}/{locale} must be a locale source or a "
                f"zero-argument factory, got {type(provider).__name__}"
            )
            raise SourceRegistrationError(msg)
        key = (namespace, validate_locale(locale))
        with self._lock:
            providers = dict(self._providers)
            providers[key] = provider
            self._providers = providers
        logger.debug("Registered locale source %s/%s: %r", key[0], key[1], provider)

    def unregister(self, namespace: Namespace, locale: LocaleCode) -> bool:
        """Remove a registration.

        Returns:
            True if a provider was registered and removed
        """
        key = (namespace, normalize_locale(locale))
        with self._lock:
            if key not in self._providers:
                return False
            providers = dict(self._providers)
            del providers[key]
            self._providers = providers
        return True

    def is_registered(self, namespace: Namespace, locale: LocaleCode) -> bool:
        """Check if a provider is registered for the exact (namespace, locale)."""
        return (namespace, normalize_locale(locale)) in self._providers

    def keys(self) -> tuple[tuple[Namespace, LocaleCode], ...]:
        """Get all registered (namespace, locale) pairs in registration order."""
        return tuple(self._providers)

    def clear(self) -> None:
        """Remove all registrations."""
        with self._lock:
            self._providers = {}

    def create(self, namespace: Namespace, locale: LocaleCode) -> LocaleSource | None:
        """Get the source for an exact (namespace, locale), or None.

        Factories are called on every lookup. A factory returning None is
        treated like a missing registration. Whatever the factory raises
        propagates; the resolver logs it and treats the source as missing.
        """
        provider = self._providers.get((namespace, locale))
        if provider is None:
            return None
        if _is_factory(provider):
            return provider()  # type: ignore[operator]
        return provider  # type: ignore[return-value]

    def __len__(self) -> int:
        """Return number of registered providers."""
        return len(self._providers)

    def __contains__(self, key: object) -> bool:
        """Check membership of a (namespace, locale) pair."""
        return key in self._providers

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"SourceRegistry(sources={len(self._providers)})"


def _is_factory(provider: object) -> bool:
    return isinstance(provider, type) or (callable(provider) and not _is_source(provider))


def _is_source(provider: object) -> bool:
    return not isinstance(provider, type) and callable(getattr(provider, "load", None))


def register_path_sources(
    registry: SourceRegistry,
    base_path: str,
    namespace: Namespace,
    locales: Iterable[LocaleCode],
    *,
    root_dir: str | None = None,
) -> tuple[PathLocaleSource, ...]:
    """Register a JSON-backed source for each locale.

    Files are not read here; a missing file surfaces as a skipped source
    at resolution time, so locales may be partially implemented.

    Example:
        >>> registry = SourceRegistry()
        >>> register_path_sources(
        ...     registry, "locales/{locale}/{namespace}.json", "application", ["en", "de"]
        ... )

    Returns:
        The registered sources, in locale order

    Raises:
        ValueError: If base_path lacks ``{locale}`` or a locale is unsafe
        InvalidLocaleError: If a locale is malformed
    """
    sources: list[PathLocaleSource] = []
    for locale in locales:
        normalized = validate_locale(locale)
        source = PathLocaleSource.from_template(
            base_path, namespace, normalized, root_dir=root_dir
        )
        registry.register(namespace, normalized, source)
        sources.append(source)
    return tuple(sources)
