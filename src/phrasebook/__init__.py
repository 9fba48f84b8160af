"""phrasebook - token-to-string localization with locale fallback.

Resolves dotted lookup keys ("tokens") to display strings from per-locale,
per-namespace sources. Missing translations fall back from the most specific
locale to the default locale ('de_DE' -> 'de' -> 'en'), and application
sources override framework sources for base-prefixed tokens ('db::...').
Resolution never raises: a miss yields a configurable default message and
a diagnostic log entry.

Public API:
    resolve - Resolve a token with the process-wide resolver
    resolve_detailed - Same, returning a ResolutionResult
    get_locale_name - Display name of a locale
    register_locale_source - Register a source with the process-wide resolver
    configure - Change process-wide configuration
    Resolver - Resolver instance with its own registry and configuration
    ResolverConfig - Immutable resolver configuration
    MappingLocaleSource, PathLocaleSource - Locale source implementations

Exceptions:
    PhrasebookError - Base exception class
    InvalidLocaleError - Malformed locale identifier
    SourceRegistrationError - Invalid locale source registration

Submodules:
    phrasebook.localization - Sources, session providers, candidate builder, resolver
    phrasebook.locale_utils - Locale chain construction and Babel helpers
"""

from .api import (
    build_candidates,
    configure,
    get_locale_name,
    get_resolver,
    register_locale_source,
    reset_resolver,
    resolve,
    resolve_detailed,
    set_session_provider,
)
from .config import ResolverConfig
from .diagnostics import InvalidLocaleError, PhrasebookError, SourceRegistrationError
from .localization import (
    ContextLocaleProvider,
    MappingLocaleSource,
    PathLocaleSource,
    ResolutionResult,
    Resolver,
    SourceRegistry,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("phrasebook")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ContextLocaleProvider",
    "InvalidLocaleError",
    "MappingLocaleSource",
    "PathLocaleSource",
    "PhrasebookError",
    "ResolutionResult",
    "Resolver",
    "ResolverConfig",
    "SourceRegistrationError",
    "SourceRegistry",
    "__version__",
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
