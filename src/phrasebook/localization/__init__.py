"""Token localization package.

Provides the full resolution stack: type aliases, locale sources and their
registry, session locale providers, the candidate builder and the resolver.

Submodules:
    types      - PEP 695 type aliases (Token, LocaleCode, Namespace, Segment, SourceData)
    sources    - LocaleSource protocol, MappingLocaleSource, PathLocaleSource,
                 SourceRegistry
    session    - SessionLocaleProvider protocol, ContextLocaleProvider,
                 SystemLocaleProvider
    candidates - Candidate builder (locale chain x namespace x debug variants)
    resolver   - Resolver, ResolutionResult, MissReport, FallbackInfo

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from phrasebook.enums import ProbeStatus
from phrasebook.localization.candidates import (
    Candidate,
    SourceRef,
    build_candidates,
    debug_variant,
    get_base_namespace,
    split_sub_token,
)
from phrasebook.localization.resolver import (
    FallbackInfo,
    MissReport,
    ProbeResult,
    ResolutionResult,
    Resolver,
)
from phrasebook.localization.session import (
    ContextLocaleProvider,
    SessionLocaleProvider,
    SystemLocaleProvider,
)
from phrasebook.localization.sources import (
    LocaleSource,
    MappingLocaleSource,
    PathLocaleSource,
    SourceProvider,
    SourceRegistry,
    register_path_sources,
)
from phrasebook.localization.types import LocaleCode, Namespace, Segment, SourceData, Token

__all__ = [
    # Resolver
    "Resolver",
    "ResolutionResult",
    "ProbeResult",
    "ProbeStatus",
    # Observability
    "MissReport",
    "FallbackInfo",
    # Candidate builder
    "Candidate",
    "SourceRef",
    "build_candidates",
    "debug_variant",
    "get_base_namespace",
    "split_sub_token",
    # Sources
    "LocaleSource",
    "SourceProvider",
    "MappingLocaleSource",
    "PathLocaleSource",
    "SourceRegistry",
    "register_path_sources",
    # Session locale
    "SessionLocaleProvider",
    "ContextLocaleProvider",
    "SystemLocaleProvider",
    # Type aliases for user code type annotations
    "LocaleCode",
    "Namespace",
    "Segment",
    "SourceData",
    "Token",
]
