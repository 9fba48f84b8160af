"""Token resolution across locale sources with fallback.

Implements the Resolver: consumes the ordered candidate list, asks each
registered locale source to materialize the token's top-level segment,
walks the remaining path, and returns the first string found. A total
miss never raises; it yields the configured default message and, unless
the token ends with a soft-failure suffix, a diagnostic report.

Key architectural decisions:
- Explicit SourceRegistry lookup instead of discovery by naming convention
- Materialized segment data is returned and passed to the path walk; no
  state is shared between calls, so one Resolver serves concurrent callers
- Configuration is an immutable snapshot read once per call
- Observability via logging and optional on_miss/on_fallback callbacks

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from phrasebook.config import ResolverConfig
from phrasebook.constants import ANNOTATION_SEPARATOR, DEBUG_PREFIX, EMPTY_TOKEN_MARKER
from phrasebook.enums import ProbeStatus
from phrasebook.locale_utils import get_cldr_display_name, locale_prefixes
from phrasebook.localization.candidates import (
    Candidate,
    SourceRef,
    build_candidates,
    resolve_locale,
)
from phrasebook.localization.session import SessionLocaleProvider
from phrasebook.localization.sources import LocaleSource, SourceProvider, SourceRegistry
from phrasebook.localization.types import LocaleCode, Namespace, SourceData, Token

__all__ = [
    "FallbackInfo",
    "MissReport",
    "ProbeResult",
    "ResolutionResult",
    "Resolver",
]

logger = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of probing one candidate.

    Attributes:
        candidate: The candidate that was probed
        status: What happened (matched, missing source, missing path, ...)
    """

    candidate: Candidate
    status: ProbeStatus


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Detailed result of resolving one token.

    ``final_value`` is never None, and is non-empty unless a source defines
    an empty string. Use ``found`` to tell a resolved string apart from the
    default message: a source may define a string equal to it, or an empty one.

    Attributes:
        found: True if a candidate yielded a string
        token: The token as requested
        final_value: String to display (resolved or default, annotated if enabled)
        matched_token: Candidate token that matched (may be a debug variant
            or the framework-side token), None if not found
        raw_value: Resolved string before annotation, None if not found
        locale: Locale of the matching source, None if not found
        namespace: Namespace of the matching source, None if not found
        probes: Every candidate probed, in order, with its outcome
    """

    found: bool
    token: Token
    final_value: str
    matched_token: Token | None = None
    raw_value: str | None = None
    locale: LocaleCode | None = None
    namespace: Namespace | None = None
    probes: tuple[ProbeResult, ...] = ()

    @property
    def probed_sources(self) -> tuple[SourceRef, ...]:
        """Distinct sources probed, in probe order."""
        return tuple(dict.fromkeys(p.candidate.source for p in self.probes))

    def __str__(self) -> str:
        """Return the final value."""
        return self.final_value


@dataclass(frozen=True, slots=True)
class MissReport:
    """Diagnostic record of a token no source could resolve.

    Provided to the on_miss callback for every total miss that is not
    suppressed by a soft-failure suffix.

    Attributes:
        token: The token as requested
        probed_sources: Sources that were probed, in order
    """

    token: Token
    probed_sources: tuple[SourceRef, ...]

    def __str__(self) -> str:
        """Return a one-line description for logs."""
        sources = ", ".join(str(source) for source in self.probed_sources)
        return f"No locale source found: {sources} - Token: {self.token}"


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when a token is resolved from a
    locale other than the most specific one requested.

    Attributes:
        requested_locale: The first (most specific) locale in the chain
        resolved_locale: The locale whose source contained the token
        token: The token as requested
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    token: Token


class Resolver:
    """Resolves tokens to strings using registered locale sources.

    Example:
        >>> from phrasebook.localization.sources import MappingLocaleSource
        >>> resolver = Resolver()
        >>> resolver.register_locale_source(
        ...     "application", "en", MappingLocaleSource({"greeting": "Hello"})
        ... )
        >>> resolver.resolve("greeting", "de_DE")
        'Hello'
        >>> resolver.register_locale_source(
        ...     "application", "de", MappingLocaleSource({"greeting": "Hallo"})
        ... )
        >>> resolver.resolve("greeting", "de_DE")
        'Hallo'

    Thread safety: resolution keeps all intermediate state in local
    variables. configure() swaps the immutable config under a lock; calls
    already running keep the snapshot they started with.
    """

    __slots__ = ("_config", "_config_lock", "_on_fallback", "_on_miss", "_registry", "_session")

    def __init__(
        self,
        registry: SourceRegistry | None = None,
        config: ResolverConfig | None = None,
        session: SessionLocaleProvider | None = None,
        *,
        on_miss: Callable[[MissReport], None] | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            registry: Locale source registry (a new empty one if None)
            config: Resolver configuration (defaults if None)
            session: Current-session locale provider, consulted when no
                explicit locale is passed
            on_miss: Optional callback invoked for every reported total miss,
                in addition to the error log entry
            on_fallback: Optional callback invoked when a token is resolved
                from a less specific locale than the one requested. Useful
                for finding missing translations.
        """
        self._registry = registry if registry is not None else SourceRegistry()
        self._config = config if config is not None else ResolverConfig()
        self._config_lock = threading.Lock()
        self._session = session
        self._on_miss = on_miss
        self._on_fallback = on_fallback

    @property
    def config(self) -> ResolverConfig:
        """Current configuration snapshot."""
        return self._config

    @property
    def registry(self) -> SourceRegistry:
        """Locale source registry."""
        return self._registry

    @property
    def session(self) -> SessionLocaleProvider | None:
        """Current-session locale provider."""
        return self._session

    @session.setter
    def session(self, provider: SessionLocaleProvider | None) -> None:
        self._session = provider

    def configure(self, **changes: Any) -> ResolverConfig:
        """Replace configuration fields.

        Example:
            >>> resolver = Resolver()
            >>> resolver.configure(debug_token_annotation=True).debug_token_annotation
            True

        Returns:
            The new configuration

        Raises:
            ValueError: If the new configuration is invalid; the previous
                configuration stays in effect
        """
        with self._config_lock:
            self._config = self._config.with_changes(**changes)
            return self._config

    def register_locale_source(
        self, namespace: Namespace, locale: LocaleCode, provider: SourceProvider
    ) -> None:
        """Register a locale source; see SourceRegistry.register()."""
        self._registry.register(namespace, locale, provider)

    def build_candidates(
        self, token: Token, locale: LocaleCode | None = None
    ) -> tuple[Candidate, ...]:
        """Build the ordered candidate list using this resolver's settings."""
        return build_candidates(token, locale, config=self._config, session=self._session)

    def resolve(self, token: Token, locale: LocaleCode | None = None) -> str:
        """Resolve a token to a display string.

        Never raises for missing data or broken sources: the configured
        default message is returned instead. Use resolve_detailed() to tell the two apart.

        Args:
            token: Token (e.g., 'greeting', 'button.save', 'db::connection.error')
            locale: Locale code; defaults to the session locale, then the
                default locale

        Returns:
            Display string (the default message on a miss)
        """
        return self.resolve_detailed(token, locale).final_value

    def resolve_detailed(
        self, token: Token, locale: LocaleCode | None = None
    ) -> ResolutionResult:
        """Resolve a token and report how the result was obtained.

        Args:
            token: Token to resolve
            locale: Locale code; defaults to the session locale, then the
                default locale

        Returns:
            ResolutionResult with found flag, matched token, raw and final values
        """
        return self._resolve(token, locale, self._config, report=True)

    def has_token(self, token: Token, locale: LocaleCode | None = None) -> bool:
        """Check if a token resolves to a string, without emitting diagnostics."""
        return self._resolve(token, locale, self._config, report=False).found

    def get_locale_name(self, locale: LocaleCode) -> str:
        """Get the display name configured for a locale.

        Searches the locale's own prefixes ('de_DE', then 'de'), application
        sources first, then framework sources. The default locale is not
        consulted, so a German locale never reports the English name.

        Args:
            locale: Locale code

        Returns:
            First non-empty display name found, else (if cldr_locale_names
            is enabled) the CLDR display name, else ``locale`` unchanged
        """
        config = self._config
        prefixes = locale_prefixes(locale)
        for namespace in (config.application_namespace, config.framework_namespace):
            for prefix in prefixes:
                source = self._create_source(SourceRef(namespace, prefix))
                if source is None:
                    continue
                try:
                    name = source.locale_name
                except Exception:  # pylint: disable=broad-exception-caught
                    logger.warning(
                        "Locale source %s/%s failed to report its name",
                        namespace,
                        prefix,
                        exc_info=True,
                    )
                    continue
                if name:
                    return name
        if config.cldr_locale_names and locale.strip():
            cldr_name = get_cldr_display_name(locale)
            if cldr_name:
                return cldr_name
        return locale

    def _resolve(
        self,
        token: Token,
        locale: LocaleCode | None,
        config: ResolverConfig,
        *,
        report: bool,
    ) -> ResolutionResult:
        if not token:
            return ResolutionResult(
                found=False, token=token, final_value=self._compose(None, token, config)
            )

        candidates = build_candidates(token, locale, config=config, session=self._session)
        probes: list[ProbeResult] = []
        for candidate in candidates:
            status, value = self._probe(candidate)
            probes.append(ProbeResult(candidate, status))
            if status is ProbeStatus.MATCHED:
                self._notify_fallback(token, candidate, candidates)
                return ResolutionResult(
                    found=True,
                    token=token,
                    final_value=self._compose(value, token, config),
                    matched_token=candidate.token,
                    raw_value=value,
                    locale=candidate.locale,
                    namespace=candidate.namespace,
                    probes=tuple(probes),
                )

        result = ResolutionResult(
            found=False,
            token=token,
            final_value=self._compose(None, token, config),
            probes=tuple(probes),
        )
        if report and not config.is_soft_failure(token):
            self._report_miss(MissReport(token, result.probed_sources))
        return result

    def _probe(self, candidate: Candidate) -> tuple[ProbeStatus, str | None]:
        source = self._create_source(candidate.source)
        if source is None:
            return ProbeStatus.MISSING_SOURCE, None
        try:
            data = self._materialize(source, candidate)
            if data is None:
                return ProbeStatus.MISSING_SEGMENT, None
            return self._walk(data, candidate.path)
        except Exception:  # pylint: disable=broad-exception-caught
            # A broken source never fails resolution; the next candidate is tried.
            logger.warning(
                "Locale source %s failed to load %r",
                candidate.source,
                candidate.segment,
                exc_info=True,
            )
            return ProbeStatus.SOURCE_ERROR, None

    def _create_source(self, ref: SourceRef) -> LocaleSource | None:
        try:
            return self._registry.create(ref.namespace, ref.locale)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.debug("Locale source %s could not be created: %s", ref, e)
            return None

    @staticmethod
    def _materialize(source: LocaleSource, candidate: Candidate) -> SourceData | None:
        return source.load(candidate.segment)

    @staticmethod
    def _walk(data: SourceData, path: tuple[str, ...]) -> tuple[ProbeStatus, str | None]:
        node: object = data
        for key in path:
            if not isinstance(node, Mapping):
                return ProbeStatus.MISSING_PATH, None
            node = node.get(key)
            if node is None:
                return ProbeStatus.MISSING_PATH, None
        if isinstance(node, str):
            return ProbeStatus.MATCHED, node
        return ProbeStatus.NOT_A_STRING, None

    @staticmethod
    def _compose(value: str | None, token: Token, config: ResolverConfig) -> str:
        result = config.miss_result if value is None else value
        if config.debug_token_annotation:
            prefix = DEBUG_PREFIX if config.debug_mode else ""
            label = token if token else EMPTY_TOKEN_MARKER
            result = f"{label}{ANNOTATION_SEPARATOR}{prefix}{result}"
        return result

    def _notify_fallback(
        self, token: Token, match: Candidate, candidates: tuple[Candidate, ...]
    ) -> None:
        if self._on_fallback is None:
            return
        requested = candidates[0].locale
        if match.locale == requested:
            return
        try:
            self._on_fallback(FallbackInfo(requested, match.locale, token))
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("on_fallback callback failed for %r", token, exc_info=True)

    def _report_miss(self, miss: MissReport) -> None:
        logger.error("%s", miss)
        if self._on_miss is None:
            return
        try:
            self._on_miss(miss)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("on_miss callback failed for %r", miss.token, exc_info=True)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Resolver(sources={len(self._registry)}, "
            f"default_locale={self._config.default_locale!r}, "
            f"debug_mode={self._config.debug_mode})"
        )
