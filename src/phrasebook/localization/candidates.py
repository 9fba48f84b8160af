"""Candidate builder: ordered lookup attempts for a token.

Expands one token and one locale into the full, ordered list of
(locale, source, token) lookups the resolver will try. Two fallback axes
are combined:

- Locale specificity: 'de_DE' -> 'de' -> default locale
- Namespace precedence: the application namespace is searched across the
  whole locale chain before the framework namespace, which is consulted
  only for base-prefixed tokens ('db::connection.error')

Ordering (first match wins, no merging):

    for namespace in (application, framework*):     * base-prefixed tokens only
        for token in (debug variant*, token):       * debug mode only
            for locale in locale chain:

Candidate construction is pure: it never touches locale sources.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from phrasebook.constants import BASE_SEPARATOR, DEBUG_SEGMENT, PATH_SEPARATOR
from phrasebook.locale_utils import build_locale_chain
from phrasebook.localization.types import LocaleCode, Namespace, Segment, Token

if TYPE_CHECKING:
    from phrasebook.config import ResolverConfig
    from phrasebook.localization.session import SessionLocaleProvider

__all__ = [
    "Candidate",
    "SourceRef",
    "build_candidates",
    "debug_variant",
    "get_base_namespace",
    "resolve_locale",
    "split_sub_token",
]


@dataclass(frozen=True, slots=True)
class SourceRef:
    """Identifies the locale source for a namespace and locale.

    Attributes:
        namespace: Source namespace (e.g., 'application')
        locale: Locale code (e.g., 'de_DE')
    """

    namespace: Namespace
    locale: LocaleCode

    def __str__(self) -> str:
        """Return 'namespace/locale' for diagnostics."""
        return f"{self.namespace}/{self.locale}"


@dataclass(frozen=True, slots=True)
class Candidate:
    """One lookup attempt: which source to ask and which token to probe.

    Attributes:
        locale: Locale code of the source
        source: Source reference (namespace and locale)
        token: Token probed within the source; its first segment (or base
            namespace) selects the data to materialize, the rest is the path
    """

    locale: LocaleCode
    source: SourceRef
    token: Token

    @property
    def namespace(self) -> Namespace:
        """Namespace of the source."""
        return self.source.namespace

    @property
    def segment(self) -> Segment:
        """Top-level segment the source materializes."""
        return split_sub_token(self.token)[0]

    @property
    def path(self) -> tuple[str, ...]:
        """Keys walked within the materialized segment data."""
        return split_sub_token(self.token)[1]


def get_base_namespace(token: Token) -> str | None:
    """Get the base namespace before '::', if present.

    The separator only counts when it appears strictly before the first
    '.'; a '::' inside the dotted path is part of a key.

    Example:
        >>> get_base_namespace("db::connection.error")
        'db'
        >>> get_base_namespace("connection.error") is None
        True
        >>> get_base_namespace("a.b::c") is None
        True
    """
    colon = token.find(BASE_SEPARATOR)
    if colon <= 0:
        return None
    period = token.find(PATH_SEPARATOR)
    if period == -1 or colon < period:
        return token[:colon]
    return None


def split_sub_token(token: Token) -> tuple[Segment, tuple[str, ...]]:
    """Split a token into its materialized segment and the path below it.

    A base-prefixed token materializes its base namespace; otherwise the
    first dotted segment is materialized.

    Example:
        >>> split_sub_token("connection.error")
        ('connection', ('error',))
        >>> split_sub_token("project::b.label")
        ('project', ('b', 'label'))
        >>> split_sub_token("greeting")
        ('greeting', ())
    """
    base = get_base_namespace(token)
    if base is not None:
        rest = token[len(base) + len(BASE_SEPARATOR):]
        return base, tuple(rest.split(PATH_SEPARATOR)) if rest else ()
    segment, *path = token.split(PATH_SEPARATOR)
    return segment, tuple(path)


def debug_variant(token: Token) -> Token:
    """Insert the debug segment after the first dotted segment.

    Example:
        >>> debug_variant("a.b.c")
        'a.debug.b.c'
        >>> debug_variant("greeting")
        'greeting.debug'
        >>> debug_variant("db::connection.error")
        'db::connection.debug.error'
    """
    head, sep, rest = token.partition(PATH_SEPARATOR)
    if not sep:
        return f"{head}{PATH_SEPARATOR}{DEBUG_SEGMENT}"
    return PATH_SEPARATOR.join((head, DEBUG_SEGMENT, rest))


def resolve_locale(
    locale: LocaleCode | None,
    session: SessionLocaleProvider | None = None,
) -> LocaleCode | None:
    """Pick the requested locale: explicit, else the session's, else None."""
    if locale:
        return locale
    if session is not None:
        return session.current_locale() or None
    return None


def _token_variants(token: Token, *, debug: bool) -> tuple[Token, ...]:
    if debug:
        return (debug_variant(token), token)
    return (token,)


def build_candidates(
    token: Token,
    locale: LocaleCode | None = None,
    *,
    config: ResolverConfig,
    session: SessionLocaleProvider | None = None,
) -> tuple[Candidate, ...]:
    """Build the ordered candidate list for a token.

    Args:
        token: Token to resolve (e.g., 'greeting', 'db::connection.error')
        locale: Requested locale; when None the session provider is asked,
            then the configured default locale is used
        config: Resolver configuration (default locale, debug mode, namespaces)
        session: Optional current-session locale provider

    Returns:
        Tuple of candidates in the order they must be tried

    Example:
        >>> from phrasebook.config import ResolverConfig
        >>> [
        ...     (str(c.source), c.token)
        ...     for c in build_candidates("db::conn.error", "de", config=ResolverConfig())
        ... ]
        [('application/de', 'db::conn.error'), ('application/en', 'db::conn.error'),
         ('framework/de', 'conn.error'), ('framework/en', 'conn.error')]
    """
    if not token:
        return ()

    chain = build_locale_chain(resolve_locale(locale, session), config.default_locale)

    routes: list[tuple[Namespace, Token]] = [(config.application_namespace, token)]
    base = get_base_namespace(token)
    if base is not None:
        framework_token = token[len(base) + len(BASE_SEPARATOR):]
        if framework_token:
            routes.append((config.framework_namespace, framework_token))

    return tuple(
        Candidate(locale=loc, source=SourceRef(namespace, loc), token=variant)
        for namespace, routed in routes
        for variant in _token_variants(routed, debug=config.debug_mode)
        for loc in chain
    )
