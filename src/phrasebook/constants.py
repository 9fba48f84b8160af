"""Shared constants for phrasebook.

This module provides centralized configuration defaults used across
the locale utilities, candidate builder and resolver. Placing constants
here avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locales: Ultimate fallback locale
- Namespaces: Default application and framework namespace names
- Token syntax: Separators used when parsing tokens and locale identifiers
- Fallback strings: Messages returned when resolution fails

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "DEFAULT_LOCALE",
    # Namespaces
    "APPLICATION_NAMESPACE",
    "FRAMEWORK_NAMESPACE",
    # Token syntax
    "BASE_SEPARATOR",
    "PATH_SEPARATOR",
    "LOCALE_SEPARATOR",
    "DEBUG_SEGMENT",
    # Fallback strings
    "DEFAULT_RESULT",
    "DEFAULT_DEBUG_RESULT",
    "DEBUG_PREFIX",
    "EMPTY_TOKEN_MARKER",
    "ANNOTATION_SEPARATOR",
    "DEFAULT_SOFT_FAILURE_SUFFIXES",
]

# ============================================================================
# LOCALES
# ============================================================================

# Every locale chain ends here.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# NAMESPACES
# ============================================================================

# Searched first for every token; application overrides outrank framework defaults.
APPLICATION_NAMESPACE: str = "application"

# Searched after the application namespace for base-prefixed tokens only.
FRAMEWORK_NAMESPACE: str = "framework"

# ============================================================================
# TOKEN SYNTAX
# ============================================================================

# "db::connection.error" -> base namespace "db"
BASE_SEPARATOR: str = "::"

# "connection.error" -> segment "connection", path ("error",)
PATH_SEPARATOR: str = "."

# "de_DE" -> ("de_DE", "de")
LOCALE_SEPARATOR: str = "_"

# "a.b.c" -> "a.debug.b.c" when debug mode is active
DEBUG_SEGMENT: str = "debug"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Returned when no candidate yields a string (normal mode).
DEFAULT_RESULT: str = "An unexpected error occurred"

# Returned when no candidate yields a string (debug mode).
DEFAULT_DEBUG_RESULT: str = "No locale found"

# Inserted between the token annotation and the value in debug mode.
DEBUG_PREFIX: str = "DEBUG: "

# Annotation used in place of an empty token.
EMPTY_TOKEN_MARKER: str = "empty token"

# "<token>: <value>"
ANNOTATION_SEPARATOR: str = ": "

# Tokens with these endings are often absent on purpose (optional labels).
DEFAULT_SOFT_FAILURE_SUFFIXES: tuple[str, ...] = ("Tooltip", "Note")
