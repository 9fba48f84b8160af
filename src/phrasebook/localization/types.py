"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating resolver call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "LocaleCode",
    "Namespace",
    "Segment",
    "SourceData",
    "Token",
]

type Token = str
"""Dotted lookup key, optionally base-prefixed (e.g., 'greeting', 'db::connection.error')."""

type LocaleCode = str
"""POSIX-style locale identifier (e.g., 'en', 'de_DE')."""

type Namespace = str
"""Locale-source namespace (e.g., 'application', 'framework')."""

type Segment = str
"""Top-level token segment a locale source materializes (e.g., 'greeting')."""

type SourceData = str | Mapping[str, SourceData]
"""Materialized segment data: a leaf string or a nested mapping."""
