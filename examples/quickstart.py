"""Quickstart - resolving tokens with locale and namespace fallback.

Demonstrates:
1. Registering in-memory locale sources
2. Locale fallback (de_AT -> de -> en)
3. Framework defaults overridden by the application
4. Debug annotation for finding which UI element uses which token

Python 3.13+.
"""

from __future__ import annotations

import logging

from phrasebook import MappingLocaleSource, Resolver, ResolverConfig


def build_resolver(config: ResolverConfig | None = None) -> Resolver:
    """Create a resolver with a small set of application and framework sources."""
    resolver = Resolver(config=config)
    resolver.register_locale_source(
        "application",
        "en",
        MappingLocaleSource(
            {
                "menu": {"file": "File", "edit": "Edit", "help": "Help"},
                "greeting": "Welcome",
            },
            locale_name="English",
        ),
    )
    resolver.register_locale_source(
        "application",
        "de",
        MappingLocaleSource(
            {"menu": {"file": "Datei", "edit": "Bearbeiten"}, "greeting": "Willkommen"},
            locale_name="Deutsch",
        ),
    )
    resolver.register_locale_source(
        "framework",
        "en",
        MappingLocaleSource({"connection": {"error": "Database connection failed"}}),
    )
    resolver.register_locale_source(
        "framework",
        "de",
        MappingLocaleSource({"connection": {"error": "Datenbankverbindung fehlgeschlagen"}}),
    )
    return resolver


def example_1_locale_fallback() -> None:
    """Example 1: Missing translations fall back to less specific locales."""
    print("=" * 60)
    print("Example 1: Locale fallback (de_AT -> de -> en)")
    print("=" * 60)

    resolver = build_resolver()
    for token in ("menu.file", "menu.edit", "menu.help", "greeting"):
        result = resolver.resolve_detailed(token, "de_AT")
        print(f"{token:12} -> {result.final_value!r:20} (from {result.locale})")
    print(f"Locale name for de_AT: {resolver.get_locale_name('de_AT')}")
    print()


def example_2_framework_tokens() -> None:
    """Example 2: Application sources override framework defaults."""
    print("=" * 60)
    print("Example 2: Framework tokens")
    print("=" * 60)

    resolver = build_resolver()
    print(resolver.resolve("db::connection.error", "de"))

    resolver.register_locale_source(
        "application",
        "en",
        MappingLocaleSource({"db": {"connection": {"error": "Our servers are busy"}}}),
    )
    print(resolver.resolve("db::connection.error", "de"))
    print()


def example_3_debug_annotation() -> None:
    """Example 3: Prefix every string with the token that produced it."""
    print("=" * 60)
    print("Example 3: Debug annotation")
    print("=" * 60)

    resolver = build_resolver(ResolverConfig(debug_token_annotation=True))
    print(resolver.resolve("menu.file", "de"))
    print(resolver.resolve("menu.quit", "de"))
    print(resolver.resolve("menu.quitTooltip", "de"))
    print(resolver.resolve(""))
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.ERROR, format="%(levelname)s %(name)s: %(message)s")
    example_1_locale_fallback()
    example_2_framework_tokens()
    example_3_debug_annotation()
