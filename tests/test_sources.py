"""Tests for locale sources and the SourceRegistry.

Python 3.13+.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from phrasebook.diagnostics import InvalidLocaleError, SourceRegistrationError
from phrasebook.localization.sources import (
    LOCALE_NAME_KEY,
    MappingLocaleSource,
    PathLocaleSource,
    SourceRegistry,
    register_path_sources,
)


class TestMappingLocaleSource:
    """Test the in-memory locale source."""

    def test_load_string_segment(self) -> None:
        """Top-level string returned as is."""
        source = MappingLocaleSource({"greeting": "Hello"})
        assert source.load("greeting") == "Hello"

    def test_load_nested_segment(self) -> None:
        """Nested mapping returned for path walking."""
        source = MappingLocaleSource({"button": {"save": "Save"}})
        assert source.load("button") == {"save": "Save"}

    def test_missing_segment(self) -> None:
        """Uncovered segment returns None."""
        assert MappingLocaleSource({}).load("button") is None

    def test_non_string_values_ignored(self) -> None:
        """Numbers and lists are not locale data."""
        source = MappingLocaleSource({"count": 3, "items": ["a"]})
        assert source.load("count") is None
        assert source.load("items") is None

    def test_locale_name(self) -> None:
        """Display name defaults to empty."""
        assert MappingLocaleSource().locale_name == ""
        assert MappingLocaleSource(locale_name="Deutsch").locale_name == "Deutsch"


class TestPathLocaleSource:
    """Test the JSON file locale source."""

    def _write(self, path: Path, data: object) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")

    def test_load_from_file(self, tmp_path: Path) -> None:
        """Segments loaded from a JSON object."""
        file = tmp_path / "de" / "application.json"
        self._write(file, {LOCALE_NAME_KEY: "Deutsch", "button": {"save": "Speichern"}})

        source = PathLocaleSource(file)

        assert source.load("button") == {"save": "Speichern"}
        assert source.locale_name == "Deutsch"
        assert source.load(LOCALE_NAME_KEY) is None

    def test_file_read_once(self, tmp_path: Path) -> None:
        """Data cached after first read."""
        file = tmp_path / "en.json"
        self._write(file, {"greeting": "Hello"})
        source = PathLocaleSource(file)

        assert source.load("greeting") == "Hello"
        file.unlink()
        assert source.load("greeting") == "Hello"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing file surfaces as FileNotFoundError on access."""
        source = PathLocaleSource(tmp_path / "missing.json")
        with pytest.raises(FileNotFoundError):
            source.load("greeting")

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        """Top-level JSON must be an object."""
        file = tmp_path / "en.json"
        self._write(file, ["greeting"])
        with pytest.raises(ValueError, match="JSON object"):
            PathLocaleSource(file).load("greeting")

    def test_from_template(self, tmp_path: Path) -> None:
        """Template placeholders substituted."""
        file = tmp_path / "locales" / "de" / "framework.json"
        self._write(file, {"connection": {"error": "DB Fehler"}})

        source = PathLocaleSource.from_template(
            str(tmp_path / "locales" / "{locale}" / "{namespace}.json"), "framework", "de"
        )

        assert source.path == file.resolve()
        assert source.load("connection") == {"error": "DB Fehler"}

    def test_template_requires_locale_placeholder(self, tmp_path: Path) -> None:
        """Template without {locale} rejected."""
        with pytest.raises(ValueError, match="placeholder"):
            PathLocaleSource.from_template(str(tmp_path / "en.json"), "application", "en")

    @pytest.mark.parametrize("locale", ["../etc", "de/DE", "de\\DE"])
    def test_template_rejects_path_components(self, tmp_path: Path, locale: str) -> None:
        """Locale cannot escape its directory."""
        with pytest.raises(ValueError, match="Path components"):
            PathLocaleSource.from_template(
                str(tmp_path / "{locale}" / "app.json"), "application", locale
            )

    def test_template_root_dir_enforced(self, tmp_path: Path) -> None:
        """Resolved path must stay inside root_dir."""
        with pytest.raises(ValueError, match="Path traversal"):
            PathLocaleSource.from_template(
                str(tmp_path / "{locale}.json"),
                "application",
                "en",
                root_dir=str(tmp_path / "elsewhere"),
            )


class TestSourceRegistry:
    """Test explicit (namespace, locale) registration."""

    def test_register_instance(self) -> None:
        """Instances returned as registered."""
        registry = SourceRegistry()
        source = MappingLocaleSource({"greeting": "Hello"})
        registry.register("application", "en", source)

        assert registry.create("application", "en") is source
        assert registry.is_registered("application", "en")
        assert ("application", "en") in registry
        assert len(registry) == 1

    def test_unregistered_returns_none(self) -> None:
        """Lookup is by exact key; nothing else matches."""
        registry = SourceRegistry()
        registry.register("application", "de", MappingLocaleSource())

        assert registry.create("application", "de_DE") is None
        assert registry.create("framework", "de") is None

    def test_factory_called_per_lookup(self) -> None:
        """Factories create a fresh source on every lookup."""
        calls: list[int] = []

        def factory() -> MappingLocaleSource:
            calls.append(1)
            return MappingLocaleSource({"greeting": "Hello"})

        registry = SourceRegistry()
        registry.register("application", "en", factory)

        first = registry.create("application", "en")
        second = registry.create("application", "en")

        assert first is not second
        assert len(calls) == 2

    def test_class_as_factory(self) -> None:
        """A source class is called to build instances."""

        class EnglishSource:
            locale_name = "English"

            def load(self, segment: str) -> str | None:
                return "Hello" if segment == "greeting" else None

        registry = SourceRegistry()
        registry.register("application", "en", EnglishSource)

        source = registry.create("application", "en")
        assert isinstance(source, EnglishSource)

    def test_factory_returning_none(self) -> None:
        """Factory returning None behaves like no registration."""
        registry = SourceRegistry()
        registry.register("application", "en", lambda: None)
        assert registry.create("application", "en") is None

    def test_locale_normalized(self) -> None:
        """Hyphenated locale stored in underscore form."""
        registry = SourceRegistry()
        registry.register("application", "de-DE", MappingLocaleSource())
        assert registry.keys() == (("application", "de_DE"),)

    def test_replace_registration(self) -> None:
        """Registering the same key again replaces the provider."""
        registry = SourceRegistry()
        registry.register("application", "en", MappingLocaleSource({"a": "1"}))
        replacement = MappingLocaleSource({"a": "2"})
        registry.register("application", "en", replacement)

        assert registry.create("application", "en") is replacement
        assert len(registry) == 1

    def test_unregister_and_clear(self) -> None:
        """Registrations can be removed."""
        registry = SourceRegistry()
        registry.register("application", "en", MappingLocaleSource())
        registry.register("framework", "en", MappingLocaleSource())

        assert registry.unregister("application", "en") is True
        assert registry.unregister("application", "en") is False
        registry.clear()
        assert len(registry) == 0

    def test_lookup_normalizes_hyphens(self) -> None:
        """is_registered and unregister accept the hyphenated form used at registration."""
        registry = SourceRegistry()
        registry.register("application", "de-DE", MappingLocaleSource())

        assert registry.is_registered("application", "de-DE")
        assert registry.is_registered("application", "de_DE")
        assert registry.unregister("application", "de-DE") is True
        assert not registry.is_registered("application", "de-DE")

    @pytest.mark.parametrize("namespace", ["", "   "])
    def test_empty_namespace_rejected(self, namespace: str) -> None:
        """Namespace must be non-empty."""
        with pytest.raises(SourceRegistrationError):
            SourceRegistry().register(namespace, "en", MappingLocaleSource())

    def test_invalid_provider_rejected(self) -> None:
        """Provider must be a source or a factory."""
        with pytest.raises(SourceRegistrationError, match="int"):
            SourceRegistry().register("application", "en", 42)  # type: ignore[arg-type]

    def test_invalid_locale_rejected(self) -> None:
        """Malformed locale rejected at registration time."""
        with pytest.raises(InvalidLocaleError):
            SourceRegistry().register("application", "12", MappingLocaleSource())

    def test_repr(self) -> None:
        """repr shows registration count."""
        assert repr(SourceRegistry()) == "SourceRegistry(sources=0)"


class TestRegisterPathSources:
    """Test bulk registration of JSON sources."""

    def test_registers_each_locale(self, tmp_path: Path) -> None:
        """One source per locale, files not read yet."""
        registry = SourceRegistry()
        sources = register_path_sources(
            registry,
            str(tmp_path / "{locale}" / "{namespace}.json"),
            "application",
            ["en", "de-DE"],
        )

        assert registry.keys() == (("application", "en"), ("application", "de_DE"))
        assert [s.path for s in sources] == [
            (tmp_path / "en" / "application.json").resolve(),
            (tmp_path / "de_DE" / "application.json").resolve(),
        ]
