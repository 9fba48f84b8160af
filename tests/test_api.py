"""Tests for the process-wide API exposed from the phrasebook package.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

import phrasebook
from phrasebook import MappingLocaleSource, ResolutionResult, Resolver
from phrasebook.localization import ContextLocaleProvider, register_path_sources

pytestmark = pytest.mark.usefixtures("isolated_default_resolver")


class TestDefaultResolver:
    """Test lifecycle of the shared resolver."""

    def test_created_once(self) -> None:
        """get_resolver() returns the same instance until reset."""
        assert phrasebook.get_resolver() is phrasebook.get_resolver()

    def test_reset_to_custom_resolver(self) -> None:
        """reset_resolver() installs a given resolver."""
        custom = Resolver()
        phrasebook.reset_resolver(custom)
        assert phrasebook.get_resolver() is custom

    def test_reset_drops_sources(self) -> None:
        """reset_resolver() without argument starts from scratch."""
        phrasebook.register_locale_source("application", "en", MappingLocaleSource({"a": "b"}))
        phrasebook.reset_resolver()
        assert len(phrasebook.get_resolver().registry) == 0

    def test_config_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default resolver reads PHRASEBOOK_* variables on creation."""
        monkeypatch.setenv("PHRASEBOOK_DEBUG_TOKEN", "1")
        phrasebook.reset_resolver()

        assert phrasebook.resolve("") == "empty token: An unexpected error occurred"

    def test_version_exposed(self) -> None:
        """Package exposes a version string."""
        assert isinstance(phrasebook.__version__, str)


class TestModuleFunctions:
    """Test module-level resolution functions."""

    def test_resolve(self) -> None:
        """resolve() uses registered sources."""
        phrasebook.register_locale_source(
            "application", "en", MappingLocaleSource({"greeting": "Hello"})
        )
        phrasebook.register_locale_source(
            "application", "de", MappingLocaleSource({"greeting": "Hallo"})
        )

        assert phrasebook.resolve("greeting", "de_DE") == "Hallo"
        assert phrasebook.resolve("greeting", "fr") == "Hello"

    def test_resolve_detailed(self) -> None:
        """resolve_detailed() returns the full result."""
        phrasebook.register_locale_source(
            "framework", "en", MappingLocaleSource({"connection": {"error": "DB failed"}})
        )

        result = phrasebook.resolve_detailed("db::connection.error", "de")

        assert isinstance(result, ResolutionResult)
        assert result.found is True
        assert result.matched_token == "connection.error"
        assert result.raw_value == "DB failed"
        assert result.final_value == "DB failed"
        assert str(result) == "DB failed"

    def test_resolve_miss(self, caplog: pytest.LogCaptureFixture) -> None:
        """Misses return the default message and are logged."""
        with caplog.at_level(logging.ERROR):
            assert phrasebook.resolve("menu.missing") == "An unexpected error occurred"
        assert "menu.missing" in caplog.text

    def test_configure(self) -> None:
        """configure() changes the shared configuration."""
        phrasebook.configure(debug_mode=True)
        assert phrasebook.resolve("menu.missingNote") == "No locale found"

    def test_configure_invalid(self) -> None:
        """configure() validates changes."""
        with pytest.raises(phrasebook.InvalidLocaleError):
            phrasebook.configure(default_locale="")

    def test_set_session_provider(self) -> None:
        """Session provider consulted by resolve() without a locale."""
        session = ContextLocaleProvider()
        phrasebook.set_session_provider(session)
        phrasebook.register_locale_source(
            "application", "fr", MappingLocaleSource({"greeting": "Bonjour"})
        )

        with session.use_locale("fr_CA"):
            assert phrasebook.resolve("greeting") == "Bonjour"

    def test_build_candidates(self) -> None:
        """build_candidates() reflects the shared configuration."""
        candidates = phrasebook.build_candidates("greeting", "de_DE")
        assert [c.locale for c in candidates] == ["de_DE", "de", "en"]

    def test_get_locale_name(self) -> None:
        """get_locale_name() uses registered sources."""
        phrasebook.register_locale_source(
            "application", "de", MappingLocaleSource(locale_name="Deutsch")
        )

        assert phrasebook.get_locale_name("de_CH") == "Deutsch"
        assert phrasebook.get_locale_name("fr") == "fr"

    def test_register_invalid_namespace(self) -> None:
        """Registration errors are PhrasebookError subclasses."""
        with pytest.raises(phrasebook.PhrasebookError):
            phrasebook.register_locale_source("", "en", MappingLocaleSource())


class TestJsonSources:
    """Test resolution from JSON locale files."""

    def test_partial_translations_on_disk(self, tmp_path: Path) -> None:
        """Locales may be partially implemented; missing files are skipped."""
        (tmp_path / "en").mkdir()
        (tmp_path / "en" / "application.json").write_text(
            json.dumps(
                {
                    "@locale_name": "English",
                    "menu": {"file": "File", "edit": "Edit"},
                }
            ),
            encoding="utf-8",
        )
        (tmp_path / "de").mkdir()
        (tmp_path / "de" / "application.json").write_text(
            json.dumps({"@locale_name": "Deutsch", "menu": {"file": "Datei"}}),
            encoding="utf-8",
        )

        resolver = phrasebook.get_resolver()
        register_path_sources(
            resolver.registry,
            str(tmp_path / "{locale}" / "{namespace}.json"),
            "application",
            ["en", "de", "fr"],
        )

        assert phrasebook.resolve("menu.file", "de_DE") == "Datei"
        assert phrasebook.resolve("menu.edit", "de_DE") == "Edit"
        assert phrasebook.resolve("menu.file", "fr") == "File"
        assert phrasebook.get_locale_name("de_DE") == "Deutsch"
        assert phrasebook.get_locale_name("fr") == "fr"
