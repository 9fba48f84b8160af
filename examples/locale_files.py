"""JSON locale files - partial translations on disk.

Writes a small set of locale files to a temporary directory and resolves
tokens with the process-wide API. The French file is deliberately missing:
locales may be partially implemented, and absent sources are skipped.

Python 3.13+.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import phrasebook
from phrasebook.localization import ContextLocaleProvider, register_path_sources

LOCALE_FILES = {
    "en": {"@locale_name": "English", "cart": {"title": "Cart", "empty": "Your cart is empty"}},
    "de": {"@locale_name": "Deutsch", "cart": {"title": "Warenkorb"}},
}


def main() -> None:
    """Resolve cart labels for several session locales."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        for locale, data in LOCALE_FILES.items():
            (root / locale).mkdir()
            (root / locale / "application.json").write_text(
                json.dumps(data, ensure_ascii=False), encoding="utf-8"
            )

        register_path_sources(
            phrasebook.get_resolver().registry,
            str(root / "{locale}" / "{namespace}.json"),
            "application",
            ["en", "de", "fr"],
        )
        session = ContextLocaleProvider()
        phrasebook.set_session_provider(session)

        for locale in ("de_DE", "fr", "en_GB"):
            with session.use_locale(locale):
                name = phrasebook.get_locale_name(locale)
                title = phrasebook.resolve("cart.title")
                empty = phrasebook.resolve("cart.empty")
                print(f"{locale:6} {name:8} {title:10} {empty}")


if __name__ == "__main__":
    main()
