"""Pytest configuration for the phrasebook test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 300 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from collections.abc import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

import phrasebook

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=300,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    import os

    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# PROCESS-WIDE RESOLVER ISOLATION
# =============================================================================


@pytest.fixture
def isolated_default_resolver(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Give a test a fresh process-wide resolver and a clean environment.

    Not autouse: Hypothesis rejects function-scoped fixtures on @given tests.
    """
    for var in (
        "PHRASEBOOK_DEBUG",
        "PHRASEBOOK_DEBUG_TOKEN",
        "PHRASEBOOK_DEFAULT_LOCALE",
        "PHRASEBOOK_SOFT_SUFFIXES",
        "PHRASEBOOK_CLDR_NAMES",
    ):
        monkeypatch.delenv(var, raising=False)
    phrasebook.reset_resolver()
    yield
    phrasebook.reset_resolver()

