"""Enumerations for phrasebook type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ProbeStatus(StrEnum):
    """Outcome of probing a single candidate during resolution.

    StrEnum provides automatic string conversion: str(ProbeStatus.MATCHED) == "matched"
    """

    MATCHED = "matched"
    """Full path resolved to a string leaf; resolution stops here."""

    MISSING_SOURCE = "missing_source"
    """No locale source registered (or constructible) for the namespace and locale."""

    MISSING_SEGMENT = "missing_segment"
    """Source exists but does not cover the token's top-level segment."""

    MISSING_PATH = "missing_path"
    """Segment exists but a nested key along the path is absent."""

    NOT_A_STRING = "not_a_string"
    """Path resolved, but to a nested mapping or non-string value."""

    SOURCE_ERROR = "source_error"
    """Source raised an I/O or decoding error while materializing the segment."""


__all__ = [
    "ProbeStatus",
]
