"""Error types for phrasebook.

Python 3.13+. Zero external dependencies.
"""

from .errors import InvalidLocaleError, PhrasebookError, SourceRegistrationError

__all__ = [
    "InvalidLocaleError",
    "PhrasebookError",
    "SourceRegistrationError",
]
