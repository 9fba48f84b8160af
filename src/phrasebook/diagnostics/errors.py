"""Phrasebook exception hierarchy.

Resolution itself never raises: every failure mode during a lookup degrades to
a usable string. These exceptions cover configuration and registration, where
invalid input is rejected eagerly (fail-fast) so it cannot surface later as a
silent miss.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "InvalidLocaleError",
    "PhrasebookError",
    "SourceRegistrationError",
]


class PhrasebookError(Exception):
    """Base exception for all phrasebook errors."""


class InvalidLocaleError(PhrasebookError, ValueError):
    """Locale identifier is malformed.

    Raised when configuring a default locale or registering a locale source
    with an identifier that cannot be parsed (e.g., '12', 'de DE').

    Attributes:
        locale_code: The rejected locale identifier
    """

    def __init__(self, message: str, *, locale_code: str = "") -> None:
        """Initialize InvalidLocaleError.

        Args:
            message: Error message
            locale_code: The rejected locale identifier
        """
        super().__init__(message)
        self.locale_code = locale_code


class SourceRegistrationError(PhrasebookError, ValueError):
    """Locale source registration input is invalid.

    Examples:
    - Empty namespace
    - Provider that is neither a locale source nor a zero-argument factory
    """
