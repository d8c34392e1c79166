"""
Error kinds for trinoise.

Every failure is raised synchronously before any computation proceeds.
The builtin bases let callers that only care about the broad category
catch ValueError / OverflowError.
"""


class TrinoiseError(Exception):
    """Base class for all trinoise errors."""


class InvalidBase(TrinoiseError, ValueError):
    """Base is not an integer >= 2 (or does not match a prebuilt table)."""


class InvalidIndex(TrinoiseError, ValueError):
    """Index is negative or not an integer."""


class PeriodOverflow(TrinoiseError, OverflowError):
    """N^N exceeds the signed 64-bit range used for indices and tables."""


class TableTooLarge(TrinoiseError, ValueError):
    """A full-period table was requested above the configured size limit."""
