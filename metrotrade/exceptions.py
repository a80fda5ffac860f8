"""
Exception hierarchy for the MetroTrade core.

Transitions never raise during normal play; these types only surface at
construction and configuration seams (bad init options, storage backends).
"""


class MetroTradeError(Exception):
    """Base exception for all MetroTrade errors."""


class ValidationError(MetroTradeError, ValueError):
    """Input validation failed."""


class StorageError(MetroTradeError):
    """A key-value storage backend could not read or write."""
