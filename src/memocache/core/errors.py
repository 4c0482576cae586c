from __future__ import annotations


class MemoCacheError(Exception):
    """Base error for the memoizing cache."""


class ValidationError(MemoCacheError):
    """Raised when a cache call receives invalid arguments."""


class ConfigurationError(ValidationError):
    """Raised when a cache is constructed with an invalid configuration."""
