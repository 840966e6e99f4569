"""Domain exception hierarchy for the event provider."""

from __future__ import annotations


class EventProviderError(RuntimeError):
    """Base class for all domain-level event provider errors."""


class ConfigValidationError(EventProviderError):
    """Raised when configuration cannot be validated safely."""
