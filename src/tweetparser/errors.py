# src/tweetparser/errors.py
from __future__ import annotations


class ExtractionError(Exception):
    """Base class for every failure that ends an extraction request."""


class NavigationFailure(ExtractionError):
    """The URL is invalid, unreachable, or the page failed to load."""


class TimeoutFailure(ExtractionError):
    """The post-text container never appeared within the wait budget."""


class ConfigurationFailure(ExtractionError):
    """Missing or invalid configuration (surface layer only)."""
