"""
Exception hierarchy for the tracker.

Separates failures the user can fix (bad input, unsupported site) from
failures of the storefront fetch and of the local store.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker errors."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class InputValidationError(TrackerError):
    """Required input (user id, URL, identifier) is missing."""


class UnsupportedSiteError(TrackerError):
    """URL does not belong to a supported storefront. Raised before any network call."""


class ScrapeError(TrackerError):
    """Product page could not be fetched or loaded."""

    def __init__(self, message: str, url: Optional[str] = None, platform: Optional[str] = None):
        self.platform = platform
        super().__init__(message, url=url)


class PersistenceError(TrackerError):
    """Reading or writing the tracked product store failed."""
