"""
Application-level exceptions.

Every failure the collector can surface derives from CollectorError and carries
the HTTP status the API layer answers with. Client faults (InvalidInput) and
server faults (UpstreamFetchFailed, CollectionCancelled, ConfigurationError)
map to distinct codes.
"""

from __future__ import annotations


class CollectorError(Exception):
    """Base class for collection failures."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(CollectorError):
    """Missing or empty address. Raised before any network call."""

    status_code = 400


class UpstreamFetchFailed(CollectorError):
    """A page fetch failed: non-2xx, transport error, timeout or malformed page."""

    status_code = 502


class CollectionCancelled(CollectorError):
    """The caller's stop signal was set between page fetches."""

    status_code = 503


class ConfigurationError(CollectorError):
    """Required configuration (e.g. HELIUS_API_KEY) is missing."""

    status_code = 500
