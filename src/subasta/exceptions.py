"""
Exception hierarchy for the auction listing core.

The read-path generators raise ``ValueError`` for invalid inputs; everything
touching external systems raises one of the classes below so that the sync
orchestrator can decide what is fatal and what only degrades a counter.
"""
from typing import Optional


class SubastaError(Exception):
    """Base class for all application errors."""


class ConfigurationError(SubastaError):
    """A required credential or setting is missing. Raised at construction time."""


class UpstreamError(SubastaError):
    """An external API call did not produce a usable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamAuthError(UpstreamError):
    """The external API rejected our credentials (HTTP 401/403)."""


class UpstreamUnavailable(UpstreamError):
    """Network failure or any other non-2xx response from an external API."""


class TransformError(SubastaError):
    """An external record could not be converted into the internal property shape."""


class SyncInProgressError(SubastaError):
    """A property sync is already running in this process."""
