"""Exceptions raised by pdp_renderer."""

from typing import Optional


class PdpRendererError(Exception):
    """Base class for pdp_renderer errors."""


class FormatMismatch(PdpRendererError, ValueError):
    """A URL path does not fit the expected route format."""

    def __init__(self, format: str, path: Optional[str] = None):
        self.format = format
        self.path = path
        super().__init__(f"Invalid path. Expected '{format}' format.")


class FetchFailure(PdpRendererError):
    """The base template could not be fetched."""

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = f"Failed to fetch template from {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
