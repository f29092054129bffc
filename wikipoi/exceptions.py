"""Exception hierarchy for upstream failures."""

from typing import Optional


class WikiPOIError(Exception):
    """Base class for all wikipoi errors."""


class UpstreamError(WikiPOIError):
    """The Wikipedia API could not produce a usable answer."""


class UpstreamUnavailable(UpstreamError):
    """Transport failure, timeout or non-200 status."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"status={status}" if status is not None else reason
        super().__init__(f"upstream_unavailable:{url}:{detail}")


class MalformedResponse(UpstreamError):
    """The body was not JSON or did not match the expected shape."""
