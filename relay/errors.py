"""Error taxonomy for the relay.

``ValidationError`` maps to HTTP 400.  ``NotFoundError`` and transport
failures from httpx are wrapped into ``UpstreamError`` at the relay boundary,
which maps to a generic HTTP 500.
"""

from __future__ import annotations

from typing import Optional

import httpx


class RelayError(Exception):
    """Base class for every error raised by the relay."""


class ValidationError(RelayError):
    """The inbound request is missing a field or carries an invalid value."""


class NotFoundError(RelayError):
    """A product slug did not match any product upstream."""


class UpstreamError(RelayError):
    """Resolving or fetching from G2 failed.

    ``status_code`` and ``body`` are kept for server-side diagnostics only and
    must never be echoed to the client.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def wrap(cls, exc: Exception) -> "UpstreamError":
        """Build an ``UpstreamError`` from *exc*, capturing any HTTP response."""
        status_code: Optional[int] = None
        body: Optional[str] = None
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            body = exc.response.text
        return cls(str(exc) or exc.__class__.__name__, status_code=status_code, body=body)
