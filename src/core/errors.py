"""Exception hierarchy for Text2Deck.

Every error carries the HTTP status the web layer answers with, so the API
can render them uniformly.
"""

from __future__ import annotations


class Text2DeckError(Exception):
    """Base class for all Text2Deck errors."""

    status_code = 500
    summary = "Request failed"


class ConfigurationError(Text2DeckError):
    """Raised when a required configuration value is missing or invalid."""

    summary = "Configuration error"


class InvalidSplitterError(ConfigurationError):
    """Raised when a splitter is invoked with a zero chunk limit."""

    status_code = 400
    summary = "Invalid splitter configuration"


class InvalidRequestError(Text2DeckError):
    """Raised when a content request or OAuth callback is malformed."""

    status_code = 400
    summary = "Invalid request"


class StateMismatchError(Text2DeckError):
    """Raised when the OAuth callback state does not match the issued one."""

    status_code = 400
    summary = "State mismatch"


class UpstreamError(Text2DeckError):
    """Raised when a Google endpoint answers with a non-2xx status."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None, body: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body

    def __str__(self) -> str:
        message = super().__str__()
        if self.upstream_status is None:
            return message
        return f"{message} (HTTP {self.upstream_status}): {self.body}"


class UpstreamAuthError(UpstreamError):
    """Raised when the OAuth token exchange fails."""

    summary = "OAuth error"


class UpstreamAPIError(UpstreamError):
    """Raised when a Google Slides API call fails."""

    summary = "Failed to create slides"


class SessionNotFoundError(Text2DeckError):
    """Raised when a session id is unknown or has expired."""

    status_code = 401
    summary = "Authentication required"


class EmptyContentError(Text2DeckError):
    """Raised when the content produces no chunks."""

    status_code = 400
    summary = "Failed to create slides"


class TooManySlidesError(Text2DeckError):
    """Raised when the content produces more chunks than the API accepts."""

    status_code = 400
    summary = "Failed to create slides"
