"""
Error taxonomy for fund projections.

Three terminal kinds reach callers: ``ValidationError`` (bad input, detected
before any network call), ``UpstreamDataError`` (a provider answered with an
unusable payload) and ``UpstreamUnavailableError`` (a provider could not be
reached in time). Transport layers translate them with ``http_status_for``.
"""

from typing import Optional

GENERIC_UPSTREAM_MESSAGE = (
    "Market data is currently unavailable for this fund. Please try again later."
)


class CapmError(RuntimeError):
    """Base class for every error raised by the projection engine."""

    def __init__(self, message: str, ticker: Optional[str] = None):
        super().__init__(message)
        self.ticker = ticker


class ValidationError(CapmError):
    """Raised when caller input cannot produce a calculation."""


class NotFoundError(ValidationError):
    """Raised when a ticker is not part of the fund catalog."""


class UpstreamError(CapmError):
    """Base class for failures of an external data provider."""

    def __init__(self, message: str, ticker: Optional[str] = None, provider: str = ""):
        super().__init__(message, ticker=ticker)
        self.provider = provider


class UpstreamDataError(UpstreamError):
    """Raised when a provider responded without the expected numeric signal."""


class UpstreamUnavailableError(UpstreamError):
    """Raised when a provider is unreachable, timed out or refused the request."""


# Ordered most specific first
_HTTP_STATUS = (
    (ValidationError, 404),
    (UpstreamDataError, 502),
    (UpstreamUnavailableError, 503),
)


def http_status_for(error: CapmError) -> int:
    """
    Map an engine error to the HTTP status a transport layer should return.

    Args:
        error: Error raised by the engine.

    Returns:
        404, 502 or 503. Anything outside the taxonomy maps to 500.
    """
    for error_type, status in _HTTP_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


def user_message(error: CapmError) -> str:
    """Validation messages are shown verbatim, upstream failures generically."""
    if isinstance(error, ValidationError):
        return str(error)
    return GENERIC_UPSTREAM_MESSAGE
