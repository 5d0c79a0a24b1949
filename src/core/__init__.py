"""
Core modules for the fund projector.

- funds: the closed catalog of supported mutual funds
- errors: the error taxonomy shared by providers and the engine
"""

from .errors import (
    CapmError,
    NotFoundError,
    UpstreamDataError,
    UpstreamError,
    UpstreamUnavailableError,
    ValidationError,
    http_status_for,
    user_message,
)
from .funds import DEFAULT_CATALOG, DEFAULT_FUNDS, Fund, FundCatalog

__all__ = [
    "CapmError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
    "UpstreamDataError",
    "UpstreamUnavailableError",
    "http_status_for",
    "user_message",
    "Fund",
    "FundCatalog",
    "DEFAULT_FUNDS",
    "DEFAULT_CATALOG",
]
