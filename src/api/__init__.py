"""
API integrations for external data providers.
"""

from .newton_analytics import NewtonAnalyticsClient
from .yahoo_returns import YahooReturnClient

__all__ = ["NewtonAnalyticsClient", "YahooReturnClient"]
