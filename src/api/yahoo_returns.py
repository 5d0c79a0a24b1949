"""
Yahoo Finance client for trailing calendar-year fund returns.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Optional

import numpy as np
import pandas as pd
import yfinance as yf

from config import REQUEST_TIMEOUT
from core.errors import UpstreamDataError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

PROVIDER = "Yahoo Finance"

# Days fetched before Jan 1 to find the prior year's final close
LOOKBACK_DAYS = 10


class YahooReturnClient:
    """Expected annual return of a fund, taken as its previous calendar-year total return."""

    def __init__(self, year: Optional[int] = None, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the client.

        Args:
            year: Calendar year to measure. Defaults to the year before today.
            timeout: Timeout in seconds for the price download.
        """
        self.year = year
        self.timeout = timeout

    @property
    def reference_year(self) -> int:
        return self.year if self.year is not None else date.today().year - 1

    async def fetch_expected_return(self, ticker: str) -> float:
        """
        Fetch the previous calendar-year return for a ticker.

        Args:
            ticker: Fund ticker symbol.

        Returns:
            Return as a decimal fraction (0.10 for 10%).

        Raises:
            UpstreamDataError: If Yahoo has no usable prices for the year.
            UpstreamUnavailableError: If the download fails or times out.
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.get_expected_return, ticker),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.warning(f"[ReturnProvider] Timed out after {self.timeout}s for {ticker}")
            raise UpstreamUnavailableError(
                f"Failed to reach {PROVIDER}: timed out after {self.timeout}s",
                ticker=ticker,
                provider=PROVIDER,
            ) from exc

    def get_expected_return(self, ticker: str) -> float:
        """Blocking variant of ``fetch_expected_return``."""
        year = self.reference_year
        start = date(year, 1, 1) - timedelta(days=LOOKBACK_DAYS)
        logger.info(f"[ReturnProvider] Requesting {year} prices for {ticker}")
        try:
            history = yf.Ticker(ticker).history(
                start=start.isoformat(),
                end=f"{year + 1}-01-01",
                interval="1d",
                auto_adjust=True,
                timeout=self.timeout,
            )
        except Exception as exc:
            logger.warning(f"[ReturnProvider] Download failed for {ticker}: {exc}")
            raise UpstreamUnavailableError(
                f"Failed to reach {PROVIDER}: {exc}",
                ticker=ticker,
                provider=PROVIDER,
            ) from exc

        expected = self.annual_return(history, ticker, year=year)
        logger.info(f"[ReturnProvider] {year} return for {ticker}: {expected:.4%}")
        return expected

    @staticmethod
    def annual_return(
        history: Optional[pd.DataFrame], ticker: str, year: Optional[int] = None
    ) -> float:
        """
        Compute the total return across a price history.

        Args:
            history: Price frame with a ``Close`` column (dividend adjusted).
            ticker: Ticker used in error messages.
            year: Calendar year measured. The base is the last close before
                Jan 1 of that year, or the first close of the year when the
                history has none (funds launched during the year).

        Returns:
            Last close divided by the base close, minus one.

        Raises:
            UpstreamDataError: If fewer than two valid closes exist or the
                result is not finite.
        """
        if history is None or history.empty or "Close" not in history.columns:
            raise UpstreamDataError(
                f"{PROVIDER} returned no price history for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            )

        closes = pd.to_numeric(history["Close"], errors="coerce").dropna()
        closes = closes[closes > 0]
        if year is not None and isinstance(closes.index, pd.DatetimeIndex):
            boundary = pd.Timestamp(year=year, month=1, day=1)
            if closes.index.tz is not None:
                boundary = boundary.tz_localize(closes.index.tz)
            prior = closes[closes.index < boundary]
            closes = closes[closes.index >= boundary]
            if not prior.empty:
                closes = pd.concat([prior.iloc[-1:], closes])
        if len(closes) < 2:
            raise UpstreamDataError(
                f"{PROVIDER} returned too few prices for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            )

        total_return = float(closes.iloc[-1] / closes.iloc[0] - 1)
        if not np.isfinite(total_return):
            raise UpstreamDataError(
                f"{PROVIDER} produced a non-numeric return for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            )
        return total_return
