"""
Newton Analytics API client for rolling fund betas.
"""

import asyncio
import logging
import math
from typing import Any, Dict, Optional

import requests

from config import (
    BENCHMARK_INDEX,
    BETA_INTERVAL,
    BETA_OBSERVATIONS,
    NEWTON_BETA_URL,
    REQUEST_TIMEOUT,
)
from core.errors import UpstreamDataError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

PROVIDER = "Newton Analytics"

# Values of the payload "status" field that mean the beta was computed
SUCCESS_STATUSES = {"200", "ok", "success"}


class NewtonAnalyticsClient:
    """
    Client for the Newton Analytics stock-beta endpoint.

    Every call asks for the 12-month rolling beta on monthly returns against
    the S&P 500. These parameters are fixed: changing any of them changes what
    the returned beta means.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the client.

        Args:
            base_url: Optional endpoint override (defaults to NEWTON_BETA_URL).
            timeout: Timeout in seconds for the single outbound request.
        """
        self.base_url = base_url or NEWTON_BETA_URL
        self.timeout = timeout

    @staticmethod
    def build_params(ticker: str) -> Dict[str, Any]:
        """Query parameters for a beta request."""
        return {
            "ticker": ticker,
            "index": BENCHMARK_INDEX,
            "interval": BETA_INTERVAL,
            "observations": BETA_OBSERVATIONS,
        }

    async def fetch_beta(self, ticker: str) -> float:
        """
        Fetch the rolling beta for a ticker.

        The blocking HTTP call runs in a worker thread so that the beta and
        return lookups of one calculation overlap. No retry is attempted.

        Args:
            ticker: Fund ticker symbol.

        Returns:
            Beta as a finite float.

        Raises:
            UpstreamDataError: If the response has no usable numeric beta.
            UpstreamUnavailableError: If the API is unreachable or too slow.
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.get_beta, ticker), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            logger.warning(f"[BetaProvider] Timed out after {self.timeout}s for {ticker}")
            raise UpstreamUnavailableError(
                f"Failed to reach {PROVIDER} API: timed out after {self.timeout}s",
                ticker=ticker,
                provider=PROVIDER,
            ) from exc

    def get_beta(self, ticker: str) -> float:
        """Blocking variant of ``fetch_beta``."""
        params = self.build_params(ticker)
        logger.info(f"[BetaProvider] Requesting beta for {ticker}")
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            logger.warning(f"[BetaProvider] Request failed for {ticker}: {exc}")
            raise UpstreamUnavailableError(
                f"Failed to reach {PROVIDER} API: {exc}",
                ticker=ticker,
                provider=PROVIDER,
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning(f"[BetaProvider] Non-JSON response for {ticker}")
            raise UpstreamDataError(
                f"{PROVIDER} returned a non-JSON response for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            ) from exc

        beta = self.parse_beta(payload, ticker)
        logger.info(f"[BetaProvider] Beta for {ticker}: {beta}")
        return beta

    @staticmethod
    def parse_beta(payload: Any, ticker: str) -> float:
        """
        Extract the beta from a decoded response body.

        A payload whose ``status`` field reports a failure is rejected even
        when ``data`` happens to be numeric.

        Raises:
            UpstreamDataError: If the payload does not carry a finite number.
        """
        if not isinstance(payload, dict):
            raise UpstreamDataError(
                f"{PROVIDER} response is not a JSON object for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            )

        status = payload.get("status")
        if status is not None and str(status).strip().lower() not in SUCCESS_STATUSES:
            detail = payload.get("message") or payload.get("error") or status
            logger.warning(f"[BetaProvider] Failure status for {ticker}: {detail}")
            raise UpstreamDataError(
                f"{PROVIDER} reported a failure for ticker {ticker}: {detail}",
                ticker=ticker,
                provider=PROVIDER,
            )

        data = payload.get("data")
        # bool is an int subclass but never a beta
        if isinstance(data, bool) or not isinstance(data, (int, float)) or not math.isfinite(data):
            logger.warning(f"[BetaProvider] Missing numeric beta for {ticker}: {data!r}")
            raise UpstreamDataError(
                f"{PROVIDER} response missing numeric beta for ticker: {ticker}",
                ticker=ticker,
                provider=PROVIDER,
            )
        return float(data)
