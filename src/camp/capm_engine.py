"""
CAPM Projection Engine
======================

Validates a fund request, fetches the fund's beta and expected return
concurrently, derives the CAPM rate and projects the investment with
continuous compounding.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple

import numpy as np
import pandas as pd

from config import MAX_YEARS, RISK_FREE_RATE
from core.errors import ValidationError
from core.funds import DEFAULT_CATALOG, Fund, FundCatalog

logger = logging.getLogger(__name__)


class BetaProvider(Protocol):
    async def fetch_beta(self, ticker: str) -> float: ...


class ReturnProvider(Protocol):
    async def fetch_expected_return(self, ticker: str) -> float: ...


@dataclass(frozen=True)
class CalculationResult:
    """
    Outcome of one projection, including every intermediate input.

    Attributes:
        ticker: Canonical catalog ticker.
        principal: Initial investment.
        years: Investment horizon in years.
        beta: Rolling beta against the benchmark index.
        expected_return_rate: Previous-year return of the fund.
        risk_free_rate: Risk-free rate used in the CAPM formula.
        capm_rate: CAPM expected annual return.
        future_value: Continuously compounded value at the horizon.
    """

    ticker: str
    principal: float
    years: float
    beta: float
    expected_return_rate: float
    risk_free_rate: float
    capm_rate: float
    future_value: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def capm_rate(beta: float, expected_return_rate: float, risk_free_rate: float = RISK_FREE_RATE) -> float:
    """
    CAPM expected return: R_f + beta * (E[R] - R_f).

    Args:
        beta: Asset beta.
        expected_return_rate: Expected (historical) annual return.
        risk_free_rate: Annual risk-free rate.

    Returns:
        CAPM rate as a decimal.
    """
    return risk_free_rate + beta * (expected_return_rate - risk_free_rate)


def future_value(principal: float, rate: float, years: float) -> float:
    """Continuous compounding: P * e^(r * t). Overflow yields infinity."""
    try:
        return principal * math.exp(rate * years)
    except OverflowError:
        return math.inf


def growth_schedule(principal: float, rate: float, years: float) -> pd.Series:
    """
    Projected value at each whole year of the horizon.

    A fractional horizon gets a final point at exactly ``years`` so the
    last value always equals the future value.

    Args:
        principal: Initial investment.
        rate: Continuously compounded annual rate.
        years: Horizon in years.

    Returns:
        Series of projected values indexed by year.

    Raises:
        ValueError: If the horizon exceeds MAX_YEARS.
    """
    if years > MAX_YEARS:
        raise ValueError(f"Horizon of {years} years exceeds the {MAX_YEARS}-year limit")
    points = list(np.arange(0, math.floor(years) + 1, dtype=float))
    if years > points[-1]:
        points.append(float(years))
    values = [future_value(principal, rate, year) for year in points]
    return pd.Series(values, index=pd.Index(points, name="year"), name="value")


def _require_positive(name: str, value: Any, ticker: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {value!r}", ticker=ticker)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a positive number, got {value!r}", ticker=ticker)
    return float(value)


class CapmEngine:
    """Public entry point for fund projections."""

    def __init__(
        self,
        beta_provider: Optional[BetaProvider] = None,
        return_provider: Optional[ReturnProvider] = None,
        catalog: FundCatalog = DEFAULT_CATALOG,
        risk_free_rate: float = RISK_FREE_RATE,
    ):
        """
        Initialize the engine.

        Args:
            beta_provider: Beta source (defaults to Newton Analytics).
            return_provider: Expected return source (defaults to Yahoo Finance).
            catalog: Supported funds.
            risk_free_rate: Annual risk-free rate.
        """
        if beta_provider is None or return_provider is None:
            from api import NewtonAnalyticsClient, YahooReturnClient  # local import

            beta_provider = beta_provider or NewtonAnalyticsClient()
            return_provider = return_provider or YahooReturnClient()

        self.beta_provider = beta_provider
        self.return_provider = return_provider
        self.catalog = catalog
        self.risk_free_rate = risk_free_rate

    def list_funds(self) -> Sequence[Fund]:
        return self.catalog.list_funds()

    def validate(self, ticker: str) -> None:
        self.catalog.validate(ticker)

    async def calculate(self, ticker: str, principal: float, years: float) -> CalculationResult:
        """
        Project the future value of an investment in a catalog fund.

        Args:
            ticker: Fund ticker (case-insensitive).
            principal: Initial investment, strictly positive.
            years: Horizon in years, strictly positive and at most MAX_YEARS.

        Returns:
            CalculationResult with all intermediate values.

        Raises:
            ValidationError: Before any provider call, for bad input.
            UpstreamDataError: If a provider returned unusable data.
            UpstreamUnavailableError: If a provider could not be reached.
        """
        principal = _require_positive("principal", principal, ticker)
        years = _require_positive("years", years, ticker)
        if years > MAX_YEARS:
            raise ValidationError(
                f"years must be at most {MAX_YEARS}, got {years!r}", ticker=ticker
            )
        fund = self.catalog.resolve(ticker)
        symbol = fund.ticker

        logger.info(f"[CapmEngine] Calculating {symbol}: principal={principal}, years={years}")
        beta, expected_return_rate = await self._fetch_signals(symbol)

        rate = capm_rate(beta, expected_return_rate, self.risk_free_rate)
        result = CalculationResult(
            ticker=symbol,
            principal=principal,
            years=years,
            beta=beta,
            expected_return_rate=expected_return_rate,
            risk_free_rate=self.risk_free_rate,
            capm_rate=rate,
            future_value=future_value(principal, rate, years),
        )
        logger.info(
            f"[CapmEngine] {symbol}: beta={beta:.4f}, expected={expected_return_rate:.4%}, "
            f"capm={rate:.4%}, future_value={result.future_value:.2f}"
        )
        return result

    async def _fetch_signals(self, ticker: str) -> Tuple[float, float]:
        """Run both provider calls concurrently; the first failure cancels the other."""
        beta_task = asyncio.ensure_future(self.beta_provider.fetch_beta(ticker))
        return_task = asyncio.ensure_future(self.return_provider.fetch_expected_return(ticker))
        tasks = (beta_task, return_task)
        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            for task in tasks:
                if task in done and task.exception() is not None:
                    logger.warning(
                        f"[CapmEngine] Provider failed for {ticker}: {task.exception()}"
                    )
                    raise task.exception()
            return beta_task.result(), return_task.result()
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # let cancelled tasks unwind so nothing is left pending
            await asyncio.gather(*tasks, return_exceptions=True)
