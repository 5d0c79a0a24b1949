"""Tests for the Yahoo Finance return client."""

import asyncio
import time
from datetime import date
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest

from api.yahoo_returns import YahooReturnClient
from core.errors import UpstreamDataError, UpstreamUnavailableError


def _history(closes):
    index = pd.date_range("2024-01-02", periods=len(closes), freq="B")
    return pd.DataFrame({"Close": closes}, index=index)


def _ticker_returning(history=None, error=None):
    ticker = MagicMock()
    if error is not None:
        ticker.history.side_effect = error
    else:
        ticker.history.return_value = history
    return ticker


def test_fetch_expected_return_uses_previous_calendar_year():
    client = YahooReturnClient(year=2024, timeout=10)
    yf_ticker = _ticker_returning(_history([100.0, 104.0, 110.0]))
    with patch("api.yahoo_returns.yf.Ticker", return_value=yf_ticker) as ticker_cls:
        expected = asyncio.run(client.fetch_expected_return("VFIAX"))

    assert expected == pytest.approx(0.10)
    ticker_cls.assert_called_once_with("VFIAX")
    yf_ticker.history.assert_called_once_with(
        start="2023-12-22",
        end="2025-01-01",
        interval="1d",
        auto_adjust=True,
        timeout=10,
    )


def test_default_reference_year_is_last_year():
    assert YahooReturnClient().reference_year == date.today().year - 1


def test_negative_return_is_valid():
    client = YahooReturnClient(year=2022)
    with patch("api.yahoo_returns.yf.Ticker", return_value=_ticker_returning(_history([50.0, 40.0]))):
        assert client.get_expected_return("VTBIX") == pytest.approx(-0.2)


def test_missing_closes_are_skipped():
    closes = [np.nan, 100.0, np.nan, 105.0, np.nan]
    assert YahooReturnClient.annual_return(_history(closes), "VFIAX") == pytest.approx(0.05)


@pytest.mark.parametrize(
    "history",
    [
        pd.DataFrame(),
        None,
        _history([100.0]),
        _history([np.nan, np.nan]),
        pd.DataFrame({"Open": [1.0, 2.0]}),
    ],
)
def test_unusable_history_raises_data_error(history):
    client = YahooReturnClient(year=2024)
    with patch("api.yahoo_returns.yf.Ticker", return_value=_ticker_returning(history)):
        with pytest.raises(UpstreamDataError) as excinfo:
            client.get_expected_return("VFIAX")

    assert excinfo.value.ticker == "VFIAX"
    assert excinfo.value.provider == "Yahoo Finance"


def test_download_failure_raises_unavailable():
    client = YahooReturnClient(year=2024)
    error = ConnectionError("Yahoo unreachable")
    with patch("api.yahoo_returns.yf.Ticker", return_value=_ticker_returning(error=error)):
        with pytest.raises(UpstreamUnavailableError) as excinfo:
            asyncio.run(client.fetch_expected_return("VFIAX"))

    assert excinfo.value.__cause__ is error


def test_slow_download_raises_unavailable():
    def slow_history(**kwargs):
        time.sleep(0.5)
        return _history([100.0, 110.0])

    yf_ticker = MagicMock()
    yf_ticker.history.side_effect = slow_history
    client = YahooReturnClient(year=2024, timeout=0.05)
    with patch("api.yahoo_returns.yf.Ticker", return_value=yf_ticker):
        with pytest.raises(UpstreamUnavailableError, match="timed out"):
            asyncio.run(client.fetch_expected_return("VFIAX"))


def test_return_is_measured_from_prior_year_close():
    index = pd.DatetimeIndex(
        ["2023-12-28", "2023-12-29", "2024-01-02", "2024-06-28", "2024-12-31"]
    ).tz_localize("America/New_York")
    history = pd.DataFrame({"Close": [98.0, 100.0, 104.0, 107.0, 110.0]}, index=index)

    client = YahooReturnClient(year=2024)
    with patch("api.yahoo_returns.yf.Ticker", return_value=_ticker_returning(history)):
        assert client.get_expected_return("VFIAX") == pytest.approx(0.10)


def test_fund_launched_during_year_uses_first_close():
    index = pd.DatetimeIndex(["2024-03-01", "2024-12-31"])
    history = pd.DataFrame({"Close": [20.0, 25.0]}, index=index)
    assert YahooReturnClient.annual_return(history, "NEWFX", year=2024) == pytest.approx(0.25)


def test_only_prior_year_prices_is_data_error():
    index = pd.DatetimeIndex(["2023-12-28", "2023-12-29"])
    history = pd.DataFrame({"Close": [99.0, 100.0]}, index=index)
    with pytest.raises(UpstreamDataError):
        YahooReturnClient.annual_return(history, "VFIAX", year=2024)
