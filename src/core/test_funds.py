"""Tests for the fund catalog and the error taxonomy."""

import pytest

from core.errors import (
    GENERIC_UPSTREAM_MESSAGE,
    NotFoundError,
    UpstreamDataError,
    UpstreamUnavailableError,
    ValidationError,
    http_status_for,
    user_message,
)
from core.funds import DEFAULT_CATALOG, DEFAULT_FUNDS, Fund, FundCatalog


def test_default_catalog_lists_funds_in_order():
    funds = DEFAULT_CATALOG.list_funds()
    assert len(funds) == 25
    assert funds[0] == Fund("Vanguard Total Stock Market Index Fund;Institutional Plus", "VSMPX")
    assert funds[-1].ticker == "CAIBX"
    assert list(funds) == list(DEFAULT_FUNDS)


def test_default_catalog_tickers_are_unique():
    tickers = [fund.ticker.upper() for fund in DEFAULT_CATALOG]
    assert len(tickers) == len(set(tickers))


def test_validate_is_case_insensitive():
    DEFAULT_CATALOG.validate("VFIAX")
    DEFAULT_CATALOG.validate("vfiax")
    DEFAULT_CATALOG.validate("VfIaX")
    assert DEFAULT_CATALOG.resolve("vfiax").ticker == "VFIAX"
    assert "fxaix" in DEFAULT_CATALOG


def test_validate_unknown_ticker_raises_not_found():
    with pytest.raises(NotFoundError) as excinfo:
        DEFAULT_CATALOG.validate("ZZZZ")

    assert excinfo.value.ticker == "ZZZZ"
    assert "ZZZZ" in str(excinfo.value)
    assert isinstance(excinfo.value, ValidationError)


def test_validate_rejects_non_string():
    with pytest.raises(NotFoundError):
        DEFAULT_CATALOG.validate(None)
    assert 123 not in DEFAULT_CATALOG


def test_duplicate_tickers_are_rejected():
    with pytest.raises(ValueError, match="Duplicate ticker"):
        FundCatalog([Fund("One", "ABC"), Fund("Two", "abc")])


def test_custom_catalog_is_isolated():
    catalog = FundCatalog([Fund("Test Fund", "TEST")])
    assert len(catalog) == 1
    catalog.validate("test")
    with pytest.raises(NotFoundError):
        catalog.validate("VFIAX")


def test_fund_is_immutable():
    fund = Fund("Fidelity Contrafund", "FCNTX")
    with pytest.raises(Exception):
        fund.ticker = "OTHER"
    assert fund.to_dict() == {"name": "Fidelity Contrafund", "ticker": "FCNTX"}


def test_http_status_mapping():
    assert http_status_for(NotFoundError("missing", ticker="ZZZZ")) == 404
    assert http_status_for(ValidationError("bad principal")) == 404
    assert http_status_for(UpstreamDataError("bad payload", ticker="VFIAX")) == 502
    assert http_status_for(UpstreamUnavailableError("down", ticker="VFIAX")) == 503


def test_user_message():
    assert user_message(NotFoundError("Ticker not found in supported fund list: ZZZZ")) == (
        "Ticker not found in supported fund list: ZZZZ"
    )
    assert user_message(UpstreamDataError("payload without data")) == GENERIC_UPSTREAM_MESSAGE
    assert user_message(UpstreamUnavailableError("timeout")) == GENERIC_UPSTREAM_MESSAGE
