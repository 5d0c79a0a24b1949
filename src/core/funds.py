"""
Fund catalog.

The closed set of mutual funds the projector computes for. The catalog is
built once and injected into the engine; tests can pass their own catalog.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from .errors import NotFoundError


@dataclass(frozen=True)
class Fund:
    """A supported mutual fund."""

    name: str
    ticker: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "ticker": self.ticker}


class FundCatalog:
    """Immutable registry of funds with case-insensitive ticker lookup."""

    def __init__(self, funds: Iterable[Fund]):
        """
        Build a catalog.

        Args:
            funds: Funds in display order.

        Raises:
            ValueError: If two funds share a ticker (ignoring case).
        """
        self._funds: Tuple[Fund, ...] = tuple(funds)
        self._index: Dict[str, Fund] = {}
        for fund in self._funds:
            key = fund.ticker.upper()
            if key in self._index:
                raise ValueError(f"Duplicate ticker in fund catalog: {fund.ticker}")
            self._index[key] = fund

    def list_funds(self) -> Tuple[Fund, ...]:
        """Return every fund in insertion order."""
        return self._funds

    def resolve(self, ticker: str) -> Fund:
        """
        Look up a fund by ticker, ignoring case.

        Args:
            ticker: Ticker symbol as supplied by the caller.

        Returns:
            The catalog entry.

        Raises:
            NotFoundError: If the ticker is not in the catalog.
        """
        fund = self._index.get(ticker.strip().upper()) if isinstance(ticker, str) else None
        if fund is None:
            raise NotFoundError(
                f"Ticker not found in supported fund list: {ticker}", ticker=ticker
            )
        return fund

    def validate(self, ticker: str) -> None:
        """Raise NotFoundError unless the ticker is in the catalog."""
        self.resolve(ticker)

    def __contains__(self, ticker: object) -> bool:
        return isinstance(ticker, str) and ticker.strip().upper() in self._index

    def __len__(self) -> int:
        return len(self._funds)

    def __iter__(self) -> Iterator[Fund]:
        return iter(self._funds)


# Equity and bond mutual funds with beta coverage against ^GSPC
DEFAULT_FUNDS: Tuple[Fund, ...] = (
    Fund("Vanguard Total Stock Market Index Fund;Institutional Plus", "VSMPX"),
    Fund("Fidelity 500 Index Fund", "FXAIX"),
    Fund("Vanguard 500 Index Fund;Admiral", "VFIAX"),
    Fund("Vanguard Total Stock Market Index Fund;Admiral", "VTSAX"),
    Fund("Vanguard Total International Stock Index Fund;Investor", "VGTSX"),
    Fund("Fidelity Strategic Advisers Fidelity US Total Stk", "FCTDX"),
    Fund("Vanguard Institutional Index Fund;Inst Plus", "VIIIX"),
    Fund("Vanguard Total Bond Market II Index Fund;Institutional", "VTBNX"),
    Fund("American Funds Growth Fund of America;A", "AGTHX"),
    Fund("Vanguard Total Bond Market II Index Fund;Investor", "VTBIX"),
    Fund("Fidelity Contrafund", "FCNTX"),
    Fund("PIMCO Income Fund;Institutional", "PIMIX"),
    Fund("T. Rowe Price Blue Chip Growth Fund", "TRBCX"),
    Fund("Dodge & Cox Stock Fund", "DODGX"),
    Fund("Dodge & Cox International Stock Fund", "DODFX"),
    Fund("Vanguard Wellington Fund;Investor", "VWELX"),
    Fund("Vanguard US Growth Fund;Investor", "VWUSX"),
    Fund("Vanguard Dividend Growth Fund;Investor", "VDIGX"),
    Fund("Vanguard Health Care Fund;Investor", "VGHCX"),
    Fund("Vanguard PRIMECAP Core Fund;Investor", "VPCCX"),
    Fund("Legg Mason ClearBridge Large Cap Growth Fund", "LMGTX"),
    Fund("PIMCO Income Fund;A", "PONAX"),
    Fund("Templeton Global Bond Fund;A", "TPINX"),
    Fund("Invesco Gold & Special Minerals Fund;A", "OPGSX"),
    Fund("American Funds Capital Income Builder;A", "CAIBX"),
)

DEFAULT_CATALOG = FundCatalog(DEFAULT_FUNDS)
