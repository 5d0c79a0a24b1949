"""
Fund Projector - Main Entry Point

Lists the supported mutual funds or projects the future value of an
investment in one of them.

Usage:
    python src/main.py --list
    python src/main.py VFIAX 10000 5 --chart
"""

import argparse
import asyncio
import logging
import sys

from config import LOG_LEVEL
from core.errors import CapmError, ValidationError, user_message


def run_list_funds(engine) -> None:
    """Prints the fund catalog."""
    print("\n" + "=" * 70)
    print("SUPPORTED MUTUAL FUNDS")
    print("=" * 70)
    for fund in engine.list_funds():
        print(f"  {fund.ticker:<6} {fund.name}")


def run_calculation(engine, ticker: str, principal: float, years: float, chart: bool = False) -> int:
    """
    Runs one projection and prints the breakdown.

    Args:
        engine: CapmEngine instance.
        ticker: Fund ticker.
        principal: Initial investment.
        years: Horizon in years.
        chart: Whether to save a growth chart.

    Returns:
        Process exit status.
    """
    print("\n" + "=" * 70)
    print("CAPM FUTURE VALUE PROJECTION")
    print("=" * 70)

    try:
        result = asyncio.run(engine.calculate(ticker, principal, years))
    except ValidationError as e:
        print(f"\nERROR: {user_message(e)}")
        return 2
    except CapmError as e:
        print(f"\nERROR: {user_message(e)}")
        return 1

    print(f"\n  Fund:              {result.ticker}")
    print(f"  Principal:         ${result.principal:,.2f}")
    print(f"  Years:             {result.years:g}")
    print(f"  Beta (vs ^GSPC):   {result.beta:.4f}")
    print(f"  Expected Return:   {result.expected_return_rate:.2%}")
    print(f"  Risk-Free Rate:    {result.risk_free_rate:.2%}")
    print(f"  CAPM Rate:         {result.capm_rate:.4%}")
    print(f"  Future Value:      ${result.future_value:,.2f}")

    if chart:
        from analysis.growth_chart import plot_growth

        print(f"\nGrowth chart saved to: {plot_growth(result)}")

    return 0


def main(argv=None) -> int:
    """
    Main execution block
    """
    parser = argparse.ArgumentParser(description="Project mutual fund growth with CAPM")
    parser.add_argument("ticker", nargs="?", help="Fund ticker, e.g. VFIAX")
    parser.add_argument("principal", nargs="?", type=float, help="Initial investment")
    parser.add_argument("years", nargs="?", type=float, help="Horizon in years")
    parser.add_argument("--list", action="store_true", help="List supported funds")
    parser.add_argument("--chart", action="store_true", help="Save a growth chart")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from camp.capm_engine import CapmEngine

    engine = CapmEngine()

    if args.list:
        run_list_funds(engine)
        return 0

    if args.ticker is None or args.principal is None or args.years is None:
        parser.error("ticker, principal and years are required unless --list is given")

    return run_calculation(engine, args.ticker, args.principal, args.years, chart=args.chart)


if __name__ == "__main__":
    sys.exit(main())
