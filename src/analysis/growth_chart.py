"""
Growth Chart Module

Plots the projected growth of a calculated investment and saves it to the
outputs folder.
"""

import os
from typing import Optional

import matplotlib.pyplot as plt

from camp.capm_engine import CalculationResult, growth_schedule
from config import OUTPUT_DIR


def plot_growth(result: CalculationResult, output_dir: Optional[str] = None) -> str:
    """
    Saves a line chart of the projected value for each year of the horizon.

    Args:
        result: Calculation to plot.
        output_dir: Target folder (defaults to OUTPUT_DIR).

    Returns:
        Path to the saved PNG file.
    """
    output_dir = output_dir or OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)

    schedule = growth_schedule(result.principal, result.capm_rate, result.years)

    plt.figure(figsize=(10, 6))
    plt.plot(schedule.index, schedule.values, linewidth=2.5, color="#059669", label=result.ticker)
    plt.axhline(result.principal, linestyle="--", color="#94a3b8", label="Principal")
    plt.title(f"{result.ticker} Projected Growth (CAPM rate {result.capm_rate:.2%})")
    plt.xlabel("Year")
    plt.ylabel("Projected Value ($)")
    plt.legend(loc="best")
    plt.grid(alpha=0.3)
    plt.tight_layout()

    horizon = f"{result.years:g}".replace(".", "_")
    output_path = os.path.join(output_dir, f"growth_{result.ticker}_{horizon}y.png")
    plt.savefig(output_path, dpi=150)
    plt.close()

    return output_path
