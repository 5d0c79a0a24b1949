"""
CAPM projection package.
"""

from .capm_engine import (
    CalculationResult,
    CapmEngine,
    capm_rate,
    future_value,
    growth_schedule,
)

__all__ = [
    "CalculationResult",
    "CapmEngine",
    "capm_rate",
    "future_value",
    "growth_schedule",
]
