"""
Presentation helpers for calculation results.
"""

from .growth_chart import plot_growth

__all__ = ["plot_growth"]
