"""Financial trend analysis over extracted annual accounts."""

from .trends import CAGR_PERIOD_YEARS, TrendCalculator, compute_trends

__all__ = ["CAGR_PERIOD_YEARS", "TrendCalculator", "compute_trends"]
