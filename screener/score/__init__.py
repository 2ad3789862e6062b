"""Scoring engine for screening acquisition targets."""

from .scorer import InvestmentScorer, years_active
from .thesis import ThesisMatcher, matches_thesis
from .red_flags import get_red_flags, is_high_value_target
from .statistics import summarize_scores, summarize_msp_results

__all__ = [
    "InvestmentScorer",
    "ThesisMatcher",
    "matches_thesis",
    "years_active",
    "get_red_flags",
    "is_high_value_target",
    "summarize_scores",
    "summarize_msp_results",
]
