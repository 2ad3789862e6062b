"""Data models for the MSP acquisition screener."""

from .company import (
    Address,
    CompanyRecord,
    EnrichmentSignals,
    FinancialSnapshot,
)
from .financials import (
    AnnualFinancialRecord,
    EmployeeData,
    FinancialRatios,
    FinancialTrendReport,
    FinancialTrends,
    LatestYearSummary,
    RevenueBreakdown,
    TechnologyCosts,
)
from .thesis import (
    DEFAULT_THESIS,
    DistanceStep,
    SizeBand,
    ThesisProfile,
)
from .results import (
    CriterionResult,
    InvestmentScore,
    MSPIndicator,
    MSPLikelihood,
    ScoreFactor,
    ScreeningResult,
    ThesisMatch,
)

__all__ = [
    "Address",
    "CompanyRecord",
    "EnrichmentSignals",
    "FinancialSnapshot",
    "AnnualFinancialRecord",
    "EmployeeData",
    "FinancialRatios",
    "FinancialTrendReport",
    "FinancialTrends",
    "LatestYearSummary",
    "RevenueBreakdown",
    "TechnologyCosts",
    "DEFAULT_THESIS",
    "DistanceStep",
    "SizeBand",
    "ThesisProfile",
    "CriterionResult",
    "InvestmentScore",
    "MSPIndicator",
    "MSPLikelihood",
    "ScoreFactor",
    "ScreeningResult",
    "ThesisMatch",
]
