"""Annual financial records and derived trend models."""

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class OperatingExpenses(BaseModel):
    staff_costs: Optional[float] = None
    rent_premises: Optional[float] = None
    it_software: Optional[float] = None
    marketing: Optional[float] = None
    professional_fees: Optional[float] = None
    depreciation: Optional[float] = None
    amortization: Optional[float] = None
    other: Optional[float] = None
    total: Optional[float] = None


class RevenueBreakdown(BaseModel):
    """Recurring vs one-time revenue split."""

    recurring_revenue: Optional[float] = None
    recurring_revenue_percentage: Optional[float] = Field(
        default=None, description="Recurring revenue as % of total"
    )
    one_time_revenue: Optional[float] = None
    managed_services: Optional[float] = None
    cloud_services: Optional[float] = None
    professional_services: Optional[float] = None
    hardware_sales: Optional[float] = None


class EmployeeData(BaseModel):
    average_count: Optional[float] = None
    total_costs: Optional[float] = None
    average_cost_per_employee: Optional[float] = None


class TechnologyCosts(BaseModel):
    it_software_total: Optional[float] = None
    cloud_services: Optional[float] = None
    software_licenses: Optional[float] = None
    hardware: Optional[float] = None
    mentions: list[str] = Field(default_factory=list, description="Technology vendor mentions")


class FinancialRatios(BaseModel):
    """Ratios for a single period. Margins are percentages."""

    gross_margin: Optional[float] = None
    operating_margin: Optional[float] = None
    net_margin: Optional[float] = None
    ebitda_margin: Optional[float] = None
    current_ratio: Optional[float] = None
    quick_ratio: Optional[float] = None
    debt_to_equity: Optional[float] = None


class AnnualFinancialRecord(BaseModel):
    """One accounting period extracted from a filed accounts document."""

    period_start: date
    period_end: date
    period_duration_months: Optional[int] = None

    # P&L
    revenue: Optional[float] = None
    cost_of_sales: Optional[float] = None
    gross_profit: Optional[float] = None
    operating_expenses: Optional[OperatingExpenses] = None
    operating_profit: Optional[float] = None
    ebitda: Optional[float] = None
    profit_before_tax: Optional[float] = None
    tax: Optional[float] = None
    profit_after_tax: Optional[float] = None

    # Balance sheet
    total_assets: Optional[float] = None
    current_assets: Optional[float] = None
    fixed_assets: Optional[float] = None
    total_liabilities: Optional[float] = None
    current_liabilities: Optional[float] = None
    long_term_liabilities: Optional[float] = None
    net_assets: Optional[float] = None
    shareholders_equity: Optional[float] = None

    revenue_breakdown: Optional[RevenueBreakdown] = None
    employees: Optional[EmployeeData] = None
    technology_costs: Optional[TechnologyCosts] = None
    ratios: Optional[FinancialRatios] = None

    # Provenance
    document_source: Optional[str] = Field(default=None, description="Source document transaction id")
    extracted_at: Optional[datetime] = None
    extraction_method: Optional[str] = None
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @property
    def employee_count(self) -> Optional[float]:
        return self.employees.average_count if self.employees else None

    @property
    def ebitda_margin(self) -> Optional[float]:
        return self.ratios.ebitda_margin if self.ratios else None

    @property
    def recurring_revenue_percentage(self) -> Optional[float]:
        if not self.revenue_breakdown:
            return None
        return self.revenue_breakdown.recurring_revenue_percentage


TrendDirection = Literal["growing", "stable", "declining"]
MarginDirection = Literal["improving", "stable", "declining"]


class FinancialTrends(BaseModel):
    """Growth rates, directions and averages derived from annual records.

    Fields are left unset when they cannot be computed.
    """

    revenue_growth_1y: Optional[float] = None
    revenue_growth_3y_cagr: Optional[float] = None
    profit_growth_1y: Optional[float] = None
    profit_growth_3y_cagr: Optional[float] = None
    ebitda_growth_1y: Optional[float] = None
    employee_growth_1y: Optional[float] = None

    revenue_trend: Optional[TrendDirection] = None
    profit_trend: Optional[TrendDirection] = None
    margin_trend: Optional[MarginDirection] = None

    average_revenue_3y: Optional[float] = None
    average_profit_3y: Optional[float] = None
    average_ebitda_3y: Optional[float] = None
    average_ebitda_margin_3y: Optional[float] = None
    average_recurring_revenue_pct_3y: Optional[float] = None


class LatestYearSummary(BaseModel):
    """Headline figures of the most recent accounting period."""

    period_end: date
    revenue: Optional[float] = None
    profit: Optional[float] = None
    ebitda: Optional[float] = None
    recurring_revenue_percentage: Optional[float] = None
    employees: Optional[float] = None


class FinancialTrendReport(BaseModel):
    trends: FinancialTrends = Field(default_factory=FinancialTrends)
    latest_year: Optional[LatestYearSummary] = None
    total_years_available: int = 0
