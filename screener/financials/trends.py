"""Multi-year trend derivation from annual financial records."""

import logging
from typing import Callable, Optional

from screener.models import (
    AnnualFinancialRecord,
    FinancialTrendReport,
    FinancialTrends,
    LatestYearSummary,
)

logger = logging.getLogger(__name__)

# Number of most recent records averaged
AVERAGE_WINDOW = 3

# The CAGR compares the latest record with the third most recent one but
# always takes the cube root, even though only two periods separate them.
# Kept as-is so stored values stay comparable.
CAGR_PERIOD_YEARS = 3

# 1-year growth above/below +/- this % is growing/declining
GROWTH_THRESHOLD_PCT = 5.0

# EBITDA margin change above/below +/- this many points is improving/declining
MARGIN_THRESHOLD_PTS = 1.0

Getter = Callable[[AnnualFinancialRecord], Optional[float]]


def _revenue(r: AnnualFinancialRecord) -> Optional[float]:
    return r.revenue


def _profit(r: AnnualFinancialRecord) -> Optional[float]:
    return r.profit_after_tax


def _ebitda(r: AnnualFinancialRecord) -> Optional[float]:
    return r.ebitda


def _employees(r: AnnualFinancialRecord) -> Optional[float]:
    return r.employee_count


def _ebitda_margin(r: AnnualFinancialRecord) -> Optional[float]:
    return r.ebitda_margin


def _recurring_pct(r: AnnualFinancialRecord) -> Optional[float]:
    return r.recurring_revenue_percentage


def growth_pct(latest: Optional[float], previous: Optional[float]) -> Optional[float]:
    """Percentage change, or None when either value is missing or previous is zero."""
    if latest is None or previous is None or previous == 0:
        return None
    return (latest - previous) / previous * 100


def cagr_pct(latest: Optional[float], earliest: Optional[float]) -> Optional[float]:
    """Compound growth over CAGR_PERIOD_YEARS, or None when undefined."""
    if latest is None or earliest is None or earliest <= 0:
        return None
    ratio = latest / earliest
    if ratio < 0:
        return None
    return (ratio ** (1 / CAGR_PERIOD_YEARS) - 1) * 100


def average(values: list[Optional[float]]) -> Optional[float]:
    """Mean of the present values; missing values are skipped, not zeroed."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def direction(change: Optional[float], threshold: float, up: str = "growing") -> Optional[str]:
    if change is None:
        return None
    if change > threshold:
        return up
    if change < -threshold:
        return "declining"
    return "stable"


class TrendCalculator:
    """Derive growth, CAGR and averages from a company's annual records.

    Records are sorted newest first by ``period_end`` before anything is
    computed, so input order does not matter. Records are expected to be
    unique by ``period_end``; that is not re-checked here.
    """

    def compute(self, records: list[AnnualFinancialRecord]) -> FinancialTrendReport:
        if not records:
            return FinancialTrendReport()

        ordered = sorted(records, key=lambda r: r.period_end, reverse=True)

        trends = FinancialTrends()
        if len(ordered) >= 2:
            self._apply_growth(trends, ordered[0], ordered[1])
        if len(ordered) >= 3:
            self._apply_cagr(trends, ordered[0], ordered[2])
        self._apply_averages(trends, ordered[:AVERAGE_WINDOW])

        logger.debug(
            f"Computed trends over {len(ordered)} period(s), "
            f"latest ending {ordered[0].period_end}"
        )

        return FinancialTrendReport(
            trends=trends,
            latest_year=self.latest_year_summary(ordered[0]),
            total_years_available=len(ordered),
        )

    @staticmethod
    def latest_year_summary(latest: AnnualFinancialRecord) -> LatestYearSummary:
        return LatestYearSummary(
            period_end=latest.period_end,
            revenue=latest.revenue,
            profit=latest.profit_after_tax,
            ebitda=latest.ebitda,
            recurring_revenue_percentage=latest.recurring_revenue_percentage,
            employees=latest.employee_count,
        )

    def _apply_growth(
        self,
        trends: FinancialTrends,
        latest: AnnualFinancialRecord,
        previous: AnnualFinancialRecord,
    ):
        trends.revenue_growth_1y = growth_pct(_revenue(latest), _revenue(previous))
        trends.profit_growth_1y = growth_pct(_profit(latest), _profit(previous))
        trends.ebitda_growth_1y = growth_pct(_ebitda(latest), _ebitda(previous))
        trends.employee_growth_1y = growth_pct(_employees(latest), _employees(previous))

        trends.revenue_trend = direction(trends.revenue_growth_1y, GROWTH_THRESHOLD_PCT)
        trends.profit_trend = direction(trends.profit_growth_1y, GROWTH_THRESHOLD_PCT)

        latest_margin = _ebitda_margin(latest)
        previous_margin = _ebitda_margin(previous)
        if latest_margin is not None and previous_margin is not None:
            trends.margin_trend = direction(
                latest_margin - previous_margin, MARGIN_THRESHOLD_PTS, up="improving"
            )

    def _apply_cagr(
        self,
        trends: FinancialTrends,
        latest: AnnualFinancialRecord,
        earliest: AnnualFinancialRecord,
    ):
        trends.revenue_growth_3y_cagr = cagr_pct(_revenue(latest), _revenue(earliest))
        trends.profit_growth_3y_cagr = cagr_pct(_profit(latest), _profit(earliest))

    def _apply_averages(self, trends: FinancialTrends, window: list[AnnualFinancialRecord]):
        averaged: list[tuple[str, Getter]] = [
            ("average_revenue_3y", _revenue),
            ("average_profit_3y", _profit),
            ("average_ebitda_3y", _ebitda),
            ("average_ebitda_margin_3y", _ebitda_margin),
            ("average_recurring_revenue_pct_3y", _recurring_pct),
        ]
        for field_name, getter in averaged:
            setattr(trends, field_name, average([getter(r) for r in window]))


def compute_trends(records: list[AnnualFinancialRecord]) -> FinancialTrendReport:
    """Shortcut for ``TrendCalculator().compute``."""
    return TrendCalculator().compute(records)
