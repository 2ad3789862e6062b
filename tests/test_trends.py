"""Tests for multi-year financial trend calculation."""

import pytest
from datetime import date

from screener.financials.trends import (
    CAGR_PERIOD_YEARS,
    TrendCalculator,
    cagr_pct,
    compute_trends,
    growth_pct,
)
from screener.models import (
    AnnualFinancialRecord,
    EmployeeData,
    FinancialRatios,
    RevenueBreakdown,
)


def make_record(year: int, **kwargs) -> AnnualFinancialRecord:
    """Create an annual record for the calendar year ending 31 December."""
    defaults = {
        "period_start": date(year, 1, 1),
        "period_end": date(year, 12, 31),
    }
    defaults.update(kwargs)
    return AnnualFinancialRecord(**defaults)


class TestGrowth:
    """Tests for 1-year growth and direction labels."""

    def test_three_year_revenue_series(self):
        records = [
            make_record(2023, revenue=121),
            make_record(2021, revenue=100),
            make_record(2022, revenue=110),
        ]
        trends = compute_trends(records).trends
        assert trends.revenue_growth_1y == pytest.approx(10.0)
        assert trends.revenue_trend == "growing"
        assert trends.average_revenue_3y == pytest.approx(110.33, abs=0.01)

    def test_input_order_irrelevant(self):
        records = [make_record(2021, revenue=100), make_record(2022, revenue=110), make_record(2023, revenue=121)]
        forward = compute_trends(records)
        backward = compute_trends(list(reversed(records)))
        assert forward.model_dump() == backward.model_dump()

    def test_declining_profit(self):
        trends = compute_trends([
            make_record(2022, profit_after_tax=100_000),
            make_record(2023, profit_after_tax=80_000),
        ]).trends
        assert trends.profit_growth_1y == pytest.approx(-20.0)
        assert trends.profit_trend == "declining"

    def test_stable_within_threshold(self):
        trends = compute_trends([
            make_record(2022, revenue=1_000_000),
            make_record(2023, revenue=1_040_000),
        ]).trends
        assert trends.revenue_trend == "stable"

    def test_employee_and_ebitda_growth(self):
        trends = compute_trends([
            make_record(2022, ebitda=500_000, employees=EmployeeData(average_count=25)),
            make_record(2023, ebitda=600_000, employees=EmployeeData(average_count=20)),
        ]).trends
        assert trends.ebitda_growth_1y == pytest.approx(20.0)
        assert trends.employee_growth_1y == pytest.approx(-20.0)

    def test_previous_zero_omits_growth(self):
        trends = compute_trends([
            make_record(2022, revenue=0),
            make_record(2023, revenue=100),
        ]).trends
        assert trends.revenue_growth_1y is None
        assert trends.revenue_trend is None

    def test_missing_value_omits_growth(self):
        trends = compute_trends([make_record(2022), make_record(2023, revenue=100)]).trends
        assert trends.revenue_growth_1y is None

    def test_margin_trend_uses_point_threshold(self):
        improving = compute_trends([
            make_record(2022, ratios=FinancialRatios(ebitda_margin=18.5)),
            make_record(2023, ratios=FinancialRatios(ebitda_margin=20.0)),
        ]).trends
        stable = compute_trends([
            make_record(2022, ratios=FinancialRatios(ebitda_margin=19.5)),
            make_record(2023, ratios=FinancialRatios(ebitda_margin=20.0)),
        ]).trends
        assert improving.margin_trend == "improving"
        assert stable.margin_trend == "stable"

    def test_growth_pct(self):
        assert growth_pct(110, 100) == pytest.approx(10.0)
        assert growth_pct(None, 100) is None
        assert growth_pct(100, 0) is None


class TestCagr:
    """Tests for the 3-year CAGR.

    The exponent is fixed at 3 even though the latest and third most recent
    records are two periods apart. These tests pin that behaviour.
    """

    def test_fixed_exponent(self):
        assert CAGR_PERIOD_YEARS == 3
        trends = compute_trends([
            make_record(2021, revenue=100),
            make_record(2022, revenue=110),
            make_record(2023, revenue=121),
        ]).trends
        expected = ((121 / 100) ** (1 / 3) - 1) * 100
        assert trends.revenue_growth_3y_cagr == pytest.approx(expected)
        # Not the two-interval rate of 10%
        assert trends.revenue_growth_3y_cagr != pytest.approx(10.0)

    def test_compares_with_third_most_recent(self):
        trends = compute_trends([
            make_record(2020, revenue=50),
            make_record(2021, revenue=100),
            make_record(2022, revenue=110),
            make_record(2023, revenue=121),
        ]).trends
        assert trends.revenue_growth_3y_cagr == pytest.approx(((121 / 100) ** (1 / 3) - 1) * 100)

    def test_profit_cagr(self):
        trends = compute_trends([
            make_record(2021, profit_after_tax=80_000),
            make_record(2022, profit_after_tax=90_000),
            make_record(2023, profit_after_tax=100_000),
        ]).trends
        assert trends.profit_growth_3y_cagr == pytest.approx(((100 / 80) ** (1 / 3) - 1) * 100)

    def test_omitted_with_two_records(self):
        trends = compute_trends([make_record(2022, revenue=100), make_record(2023, revenue=120)]).trends
        assert trends.revenue_growth_3y_cagr is None

    def test_non_positive_earlier_value_omitted(self):
        trends = compute_trends([
            make_record(2021, profit_after_tax=-10_000),
            make_record(2022, profit_after_tax=5_000),
            make_record(2023, profit_after_tax=20_000),
        ]).trends
        assert trends.profit_growth_3y_cagr is None

    def test_negative_latest_value_omitted(self):
        assert cagr_pct(-50, 100) is None
        assert cagr_pct(100, 0) is None
        assert cagr_pct(None, 100) is None


class TestAverages:
    """Tests for 3-year averages."""

    def test_missing_values_excluded(self):
        trends = compute_trends([
            make_record(2021, revenue=200),
            make_record(2022),
            make_record(2023, revenue=100),
        ]).trends
        assert trends.average_revenue_3y == pytest.approx(150.0)

    def test_only_three_most_recent(self):
        trends = compute_trends([
            make_record(2019, ebitda=1_000_000),
            make_record(2021, ebitda=300_000),
            make_record(2022, ebitda=400_000),
            make_record(2023, ebitda=500_000),
        ]).trends
        assert trends.average_ebitda_3y == pytest.approx(400_000)

    def test_margin_and_recurring_revenue(self):
        trends = compute_trends([
            make_record(
                2022,
                ratios=FinancialRatios(ebitda_margin=10.0),
                revenue_breakdown=RevenueBreakdown(recurring_revenue_percentage=60.0),
            ),
            make_record(
                2023,
                ratios=FinancialRatios(ebitda_margin=14.0),
                revenue_breakdown=RevenueBreakdown(recurring_revenue_percentage=70.0),
            ),
        ]).trends
        assert trends.average_ebitda_margin_3y == pytest.approx(12.0)
        assert trends.average_recurring_revenue_pct_3y == pytest.approx(65.0)

    def test_field_absent_everywhere(self):
        trends = compute_trends([make_record(2022), make_record(2023)]).trends
        assert trends.average_profit_3y is None


class TestLatestYear:
    """Tests for the latest-year summary and single-record input."""

    def test_single_record(self):
        report = compute_trends([
            make_record(
                2023,
                revenue=4_000_000,
                profit_after_tax=300_000,
                ebitda=600_000,
                employees=EmployeeData(average_count=28),
            )
        ])
        trends = report.trends
        assert trends.average_revenue_3y == 4_000_000
        assert trends.average_profit_3y == 300_000
        assert trends.average_ebitda_3y == 600_000
        assert trends.revenue_growth_1y is None
        assert trends.revenue_growth_3y_cagr is None
        assert trends.revenue_trend is None
        assert set(trends.model_dump(exclude_none=True)) == {
            "average_revenue_3y",
            "average_profit_3y",
            "average_ebitda_3y",
        }
        assert report.latest_year.revenue == 4_000_000
        assert report.latest_year.employees == 28
        assert report.total_years_available == 1

    def test_latest_is_most_recent_period(self):
        report = compute_trends([
            make_record(2023, revenue=300, revenue_breakdown=RevenueBreakdown(recurring_revenue_percentage=55)),
            make_record(2021, revenue=100),
            make_record(2022, revenue=200),
        ])
        assert report.latest_year.period_end == date(2023, 12, 31)
        assert report.latest_year.revenue == 300
        assert report.latest_year.recurring_revenue_percentage == 55

    def test_empty_input(self):
        report = TrendCalculator().compute([])
        assert report.latest_year is None
        assert report.total_years_available == 0
        assert report.trends.model_dump(exclude_none=True) == {}

    def test_does_not_mutate_input(self):
        records = [make_record(2021, revenue=100), make_record(2023, revenue=121), make_record(2022, revenue=110)]
        compute_trends(records)
        assert [r.period_end.year for r in records] == [2021, 2023, 2022]
