"""Tests for the investment scorer."""

import asyncio
import pytest
from datetime import date, timedelta
from pydantic import ValidationError

from screener.models import CompanyRecord, EnrichmentSignals, FinancialSnapshot
from screener.score.scorer import InvestmentScorer, years_active

AS_OF = date(2025, 1, 1)


def make_company(**kwargs) -> CompanyRecord:
    """Create test company with defaults."""
    defaults = {
        "company_number": "01234567",
        "company_name": "Test Company Ltd",
        "company_status": "active",
        "date_of_incorporation": date(2015, 1, 1),
    }
    defaults.update(kwargs)
    return CompanyRecord(**defaults)


def run_score(company, resolver=None, as_of=AS_OF, scorer=None):
    scorer = scorer or InvestmentScorer()
    return asyncio.run(scorer.score(company, resolver, as_of=as_of))


def factor(result, prefix):
    return next(f for f in result.factors if f.name.startswith(prefix))


class TestAgeFactor:
    """Tests for the company age factor."""

    def test_full_credit_after_three_years(self):
        result = run_score(make_company())
        assert factor(result, "Company Age").points == 25

    def test_linear_before_three_years(self):
        company = make_company(date_of_incorporation=AS_OF - timedelta(days=365))
        result = run_score(company)
        assert factor(result, "Company Age").points == pytest.approx(8.33)

    def test_non_decreasing_then_constant(self):
        points = []
        for days in [0, 100, 365, 730, 1000, 1095, 1100, 2000, 5000]:
            company = make_company(date_of_incorporation=AS_OF - timedelta(days=days))
            points.append(factor(run_score(company), "Company Age").points)

        assert points == sorted(points)
        assert points[-3:] == [25, 25, 25]

    def test_incorporated_in_future_scores_zero(self):
        company = make_company(date_of_incorporation=AS_OF + timedelta(days=30))
        assert factor(run_score(company), "Company Age").points == 0

    def test_years_active(self):
        assert years_active(date(2024, 1, 2), date(2025, 1, 1)) == pytest.approx(1.0)

    def test_unparsable_incorporation_date_rejected(self):
        with pytest.raises(ValidationError):
            make_company(date_of_incorporation="not-a-date")


class TestSizeFactor:
    """Tests for the size band factor."""

    def test_employees_in_band_wins_over_other_dimensions(self):
        company = make_company(
            financials=FinancialSnapshot(employees=20, revenue=10_000_000, ebitda=50_000)
        )
        size = factor(run_score(company), "Size")
        assert size.name == "Size (employees)"
        assert size.points == 25
        assert size.value == 20

    def test_revenue_in_band(self):
        company = make_company(financials=FinancialSnapshot(employees=100, revenue=4_000_000))
        size = factor(run_score(company), "Size")
        assert size.name == "Size (revenue)"
        assert size.points == 25

    def test_ebitda_in_band(self):
        company = make_company(financials=FinancialSnapshot(ebitda=750_000))
        size = factor(run_score(company), "Size")
        assert size.name == "Size (EBITDA)"
        assert size.points == 25

    def test_band_boundaries_inclusive(self):
        for employees in (15, 40):
            company = make_company(financials=FinancialSnapshot(employees=employees))
            assert factor(run_score(company), "Size").points == 25

    def test_headcount_fallback(self):
        company = make_company(enrichment=EnrichmentSignals(headcount=30))
        size = factor(run_score(company), "Size")
        assert size.name == "Size (employees)"
        assert size.points == 25

    def test_partial_credit_below_minimum(self):
        company = make_company(financials=FinancialSnapshot(employees=10))
        size = factor(run_score(company), "Size")
        assert size.points == pytest.approx(10.0)

    def test_partial_credit_above_maximum(self):
        company = make_company(financials=FinancialSnapshot(employees=50))
        size = factor(run_score(company), "Size")
        assert size.points == pytest.approx(11.25)

    def test_partial_credit_uses_first_dimension_not_best(self):
        # Revenue alone would earn 14.5, employees are checked first
        company = make_company(financials=FinancialSnapshot(employees=10, revenue=2_900_000))
        size = factor(run_score(company), "Size")
        assert size.name == "Size (employees)"
        assert size.points == pytest.approx(10.0)

    def test_falls_through_when_first_dimension_earns_nothing(self):
        company = make_company(financials=FinancialSnapshot(employees=100, revenue=1_500_000))
        size = factor(run_score(company), "Size")
        assert size.name == "Size (revenue)"
        assert size.points == pytest.approx(7.5)

    def test_no_size_data(self):
        size = factor(run_score(make_company()), "Size")
        assert size.name == "Size"
        assert size.points == 0


class TestTechAlignment:
    """Tests for the vendor stack factor."""

    def test_three_matches_near_full_credit(self):
        company = make_company(
            enrichment=EnrichmentSignals(tech_stack=["Microsoft 365", "Azure", "SharePoint Online", "AWS"])
        )
        tech = factor(run_score(company), "Microsoft")
        assert tech.value == 3
        assert tech.points == pytest.approx(24.99)

    def test_capped_at_25(self):
        company = make_company(
            enrichment=EnrichmentSignals(tech_stack=["Azure AD", "Teams", "Dynamics 365", "Power BI"])
        )
        assert factor(run_score(company), "Microsoft").points == 25

    def test_case_insensitive(self):
        company = make_company(enrichment=EnrichmentSignals(tech_stack=["AZURE"]))
        assert factor(run_score(company), "Microsoft").value == 1


class TestLocationFactor:
    """Tests for the distance step function."""

    @pytest.mark.parametrize(
        "distance,points",
        [
            (0, 25),
            (24.9, 25),
            (25.0, 25),
            (25.1, 20),
            (50, 20),
            (75, 15),
            (150, 10),
            (199.9, 5),
            (200.1, 0),
        ],
    )
    def test_step_boundaries(self, distance, points):
        company = make_company(location_distance_km=distance)
        assert factor(run_score(company), "Location").points == points

    def test_cached_distance_skips_resolver(self):
        calls = []

        async def resolver(address, structured):
            calls.append(address)
            return 500.0

        company = make_company(location_distance_km=10.0, registered_address="1 High St")
        result = run_score(company, resolver)
        assert calls == []
        assert factor(result, "Location").points == 25

    def test_resolver_used_without_cache(self):
        async def resolver(address, structured):
            assert address == "1 High St, Reading"
            return 42.04

        company = make_company(registered_address="1 High St, Reading")
        result = run_score(company, resolver)
        location = factor(result, "Location")
        assert location.points == 20
        assert location.value == 42.0
        assert result.location_distance_km == 42.04

    def test_unresolved_distance_scores_zero(self):
        async def resolver(address, structured):
            return None

        result = run_score(make_company(registered_address="Unknown"), resolver)
        assert factor(result, "Location").points == 0
        assert result.location_distance_km is None

    def test_resolver_error_treated_as_unresolved(self):
        async def resolver(address, structured):
            raise RuntimeError("geocoder down")

        result = run_score(make_company(registered_address="1 High St"), resolver)
        assert factor(result, "Location").points == 0

    def test_no_resolver(self):
        assert factor(run_score(make_company()), "Location").points == 0


class TestTotalScore:
    """Tests for the combined score."""

    def test_total_is_rounded_sum_of_factors(self):
        company = make_company(
            financials=FinancialSnapshot(employees=10),
            enrichment=EnrichmentSignals(tech_stack=["Azure"]),
            location_distance_km=60,
        )
        result = run_score(company)
        assert len(result.factors) == 4
        assert result.score == round(sum(f.points for f in result.factors), 2)
        assert 0 <= result.score <= 100

    def test_ideal_company(self):
        company = make_company(
            financials=FinancialSnapshot(employees=25),
            enrichment=EnrichmentSignals(tech_stack=["Azure", "Teams", "SharePoint"]),
            location_distance_km=5,
        )
        assert run_score(company).score == pytest.approx(99.99)

    def test_idempotent(self):
        company = make_company(
            financials=FinancialSnapshot(revenue=2_000_000),
            location_distance_km=120,
        )
        assert run_score(company).model_dump() == run_score(company).model_dump()

    def test_does_not_mutate_company(self):
        async def resolver(address, structured):
            return 30.0

        company = make_company(registered_address="1 High St")
        before = company.model_dump()
        run_score(company, resolver)
        assert company.model_dump() == before
