"""Size/age/location scoring of acquisition targets."""

import logging
from datetime import date
from typing import Optional

from screener.geo import DistanceResolver
from screener.models import (
    DEFAULT_THESIS,
    CompanyRecord,
    InvestmentScore,
    ScoreFactor,
    ThesisProfile,
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


def years_active(incorporated: date, as_of: Optional[date] = None) -> float:
    """Fractional years between incorporation and ``as_of`` (default today)."""
    as_of = as_of or date.today()
    return (as_of - incorporated).days / DAYS_PER_YEAR


class InvestmentScorer:
    """Score a company 0-100 from four equally weighted factors.

    Each factor is worth up to 25 points:

    * age: linear up to full credit at the thesis minimum age
    * size: full credit inside any thesis size band, tapering credit outside
    * tech alignment: matches against the preferred vendor stack
    * location: step function over distance from the reference point
    """

    def __init__(self, thesis: Optional[ThesisProfile] = None):
        self.thesis = thesis or DEFAULT_THESIS

    async def score(
        self,
        company: CompanyRecord,
        resolve_distance: Optional[DistanceResolver] = None,
        as_of: Optional[date] = None,
    ) -> InvestmentScore:
        """Score a company. Only the location factor may await the resolver."""
        distance = await self._resolve_distance(company, resolve_distance)

        factors = [
            self._score_age(company, as_of),
            self._score_size(company),
            self._score_tech_alignment(company),
            self._score_location(distance),
        ]
        total = round(sum(f.points for f in factors), 2)

        logger.debug(f"Investment score for {company.company_number}: {total}")

        return InvestmentScore(
            score=total,
            factors=factors,
            location_distance_km=distance,
        )

    def _score_age(self, company: CompanyRecord, as_of: Optional[date] = None) -> ScoreFactor:
        years = years_active(company.date_of_incorporation, as_of)
        points = min(self.thesis.factor_max_points, max(0.0, years * self.thesis.points_per_year))
        return ScoreFactor(name="Company Age (years)", value=years, points=points)

    def _score_size(self, company: CompanyRecord) -> ScoreFactor:
        """Score size against the bands in priority order: employees, revenue, EBITDA."""
        full = self.thesis.factor_max_points
        dimensions = [
            ("employees", company.employee_count, self.thesis.employees),
            ("revenue", company.financials.revenue, self.thesis.revenue),
            ("EBITDA", company.financials.ebitda, self.thesis.ebitda),
        ]

        for label, value, band in dimensions:
            if band.contains(value):
                return ScoreFactor(name=f"Size ({label})", value=value, points=full)

        # Partial credit: the first dimension with nonzero credit wins, not the best
        for label, value, band in dimensions:
            if not value:
                continue
            points = band.partial_credit(value)
            if points > 0:
                return ScoreFactor(name=f"Size ({label})", value=value, points=points)

        return ScoreFactor(name="Size", value=0, points=0)

    def _score_tech_alignment(self, company: CompanyRecord) -> ScoreFactor:
        matches = self.thesis.matching_vendors(company.enrichment.tech_stack)
        points = min(self.thesis.factor_max_points, len(matches) * self.thesis.points_per_vendor_match)
        return ScoreFactor(name="Microsoft Stack Alignment", value=len(matches), points=points)

    def _score_location(self, distance: Optional[float]) -> ScoreFactor:
        return ScoreFactor(
            name="Location (distance from London)",
            value=round(distance, 1) if distance is not None else 0,
            points=self.thesis.location_points(distance),
        )

    async def _resolve_distance(
        self,
        company: CompanyRecord,
        resolve_distance: Optional[DistanceResolver],
    ) -> Optional[float]:
        """Use the cached distance if present, otherwise ask the resolver."""
        if company.location_distance_km is not None:
            return company.location_distance_km

        if resolve_distance is None:
            return None

        try:
            return await resolve_distance(
                company.registered_address,
                company.registered_address_structured,
            )
        except Exception as e:
            # Resolvers must return None on failure; treat a leak the same way
            logger.warning(f"Distance resolution failed for {company.company_number}: {e}")
            return None
