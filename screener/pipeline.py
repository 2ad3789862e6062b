"""Explicit, caller-invoked screening of company records."""

import asyncio
import logging
from datetime import date
from typing import Optional

from screener.enrich import MSPClassifier, MSPVocabulary
from screener.financials import TrendCalculator
from screener.geo import DistanceResolver
from screener.models import (
    AnnualFinancialRecord,
    CompanyRecord,
    ScreeningResult,
    ThesisProfile,
)
from screener.score import InvestmentScorer, ThesisMatcher, get_red_flags

logger = logging.getLogger(__name__)


class Screener:
    """Run every screening component over a company.

    Nothing is persisted. Callers attach timestamps and merge the result into
    their own records.
    """

    def __init__(
        self,
        thesis: Optional[ThesisProfile] = None,
        vocabulary: Optional[MSPVocabulary] = None,
        resolve_distance: Optional[DistanceResolver] = None,
    ):
        self.scorer = InvestmentScorer(thesis)
        self.matcher = ThesisMatcher(thesis)
        self.classifier = MSPClassifier(vocabulary)
        self.trends = TrendCalculator()
        self.resolve_distance = resolve_distance

    async def screen(
        self,
        company: CompanyRecord,
        annual_records: Optional[list[AnnualFinancialRecord]] = None,
        as_of: Optional[date] = None,
    ) -> ScreeningResult:
        """Screen a single company."""
        investment_score = await self.scorer.score(company, self.resolve_distance, as_of)

        return ScreeningResult(
            company_number=company.company_number,
            company_name=company.company_name,
            investment_score=investment_score,
            msp_likelihood=self.classifier.classify_company(company),
            thesis_match=self.matcher.match(company, as_of),
            financial_trends=self.trends.compute(annual_records) if annual_records else None,
            red_flags=get_red_flags(company),
        )

    async def screen_many(
        self,
        companies: list[CompanyRecord],
        annual_records: Optional[dict[str, list[AnnualFinancialRecord]]] = None,
        as_of: Optional[date] = None,
    ) -> list[ScreeningResult]:
        """Screen companies concurrently and return results ranked by score."""
        annual_records = annual_records or {}
        results = await asyncio.gather(*[
            self.screen(company, annual_records.get(company.company_number), as_of)
            for company in companies
        ])

        ranked = sorted(
            results,
            key=lambda r: (r.investment_score.score, r.msp_likelihood.score),
            reverse=True,
        )
        logger.info(
            f"Screened {len(ranked)} companies, "
            f"{sum(r.thesis_match.matches for r in ranked)} match the thesis"
        )
        return ranked


async def screen_company(
    company: CompanyRecord,
    annual_records: Optional[list[AnnualFinancialRecord]] = None,
    resolve_distance: Optional[DistanceResolver] = None,
    as_of: Optional[date] = None,
) -> ScreeningResult:
    """Screen one company with the default thesis and vocabulary."""
    return await Screener(resolve_distance=resolve_distance).screen(company, annual_records, as_of)


async def screen_companies(
    companies: list[CompanyRecord],
    annual_records: Optional[dict[str, list[AnnualFinancialRecord]]] = None,
    resolve_distance: Optional[DistanceResolver] = None,
    as_of: Optional[date] = None,
) -> list[ScreeningResult]:
    """Screen many companies with the default thesis and vocabulary."""
    return await Screener(resolve_distance=resolve_distance).screen_many(
        companies, annual_records, as_of
    )
