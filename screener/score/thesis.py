"""Thesis criteria checks (pass/fail per criterion)."""

import logging
from datetime import date
from typing import Optional

from screener.models import (
    DEFAULT_THESIS,
    CompanyRecord,
    CriterionResult,
    ThesisMatch,
    ThesisProfile,
)
from .scorer import years_active

logger = logging.getLogger(__name__)


def sic_code_matches(code: str, targets: list[str]) -> bool:
    """True if a SIC code, possibly suffixed with a description, is a target."""
    numeric = code.strip().split(" ")[0].strip()
    return numeric in targets or any(code.startswith(t) for t in targets)


class ThesisMatcher:
    """Evaluate a company against the thesis criteria.

    Criteria 1-5 gate the overall verdict. The technology stack criterion is
    reported for information only.
    """

    def __init__(self, thesis: Optional[ThesisProfile] = None):
        self.thesis = thesis or DEFAULT_THESIS

    def match(self, company: CompanyRecord, as_of: Optional[date] = None) -> ThesisMatch:
        """Check all criteria and combine the gating ones."""
        gating = [
            self._check_age(company, as_of),
            self._check_status(company),
            self._check_insolvency(company),
            self._check_sic_codes(company),
            self._check_size_profile(company),
        ]
        informational = [self._check_tech_stack(company)]

        matches = all(c.met for c in gating)
        logger.debug(
            f"Thesis match for {company.company_number}: {matches} "
            f"({sum(c.met for c in gating)}/{len(gating)} gating criteria met)"
        )

        return ThesisMatch(matches=matches, criteria=gating + informational)

    def _check_age(self, company: CompanyRecord, as_of: Optional[date]) -> CriterionResult:
        years = years_active(company.date_of_incorporation, as_of)
        return CriterionResult(
            name=f"Company Age ({self.thesis.min_years_active:g}+ years)",
            met=years >= self.thesis.min_years_active,
            detail=f"{years:.1f} years active",
        )

    def _check_status(self, company: CompanyRecord) -> CriterionResult:
        return CriterionResult(
            name="Active Status",
            met=company.company_status == self.thesis.active_status,
            detail=company.company_status or "unknown",
        )

    def _check_insolvency(self, company: CompanyRecord) -> CriterionResult:
        clean = not company.has_insolvency_history and not company.has_been_liquidated
        return CriterionResult(
            name="No Insolvency History",
            met=clean,
            detail="Clean" if clean else "Has insolvency/liquidation history",
        )

    def _check_sic_codes(self, company: CompanyRecord) -> CriterionResult:
        targets = self.thesis.target_sic_codes
        matched = any(sic_code_matches(code, targets) for code in company.sic_codes)
        return CriterionResult(
            name=f"SIC Code ({'/'.join(targets)})",
            met=matched,
            detail=", ".join(company.sic_codes) if matched else "No matching SIC codes",
        )

    def _check_size_profile(self, company: CompanyRecord) -> CriterionResult:
        """Pass if any band is met, or if there is no size data at all."""
        ebitda = company.financials.ebitda or company.financials.profit or 0
        revenue = company.financials.revenue or 0
        employees = company.employee_count or 0

        in_range = {
            "EBITDA": self.thesis.ebitda.contains(ebitda),
            "Revenue": self.thesis.revenue.contains(revenue),
            "Employees": self.thesis.employees.contains(employees),
        }
        has_data = bool(ebitda or revenue or employees)
        met = any(in_range.values()) or not has_data

        if not has_data:
            detail = "No size profile data available"
        elif any(in_range.values()):
            detail = "Meets criteria: " + " ".join(k for k, v in in_range.items() if v)
        else:
            detail = (
                f"Outside range: EBITDA £{ebitda:,.0f}, Revenue £{revenue:,.0f}, "
                f"Employees {employees}"
            )

        return CriterionResult(
            name="Size Profile (EBITDA OR Revenue OR Employees)",
            met=met,
            detail=detail,
        )

    def _check_tech_stack(self, company: CompanyRecord) -> CriterionResult:
        matches = self.thesis.matching_vendors(company.enrichment.tech_stack)
        return CriterionResult(
            name="Microsoft Stack (Preferred)",
            met=bool(matches),
            detail=(
                f"Microsoft technologies: {', '.join(matches)}"
                if matches
                else "No Microsoft stack identified"
            ),
        )


def matches_thesis(company: CompanyRecord, as_of: Optional[date] = None) -> bool:
    """Quick check of the overall verdict against the default thesis."""
    return ThesisMatcher().match(company, as_of).matches
